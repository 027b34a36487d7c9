"""
Partial-update builder for job listings.

Turns a mapping of proposed field changes into a MutationRequest: an ordered
list of (field, value) assignments that a store adapter renders into its own
update syntax with bound parameters. Validation fails fast on the first bad
field, so a rejected update never produces a request.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple

from app.core.exceptions import TypeMismatchError, UnknownFieldError, ValidationError
from app.core.ids import current_epoch_millis
from app.schemas.listing import FIELD_RULES

UPDATED_AT = "updatedAt"


@dataclass(frozen=True)
class MutationRequest:
    """
    Store-agnostic description of a partial update.

    `assignments` always starts with the updatedAt stamp, followed by the
    requested fields in the order they were supplied.
    """
    record_id: str
    assignments: Tuple[Tuple[str, Any], ...]

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(field for field, _ in self.assignments)

    def values(self) -> Dict[str, Any]:
        return dict(self.assignments)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)


def build_update(
    record_id: str,
    updates: Mapping[str, Any],
    *,
    clock: Callable[[], int] = current_epoch_millis,
) -> MutationRequest:
    """
    Validate `updates` against FIELD_RULES and build a MutationRequest.

    Args:
        record_id: Id of the listing to update
        updates: Field name -> new value, any subset of the mutable fields
        clock: Source of the updatedAt timestamp (epoch millis)

    Returns:
        MutationRequest with len(updates) + 1 assignments

    Raises:
        ValidationError: record_id is empty or updates is not a mapping
        UnknownFieldError: first key that is not a mutable field
        TypeMismatchError: first value whose type does not match its rule
    """
    if not isinstance(record_id, str) or not record_id:
        raise ValidationError(["id"], message="Job listing id is required.")
    if not isinstance(updates, Mapping):
        raise ValidationError(
            [], message="Couldn't update job listing because of validation errors."
        )

    assignments = [(UPDATED_AT, clock())]
    for field, value in updates.items():
        expected = FIELD_RULES.get(field)
        if expected is None:
            raise UnknownFieldError(field)
        if not expected.matches(value):
            raise TypeMismatchError(field, expected.value)
        assignments.append((field, value))

    return MutationRequest(record_id=record_id, assignments=tuple(assignments))
