"""
Construction of new job listing records.

Validates the four caller-supplied fields and stamps the generated id and
timestamps. Pure: nothing here touches the store.
"""

from typing import Any, Callable, Mapping

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.core.ids import current_epoch_millis, random_token, slugify
from app.schemas.listing import JobListing, JobListingCreate

CREATE_FIELDS = ("jobTitle", "jobEmployer", "jobSalary", "jobLocation")


def new_listing(
    title: Any,
    employer: Any,
    salary: Any,
    location: Any,
    *,
    clock: Callable[[], int] = current_epoch_millis,
    token_factory: Callable[[], str] = random_token,
) -> JobListing:
    """
    Build a new JobListing from its four required fields.

    Args:
        title: Non-empty job title
        employer: Non-empty employer name
        salary: Finite number (int or float, not bool)
        location: Non-empty location

    Returns:
        JobListing with id, submittedAt and updatedAt filled in

    Raises:
        ValidationError: naming every invalid field
    """
    try:
        data = JobListingCreate(
            jobTitle=title,
            jobEmployer=employer,
            jobSalary=salary,
            jobLocation=location,
        )
    except PydanticValidationError as e:
        invalid = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
        raise ValidationError(
            [field for field in CREATE_FIELDS if field in invalid],
            message="Couldn't submit job listing because of validation errors.",
        ) from e

    timestamp = clock()
    return JobListing(
        id=f"{token_factory().lower()}-{slugify(data.jobTitle)}",
        jobTitle=data.jobTitle,
        jobEmployer=data.jobEmployer,
        jobSalary=data.jobSalary,
        jobLocation=data.jobLocation,
        submittedAt=timestamp,
        updatedAt=timestamp,
    )


def listing_from_payload(payload: Any, **kwargs) -> JobListing:
    """
    Build a new JobListing from a decoded request body.

    Unknown keys are ignored; missing keys count as invalid fields.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(
            list(CREATE_FIELDS),
            message="Couldn't submit job listing because of validation errors.",
        )

    return new_listing(
        payload.get("jobTitle"),
        payload.get("jobEmployer"),
        payload.get("jobSalary"),
        payload.get("jobLocation"),
        **kwargs,
    )
