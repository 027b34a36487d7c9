"""
Error taxonomy for job listing operations.

Every error carries the HTTP status code and the public message the handler
layer reports, so both the Lambda handlers and the FastAPI routes map them
the same way.
"""

from typing import Any, Dict, List, Optional, Sequence


class ListingError(Exception):
    """Base class for all job listing errors"""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Public error body: message, plus the invalid field names if any"""
        body: Dict[str, Any] = {"message": self.message}
        fields = getattr(self, "fields", None)
        if fields:
            body["errors"] = fields
        return body


class ValidationError(ListingError):
    """Required field missing or of the wrong type at creation"""

    def __init__(self, fields: Sequence[str], message: Optional[str] = None):
        self.fields: List[str] = list(fields)
        super().__init__(
            message or f"Invalid job listing fields: {', '.join(self.fields)}"
        )


class UnknownFieldError(ListingError):
    """Update references a field that is not a mutable job listing field"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is not a recognized job listing parameter.")


class TypeMismatchError(ListingError):
    """Update value does not have the field's expected type"""

    def __init__(self, field: str, expected: str):
        self.field = field
        self.expected = expected
        super().__init__(f"{field} must be a {expected}.")


class StoreError(ListingError):
    """
    Underlying store call failed.

    The public message stays generic; the store's own error is chained as
    __cause__ and logged where it is raised.
    """

    status_code = 500

    def __init__(self, message: str = "Job listing store request failed."):
        super().__init__(message)


class ListingNotFoundError(StoreError):
    """No job listing exists under the requested id"""

    status_code = 404

    def __init__(self, listing_id: str):
        self.listing_id = listing_id
        super().__init__("Job listing not found.")
