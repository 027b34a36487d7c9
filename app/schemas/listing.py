import math
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, StrictStr, field_validator


class FieldType(str, Enum):
    """Primitive type a mutable job listing field must hold"""
    STRING = "string"
    NUMBER = "number"

    def matches(self, value: Any) -> bool:
        """
        Check a runtime value against this type.

        NUMBER accepts finite ints and floats; bool is rejected even though
        it subclasses int.
        """
        if self is FieldType.STRING:
            return isinstance(value, str)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return math.isfinite(value)


# Mutable fields and their expected types. The update path accepts exactly
# these keys; id, submittedAt and updatedAt are never client-writable.
FIELD_RULES: Dict[str, FieldType] = {
    "jobTitle": FieldType.STRING,
    "jobEmployer": FieldType.STRING,
    "jobLocation": FieldType.STRING,
    "jobSalary": FieldType.NUMBER,
}

# Fields returned by the list operation
LIST_PROJECTION = ("id", "jobTitle", "jobEmployer", "jobLocation", "jobSalary")


def normalize_number(value: Any) -> Any:
    """Turn store-native numbers (Decimal, integral float) back into int/float"""
    if isinstance(value, bool):
        return value
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class JobListingCreate(BaseModel):
    """Schema for the four caller-supplied fields of a new job listing"""
    jobTitle: StrictStr = Field(..., min_length=1)
    jobEmployer: StrictStr = Field(..., min_length=1)
    jobSalary: Union[int, float]
    jobLocation: StrictStr = Field(..., min_length=1)

    @field_validator("jobSalary", mode="before")
    @classmethod
    def check_salary(cls, v: Any) -> Any:
        if not FieldType.NUMBER.matches(v):
            raise ValueError("jobSalary must be a finite number")
        return v


class JobListing(BaseModel):
    """A persisted job listing record"""
    id: str
    jobTitle: str
    jobEmployer: str
    jobSalary: Union[int, float]
    jobLocation: str
    submittedAt: int
    updatedAt: int


class JobListingSummary(BaseModel):
    """Job listing as returned by the list operation"""
    id: str
    jobTitle: str
    jobEmployer: str
    jobLocation: str
    jobSalary: Union[int, float]


class JobListingCreateResponse(BaseModel):
    """Schema for job listing creation response"""
    message: str
    jobId: str


class JobListingListResponse(BaseModel):
    jobs: List[JobListingSummary]


class MessageResponse(BaseModel):
    message: str
