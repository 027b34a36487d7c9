from sqlalchemy import BigInteger, Column, Float, String

from app.core.database import Base
from app.schemas.listing import normalize_number

# Record field name -> ORM attribute name
COLUMN_FOR_FIELD = {
    "id": "id",
    "jobTitle": "job_title",
    "jobEmployer": "job_employer",
    "jobSalary": "job_salary",
    "jobLocation": "job_location",
    "submittedAt": "submitted_at",
    "updatedAt": "updated_at",
}


class JobListingRecord(Base):
    """
    Job listing row for the sql store backend.
    Columns mirror the record fields of the DynamoDB item.
    """
    __tablename__ = "job_listings"

    id = Column(String, primary_key=True, index=True)
    job_title = Column(String, nullable=False)
    job_employer = Column(String, nullable=False)
    job_salary = Column(Float, nullable=False)
    job_location = Column(String, nullable=False)

    # Epoch milliseconds
    submitted_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    @classmethod
    def from_dict(cls, record: dict) -> "JobListingRecord":
        return cls(**{
            column: record[field]
            for field, column in COLUMN_FOR_FIELD.items()
            if field in record
        })

    def to_dict(self) -> dict:
        return {
            field: normalize_number(getattr(self, column))
            for field, column in COLUMN_FOR_FIELD.items()
        }

    def __repr__(self):
        return f"<JobListingRecord(id={self.id}, title='{self.job_title}')>"
