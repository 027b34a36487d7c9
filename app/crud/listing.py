"""
CRUD operations for the JobListingRecord model.

Implements the Repository pattern for the sql store backend. Functions take
and return plain record dicts keyed by the JSON field names.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Any
from sqlalchemy.orm import Session
from app.models.listing import COLUMN_FOR_FIELD, JobListingRecord
from app.schemas.listing import normalize_number


def upsert(db: Session, record: dict) -> dict:
    """
    Insert a job listing, replacing any existing row with the same id.

    Args:
        db: Database session
        record: Full job listing record

    Returns:
        The stored record
    """
    db.merge(JobListingRecord.from_dict(record))
    db.commit()
    return record


def get_by_id(db: Session, listing_id: str) -> Optional[JobListingRecord]:
    """
    Retrieve a job listing by its id.

    Returns:
        JobListingRecord instance if found, None otherwise
    """
    return db.query(JobListingRecord).filter(JobListingRecord.id == listing_id).first()


def get_all(db: Session, fields: Iterable[str]) -> List[dict]:
    """
    Retrieve every job listing projected to `fields`.

    Args:
        db: Database session
        fields: Record field names to include

    Returns:
        List of record dicts
    """
    fields = list(fields)
    columns = [getattr(JobListingRecord, COLUMN_FOR_FIELD[f]) for f in fields]
    rows = db.query(*columns).all()
    return [
        {field: normalize_number(value) for field, value in zip(fields, row)}
        for row in rows
    ]


def update_fields(
    db: Session,
    listing_id: str,
    assignments: Iterable[Tuple[str, Any]]
) -> Optional[Dict[str, Any]]:
    """
    Apply field assignments to an existing job listing.

    Args:
        db: Database session
        listing_id: Listing to update
        assignments: (field, value) pairs keyed by record field name

    Returns:
        Dict of the assigned fields with their stored values, None if not found
    """
    listing = get_by_id(db, listing_id)
    if not listing:
        return None

    fields = []
    for field, value in assignments:
        setattr(listing, COLUMN_FOR_FIELD[field], value)
        fields.append(field)

    db.commit()
    db.refresh(listing)

    stored = listing.to_dict()
    return {field: stored[field] for field in fields}


def delete(db: Session, listing_id: str) -> bool:
    """
    Delete a job listing by id.

    Returns:
        True if deleted, False if not found
    """
    listing = get_by_id(db, listing_id)
    if not listing:
        return False

    db.delete(listing)
    db.commit()

    return True
