"""
Job listing operations shared by the Lambda handlers and the FastAPI routes.

Each operation validates its input (through the record factory or the
update builder) and then issues exactly one store call. Errors propagate
as ListingError subclasses; callers map them to responses.
"""

import logging
from typing import Any, Dict, List

from app.core.exceptions import ListingNotFoundError, StoreError
from app.core.store import ListingStore
from app.schemas.listing import LIST_PROJECTION, JobListing
from app.services.listing_factory import listing_from_payload
from app.services.update_builder import build_update

logger = logging.getLogger(__name__)


def create_listing(store: ListingStore, payload: Any) -> JobListing:
    """
    Validate a request body and persist the new job listing.

    Raises:
        ValidationError: payload is missing fields or has wrong types
        StoreError: the put failed
    """
    listing = listing_from_payload(payload)

    logger.info(f"Submitting job listing {listing.id}")
    try:
        store.put(listing.model_dump())
    except StoreError:
        logger.error(f"Unable to submit job listing with title {listing.jobTitle}")
        raise

    return listing


def list_listings(store: ListingStore) -> List[Dict[str, Any]]:
    """Scan the whole store, projected to the list fields"""
    logger.info("Scanning job listing table")
    jobs = store.scan(LIST_PROJECTION)
    logger.info(f"Scan succeeded, {len(jobs)} job listings")
    return jobs


def get_listing(store: ListingStore, listing_id: str) -> Dict[str, Any]:
    """
    Fetch one job listing.

    Raises:
        ListingNotFoundError: no record with this id
    """
    record = store.get(listing_id)
    if record is None:
        raise ListingNotFoundError(listing_id)
    return record


def delete_listing(store: ListingStore, listing_id: str) -> None:
    """Delete a job listing; deleting a missing id is not an error"""
    store.delete(listing_id)
    logger.info(f"Deleted job listing {listing_id}")


def update_listing(
    store: ListingStore,
    listing_id: str,
    updates: Any
) -> Dict[str, Any]:
    """
    Apply a partial update to a job listing.

    The update is validated in full before the store is called; a rejected
    update never reaches the store.

    Returns:
        The updated fields with their new values

    Raises:
        UnknownFieldError, TypeMismatchError, ValidationError: invalid update
        ListingNotFoundError: no record with this id
        StoreError: the update failed
    """
    mutation = build_update(listing_id, updates)

    logger.info(f"Updating job listing {listing_id}: {', '.join(mutation.fields)}")
    return store.update(mutation)
