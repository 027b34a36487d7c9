from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from app.core.deps import get_store
from app.core.store import ListingStore
from app.schemas.listing import (
    JobListing,
    JobListingCreateResponse,
    JobListingListResponse,
    MessageResponse,
)
from app.services import listing_service

# ListingError subclasses raised here are turned into {"message", "errors"}
# responses by the exception handler registered in main.py.
router = APIRouter(prefix="/listings", tags=["Job Listings"])


@router.post("/", status_code=201, response_model=JobListingCreateResponse)
def submit_listing(
    payload: Any = Body(None),
    store: ListingStore = Depends(get_store)
):
    """
    Create a new job listing.

    Requires jobTitle, jobEmployer and jobLocation as non-empty strings and
    jobSalary as a number. The id is generated from a random token and the
    slugified title.
    """
    listing = listing_service.create_listing(store, payload if payload is not None else {})

    return JobListingCreateResponse(
        message=f"Successfully submitted job listing with title {listing.jobTitle}",
        jobId=listing.id
    )


@router.get("/", response_model=JobListingListResponse)
def list_listings(store: ListingStore = Depends(get_store)):
    """
    List all job listings (full scan, no pagination).
    """
    return {"jobs": listing_service.list_listings(store)}


@router.get("/{listing_id}", response_model=JobListing)
def get_listing(listing_id: str, store: ListingStore = Depends(get_store)):
    """
    Retrieve a job listing by id.
    """
    return listing_service.get_listing(store, listing_id)


@router.delete("/{listing_id}", response_model=MessageResponse)
def delete_listing(listing_id: str, store: ListingStore = Depends(get_store)):
    """
    Delete a job listing by id.
    """
    listing_service.delete_listing(store, listing_id)
    return MessageResponse(message="Job listing deleted.")


@router.put("/{listing_id}", response_model=Dict[str, Any])
def update_listing(
    listing_id: str,
    updates: Any = Body(None),
    store: ListingStore = Depends(get_store)
):
    """
    Partially update a job listing.

    Accepts any subset of jobTitle, jobEmployer, jobLocation and jobSalary.
    updatedAt is always refreshed. Returns the updated fields.
    """
    return listing_service.update_listing(store, listing_id, updates if updates is not None else {})
