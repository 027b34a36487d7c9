"""
AWS Lambda handlers for the job listing API (API Gateway proxy events).

One handler per operation:
  submit    POST   /listings        create a job listing
  list_all  GET    /listings        list all job listings
  get       GET    /listings/{id}   fetch one job listing
  delete    DELETE /listings/{id}   delete a job listing
  update    PUT    /listings/{id}   partially update a job listing

Every handler accepts an optional `store`; when omitted the process-level
store from app.core.deps is used.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional

from app.core.config import settings
from app.core.deps import get_store
from app.core.exceptions import ListingError, ValidationError
from app.core.logging_config import setup_logging
from app.core.store import ListingStore
from app.services import listing_service

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def _cors_headers() -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Headers": "*",
        "Access-Control-Allow-Credentials": "true",
    }


def _response(status_code: int, body: Any) -> Dict:
    return {
        "statusCode": status_code,
        "headers": {**_cors_headers(), "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _error(error: ListingError) -> Dict:
    return _response(error.status_code, error.to_dict())


def _parse_body(event: Dict) -> Any:
    try:
        return json.loads(event.get("body") or "{}")
    except (ValueError, TypeError) as e:
        raise ValidationError([], message="Request body must be valid JSON.") from e


def _listing_id(event: Dict) -> str:
    return ((event.get("pathParameters") or {}).get("id")) or ""


def _run(operation: str, action: Callable[[], Dict]) -> Dict:
    try:
        return action()
    except ListingError as e:
        if e.status_code >= 500:
            logger.error(f"{operation} failed: {e.message}")
        else:
            logger.warning(f"{operation} rejected: {e.message}")
        return _error(e)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def submit(event: Dict, context: Any, store: Optional[ListingStore] = None) -> Dict:
    if store is None:
        store = get_store()

    def action():
        listing = listing_service.create_listing(store, _parse_body(event))
        return _response(201, {
            "message": f"Successfully submitted job listing with title {listing.jobTitle}",
            "jobId": listing.id,
        })

    return _run("submit", action)


def list_all(event: Dict, context: Any, store: Optional[ListingStore] = None) -> Dict:
    if store is None:
        store = get_store()
    return _run("list", lambda: _response(200, {"jobs": listing_service.list_listings(store)}))


def get(event: Dict, context: Any, store: Optional[ListingStore] = None) -> Dict:
    if store is None:
        store = get_store()
    return _run("get", lambda: _response(200, listing_service.get_listing(store, _listing_id(event))))


def delete(event: Dict, context: Any, store: Optional[ListingStore] = None) -> Dict:
    if store is None:
        store = get_store()

    def action():
        listing_service.delete_listing(store, _listing_id(event))
        return _response(200, {"message": "Job listing deleted."})

    return _run("delete", action)


def update(event: Dict, context: Any, store: Optional[ListingStore] = None) -> Dict:
    if store is None:
        store = get_store()

    def action():
        changes = listing_service.update_listing(store, _listing_id(event), _parse_body(event))
        return _response(200, changes)

    return _run("update", action)
