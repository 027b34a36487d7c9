"""
Shared dependencies for the Lambda handlers and FastAPI endpoints.

The store is the composition root's single long-lived resource: it is built
once per process from settings and reused across invocations. Tests replace
it with app.dependency_overrides or by passing a store to a handler.
"""

from functools import lru_cache

from app.core.config import settings
from app.core.store import ListingStore, create_store


@lru_cache(maxsize=1)
def get_store() -> ListingStore:
    """
    Dependency function to get the job listing store.
    Used in FastAPI endpoints with Depends(get_store)
    """
    return create_store(settings)
