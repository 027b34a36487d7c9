"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between the sql store backend and
database operations, following the Repository pattern.
"""

from app.crud import listing

__all__ = ["listing"]
