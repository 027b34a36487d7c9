"""
Database models package.
"""

from app.models.listing import JobListingRecord

__all__ = ["JobListingRecord"]
