"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- In-memory and SQLite-backed job listing stores
- FastAPI test client with the store dependency overridden
- A fixed clock for deterministic timestamps
"""

import os

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, create_session_factory, init_db
from app.core.deps import get_store
from app.core.store import MemoryStore, SQLStore
from main import app


FIXED_NOW = 1_700_000_000_000


@pytest.fixture
def fixed_clock():
    """Clock returning a constant epoch-millis timestamp"""
    return lambda: FIXED_NOW


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sql_store():
    """
    SQL store on a fresh in-memory SQLite database.
    Tables are dropped after the test completes.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    try:
        yield SQLStore(create_session_factory(engine))
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(memory_store):
    """
    FastAPI test client with overridden store dependency.
    """
    app.dependency_overrides[get_store] = lambda: memory_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_listing_data():
    """Sample job listing request body for testing"""
    return {
        "jobTitle": "Senior Python Developer",
        "jobEmployer": "Acme Corp",
        "jobSalary": 120000,
        "jobLocation": "San Francisco, CA (Remote)",
    }


@pytest.fixture
def stored_listing(memory_store, sample_listing_data):
    """A job listing already present in the memory store"""
    record = {
        "id": "k3j9x2p1q-senior-python-developer",
        **sample_listing_data,
        "submittedAt": FIXED_NOW,
        "updatedAt": FIXED_NOW,
    }
    memory_store.put(record)
    return record
