"""
Pytest configuration and shared fixtures.

Everything runs against the in-memory store adapter:
- a fresh store per test
- domain services built on that store
- a FastAPI test client whose store dependency points at it
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from solosphere.adapters.memory_adapter import InMemoryStore
from solosphere.dependencies import get_store
from solosphere.services.auth_service import TOKEN_COOKIE, create_access_token
from solosphere.services.bid_service import BidService
from solosphere.services.job_query import JobQueryBuilder
from solosphere.services.job_service import JobService


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def job_service(store):
    return JobService(store=store)


@pytest.fixture
def bid_service(store, job_service):
    return BidService(store=store, jobs=job_service)


@pytest.fixture
def query_builder(store):
    return JobQueryBuilder(store=store)


@pytest.fixture
def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Put a valid session cookie for `email` on the test client."""

    def _login(email: str) -> None:
        client.cookies.set(TOKEN_COOKIE, create_access_token({"email": email}))

    return _login


@pytest.fixture
def sample_job():
    """A job as posted by the client app."""
    return {
        "job_title": "Senior Python Developer",
        "job_category": "web-development",
        "deadline": "2026-12-01T00:00:00.000Z",
        "description": "Build and maintain a FastAPI backend.",
        "min_price": 200,
        "max_price": 500,
        "buyer": {"email": "buyer@x.com", "name": "Buyer", "photo": None},
    }


@pytest.fixture
def sample_bid():
    def _bid(job_id: str, email: str = "freelancer@x.com") -> dict:
        return {
            "jobId": job_id,
            "email": email,
            "price": 300,
            "comment": "I can start today.",
            "deadline": "2026-11-20T00:00:00.000Z",
            "job_title": "Senior Python Developer",
            "category": "web-development",
            "status": "Pending",
            "buyer_email": "buyer@x.com",
        }

    return _bid
