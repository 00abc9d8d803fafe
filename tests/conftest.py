"""
Shared test fixtures for the marketplace API tests.

Provides an in-memory Supabase fake, an ASGI test client wired to it, and
signed-in user fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.database.supabase_client import get_service_supabase, get_supabase
from app.main import app, limiter
from tests.fakes import FakeSupabase

PROFILES = "profiles"


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    limiter.reset()
    yield


# --- Datastore Fixtures ---


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest_asyncio.fixture
async def async_client(fake_supabase: FakeSupabase) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Both Supabase dependencies resolve to the same in-memory fake.
    """
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# --- Authentication Helper Fixtures ---


@pytest.fixture
def auth_headers():
    """Factory fixture for bearer Authorization headers."""

    def _auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def test_user(fake_supabase: FakeSupabase) -> dict[str, str]:
    """A signed-in user with no profile yet."""
    user = {
        "id": "11111111-1111-1111-1111-111111111111",
        "email": "Priya.Sharma@Example.com",
        "token": "token-priya",
    }
    fake_supabase.auth.add_user(user["token"], user["id"], user["email"])
    return user


@pytest.fixture
def second_user(fake_supabase: FakeSupabase) -> dict[str, str]:
    user = {
        "id": "22222222-2222-2222-2222-222222222222",
        "email": "rahul@example.com",
        "token": "token-rahul",
    }
    fake_supabase.auth.add_user(user["token"], user["id"], user["email"])
    return user


@pytest.fixture
def valid_profile_data() -> dict[str, Any]:
    """Valid create-profile payload (camelCase, as the frontend sends it)."""
    return {
        "name": "Priya Sharma",
        "phone": "98765-43210",
        "role": "Builder",
        "serviceName": "Sharma Constructions",
        "bio": "Residential builder with 12 years of experience.",
        "location": "Pune",
        "price": "From ₹1,800 / sq ft",
        "profileImage": "https://cdn.example.com/priya.jpg",
    }


@pytest.fixture
def existing_profile(fake_supabase: FakeSupabase, test_user: dict) -> dict[str, Any]:
    """A stored profile owned by test_user."""
    return fake_supabase.seed(PROFILES, {
        "id": test_user["id"],
        "email": test_user["email"].lower(),
        "name": "Priya Sharma",
        "phone": "9876543210",
        "role": "Builder",
        "service_name": "Sharma Constructions",
        "bio": "Residential builder",
        "location": "Pune",
        "price": None,
        "profile_image": None,
        "banner_image": None,
    })
