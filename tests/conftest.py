"""Pytest configuration and fixtures."""

import time
from collections.abc import Callable
from typing import Any

import jwt
import pytest

from chartgen.config.settings import Settings
from chartgen.infrastructure.auth.identity import CallerIdentity
from chartgen.services.sql.models import QueryPlan

JWT_SECRET = "test-jwt-secret-with-enough-bytes-for-hs256"
SUPABASE_URL = "https://test.supabase.co"


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(
        anthropic_api_key="test-anthropic-key",
        supabase_url=SUPABASE_URL,
        supabase_anon_key="test-anon-key",
        supabase_jwt_secret=JWT_SECRET,
    )


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Mint Supabase-style access tokens signed with the test secret."""

    def _make(
        sub: str = "user-1",
        aud: str = "authenticated",
        expires_in: int = 3600,
        secret: str = JWT_SECRET,
        **claims: Any,
    ) -> str:
        payload = {"sub": sub, "aud": aud, "exp": int(time.time()) + expires_in, **claims}
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def staff_identity():
    return CallerIdentity(subject="staff-1", role="staff", access_token="staff-token")


@pytest.fixture
def public_identity():
    return CallerIdentity(subject="public-1", role="public", access_token="public-token")


@pytest.fixture
def category_plan():
    """Normalized plan for complaints per category."""
    return QueryPlan(
        sql=(
            "SELECT sc.category_name AS name, COUNT(*) AS value FROM complaints c "
            "JOIN service_categories sc ON c.category_id = sc.category_id "
            "GROUP BY sc.category_name ORDER BY value DESC"
        ),
        chart_kind="bar",
        title="Complaints by Category",
    )
