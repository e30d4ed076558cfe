"""
tests/conftest.py — Shared pytest fixtures.

Provides:
  API_BASE         — base URL every test points the sources at
  users_payload    — parsed tests/fixtures/users.json
  posts_payload    — parsed tests/fixtures/posts.json
  mock_http        — configured respx router for faking HTTP responses
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import respx

FIXTURES_DIR = Path(__file__).parent / "fixtures"

API_BASE = "https://api.example.test"
USERS_URL = f"{API_BASE}/users"
POSTS_URL = f"{API_BASE}/posts"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

@pytest.fixture
def users_payload() -> list[dict]:
    return json.loads((FIXTURES_DIR / "users.json").read_text())


@pytest.fixture
def posts_payload() -> list[dict]:
    return json.loads((FIXTURES_DIR / "posts.json").read_text())


# ---------------------------------------------------------------------------
# respx HTTP mock router
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_http():
    """
    Activate the respx mock router for all httpx requests.

    Usage in tests:
        def test_something(mock_http):
            mock_http.get(USERS_URL).mock(return_value=httpx.Response(200, json=[...]))
    """
    with respx.mock(assert_all_called=False) as router:
        yield router
