"""
tests/test_cli.py — Tests for the click entrypoint.
"""

from __future__ import annotations

import json

import httpx
import pytest
from click.testing import CliRunner

from userposts import cli

from tests.conftest import API_BASE, POSTS_URL, USERS_URL


@pytest.fixture(autouse=True)
def _no_logging_config(monkeypatch):
    # The runner swaps out stderr; keep structlog on its defaults.
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def test_fetch_writes_json(tmp_path, mock_http, users_payload, posts_payload):
    mock_http.get(USERS_URL).mock(return_value=httpx.Response(200, json=users_payload))
    mock_http.get(POSTS_URL).mock(return_value=httpx.Response(200, json=posts_payload))
    out = tmp_path / "users.json"

    result = CliRunner().invoke(cli.main, ["fetch", "--base-url", API_BASE, "--output", str(out)])

    assert result.exit_code == 0, result.output
    rows = json.loads(out.read_text())
    assert len(rows) == 3
    assert rows[0]["address"] == "Kulas Light, Apt. 556 - 92998-3874 Gwenborough"
    assert [p["id"] for p in rows[0]["posts"]] == [1, 2, 3]


def test_fetch_reports_failure(mock_http):
    mock_http.get(USERS_URL).mock(side_effect=httpx.ConnectError("refused"))
    mock_http.get(POSTS_URL).mock(side_effect=httpx.ConnectError("refused"))

    result = CliRunner().invoke(
        cli.main, ["fetch", "--base-url", API_BASE, "--max-attempts", "1"]
    )

    assert result.exit_code == 1
    assert "General Error" in result.output


def test_rejects_zero_attempts():
    result = CliRunner().invoke(cli.main, ["fetch", "--max-attempts", "0"])
    assert result.exit_code == 2
