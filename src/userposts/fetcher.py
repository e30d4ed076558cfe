"""
fetcher.py — Retrying HTTP GET that streams a body and parses it as JSON.

Transport-level failures (connect errors, errors while the body is being
streamed, timeouts and non-2xx statuses) are retried immediately until
max_attempts is used up, then surface as TransportError. A body that does not
parse, or does not match the requested schema, fails at once with ParseError.

Usage:
    from userposts.fetcher import fetch_data
    from userposts.models import User

    raw = await fetch_data("https://jsonplaceholder.typicode.com/users")
    users = await fetch_data(url, max_attempts=5, schema=list[User])
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from userposts.config import settings
from userposts.errors import ParseError, TransportError
from userposts.utils.logging import get_logger
from userposts.utils.retry import retry_async

log = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


async def _read_body(client: httpx.AsyncClient, url: str) -> bytes:
    """Issue one GET and concatenate the streamed fragments in arrival order."""
    chunks: list[bytes] = []
    async with client.stream("GET", url) as response:
        response.raise_for_status()
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)
    return b"".join(chunks)


async def _read_body_with_retry(
    client: httpx.AsyncClient,
    url: str,
    max_attempts: int,
) -> bytes:
    try:
        return await retry_async(
            _read_body,
            client,
            url,
            max_attempts=max_attempts,
            retry_on=(httpx.HTTPError,),
        )
    except httpx.HTTPError as exc:
        raise TransportError(url, max_attempts, exc) from exc


def _parse(body: bytes, url: str, schema: Any | None) -> Any:
    try:
        if schema is None:
            return json.loads(body)
        return TypeAdapter(schema).validate_json(body)
    except (ValueError, ValidationError) as exc:
        log.error("fetch_parse_failed", url=url, body_bytes=len(body), error=str(exc))
        raise ParseError(f"Could not parse response from {url}: {exc}", url=url) from exc


async def fetch_data(
    url: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    *,
    schema: Any | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """
    Fetch url and return its parsed JSON body.

    Args:
        url:          Absolute URL to GET.
        max_attempts: Total attempts allowed for transport failures (>= 1).
        schema:       Optional type (e.g. list[User]) the body is validated
                      against with pydantic. Without it plain JSON is returned.
        client:       Shared AsyncClient. When omitted a client is opened for
                      this call with settings.http_timeout and closed after.

    Raises:
        ValueError:     max_attempts < 1.
        TransportError: every attempt failed at the transport level.
        ParseError:     the body is not valid JSON or does not match schema.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    fetch_log = log.bind(url=url)
    fetch_log.info("fetch_start", max_attempts=max_attempts)

    if client is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as owned:
            body = await _read_body_with_retry(owned, url, max_attempts)
    else:
        body = await _read_body_with_retry(client, url, max_attempts)

    data = _parse(body, url, schema)
    fetch_log.info("fetch_complete", body_bytes=len(body))
    return data
