"""
pipelines/user_posts.py — Users enriched with their posts.

Orchestrates:
  1. UsersSource + PostsSource → fetched concurrently on one shared client
  2. join_users_and_posts()    → formatted address, company name, posts

Fail-fast: if either fetch fails, the other request is cancelled and the
error is logged and re-raised. A partial result is never returned.

Usage:
    from userposts.pipelines.user_posts import get_users_and_their_posts
    users = await get_users_and_their_posts(max_attempts=5)

    # From synchronous code
    from userposts.pipelines.user_posts import run
    users = run()
"""

from __future__ import annotations

import asyncio
import time

import httpx

from userposts.config import settings
from userposts.models import EnrichedUser, Post, User
from userposts.sources import PostsSource, UsersSource
from userposts.transforms.join import join_users_and_posts
from userposts.utils.logging import get_logger

log = get_logger(__name__)


async def _fetch_both(
    users_source: UsersSource,
    posts_source: PostsSource,
    client: httpx.AsyncClient,
) -> tuple[list[User], list[Post]]:
    users_task = asyncio.create_task(users_source.run(client), name="fetch_users")
    posts_task = asyncio.create_task(posts_source.run(client), name="fetch_posts")
    tasks = (users_task, posts_task)
    try:
        users, posts = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return users, posts


async def get_users_and_their_posts(
    *,
    base_url: str | None = None,
    max_attempts: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[EnrichedUser]:
    """
    Fetch users and posts concurrently and join them.

    Args:
        base_url:     API root. Defaults to settings.api_base_url.
        max_attempts: Transport attempts per request. Defaults to
                      settings.max_attempts.
        client:       Shared AsyncClient; one is opened for the call if omitted.

    Returns:
        One EnrichedUser per fetched user, in the order the API returned them.

    Raises:
        TransportError, ParseError, FormatError: after logging.
    """
    users_source = UsersSource(base_url=base_url, max_attempts=max_attempts)
    posts_source = PostsSource(base_url=base_url, max_attempts=max_attempts)
    run_log = log.bind(users_url=users_source.url, posts_url=posts_source.url)

    t0 = time.monotonic()
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as owned:
                users, posts = await _fetch_both(users_source, posts_source, owned)
        else:
            users, posts = await _fetch_both(users_source, posts_source, client)

        result = join_users_and_posts(users, posts)
    except Exception as exc:
        run_log.error(
            "data_retrieval_failed",
            error=str(exc),
            error_type=type(exc).__name__,
            duration_ms=int((time.monotonic() - t0) * 1000),
        )
        raise

    run_log.info(
        "user_posts_complete",
        users=len(result),
        duration_ms=int((time.monotonic() - t0) * 1000),
    )
    return result


def run(
    *,
    base_url: str | None = None,
    max_attempts: int | None = None,
) -> list[EnrichedUser]:
    """Synchronous wrapper around get_users_and_their_posts()."""
    return asyncio.run(
        get_users_and_their_posts(base_url=base_url, max_attempts=max_attempts)
    )
