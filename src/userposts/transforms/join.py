"""
transforms/join.py — Join users with their posts.

Pure functions, no I/O. Posts are grouped by user_id with polars, keeping the
original relative order inside each group; users are then walked in input
order so the output has exactly one EnrichedUser per input User.

Usage:
    from userposts.transforms.join import join_users_and_posts

    enriched = join_users_and_posts(users, posts)
    enriched[0].address   # "Kulas Light, Apt. 556 - 92998-3874 Gwenborough"
    enriched[0].company   # "Romaguera-Crona"
    enriched[0].posts     # [PostSummary(id=1, ...), ...]
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import polars as pl

from userposts.errors import FormatError
from userposts.models import Address, EnrichedUser, Post, PostSummary, User
from userposts.utils.logging import get_logger

log = get_logger(__name__)

ADDRESS_FIELDS: tuple[str, ...] = ("street", "suite", "zipcode", "city")

_POST_SCHEMA: dict[str, Any] = {
    "user_id": pl.Int64,
    "id": pl.Int64,
    "title": pl.String,
    "body": pl.String,
}


def format_address(address: Address | Mapping[str, Any] | None) -> str:
    """
    Render an address as "{street}, {suite} - {zipcode} {city}".

    Accepts an Address model or a plain mapping with the same keys.

    Raises:
        FormatError: address is missing or lacks one of the four fields.
    """
    if address is None:
        raise FormatError("address is missing")
    parts = address.model_dump() if isinstance(address, Address) else address
    if not isinstance(parts, Mapping):
        raise FormatError(f"address must be a mapping, got {type(address).__name__}")

    missing = [f for f in ADDRESS_FIELDS if parts.get(f) is None]
    if missing:
        raise FormatError(f"address is missing field(s): {', '.join(missing)}")

    return f"{parts['street']}, {parts['suite']} - {parts['zipcode']} {parts['city']}"


def format_user_address(user: User) -> str:
    try:
        return format_address(user.address)
    except FormatError as exc:
        log.error("format_address_failed", user_id=user.id, error=str(exc))
        raise


def group_posts_by_user(posts: Sequence[Post]) -> dict[int, list[PostSummary]]:
    """
    Map user_id → that user's posts reduced to id/title/body.

    Order inside each list follows the order of `posts`.
    """
    if not posts:
        return {}

    df = pl.DataFrame(
        [p.model_dump(include=set(_POST_SCHEMA)) for p in posts],
        schema=_POST_SCHEMA,
    )
    grouped = df.group_by("user_id", maintain_order=True).agg(
        pl.struct("id", "title", "body").alias("posts")
    )
    return {
        row["user_id"]: [PostSummary.model_validate(p) for p in row["posts"]]
        for row in grouped.iter_rows(named=True)
    }


def filter_user_posts(
    user: User,
    posts_by_user: Mapping[int, list[PostSummary]],
) -> list[PostSummary]:
    return list(posts_by_user.get(user.id, []))


def enrich_user(user: User, posts_by_user: Mapping[int, list[PostSummary]]) -> EnrichedUser:
    # Undeclared API fields ride along; derived fields win on a name clash.
    extras = {
        k: v for k, v in (user.model_extra or {}).items() if k not in EnrichedUser.model_fields
    }
    return EnrichedUser(
        **extras,
        id=user.id,
        name=user.name,
        username=user.username,
        email=user.email,
        address=format_user_address(user),
        phone=user.phone,
        website=user.website,
        company=user.company.name,
        posts=filter_user_posts(user, posts_by_user),
    )


def join_users_and_posts(
    users: Sequence[User],
    posts: Sequence[Post],
) -> list[EnrichedUser]:
    """
    Attach to each user the posts whose user_id equals the user's id.

    The result has the same length and order as `users`. Posts pointing at
    no known user are left out.

    Raises:
        FormatError: a user has a missing or incomplete address.
    """
    posts_by_user = group_posts_by_user(posts)
    enriched = [enrich_user(user, posts_by_user) for user in users]

    user_ids = {user.id for user in users}
    log.info(
        "join_complete",
        users=len(enriched),
        posts=len(posts),
        orphan_posts=sum(
            len(group) for uid, group in posts_by_user.items() if uid not in user_ids
        ),
    )
    return enriched
