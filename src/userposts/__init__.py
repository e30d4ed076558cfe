"""
userposts — fetch users and posts from a JSON API and join them.

Architecture:
  fetcher.py   — retrying streamed HTTP GET + JSON parse (fetch_data)
  sources/     — one adapter per remote collection (users, posts)
  transforms/  — address formatting and the users/posts join
  pipelines/   — orchestration: concurrent fetch, then join
  utils/       — structlog configuration, tenacity retry helper

Quick start:
    import asyncio
    from userposts import get_users_and_their_posts
    users = asyncio.run(get_users_and_their_posts())
    print(users[0].posts[0].title)

CLI:
    userposts fetch --max-attempts 5 --output users.json
"""

from userposts.errors import FetchError, FormatError, ParseError, TransportError
from userposts.fetcher import fetch_data
from userposts.pipelines.user_posts import get_users_and_their_posts
from userposts.transforms.join import format_address

__version__ = "0.1.0"

__all__ = [
    "fetch_data",
    "get_users_and_their_posts",
    "format_address",
    "FetchError",
    "TransportError",
    "ParseError",
    "FormatError",
]
