"""
sources/jsonplaceholder.py — Users and posts collections.

Endpoints (relative to settings.api_base_url):
  GET /users  → [{ "id": 1, "name": ..., "address": {...}, "company": {...} }, ...]
  GET /posts  → [{ "userId": 1, "id": 1, "title": ..., "body": ... }, ...]

Usage:
    users = await UsersSource().run(client)
    posts = await PostsSource(max_attempts=5).run(client)
"""

from __future__ import annotations

from userposts.config import settings
from userposts.models import Post, User
from userposts.sources.base import BaseSource


class UsersSource(BaseSource[User]):
    name = "users"
    path = settings.users_path
    model = User


class PostsSource(BaseSource[Post]):
    name = "posts"
    path = settings.posts_path
    model = Post
