"""
userposts.sources — remote collection adapters.

  UsersSource — the primary records
  PostsSource — records linked to a user through userId
"""

from userposts.sources.jsonplaceholder import PostsSource, UsersSource

__all__ = ["UsersSource", "PostsSource"]
