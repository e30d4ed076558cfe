"""
errors.py — Exception hierarchy.

  UserPostsError
  ├── FetchError          — anything that went wrong fetching one URL
  │   ├── TransportError  — connection / response failure after all attempts
  │   └── ParseError      — body is not JSON or does not match the record type
  └── FormatError         — malformed address structure during the join
"""

from __future__ import annotations


class UserPostsError(Exception):
    """Base class for all userposts errors."""


class FetchError(UserPostsError):
    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """Raised once the retry budget for a URL is exhausted."""

    def __init__(self, url: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"GET {url} failed after {attempts} attempt(s): {last_error}",
            url=url,
        )
        self.attempts = attempts
        self.last_error = last_error


class ParseError(FetchError):
    """Raised when a response body cannot be decoded. Never retried."""


class FormatError(UserPostsError, ValueError):
    """Raised when an address structure is missing or incomplete."""
