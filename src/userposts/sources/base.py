"""
sources/base.py — Base class for remote collection adapters.

A source knows which path of the API it reads and which record model each
element of the returned JSON array must validate against. Concrete sources
only declare those attributes:

  name   — used for logging
  path   — resource path appended to the API base URL
  model  — pydantic model for one element of the collection

The run() method wraps extract() with timing and structured logging.
Pipelines call run() rather than extract() directly.
"""

from __future__ import annotations

import time
from typing import Any, ClassVar, Generic, TypeVar

import httpx
from pydantic import BaseModel

from userposts.config import settings
from userposts.fetcher import fetch_data
from userposts.utils.logging import get_logger

RecordT = TypeVar("RecordT", bound=BaseModel)


class BaseSource(Generic[RecordT]):
    """Fetches one collection from the API as a list of validated records."""

    name: ClassVar[str] = "unknown"
    path: ClassVar[str] = "/"
    model: ClassVar[type[BaseModel]]

    def __init__(
        self,
        *,
        base_url: str | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.url = settings.resource_url(self.path, base_url)
        self.max_attempts = settings.max_attempts if max_attempts is None else max_attempts
        self._log = get_logger(__name__, source_name=self.name)

    async def extract(self, client: httpx.AsyncClient | None = None) -> list[RecordT]:
        """
        Fetch the collection and validate every element against self.model.

        Raises:
            TransportError, ParseError: see fetch_data().
        """
        return await fetch_data(
            self.url,
            self.max_attempts,
            schema=list[self.model],  # type: ignore[name-defined]
            client=client,
        )

    async def run(self, client: httpx.AsyncClient | None = None) -> list[RecordT]:
        """
        extract() with timing and structured logging.

        Raises:
            Any exception from extract() after logging it.
        """
        run_log = self._log.bind(url=self.url)
        run_log.info("source_run_start")

        t0 = time.monotonic()
        try:
            records = await self.extract(client)
        except Exception as exc:
            run_log.error(
                "source_run_failed",
                error=str(exc),
                duration_ms=int((time.monotonic() - t0) * 1000),
            )
            raise

        run_log.info(
            "source_run_complete",
            records=len(records),
            duration_ms=int((time.monotonic() - t0) * 1000),
        )
        return records

    def get_metadata(self) -> dict[str, Any]:
        return {
            "source_name": self.name,
            "url": self.url,
            "max_attempts": self.max_attempts,
            "record_type": self.model.__name__,
        }
