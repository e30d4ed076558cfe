"""
cli.py — Click CLI entrypoint.

Usage:
    userposts fetch
    userposts fetch --max-attempts 5 --output users.json
    userposts --log-format json fetch --base-url http://localhost:3000
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from userposts.config import settings
from userposts.errors import UserPostsError
from userposts.pipelines.user_posts import run
from userposts.utils.logging import configure_logging, get_logger

log = get_logger(__name__)


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Log level",
)
@click.option(
    "--log-format",
    default=settings.log_format,
    type=click.Choice(["json", "console"]),
    help="Log renderer",
)
def main(log_level: str, log_format: str) -> None:
    """Fetch users with their posts."""
    configure_logging(log_level=log_level, log_format=log_format)


@main.command()
@click.option("--base-url", default=None, help="API root (default: settings.api_base_url)")
@click.option(
    "--max-attempts",
    default=None,
    type=click.IntRange(min=1),
    help="Attempts per request on transport errors",
)
@click.option(
    "--output",
    "output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write JSON here instead of stdout",
)
def fetch(base_url: str | None, max_attempts: int | None, output: Path | None) -> None:
    """Fetch users and posts, join them, and print the result as JSON."""
    try:
        users = run(base_url=base_url, max_attempts=max_attempts)
    except UserPostsError as exc:
        click.echo(f"General Error: {exc}", err=True)
        sys.exit(1)

    payload = json.dumps([u.to_dict() for u in users], indent=2, ensure_ascii=False)
    if output is None:
        click.echo(payload)
    else:
        output.write_text(payload + "\n", encoding="utf-8")
        log.info("output_written", path=str(output), users=len(users))


if __name__ == "__main__":
    main()
