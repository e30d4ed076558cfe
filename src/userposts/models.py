"""
models.py — Pydantic models for the remote records and the joined output.

Field names follow Python conventions; the camelCase names used on the wire
(userId, catchPhrase) are declared as aliases. Every model is frozen: records
are not mutated once fetched or joined.

All models provide:
  .to_dict() -> dict   (dumped by alias, i.e. in wire shape)
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

# Ids must fit the Int64 columns used by the join.
RecordId = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Geo(_Record):
    lat: str
    lng: str


class Address(_Record):
    street: str
    suite: str
    city: str
    zipcode: str
    geo: Geo | None = None


class Company(_Record):
    name: str
    catch_phrase: str | None = Field(default=None, alias="catchPhrase")
    bs: str | None = None


class User(_Record):
    """A primary record from the users collection. Undeclared fields are kept."""

    model_config = ConfigDict(extra="allow")

    id: RecordId
    name: str
    username: str | None = None
    email: str | None = None
    # Left optional here so the join, not the parser, reports a missing address.
    address: Address | None = None
    phone: str | None = None
    website: str | None = None
    company: Company


class Post(_Record):
    """A record from the posts collection, linked to a User by user_id."""

    id: RecordId
    user_id: RecordId = Field(alias="userId")
    title: str
    body: str


class PostSummary(_Record):
    id: RecordId
    title: str
    body: str


class EnrichedUser(_Record):
    """A User with its address formatted, company flattened and posts attached."""

    model_config = ConfigDict(extra="allow")

    id: RecordId
    name: str
    username: str | None = None
    email: str | None = None
    address: str
    phone: str | None = None
    website: str | None = None
    company: str
    posts: list[PostSummary] = Field(default_factory=list)
