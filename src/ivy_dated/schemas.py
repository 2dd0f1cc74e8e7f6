"""Pydantic schemas for external data boundaries.

Purpose
-------
Define Pydantic models for data that crosses system boundaries:
- Input: attributes of Ivy ``<dependency>`` elements
- Input: Maven Central search responses
- Output: JSON serialization of check reports

These models handle validation, coercion, and serialization at the edges
while internal logic uses the lightweight dataclasses in models.py.

Data Flow Pattern
-----------------
External Input → Pydantic (validate) → Dataclass (domain) → Pydantic (serialize) → External Output
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .models import Status


class IvyDependencySchema(BaseModel):
    """Schema for the attributes of an Ivy ``<dependency>`` element.

    Only ``org`` and ``rev`` are required. Other Ivy attributes such as
    ``conf`` or ``transitive`` are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    org: str
    rev: str
    name: str | None = None
    module: str | None = None


class SearchDocSchema(BaseModel):
    """Schema for one document of a Maven Central search response.

    The default search core reports ``latestVersion``; the ``gav`` core and
    version-filtered queries report ``v``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    g: str
    a: str
    v: str | None = None
    latest_version: str | None = Field(default=None, alias="latestVersion")
    timestamp: int = Field(description="Publish time in epoch milliseconds")


class SearchResultSchema(BaseModel):
    """Schema for the ``response`` object of a search response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    docs: list[SearchDocSchema]


class SearchResponseSchema(BaseModel):
    """Schema for a Maven Central search response body."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    response: SearchResultSchema


class ResolvedVersionSchema(BaseModel):
    """Pydantic schema for serializing resolved version metadata."""

    model_config = ConfigDict(frozen=True)

    version: str
    publish_time: datetime


class CheckOutcomeSchema(BaseModel):
    """Pydantic schema for serializing one dependency check to JSON."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    name: str = Field(description="Display name organization/artifact")
    organization: str
    artifact: str | None = None
    revision: str = Field(description="Pinned revision from the manifest")
    status: Status
    pinned: ResolvedVersionSchema | None = None
    latest: ResolvedVersionSchema | None = None
    lag_seconds: int | None = Field(
        default=None,
        description="Pinned publish time minus latest publish time",
    )


def _empty_outcome_list() -> list[CheckOutcomeSchema]:
    """Return empty list for default factory."""
    return []


class CheckReportSchema(BaseModel):
    """Pydantic schema for complete check report serialization."""

    model_config = ConfigDict(frozen=True)

    manifest: str | None = None
    outcomes: list[CheckOutcomeSchema] = Field(default_factory=_empty_outcome_list)
    dated: int = 0
    current: int = 0
    unknown: int = 0


__all__ = [
    "CheckOutcomeSchema",
    "CheckReportSchema",
    "IvyDependencySchema",
    "ResolvedVersionSchema",
    "SearchDocSchema",
    "SearchResponseSchema",
    "SearchResultSchema",
]
