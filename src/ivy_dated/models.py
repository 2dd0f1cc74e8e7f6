"""Domain models for dependency freshness checks (dataclasses).

Purpose
-------
Define the core data structures that flow from the manifest parser through
the registry resolver to the CLI. These are pure dataclasses used for
internal logic; validation of external data happens in schemas.py.

Contents
--------
* :class:`Dependency` - A dependency pinned in the manifest
* :class:`ResolvedVersion` - Normalized version metadata from the registry
* :class:`Status` - Classification of a dependency
* :class:`CheckOutcome` - Result of checking one dependency
* :class:`RunStatistics` - Counts accumulated across a run
* :class:`CheckReport` - Complete result of checking a manifest

Data Flow Pattern
-----------------
Manifest XML → Pydantic (validate) → Dependency → Resolver → ResolvedVersion
→ CheckOutcome → RunStatistics / Pydantic (serialize) → Output
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path


class Status(str, Enum):
    """Classification of a pinned dependency against the registry.

    Attributes:
        CURRENT: The pinned version is the latest published version.
        DATED: A newer version than the pinned one has been published.
        UNKNOWN: The pinned or the latest version could not be found.
    """

    CURRENT = "current"
    DATED = "dated"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Dependency:
    """A single dependency entry of the manifest.

    Attributes:
        organization: The organization (Maven group) of the dependency.
        revision: The pinned revision string, taken verbatim.
        artifact: The artifact name, from the ``name`` attribute.
        module: Alternate artifact name, from the ``module`` attribute.
    """

    organization: str
    revision: str
    artifact: str | None = None
    module: str | None = None

    @property
    def artifact_id(self) -> str | None:
        """Return the artifact name, preferring ``artifact`` over ``module``."""
        if self.artifact is not None:
            return self.artifact
        return self.module

    @property
    def display_name(self) -> str:
        """Return ``organization/artifact``, with ``?`` when no artifact is known."""
        artifact_id = self.artifact_id
        return f"{self.organization}/{artifact_id if artifact_id is not None else '?'}"


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    """Version metadata for one published artifact.

    Attributes:
        group: Maven group id.
        artifact: Maven artifact id.
        version: Version string, empty when the registry reported none.
        publish_time: UTC publish time, truncated to whole seconds.
    """

    group: str
    artifact: str
    version: str
    publish_time: datetime


@dataclass(frozen=True, slots=True)
class CheckOutcome:
    """Result of checking one dependency against the registry.

    Attributes:
        dependency: The dependency that was checked.
        status: The classification.
        pinned: Metadata of the pinned version, None if not found.
        latest: Metadata of the latest version, None if not looked up or
            not found.
    """

    dependency: Dependency
    status: Status
    pinned: ResolvedVersion | None = None
    latest: ResolvedVersion | None = None

    @property
    def lag(self) -> timedelta | None:
        """Return ``pinned.publish_time - latest.publish_time`` for dated outcomes.

        Negative when the pinned release predates the latest one.
        """
        if self.status is not Status.DATED or self.pinned is None or self.latest is None:
            return None
        return self.pinned.publish_time - self.latest.publish_time


@dataclass(slots=True)
class RunStatistics:
    """Counts of classifications accumulated across a run.

    Attributes:
        dated: Number of dated dependencies.
        current: Number of current dependencies.
        unknown: Number of unknown dependencies.
    """

    dated: int = 0
    current: int = 0
    unknown: int = 0

    def record(self, outcome: CheckOutcome) -> None:
        """Fold one outcome into the counters."""
        if outcome.status is Status.DATED:
            self.dated += 1
        elif outcome.status is Status.CURRENT:
            self.current += 1
        else:
            self.unknown += 1

    @property
    def total(self) -> int:
        """Return the number of recorded outcomes."""
        return self.dated + self.current + self.unknown


def _empty_outcome_list() -> list[CheckOutcome]:
    """Return an empty CheckOutcome list for dataclass defaults."""
    return []


@dataclass(slots=True)
class CheckReport:
    """Complete result of checking a manifest.

    Attributes:
        manifest: Path of the checked manifest, if any.
        outcomes: Outcomes in processing order (sorted by display name).
        statistics: Classification counts.
    """

    manifest: Path | None = None
    outcomes: list[CheckOutcome] = field(default_factory=_empty_outcome_list)
    statistics: RunStatistics = field(default_factory=RunStatistics)


__all__ = [
    "CheckOutcome",
    "CheckReport",
    "Dependency",
    "ResolvedVersion",
    "RunStatistics",
    "Status",
]
