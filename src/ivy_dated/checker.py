"""Checker that classifies pinned dependencies against the registry.

Purpose
-------
Orchestrate a check: parse the manifest, sort dependencies by display name,
look up the pinned and latest versions of each one at a fixed pace,
classify the pair, and accumulate run statistics.

Contents
--------
* :func:`classify` - Classify a pinned/latest pair
* :func:`sort_dependencies` - Processing order of dependencies
* :func:`fixed_delay` / :func:`no_delay` - Pacing policies
* :class:`DependencyChecker` - Sequential checker over a Resolver
* :func:`check_manifest` - Parse a manifest and check every dependency
* :func:`write_report_json` - Serialize a report to JSON

System Role
-----------
The coordinating component between the parser, the resolver and the CLI.
Errors from the parser and the resolver propagate unchanged; a dependency
that cannot be found is classified unknown and the run continues.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_REQUEST_DELAY
from .manifest_parser import IvyManifestParser, ManifestParser
from .models import CheckOutcome, CheckReport, Dependency, ResolvedVersion, Status
from .registry_resolver import Resolver
from .schemas import CheckOutcomeSchema, CheckReportSchema, ResolvedVersionSchema

logger = logging.getLogger(__name__)

PacingPolicy = Callable[[int], float]
"""Maps the number of registry calls already made to a wait in seconds."""


def fixed_delay(seconds: float) -> PacingPolicy:
    """Return a policy that waits ``seconds`` before every call but the first."""
    if seconds < 0:
        raise ValueError(f"delay must not be negative, got {seconds}")

    def policy(calls_made: int) -> float:
        return seconds if calls_made > 0 else 0.0

    return policy


def no_delay(calls_made: int) -> float:
    """Pacing policy that never waits."""
    return 0.0


def classify(pinned: ResolvedVersion | None, latest: ResolvedVersion | None) -> Status:
    """Classify a dependency from its pinned and latest registry metadata.

    Args:
        pinned: Metadata of the pinned version, None if not found.
        latest: Metadata of the latest version, None if not found.

    Returns:
        UNKNOWN if either side is missing or has an empty version string,
        CURRENT if the versions are equal, DATED otherwise.
    """
    if pinned is None or latest is None:
        return Status.UNKNOWN
    if not pinned.version or not latest.version:
        return Status.UNKNOWN
    if pinned.version == latest.version:
        return Status.CURRENT
    return Status.DATED


def sort_dependencies(dependencies: Iterable[Dependency]) -> list[Dependency]:
    """Return dependencies in ascending display-name order."""
    return sorted(dependencies, key=lambda dep: dep.display_name)


@dataclass
class DependencyChecker:
    """Sequential checker for manifest dependencies.

    Attributes:
        resolver: Registry lookups.
        pacing: Wait policy applied before each registry call.
        sleep: Function used to wait; replaced in tests.
        parser: Manifest parser used by :meth:`check_manifest`.
    """

    resolver: Resolver
    pacing: PacingPolicy = field(default_factory=lambda: fixed_delay(DEFAULT_REQUEST_DELAY))
    sleep: Callable[[float], None] = time.sleep
    parser: ManifestParser = field(default_factory=IvyManifestParser)
    calls_made: int = field(default=0, init=False)

    def _pace(self) -> None:
        delay = self.pacing(self.calls_made)
        if delay > 0:
            self.sleep(delay)
        self.calls_made += 1

    def check(self, dependency: Dependency) -> CheckOutcome:
        """Check one dependency: pinned lookup, then latest lookup, then classify."""
        artifact = dependency.artifact_id
        # A query with an empty artifact filter can never match, so skip the round trip
        if artifact is None:
            logger.info("%s has no name or module, skipping lookup", dependency.display_name)
            return CheckOutcome(dependency=dependency, status=Status.UNKNOWN)

        self._pace()
        pinned = self.resolver.pinned_version(dependency.organization, artifact, dependency.revision)
        if pinned is None:
            logger.info("%s@%s not found in registry", dependency.display_name, dependency.revision)
            return CheckOutcome(dependency=dependency, status=Status.UNKNOWN)

        self._pace()
        latest = self.resolver.latest_version(dependency.organization, artifact)
        status = classify(pinned, latest)
        logger.debug("%s classified %s", dependency.display_name, status.value)
        return CheckOutcome(dependency=dependency, status=status, pinned=pinned, latest=latest)

    def run(
        self,
        dependencies: Iterable[Dependency],
        on_outcome: Callable[[CheckOutcome], None] | None = None,
    ) -> CheckReport:
        """Check dependencies in display-name order and accumulate statistics.

        Args:
            dependencies: Dependencies to check.
            on_outcome: Called with each outcome as soon as it is known.

        Returns:
            Report with outcomes and statistics; ``manifest`` is left unset.
        """
        report = CheckReport()
        for dependency in sort_dependencies(dependencies):
            outcome = self.check(dependency)
            report.outcomes.append(outcome)
            report.statistics.record(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
        return report

    def check_manifest(
        self,
        manifest: Path | str,
        on_outcome: Callable[[CheckOutcome], None] | None = None,
    ) -> CheckReport:
        """Parse ``manifest`` and check all its dependencies.

        A manifest that fails to parse raises before any registry call.
        """
        path = Path(manifest)
        dependencies = self.parser.parse(path)
        logger.info("Checking %d dependencies from %s", len(dependencies), path)
        report = self.run(dependencies, on_outcome)
        report.manifest = path
        return report


def check_manifest(
    manifest: Path | str,
    *,
    checker: DependencyChecker,
    on_outcome: Callable[[CheckOutcome], None] | None = None,
) -> CheckReport:
    """Parse a manifest and check every dependency with ``checker``.

    Example:
        >>> with MavenCentralResolver() as resolver:  # doctest: +SKIP
        ...     report = check_manifest("ivy.xml", checker=DependencyChecker(resolver))
        >>> report.statistics.dated  # doctest: +SKIP
        3
    """
    return checker.check_manifest(manifest, on_outcome)


def _version_to_schema(resolved: ResolvedVersion | None) -> ResolvedVersionSchema | None:
    if resolved is None:
        return None
    return ResolvedVersionSchema(version=resolved.version, publish_time=resolved.publish_time)


def _outcome_to_schema(outcome: CheckOutcome) -> CheckOutcomeSchema:
    lag = outcome.lag
    return CheckOutcomeSchema(
        name=outcome.dependency.display_name,
        organization=outcome.dependency.organization,
        artifact=outcome.dependency.artifact_id,
        revision=outcome.dependency.revision,
        status=outcome.status,
        pinned=_version_to_schema(outcome.pinned),
        latest=_version_to_schema(outcome.latest),
        lag_seconds=int(lag.total_seconds()) if lag is not None else None,
    )


def outcome_to_dict(outcome: CheckOutcome) -> dict[str, object]:
    """Convert a CheckOutcome to a dictionary for JSON serialization."""
    return _outcome_to_schema(outcome).model_dump(mode="json")


def report_to_dict(report: CheckReport) -> dict[str, object]:
    """Convert a CheckReport to a dictionary for JSON serialization."""
    schema = CheckReportSchema(
        manifest=str(report.manifest) if report.manifest is not None else None,
        outcomes=[_outcome_to_schema(o) for o in report.outcomes],
        dated=report.statistics.dated,
        current=report.statistics.current,
        unknown=report.statistics.unknown,
    )
    return schema.model_dump(mode="json")


def write_report_json(report: CheckReport, output_path: Path | str) -> None:
    """Write a check report to a JSON file.

    Args:
        report: The report to write.
        output_path: Path to the output JSON file.

    Raises:
        ValueError: If output_path is a directory.
    """
    path = Path(output_path).resolve()

    if path.is_dir():
        raise ValueError(f"Output path must be a file, not a directory: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(report_to_dict(report), f, indent=2)

    logger.info("Wrote %d outcomes to %s", len(report.outcomes), path)


__all__ = [
    "DependencyChecker",
    "PacingPolicy",
    "check_manifest",
    "classify",
    "fixed_delay",
    "no_delay",
    "outcome_to_dict",
    "report_to_dict",
    "sort_dependencies",
    "write_report_json",
]
