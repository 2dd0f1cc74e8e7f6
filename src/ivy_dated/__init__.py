"""Public package surface for checking how dated Ivy dependencies are.

This package parses Ivy dependency manifests, looks up each pinned
revision and the latest published version on Maven Central, and classifies
every dependency as current, dated or unknown.

Main API
--------
* :func:`parse_manifest` - Parse an ivy.xml into dependencies
* :class:`MavenCentralResolver` - Pinned and latest version lookups
* :class:`DependencyChecker` - Sequential checker with request pacing
* :func:`check_manifest` - Parse and check a manifest in one call
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .checker import (
    DependencyChecker,
    check_manifest,
    classify,
    fixed_delay,
    no_delay,
    sort_dependencies,
    write_report_json,
)
from .config import CheckerSettings, get_checker_settings, get_config
from .errors import (
    IvyDatedError,
    ManifestError,
    ManifestFormatError,
    ManifestReadError,
    RegistryDecodeError,
    RegistryError,
    RegistryNetworkError,
)
from .manifest_parser import IvyManifestParser, ManifestParser, parse_manifest
from .models import (
    CheckOutcome,
    CheckReport,
    Dependency,
    ResolvedVersion,
    RunStatistics,
    Status,
)
from .registry_resolver import MavenCentralResolver, Resolver, create_resolver

__all__ = [
    "CheckOutcome",
    "CheckReport",
    "CheckerSettings",
    "Dependency",
    "DependencyChecker",
    "IvyDatedError",
    "IvyManifestParser",
    "ManifestError",
    "ManifestFormatError",
    "ManifestParser",
    "ManifestReadError",
    "MavenCentralResolver",
    "RegistryDecodeError",
    "RegistryError",
    "RegistryNetworkError",
    "ResolvedVersion",
    "Resolver",
    "RunStatistics",
    "Status",
    "check_manifest",
    "classify",
    "create_resolver",
    "fixed_delay",
    "get_checker_settings",
    "get_config",
    "no_delay",
    "parse_manifest",
    "print_info",
    "sort_dependencies",
    "write_report_json",
]
