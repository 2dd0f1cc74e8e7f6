"""Error hierarchy for manifest parsing and registry resolution.

Every error here is fatal to a run: the CLI prints the message and exits
non-zero. "No matching version" is not an error; resolvers return ``None``.
"""

from __future__ import annotations


class IvyDatedError(Exception):
    """Base class for all errors raised by ivy_dated."""


class ManifestError(IvyDatedError):
    """The dependency manifest could not be turned into dependencies."""


class ManifestReadError(ManifestError):
    """The manifest file is missing, unreadable or not a regular file."""


class ManifestFormatError(ManifestError):
    """The manifest content does not match the expected Ivy structure."""


class RegistryError(IvyDatedError):
    """A registry lookup failed."""


class RegistryNetworkError(RegistryError):
    """Transport failure or non-success HTTP status from the registry."""


class RegistryDecodeError(RegistryError):
    """The registry response body does not match the expected JSON schema."""


__all__ = [
    "IvyDatedError",
    "ManifestError",
    "ManifestFormatError",
    "ManifestReadError",
    "RegistryDecodeError",
    "RegistryError",
    "RegistryNetworkError",
]
