"""Parser for Ivy dependency manifests (``ivy.xml``).

Purpose
-------
Read an Ivy module descriptor and turn its ``<dependencies>`` container
into an ordered list of :class:`~ivy_dated.models.Dependency` values.

Contents
--------
* :func:`parse_manifest` - Parse a manifest file into dependencies
* :class:`ManifestParser` - Protocol for swappable parsers
* :class:`IvyManifestParser` - Default parser built on ElementTree

System Role
-----------
The first stage of a check. A manifest that cannot be read or does not
match the expected structure aborts the run before any registry call.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from .errors import ManifestFormatError, ManifestReadError
from .models import Dependency
from .schemas import IvyDependencySchema

logger = logging.getLogger(__name__)

_DEPENDENCIES_TAG = "dependencies"
_DEPENDENCY_TAG = "dependency"


class ManifestParser(Protocol):
    """Turns a manifest file into dependencies."""

    def parse(self, path: Path | str) -> list[Dependency]: ...


def _local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    return tag.rsplit("}", 1)[-1]


def _read_manifest(path: Path) -> bytes:
    """Read the raw manifest bytes, mapping OS failures to ManifestReadError."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ManifestReadError(f"cannot read manifest {path}: {exc}") from exc


def _find_dependencies(root: ET.Element, path: Path) -> ET.Element:
    """Return the ``<dependencies>`` container of the module descriptor."""
    for child in root:
        if _local_name(child.tag) == _DEPENDENCIES_TAG:
            return child
    raise ManifestFormatError(f"{path}: <{_local_name(root.tag)}> has no <dependencies> element")


def _to_dependency(element: ET.Element, index: int, path: Path) -> Dependency:
    """Validate one ``<dependency>`` element and convert it to a Dependency."""
    try:
        record = IvyDependencySchema.model_validate(dict(element.attrib))
    except ValidationError as exc:
        missing = sorted(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        detail = f"missing or invalid attribute(s): {', '.join(missing)}" if missing else str(exc)
        raise ManifestFormatError(f"{path}: dependency #{index + 1}: {detail}") from exc
    return Dependency(
        organization=record.org,
        revision=record.rev,
        artifact=record.name,
        module=record.module,
    )


def parse_manifest(path: Path | str) -> list[Dependency]:
    """Parse an Ivy manifest into dependencies, in document order.

    Args:
        path: Path to the manifest file.

    Returns:
        One Dependency per ``<dependency>`` element. An empty
        ``<dependencies>`` container yields an empty list.

    Raises:
        ManifestReadError: If the file cannot be read.
        ManifestFormatError: If the content is not well-formed XML, has no
            ``<dependencies>`` element, or a dependency lacks ``org``/``rev``.

    Example:
        >>> deps = parse_manifest("ivy.xml")  # doctest: +SKIP
        >>> deps[0].display_name  # doctest: +SKIP
        'org.slf4j/slf4j-api'
    """
    path = Path(path)
    content = _read_manifest(path)

    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise ManifestFormatError(f"{path}: malformed XML: {exc}") from exc

    container = _find_dependencies(root, path)
    entries = [child for child in container if _local_name(child.tag) == _DEPENDENCY_TAG]
    dependencies = [_to_dependency(element, index, path) for index, element in enumerate(entries)]

    logger.info("Parsed %d dependencies from %s", len(dependencies), path)
    return dependencies


class IvyManifestParser:
    """Default :class:`ManifestParser` for Ivy module descriptors."""

    def parse(self, path: Path | str) -> list[Dependency]:
        """Parse the manifest at ``path``; see :func:`parse_manifest`."""
        return parse_manifest(path)


__all__ = [
    "IvyManifestParser",
    "ManifestParser",
    "parse_manifest",
]
