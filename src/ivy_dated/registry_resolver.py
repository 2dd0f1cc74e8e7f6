"""Resolve pinned and latest artifact versions against Maven Central.

Purpose
-------
Query the Maven Central Solr search API for the publish metadata of a
pinned version and of the most recently published version of an artifact.

Contents
--------
* :class:`Resolver` - Protocol with the two lookup operations
* :class:`MavenCentralResolver` - httpx based implementation
* :func:`create_resolver` - Build a resolver from CheckerSettings
* :func:`build_query` - Solr query for group/artifact[/version] filters

System Role
-----------
The only component that talks to the network. Each lookup performs exactly
one GET: no retries, no pagination, no caching. Transport and schema
failures raise; an empty result set returns None.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from types import TracebackType
from typing import Protocol

import httpx
from pydantic import ValidationError

from .config import DEFAULT_SEARCH_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, CheckerSettings
from .errors import RegistryDecodeError, RegistryNetworkError
from .models import ResolvedVersion
from .schemas import SearchDocSchema, SearchResponseSchema

logger = logging.getLogger(__name__)

# The "gav" core lists every version of an artifact, newest first
LATEST_CORE = "gav"


class Resolver(Protocol):
    """Looks up version metadata in a package registry."""

    def pinned_version(self, group: str, artifact: str, version: str) -> ResolvedVersion | None: ...

    def latest_version(self, group: str, artifact: str) -> ResolvedVersion | None: ...


def _phrase(value: str) -> str:
    """Quote a filter value as a Solr phrase."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_query(group: str, artifact: str, version: str | None = None) -> str:
    """Build the Solr ``q`` parameter for an exact group/artifact[/version] match.

    Example:
        >>> build_query("org.slf4j", "slf4j-api", "1.7.30")
        'g:"org.slf4j" AND a:"slf4j-api" AND v:"1.7.30"'
        >>> build_query("org.slf4j", "slf4j-api")
        'g:"org.slf4j" AND a:"slf4j-api"'
    """
    clauses = [f"g:{_phrase(group)}", f"a:{_phrase(artifact)}"]
    if version is not None:
        clauses.append(f"v:{_phrase(version)}")
    return " AND ".join(clauses)


def _doc_to_resolved(doc: SearchDocSchema) -> ResolvedVersion:
    """Normalize a search document, preferring ``v`` over ``latestVersion``."""
    if doc.v is not None:
        version = doc.v
    elif doc.latest_version is not None:
        version = doc.latest_version
    else:
        version = ""
    return ResolvedVersion(
        group=doc.g,
        artifact=doc.a,
        version=version,
        publish_time=datetime.fromtimestamp(doc.timestamp // 1000, tz=timezone.utc),
    )


class MavenCentralResolver:
    """:class:`Resolver` backed by the Maven Central search API.

    Attributes:
        search_url: Search endpoint.
        timeout: Request timeout in seconds, used when the resolver creates
            its own client.
    """

    def __init__(
        self,
        *,
        search_url: str = DEFAULT_SEARCH_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.search_url = search_url
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout, follow_redirects=True)

    def __repr__(self) -> str:
        return f"MavenCentralResolver(search_url={self.search_url!r}, timeout={self.timeout})"

    def __enter__(self) -> MavenCentralResolver:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._owns_client:
            self._client.close()

    def _get_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}

    def pinned_version(self, group: str, artifact: str, version: str) -> ResolvedVersion | None:
        """Return metadata for ``group:artifact:version``, or None if unpublished.

        Raises:
            RegistryNetworkError: On transport failure or non-2xx status.
            RegistryDecodeError: If the body does not match the search schema.
        """
        params = {"q": build_query(group, artifact, version), "wt": "json"}
        return self._first_doc("pinned", params)

    def latest_version(self, group: str, artifact: str) -> ResolvedVersion | None:
        """Return metadata for the most recently published version, or None.

        Raises:
            RegistryNetworkError: On transport failure or non-2xx status.
            RegistryDecodeError: If the body does not match the search schema.
        """
        params = {"q": build_query(group, artifact), "wt": "json", "core": LATEST_CORE}
        return self._first_doc("latest", params)

    def _first_doc(self, label: str, params: dict[str, str]) -> ResolvedVersion | None:
        request = self._client.build_request("GET", self.search_url, params=params, headers=self._get_headers())
        logger.debug("%s %s", label, request.url)
        response = self._send(request)
        result = self._parse_search_response(response)
        if not result.response.docs:
            logger.debug("%s lookup returned no documents", label)
            return None
        doc = result.response.docs[0]
        try:
            return _doc_to_resolved(doc)
        except (OverflowError, OSError, ValueError) as exc:
            raise RegistryDecodeError(
                f"unexpected registry response from {request.url}: timestamp {doc.timestamp} out of range"
            ) from exc

    def _send(self, request: httpx.Request) -> httpx.Response:
        try:
            response = self._client.send(request)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RegistryNetworkError(
                f"registry returned HTTP {exc.response.status_code} for {request.url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RegistryNetworkError(f"registry request {request.url} failed: {exc}") from exc
        return response

    def _parse_search_response(self, response: httpx.Response) -> SearchResponseSchema:
        try:
            return SearchResponseSchema.model_validate_json(response.content)
        except ValidationError as exc:
            raise RegistryDecodeError(
                f"unexpected registry response from {response.request.url}: {exc.error_count()} error(s), "
                f"first: {exc.errors()[0]['msg']}"
            ) from exc


def create_resolver(settings: CheckerSettings) -> MavenCentralResolver:
    """Create a resolver configured from ``settings``."""
    return MavenCentralResolver(
        search_url=settings.search_url,
        timeout=settings.timeout,
        user_agent=settings.user_agent,
    )


__all__ = [
    "LATEST_CORE",
    "MavenCentralResolver",
    "Resolver",
    "build_query",
    "create_resolver",
]
