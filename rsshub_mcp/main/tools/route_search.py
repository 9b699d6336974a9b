"""Substring search and key ranking over the RSSHub namespace catalog.

All lookups go through ``CatalogClient.get_all_namespaces`` and therefore share
its TTL cache.  Namespaces and routes are visited in the order the server
listed them, which ``dict`` preserves, so results are deterministic for a given
catalog payload.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from rsshub_mcp.main.tools.catalog_client import CatalogClient
from rsshub_mcp.main.tools.errors import UnknownNamespaceError
from rsshub_mcp.main.tools.models import NamespaceCatalog, RouteDetails

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_SUGGEST_LIMIT = 10


@dataclass
class NamespaceSearchResult:
    query: Optional[str]
    matches: List[str]
    # Only filled when a query matched nothing, to help the caller pick again.
    available: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict:
        data = {"query": self.query, "count": self.count, "namespaces": self.matches}
        if self.available:
            data["available"] = self.available
        return data


@dataclass
class RouteHit:
    namespace: str
    route_key: str
    name: str
    description: Optional[str] = None
    example: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def route_matches(query: str, route_key: str, route: RouteDetails) -> bool:
    """Case-insensitive substring test against key, name, description or example."""
    needle = query.lower()
    haystacks = (route_key, route.name, route.description, route.example)
    return any(text and needle in text.lower() for text in haystacks)


def rank_key(key: str, partial: str) -> Tuple[int, int, int]:
    return (
        0 if partial in key else 1,
        0 if key.startswith(partial) else 1,
        abs(len(key) - len(partial)),
    )


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError("limit must be a positive integer")


class RouteSearchEngine:
    def __init__(self, client: CatalogClient):
        self.client = client

    async def search_namespaces(self, query: Optional[str] = None) -> NamespaceSearchResult:
        catalog = await self.client.get_all_namespaces()
        keys = list(catalog)
        if not query:
            return NamespaceSearchResult(query=None, matches=keys)

        needle = query.lower()
        matches = [key for key in keys if needle in key.lower()]
        if not matches:
            return NamespaceSearchResult(query=query, matches=[], available=keys)
        return NamespaceSearchResult(query=query, matches=matches)

    async def search_routes(
        self,
        query: str,
        namespace: Optional[str] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> List[RouteHit]:
        """Return up to *limit* routes whose key, name, description or example contain *query*."""
        _check_limit(limit)
        catalog = await self.client.get_all_namespaces()
        hits: List[RouteHit] = []
        for ns, route_key, route in self._iter_routes(catalog, namespace):
            if not route_matches(query, route_key, route):
                continue
            hits.append(
                RouteHit(
                    namespace=ns,
                    route_key=route_key,
                    name=route.name,
                    description=route.description,
                    example=route.example,
                )
            )
            if len(hits) >= limit:
                break
        logger.debug("search_routes(%r, namespace=%r) -> %d hits", query, namespace, len(hits))
        return hits

    async def suggest_route_keys(
        self, namespace: str, partial: str, limit: int = DEFAULT_SUGGEST_LIMIT
    ) -> List[str]:
        """Rank the namespace's route keys by closeness to *partial*.

        Keys containing *partial* come first, then among those the ones starting
        with it, then by length difference.  This is a cheap proximity sort, not
        an edit distance.
        """
        _check_limit(limit)
        catalog = await self.client.get_all_namespaces()
        keys = [route_key for _, route_key, _ in self._iter_routes(catalog, namespace)]
        keys.sort(key=lambda key: rank_key(key, partial))
        return keys[:limit]

    @staticmethod
    def _iter_routes(
        catalog: NamespaceCatalog, namespace: Optional[str]
    ) -> Iterator[Tuple[str, str, RouteDetails]]:
        if namespace is not None:
            if namespace not in catalog:
                raise UnknownNamespaceError(namespace)
            selected = [(namespace, catalog[namespace])]
        else:
            selected = list(catalog.items())
        for ns, routes_map in selected:
            for route_key, route in (routes_map.routes or {}).items():
                yield ns, route_key, route
