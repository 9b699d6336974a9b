"""Client for the RSSHub catalog API.

Bulk listings (``/api/namespace`` and ``/api/radar/rules``) are large and asked
for often, so they are kept in a per-client TTL cache.  Targeted lookups
(one namespace, one domain, one category) always go to the server.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from rsshub_mcp.main.tools.cache import NAMESPACES_KEY, RADAR_RULES_KEY, TTLCache
from rsshub_mcp.main.tools.errors import DeserializationError
from rsshub_mcp.main.tools.fetcher import (
    DEFAULT_HOST,
    DEFAULT_RETRIES,
    DEFAULT_RETRY_BACKOFF_MS,
    DEFAULT_TIMEOUT,
    HttpFetcher,
)
from rsshub_mcp.main.tools.models import (
    NAMESPACE_CATALOG,
    RADAR_RULE_CATALOG,
    CategoryCatalog,
    NamespaceCatalog,
    RadarRuleCatalog,
    RadarRuleSet,
    RoutesMap,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACES_TTL_SECS = 300
DEFAULT_RADAR_RULES_TTL_SECS = 600


def _decode(adapter: Any, payload: Any, endpoint: str) -> Any:
    """Validate *payload* with a model class or ``TypeAdapter``."""
    try:
        if isinstance(adapter, TypeAdapter):
            return adapter.validate_python(payload)
        return adapter.model_validate(payload)
    except ValidationError as exc:
        raise DeserializationError(
            f"Unexpected response shape from {endpoint}: {exc}"
        ) from exc


class CatalogClient:
    """Read-only access to namespaces, radar rules and categories."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        retry_backoff_ms: int = DEFAULT_RETRY_BACKOFF_MS,
        namespaces_ttl_secs: float = DEFAULT_NAMESPACES_TTL_SECS,
        radar_rules_ttl_secs: float = DEFAULT_RADAR_RULES_TTL_SECS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http: Optional[HttpFetcher] = None,
        cache: Optional[TTLCache] = None,
    ):
        self.http = http or HttpFetcher(
            host,
            timeout=timeout,
            retries=retries,
            retry_backoff_ms=retry_backoff_ms,
            transport=transport,
        )
        self.namespaces_ttl_secs = namespaces_ttl_secs
        self.radar_rules_ttl_secs = radar_rules_ttl_secs
        self._cache = cache or TTLCache()

    @property
    def host(self) -> str:
        return self.http.host

    async def _cached_fetch(self, key: str, ttl_secs: float, endpoint: str, adapter: Any) -> Any:
        cached = self._cache.get(key, ttl_secs)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return _decode(adapter, cached, endpoint)

        payload = await self.http.get_json(endpoint)
        value = _decode(adapter, payload, endpoint)
        # Only a payload that validated is cached.
        self._cache.put(key, payload)
        logger.info("Fetched and cached %s", key)
        return value

    async def get_all_namespaces(self) -> NamespaceCatalog:
        return await self._cached_fetch(
            NAMESPACES_KEY, self.namespaces_ttl_secs, "/api/namespace", NAMESPACE_CATALOG
        )

    async def get_namespace(self, name: str) -> RoutesMap:
        endpoint = f"/api/namespace/{quote(name, safe='')}"
        return _decode(RoutesMap, await self.http.get_json(endpoint), endpoint)

    async def get_all_radar_rules(self) -> RadarRuleCatalog:
        return await self._cached_fetch(
            RADAR_RULES_KEY, self.radar_rules_ttl_secs, "/api/radar/rules", RADAR_RULE_CATALOG
        )

    async def get_radar_rule(self, domain: str) -> RadarRuleSet:
        endpoint = f"/api/radar/rules/{quote(domain, safe='')}"
        return _decode(RadarRuleSet, await self.http.get_json(endpoint), endpoint)

    async def get_category(self, name: str) -> CategoryCatalog:
        endpoint = f"/api/category/{quote(name, safe='')}"
        return _decode(CategoryCatalog, await self.http.get_json(endpoint), endpoint)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
