"""Shared wiring for rsshub-mcp.

Both the FastMCP tool server (``rsshub_mcp/server.py``) and the FastAPI HTTP
mirror (``rsshub_mcp/app_server.py``) forward calls to one ``ToolDispatcher``.
This module builds it from ``Settings`` and keeps a single process-wide
instance so both surfaces share the catalog cache.
"""

from __future__ import annotations

import logging
from typing import Optional

from rsshub_mcp.main.config import Settings
from rsshub_mcp.main.tools.catalog_client import CatalogClient
from rsshub_mcp.main.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

_dispatcher: ToolDispatcher | None = None


def build_dispatcher(settings: Optional[Settings] = None) -> ToolDispatcher:
    """Create a dispatcher backed by a fresh ``CatalogClient`` for *settings*."""
    settings = settings or Settings.from_env()
    client = CatalogClient(
        settings.host,
        timeout=settings.timeout,
        retries=settings.retries,
        retry_backoff_ms=settings.retry_backoff_ms,
        namespaces_ttl_secs=settings.namespaces_ttl_secs,
        radar_rules_ttl_secs=settings.radar_rules_ttl_secs,
    )
    logger.info("Using RSSHub instance at %s", client.host)
    return ToolDispatcher(client)


def get_dispatcher(settings: Optional[Settings] = None) -> ToolDispatcher:
    """Get or create the shared dispatcher; *settings* only apply on first use."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = build_dispatcher(settings)
    return _dispatcher
