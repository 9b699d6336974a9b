"""Text and JSON renderings of tool results."""

from __future__ import annotations

import json
import pprint
from typing import Any, List, Optional

from pydantic import BaseModel

from rsshub_mcp.main.tools.feed_fetcher import clean_html
from rsshub_mcp.main.tools.models import FeedDocument
from rsshub_mcp.main.tools.route_search import NamespaceSearchResult, RouteHit

FEED_PREVIEW_ITEMS = 5


def to_jsonable(value: Any) -> Any:
    """Convert models, dataclass results and containers of them to plain JSON data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def render_json(value: Any) -> str:
    return json.dumps(to_jsonable(value), indent=2, ensure_ascii=False)


def render_debug(value: Any) -> str:
    """Pretty-printed structure, meant for humans skimming large listings."""
    return pprint.pformat(to_jsonable(value), width=100, sort_dicts=False)


def render_feed_text(feed: FeedDocument, max_items: int = FEED_PREVIEW_ITEMS) -> str:
    lines = [f"Title: {feed.title}"]
    description = clean_html(feed.description) if feed.description else ""
    if description:
        lines.append(f"Description: {description}")
    lines.append(f"Items: {len(feed.items)}")
    for index, item in enumerate(feed.items[:max_items], start=1):
        lines.append(f"  {index}. {item.title or '(untitled)'}")
    if len(feed.items) > max_items:
        lines.append(f"  ... and {len(feed.items) - max_items} more")
    if feed.raw_content is not None:
        lines.append(
            f"Raw content available ({len(feed.raw_content)} characters); "
            "request format 'json' to include it."
        )
    return "\n".join(lines)


def render_namespace_search_text(result: NamespaceSearchResult) -> str:
    if result.query is None:
        return f"Available namespaces ({result.count}):\n" + ", ".join(result.matches)
    if not result.matches:
        return (
            f"No namespaces match '{result.query}' (0 matches).\n"
            f"Available namespaces ({len(result.available)}):\n"
            + ", ".join(result.available)
        )
    return (
        f"Found {result.count} namespace(s) matching '{result.query}':\n"
        + "\n".join(f"- {name}" for name in result.matches)
    )


def render_route_hits_text(hits: List[RouteHit], query: str, namespace: Optional[str] = None) -> str:
    scope = f" in namespace '{namespace}'" if namespace else ""
    if not hits:
        return f"No routes match '{query}'{scope}."
    lines = [f"Found {len(hits)} route(s) matching '{query}'{scope}:"]
    for index, hit in enumerate(hits, start=1):
        lines.append(f"{index}. [{hit.namespace}] {hit.route_key} - {hit.name}")
        if hit.description:
            lines.append(f"   - Description: {clean_html(hit.description)}")
        if hit.example:
            lines.append(f"   - Example: {hit.example}")
    return "\n".join(lines)


def render_suggestions_text(namespace: str, partial: str, keys: List[str]) -> str:
    if not keys:
        return f"Namespace '{namespace}' has no routes."
    lines = [f"Route keys in '{namespace}' closest to '{partial}':"]
    lines.extend(f"{index}. {key}" for index, key in enumerate(keys, start=1))
    return "\n".join(lines)
