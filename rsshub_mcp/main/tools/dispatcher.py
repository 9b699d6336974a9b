"""Routes tool calls to the RSSHub client, feed fetcher and search engine.

``handle_tool_call`` never raises for a bad call.  Unknown tools and invalid
arguments produce error envelopes carrying the matching JSON-RPC code; any
failure inside a component becomes an envelope whose text is
``"Error: <message>"`` with ``is_error`` set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from rsshub_mcp.main.tools import rendering
from rsshub_mcp.main.tools.catalog_client import CatalogClient
from rsshub_mcp.main.tools.errors import (
    InvalidParamsError,
    RSSHubError,
    ToolCallError,
    ToolNotFoundError,
)
from rsshub_mcp.main.tools.feed_fetcher import FeedFetcher
from rsshub_mcp.main.tools.registry import (
    KNOWN_CATEGORIES,
    TOOLS_BY_NAME,
    ToolSpec,
    list_tools,
)
from rsshub_mcp.main.tools.route_search import (
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_SUGGEST_LIMIT,
    RouteSearchEngine,
)

logger = logging.getLogger(__name__)

_JSON_TYPES = {
    "string": (str,),
    "integer": (int,),
    "boolean": (bool,),
    "object": (dict,),
}


@dataclass
class ToolResponse:
    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False
    error_code: Optional[int] = None

    @classmethod
    def text(cls, text: str) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": text}])

    @classmethod
    def error(cls, message: str, code: Optional[int] = None) -> "ToolResponse":
        return cls(
            content=[{"type": "text", "text": f"Error: {message}"}],
            is_error=True,
            error_code=code,
        )

    @property
    def first_text(self) -> str:
        return self.content[0]["text"] if self.content else ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"content": self.content, "isError": self.is_error}
        if self.error_code is not None:
            data["errorCode"] = self.error_code
        return data


def validate_arguments(spec: ToolSpec, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Check *arguments* against the tool's schema and return a clean copy.

    Keys the schema does not declare are dropped; ``None`` counts as absent.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidParamsError("arguments must be an object")

    for name in spec.required:
        if arguments.get(name) is None:
            raise InvalidParamsError(f"{name} parameter is required")

    cleaned: Dict[str, Any] = {}
    for name, schema in spec.properties.items():
        value = arguments.get(name)
        if value is None:
            continue
        expected = _JSON_TYPES.get(schema.get("type"), (object,))
        # bool is an int subclass, but JSON true is not an integer.
        if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
            raise InvalidParamsError(f"{name} parameter must be of type {schema.get('type')}")
        if "enum" in schema and value not in schema["enum"]:
            allowed = ", ".join(repr(option) for option in schema["enum"])
            raise InvalidParamsError(f"{name} parameter must be one of {allowed}")
        if "minimum" in schema and value < schema["minimum"]:
            raise InvalidParamsError(f"{name} parameter must be >= {schema['minimum']}")
        cleaned[name] = value
    return cleaned


class ToolDispatcher:
    """Stateless front door for tool calls; the only shared state is the client cache."""

    def __init__(
        self,
        client: CatalogClient,
        feeds: Optional[FeedFetcher] = None,
        search: Optional[RouteSearchEngine] = None,
    ):
        self.client = client
        self.feeds = feeds or FeedFetcher(client.http)
        self.search = search or RouteSearchEngine(client)
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[str]]] = {
            "get_all_namespaces": self._get_all_namespaces,
            "get_namespace": self._get_namespace,
            "get_radar_rules": self._get_radar_rules,
            "get_radar_rule": self._get_radar_rule,
            "get_categories": self._get_categories,
            "get_category": self._get_category,
            "get_feed": self._get_feed,
            "search_namespaces": self._search_namespaces,
            "search_routes": self._search_routes,
            "suggest_route_keys": self._suggest_route_keys,
        }

    @staticmethod
    def list_tools() -> List[Dict[str, Any]]:
        return list_tools()

    async def handle_tool_call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        logger.info("Calling tool: %s with args: %s", name, arguments)
        try:
            spec = TOOLS_BY_NAME.get(name)
            handler = self._handlers.get(name)
            if spec is None or handler is None:
                raise ToolNotFoundError(f"Unknown tool: {name}")
            args = validate_arguments(spec, arguments)
            text = await handler(args)
        except ToolCallError as exc:
            logger.warning("Rejected call to %s: %s", name, exc)
            return ToolResponse.error(str(exc), code=exc.code)
        except RSSHubError as exc:
            logger.error("Tool %s failed: %s", name, exc)
            return ToolResponse.error(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error in tool %s", name)
            return ToolResponse.error(str(exc) or exc.__class__.__name__)
        return ToolResponse.text(text)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    @staticmethod
    def _render(value: Any, args: Dict[str, Any]) -> str:
        if args.get("format") == "json":
            return rendering.render_json(value)
        return rendering.render_debug(value)

    async def _get_all_namespaces(self, args: Dict[str, Any]) -> str:
        return self._render(await self.client.get_all_namespaces(), args)

    async def _get_namespace(self, args: Dict[str, Any]) -> str:
        return self._render(await self.client.get_namespace(args["namespace"]), args)

    async def _get_radar_rules(self, args: Dict[str, Any]) -> str:
        return self._render(await self.client.get_all_radar_rules(), args)

    async def _get_radar_rule(self, args: Dict[str, Any]) -> str:
        return self._render(await self.client.get_radar_rule(args["domain"]), args)

    async def _get_categories(self, args: Dict[str, Any]) -> str:
        if args.get("format") == "json":
            return rendering.render_json({"categories": list(KNOWN_CATEGORIES)})
        return (
            "Available categories: " + ", ".join(KNOWN_CATEGORIES)
            + "\n\nUse 'get_category' tool with a specific category name to get feeds for that category."
        )

    async def _get_category(self, args: Dict[str, Any]) -> str:
        return self._render(await self.client.get_category(args["category"]), args)

    async def _get_feed(self, args: Dict[str, Any]) -> str:
        feed = await self.feeds.get_feed(args["path"])
        if args.get("format") == "json":
            return rendering.render_json(feed)
        return rendering.render_feed_text(feed)

    async def _search_namespaces(self, args: Dict[str, Any]) -> str:
        result = await self.search.search_namespaces(args.get("query"))
        if args.get("format") == "json":
            return rendering.render_json(result)
        return rendering.render_namespace_search_text(result)

    async def _search_routes(self, args: Dict[str, Any]) -> str:
        hits = await self.search.search_routes(
            args["query"],
            namespace=args.get("namespace"),
            limit=args.get("limit", DEFAULT_SEARCH_LIMIT),
        )
        if args.get("format") == "json":
            return rendering.render_json(hits)
        return rendering.render_route_hits_text(hits, args["query"], args.get("namespace"))

    async def _suggest_route_keys(self, args: Dict[str, Any]) -> str:
        keys = await self.search.suggest_route_keys(
            args["namespace"], args["partial"], limit=args.get("limit", DEFAULT_SUGGEST_LIMIT)
        )
        if args.get("format") == "json":
            return rendering.render_json(
                {"namespace": args["namespace"], "partial": args["partial"], "suggestions": keys}
            )
        return rendering.render_suggestions_text(args["namespace"], args["partial"], keys)
