"""FastMCP server exposing the RSSHub catalog as tools.

Available tools:
* ``get_all_namespaces`` / ``get_namespace`` – browse route namespaces.
* ``get_radar_rules`` / ``get_radar_rule`` – radar rules for feed auto-discovery.
* ``get_categories`` / ``get_category`` – topical categories.
* ``get_feed`` – fetch and parse the feed behind a route path.
* ``search_namespaces`` / ``search_routes`` / ``suggest_route_keys`` – search helpers.

Every tool forwards to the shared ``ToolDispatcher``; error envelopes are
re-raised as ``ToolError`` so the MCP client sees ``isError``.
"""

import logging
from typing import Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from rsshub_mcp.main.config import Settings
from rsshub_mcp.main.log import init_log
from rsshub_mcp.main.tools.registry import TOOLS_BY_NAME
from rsshub_mcp.service import get_dispatcher

logger = logging.getLogger(__name__)

Format = Literal["text", "json"]

mcp = FastMCP("rsshub-mcp")


def _describe(name: str) -> str:
    return TOOLS_BY_NAME[name].description


async def _call(name: str, **arguments) -> str:
    cleaned = {key: value for key, value in arguments.items() if value is not None}
    response = await get_dispatcher().handle_tool_call(name, cleaned)
    if response.is_error:
        raise ToolError(response.first_text)
    return response.first_text


@mcp.tool(description=_describe("get_all_namespaces"))
async def get_all_namespaces(format: Format = "text") -> str:
    return await _call("get_all_namespaces", format=format)


@mcp.tool(description=_describe("get_namespace"))
async def get_namespace(namespace: str, format: Format = "text") -> str:
    return await _call("get_namespace", namespace=namespace, format=format)


@mcp.tool(description=_describe("get_radar_rules"))
async def get_radar_rules(format: Format = "text") -> str:
    return await _call("get_radar_rules", format=format)


@mcp.tool(description=_describe("get_radar_rule"))
async def get_radar_rule(domain: str, format: Format = "text") -> str:
    return await _call("get_radar_rule", domain=domain, format=format)


@mcp.tool(description=_describe("get_categories"))
async def get_categories(format: Format = "text") -> str:
    return await _call("get_categories", format=format)


@mcp.tool(description=_describe("get_category"))
async def get_category(category: str, format: Format = "text") -> str:
    return await _call("get_category", category=category, format=format)


@mcp.tool(description=_describe("get_feed"))
async def get_feed(path: str, format: Format = "text") -> str:
    return await _call("get_feed", path=path, format=format)


@mcp.tool(description=_describe("search_namespaces"))
async def search_namespaces(query: Optional[str] = None, format: Format = "text") -> str:
    return await _call("search_namespaces", query=query, format=format)


@mcp.tool(description=_describe("search_routes"))
async def search_routes(
    query: str,
    namespace: Optional[str] = None,
    limit: int = 20,
    format: Format = "text",
) -> str:
    return await _call(
        "search_routes", query=query, namespace=namespace, limit=limit, format=format
    )


@mcp.tool(description=_describe("suggest_route_keys"))
async def suggest_route_keys(
    namespace: str, partial: str, limit: int = 10, format: Format = "text"
) -> str:
    return await _call(
        "suggest_route_keys", namespace=namespace, partial=partial, limit=limit, format=format
    )


def main() -> None:
    """Entry point – start the FastMCP server on the configured transport."""
    init_log("info")
    settings = Settings.from_env()
    logger.info("%s", settings)
    get_dispatcher(settings)
    if settings.transport == "http":
        logger.info(
            "Starting RSSHub MCP server at %s:%d", settings.server_host, settings.server_port
        )
        mcp.run(transport="http", host=settings.server_host, port=settings.server_port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
