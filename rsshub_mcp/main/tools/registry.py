"""Static catalog of the tools exposed to MCP clients.

Each ``ToolSpec`` owns its JSON schema, which is also what the dispatcher
validates incoming arguments against: ``required`` names must be present and
every supplied property must have the declared JSON type (and, for ``format``,
one of the enumerated values).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

FORMATS = ("text", "json")

_FORMAT_PROPERTY = {
    "type": "string",
    "enum": list(FORMATS),
    "default": "text",
    "description": "Output format: 'text' (default) or 'json'",
}

# Well-known RSSHub category names; there is no API listing them.
KNOWN_CATEGORIES: Tuple[str, ...] = (
    "blog", "news", "programming", "social-media", "finance", "entertainment",
    "government", "study", "multimedia", "picture", "travel", "shopping", "game",
    "reading", "university", "forecast", "bbs", "live", "anime", "tech",
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Dict[str, Any]

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    @property
    def properties(self) -> Dict[str, Any]:
        return self.input_schema.get("properties", {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def _schema(properties: Dict[str, Any] | None = None, required: List[str] | None = None) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties or {},
        "required": required or [],
    }


def _string(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


TOOLS: Tuple[ToolSpec, ...] = (
    ToolSpec(
        name="get_all_namespaces",
        description="Get all available namespaces in RSSHub",
        input_schema=_schema({"format": _FORMAT_PROPERTY}),
    ),
    ToolSpec(
        name="get_namespace",
        description="Get routes for a specific namespace",
        input_schema=_schema(
            {
                "namespace": _string("The namespace to query (e.g., 'bilibili', 'github')"),
                "format": _FORMAT_PROPERTY,
            },
            ["namespace"],
        ),
    ),
    ToolSpec(
        name="get_radar_rules",
        description="Get all radar rules for automatic feed detection",
        input_schema=_schema({"format": _FORMAT_PROPERTY}),
    ),
    ToolSpec(
        name="get_radar_rule",
        description="Get the radar rules for a specific domain",
        input_schema=_schema(
            {
                "domain": _string("The domain to query (e.g., 'bilibili.com', '81.cn')"),
                "format": _FORMAT_PROPERTY,
            },
            ["domain"],
        ),
    ),
    ToolSpec(
        name="get_categories",
        description="Get all available categories in RSSHub",
        input_schema=_schema({"format": _FORMAT_PROPERTY}),
    ),
    ToolSpec(
        name="get_category",
        description="Get feeds for a specific category",
        input_schema=_schema(
            {
                "category": _string("The category name (e.g., 'tech', 'news', 'programming')"),
                "format": _FORMAT_PROPERTY,
            },
            ["category"],
        ),
    ),
    ToolSpec(
        name="get_feed",
        description="Fetch and parse the feed served at an RSSHub route path",
        input_schema=_schema(
            {
                "path": _string("Route path, e.g. '/bilibili/user/dynamic/2267573'"),
                "format": _FORMAT_PROPERTY,
            },
            ["path"],
        ),
    ),
    ToolSpec(
        name="search_namespaces",
        description="Search namespace names by case-insensitive substring",
        input_schema=_schema(
            {
                "query": _string("Substring to look for; omit to list every namespace"),
                "format": _FORMAT_PROPERTY,
            }
        ),
    ),
    ToolSpec(
        name="search_routes",
        description="Search routes by key, name, description or example",
        input_schema=_schema(
            {
                "query": _string("Case-insensitive substring to search for"),
                "namespace": _string("Restrict the search to one namespace"),
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "default": 20,
                    "description": "Maximum number of results",
                },
                "format": _FORMAT_PROPERTY,
            },
            ["query"],
        ),
    ),
    ToolSpec(
        name="suggest_route_keys",
        description="Suggest route keys in a namespace that are close to a partial key",
        input_schema=_schema(
            {
                "namespace": _string("The namespace whose route keys are ranked"),
                "partial": _string("Partial or misspelled route key"),
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "default": 10,
                    "description": "Maximum number of suggestions",
                },
                "format": _FORMAT_PROPERTY,
            },
            ["namespace", "partial"],
        ),
    ),
)

TOOLS_BY_NAME: Dict[str, ToolSpec] = {tool.name: tool for tool in TOOLS}


def list_tools() -> List[Dict[str, Any]]:
    """Return the tool catalog as plain dictionaries."""
    return [tool.to_dict() for tool in TOOLS]
