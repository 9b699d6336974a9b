"""Pydantic models for the RSSHub catalog API and parsed feeds.

Several fields on the wire are ambiguous on purpose: a route ``path`` may be a
string or a list of strings, ``radar`` may be one item or a list, and so on.
Those fields are declared as untagged unions decoded left to right (single
value first), so the Python type of the decoded value tells which shape the
server sent.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictBool,
    TypeAdapter,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

class ConfigDetail(_WireModel):
    """One entry of a ``requireConfig`` list."""

    name: str
    optional: Optional[bool] = None
    description: Optional[str] = None


class Features(_WireModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    require_config: Optional[Union[StrictBool, List[ConfigDetail]]] = Field(
        default=None, union_mode="left_to_right"
    )
    require_puppeteer: Optional[StrictBool] = None
    anti_crawler: Optional[StrictBool] = None
    support_radar: Optional[StrictBool] = None
    support_bt: Optional[StrictBool] = Field(default=None, alias="supportBT")
    support_podcast: Optional[StrictBool] = None
    support_scihub: Optional[StrictBool] = None


class RadarItem(_WireModel):
    source: Union[str, List[str]] = Field(union_mode="left_to_right")
    target: Optional[str] = None
    title: Optional[str] = None


class RouteDetails(_WireModel):
    path: Union[str, List[str]] = Field(union_mode="left_to_right")
    name: str
    url: Optional[str] = None
    maintainers: List[str]
    example: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    categories: Optional[List[str]] = None
    features: Optional[Features] = None
    radar: Optional[Union[RadarItem, List[RadarItem]]] = Field(
        default=None, union_mode="left_to_right"
    )
    location: Optional[str] = None
    view: Optional[int] = Field(default=None, ge=0)


class RoutesMap(_WireModel):
    routes: Optional[Dict[str, RouteDetails]] = None


NamespaceCatalog = Dict[str, RoutesMap]

# ---------------------------------------------------------------------------
# Radar rules
# ---------------------------------------------------------------------------

class RadarRoute(_WireModel):
    title: str
    docs: str
    source: List[str]
    target: str


class RadarRuleSet(_WireModel):
    """Rules for one domain.

    On the wire the record is flat: ``_name`` plus any number of section keys
    (``"."``, ``"www"``, sub-domains...) each holding a list of rules.  The
    sections are gathered under ``sections`` here and flattened back on dump.
    """

    name: str
    sections: Dict[str, List[RadarRoute]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _split_sections(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "_name" not in data:
            raise ValueError("radar rule set is missing '_name'")
        sections = {key: value for key, value in data.items() if key != "_name"}
        return {"name": data["_name"], "sections": sections}

    @model_serializer(mode="wrap")
    def _flatten_sections(self, handler):
        dumped = handler(self)
        flat = {"_name": dumped["name"]}
        flat.update(dumped.get("sections") or {})
        return flat


RadarRuleCatalog = Dict[str, RadarRuleSet]

# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class ZhTranslation(_WireModel):
    name: Optional[str] = None
    description: Optional[str] = None
    path: Optional[str] = None
    maintainers: Optional[List[str]] = None
    example: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class CategoryInfo(_WireModel):
    name: str
    url: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    lang: Optional[str] = None
    routes: Dict[str, RouteDetails]
    zh: Optional[ZhTranslation] = None


class CategoryCatalog(RootModel[Dict[str, CategoryInfo]]):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Feeds
# ---------------------------------------------------------------------------

class FeedItem(_WireModel):
    title: str = ""
    description: str = ""
    link: str = ""
    pub_date: Optional[str] = None
    author: Optional[str] = None
    categories: List[str] = Field(default_factory=list)


class FeedDocument(_WireModel):
    title: str
    description: str
    items: List[FeedItem] = Field(default_factory=list)
    raw_content: Optional[str] = None


NAMESPACE_CATALOG = TypeAdapter(NamespaceCatalog)
RADAR_RULE_CATALOG = TypeAdapter(RadarRuleCatalog)
