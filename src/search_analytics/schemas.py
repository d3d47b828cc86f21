"""Request and response models for the search analytics API.

Attributes are snake_case; the wire format is camelCase. Unknown fields sent by
the server are ignored.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Enums
# =============================================================================


class SearchType(str, Enum):
    """Kinds of search the service records."""

    GENERAL = "general"
    PRODUCT = "product"
    CATEGORY = "category"
    BRAND = "brand"
    MATERIAL = "material"


class TipType(str, Enum):
    """Kinds of advisory tips."""

    EXPLORATION = "exploration"
    CATEGORY = "category"
    SUSTAINABILITY = "sustainability"
    MATERIALS = "materials"


# =============================================================================
# Events
# =============================================================================


class SearchFilters(WireModel):
    """Filters applied to a search. Materials and brands behave as sets."""

    sustainability_grade: str | None = None
    price_range: Any = None
    materials: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)

    @field_validator("materials", "brands", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("materials", "brands")
    @classmethod
    def drop_duplicates(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class SearchEvent(WireModel):
    """A search to be tracked."""

    search_query: str
    search_type: SearchType = SearchType.GENERAL
    category: str | None = None
    filters: SearchFilters = Field(default_factory=SearchFilters)
    results_count: int = Field(0, ge=0)


class ClickEvent(WireModel):
    """A product click on the results of a tracked search."""

    search_id: str
    product_id: str
    time_spent: int = Field(0, ge=0, description="Milliseconds spent on the product")


# =============================================================================
# Patterns and insights
# =============================================================================


def _ranked_entry(data: Any, name_key: str) -> Any:
    """Coerce a ranked list item; names or counts of the wrong type become empty."""
    if isinstance(data, str):
        return {name_key: data, "count": 0}
    if isinstance(data, BaseModel):
        return data
    if not isinstance(data, dict):
        return {}
    name = data.get(name_key)
    count = data.get("count")
    return {
        name_key: name if isinstance(name, str) else None,
        "count": count if isinstance(count, int) and not isinstance(count, bool) else 0,
    }


class MaterialCount(WireModel):
    """A ranked material. Items the server sends in another shape keep their rank with no name."""

    material: str | None = None
    count: int = 0

    @model_validator(mode="before")
    @classmethod
    def from_any(cls, data: Any) -> Any:
        return _ranked_entry(data, "material")


class BrandCount(WireModel):
    brand: str | None = None
    count: int = 0

    @model_validator(mode="before")
    @classmethod
    def from_any(cls, data: Any) -> Any:
        return _ranked_entry(data, "brand")


class SearchPattern(WireModel):
    """Server-aggregated summary of a user's searches over a lookback window."""

    total_searches: int = 0
    category_frequency: dict[str, int] = Field(default_factory=dict)
    search_type_frequency: dict[str, int] = Field(default_factory=dict)
    sustainability_grade_frequency: dict[str, int] = Field(default_factory=dict)
    top_materials: list[MaterialCount] = Field(default_factory=list)
    top_brands: list[BrandCount] = Field(default_factory=list)
    all_materials: list[Any] = Field(default_factory=list)
    all_brands: list[Any] = Field(default_factory=list)
    recent_searches: list[Any] = Field(default_factory=list)
    analysis_period: str | None = None

    @field_validator(
        "category_frequency",
        "search_type_frequency",
        "sustainability_grade_frequency",
        mode="before",
    )
    @classmethod
    def null_map_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator(
        "top_materials", "top_brands", "all_materials", "all_brands", "recent_searches", mode="before"
    )
    @classmethod
    def null_list_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class DashboardInsights(WireModel):
    """Headline numbers for the analytics dashboard."""

    total_searches: int = 0
    most_searched_category: tuple[str, int] | None = None
    preferred_sustainability_grade: tuple[str, int] | None = None
    search_frequency: float = 0
    diversity_score: int = 0
    recent_activity: list[dict[str, Any]] = Field(default_factory=list)


class Suggestion(WireModel):
    """An autocomplete suggestion from the user's history or trending searches."""

    query: str
    category: str | None = None
    type: str | None = None
    timestamp: str | None = None
    popularity: int | None = None


# =============================================================================
# Endpoint responses
# =============================================================================


class Ack(WireModel):
    """Acknowledgement for write operations."""

    success: bool = True
    message: str | None = None
    deleted_count: int | None = None


class TrackSearchResponse(WireModel):
    success: bool = True
    message: str | None = None
    search_id: str


class PatternsResponse(WireModel):
    success: bool = True
    patterns: SearchPattern


class RecommendationsResponse(WireModel):
    success: bool = True
    recommendations: list[dict[str, Any]]
    source: str | None = None
    confidence_score: int | None = None
    message: str | None = None
    patterns: dict[str, Any] | None = None


class DashboardResponse(WireModel):
    success: bool = True
    insights: DashboardInsights
    trending_searches: list[dict[str, Any]] = Field(default_factory=list)
    patterns: dict[str, Any] | None = None
    analysis_period: str | None = None


class SuggestionsResponse(WireModel):
    success: bool = True
    suggestions: list[Suggestion]


# =============================================================================
# Client-side results
# =============================================================================


class TrackedSearch(WireModel):
    """Result of tracking a search and fetching suggestions for it."""

    search_id: str
    suggestions: list[Suggestion]
    session_id: str


class SearchInsights(WireModel):
    """Patterns and dashboard insights fetched together."""

    patterns: SearchPattern = Field(default_factory=SearchPattern)
    insights: DashboardInsights = Field(default_factory=DashboardInsights)
    trending_searches: list[dict[str, Any]] = Field(default_factory=list)


class Tip(WireModel):
    """Short advisory message derived from search patterns."""

    type: TipType
    message: str
    icon: str


class BehaviorInsights(WireModel):
    """Search insights with the derived behavior score and tips."""

    behavior_score: int = Field(..., ge=0, le=100)
    score_label: str
    tips: list[Tip]
    patterns: SearchPattern
    insights: DashboardInsights
    trending_searches: list[dict[str, Any]] = Field(default_factory=list)
