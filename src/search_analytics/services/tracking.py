"""Search tracking and analytics API facade."""

from collections.abc import Mapping
from typing import Any, TypeVar

import structlog
from pydantic import ValidationError

from search_analytics.exceptions import ServerError
from search_analytics.infrastructure.gateway import RequestGateway
from search_analytics.schemas import (
    Ack,
    ClickEvent,
    DashboardResponse,
    PatternsResponse,
    RecommendationsResponse,
    SearchEvent,
    SearchFilters,
    SearchType,
    SuggestionsResponse,
    TrackedSearch,
    TrackSearchResponse,
    WireModel,
)
from search_analytics.services.session import generate_session_id
from shared.constants import (
    CLEAR_HISTORY_ROUTE,
    CLIENT_IDENTIFIER,
    DASHBOARD_ROUTE,
    DEFAULT_ANALYSIS_DAYS,
    DEFAULT_RECOMMENDATION_LIMIT,
    DEFAULT_SUGGESTION_LIMIT,
    MIN_SUGGESTION_QUERY_LENGTH,
    PATTERNS_ROUTE,
    RECOMMENDATIONS_ROUTE,
    SUGGESTIONS_ROUTE,
    TRACK_CLICK_ROUTE,
    TRACK_SEARCH_ROUTE,
)

logger = structlog.get_logger()

ResponseT = TypeVar("ResponseT", bound=WireModel)


class TrackingAPI:
    """Typed operations on the search analytics service.

    One session id is generated per instance and attached to every tracked
    search. Errors from the gateway are passed through unchanged.
    """

    def __init__(
        self,
        gateway: RequestGateway,
        session_id: str | None = None,
        client_identifier: str = CLIENT_IDENTIFIER,
    ):
        self.gateway = gateway
        self._session_id = session_id or generate_session_id()
        self.client_identifier = client_identifier

    @property
    def session_id(self) -> str:
        return self._session_id

    async def track_search(self, event: SearchEvent) -> TrackSearchResponse:
        """Record a search. Sent once, never retried."""
        payload = event.to_wire()
        if payload["category"] is None:
            del payload["category"]
        payload = {
            **payload,
            "sessionId": self.session_id,
            "userAgent": self.client_identifier,
        }
        data = await self.gateway.call(TRACK_SEARCH_ROUTE, method="POST", body=payload)
        response = _parse(TrackSearchResponse, data, TRACK_SEARCH_ROUTE)
        logger.debug("Search tracked", search_id=response.search_id, session_id=self.session_id)
        return response

    async def track_click(self, search_id: str, product_id: str, time_spent: int = 0) -> Ack:
        """Record a product click from the results of a tracked search."""
        event = ClickEvent(search_id=search_id, product_id=product_id, time_spent=time_spent)
        data = await self.gateway.call(TRACK_CLICK_ROUTE, method="POST", body=event.to_wire())
        return _parse(Ack, data, TRACK_CLICK_ROUTE)

    async def get_patterns(self, days: int = DEFAULT_ANALYSIS_DAYS) -> PatternsResponse:
        data = await self.gateway.call(PATTERNS_ROUTE, query={"days": days})
        return _parse(PatternsResponse, data, PATTERNS_ROUTE)

    async def get_recommendations(
        self,
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
        days: int = DEFAULT_ANALYSIS_DAYS,
    ) -> RecommendationsResponse:
        """Personalized recommendations based on search history."""
        data = await self.gateway.call(RECOMMENDATIONS_ROUTE, query={"limit": limit, "days": days})
        return _parse(RecommendationsResponse, data, RECOMMENDATIONS_ROUTE)

    async def get_dashboard(self, days: int = DEFAULT_ANALYSIS_DAYS) -> DashboardResponse:
        data = await self.gateway.call(DASHBOARD_ROUTE, query={"days": days})
        return _parse(DashboardResponse, data, DASHBOARD_ROUTE)

    async def get_suggestions(
        self, query: str | None, limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> SuggestionsResponse:
        """
        Autocomplete suggestions from the user's history and trending searches.

        Queries shorter than two characters (after trimming) return no
        suggestions without contacting the service. The trimmed query is what
        gets sent.
        """
        trimmed = (query or "").strip()
        if len(trimmed) < MIN_SUGGESTION_QUERY_LENGTH:
            return SuggestionsResponse(success=True, suggestions=[])

        data = await self.gateway.call(SUGGESTIONS_ROUTE, query={"query": trimmed, "limit": limit})
        return _parse(SuggestionsResponse, data, SUGGESTIONS_ROUTE)

    async def clear_history(self, days: int | None = None) -> Ack:
        """Delete search history; only the last ``days`` days if given."""
        data = await self.gateway.call(CLEAR_HISTORY_ROUTE, method="DELETE", body={"days": days})
        ack = _parse(Ack, data, CLEAR_HISTORY_ROUTE)
        logger.info("Search history cleared", days=days, deleted_count=ack.deleted_count)
        return ack

    async def track_search_with_suggestions(
        self,
        query: str,
        filters: SearchFilters | Mapping[str, Any] | None = None,
        category: str | None = None,
    ) -> TrackedSearch:
        """
        Track a product search, then fetch suggestions for the same query.

        The tracked event always reports zero results; the count is not known
        yet and is never back-filled. If fetching suggestions fails after the
        search was tracked, the whole call fails.

        Args:
            query: The search text
            filters: Typed filters, or a mapping that may also carry ``category``
            category: Category of the search; takes precedence over ``filters["category"]``
        """
        if filters is None:
            filters = SearchFilters()
        elif not isinstance(filters, SearchFilters):
            category = category or filters.get("category")
            filters = SearchFilters.model_validate(filters)

        tracked = await self.track_search(
            SearchEvent(
                search_query=query,
                search_type=SearchType.PRODUCT,
                category=category,
                filters=filters,
                results_count=0,
            )
        )
        suggestions = await self.get_suggestions(query)

        return TrackedSearch(
            search_id=tracked.search_id,
            suggestions=suggestions.suggestions,
            session_id=self.session_id,
        )


def _parse(model: type[ResponseT], data: Any, route: str) -> ResponseT:
    """Validate a response payload, treating schema mismatches as server errors."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("Malformed response", route=route, errors=e.error_count())
        raise ServerError(
            502,
            f"Malformed response from {route}: {e.error_count()} validation error(s)",
            details={"route": route, "errors": e.errors(include_url=False)},
        ) from e
