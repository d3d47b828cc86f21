"""Pytest configuration and fixtures."""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import orjson
import pytest

from search_analytics.config import Settings
from search_analytics.infrastructure.gateway import RequestGateway
from search_analytics.infrastructure.token_source import StaticTokenSource, TokenSource
from search_analytics.services.insights import InsightsService
from search_analytics.services.tracking import TrackingAPI

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class FakeStorage:
    """In-memory key/value storage that can be told to fail."""

    def __init__(self, items: dict[str, str] | None = None, error: Exception | None = None):
        self.items = items or {}
        self.error = error
        self.reads: list[str] = []

    async def get(self, key: str) -> str | None:
        self.reads.append(key)
        if self.error:
            raise self.error
        return self.items.get(key)


class MockSearchAPI:
    """Canned responses per (method, route), recording every request."""

    def __init__(self, prefix: str = "/api/search"):
        self.prefix = prefix
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        route: str,
        json: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        self.routes[(method, route)] = respond

    def add_handler(self, method: str, route: str, handler: Handler) -> None:
        self.routes[(method, route)] = handler

    def route_of(self, request: httpx.Request) -> str:
        return request.url.path.removeprefix(self.prefix)

    def requests_to(self, route: str) -> list[httpx.Request]:
        return [r for r in self.requests if self.route_of(r) == route]

    def body_of(self, request: httpx.Request) -> Any:
        return orjson.loads(request.content)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, self.route_of(request)))
        if handler is None:
            return httpx.Response(404, json={"error": "Not found"})
        response = handler(request)
        if isinstance(response, httpx.Response):
            return response
        return await response


@pytest.fixture
def test_settings() -> Settings:
    """Get test settings with overrides."""
    return Settings(
        app_env="test",
        debug=True,
        api_base_url="http://test/api/",
        access_token="",
    )


@pytest.fixture
def make_storage() -> type[FakeStorage]:
    return FakeStorage


@pytest.fixture
def mock_api() -> MockSearchAPI:
    return MockSearchAPI()


@pytest.fixture
def http_client(test_settings: Settings, mock_api: MockSearchAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(mock_api),
        base_url=test_settings.search_api_url,
    )


@pytest.fixture
def token_source() -> TokenSource:
    return StaticTokenSource("test-token")


@pytest.fixture
def gateway(http_client: httpx.AsyncClient, token_source: TokenSource) -> RequestGateway:
    return RequestGateway(http_client, token_source)


@pytest.fixture
def tracking(gateway: RequestGateway) -> TrackingAPI:
    return TrackingAPI(gateway)


@pytest.fixture
def insights_service(tracking: TrackingAPI) -> InsightsService:
    return InsightsService(tracking)


@pytest.fixture
def unauthenticated_tracking(http_client: httpx.AsyncClient) -> TrackingAPI:
    """Tracking API whose token source has no token."""
    return TrackingAPI(RequestGateway(http_client, StaticTokenSource(None)))


@pytest.fixture
def sample_patterns() -> dict:
    """Patterns payload as the service returns it."""
    return {
        "totalSearches": 12,
        "categoryFrequency": {"Fashion": 5, "Electronics": 7},
        "searchTypeFrequency": {"product": 9, "general": 3},
        "sustainabilityGradeFrequency": {"A": 4, "C": 2},
        "topMaterials": [{"material": "cotton", "count": 6}, {"material": "bamboo", "count": 2}],
        "topBrands": [{"brand": "Patagonia", "count": 3}],
        "allMaterials": ["cotton", "bamboo", "cotton"],
        "allBrands": ["Patagonia"],
        "recentSearches": [{"query": "organic shirt", "category": "Fashion"}],
        "analysisPeriod": "30 days",
    }


@pytest.fixture
def sample_dashboard() -> dict:
    """Dashboard payload as the service returns it."""
    return {
        "success": True,
        "insights": {
            "totalSearches": 12,
            "mostSearchedCategory": ["Electronics", 7],
            "preferredSustainabilityGrade": ["A", 4],
            "searchFrequency": 0.4,
            "diversityScore": 2,
            "recentActivity": [{"query": "organic shirt"}],
        },
        "patterns": {"categories": {"Fashion": 5, "Electronics": 7}},
        "trendingSearches": [{"_id": "solar charger", "count": 14}],
        "analysisPeriod": "30 days",
    }
