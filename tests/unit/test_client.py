"""Unit tests for client assembly."""

import httpx
import pytest

from search_analytics.client import SearchAnalyticsClient
from search_analytics.infrastructure.token_source import StaticTokenSource


@pytest.mark.asyncio
async def test_instances_get_their_own_session(test_settings) -> None:
    async with SearchAnalyticsClient(settings=test_settings) as first:
        async with SearchAnalyticsClient(settings=test_settings) as second:
            assert first.session_id != second.session_id
            assert first.session_id == first.tracking.session_id


@pytest.mark.asyncio
async def test_closes_owned_http_client(test_settings) -> None:
    client = SearchAnalyticsClient(settings=test_settings)
    assert str(client.http_client.base_url).rstrip("/") == "http://test/api/search"

    await client.aclose()
    assert client.http_client.is_closed


@pytest.mark.asyncio
async def test_leaves_injected_http_client_open(test_settings, http_client) -> None:
    async with SearchAnalyticsClient(settings=test_settings, http_client=http_client):
        pass
    assert not http_client.is_closed


@pytest.mark.asyncio
async def test_default_token_source_uses_settings_token(test_settings, http_client, mock_api) -> None:
    settings = test_settings.model_copy(update={"access_token": "from-settings"})
    mock_api.add("GET", "/patterns", json={"patterns": {"totalSearches": 1}})

    client = SearchAnalyticsClient(settings=settings, http_client=http_client)
    await client.tracking.get_patterns(7)

    assert mock_api.requests[0].headers["Authorization"] == "Bearer from-settings"


@pytest.mark.asyncio
async def test_without_token_insights_fall_back(test_settings, http_client, mock_api) -> None:
    client = SearchAnalyticsClient(
        token_source=StaticTokenSource(None),
        settings=test_settings,
        http_client=http_client,
    )
    result = await client.insights.get_behavior_insights()

    assert result.behavior_score == 0
    assert result.score_label == "Getting Started"
    assert mock_api.requests == []


@pytest.mark.asyncio
async def test_uses_configured_client_identifier(test_settings, http_client, mock_api) -> None:
    settings = test_settings.model_copy(update={"client_identifier": "Eco-Lens CLI"})
    mock_api.add("POST", "/track-search", json={"success": True, "searchId": "s-1"})

    client = SearchAnalyticsClient(
        token_source=StaticTokenSource("t"), settings=settings, http_client=http_client
    )
    await client.tracking.track_search_with_suggestions("x")

    assert mock_api.body_of(mock_api.requests[0])["userAgent"] == "Eco-Lens CLI"
    assert isinstance(client.http_client, httpx.AsyncClient)
