"""Search analytics client assembly.

Build one ``SearchAnalyticsClient`` and pass it to whatever needs it. Each
instance has its own session id; share the instance to share the session.
"""

from types import TracebackType

import httpx
import structlog

from search_analytics.config import Settings, get_settings
from search_analytics.infrastructure.gateway import RequestGateway, build_http_client
from search_analytics.infrastructure.token_source import StaticTokenSource, TokenSource
from search_analytics.services.insights import InsightsService
from search_analytics.services.tracking import TrackingAPI

logger = structlog.get_logger()


class SearchAnalyticsClient:
    """Owns the HTTP client and exposes the tracking and insights services."""

    def __init__(
        self,
        token_source: TokenSource | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        session_id: str | None = None,
    ):
        self.settings = settings or get_settings()
        self._owns_http_client = http_client is None
        self.http_client = http_client or build_http_client(self.settings)

        if token_source is None:
            token_source = StaticTokenSource(self.settings.access_token)

        self.gateway = RequestGateway(self.http_client, token_source)
        self.tracking = TrackingAPI(
            self.gateway,
            session_id=session_id,
            client_identifier=self.settings.client_identifier,
        )
        self.insights = InsightsService(self.tracking)

        logger.debug(
            "Search analytics client created",
            base_url=str(self.http_client.base_url),
            session_id=self.tracking.session_id,
        )

    @property
    def session_id(self) -> str:
        return self.tracking.session_id

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "SearchAnalyticsClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
