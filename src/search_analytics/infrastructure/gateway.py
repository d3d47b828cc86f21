"""Authenticated JSON calls to the search analytics service."""

import time
from typing import Any

import httpx
import orjson
import structlog

from search_analytics.config import Settings, get_settings
from search_analytics.exceptions import AuthRequiredError, ServerError, TransportError
from search_analytics.infrastructure.token_source import TokenSource

logger = structlog.get_logger()


def build_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create the HTTP client rooted at the search analytics routes."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        base_url=settings.search_api_url,
        timeout=settings.request_timeout,
    )


class RequestGateway:
    """Performs one authenticated request per call. No retries."""

    def __init__(self, http_client: httpx.AsyncClient, token_source: TokenSource):
        self.http_client = http_client
        self.token_source = token_source

    async def call(
        self,
        route: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            AuthRequiredError: No token is available. Nothing is sent.
            TransportError: The service could not be reached.
            ServerError: Non-success status, or a body that is not JSON.
        """
        token = await self.token_source.get_token()
        if not token:
            logger.warning("Access token missing, request not sent", route=route, method=method)
            raise AuthRequiredError()

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        params = {k: v for k, v in (query or {}).items() if v is not None}
        content = orjson.dumps(body) if body is not None else None

        start = time.perf_counter()
        try:
            response = await self.http_client.request(
                method,
                route,
                content=content,
                params=params or None,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.error("Request failed", route=route, method=method, error=str(e))
            raise TransportError(
                f"Could not reach search analytics service: {e}", route=route
            ) from e
        duration = time.perf_counter() - start

        logger.debug(
            "request_completed",
            route=route,
            method=method,
            status=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        if not response.is_success:
            message = self._error_message(response)
            logger.error(
                "API error",
                route=route,
                method=method,
                status=response.status_code,
                error=message,
            )
            raise ServerError(response.status_code, message)

        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            logger.error("Malformed response body", route=route, status=response.status_code)
            raise ServerError(response.status_code, "Malformed response body") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Use the body's ``error`` field if present, else a status-based message."""
        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            payload = None

        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return f"HTTP error! status: {response.status_code}"
