"""Access token sources.

The gateway only needs a single fallible accessor: ``await get_token()``
returning the token or ``None``. Storage failures never reach the caller.
"""

from collections.abc import Sequence
from typing import Protocol

import structlog

from shared.constants import AUTH_TOKEN_KEYS

logger = structlog.get_logger()


class TokenSource(Protocol):
    """Supplies an access token, or ``None`` when there is none."""

    async def get_token(self) -> str | None: ...


class KeyValueStorage(Protocol):
    """Async string storage the token is persisted in."""

    async def get(self, key: str) -> str | None: ...


class StorageTokenSource:
    """Reads the token from storage, trying each legacy key in order."""

    def __init__(self, storage: KeyValueStorage, keys: Sequence[str] = AUTH_TOKEN_KEYS):
        self.storage = storage
        self.keys = tuple(keys)

    async def get_token(self) -> str | None:
        try:
            for key in self.keys:
                token = await self.storage.get(key)
                if token:
                    logger.debug("Retrieved auth token", key=key)
                    return token
        except Exception as e:
            logger.warning("Error getting auth token", error=str(e))
            return None

        logger.debug("No auth token stored")
        return None


class StaticTokenSource:
    """A fixed token, e.g. from settings. An empty token counts as absent."""

    def __init__(self, token: str | None):
        self.token = token or None

    async def get_token(self) -> str | None:
        return self.token
