from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from statbeacon.config import BeaconConfig

logger = logging.getLogger(__name__)


class ClientBuildError(Exception):
    """The HTTP client could not be constructed (e.g. malformed proxy URL)."""


def build_client(config: BeaconConfig) -> httpx.AsyncClient:
    """Create the shared HTTP client, routed through ``config.proxy`` if set."""
    try:
        if config.proxy:
            logger.info("Using proxy: %s", config.proxy)
            return httpx.AsyncClient(proxy=config.proxy, timeout=config.request_timeout_seconds)
        return httpx.AsyncClient(timeout=config.request_timeout_seconds)
    except (httpx.InvalidURL, ImportError, ValueError, TypeError) as exc:
        raise ClientBuildError(f"Failed to build HTTP client: {exc}") from exc


class Notifier:
    """Best-effort JSON poster.

    ``post()`` never raises for transport failures or error statuses; it logs
    them and reports the outcome as a bool. With ``max_retries > 0`` a failed
    delivery is retried with exponential backoff; setting ``stop`` abandons
    the remaining retries.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_retries: int = 0,
        retry_backoff_seconds: float = 1.0,
    ) -> None:
        self._client = client
        self.max_retries = max_retries
        self.retry_backoff_seconds = retry_backoff_seconds

    async def post(
        self,
        url: str,
        payload: dict[str, Any],
        stop: asyncio.Event | None = None,
    ) -> bool:
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            if await self._send(url, payload, attempt + 1, attempts):
                return True
            if attempt < self.max_retries:
                if not await self._backoff(self.retry_backoff_seconds * 2**attempt, stop):
                    logger.info("Retries to %s abandoned: stopping", url)
                    break
        return False

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, url: str, payload: dict[str, Any], attempt: int, attempts: int) -> bool:
        try:
            response = await self._client.post(url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Error posting to %s (attempt %d/%d): %s", url, attempt, attempts, exc)
            return False
        if not response.is_success:
            logger.error(
                "Error posting to %s (attempt %d/%d): status %d",
                url, attempt, attempts, response.status_code,
            )
            return False
        return True

    @staticmethod
    async def _backoff(delay: float, stop: asyncio.Event | None) -> bool:
        """Wait ``delay`` seconds; False if ``stop`` was set meanwhile."""
        if stop is None:
            await asyncio.sleep(delay)
            return True
        try:
            await asyncio.wait_for(stop.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return True
        return False
