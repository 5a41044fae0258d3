"""Shared JSON-over-HTTP plumbing for every provider client."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from src.parsers.exceptions import ProviderError

RETRY_DELAYS = [1.0, 3.0]


class JsonHttpClient:
    """Async GET/POST returning decoded JSON.

    Retries on HTTP 429 and on timeouts/connection errors, then raises
    ProviderError. Any other non-2xx status or an undecodable body raises
    ProviderError immediately.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        tag: str = "HTTP",
        timeout: float = 10.0,
        max_retries: int = 2,
    ) -> None:
        self._tag = tag
        self._max_retries = max_retries
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", url, params=params)

    async def post_json(self, url: str, json: Any = None) -> Any:
        return await self._request("POST", url, json=json)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        for attempt in range(self._max_retries + 1):
            delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
            try:
                resp = await self._client.request(method, url, **kwargs)
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < self._max_retries:
                    logger.debug(f"[{self._tag}] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                raise ProviderError(
                    f"[{self._tag}] {method} {url} failed after {attempt + 1} attempts: {e}"
                ) from e
            except httpx.HTTPError as e:
                raise ProviderError(f"[{self._tag}] {method} {url} failed: {e}") from e

            if resp.status_code == 429:
                if attempt < self._max_retries:
                    logger.debug(f"[{self._tag}] Rate limited, waiting {delay}s")
                    await asyncio.sleep(delay)
                    continue
                raise ProviderError(f"[{self._tag}] Rate limited: {url}")

            if resp.status_code < 200 or resp.status_code >= 300:
                raise ProviderError(f"[{self._tag}] HTTP {resp.status_code}: {url}")

            try:
                return resp.json()
            except ValueError as e:
                raise ProviderError(f"[{self._tag}] Invalid JSON from {url}") from e

        raise ProviderError(f"[{self._tag}] Retries exhausted: {url}")
