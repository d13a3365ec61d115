import asyncio
from typing import Any

import httpx
from loguru import logger

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


def _retryable(error: httpx.HTTPError) -> bool:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRYABLE_STATUS
    return isinstance(error, httpx.TransportError)


class BaseClient:
    """
    Async JSON client for the sync backend.

    Transport failures, 429 and 5xx responses are retried with exponential
    backoff. Any other 4xx means the backend rejected the call (unknown device,
    bad key, malformed event) and is raised on the first attempt.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 3,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.headers = headers or {}
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, headers=self.headers, transport=self.transport
            )
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> dict[str, Any]:
        client = await self.get_client()
        tries = max(1, self.max_retries)

        for attempt in range(1, tries + 1):
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                break
            except httpx.HTTPError as e:
                if not _retryable(e) or attempt == tries:
                    logger.error(f"{method} {url} failed on attempt {attempt}/{tries}: {e}")
                    raise
                wait_time = 0.5 * (2 ** (attempt - 1))
                logger.warning(f"{method} {url} failed: {e}. Retrying in {wait_time}s ({attempt}/{tries})")
                await asyncio.sleep(wait_time)

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"{method} {url} returned {type(data).__name__}, expected an object")
        return data

    async def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._request("GET", url, params=params)

    async def post(self, url: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        return await self._request("POST", url, json=json)
