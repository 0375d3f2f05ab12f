"""Base HTTP client with retry logic."""

import asyncio

import httpx
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from settings import API_BASE_URL as _DEFAULT_BASE_URL
from settings import API_TIMEOUT as _DEFAULT_TIMEOUT
from settings import MAX_CONCURRENT

API_BASE_URL = _DEFAULT_BASE_URL
API_TIMEOUT = _DEFAULT_TIMEOUT


def set_api_config(base_url: str, timeout: int) -> None:
    """Set API configuration."""
    global API_BASE_URL, API_TIMEOUT
    API_BASE_URL = base_url
    API_TIMEOUT = timeout


def _is_retryable_error(exc: BaseException) -> bool:
    """Check if exception is retryable (network errors + 5xx server errors)."""
    if isinstance(exc, (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


class BaseClient:
    """Base async HTTP client with a concurrency limit and exponential backoff.

    Clients are long-lived: the underlying ``httpx.AsyncClient`` is created on
    first use and kept until ``aclose``. ``transport`` lets tests plug in an
    ``httpx.MockTransport``.
    """

    def __init__(self, max_concurrent: int = MAX_CONCURRENT, transport: httpx.AsyncBaseTransport | None = None):
        self._client: httpx.AsyncClient | None = None
        self._transport = transport
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_count = 0
        logger.debug("{}: max_concurrent={}", self.__class__.__name__, max_concurrent)

    async def __aenter__(self):
        self._ensure_client()
        return self

    async def __aexit__(self, *_):
        await self.aclose()

    @property
    def request_count(self) -> int:
        return self._request_count

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=API_BASE_URL,
                timeout=API_TIMEOUT,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        logger.debug("{}: total API requests {}", self.__class__.__name__, self._request_count)
        if self._client:
            await self._client.aclose()
            self._client = None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    async def _get(self, path: str, params: dict | None = None) -> dict | list:
        """GET request with retry logic."""
        async with self._sem:
            client = self._ensure_client()
            self._request_count += 1
            resp = await client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
