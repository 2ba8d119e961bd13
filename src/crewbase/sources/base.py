# ABOUTME: Shared contract and HTTP plumbing for upstream source fetchers
# ABOUTME: Every fetcher returns a domain value or raises FetchError wrapping the cause

import json
from abc import ABC, abstractmethod
from typing import Any, Protocol

import httpx

from crewbase.extraction import ExtractionError
from crewbase.utils.logging import get_logger, log_api_call

USER_AGENT = "crewbase/0.1 (+https://github.com/crewbase)"

# Failures that mean "upstream unreachable" or "upstream returned garbage"
UPSTREAM_ERRORS = (httpx.HTTPError, ExtractionError, ValueError, KeyError, TypeError)


class FetchError(Exception):
    """Raised when a source cannot produce a value."""

    def __init__(self, source: str, cause: Exception | str):
        self.source = source
        self.cause = cause
        super().__init__(f"{source}: {cause}")


class SourceFetcher(Protocol):
    """One upstream origin of cacheable data."""

    name: str

    async def fetch(self) -> Any:
        """Retrieve and decode the source's current value.

        Raises:
            FetchError: If the upstream is unreachable or its payload unusable
        """
        ...


class BaseHttpSource(ABC):
    """Base class for sources backed by plain HTTP GETs. Holds an httpx client
    that may be shared between sources."""

    name = "source"

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 30.0):
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            follow_redirects=True,
        )
        self.logger = get_logger(__name__).bind(source=self.name)

    async def fetch(self) -> Any:
        try:
            return await self._fetch()
        except FetchError:
            raise
        except UPSTREAM_ERRORS as e:
            self.logger.warning("Source fetch failed", error=str(e), error_type=type(e).__name__)
            raise FetchError(self.name, e) from e

    @abstractmethod
    async def _fetch(self) -> Any:
        """Retrieve the value; may raise any of UPSTREAM_ERRORS."""
        pass

    @log_api_call("http_get")
    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        response = await self.http_client.get(url, params=params)
        response.raise_for_status()
        return response

    async def get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        response = await self._get(url, params=params)
        return response.text

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._get(url, params=params)
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON from {url}: {e}") from e

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
