# ABOUTME: Cache-first orchestration of the upstream sources behind each endpoint
# ABOUTME: Serves fresh cache, refreshes stale sources and falls back to the last good value

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from crewbase.cache import CacheManager, Clock, JsonFileStorage
from crewbase.config import Config
from crewbase.models import RoleCatalog, SheetTab, VideoRecord, merge_catalogs
from crewbase.sources import (
    AllTheRolesSource,
    FetchError,
    SheetSource,
    SourceFetcher,
    TheOtherRolesSource,
    TownOfUsRSource,
    VideoSource,
)
from crewbase.sources.base import USER_AGENT
from crewbase.utils.logging import get_logger, with_request_context, with_source_context

VIDEOS_KEY = VideoSource.name
SHEET_KEY = SheetSource.name

# Durable file per cache key, inside the configured cache directory
CACHE_FILES = {
    VIDEOS_KEY: "videoData.json",
    SHEET_KEY: "sheetData.json",
    AllTheRolesSource.name: "allTheRolesMod.json",
    TheOtherRolesSource.name: "theOtherRolesMod.json",
    TownOfUsRSource.name: "townOfUsRMod.json",
}

logger = get_logger(__name__)


class AggregationError(Exception):
    """Raised when neither upstream nor cache can provide a value."""

    pass


def has_videos(videos: list[VideoRecord]) -> bool:
    return bool(videos)


def has_sheet_rows(tabs: list[SheetTab]) -> bool:
    return any(tab.data for tab in tabs)


def has_roles(catalog: RoleCatalog) -> bool:
    return not catalog.is_empty()


async def refresh(
    cache: CacheManager,
    key: str,
    fetch_fn: Callable[[], Awaitable[Any]],
    is_valid: Callable[[Any], bool],
) -> Any | None:
    """Fetch ``key`` from upstream and cache it if valid.

    Returns the new value, or None when the fetch failed or produced an
    empty result. Failures never touch the existing cache entry.
    """
    with with_source_context(key) as log:
        try:
            value = await fetch_fn()
        except FetchError as e:
            log.warning("Upstream fetch failed", error=str(e.cause), error_type=type(e.cause).__name__)
            return None

        if not is_valid(value):
            log.warning("Upstream returned an empty result")
            return None

        cache.put(key, value)
        log.info("Cache updated")
        return value


async def cached_fetch(
    cache: CacheManager,
    key: str,
    fetch_fn: Callable[[], Awaitable[Any]],
    is_valid: Callable[[Any], bool],
    ttl: float | None = None,
) -> Any:
    """Serve ``key`` from cache while fresh, otherwise refresh it, falling back to any cached value.

    Raises:
        AggregationError: If the fetch failed and nothing was ever cached
    """
    ttl = cache.ttl_seconds if ttl is None else ttl
    cached = cache.get(key)

    if cached is not None and cached[1] < ttl:
        logger.debug("Serving from cache", key=key, age_seconds=round(cached[1], 1))
        return cached[0]

    value = await refresh(cache, key, fetch_fn, is_valid)
    if value is not None:
        return value

    latest = cache.get(key) or cached
    if latest is not None:
        logger.info("Falling back to cached data", key=key, age_seconds=round(latest[1], 1))
        return latest[0]

    raise AggregationError(f"No data available for {key}")


class Aggregator:
    """Owns the cache and the sources and answers each endpoint.

    ``role_sources`` are merged in the order given: on a role-name clash
    within a category the later source's description wins.
    """

    def __init__(
        self,
        cache: CacheManager,
        videos: SourceFetcher,
        sheet: SourceFetcher,
        role_sources: Sequence[SourceFetcher],
        http_client: httpx.AsyncClient | None = None,
    ):
        self.cache = cache
        self.videos = videos
        self.sheet = sheet
        self.role_sources = list(role_sources)
        self.http_client = http_client

        cache.register(videos.name, list[VideoRecord], CACHE_FILES.get(videos.name, f"{videos.name}.json"))
        cache.register(sheet.name, list[SheetTab], CACHE_FILES.get(sheet.name, f"{sheet.name}.json"))
        for source in self.role_sources:
            filename = CACHE_FILES.get(source.name, f"{source.name.replace(':', '_')}.json")
            cache.register(source.name, RoleCatalog, filename)

    @classmethod
    def from_config(cls, config: Config, clock: Clock = time.time) -> Aggregator:
        """Wire the production sources, sharing one HTTP client, to a disk-backed cache."""
        client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT}, timeout=config.http_timeout, follow_redirects=True
        )
        cache = CacheManager(JsonFileStorage(config.cache_dir), ttl_seconds=config.cache_ttl_seconds, clock=clock)

        sheet = SheetSource(config.sheet_id, config.sheet_gids, client=client)
        videos = VideoSource(
            api_key=config.youtube_api_key,
            playlist_id=config.playlist_id,
            sheet_source=sheet,
            sheet_gid=config.video_sheet_gid,
            client=client,
        )
        role_sources = [
            AllTheRolesSource(config.all_the_roles_wiki_url, config.all_the_roles_pages, client=client),
            TheOtherRolesSource(config.the_other_roles_readme_url, client=client),
            TownOfUsRSource(config.town_of_us_r_readme_url, client=client),
        ]
        return cls(cache, videos=videos, sheet=sheet, role_sources=role_sources, http_client=client)

    async def get_videos(self) -> list[VideoRecord]:
        with with_request_context("videos"):
            return await cached_fetch(self.cache, self.videos.name, self.videos.fetch, has_videos)

    async def get_sheet_data(self) -> list[SheetTab]:
        with with_request_context("sheet"):
            return await cached_fetch(self.cache, self.sheet.name, self.sheet.fetch, has_sheet_rows)

    async def get_roles(self) -> RoleCatalog:
        """Merged catalog of every role source, refreshing only the stale ones."""
        with with_request_context("roles") as log:
            values: dict[str, RoleCatalog | None] = {}
            stale: list[SourceFetcher] = []

            for source in self.role_sources:
                cached = self.cache.get(source.name)
                values[source.name] = cached[0] if cached else None
                if cached is None or self.cache.is_stale(cached[1]):
                    stale.append(source)

            if stale:
                log.info("Refreshing role sources", sources=[source.name for source in stale])
                refreshed = await asyncio.gather(
                    *(refresh(self.cache, source.name, source.fetch, has_roles) for source in stale)
                )
                for source, value in zip(stale, refreshed):
                    if value is not None:
                        values[source.name] = value

            if all(value is None for value in values.values()):
                raise AggregationError("No role data available from any source")

            missing = [name for name, value in values.items() if value is None]
            if missing:
                log.warning("Serving partial role catalog", missing_sources=missing)

            return merge_catalogs(values[source.name] for source in self.role_sources)

    def reset(self) -> None:
        """Forget every cached value, in memory and on disk."""
        self.cache.reset_all()

    def cache_status(self) -> dict[str, dict[str, Any]]:
        return self.cache.status()

    async def preload(self) -> None:
        """Warm the video and spreadsheet caches; failures are logged, never raised."""
        for name, load in (("videos", self.get_videos), ("sheet", self.get_sheet_data)):
            try:
                await load()
                logger.info("Preloaded data", endpoint=name)
            except AggregationError as e:
                logger.error("Preload failed", endpoint=name, error=str(e))

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
        for source in (self.videos, self.sheet, *self.role_sources):
            close = getattr(source, "close", None)
            if close is not None:
                await close()
