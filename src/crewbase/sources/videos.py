# ABOUTME: Video source paging a YouTube playlist and joining it with spreadsheet annotations
# ABOUTME: Formats ISO-8601 durations and builds enriched VideoRecord values

import re
from typing import Any

import httpx

from crewbase.enrichment import enrich_videos
from crewbase.models import VideoRecord
from crewbase.sources.base import BaseHttpSource
from crewbase.sources.sheet import SheetSource

YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3"
PAGE_SIZE = 50

_ISO_DURATION = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def format_duration(iso_duration: str | None) -> str:
    """``PT1H2M3S`` -> ``1:02:03``, ``PT4M5S`` -> ``4:05``; unparseable input gives ""."""
    match = _ISO_DURATION.search(iso_duration or "")
    if not match:
        return ""

    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def _optional_int(value: Any) -> int | None:
    return int(value) if value not in (None, "") else None


class VideoSource(BaseHttpSource):
    """Videos of one playlist, annotated from one spreadsheet tab."""

    name = "videos"

    def __init__(
        self,
        api_key: str,
        playlist_id: str,
        sheet_source: SheetSource,
        sheet_gid: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self.api_key = api_key
        self.playlist_id = playlist_id
        self.sheet_source = sheet_source
        self.sheet_gid = sheet_gid

    async def _playlist_page(self, page_token: str | None) -> dict[str, Any]:
        params = {
            "part": "snippet",
            "maxResults": PAGE_SIZE,
            "playlistId": self.playlist_id,
            "key": self.api_key,
        }
        if page_token:
            params["pageToken"] = page_token
        return await self.get_json(f"{YOUTUBE_API_URL}/playlistItems", params=params)

    async def _video_details(self, video_ids: list[str]) -> dict[str, dict[str, Any]]:
        if not video_ids:
            return {}
        payload = await self.get_json(
            f"{YOUTUBE_API_URL}/videos",
            params={"part": "snippet,contentDetails,statistics", "id": ",".join(video_ids), "key": self.api_key},
        )
        return {item["id"]: item for item in payload.get("items", [])}

    @staticmethod
    def build_record(item: dict[str, Any], details: dict[str, Any] | None) -> VideoRecord:
        snippet = item["snippet"]
        video_id = snippet["resourceId"]["videoId"]
        details = details or {}
        statistics = details.get("statistics", {})
        thumbnail = snippet.get("thumbnails", {}).get("medium", {}).get("url")

        return VideoRecord(
            id=video_id,
            title=snippet.get("title", ""),
            thumbnail=thumbnail,
            duration_text=format_duration(details.get("contentDetails", {}).get("duration")),
            view_count=_optional_int(statistics.get("viewCount")),
            like_count=_optional_int(statistics.get("likeCount")),
            published_at=details.get("snippet", {}).get("publishedAt"),
            video_url=f"https://www.youtube.com/watch?v={video_id}",
        )

    async def fetch_playlist(self) -> list[VideoRecord]:
        videos: list[VideoRecord] = []
        page_token: str | None = None

        while True:
            page = await self._playlist_page(page_token)
            items = page.get("items", [])
            details = await self._video_details([item["snippet"]["resourceId"]["videoId"] for item in items])

            for item in items:
                video_id = item["snippet"]["resourceId"]["videoId"]
                videos.append(self.build_record(item, details.get(video_id)))

            page_token = page.get("nextPageToken")
            if not page_token:
                break

        self.logger.debug("Fetched playlist", playlist_id=self.playlist_id, videos=len(videos))
        return videos

    async def _fetch(self) -> list[VideoRecord]:
        rows = await self.sheet_source.fetch_rows(self.sheet_gid)
        videos = await self.fetch_playlist()
        enriched = enrich_videos(videos, rows)
        self.logger.info("Fetched videos", videos=len(enriched), sheet_rows=len(rows))
        return enriched
