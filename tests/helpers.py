# ABOUTME: Test doubles and payload builders shared across the test suite
# ABOUTME: A controllable clock, scripted source fetchers and sample domain values

import json

from crewbase.models import SheetTab, VideoRecord
from crewbase.sources import FetchError


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubSource:
    """Source fetcher returning scripted results in order; the last result repeats.

    An Exception result is raised instead of returned.
    """

    def __init__(self, name: str, *results):
        self.name = name
        self.results = list(results)
        self.calls = 0

    def fail(self, message: str = "upstream unavailable") -> FetchError:
        return FetchError(self.name, message)

    async def fetch(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


def failure(name: str, message: str = "upstream unavailable") -> FetchError:
    return FetchError(name, message)


def make_video(video_id: str = "abc123", title: str = "Lobby 1") -> VideoRecord:
    return VideoRecord(
        id=video_id,
        title=title,
        thumbnail=f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg",
        duration_text="12:34",
        view_count=100,
        like_count=5,
        published_at="2024-01-01T00:00:00Z",
        video_url=f"https://www.youtube.com/watch?v={video_id}",
    )


def make_sheet(rows: int = 1) -> list[SheetTab]:
    return [SheetTab(sheet=0, data=[{"videolink": f"https://youtu.be/v{i}", "mapname": "Polus"} for i in range(rows)])]


def gviz_payload(columns: list[str], rows: list[list]) -> str:
    """Build a gviz JSON export body the way Google Sheets wraps it."""
    table = {
        "cols": [{"id": chr(65 + i), "label": label, "type": "string"} for i, label in enumerate(columns)],
        "rows": [{"c": [None if value is None else {"v": value} for value in row]} for row in rows],
    }
    body = json.dumps({"version": "0.6", "reqId": "0", "status": "ok", "table": table})
    return f"/*O_o*/\ngoogle.visualization.Query.setResponse({body});"
