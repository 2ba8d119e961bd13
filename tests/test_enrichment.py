# ABOUTME: Tests for joining playlist videos with their spreadsheet rows
# ABOUTME: Participant parsing, substring video matching and de-duplication

import pytest

from crewbase.enrichment import enrich_video, enrich_videos, matching_rows, parse_participants
from tests.helpers import make_video

ROWS = [
    {
        "videolink": "https://youtu.be/abc123",
        "mapname": "Skeld",
        "players,rolesandtasks": "Alice - Detective\nBob - Sheriff",
    },
    {
        "videolink": "https://www.youtube.com/watch?v=abc123&t=60",
        "mapname": "Skeld",
        "players,rolesandtasks": "Alice - Detective\nCarol - Jester - tasks done",
    },
    {"videolink": "https://youtu.be/zzz999", "mapname": "Polus", "players,rolesandtasks": "Dan - Mayor"},
]


class TestParseParticipants:
    def test_splits_on_first_separator(self):
        assert parse_participants("Carol - Jester - tasks done") == [("Carol", "Jester - tasks done")]

    def test_lines_without_separator_are_ignored(self):
        assert parse_participants("Alice - Detective\nno separator here\n\nBob-Sheriff") == [("Alice", "Detective")]


class TestEnrichment:
    def test_matching_rows_by_substring(self):
        assert len(matching_rows("abc123", ROWS)) == 2
        assert matching_rows("nothing", ROWS) == []

    def test_enrich_video_collects_and_dedupes(self):
        video = enrich_video(make_video("abc123"), ROWS)

        assert video.players == ["Alice", "Bob", "Carol"]
        assert video.roles == ["Detective", "Sheriff", "Jester - tasks done"]
        assert video.map_names == ["Skeld"]

    def test_original_video_is_not_mutated(self):
        original = make_video("abc123")

        enrich_video(original, ROWS)

        assert original.players == []

    def test_video_without_rows_has_empty_lists(self):
        video = enrich_video(make_video("unknown"), ROWS)

        assert (video.players, video.roles, video.map_names) == ([], [], [])

    @pytest.mark.parametrize("rows", [[], [{"videolink": "https://youtu.be/abc123"}]])
    def test_missing_columns(self, rows):
        video = enrich_video(make_video("abc123"), rows)

        assert video.players == []
        assert video.map_names == []

    def test_enrich_videos_keeps_order(self):
        videos = enrich_videos([make_video("zzz999"), make_video("abc123")], iter(ROWS))

        assert [video.id for video in videos] == ["zzz999", "abc123"]
        assert videos[0].map_names == ["Polus"]
        assert videos[1].map_names == ["Skeld"]
