# ABOUTME: Joins playlist videos with the spreadsheet rows that reference them
# ABOUTME: Derives per-video player, role and map-name lists from matching rows

from collections.abc import Iterable

from crewbase.models import SheetRow, VideoRecord

VIDEO_LINK_COLUMN = "videolink"
MAP_NAME_COLUMN = "mapname"
PARTICIPANTS_COLUMN = "players,rolesandtasks"
PLAYER_ROLE_SEPARATOR = " - "


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def parse_participants(text: str) -> list[tuple[str, str]]:
    """Split a "players, roles and tasks" cell into (player, role) pairs.

    Each line is split on the first separator; lines without one are ignored.
    """
    pairs: list[tuple[str, str]] = []
    for line in text.splitlines():
        player, separator, role = line.strip().partition(PLAYER_ROLE_SEPARATOR)
        if not separator:
            continue
        pairs.append((player.strip(), role.strip()))
    return pairs


def matching_rows(video_id: str, rows: Iterable[SheetRow]) -> list[SheetRow]:
    """Rows whose video link contains ``video_id``."""
    return [row for row in rows if video_id in str(row.get(VIDEO_LINK_COLUMN, ""))]


def enrich_video(video: VideoRecord, rows: Iterable[SheetRow]) -> VideoRecord:
    players: list[str] = []
    roles: list[str] = []
    map_names: list[str] = []

    for row in matching_rows(video.id, rows):
        map_name = row.get(MAP_NAME_COLUMN)
        if map_name:
            map_names.append(str(map_name))

        participants = row.get(PARTICIPANTS_COLUMN)
        if participants:
            for player, role in parse_participants(str(participants)):
                players.append(player)
                roles.append(role)

    return video.model_copy(
        update={"players": _unique(players), "roles": _unique(roles), "map_names": _unique(map_names)}
    )


def enrich_videos(videos: Iterable[VideoRecord], rows: Iterable[SheetRow]) -> list[VideoRecord]:
    """Annotate every video with the players, roles and maps of its matching rows."""
    rows = list(rows)
    return [enrich_video(video, rows) for video in videos]
