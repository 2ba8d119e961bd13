# ABOUTME: Upstream source fetchers: videos, spreadsheet and role documents
# ABOUTME: Each fetcher returns a domain value or raises FetchError

from .base import BaseHttpSource, FetchError, SourceFetcher
from .documents import AllTheRolesSource, TheOtherRolesSource, TownOfUsRSource
from .sheet import SheetSource, decode_gviz
from .videos import VideoSource, format_duration

__all__ = [
    "AllTheRolesSource",
    "BaseHttpSource",
    "FetchError",
    "SheetSource",
    "SourceFetcher",
    "TheOtherRolesSource",
    "TownOfUsRSource",
    "VideoSource",
    "decode_gviz",
    "format_duration",
]
