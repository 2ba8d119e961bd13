# ABOUTME: Pydantic models for the values served by the aggregation layer
# ABOUTME: Role catalogs, enriched video records and decoded spreadsheet tabs

from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class RoleCategory(StrEnum):
    """Team a role belongs to."""

    CREWMATE = "crewmate"
    IMPOSTOR = "impostor"
    NEUTRAL = "neutral"
    MODIFIER = "modifier"


class RoleCatalog(BaseModel):
    """Role name -> description, grouped by category.

    Every category is always present; a source without modifiers simply has
    an empty ``modifier`` mapping. Category mappings are read-only, so a
    catalog handed out from the cache cannot be changed by its callers.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    crewmate: Mapping[str, str] = Field(default_factory=dict)
    impostor: Mapping[str, str] = Field(default_factory=dict)
    neutral: Mapping[str, str] = Field(default_factory=dict)
    modifier: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("crewmate", "impostor", "neutral", "modifier", mode="after")
    @classmethod
    def _read_only(cls, roles: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(roles))

    @field_serializer("crewmate", "impostor", "neutral", "modifier")
    def _as_dict(self, roles: Mapping[str, str]) -> dict[str, str]:
        return dict(roles)

    def category(self, category: RoleCategory) -> Mapping[str, str]:
        return getattr(self, category.value)

    @property
    def role_count(self) -> int:
        return sum(len(self.category(category)) for category in RoleCategory)

    def is_empty(self) -> bool:
        return self.role_count == 0


def merge_catalogs(catalogs: Iterable[RoleCatalog | None]) -> RoleCatalog:
    """Union of ``catalogs`` per category, applied in order.

    When two catalogs describe the same role name in the same category the
    later catalog wins. ``None`` entries (sources with no value) are skipped.
    """
    merged: dict[str, dict[str, str]] = {category.value: {} for category in RoleCategory}
    for catalog in catalogs:
        if catalog is None:
            continue
        for category in RoleCategory:
            merged[category.value].update(catalog.category(category))
    return RoleCatalog(**merged)


class VideoRecord(BaseModel):
    """A playlist video annotated with the matches recorded for it in the spreadsheet."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    thumbnail: str | None = None
    duration_text: str = ""
    view_count: int | None = None
    like_count: int | None = None
    published_at: str | None = None
    video_url: str

    players: list[str] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list)
    map_names: list[str] = Field(default_factory=list)


# Keys are the tab's header labels, lower-cased with whitespace removed
SheetRow = dict[str, str | bool | int | float]


class SheetTab(BaseModel):
    """Rows of one spreadsheet tab; ``sheet`` is the tab's position in the configured gid list."""

    sheet: int
    data: list[SheetRow] = Field(default_factory=list)
