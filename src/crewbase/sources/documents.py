# ABOUTME: Role document sources: one wiki and two READMEs, each with its own extractor
# ABOUTME: Downloads raw markdown and hands it to the matching state-machine extractor

import asyncio
from abc import abstractmethod

import httpx

from crewbase.extraction import (
    CategoryStyleExtractor,
    ListStyleExtractor,
    TableStyleExtractor,
    category_from_page_name,
)
from crewbase.models import RoleCatalog, merge_catalogs
from crewbase.sources.base import BaseHttpSource


class AllTheRolesSource(BaseHttpSource):
    """AllTheRoles wiki: one page per category, roles listed under ``## Name`` headings."""

    name = "roles:all_the_roles"

    def __init__(
        self,
        wiki_url: str,
        pages: list[str],
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self.wiki_url = wiki_url.rstrip("/")
        self.pages = list(pages)

    async def _fetch_page(self, page: str) -> RoleCatalog | None:
        category = category_from_page_name(page)
        if category is None:
            self.logger.warning("Skipping wiki page without a role category", page=page)
            return None

        text = await self.get_text(f"{self.wiki_url}/{page}.md")
        catalog = ListStyleExtractor(category).extract(text)
        self.logger.debug("Extracted wiki page", page=page, category=category.value, roles=catalog.role_count)
        return catalog

    async def _fetch(self) -> RoleCatalog:
        catalogs = await asyncio.gather(*(self._fetch_page(page) for page in self.pages))
        catalog = merge_catalogs(catalogs)
        self.logger.info("Fetched role document", pages=len(self.pages), roles=catalog.role_count)
        return catalog


class ReadmeRolesSource(BaseHttpSource):
    """A single README parsed by ``extractor``."""

    def __init__(self, readme_url: str, client: httpx.AsyncClient | None = None, timeout: float = 30.0):
        super().__init__(client=client, timeout=timeout)
        self.readme_url = readme_url
        self.extractor = self.build_extractor()

    @abstractmethod
    def build_extractor(self) -> CategoryStyleExtractor | TableStyleExtractor:
        """Return the extractor that understands this README's layout."""
        pass

    async def _fetch(self) -> RoleCatalog:
        text = await self.get_text(self.readme_url)
        catalog = self.extractor.extract(text)
        self.logger.info("Fetched role document", url=self.readme_url, roles=catalog.role_count)
        return catalog


class TheOtherRolesSource(ReadmeRolesSource):
    """TheOtherRoles README: ``## Name`` headings followed by ``Team: X`` markers."""

    name = "roles:the_other_roles"

    def build_extractor(self) -> CategoryStyleExtractor:
        return CategoryStyleExtractor()


class TownOfUsRSource(ReadmeRolesSource):
    """Town Of Us R README: roles indexed by a per-team table."""

    name = "roles:town_of_us_r"

    def build_extractor(self) -> TableStyleExtractor:
        return TableStyleExtractor()
