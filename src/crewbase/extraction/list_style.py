# ABOUTME: Extractor for wiki pages that list one category's roles under "## Name" headings
# ABOUTME: The page itself decides the category; each heading starts a new role

from crewbase.extraction.base import read_lines
from crewbase.extraction.machine import LineStateMachine, ParserState, Transition, ends_description, heading_name
from crewbase.models import RoleCatalog, RoleCategory

_PAGE_CATEGORIES = {
    "Crewmate": RoleCategory.CREWMATE,
    "Impostor": RoleCategory.IMPOSTOR,
    "Neutral": RoleCategory.NEUTRAL,
}


def category_from_page_name(page_name: str) -> RoleCategory | None:
    """Map a wiki page name such as ``Roles-Crewmate`` to its category."""
    for marker, category in _PAGE_CATEGORIES.items():
        if marker in page_name:
            return category
    return None


class ListStyleMachine(LineStateMachine):
    def __init__(self, category: RoleCategory):
        self.category = category
        super().__init__()

    def build_transitions(self) -> dict[ParserState, Transition]:
        return {
            ParserState.SCANNING: self.on_scanning,
            ParserState.IN_DESCRIPTION: self.on_description,
        }

    def _start_if_heading(self, line: str) -> bool:
        name = heading_name(line)
        if name is None:
            return False
        self.start_role(name, self.category)
        return True

    def on_scanning(self, line: str, lookahead: str) -> ParserState:
        if self._start_if_heading(line):
            return ParserState.IN_DESCRIPTION
        return ParserState.SCANNING

    def on_description(self, line: str, lookahead: str) -> ParserState:
        if self._start_if_heading(line):
            return ParserState.IN_DESCRIPTION
        if ends_description(line):
            return ParserState.SCANNING
        self.collect(line)
        return ParserState.IN_DESCRIPTION


class ListStyleExtractor:
    """Extracts one category of roles from a list-style wiki page."""

    def __init__(self, category: RoleCategory):
        self.category = category

    def extract(self, document: str | bytes) -> RoleCatalog:
        machine = ListStyleMachine(self.category)
        machine.run(read_lines(document))
        return machine.catalog()
