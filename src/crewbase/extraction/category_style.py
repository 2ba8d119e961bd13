# ABOUTME: Extractor for READMEs where each "## Name" role heading is followed by a "Team: X" line
# ABOUTME: Category comes from the team marker, the heading itself, or the enclosing roles section

import re

from crewbase.extraction.base import read_lines
from crewbase.extraction.machine import LineStateMachine, ParserState, Transition, ends_description, heading_name
from crewbase.models import RoleCatalog, RoleCategory

SECTION_HEADING = re.compile(r"^## (Crewmate|Impostor|Neutral|Modifier)s? Roles$", re.IGNORECASE)
ROLE_NAME = re.compile(r"^[A-Za-z\s\-]+$")
TEAM_MARKER = re.compile(r"Team:\s*[*_]*\s*(Impostor|Crewmate|Neutral)", re.IGNORECASE)
NOT_ROLE_WORDS = ("Roles", "Settings", "Game Options")


def team_category(line: str) -> RoleCategory | None:
    """Category named by a ``Team: X`` marker in ``line``, if any."""
    match = TEAM_MARKER.search(line)
    if not match:
        return None
    return RoleCategory(match.group(1).lower())


class CategoryStyleMachine(LineStateMachine):
    def __init__(self):
        self.section: RoleCategory | None = None
        super().__init__()

    def build_transitions(self) -> dict[ParserState, Transition]:
        return {
            ParserState.SCANNING: self.on_scanning,
            ParserState.IN_DESCRIPTION: self.on_description,
        }

    def resolve_category(self, name: str, lookahead: str) -> RoleCategory | None:
        category = team_category(lookahead)
        if category is not None:
            return category
        if "modifier" in name.lower():
            return RoleCategory.MODIFIER
        return self.section

    def on_heading(self, line: str, lookahead: str) -> ParserState | None:
        """Handle a level-2 heading; returns None when ``line`` is not one."""
        name = heading_name(line)
        if name is None:
            return None

        section = SECTION_HEADING.match(line)
        if section:
            self.flush()
            self.section = RoleCategory(section.group(1).lower())
            return ParserState.SCANNING

        if not ROLE_NAME.match(name) or any(word in name for word in NOT_ROLE_WORDS):
            self.flush()
            return ParserState.SCANNING

        category = self.resolve_category(name, lookahead)
        if category is None:
            # Unplaceable role: skip it entirely
            self.flush()
            return ParserState.SCANNING
        self.start_role(name, category)
        return ParserState.IN_DESCRIPTION

    def on_scanning(self, line: str, lookahead: str) -> ParserState:
        next_state = self.on_heading(line, lookahead)
        return next_state or ParserState.SCANNING

    def on_description(self, line: str, lookahead: str) -> ParserState:
        next_state = self.on_heading(line, lookahead)
        if next_state is not None:
            return next_state
        if ends_description(line):
            return ParserState.SCANNING
        self.collect(line)
        return ParserState.IN_DESCRIPTION


class CategoryStyleExtractor:
    """Extracts crewmate, impostor, neutral and modifier roles from a sectioned README."""

    def extract(self, document: str | bytes) -> RoleCatalog:
        machine = CategoryStyleMachine()
        machine.run(read_lines(document))
        return machine.catalog()
