# ABOUTME: Extractor for READMEs that index roles in a markdown table, one column per team
# ABOUTME: First pass reads the table, second pass finds each listed role's "## Name" section

import re

from crewbase.extraction.base import read_lines
from crewbase.extraction.machine import LineStateMachine, ParserState, Transition, ends_description, heading_name
from crewbase.extraction.text import clean_markdown
from crewbase.models import RoleCatalog, RoleCategory

TABLE_HEADER_MARKERS = ("**Impostor Roles**", "**Crewmate Roles**", "**Neutral Roles**")
COLUMN_CATEGORIES = (RoleCategory.IMPOSTOR, RoleCategory.CREWMATE, RoleCategory.NEUTRAL)
LINK_LABEL = re.compile(r"\[(.*?)\]")


def split_row(line: str) -> list[str]:
    """Split a table row into cells, keeping empty cells so columns stay aligned."""
    body = line.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|"):
        body = body[:-1]
    return [cell.strip() for cell in body.split("|")]


class TableIndexMachine(LineStateMachine):
    """Collects the role names listed in the index table, per column."""

    def __init__(self):
        self.listed: dict[RoleCategory, list[str]] = {category: [] for category in COLUMN_CATEGORIES}
        super().__init__()

    def build_transitions(self) -> dict[ParserState, Transition]:
        return {
            ParserState.SCANNING: self.on_scanning,
            ParserState.IN_TABLE: self.on_table,
        }

    def on_scanning(self, line: str, lookahead: str) -> ParserState:
        if all(marker in line for marker in TABLE_HEADER_MARKERS):
            return ParserState.IN_TABLE
        return ParserState.SCANNING

    def on_table(self, line: str, lookahead: str) -> ParserState:
        if not line or line.startswith("##") or "|" not in line:
            return ParserState.SCANNING

        for category, cell in zip(COLUMN_CATEGORIES, split_row(line)):
            match = LINK_LABEL.search(cell)
            if not match:
                continue
            name = match.group(1).strip()
            if name and name not in self.listed[category]:
                self.listed[category].append(name)
        return ParserState.IN_TABLE


class RoleSectionMachine(LineStateMachine):
    """Collects the body of the first ``## Name`` section of each wanted role."""

    def __init__(self, wanted: set[str]):
        self.wanted = {name.lower() for name in wanted}
        self.descriptions: dict[str, str] = {}
        super().__init__()

    def build_transitions(self) -> dict[ParserState, Transition]:
        return {
            ParserState.SCANNING: self.on_scanning,
            ParserState.IN_DESCRIPTION: self.on_description,
        }

    def flush(self) -> None:
        role, self.current = self.current, None
        if role is not None:
            self.descriptions[role.name.lower()] = clean_markdown(role.description)

    def on_scanning(self, line: str, lookahead: str) -> ParserState:
        if not line.startswith("##"):
            return ParserState.SCANNING
        self.flush()

        name = heading_name(line)
        key = name.lower() if name else None
        if key is None or key not in self.wanted or key in self.descriptions:
            return ParserState.SCANNING

        self.start_role(name, None)
        return ParserState.IN_DESCRIPTION

    def on_description(self, line: str, lookahead: str) -> ParserState:
        # Team marker right under the heading, often written as "### **Team: X**"
        if not self.current.lines and "Team:" in line:
            return ParserState.IN_DESCRIPTION
        # Any other deeper heading closes the section
        if line.startswith("##"):
            return self.on_scanning(line, lookahead)
        if ends_description(line):
            self.flush()
            return ParserState.SCANNING
        self.collect(line)
        return ParserState.IN_DESCRIPTION


class TableStyleExtractor:
    """Extracts impostor, crewmate and neutral roles from a table-indexed README.

    Categories come from the column a role is listed in. A listed role with
    no matching section (or an empty one) is kept, described by its own name.
    """

    def extract(self, document: str | bytes) -> RoleCatalog:
        lines = read_lines(document)

        index = TableIndexMachine()
        index.run(lines)

        wanted = {name for names in index.listed.values() for name in names}
        sections = RoleSectionMachine(wanted)
        sections.run(lines)

        roles: dict[str, dict[str, str]] = {}
        for category, names in index.listed.items():
            roles[category.value] = {
                name: sections.descriptions.get(name.lower()) or name for name in names
            }
        return RoleCatalog(**roles)
