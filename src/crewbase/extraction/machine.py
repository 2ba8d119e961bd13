# ABOUTME: Line-oriented finite state machine shared by the role document extractors
# ABOUTME: Named parser states, a per-state transition table and role accumulation/flushing

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from crewbase.extraction.text import clean_markdown
from crewbase.models import RoleCatalog, RoleCategory

# Level-2 heading only; "### Foo" is not a role header
ROLE_HEADING = re.compile(r"^## (?!#)(.+)$")
HORIZONTAL_RULE = re.compile(r"^-{3,}$")
GAME_OPTIONS = re.compile(r"^(#{1,6}\s*)?[*_]*\s*Game Options\b", re.IGNORECASE)


class ParserState(StrEnum):
    SCANNING = "scanning"
    IN_DESCRIPTION = "in_description"
    IN_TABLE = "in_table"


# (stripped line, stripped next line) -> next state
Transition = Callable[[str, str], ParserState]


@dataclass
class PendingRole:
    """A role whose description is still being collected."""

    name: str
    category: RoleCategory | None
    lines: list[str] = field(default_factory=list)

    @property
    def description(self) -> str:
        return "\n".join(self.lines).strip()


def heading_name(line: str) -> str | None:
    """Return the text of a level-2 heading, or None for any other line."""
    match = ROLE_HEADING.match(line)
    return match.group(1).strip() if match else None


def ends_description(line: str) -> bool:
    """True for the markers after which a role's text is no longer its description."""
    return bool(HORIZONTAL_RULE.match(line) or GAME_OPTIONS.match(line))


class LineStateMachine(ABC):
    """Feeds lines through the handler registered for the current state.

    Subclasses declare their handlers in ``build_transitions``. Each handler
    receives the stripped current line plus the stripped following line and
    returns the state for the next line, so every state can be exercised on
    its own by setting ``state`` and calling ``feed``.
    """

    def __init__(self):
        self.state = ParserState.SCANNING
        self.current: PendingRole | None = None
        self.roles: dict[RoleCategory, dict[str, str]] = {category: {} for category in RoleCategory}
        self.transitions: dict[ParserState, Transition] = self.build_transitions()

    @abstractmethod
    def build_transitions(self) -> dict[ParserState, Transition]:
        """Map each state this machine uses to its handler."""
        pass

    def feed(self, line: str, lookahead: str = "") -> ParserState:
        handler = self.transitions[self.state]
        self.state = handler(line.strip(), lookahead.strip())
        return self.state

    def run(self, lines: list[str]) -> None:
        for index, line in enumerate(lines):
            lookahead = lines[index + 1] if index + 1 < len(lines) else ""
            self.feed(line, lookahead)
        self.finish()

    def start_role(self, name: str, category: RoleCategory | None) -> None:
        self.flush()
        self.current = PendingRole(name=name, category=category)

    def collect(self, line: str) -> None:
        if line and self.current is not None:
            self.current.lines.append(line)

    def flush(self) -> None:
        """Store the pending role, if it has a category and a description."""
        role, self.current = self.current, None
        if role is None or role.category is None or not role.description:
            return
        self.roles[role.category][role.name] = clean_markdown(role.description)

    def finish(self) -> None:
        self.flush()
        self.state = ParserState.SCANNING

    def catalog(self) -> RoleCatalog:
        return RoleCatalog(**{category.value: dict(roles) for category, roles in self.roles.items()})
