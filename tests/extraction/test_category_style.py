# ABOUTME: Tests for the team-marker README extractor
# ABOUTME: Category resolution from Team lines, modifier headings and enclosing role sections

import pytest

from crewbase.extraction import CategoryStyleExtractor, ParserState
from crewbase.extraction.category_style import CategoryStyleMachine, team_category
from crewbase.models import RoleCategory

README = """# TheOtherRoles

## Roles
Overview of every role.

## Mystery
Has no team and no section.

## Version 2.0
Changelog text.

## Mafia
Team: Impostors
The Mafia is a group of three impostors.

## Sheriff
Team: Crewmates
Can kill impostors.
### Game Options
| Option | Default |
| Cooldown | 30 |

## Jester
**Team: Neutral**
Wants to be **voted out**.
-----
Credits line.

## Lovers Modifier
Two players are lovers.

## Crewmate Roles

## Mayor
Votes count twice.
"""


class TestTeamCategory:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("Team: Impostors", RoleCategory.IMPOSTOR),
            ("Team: Crewmates", RoleCategory.CREWMATE),
            ("**Team: Neutral**", RoleCategory.NEUTRAL),
            ("team: _impostor_", RoleCategory.IMPOSTOR),
            ("Teamwork matters", None),
            ("", None),
        ],
    )
    def test_team_markers(self, line, expected):
        assert team_category(line) == expected


class TestCategoryStyleExtractor:
    @pytest.fixture
    def catalog(self):
        return CategoryStyleExtractor().extract(README)

    def test_team_marker_decides_category(self, catalog):
        assert catalog.impostor == {"Mafia": "The Mafia is a group of three impostors."}
        assert catalog.neutral == {"Jester": "Wants to be voted out."}

    def test_game_options_end_description(self, catalog):
        assert catalog.crewmate["Sheriff"] == "Can kill impostors."

    def test_modifier_heading(self, catalog):
        assert catalog.modifier == {"Lovers Modifier": "Two players are lovers."}

    def test_section_heading_is_fallback_category(self, catalog):
        assert catalog.crewmate["Mayor"] == "Votes count twice."

    def test_unplaceable_and_non_role_headings_are_skipped(self, catalog):
        names = {name for category in RoleCategory for name in catalog.category(category)}
        assert names == {"Mafia", "Sheriff", "Jester", "Lovers Modifier", "Mayor"}

    def test_text_after_rule_does_not_bleed(self, catalog):
        assert "Credits" not in catalog.neutral["Jester"]

    def test_team_marker_beats_section(self):
        document = "## Impostor Roles\n\n## Snitch\nTeam: Crewmates\nReveals impostors.\n"

        catalog = CategoryStyleExtractor().extract(document)

        assert catalog.crewmate == {"Snitch": "Reveals impostors."}
        assert catalog.impostor == {}


class TestCategoryStyleMachine:
    def test_section_heading_sets_context(self):
        machine = CategoryStyleMachine()

        assert machine.feed("## Neutral Roles") == ParserState.SCANNING
        assert machine.section == RoleCategory.NEUTRAL

    def test_lookahead_team_marker_starts_role(self):
        machine = CategoryStyleMachine()

        assert machine.feed("## Vampire", "Team: Impostors") == ParserState.IN_DESCRIPTION
        assert machine.current.category == RoleCategory.IMPOSTOR

    def test_role_without_category_stays_scanning(self):
        machine = CategoryStyleMachine()

        assert machine.feed("## Vampire", "Drinks blood.") == ParserState.SCANNING
        assert machine.current is None
