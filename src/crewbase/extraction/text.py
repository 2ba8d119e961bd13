# ABOUTME: Markdown cleanup applied to every extracted role description
# ABOUTME: Strips emphasis, headings, line-break backslashes and team marker lines

import re

_HEADING = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_BOLD_STARS = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_STAR = re.compile(r"\*([^*]+)\*")
_BOLD_UNDERSCORES = re.compile(r"__([^_]+)__")
_ITALIC_UNDERSCORE = re.compile(r"_([^_]+)_")
_LINE_BREAK = re.compile(r"\\$", re.MULTILINE)
_TEAM_LINE = re.compile(
    r"^Team: (Impostors|Impostor|Crewmates|Crewmate|Neutral Killer|Neutral).*$", re.MULTILINE
)
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def clean_markdown(text: str | None) -> str:
    """Reduce a markdown description to plain text.

    Removes heading markers, bold/italic markers, trailing ``\\`` line
    continuations and ``Team: X`` lines, then collapses runs of blank lines
    into a single blank line and trims the result.
    """
    if not text:
        return ""

    cleaned = _HEADING.sub("", text)

    cleaned = _BOLD_STARS.sub(r"\1", cleaned)
    cleaned = _ITALIC_STAR.sub(r"\1", cleaned)
    cleaned = _BOLD_UNDERSCORES.sub(r"\1", cleaned)
    cleaned = _ITALIC_UNDERSCORE.sub(r"\1", cleaned)

    cleaned = _LINE_BREAK.sub("", cleaned)
    cleaned = _TEAM_LINE.sub("", cleaned)
    cleaned = _EXTRA_BLANK_LINES.sub("\n\n", cleaned)

    return cleaned.strip()
