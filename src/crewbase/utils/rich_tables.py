# ABOUTME: Rich table builders for the CLI's human-readable output
# ABOUTME: Provides pre-configured tables for videos, roles, spreadsheet tabs and status reports

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from crewbase.models import RoleCatalog, RoleCategory, SheetTab, VideoRecord

DESCRIPTION_PREVIEW_CHARS = 80


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key/value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_multi_column_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
    title_style: str = "bold cyan",
    header_style: str = "bold magenta",
    alternate_row_styles: list[str] | None = None,
    box_style=ROUNDED,
) -> Table:
    """Create a multi-column table with zebra striping.

    Args:
        title: Table title with emoji/styling
        columns: List of (column_name, column_style) tuples
        rows: List of row data
        title_style: Style for the table title
        header_style: Style for column headers
        alternate_row_styles: Alternating row styles for zebra striping
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style=header_style,
        border_style="cyan",
        title_justify="left",
        row_styles=alternate_row_styles or ["", "dim"],
        expand=True,
    )

    for name, style in columns:
        table.add_column(name, style=style)

    for row in rows:
        table.add_row(*row)

    return table


def _preview(text: str) -> str:
    first_line = text.splitlines()[0] if text else ""
    if len(first_line) > DESCRIPTION_PREVIEW_CHARS:
        return first_line[: DESCRIPTION_PREVIEW_CHARS - 1] + "…"
    return first_line


def create_videos_table(videos: list[VideoRecord]) -> Table:
    rows = [
        [
            video.title,
            video.duration_text,
            f"{video.view_count:,}" if video.view_count is not None else "-",
            ", ".join(video.map_names) or "-",
            ", ".join(video.players) or "-",
        ]
        for video in videos
    ]
    return create_multi_column_table(
        title=f"🎬 Videos ({len(videos)})",
        columns=[("Title", "bold white"), ("Length", "cyan"), ("Views", "green"), ("Maps", "yellow"), ("Players", "")],
        rows=rows,
    )


def create_role_catalog_table(catalog: RoleCatalog) -> Table:
    rows = [
        [category.value.title(), name, _preview(description)]
        for category in RoleCategory
        for name, description in catalog.category(category).items()
    ]
    return create_multi_column_table(
        title=f"🎭 Roles ({catalog.role_count})",
        columns=[("Team", "magenta"), ("Role", "bold white"), ("Description", "")],
        rows=rows,
    )


def create_sheet_summary_table(tabs: list[SheetTab]) -> Table:
    rows = [[str(tab.sheet), str(len(tab.data)), ", ".join(tab.data[0].keys()) if tab.data else "-"] for tab in tabs]
    return create_multi_column_table(
        title="📊 Spreadsheet Tabs",
        columns=[("Tab", "cyan"), ("Rows", "green"), ("Columns", "")],
        rows=rows,
    )


def create_cache_status_table(status: dict[str, dict[str, Any]]) -> Table:
    rows = []
    for key, entry in status.items():
        if not entry["cached"]:
            state = "❌ Empty"
        elif entry["stale"]:
            state = "⏳ Stale"
        else:
            state = "✅ Fresh"
        age = f"{entry['age_seconds']:.0f}s" if entry["age_seconds"] is not None else "-"
        rows.append([key, state, age, entry["file"]])
    return create_multi_column_table(
        title="💾 Cache Status",
        columns=[("Source", "bold white"), ("State", ""), ("Age", "cyan"), ("File", "dim")],
        rows=rows,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
