# ABOUTME: Spreadsheet source reading Google Sheets tabs through the gviz JSON export
# ABOUTME: Decodes the prefixed payload into rows keyed by normalized header labels

import asyncio
import json
import re

import httpx

from crewbase.models import SheetRow, SheetTab
from crewbase.sources.base import BaseHttpSource

GVIZ_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq"


def normalize_column(label: str) -> str:
    """``"Players, Roles and Tasks"`` -> ``"players,rolesandtasks"``."""
    return re.sub(r"\s+", "", label.lower())


def decode_gviz(payload: str) -> list[SheetRow]:
    """Decode a ``google.visualization.Query.setResponse(...)`` payload into rows.

    Every row gets one key per column; empty or missing cells become "".
    """
    start = payload.find("{")
    end = payload.rfind("}")
    if start == -1 or end < start:
        raise ValueError("Spreadsheet payload holds no JSON object")

    table = json.loads(payload[start : end + 1])["table"]
    columns = [normalize_column(col.get("label") or "") for col in table["cols"]]

    rows: list[SheetRow] = []
    for row in table.get("rows") or []:
        cells = row.get("c") or []
        record: SheetRow = {}
        for index, column in enumerate(columns):
            cell = cells[index] if index < len(cells) else None
            value = cell.get("v") if cell else None
            record[column] = "" if value is None else value
        rows.append(record)
    return rows


class SheetSource(BaseHttpSource):
    """All configured tabs of the match spreadsheet."""

    name = "sheet"

    def __init__(
        self,
        sheet_id: str,
        gids: list[str],
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self.sheet_id = sheet_id
        self.gids = list(gids)

    async def fetch_tab(self, gid: str, index: int = 0) -> SheetTab:
        url = GVIZ_URL.format(sheet_id=self.sheet_id)
        payload = await self.get_text(url, params={"tqx": "out:json", "gid": gid})
        rows = decode_gviz(payload)
        self.logger.debug("Decoded spreadsheet tab", gid=gid, rows=len(rows))
        return SheetTab(sheet=index, data=rows)

    async def fetch_rows(self, gid: str) -> list[SheetRow]:
        tab = await self.fetch_tab(gid)
        return tab.data

    async def _fetch(self) -> list[SheetTab]:
        tabs = await asyncio.gather(*(self.fetch_tab(gid, index) for index, gid in enumerate(self.gids)))
        self.logger.info("Fetched spreadsheet", tabs=len(tabs), rows=sum(len(tab.data) for tab in tabs))
        return list(tabs)
