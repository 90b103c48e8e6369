"""
Daily table renderers — write and read back the per-day summary document.

Every renderer produces the same row layout:

    row 1   title
    row 2   Date | Total Duration | Work Sessions
    row 3+  one row per date, ascending
    blank
    last    Generated on: <timestamp>

XlsxTableRenderer adds cosmetic styling (fonts, fills, sheet protection);
the CSV and JSON renderers carry the data only.
"""

from __future__ import annotations

import csv
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Type

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from src.data.models import TABLE_HEADERS, DailyRecord

logger = logging.getLogger(__name__)

TABLE_TITLE = "Work Time Tracker - Work Sessions Log"
SHEET_NAME = "Work Sessions"
GENERATED_PREFIX = "Generated on: "


def build_rows(table: Sequence[DailyRecord], generated_at: datetime) -> List[List[str]]:
    """Lay the table out as plain rows (title, header, data, blank, footer)."""
    rows: List[List[str]] = [[TABLE_TITLE, "", ""], list(TABLE_HEADERS)]
    for record in table:
        row = record.to_row()
        rows.append([row[h] for h in TABLE_HEADERS])
    rows.append(["", "", ""])
    rows.append([GENERATED_PREFIX + generated_at.strftime("%Y-%m-%d %H:%M:%S"), "", ""])
    return rows


def parse_rows(rows: Iterable[Sequence[object]]) -> List[DailyRecord]:
    """Inverse of build_rows: find the header, read dates until the first blank."""
    records: List[DailyRecord] = []
    in_body = False
    for raw in rows:
        cells = ["" if c is None else str(c) for c in raw][:3]
        cells += [""] * (3 - len(cells))
        if not in_body:
            in_body = tuple(c.strip() for c in cells) == TABLE_HEADERS
            continue
        if not cells[0].strip():
            break
        records.append(DailyRecord.from_row(dict(zip(TABLE_HEADERS, cells))))
    return records


class TableRenderer(ABC):
    """Writes and reads the daily summary in one file format."""

    extension: str = ""

    def load(self, path: Path) -> List[DailyRecord]:
        """Read a previously written table. Missing or unreadable → empty."""
        if not path.exists():
            return []
        try:
            return self._read(path)
        except Exception:
            logger.exception("Error reading summary table %s; starting a new one", path)
            return []

    @abstractmethod
    def _read(self, path: Path) -> List[DailyRecord]:
        ...

    @abstractmethod
    def write(self, path: Path, table: Sequence[DailyRecord],
              generated_at: Optional[datetime] = None) -> None:
        ...


class CsvTableRenderer(TableRenderer):
    extension = "csv"

    def _read(self, path: Path) -> List[DailyRecord]:
        with open(path, newline="", encoding="utf-8") as f:
            return parse_rows(csv.reader(f))

    def write(self, path: Path, table: Sequence[DailyRecord],
              generated_at: Optional[datetime] = None) -> None:
        rows = build_rows(table, generated_at or datetime.now())
        with open(path, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(rows)


class JsonTableRenderer(TableRenderer):
    extension = "json"

    def _read(self, path: Path) -> List[DailyRecord]:
        doc = json.loads(path.read_text(encoding="utf-8"))
        return [DailyRecord.from_row(r) for r in doc.get("rows", [])]

    def write(self, path: Path, table: Sequence[DailyRecord],
              generated_at: Optional[datetime] = None) -> None:
        generated_at = generated_at or datetime.now()
        doc = {
            "title": TABLE_TITLE,
            "headers": list(TABLE_HEADERS),
            "rows": [r.to_row() for r in table],
            "generatedOn": generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        }
        path.write_text(json.dumps(doc, indent=2), encoding="utf-8")


# Palette for the styled workbook
_BLUE = "2F5597"
_DARK_BLUE = "1F4287"
_LIGHT_BLUE = "D9E2F3"
_ZEBRA = "F8F9FA"
_GRID = "D3D3D3"


class XlsxTableRenderer(TableRenderer):
    """Styled spreadsheet via openpyxl; one sheet named 'Work Sessions'."""

    extension = "xlsx"
    column_widths = (15, 15, 60)

    def _read(self, path: Path) -> List[DailyRecord]:
        wb = load_workbook(path, read_only=True)
        try:
            ws = wb[SHEET_NAME] if SHEET_NAME in wb.sheetnames else wb.worksheets[0]
            return parse_rows(ws.iter_rows(values_only=True))
        finally:
            wb.close()

    def write(self, path: Path, table: Sequence[DailyRecord],
              generated_at: Optional[datetime] = None) -> None:
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_NAME

        rows = build_rows(table, generated_at or datetime.now())
        for row in rows:
            ws.append(row)

        self._apply_styles(ws, data_rows=len(table))
        ws.protection.sheet = True
        wb.save(path)

    def _apply_styles(self, ws, data_rows: int) -> None:
        for idx, width in enumerate(self.column_widths):
            ws.column_dimensions["ABC"[idx]].width = width

        thin = Side(style="thin", color=_GRID)
        medium = Side(style="medium", color=_DARK_BLUE)
        last_data_row = 2 + data_rows

        # Title
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=3)
        title = ws.cell(row=1, column=1)
        title.font = Font(name="Calibri", size=14, bold=True, color=_BLUE)
        title.fill = PatternFill(fill_type="solid", fgColor=_LIGHT_BLUE)
        title.alignment = Alignment(horizontal="center", vertical="center")
        title.border = Border(bottom=Side(style="medium", color=_BLUE))
        ws.row_dimensions[1].height = 35

        # Header
        ws.row_dimensions[2].height = 40
        for col in range(1, 4):
            cell = ws.cell(row=2, column=col)
            cell.font = Font(name="Calibri", size=12, bold=True, color="FFFFFF")
            cell.fill = PatternFill(fill_type="solid", fgColor=_BLUE)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = Border(top=medium, bottom=medium, left=medium, right=medium)

        # Body
        for row in range(3, last_data_row + 1):
            ws.row_dimensions[row].height = 25
            for col in range(1, 4):
                cell = ws.cell(row=row, column=col)
                cell.font = Font(name="Calibri", size=11,
                                 color=_BLUE if col == 2 else None)
                cell.alignment = Alignment(
                    horizontal="left" if col == 3 else "center",
                    vertical="center", wrap_text=True,
                )
                cell.border = Border(top=thin, bottom=thin, left=thin, right=thin)
                if row % 2 == 1:
                    cell.fill = PatternFill(fill_type="solid", fgColor=_ZEBRA)

        ws.cell(row=last_data_row + 2, column=1).font = Font(
            name="Calibri", size=10, italic=True
        )


RENDERERS: Dict[str, Type[TableRenderer]] = {
    "xlsx": XlsxTableRenderer,
    "csv": CsvTableRenderer,
    "json": JsonTableRenderer,
}


def get_renderer(table_format: str) -> TableRenderer:
    try:
        return RENDERERS[table_format.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown table format '{table_format}', expected one of "
            f"{', '.join(sorted(RENDERERS))}"
        ) from None
