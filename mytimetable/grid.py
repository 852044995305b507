"""
Grid reconstruction (markup table -> dense 2D grid).

- Locates the first <table> in the converted markup
- Reads each row into RawCell descriptors (text + rowspan/colspan)
- Resolves the spans into a rectangular grid stored as one flat tuple,
  indexed by row * width + col

Merged regions are written the same way the source documents draw them:
the top-left position is the origin cell, every other covered position is
a placeholder that later stages must not parse on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from mytimetable.model import GridCell, RawCell


_WS_RE = re.compile(r"\s+")


class MalformedRow(ValueError):
    """Raised internally for a row that cannot be read; the row is skipped."""


@dataclass(frozen=True)
class Grid:
    height: int
    width: int
    cells: Tuple[Optional[GridCell], ...]

    def cell(self, row: int, col: int) -> Optional[GridCell]:
        """
        Return the cell at (row, col), or None for an empty or out-of-range position.
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            return None
        return self.cells[row * self.width + col]

    def text(self, row: int, col: int) -> str:
        c = self.cell(row, col)
        return c.text if c is not None else ""


# ---------------------------------------------------------------------------
# Markup -> row descriptors
# ---------------------------------------------------------------------------


def locate_table(markup: str) -> Optional[Tag]:
    """
    Return the first table element of the markup, or None.
    """
    soup = BeautifulSoup(markup or "", "html.parser")
    return soup.find("table")


def clean_cell_text(cell: Tag) -> str:
    # Paragraphs and line breaks inside a cell become single spaces
    return _WS_RE.sub(" ", cell.get_text(" ")).strip()


def _span(cell: Tag, name: str) -> int:
    raw = cell.get(name)
    if raw is None:
        return 1
    raw = str(raw).strip()
    if not raw.isdigit() or int(raw) < 1:
        raise MalformedRow(f"invalid {name}={raw!r}")
    return int(raw)


def _read_row(tr: Tag) -> List[RawCell]:
    out: List[RawCell] = []
    for cell in tr.find_all(["td", "th"], recursive=False):
        out.append(
            RawCell(
                text=clean_cell_text(cell),
                row_span=_span(cell, "rowspan"),
                col_span=_span(cell, "colspan"),
            )
        )
    if not out:
        raise MalformedRow("row has no cells")
    return out


def read_table_rows(table: Tag) -> List[List[RawCell]]:
    """
    Read the table's own rows (not rows of nested tables) into RawCell lists.

    Rows without cells, or whose span attributes cannot be read, are
    skipped instead of aborting the whole table.
    """
    rows: List[List[RawCell]] = []
    for tr in table.find_all("tr"):
        if tr.find_parent("table") is not table:
            continue
        try:
            rows.append(_read_row(tr))
        except MalformedRow:
            continue
    return rows


# ---------------------------------------------------------------------------
# Span resolution
# ---------------------------------------------------------------------------


def build_grid(rows: Sequence[Sequence[RawCell]]) -> Grid:
    """
    Resolve row/column spans into a dense grid.

    Rows are processed top to bottom and cells left to right. Before a cell
    is placed, positions already covered by a span from an earlier row are
    skipped.
    """
    placed: Dict[Tuple[int, int], GridCell] = {}

    for r, row in enumerate(rows):
        col = 0
        for raw in row:
            while (r, col) in placed:
                col += 1

            for dr in range(raw.row_span):
                for dc in range(raw.col_span):
                    is_origin = dr == 0 and dc == 0
                    placed[(r + dr, col + dc)] = GridCell(
                        text=raw.text,
                        is_placeholder=not is_origin,
                        row_span=raw.row_span if is_origin else 0,
                    )

            col += raw.col_span

    height = max([len(rows)] + [r + 1 for r, _ in placed])
    width = max([0] + [c + 1 for _, c in placed])

    cells = tuple(placed.get((r, c)) for r in range(height) for c in range(width))
    return Grid(height=height, width=width, cells=cells)


def grid_from_markup(markup: str) -> Optional[Grid]:
    """
    Locate the first table and build its grid. Returns None when there is no table.
    """
    table = locate_table(markup)
    if table is None:
        return None
    return build_grid(read_table_rows(table))
