"""
Result Renderer

Turns result rows into a column-aligned text table. Columns named
``raw`` hold registration-system payloads and are never displayed.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import tabulate as tabulate_module
from tabulate import tabulate

from .database import Cell, CellKind, ResultRow
from .errors import RenderError

HIDDEN_COLUMNS = frozenset({"raw"})
TABLE_FORMAT = "rounded_outline"
# one empty header cell and no data rows
EMPTY_FRAME = "╭──╮\n│  │\n╰──╯"


@dataclass
class Table:
    """Header plus data rows, all cells already converted to text"""
    header: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def render(self) -> str:
        if not self.header:
            return EMPTY_FRAME

        # cells are shown exactly as stored, surrounding spaces included
        preserve = tabulate_module.PRESERVE_WHITESPACE
        tabulate_module.PRESERVE_WHITESPACE = True
        try:
            # rounded_outline draws a single rule under the header and none between rows
            return tabulate(
                self.rows,
                headers=self.header,
                tablefmt=TABLE_FORMAT,
                disable_numparse=True,
                missingval="",
            )
        finally:
            tabulate_module.PRESERVE_WHITESPACE = preserve


def cell_to_text(column: str, cell: Cell) -> str:
    if cell.kind is CellKind.TEXT:
        return cell.value
    if cell.kind is CellKind.INTEGER:
        return str(cell.value)
    if cell.kind is CellKind.NULL:
        return ""
    raise RenderError(f"Unsupported value of type {cell.type_name} in column '{column}'")


def build_table(rows: Sequence[ResultRow]) -> Table:
    """
    Convert result rows into a Table.

    Every row must carry the same columns as the first one; an empty
    sequence yields an empty header and no data rows.
    """
    table = Table()
    for index, row in enumerate(rows):
        header = [name for name in row.columns if name not in HIDDEN_COLUMNS]
        if index == 0:
            table.header = header
        elif header != table.header:
            raise RenderError(
                f"Row {index} has columns {header}, expected {table.header}"
            )
        table.rows.append([
            cell_to_text(name, cell)
            for name, cell in row.items()
            if name not in HIDDEN_COLUMNS
        ])
    return table


def render_table(rows: Sequence[ResultRow]) -> str:
    return build_table(rows).render()
