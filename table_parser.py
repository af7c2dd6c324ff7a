"""
Markdown table parsing for option and parameter tables.

Handles the pipe tables used throughout the command reference::

    | Option | Required | Default | Description |
    |--------|----------|---------|-------------|
    | `--subscription` | No | Environment variable | Azure subscription ID |

Columns are mapped by position: first → name, second → required
(``Yes``, case-insensitive), last → description.  A ``Default`` column is
used only when the header row names one.
"""

from __future__ import annotations

import logging
import re

from config import clean_inline_code
from line_classifier import is_table_row, is_table_separator
from models import ParameterTableEntry

logger = logging.getLogger(__name__)

# A pipe not preceded by a backslash
RE_CELL_SEPARATOR = re.compile(r"(?<!\\)\|")


def split_table_cells(line: str) -> list[str]:
    """Split one table row into trimmed cell texts.

    Outer pipes are dropped; ``\\|`` inside a cell stays a literal ``|``.
    """
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [c.strip().replace("\\|", "|") for c in RE_CELL_SEPARATOR.split(row)]


def is_table_header_row(lines: list[str], i: int) -> bool:
    """True if ``lines[i]`` is a table row directly followed by a separator."""
    if i + 1 >= len(lines):
        return False
    return is_table_row(lines[i]) and is_table_separator(lines[i + 1])


def _default_column(header: list[str]) -> int | None:
    for idx, cell in enumerate(header):
        if "default" in cell.lower():
            return idx
    return None


def parse_option_table(lines: list[str], i: int) -> tuple[list[ParameterTableEntry], int]:
    """Parse the table whose header row is ``lines[i]``.

    Returns the entries in row order and the index of the first line
    after the table.  Rows with fewer than two cells are skipped.
    """
    header = split_table_cells(lines[i])
    default_idx = _default_column(header)
    i += 2  # header + separator

    entries: list[ParameterTableEntry] = []
    while i < len(lines) and is_table_row(lines[i]):
        cells = split_table_cells(lines[i])
        if len(cells) >= 2:
            default = ""
            if default_idx is not None and 1 < default_idx < len(cells) - 1:
                default = cells[default_idx]
            entries.append(
                ParameterTableEntry(
                    name=clean_inline_code(cells[0]),
                    is_required=cells[1].strip().lower() == "yes",
                    default=default,
                    description=cells[-1],
                )
            )
        else:
            logger.debug("Skipping short table row at line %d: %r", i + 1, lines[i])
        i += 1

    return entries, i
