"""
Line classification for command-reference Markdown.

Each line is tested against a small fixed grammar and mapped to exactly
one ``LineKind``.  Classification looks only at the line itself.  The
code-block splitter in ``code_block.py`` dispatches on ``classify_line``;
the document walk in ``parser_markdown.py`` uses the single predicates.
Nothing here raises: an unrecognised line is ``PLAIN``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from config import METADATA_FIELDS, METADATA_TRUE, PROGRAM_NAME
from models import ToolMetadata


# ── Regex patterns ────────────────────────────────────────────────────────

# "# Title", "## Section", "### Service", "#### Sub-section"
RE_HEADING = re.compile(r"^(#{1,4})\s+(.+)$")

# Opening or closing fence, optional language tag
RE_FENCE = re.compile(r"^\s*```\s*([\w+-]*)")

# "|---|---|" / "| `---` |"  (dashes right after the first pipe)
RE_TABLE_SEPARATOR = re.compile(r"^\s*\|\s*:?`?-{2,}")

# "# ❌ Destructive | ✅ Idempotent | ... | ❌ LocalRequired"
RE_METADATA = re.compile(
    r"^\s*#\s*"
    + r"\s*\|\s*".join(rf"([❌✅])\s*{name}" for name in METADATA_FIELDS)
)


class LineKind(str, Enum):
    """Every shape a line can take."""

    HEADING = "heading"
    FENCE = "fence"
    TABLE_SEPARATOR = "table_separator"
    TABLE_ROW = "table_row"
    METADATA = "metadata"
    COMMAND = "command"
    PLAIN = "plain"


@dataclass(frozen=True)
class ClassifiedLine:
    """A line tagged with its kind and whatever the kind carries.

    * ``HEADING``  → ``level`` (1–4) and ``text``
    * ``FENCE``    → ``language`` (may be empty)
    * ``METADATA`` → ``metadata``
    """

    kind: LineKind
    level: int = 0
    text: str = ""
    language: str = ""
    metadata: ToolMetadata | None = None


# ── Predicates ────────────────────────────────────────────────────────────


def heading_level(line: str) -> int:
    """Return the heading level (1–4) of *line*, or 0 if it is no heading."""
    m = RE_HEADING.match(line)
    if not m or not m.group(2).strip():
        return 0
    return len(m.group(1))


def heading_text(line: str) -> str:
    m = RE_HEADING.match(line)
    return m.group(2).strip() if m else ""


def is_fence(line: str) -> bool:
    return RE_FENCE.match(line) is not None


def is_table_row(line: str) -> bool:
    return line.lstrip().startswith("|")


def is_table_separator(line: str) -> bool:
    return RE_TABLE_SEPARATOR.match(line) is not None


def is_command_line(line: str, program_name: str = PROGRAM_NAME) -> bool:
    """True if *line* starts an invocation of *program_name*."""
    return re.match(rf"^{re.escape(program_name)}\s+", line.lstrip()) is not None


def parse_metadata(line: str) -> ToolMetadata | None:
    """Parse the six-field checkmark comment, or return ``None``."""
    m = RE_METADATA.match(line)
    if not m:
        return None
    flags = [g == METADATA_TRUE for g in m.groups()]
    return ToolMetadata(*flags)


# ── Classification ────────────────────────────────────────────────────────


def classify_line(line: str, program_name: str = PROGRAM_NAME) -> ClassifiedLine:
    """Classify *line* into exactly one ``LineKind``.

    The metadata comment is tested before headings because it also
    starts with ``#``.
    """
    metadata = parse_metadata(line)
    if metadata is not None:
        return ClassifiedLine(LineKind.METADATA, metadata=metadata)

    level = heading_level(line)
    if level:
        return ClassifiedLine(LineKind.HEADING, level=level, text=heading_text(line))

    m = RE_FENCE.match(line)
    if m:
        return ClassifiedLine(LineKind.FENCE, language=m.group(1))

    if is_table_separator(line):
        return ClassifiedLine(LineKind.TABLE_SEPARATOR)
    if is_table_row(line):
        return ClassifiedLine(LineKind.TABLE_ROW)

    if is_command_line(line, program_name):
        return ClassifiedLine(LineKind.COMMAND)

    return ClassifiedLine(LineKind.PLAIN)
