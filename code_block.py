"""
Splitting one fenced code block into ``Command`` records.

A block holds any number of commands separated by blank lines.  Each
command is an optional run of ``#`` description comments, an optional
metadata comment, and one logical invocation that may continue over
several physical lines ending in ``\\``::

    # List storage accounts
    # ❌ Destructive | ✅ Idempotent | ❌ OpenWorld | ✅ ReadOnly | ❌ Secret | ❌ LocalRequired
    azmcp storage account get --subscription <subscription> \\
                              [--account <account>]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from command_syntax import (
    is_example,
    is_parameter_token,
    parse_parameters_and_groups,
    tokenize_command_line,
)
from config import PROGRAM_NAME
from line_classifier import LineKind, classify_line, is_command_line
from models import Command, ToolMetadata

logger = logging.getLogger(__name__)


@dataclass
class CommandAccumulator:
    """Pending state for the command currently being collected.

    A fresh accumulator replaces the old one after every flush.
    """

    description: str | None = None
    metadata: ToolMetadata | None = None
    lines: list[str] = field(default_factory=list)
    start_line: int = 0

    @property
    def in_progress(self) -> bool:
        return bool(self.lines)

    def add_description(self, text: str) -> None:
        if not text:
            return
        self.description = text if self.description is None else f"{self.description} {text}"

    def logical_line(self) -> str:
        """Physical lines joined into one, continuation backslashes removed."""
        return " ".join(l.rstrip().rstrip("\\").strip() for l in self.lines)


def build_command(
    acc: CommandAccumulator,
    raw_block: str,
    program_name: str = PROGRAM_NAME,
) -> Command | None:
    """Turn a finished accumulator into a ``Command``.

    Returns ``None`` when the joined text is not an invocation of
    *program_name*.
    """
    full_line = acc.logical_line()
    if not is_command_line(full_line, program_name):
        logger.debug("Discarding non-command text at line %d: %r", acc.start_line, full_line)
        return None

    tokens = tokenize_command_line(full_line)
    if len(tokens) < 2:
        return None

    param_start = next(
        (k for k in range(2, len(tokens)) if is_parameter_token(tokens[k])),
        len(tokens),
    )
    parameters, groups = parse_parameters_and_groups(" ".join(tokens[param_start:]))

    return Command(
        description=acc.description or "",
        command_text=" ".join(tokens[:param_start]),
        namespace=tokens[1],
        sub_commands=tokens[2:param_start],
        metadata=acc.metadata,
        parameters=parameters,
        parameter_alternative_groups=groups,
        is_example=is_example(full_line),
        raw_block=raw_block,
        source_line=acc.start_line,
    )


def parse_commands_from_code_block(
    block: str,
    start_line: int = 1,
    program_name: str = PROGRAM_NAME,
) -> list[Command]:
    """Parse every command in the fenced-block content *block*.

    *start_line* is the 1-based source line of the block's first content
    line; each command records the line its invocation starts on.
    """
    commands: list[Command] = []
    acc = CommandAccumulator()

    def _flush() -> CommandAccumulator:
        cmd = build_command(acc, block, program_name)
        if cmd is not None:
            commands.append(cmd)
        return CommandAccumulator()

    for offset, raw in enumerate(block.split("\n")):
        line = raw.rstrip()
        stripped = line.lstrip()

        # ── blank line ends the command in progress ──
        if not stripped:
            if acc.in_progress:
                acc = _flush()
            continue

        classified = classify_line(stripped, program_name)

        # ── comment: metadata or description ──
        if classified.kind == LineKind.METADATA or stripped.startswith("#"):
            if acc.in_progress:
                acc = _flush()
            if classified.metadata is not None:
                acc.metadata = classified.metadata
            else:
                acc.add_description(stripped.lstrip("#").strip())
            continue

        # ── invocation, possibly continued ──
        if acc.in_progress or classified.kind == LineKind.COMMAND:
            if not acc.in_progress:
                acc.start_line = start_line + offset
            acc.lines.append(line)
            if not line.endswith("\\"):
                acc = _flush()

    if acc.in_progress:
        _flush()

    return commands
