"""
Markdown → ``CommandDocument`` parser for the CLI command reference.

Walks the document once, top to bottom, with an explicit line cursor::

    # Title                      → CommandDocument.title (+ introduction)
    ## Global Options            → option table → GlobalOption
    ## Available Commands
    ### Server Operations        → ServerOperations (H4 = mode / start options)
    ### Azure Storage Operations → ServiceSection
    #### Blob                    → SubSection
    ## Response Format           → JSON fence + field table
    ## Error Handling            → prose

Fenced blocks under service sections are handed to ``code_block.py``,
tables to ``table_parser.py``.  Unknown H2 sections are skipped.  The
walk never raises on malformed input.
"""

from __future__ import annotations

import logging

from base_parser import BaseParser
from code_block import parse_commands_from_code_block
from config import (
    AVAILABLE_COMMANDS_HEADING,
    ERROR_HANDLING_HEADING,
    GLOBAL_OPTIONS_HEADING,
    PROGRAM_NAME,
    RESPONSE_FORMAT_HEADING,
    SERVER_OPERATIONS_HEADING,
    SERVER_START_OPTIONS_HEADING,
    derive_area_name,
    join_trimmed,
)
from line_classifier import heading_level, heading_text, is_fence
from models import (
    Command,
    CommandDocument,
    GlobalOption,
    ParameterTable,
    ResponseField,
    ResponseFormat,
    ServerMode,
    ServerOperations,
    ServerStartOption,
    ServiceSection,
    SubSection,
)
from table_parser import is_table_header_row, parse_option_table

logger = logging.getLogger(__name__)


class MarkdownCommandParser(BaseParser):
    """Parse command-reference Markdown into a ``CommandDocument``."""

    def __init__(self, program_name: str = PROGRAM_NAME) -> None:
        self._program_name = program_name
        self._lines: list[str] = []

    # ── BaseParser interface ──────────────────────────────────────────────

    def _build_document(self, lines: list[str]) -> CommandDocument:
        self._lines = lines
        doc = CommandDocument()

        i = self._parse_title(doc)
        i = self._parse_introduction(doc, i)

        while i < len(self._lines):
            if is_fence(self._lines[i]):
                _, i = self._extract_code_block(i)
                continue
            if heading_level(self._lines[i]) != 2:
                i += 1
                continue

            heading = heading_text(self._lines[i])
            i += 1

            if heading == GLOBAL_OPTIONS_HEADING:
                doc.global_options, i = self._parse_global_options(i)
            elif heading == AVAILABLE_COMMANDS_HEADING:
                i = self._parse_available_commands(doc, i)
            elif heading == RESPONSE_FORMAT_HEADING:
                doc.response_format, i = self._parse_response_format(i)
            elif heading == ERROR_HANDLING_HEADING:
                text_lines, i = self._collect_text(i, 2)
                doc.error_handling = join_trimmed(text_lines)
            else:
                logger.debug("Skipping unknown section %r at line %d", heading, i)
                _, i = self._collect_text(i, 2)

        return doc

    # ── cursor helpers ────────────────────────────────────────────────────

    def _at_boundary(self, i: int, max_level: int) -> bool:
        """True if ``lines[i]`` is a heading of level 2..*max_level*.

        An H1 never closes a section; only the title is an H1.
        """
        return 2 <= heading_level(self._lines[i]) <= max_level

    def _extract_code_block(self, i: int) -> tuple[str, int]:
        """Return the content of the fence opened at *i* and the next index.

        An unclosed fence runs to the end of the document.
        """
        content: list[str] = []
        i += 1
        while i < len(self._lines) and not is_fence(self._lines[i]):
            content.append(self._lines[i])
            i += 1
        if i < len(self._lines):
            i += 1
        return "\n".join(content), i

    def _fenced_lines(self, i: int) -> tuple[list[str], int]:
        """Return the raw lines of the fence opened at *i*, fences included."""
        _, next_i = self._extract_code_block(i)
        return self._lines[i:next_i], next_i

    def _collect_text(self, i: int, max_level: int) -> tuple[list[str], int]:
        """Collect raw lines up to the next heading of level 2..*max_level*.

        Fenced blocks are copied through whole, so ``#`` lines inside
        them are never mistaken for headings.
        """
        collected: list[str] = []
        while i < len(self._lines) and not self._at_boundary(i, max_level):
            if is_fence(self._lines[i]):
                fenced, i = self._fenced_lines(i)
                collected.extend(fenced)
                continue
            collected.append(self._lines[i])
            i += 1
        return collected, i

    def _parse_commands(self, i: int) -> tuple[list[Command], int]:
        """Parse the fenced block opened at *i* into commands."""
        block, next_i = self._extract_code_block(i)
        # the first content line is i + 1 (0-based), i.e. line i + 2
        commands = parse_commands_from_code_block(block, i + 2, self._program_name)
        return commands, next_i

    # ── title & introduction ──────────────────────────────────────────────

    def _parse_title(self, doc: CommandDocument) -> int:
        """Find the H1 and return the index after it.

        If an H2 comes first there is no title; its index is returned so
        the section walk still sees it.
        """
        i = 0
        while i < len(self._lines):
            line = self._lines[i]
            if is_fence(line):
                _, i = self._extract_code_block(i)
                continue
            level = heading_level(line)
            if level == 1:
                doc.title = heading_text(line)
                return i + 1
            if level == 2:
                return i
            i += 1
        return len(self._lines)

    def _parse_introduction(self, doc: CommandDocument, i: int) -> int:
        intro, i = self._collect_text(i, 2)
        doc.introduction = join_trimmed(intro)
        return i

    # ── H2 sections ───────────────────────────────────────────────────────

    def _parse_global_options(self, i: int) -> tuple[list[GlobalOption], int]:
        options: list[GlobalOption] = []
        while i < len(self._lines) and not self._at_boundary(i, 2):
            if is_table_header_row(self._lines, i):
                entries, i = parse_option_table(self._lines, i)
                options.extend(
                    GlobalOption(e.name, e.is_required, e.default, e.description)
                    for e in entries
                )
            elif is_fence(self._lines[i]):
                _, i = self._extract_code_block(i)
            else:
                i += 1
        return options, i

    def _parse_available_commands(self, doc: CommandDocument, i: int) -> int:
        while i < len(self._lines) and not self._at_boundary(i, 2):
            if is_fence(self._lines[i]):
                _, i = self._extract_code_block(i)
                continue
            if heading_level(self._lines[i]) != 3:
                i += 1
                continue

            heading = heading_text(self._lines[i])
            i += 1

            if heading == SERVER_OPERATIONS_HEADING:
                doc.server_operations, i = self._parse_server_operations(i)
            else:
                section, i = self._parse_service_section(i, heading)
                doc.service_sections.append(section)
                logger.debug(
                    "Section %r (%s): %d commands",
                    section.heading, section.area_name, len(section.all_commands()),
                )
        return i

    def _parse_response_format(self, i: int) -> tuple[ResponseFormat, int]:
        rf = ResponseFormat()
        desc_lines: list[str] = []

        while i < len(self._lines) and not self._at_boundary(i, 2):
            if is_fence(self._lines[i]):
                rf.json_schema, i = self._extract_code_block(i)
            elif is_table_header_row(self._lines, i):
                entries, i = parse_option_table(self._lines, i)
                rf.fields.extend(ResponseField(e.name, e.description) for e in entries)
            elif heading_level(self._lines[i]) == 3:
                i += 1
            else:
                desc_lines.append(self._lines[i])
                i += 1

        rf.description = join_trimmed(desc_lines)
        return rf, i

    # ── Server Operations (H3) ────────────────────────────────────────────

    def _parse_server_operations(self, i: int) -> tuple[ServerOperations, int]:
        ops = ServerOperations()
        content_lines: list[str] = []

        while i < len(self._lines) and not self._at_boundary(i, 3):
            if is_fence(self._lines[i]):
                fenced, i = self._fenced_lines(i)
                content_lines.extend(fenced)
                continue
            if heading_level(self._lines[i]) != 4:
                content_lines.append(self._lines[i])
                i += 1
                continue

            name = heading_text(self._lines[i])
            i += 1

            if name == SERVER_START_OPTIONS_HEADING:
                while i < len(self._lines) and not self._at_boundary(i, 4):
                    if is_fence(self._lines[i]):
                        fenced, i = self._fenced_lines(i)
                        content_lines.extend(fenced)
                    elif is_table_header_row(self._lines, i):
                        entries, i = parse_option_table(self._lines, i)
                        ops.start_options.extend(
                            ServerStartOption(e.name, e.is_required, e.default, e.description)
                            for e in entries
                        )
                    else:
                        content_lines.append(self._lines[i])
                        i += 1
            else:
                mode, i = self._parse_server_mode(i, name)
                ops.modes.append(mode)

        ops.description = join_trimmed(content_lines)
        ops.raw_content = ops.description
        return ops, i

    def _parse_server_mode(self, i: int, name: str) -> tuple[ServerMode, int]:
        mode = ServerMode(name=name)
        desc_lines: list[str] = []

        while i < len(self._lines) and not self._at_boundary(i, 4):
            if is_fence(self._lines[i]):
                block, i = self._extract_code_block(i)
                mode.code_blocks.append(block)
            else:
                desc_lines.append(self._lines[i])
                i += 1

        mode.description = join_trimmed(desc_lines)
        return mode, i

    # ── service sections (H3) and sub-sections (H4) ───────────────────────

    def _parse_service_section(self, i: int, heading: str) -> tuple[ServiceSection, int]:
        section = ServiceSection(heading=heading, area_name=derive_area_name(heading))
        desc_lines: list[str] = []

        while i < len(self._lines) and not self._at_boundary(i, 3):
            line = self._lines[i]

            if heading_level(line) == 4:
                if desc_lines:
                    section.description = join_trimmed(desc_lines)
                    desc_lines = []
                sub, i = self._parse_sub_section(i + 1, heading_text(line))
                section.sub_sections.append(sub)
            elif is_fence(line):
                commands, i = self._parse_commands(i)
                section.commands.extend(commands)
            elif is_table_header_row(self._lines, i):
                entries, i = parse_option_table(self._lines, i)
                section.parameter_tables.append(ParameterTable(entries=entries))
            else:
                desc_lines.append(line)
                i += 1

        if desc_lines:
            section.description = join_trimmed(desc_lines)
        return section, i

    def _parse_sub_section(self, i: int, heading: str) -> tuple[SubSection, int]:
        sub = SubSection(heading=heading)
        desc_lines: list[str] = []

        while i < len(self._lines) and not self._at_boundary(i, 4):
            line = self._lines[i]

            if is_fence(line):
                commands, i = self._parse_commands(i)
                sub.commands.extend(commands)
            elif is_table_header_row(self._lines, i):
                entries, i = parse_option_table(self._lines, i)
                sub.parameter_tables.append(ParameterTable(entries=entries))
            else:
                desc_lines.append(line)
                i += 1

        sub.description = join_trimmed(desc_lines)
        logger.debug("  Sub-section %r: %d commands", sub.heading, len(sub.commands))
        return sub, i


def parse_markdown(text: str, program_name: str = PROGRAM_NAME) -> CommandDocument:
    """Parse command-reference Markdown held in a string."""
    return MarkdownCommandParser(program_name).parse(text)
