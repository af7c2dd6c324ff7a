"""
Abstract base parser for command-reference documents.

Concrete subclasses (``MarkdownCommandParser``) implement the document
walk over a list of lines; this class supplies the text and file entry
points and the summary used by the CLI and the log output.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from models import CommandDocument

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Base class for all command-reference parsers."""

    # ── public entry points ──

    def parse(self, text: str) -> CommandDocument:
        """Parse a whole document given as one string.

        Only ``\\n`` separates lines; other Unicode line breaks stay in
        the text.
        """
        return self.parse_lines(text.split("\n"))

    def parse_file(self, file_path: str | Path) -> CommandDocument:
        """Read *file_path* (UTF-8) and parse it.

        I/O errors propagate to the caller.
        """
        path = Path(file_path)
        document = self.parse(path.read_text(encoding="utf-8"))
        logger.info("Parsed %s: %s", path, self.summarize(document))
        return document

    def parse_lines(self, lines: list[str]) -> CommandDocument:
        """Parse an ordered sequence of lines into a ``CommandDocument``."""
        return self._build_document([line.rstrip("\r") for line in lines])

    # ── abstract methods ── (to be implemented by subclasses)

    @abstractmethod
    def _build_document(self, lines: list[str]) -> CommandDocument:
        """Walk *lines* once and build the document tree."""
        ...

    # ── concrete helpers ──

    @staticmethod
    def summarize(document: CommandDocument) -> dict[str, int]:
        """Count what the document contains.

        Keys: ``global_options``, ``service_sections``, ``commands``,
        ``definitions``, ``examples``.
        """
        commands = document.all_commands()
        examples = sum(1 for c in commands if c.is_example)
        return {
            "global_options": len(document.global_options),
            "service_sections": len(document.service_sections),
            "commands": len(commands),
            "definitions": len(commands) - examples,
            "examples": examples,
        }
