"""
JSON serialisation of ``CommandDocument``.

Keys are camelCase and ``None`` fields are omitted (see ``models.py``);
reading fills missing keys with the dataclass defaults, so a document
survives ``deserialize(serialize(doc)) == doc`` unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path

from models import CommandDocument


class DocumentFormatError(ValueError):
    """Raised when JSON text does not describe a command document."""


def serialize(document: CommandDocument, indent: int | None = 2) -> str:
    return json.dumps(document.to_dict(), ensure_ascii=False, indent=indent)


def deserialize(text: str) -> CommandDocument:
    """Rebuild a ``CommandDocument`` from JSON text.

    ``json.JSONDecodeError`` propagates for malformed JSON.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise DocumentFormatError(
            f"expected a JSON object at the root, got {type(data).__name__}"
        )
    return CommandDocument.from_dict(data)


def serialize_to_file(
    document: CommandDocument,
    file_path: str | Path,
    indent: int | None = 2,
) -> Path:
    """Write *document* as JSON, creating parent directories as needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(document, indent=indent), encoding="utf-8")
    return path


def deserialize_from_file(file_path: str | Path) -> CommandDocument:
    return deserialize(Path(file_path).read_text(encoding="utf-8"))
