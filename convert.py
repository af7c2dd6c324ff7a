#!/usr/bin/env python3
"""
CLI entry point: parse a command-reference Markdown file into JSON.

Usage
-----
    # JSON to stdout, summary to stderr
    python convert.py --file azmcp-commands.md

    # JSON to a file (directories are created)
    python convert.py --file azmcp-commands.md --output output_json/commands.json

    # A different program name in the code blocks, with debug logging
    python convert.py --file mytool-commands.md --program mytool --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config import PROGRAM_NAME
from parser_markdown import MarkdownCommandParser
from serialization import serialize, serialize_to_file


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        description="Parse a CLI command-reference Markdown file into structured JSON."
    )
    ap.add_argument(
        "--file",
        required=True,
        help="Path to the command-reference Markdown file.",
    )
    ap.add_argument(
        "--output",
        default=None,
        help="Output JSON file (default: stdout).",
    )
    ap.add_argument(
        "--program",
        default=PROGRAM_NAME,
        help=f"Program name that starts each command line (default: {PROGRAM_NAME}).",
    )
    ap.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parsing details.",
    )

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    path = Path(args.file)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1

    parser = MarkdownCommandParser(program_name=args.program)
    document = parser.parse_file(path)
    summary = parser.summarize(document)

    print(f"Parsed: {document.title}", file=sys.stderr)
    print(f"  Global options: {summary['global_options']}", file=sys.stderr)
    print(f"  Service sections: {summary['service_sections']}", file=sys.stderr)
    print(
        f"  Total commands: {summary['commands']} "
        f"({summary['definitions']} definitions, {summary['examples']} examples)",
        file=sys.stderr,
    )

    if args.output:
        out_path = serialize_to_file(document, args.output)
        print(f"  Output: {out_path}", file=sys.stderr)
    else:
        print(serialize(document))

    return 0


if __name__ == "__main__":
    sys.exit(main())
