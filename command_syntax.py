"""
Command-line syntax parsing.

Turns one logical command line such as::

    azmcp kusto query [--cluster-uri <uri> | --subscription <sub> --cluster <c>] \
        --database <database> [--format <simple|detailed>]

into flat ``CommandParameter`` records and ``ParameterAlternativeGroup``
records.  Alternative groups are cut out of the line before the flat
scan, so no parameter is ever counted twice.

Optionality is decided per parameter by an immediately preceding ``[``;
brackets are not balanced.  Unparseable fragments are skipped, never
reported.
"""

from __future__ import annotations

import re

from models import CommandParameter, ParameterAlternativeGroup


# ── Regex patterns ────────────────────────────────────────────────────────

# [--name, -n <value>]  /  --name <value>  /  --flag
RE_PARAMETER = re.compile(
    r"(?P<optional>\[)?--(?P<name>\w[\w-]*)"
    r"(?:\s*,\s*`?(?P<alias>--?\w[\w-]*)`?)?"
    r"\s*(?:<(?P<value>[^>]+)>)?"
    r"\]?"
)

# A bracketed span with no brackets nested inside it
RE_BRACKET_SPAN = re.compile(r"\[([^\[\]]*)\]")


# ── Flat parameters ───────────────────────────────────────────────────────


def _allowed_values(value: str) -> list[str] | None:
    """``"simple|detailed"`` → ``["simple", "detailed"]``.

    Placeholders containing spaces are free text and stay opaque.
    """
    if not value or "|" not in value or " " in value:
        return None
    return [v.strip() for v in value.split("|")]


def parse_flat_parameters(text: str) -> list[CommandParameter]:
    """Extract parameters from *text* in the order they appear.

    No group extraction happens here.
    """
    parameters: list[CommandParameter] = []
    for m in RE_PARAMETER.finditer(text):
        value = m.group("value") or ""
        parameters.append(
            CommandParameter(
                name=f"--{m.group('name')}",
                value_placeholder=value,
                is_required=m.group("optional") is None,
                is_flag=not value,
                short_alias=m.group("alias"),
                allowed_values=_allowed_values(value),
            )
        )
    return parameters


# ── Alternative groups ────────────────────────────────────────────────────


def _split_top_level_pipes(text: str) -> list[str]:
    """Split *text* on ``|`` characters that sit outside ``<...>``."""
    parts: list[str] = []
    current: list[str] = []
    in_angle = False
    for ch in text:
        if ch == "<":
            in_angle = True
        elif ch == ">":
            in_angle = False
        elif ch == "|" and not in_angle:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def extract_alternative_groups(
    text: str,
) -> tuple[str, list[ParameterAlternativeGroup]]:
    """Cut ``[alt | alt ...]`` groups out of *text*.

    A bracketed span becomes a group only when it has two or more
    alternatives and every alternative holds at least one parameter.
    Other spans, e.g. a lone ``[--container <container>]``, are left in
    place for the flat scan.

    Returns ``(remaining_text, groups)``.
    """
    groups: list[ParameterAlternativeGroup] = []

    def _replace(m: re.Match) -> str:
        pieces = _split_top_level_pipes(m.group(1))
        if len(pieces) < 2:
            return m.group(0)
        alternatives = [parse_flat_parameters(p.strip()) for p in pieces]
        if not all(alternatives):
            return m.group(0)
        groups.append(ParameterAlternativeGroup(alternatives=alternatives))
        return ""

    remaining = RE_BRACKET_SPAN.sub(_replace, text)
    return remaining, groups


def parse_parameters_and_groups(
    text: str,
) -> tuple[list[CommandParameter], list[ParameterAlternativeGroup]]:
    """Groups first, then the flat parameters of what is left."""
    remaining, groups = extract_alternative_groups(text)
    return parse_flat_parameters(remaining), groups


def parse_parameters(text: str) -> list[CommandParameter]:
    """Flat parameters only; grouped parameters are not included."""
    parameters, _ = parse_parameters_and_groups(text)
    return parameters


# ── Command line tokens ───────────────────────────────────────────────────


def tokenize_command_line(line: str) -> list[str]:
    """Split *line* on whitespace, keeping ``"..."`` and ``<...>`` whole.

    >>> tokenize_command_line('azmcp x --q "a b" --v <c d>')
    ['azmcp', 'x', '--q', '"a b"', '--v', '<c d>']
    """
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    in_angle = False

    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "<":
            in_angle = True
        elif ch == ">":
            in_angle = False
        elif ch in " \t" and not in_quotes and not in_angle:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(ch)

    if current:
        tokens.append("".join(current))
    return tokens


def is_parameter_token(token: str) -> bool:
    """True for the first token of the parameter part of a command."""
    return token.startswith("--") or token.startswith("[")


def is_example(line: str) -> bool:
    """Concrete quoted values and no ``<placeholder>`` ⇒ an example.

    Any placeholder makes the line a definition, quotes or not.
    """
    return '"' in line and "<" not in line
