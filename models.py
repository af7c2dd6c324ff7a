"""
Data models for the parsed command reference.

Every entity is a dataclass produced once by the parser.  ``to_dict()``
returns the JSON-ready form (camelCase keys, ``None`` fields omitted);
``from_dict()`` rebuilds the dataclass from that form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _drop_none(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


# ── Table-derived entries ─────────────────────────────────────────────────


@dataclass
class OptionEntry:
    """A row of an option table (name, required, default, description)."""

    name: str = ""
    is_required: bool = False
    default: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "isRequired": self.is_required,
            "default": self.default,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> OptionEntry:
        return cls(
            name=d.get("name", ""),
            is_required=d.get("isRequired", False),
            default=d.get("default", ""),
            description=d.get("description", ""),
        )


@dataclass
class GlobalOption(OptionEntry):
    """An option from the Global Options table."""


@dataclass
class ServerStartOption(OptionEntry):
    """An option from the server start command options table."""


@dataclass
class ParameterTableEntry(OptionEntry):
    """A single row of a parameter table inside a service section."""


@dataclass
class ParameterTable:
    entries: list[ParameterTableEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"entries": [e.to_dict() for e in self.entries]}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ParameterTable:
        return cls(
            entries=[ParameterTableEntry.from_dict(e) for e in d.get("entries", [])],
        )


# ── Commands ──────────────────────────────────────────────────────────────


@dataclass
class ToolMetadata:
    """The six operational-safety flags of one command."""

    destructive: bool = False
    idempotent: bool = False
    open_world: bool = False
    read_only: bool = False
    secret: bool = False
    local_required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "destructive": self.destructive,
            "idempotent": self.idempotent,
            "openWorld": self.open_world,
            "readOnly": self.read_only,
            "secret": self.secret,
            "localRequired": self.local_required,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ToolMetadata:
        return cls(
            destructive=d.get("destructive", False),
            idempotent=d.get("idempotent", False),
            open_world=d.get("openWorld", False),
            read_only=d.get("readOnly", False),
            secret=d.get("secret", False),
            local_required=d.get("localRequired", False),
        )


@dataclass
class CommandParameter:
    """A parameter parsed from command syntax.

    * ``name`` always carries its dashes (``--subscription``).
    * ``is_required`` is ``False`` when the parameter was opened by ``[``.
    * ``is_flag`` is ``True`` when there is no ``<value>`` placeholder.
    * ``allowed_values`` is set only for bare ``<a|b|c>`` enumerations.
    """

    name: str = ""
    value_placeholder: str = ""
    is_required: bool = False
    is_flag: bool = False
    short_alias: str | None = None
    allowed_values: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "name": self.name,
            "valuePlaceholder": self.value_placeholder,
            "isRequired": self.is_required,
            "isFlag": self.is_flag,
            "shortAlias": self.short_alias,
            "allowedValues": (
                list(self.allowed_values) if self.allowed_values is not None else None
            ),
        })

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CommandParameter:
        allowed = d.get("allowedValues")
        return cls(
            name=d.get("name", ""),
            value_placeholder=d.get("valuePlaceholder", ""),
            is_required=d.get("isRequired", False),
            is_flag=d.get("isFlag", False),
            short_alias=d.get("shortAlias"),
            allowed_values=list(allowed) if allowed is not None else None,
        )


@dataclass
class ParameterAlternativeGroup:
    """Mutually exclusive parameter sets.

    ``[--cluster-uri <uri> | --subscription <sub> --cluster <c>]`` has two
    alternatives: ``[--cluster-uri]`` or ``[--subscription, --cluster]``.
    Exactly one alternative should be supplied.
    """

    alternatives: list[list[CommandParameter]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "alternatives": [
                [p.to_dict() for p in alt] for alt in self.alternatives
            ],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ParameterAlternativeGroup:
        return cls(
            alternatives=[
                [CommandParameter.from_dict(p) for p in alt]
                for alt in d.get("alternatives", [])
            ],
        )


@dataclass
class Command:
    """A single CLI command parsed from a fenced code block."""

    description: str = ""
    command_text: str = ""
    namespace: str = ""
    sub_commands: list[str] = field(default_factory=list)
    metadata: ToolMetadata | None = None
    parameters: list[CommandParameter] = field(default_factory=list)
    parameter_alternative_groups: list[ParameterAlternativeGroup] = field(
        default_factory=list
    )
    is_example: bool = False
    raw_block: str = ""
    source_line: int = 0

    def all_parameter_names(self) -> list[str]:
        """Names of flat parameters followed by every grouped parameter."""
        names = [p.name for p in self.parameters]
        for group in self.parameter_alternative_groups:
            for alt in group.alternatives:
                names.extend(p.name for p in alt)
        return names

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "description": self.description,
            "commandText": self.command_text,
            "namespace": self.namespace,
            "subCommands": list(self.sub_commands),
            "metadata": self.metadata.to_dict() if self.metadata is not None else None,
            "parameters": [p.to_dict() for p in self.parameters],
            "parameterAlternativeGroups": [
                g.to_dict() for g in self.parameter_alternative_groups
            ],
            "isExample": self.is_example,
            "rawBlock": self.raw_block,
            "sourceLine": self.source_line,
        })

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Command:
        meta = d.get("metadata")
        return cls(
            description=d.get("description", ""),
            command_text=d.get("commandText", ""),
            namespace=d.get("namespace", ""),
            sub_commands=list(d.get("subCommands", [])),
            metadata=ToolMetadata.from_dict(meta) if meta is not None else None,
            parameters=[CommandParameter.from_dict(p) for p in d.get("parameters", [])],
            parameter_alternative_groups=[
                ParameterAlternativeGroup.from_dict(g)
                for g in d.get("parameterAlternativeGroups", [])
            ],
            is_example=d.get("isExample", False),
            raw_block=d.get("rawBlock", ""),
            source_line=d.get("sourceLine", 0),
        )


# ── Sections ──────────────────────────────────────────────────────────────


@dataclass
class SubSection:
    """An H4 sub-section of a service section."""

    heading: str = ""
    commands: list[Command] = field(default_factory=list)
    description: str = ""
    parameter_tables: list[ParameterTable] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading": self.heading,
            "commands": [c.to_dict() for c in self.commands],
            "description": self.description,
            "parameterTables": [t.to_dict() for t in self.parameter_tables],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SubSection:
        return cls(
            heading=d.get("heading", ""),
            commands=[Command.from_dict(c) for c in d.get("commands", [])],
            description=d.get("description", ""),
            parameter_tables=[
                ParameterTable.from_dict(t) for t in d.get("parameterTables", [])
            ],
        )


@dataclass
class ServiceSection:
    """An H3 service section (e.g. "Azure Storage Operations")."""

    heading: str = ""
    area_name: str = ""
    sub_sections: list[SubSection] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
    description: str = ""
    parameter_tables: list[ParameterTable] = field(default_factory=list)

    def all_commands(self) -> list[Command]:
        """Section-level commands followed by those of each sub-section."""
        result = list(self.commands)
        for sub in self.sub_sections:
            result.extend(sub.commands)
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading": self.heading,
            "areaName": self.area_name,
            "subSections": [s.to_dict() for s in self.sub_sections],
            "commands": [c.to_dict() for c in self.commands],
            "description": self.description,
            "parameterTables": [t.to_dict() for t in self.parameter_tables],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ServiceSection:
        return cls(
            heading=d.get("heading", ""),
            area_name=d.get("areaName", ""),
            sub_sections=[SubSection.from_dict(s) for s in d.get("subSections", [])],
            commands=[Command.from_dict(c) for c in d.get("commands", [])],
            description=d.get("description", ""),
            parameter_tables=[
                ParameterTable.from_dict(t) for t in d.get("parameterTables", [])
            ],
        )


@dataclass
class ServerMode:
    """A server mode described under "Server Operations" (H4)."""

    name: str = ""
    description: str = ""
    code_blocks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "codeBlocks": list(self.code_blocks),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ServerMode:
        return cls(
            name=d.get("name", ""),
            description=d.get("description", ""),
            code_blocks=list(d.get("codeBlocks", [])),
        )


@dataclass
class ServerOperations:
    description: str = ""
    modes: list[ServerMode] = field(default_factory=list)
    start_options: list[ServerStartOption] = field(default_factory=list)
    raw_content: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "modes": [m.to_dict() for m in self.modes],
            "startOptions": [o.to_dict() for o in self.start_options],
            "rawContent": self.raw_content,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ServerOperations:
        return cls(
            description=d.get("description", ""),
            modes=[ServerMode.from_dict(m) for m in d.get("modes", [])],
            start_options=[
                ServerStartOption.from_dict(o) for o in d.get("startOptions", [])
            ],
            raw_content=d.get("rawContent", ""),
        )


@dataclass
class ResponseField:
    name: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ResponseField:
        return cls(name=d.get("name", ""), description=d.get("description", ""))


@dataclass
class ResponseFormat:
    description: str = ""
    json_schema: str = ""
    fields: list[ResponseField] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "jsonSchema": self.json_schema,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ResponseFormat:
        return cls(
            description=d.get("description", ""),
            json_schema=d.get("jsonSchema", ""),
            fields=[ResponseField.from_dict(f) for f in d.get("fields", [])],
        )


# ── Document ──────────────────────────────────────────────────────────────


@dataclass
class CommandDocument:
    """Root of the parsed command reference."""

    title: str = ""
    introduction: str = ""
    global_options: list[GlobalOption] = field(default_factory=list)
    server_operations: ServerOperations | None = None
    service_sections: list[ServiceSection] = field(default_factory=list)
    response_format: ResponseFormat | None = None
    error_handling: str = ""

    def all_commands(self) -> list[Command]:
        """Every command of every service section, in document order."""
        result: list[Command] = []
        for section in self.service_sections:
            result.extend(section.all_commands())
        return result

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "title": self.title,
            "introduction": self.introduction,
            "globalOptions": [o.to_dict() for o in self.global_options],
            "serverOperations": (
                self.server_operations.to_dict() if self.server_operations is not None else None
            ),
            "serviceSections": [s.to_dict() for s in self.service_sections],
            "responseFormat": (
                self.response_format.to_dict() if self.response_format is not None else None
            ),
            "errorHandling": self.error_handling,
        })

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CommandDocument:
        ops = d.get("serverOperations")
        rf = d.get("responseFormat")
        return cls(
            title=d.get("title", ""),
            introduction=d.get("introduction", ""),
            global_options=[GlobalOption.from_dict(o) for o in d.get("globalOptions", [])],
            server_operations=ServerOperations.from_dict(ops) if ops is not None else None,
            service_sections=[
                ServiceSection.from_dict(s) for s in d.get("serviceSections", [])
            ],
            response_format=ResponseFormat.from_dict(rf) if rf is not None else None,
            error_handling=d.get("errorHandling", ""),
        )
