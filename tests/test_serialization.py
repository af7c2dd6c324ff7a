"""Tests for serialization module."""

import json

import pytest

from models import (
    Command,
    CommandDocument,
    CommandParameter,
    GlobalOption,
    ParameterAlternativeGroup,
    ServerStartOption,
    ServiceSection,
    ToolMetadata,
)
from serialization import (
    DocumentFormatError,
    deserialize,
    deserialize_from_file,
    serialize,
    serialize_to_file,
)


def _document_with(command: Command) -> CommandDocument:
    section = ServiceSection(heading="Azure Storage Operations", area_name="storage")
    section.commands.append(command)
    return CommandDocument(title="T", service_sections=[section])


class TestSerialize:
    """Shape of the JSON output."""

    def test_camel_case_keys(self, sample_document):
        data = json.loads(serialize(sample_document))

        assert set(data) == {
            "title",
            "introduction",
            "globalOptions",
            "serverOperations",
            "serviceSections",
            "responseFormat",
            "errorHandling",
        }
        section = data["serviceSections"][0]
        assert section["areaName"] == "storage"
        cmd = section["subSections"][0]["commands"][0]
        assert cmd["commandText"] == "azmcp storage account get"
        assert cmd["subCommands"] == ["account", "get"]
        assert cmd["metadata"]["readOnly"] is True
        assert cmd["metadata"]["openWorld"] is False
        assert cmd["parameters"][0]["isRequired"] is True
        assert data["globalOptions"][0]["isRequired"] is False
        assert data["serverOperations"]["startOptions"][0]["name"] == "--transport"
        assert "jsonSchema" in data["responseFormat"]

    def test_missing_metadata_is_omitted(self):
        doc = _document_with(Command(command_text="azmcp a b", namespace="a"))
        cmd = json.loads(serialize(doc))["serviceSections"][0]["commands"][0]
        assert "metadata" not in cmd

    def test_optional_parameter_fields_are_omitted(self):
        param = CommandParameter(name="--account", value_placeholder="account", is_required=True)
        assert param.to_dict() == {
            "name": "--account",
            "valuePlaceholder": "account",
            "isRequired": True,
            "isFlag": False,
        }

    def test_absent_sections_are_omitted(self):
        data = json.loads(serialize(CommandDocument()))
        assert "serverOperations" not in data
        assert "responseFormat" not in data

    def test_non_ascii_is_kept(self):
        doc = CommandDocument(title="Référence ✅")
        assert "Référence ✅" in serialize(doc)

    def test_indent(self):
        assert "\n" not in serialize(CommandDocument(), indent=None)
        assert '\n  "title"' in serialize(CommandDocument())


class TestDeserialize:
    """Reading JSON back."""

    def test_sample_round_trip(self, sample_document):
        assert deserialize(serialize(sample_document)) == sample_document

    def test_round_trip_keeps_groups_and_aliases(self):
        command = Command(
            description="List databases",
            command_text="azmcp kusto database list",
            namespace="kusto",
            sub_commands=["database", "list"],
            metadata=ToolMetadata(idempotent=True, read_only=True),
            parameters=[
                CommandParameter(
                    name="--resource-group",
                    value_placeholder="resource-group",
                    is_required=True,
                    short_alias="-g",
                ),
                CommandParameter(
                    name="--format",
                    value_placeholder="simple|detailed",
                    allowed_values=["simple", "detailed"],
                ),
            ],
            parameter_alternative_groups=[
                ParameterAlternativeGroup(alternatives=[
                    [CommandParameter(name="--cluster-uri", value_placeholder="cluster-uri")],
                    [
                        CommandParameter(name="--subscription", value_placeholder="subscription"),
                        CommandParameter(name="--cluster", value_placeholder="cluster"),
                    ],
                ]),
            ],
            raw_block="azmcp kusto database list ...",
            source_line=42,
        )
        doc = _document_with(command)
        assert deserialize(serialize(doc)) == doc

    def test_option_entries_keep_their_type(self):
        data = {"name": "--transport", "isRequired": False, "default": "stdio"}
        option = ServerStartOption.from_dict(data)
        assert type(option) is ServerStartOption
        assert type(GlobalOption.from_dict(data)) is GlobalOption
        assert option.default == "stdio"
        assert option.description == ""

    def test_missing_keys_take_defaults(self):
        doc = deserialize('{"title": "Only a title"}')
        assert doc.title == "Only a title"
        assert doc.service_sections == []
        assert doc.server_operations is None

    def test_non_object_root(self):
        with pytest.raises(DocumentFormatError):
            deserialize("[]")

    def test_format_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            deserialize('"just a string"')

    def test_malformed_json(self):
        with pytest.raises(json.JSONDecodeError):
            deserialize("{not json")


class TestFiles:
    """File helpers."""

    def test_file_round_trip(self, sample_document, temp_dir):
        path = serialize_to_file(sample_document, temp_dir / "commands.json")
        assert path.exists()
        assert deserialize_from_file(path) == sample_document

    def test_creates_parent_directories(self, temp_dir):
        target = temp_dir / "nested" / "deeper" / "out.json"
        serialize_to_file(CommandDocument(title="T"), str(target))
        assert target.exists()
        assert json.loads(target.read_text(encoding="utf-8"))["title"] == "T"
