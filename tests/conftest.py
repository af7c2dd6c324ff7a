"""Pytest configuration and fixtures for the command-reference parser tests."""

import tempfile
from pathlib import Path

import pytest

from parser_markdown import MarkdownCommandParser


METADATA_READ_ONLY = (
    "# ❌ Destructive | ✅ Idempotent | ❌ OpenWorld | ✅ ReadOnly | ❌ Secret | ❌ LocalRequired"
)

SAMPLE_MARKDOWN = r"""# Azure MCP CLI Command Reference

> [!IMPORTANT]
> The Azure MCP Server updates automatically.

## Global Options

| Option | Required | Default | Description |
|--------|----------|---------|-------------|
| `--subscription` | No | Environment variable | Azure subscription ID |
| `--tenant-id` | No | - | Azure tenant ID |
| `--retry-max-retries` | No | 3 | Max retry attempts |

## Available Commands

### Server Operations

The Azure MCP Server can be started in several modes.

#### Namespace Mode

Expose one tool per namespace.

```bash
azmcp server start --mode namespace
```

#### Server Start Command Options

| Option | Required | Default | Description |
|--------|----------|---------|-------------|
| `--transport` | No | stdio | Transport mechanism |
| `--read-only` | No | false | Only expose read-only tools |

### Azure Storage Operations

Storage commands.

#### Account

```bash
# Get storage accounts
# ❌ Destructive | ✅ Idempotent | ❌ OpenWorld | ✅ ReadOnly | ❌ Secret | ❌ LocalRequired
azmcp storage account get --subscription <subscription> \
                          [--account <account>]

# Get details for a specific account
azmcp storage account get --subscription "my-subscription" --account "mystorage"
```

| Parameter | Required | Description |
|-----------|----------|-------------|
| `--subscription` | Yes | Azure subscription ID |
| `--account` | No | Storage account name |

#### Blob

```bash
# Upload a blob
# ✅ Destructive | ❌ Idempotent | ❌ OpenWorld | ❌ ReadOnly | ❌ Secret | ✅ LocalRequired
azmcp storage blob upload --subscription <subscription> --account <account> --container <container> --local-file-path <path>
```

### Azure Data Explorer Operations

```bash
# List databases in a cluster
# ❌ Destructive | ✅ Idempotent | ❌ OpenWorld | ✅ ReadOnly | ❌ Secret | ❌ LocalRequired
azmcp kusto database list [--cluster-uri <cluster-uri> | --subscription <subscription> --cluster <cluster>]
```

## Response Format

All responses follow a consistent JSON format:

```json
{
  "status": 200,
  "message": "Success",
  "results": {}
}
```

| Field | Description |
|-------|-------------|
| `status` | HTTP status code |
| `message` | Human-readable message |

## Error Handling

The CLI returns structured JSON responses for errors.

## Appendix

Ignored content.
"""


def commands_document(heading: str, block: str) -> str:
    """Wrap a code block in the smallest document that reaches it."""
    return (
        "# Title\n"
        "## Global Options\n"
        "| Option | Required | Default | Description |\n"
        "|--------|----------|---------|-------------|\n"
        "| `--sub` | No | - | desc |\n"
        "## Available Commands\n"
        f"### {heading}\n"
        "```bash\n"
        f"{block}\n"
        "```\n"
    )


@pytest.fixture
def parser():
    return MarkdownCommandParser()


@pytest.fixture
def sample_markdown():
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_document(parser):
    return parser.parse(SAMPLE_MARKDOWN)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
