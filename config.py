"""
Configuration for the command-reference parser.

Contains the program name recognised in code blocks, the section
headings that drive the document walk, the area-name lookup table, and
a few text utilities shared by the parsing modules.
"""

import re


# ---------------------------------------------------------------------------
# Command invocation
# ---------------------------------------------------------------------------

# First token of every command line inside a fenced block
PROGRAM_NAME = "azmcp"

# Checkmark glyphs used by the tool-metadata comment line
METADATA_TRUE = "✅"
METADATA_FALSE = "❌"

# Field order of the metadata comment line
METADATA_FIELDS: list[str] = [
    "Destructive",
    "Idempotent",
    "OpenWorld",
    "ReadOnly",
    "Secret",
    "LocalRequired",
]

# ---------------------------------------------------------------------------
# Section headings
# ---------------------------------------------------------------------------

GLOBAL_OPTIONS_HEADING = "Global Options"
AVAILABLE_COMMANDS_HEADING = "Available Commands"
RESPONSE_FORMAT_HEADING = "Response Format"
ERROR_HANDLING_HEADING = "Error Handling"

SERVER_OPERATIONS_HEADING = "Server Operations"
SERVER_START_OPTIONS_HEADING = "Server Start Command Options"

# ---------------------------------------------------------------------------
# Area names: service-section heading → canonical short identifier
# ---------------------------------------------------------------------------

AREA_NAMES: dict[str, str] = {
    "Azure Advisor Operations": "advisor",
    "Azure AI Search Operations": "search",
    "Azure AI Services Speech Operations": "speech",
    "Azure App Configuration Operations": "appconfig",
    "Azure App Lens Operations": "applens",
    "Azure Application Insights Operations": "applicationinsights",
    "Azure App Service Operations": "appservice",
    "Azure CLI Operations": "extension",
    "Azure Communication Services Operations": "communication",
    "Azure Compute Operations": "compute",
    "Azure Confidential Ledger Operations": "confidentialledger",
    "Azure Container Registry (ACR) Operations": "acr",
    "Azure Cosmos DB Operations": "cosmos",
    "Azure Data Explorer Operations": "kusto",
    "Azure Database for MySQL Operations": "mysql",
    "Azure Database for PostgreSQL Operations": "postgres",
    "Azure Deploy Operations": "deploy",
    "Azure Event Grid Operations": "eventgrid",
    "Azure Event Hubs": "eventhubs",
    "Azure File Shares Operations": "fileshares",
    "Azure Function App Operations": "functionapp",
    "Azure Key Vault Operations": "keyvault",
    "Azure Kubernetes Service (AKS) Operations": "aks",
    "Azure Load Testing Operations": "loadtesting",
    "Azure Managed Grafana Operations": "grafana",
    "Azure Marketplace Operations": "marketplace",
    "Azure MCP Best Practices": "get",
    "Azure MCP Tools": "tools",
    "Azure Monitor Operations": "monitor",
    "Azure Migrate Operations": "azuremigrate",
    "Azure Managed Lustre Operations": "managedlustre",
    "Azure Native ISV Operations": "datadog",
    "Azure Quick Review CLI Operations": "extension",
    "Azure Quota Operations": "quota",
    "Azure Policy Operations": "policy",
    "Azure Pricing Operations": "pricing",
    "Azure RBAC Operations": "role",
    "Azure Redis Operations": "redis",
    "Azure Resource Group Operations": "group",
    "Azure Resource Health Operations": "resourcehealth",
    "Azure Service Bus Operations": "servicebus",
    "Azure Service Fabric Operations": "servicefabric",
    "Azure SignalR Service Operations": "signalr",
    "Azure SQL Operations": "sql",
    "Azure Storage Operations": "storage",
    "Azure Storage Sync Operations": "storagesync",
    "Azure Subscription Management": "subscription",
    "Azure Terraform Best Practices": "azureterraformbestpractices",
    "Azure Virtual Desktop Operations": "virtualdesktop",
    "Azure Workbooks Operations": "workbooks",
    "Bicep": "bicepschema",
    "Cloud Architect": "cloudarchitect",
    "Microsoft Foundry Operations": "foundry",
}

# Headings are matched case-insensitively
_AREA_NAMES_CASEFOLDED: dict[str, str] = {
    k.casefold(): v for k, v in AREA_NAMES.items()
}

# Used when normalisation leaves nothing behind (e.g. a blank heading)
FALLBACK_AREA_NAME = "general"

_RE_BRAND_PREFIX = re.compile(r"^Azure\s+", re.IGNORECASE)
_RE_GENERIC_SUFFIX = re.compile(r"\s+Operations$", re.IGNORECASE)


def derive_area_name(heading: str) -> str:
    """Map a service-section heading to its canonical area identifier.

    Known headings come from ``AREA_NAMES``.  Anything else is
    normalised on a best-effort basis: the leading ``"Azure "`` and the
    trailing ``" Operations"`` are stripped, spaces removed, and the
    result lowercased.

    Examples
    --------
    >>> derive_area_name("Azure Container Registry (ACR) Operations")
    'acr'
    >>> derive_area_name("Bicep")
    'bicepschema'
    >>> derive_area_name("Azure Widget Factory Operations")
    'widgetfactory'
    """
    clean = (heading or "").strip()
    mapped = _AREA_NAMES_CASEFOLDED.get(clean.casefold())
    if mapped:
        return mapped

    name = _RE_BRAND_PREFIX.sub("", clean)
    name = _RE_GENERIC_SUFFIX.sub("", name)
    name = re.sub(r"\s+", "", name).lower()
    return name or FALLBACK_AREA_NAME


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def clean_inline_code(text: str) -> str:
    """Strip surrounding whitespace and inline-code backticks.

    ``" `--subscription` "`` → ``"--subscription"``
    """
    return (text or "").strip().strip("`").strip()


def join_trimmed(lines: list[str]) -> str:
    """Join *lines* with newlines, dropping leading and trailing blank lines.

    Internal blank lines are preserved.
    """
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])
