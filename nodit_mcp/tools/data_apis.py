"""Data API and Webhook API listing tools."""

from __future__ import annotations

from typing import Any, Dict, List

from nodit_mcp.catalog import ApiFamily, ApiRegistry
from nodit_mcp.tools.common import normalize_description, tool_error

DATA_API_HEADER = (
    "Nodit Blockchain Context data api has endpoints with patterns like "
    "https://web3.nodit.io/v1/{protocol}/{network}/getBlockByHashOrNumber. For example, "
    "Ethereum mainnet uses an endpoint like "
    "https://web3.nodit.io/v1/ethereum/mainnet/getBlockByHashOrNumber.\n"
    "The API list is as follows. You can use the get_nodit_api_spec tool to get more "
    "detailed API specifications."
)
WEBHOOK_API_HEADER = (
    "Nodit Webhook APIs manage webhook subscriptions for on-chain events. They are listed "
    "for reference only and cannot be invoked using the call_nodit_api tool.\n"
    "The API list is as follows. You can use the get_nodit_api_spec tool to get more "
    "detailed API specifications."
)
DEFAULT_WEBHOOK_PROTOCOLS = ["aptos"]


def _format_listing(header: str, base_url: str, apis: List[Dict[str, Any]]) -> str:
    formatted = "\n".join(
        f"  - operationId: {api['operationId']}, supported protocols: "
        f"[{','.join(api['protocols'])}], description: {api['description']}"
        for api in apis
    )
    return (
        f"{header}\n"
        f"- baseUrl: {base_url}\n"
        "- Available Nodit API Operations:\n"
        f"{formatted}\n"
    )


def list_nodit_data_apis(*, registry: ApiRegistry) -> Any:
    """List data API operations with their supported protocols."""
    document = registry.data_document
    if document is None:
        return tool_error("Failed to list APIs: Data API spec is not loaded.", "list_nodit_data_apis")
    apis = [
        {
            "operationId": entry.operation.operation_id,
            "protocols": entry.operation.enum_values("protocol"),
            "description": normalize_description(entry.operation.description),
        }
        for entry in registry.entries(ApiFamily.DATA)
    ]
    return _format_listing(DATA_API_HEADER, document.server_url or "", apis)


def list_webhook_data_apis(*, registry: ApiRegistry) -> Any:
    """List webhook API operations (documentation only)."""
    document = registry.webhook_document
    if document is None:
        return tool_error(
            "Failed to list APIs: Webhook API spec is not loaded.", "list_webhook_data_apis"
        )
    apis = [
        {
            "operationId": entry.operation.operation_id,
            "protocols": entry.operation.enum_values("protocol") or DEFAULT_WEBHOOK_PROTOCOLS,
            "description": normalize_description(entry.operation.description),
        }
        for entry in registry.entries(ApiFamily.WEBHOOK)
    ]
    return _format_listing(WEBHOOK_API_HEADER, document.server_url or "", apis)
