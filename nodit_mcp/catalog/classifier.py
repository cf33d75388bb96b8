"""
Identifier classification for Nodit operation ids.

Operation ids carry their family and chain only by naming convention. These
helpers are the single place that inspects the raw string; everything behind
the registry works on (family, key) pairs.
"""

from __future__ import annotations

from typing import Optional, Tuple

from nodit_mcp.catalog.models import ApiFamily

ETHEREUM = "ethereum"
ETHEREUM_KEY_PREFIX = f"{ETHEREUM}-"
SOLANA_PREFIX = "solana-"
APTOS_METHOD_PREFIX = "aptos_"
WEBHOOK_MARKER = "Webhook"


def is_webhook_api(operation_id: str) -> bool:
    return WEBHOOK_MARKER in operation_id


def is_node_api(operation_id: str) -> bool:
    """JSON-RPC style method names contain an underscore; Solana ids are chain-prefixed."""
    return "_" in operation_id or operation_id.startswith(SOLANA_PREFIX)


def is_ethereum_node_api(operation_id: str) -> bool:
    """Bare (unprefixed) node methods belong to Ethereum, except Aptos REST methods."""
    return "-" not in operation_id and not operation_id.startswith(APTOS_METHOD_PREFIX)


def node_lookup_key(operation_id: str) -> str:
    if is_ethereum_node_api(operation_id):
        return f"{ETHEREUM_KEY_PREFIX}{operation_id}"
    return operation_id


def classify(operation_id: str) -> ApiFamily:
    if is_webhook_api(operation_id):
        return ApiFamily.WEBHOOK
    if is_node_api(operation_id):
        return ApiFamily.NODE
    return ApiFamily.DATA


def lookup_key(operation_id: str) -> Tuple[ApiFamily, str]:
    """Return the (family, registry key) pair an incoming operation id addresses."""
    family = classify(operation_id)
    if family is ApiFamily.NODE:
        return family, node_lookup_key(operation_id)
    return family, operation_id


def chain_of_node_key(key: str) -> Optional[str]:
    """Chain named by a node registry key (``polygon-eth_call`` -> ``polygon``)."""
    if "-" in key:
        return key.split("-", 1)[0]
    if key.startswith(APTOS_METHOD_PREFIX):
        return "aptos"
    return None


def method_name(operation_id: str) -> str:
    """Strip a ``{chain}-`` prefix from a node operation id."""
    if "-" in operation_id:
        return operation_id.split("-", 1)[1]
    return operation_id
