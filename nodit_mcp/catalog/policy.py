"""Pre-dispatch checks applied to every call_nodit_api request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from nodit_mcp.catalog.classifier import is_node_api, is_webhook_api
from nodit_mcp.catalog.registry import ApiRegistry

# Solana methods with unbounded or unpaginated result sets.
BLOCKED_OPERATION_IDS: FrozenSet[str] = frozenset(
    {
        "solana-getProgramAccounts",
        "solana-getClusterNodes",
        "solana-getLeaderSchedule",
        "solana-getSignaturesForAddress",
        "solana-getBlock",
        "solana-getBlocks",
        "solana-getBlocksWithLimit",
        "solana-getVoteAccounts",
        "solana-getInflationGovernor",
        "solana-getInflationRate",
        "solana-getInflationReward",
        "solana-getSupply",
    }
)

# Protocols allowed to call bare (unprefixed) node methods.
UNPREFIXED_PROTOCOLS: FrozenSet[str] = frozenset({"ethereum", "aptos"})


class RejectionKind(str, Enum):
    WEBHOOK = "webhook"
    BLOCKED = "blocked"
    NOT_FOUND = "not_found"
    NAMING_CONVENTION = "naming_convention"


@dataclass(frozen=True, slots=True)
class ValidationError:
    kind: RejectionKind
    message: str


def is_blocked_operation_id(operation_id: str) -> bool:
    return operation_id in BLOCKED_OPERATION_IDS


def validate_api_request(
    protocol: str, operation_id: str, registry: ApiRegistry
) -> Optional[ValidationError]:
    """
    Check a call request before anything is resolved or sent.

    Checks run in a fixed order and the first failure is returned: webhook
    block, explicit block list, existence, then the chain-prefix convention.

    Returns:
        None when the request may proceed, otherwise a ValidationError.
    """
    if is_webhook_api(operation_id):
        return ValidationError(
            RejectionKind.WEBHOOK,
            'The Nodit Webhook APIs cannot be invoked via "call_nodit_api".',
        )

    if is_blocked_operation_id(operation_id):
        return ValidationError(
            RejectionKind.BLOCKED,
            f'The operationId({operation_id}) cannot be invoked via "call_nodit_api".',
        )

    if not registry.contains(operation_id):
        return ValidationError(
            RejectionKind.NOT_FOUND,
            f"Invalid operationId '{operation_id}'. "
            "Use 'list_nodit_data_apis' or 'list_nodit_node_apis' first.",
        )

    requires_prefix = (
        is_node_api(operation_id)
        and protocol not in UNPREFIXED_PROTOCOLS
        and "-" not in operation_id
    )
    if requires_prefix:
        return ValidationError(
            RejectionKind.NAMING_CONVENTION,
            f"Invalid operationId '{operation_id}'. For non-ethereum protocols, "
            "operationId must include the protocol prefix.",
        )

    return None
