"""Node API listing tool."""

from __future__ import annotations

from typing import List

from nodit_mcp.catalog import ApiFamily, ApiRegistry
from nodit_mcp.catalog.classifier import ETHEREUM, method_name

COMMON_METHOD_PREFIXES = ("eth_", "net_", "web3_")

NODE_API_HEADER = """Nodit Blockchain Context has endpoints with patterns like https://{chain}-{network}.nodit.io. For example, Ethereum mainnet uses an endpoint like https://ethereum-mainnet.nodit.io
and accepts input in the form of widely known requestBody argument such as { "jsonrpc": "2.0", "id": 1, "method": "eth_blockNumber", "params": [] }.
**Important: To ensure the tool 'call_nodit_api' works correctly and to avoid errors, you should first use the tool 'get_nodit_api_spec' to obtain detailed API specifications. Depending on the situation, you may omit using the get_nodit_api_spec tool, but it is recommended to use it on the first call.**
The API list is as follows.
**Important: Nodit Blockchain Context's operationId format rules**
- Ethereum network: No prefix (e.g., operationId="eth_blockNumber")
- All other chains: Use the format {chain}-{operationId} (e.g., operationId="polygon-eth_blockNumber")
- Make sure to use 'call_nodit_api' with the correct chain, network, and operationId.
- These operationId format rules are relevant only when using the tool, not when directly using the API."""


def list_nodit_node_apis(*, registry: ApiRegistry) -> str:
    """List node API operations, grouping JSON-RPC methods shared across chains."""
    common_methods: List[str] = []
    chain_specific: List[str] = []
    chains_with_common = set()

    for entry in registry.entries(ApiFamily.NODE):
        operation_id = entry.operation.operation_id
        method = method_name(operation_id)
        if method.startswith(COMMON_METHOD_PREFIXES):
            chain = operation_id.split("-", 1)[0] if "-" in operation_id else ETHEREUM
            chains_with_common.add(chain)
            if method not in common_methods:
                common_methods.append(method)
        else:
            chain_specific.append(operation_id)

    common_list = "\n".join(f"  - operationId: {method}" for method in common_methods)
    specific_list = "\n".join(f"  - operationId: {operation_id}" for operation_id in chain_specific)
    return (
        f"{NODE_API_HEADER}\n"
        "- Common Methods (supported by most chains, use with appropriate chain name):\n"
        f"{common_list}\n"
        f"- Chains supporting common methods: {', '.join(sorted(chains_with_common))}\n"
        "- Chain-Specific Methods (use with the specified chain):\n"
        f"{specific_list}\n"
        "Note: You can use these APIs with any supported chain by simply replacing the chain "
        "name in the endpoint URL.\n"
    )
