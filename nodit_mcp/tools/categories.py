"""The list_nodit_api_categories tool."""

from __future__ import annotations

from typing import Dict, List

from nodit_mcp.catalog import ApiFamily, ApiRegistry

SERVICE_DESCRIPTION = (
    "Nodit Blockchain Context is a service that provides stable node operation agency to "
    "support easy WEB3 development and refined blockchain data."
)

USAGE_GUIDE = """Please keep these rules in mind when using nodit tools:
- Do not provide investment advice or speculate on the value, safety, or future of any token or project.
- When displaying asset balances, you must always provide the original raw data and decimals as they are.
- Always use only verifiable on-chain data sourced from the Nodit Blockchain Context; never make assumptions or pull in external information.
- Use only Nodit APIs, and do not access third-party data sources or external node endpoints; for on-chain queries, always use Nodit's Node API.
- When possible, prefer using the Data API over Node API as it provides optimized and indexed blockchain data that is more efficient for most queries.
- If referencing a specific API by operationId, link directly to https://developer.nodit.io/reference/{operationId} without guessing or inventing operationIds.
- If the user's request lacks required context such as wallet address, chain name, or time period, ask for clarification rather than assuming defaults.
"""

NODE_API_NETWORKS: Dict[str, List[str]] = {
    "ethereum": ["mainnet", "sepolia", "hoodi"],
    "avalanche": ["mainnet", "fuji"],
    "arbitrum": ["mainnet", "sepolia"],
    "arc": ["testnet"],
    "polygon": ["mainnet", "amoy"],
    "base": ["mainnet", "sepolia"],
    "optimism": ["mainnet", "sepolia"],
    "kaia": ["mainnet", "kairos"],
    "luniverse": ["mainnet"],
    "sui": ["mainnet"],
    "bnb": ["mainnet", "testnet"],
    "giwa": ["sepolia"],
    "solana": ["mainnet", "devnet"],
}

DATA_API_NETWORKS: Dict[str, List[str]] = {
    "ethereum": ["mainnet", "sepolia", "hoodi"],
    "arbitrum": ["mainnet", "sepolia"],
    "polygon": ["mainnet", "amoy"],
    "base": ["mainnet", "sepolia"],
    "bnb": ["mainnet", "testnet"],
    "chiliz": ["mainnet"],
    "optimism": ["mainnet", "sepolia"],
    "kaia": ["mainnet", "kairos"],
    "luniverse": ["mainnet"],
    "bitcoin": ["mainnet"],
    "dogecoin": ["mainnet"],
    "bitcoincash": ["mainnet"],
    "tron": ["mainnet"],
    "xrpl": ["mainnet"],
    "aptos": ["mainnet"],
    "giwa": ["sepolia"],
    "ethereumclassic": ["mainnet"],
}

APTOS_INDEXER_NETWORKS: Dict[str, List[str]] = {"aptos": ["mainnet", "testnet"]}

WEBHOOK_API_NETWORKS: Dict[str, List[str]] = {
    "aptos": ["mainnet", "testnet"],
    "bnb": ["mainnet", "testnet"],
    "ethereum": ["mainnet", "sepolia", "hoodi"],
    "arbitrum": ["mainnet", "sepolia"],
    "polygon": ["mainnet", "amoy"],
    "base": ["mainnet", "sepolia"],
    "optimism": ["mainnet", "sepolia"],
    "kaia": ["mainnet", "kairos"],
    "giwa": ["sepolia"],
}

CATEGORIES = (
    (
        "Nodit Node API",
        ApiFamily.NODE,
        NODE_API_NETWORKS,
        "Shared node endpoints operated by Nodit let you call blockchain Node APIs to query "
        "real-time network changes and send transactions without running your own nodes.",
    ),
    (
        "Nodit Data API",
        ApiFamily.DATA,
        DATA_API_NETWORKS,
        "Query APIs over blockchain data indexed by Nodit, usable without running a separate "
        "blockchain data ETL pipeline.",
    ),
    (
        "Nodit Aptos Indexer API",
        ApiFamily.GRAPHQL_TABLE,
        APTOS_INDEXER_NETWORKS,
        "A GraphQL API for indexed Aptos data such as coin activities and token activities, "
        "without maintaining your own indexer.",
    ),
    (
        "Nodit Webhook API",
        ApiFamily.WEBHOOK,
        WEBHOOK_API_NETWORKS,
        "Webhooks deliver on-chain event notifications, such as new transactions or contract "
        "state changes, to a registered URL in real time.",
    ),
)


def _supported_chains(registry: ApiRegistry, family: ApiFamily) -> List[str]:
    chains = registry.chains(family)
    if family is ApiFamily.WEBHOOK:
        chains.add("aptos")
    if family is ApiFamily.GRAPHQL_TABLE:
        chains = {"aptos"}
    return sorted(chains)


def list_nodit_api_categories(*, registry: ApiRegistry) -> str:
    """Describe the Nodit API categories with their supported chains and networks."""
    sections = []
    for name, family, networks, description in CATEGORIES:
        network_info = "\n".join(
            f"    - {chain}: {', '.join(networks[chain])}"
            for chain in _supported_chains(registry, family)
            if chain in networks
        )
        sections.append(
            f"  - name: {name}, description: {description} supported chain and network:\n{network_info}"
        )
    category_list = "\n".join(sections)
    return (
        f"{SERVICE_DESCRIPTION}\n"
        f"{USAGE_GUIDE}"
        "- Available Nodit API Categories:\n"
        f"{category_list}\n"
    )
