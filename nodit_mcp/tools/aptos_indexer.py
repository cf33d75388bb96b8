"""Aptos indexer (GraphQL) tools."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from nodit_mcp.catalog import ApiRegistry
from nodit_mcp.config import NoditConfig, default_config
from nodit_mcp.nodit_api import NoditApiError, default_client
from nodit_mcp.tools.common import describe_api_error, tool_error

logger = logging.getLogger(__name__)


def list_nodit_aptos_indexer_api_query_root(*, registry: ApiRegistry) -> Any:
    """List every query root exposed by the Aptos indexer GraphQL API."""
    query_roots = registry.table_names()
    if not query_roots:
        return tool_error(
            "No query roots found in the Aptos Indexer API schema",
            "list_nodit_aptos_indexer_api_query_root",
        )
    return "Available Aptos Indexer API query roots:\n\n" + "\n".join(query_roots)


def get_nodit_aptos_indexer_api_spec(query_root: str, *, registry: ApiRegistry) -> Any:
    """Return columns and relationships of one query root as JSON text."""
    table = registry.table(query_root)
    if table is None:
        return tool_error(
            f"Query root '{query_root}' not found in the Aptos Indexer API schema. "
            "Use list_nodit_aptos_indexer_api_query_root to see available query roots.",
            "get_nodit_aptos_indexer_api_spec",
        )
    return (
        f"GraphQL specification for query root '{query_root}':\n\n"
        f"{json.dumps(table.to_spec(), indent=2)}"
    )


async def call_nodit_aptos_indexer_api(
    network: str,
    request_body: Dict[str, Any],
    *,
    client=default_client,
    config: NoditConfig = default_config,
) -> Any:
    """
    Send a GraphQL request to the Aptos indexer for ``network``.

    Returns:
        The raw JSON response text, or an error dict.
    """
    tool_name = "call_nodit_aptos_indexer_api"
    url = config.aptos_indexer_endpoint(network)
    try:
        return await client.request("POST", url, json_body=request_body)
    except NoditApiError as exc:
        return tool_error(describe_api_error(exc), tool_name)
    except Exception:
        logger.exception("Unexpected error calling Aptos indexer on %s", network)
        return tool_error("Unexpected error while calling Aptos Indexer API.", tool_name)
