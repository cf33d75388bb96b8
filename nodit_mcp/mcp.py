"""
Lightweight JSON-RPC surface for MCP-style tooling.

This keeps a minimal mapping of tool names to implementations. The operation
registry and the API client are passed in by the caller; tools never look them
up on their own.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from nodit_mcp.catalog import ApiRegistry
from nodit_mcp.nodit_api import default_client
from nodit_mcp.tools import (
    call_nodit_api,
    call_nodit_aptos_indexer_api,
    get_nodit_api_spec,
    get_nodit_aptos_indexer_api_spec,
    list_nodit_api_categories,
    list_nodit_aptos_indexer_api_query_root,
    list_nodit_data_apis,
    list_nodit_node_apis,
    list_webhook_data_apis,
)

logger = logging.getLogger(__name__)

ToolCallable = Callable[..., Awaitable[Any]] | Callable[..., Any]

NO_PARAMS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {},
    "required": [],
    "additionalProperties": False,
}


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, Any]
    input_schema: Dict[str, Any]
    callable: ToolCallable
    # Keyword arguments injected by call_tool ("registry", "client").
    context: Tuple[str, ...] = ("registry",)


TOOL_REGISTRY: Dict[str, ToolDefinition] = {
    "list_nodit_api_categories": ToolDefinition(
        name="list_nodit_api_categories",
        description=(
            "Lists available Nodit API categories from Nodit Blockchain Context. "
            "To use the Nodit API tool, you must first call this tool."
        ),
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_nodit_api_categories,
    ),
    "list_nodit_node_apis": ToolDefinition(
        name="list_nodit_node_apis",
        description="Lists available Nodit Node API operations.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_nodit_node_apis,
    ),
    "list_nodit_data_apis": ToolDefinition(
        name="list_nodit_data_apis",
        description="Lists available Nodit Data API operations.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_nodit_data_apis,
    ),
    "list_webhook_data_apis": ToolDefinition(
        name="list_webhook_data_apis",
        description="Lists available Nodit Webhook API operations.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_webhook_data_apis,
    ),
    "get_nodit_api_spec": ToolDefinition(
        name="get_nodit_api_spec",
        description=(
            "Gets the fully resolved spec details for a Nodit Blockchain Context API "
            "operationId. Returns details as a JSON string."
        ),
        params={"operation_id": "string (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "operation_id": {
                    "type": "string",
                    "description": "The operationId to get the resolved specification for.",
                    "minLength": 1,
                }
            },
            "required": ["operation_id"],
            "additionalProperties": False,
        },
        callable=get_nodit_api_spec,
    ),
    "call_nodit_api": ToolDefinition(
        name="call_nodit_api",
        description=(
            "Calls a specific Nodit Blockchain Context API using its operationId. Before "
            "making the call, it's recommended to verify the detailed API specifications "
            "using the 'get_nodit_api_spec' tool. Please note that using this tool will "
            "consume your API quota."
        ),
        params={
            "protocol": "string (required)",
            "network": "string (required)",
            "operation_id": "string (required)",
            "request_body": "object (optional)",
            "path_params": "object (optional)",
            "query_params": "object (optional)",
        },
        input_schema={
            "type": "object",
            "properties": {
                "protocol": {
                    "type": "string",
                    "description": "Nodit protocol to call. e.g. 'ethereum' or 'polygon'.",
                },
                "network": {
                    "type": "string",
                    "description": "Nodit network to call. e.g. 'mainnet' or 'amoy'.",
                },
                "operation_id": {
                    "type": "string",
                    "description": "Nodit API operationId to call.",
                },
                "request_body": {
                    "type": "object",
                    "description": "JSON request body matching the API's spec.",
                },
                "path_params": {
                    "type": "object",
                    "description": "Values for path template variables, e.g. {\"address\": \"0x...\"}.",
                },
                "query_params": {
                    "type": "object",
                    "description": "Query string parameters.",
                },
            },
            "required": ["protocol", "network", "operation_id"],
            "additionalProperties": False,
        },
        callable=call_nodit_api,
        context=("registry", "client"),
    ),
    "list_nodit_aptos_indexer_api_query_root": ToolDefinition(
        name="list_nodit_aptos_indexer_api_query_root",
        description="Lists all query roots available in the Nodit Aptos Indexer GraphQL API.",
        params={},
        input_schema=NO_PARAMS_SCHEMA,
        callable=list_nodit_aptos_indexer_api_query_root,
    ),
    "get_nodit_aptos_indexer_api_spec": ToolDefinition(
        name="get_nodit_aptos_indexer_api_spec",
        description=(
            "Returns the GraphQL specification for a specific query root in the Nodit "
            "Aptos Indexer API."
        ),
        params={"query_root": "string (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "query_root": {
                    "type": "string",
                    "description": (
                        "The name of the query root to get the specification for. Use "
                        "list_nodit_aptos_indexer_api_query_root to see available query roots."
                    ),
                }
            },
            "required": ["query_root"],
            "additionalProperties": False,
        },
        callable=get_nodit_aptos_indexer_api_spec,
    ),
    "call_nodit_aptos_indexer_api": ToolDefinition(
        name="call_nodit_aptos_indexer_api",
        description=(
            "Calls a Nodit Aptos Indexer API. Returns the API response. Before making the "
            "call, it's recommended to verify the detailed API specifications using the "
            "'get_nodit_aptos_indexer_api_spec' tool. Please note that using this tool will "
            "consume your API quota."
        ),
        params={"network": "string (required)", "request_body": "object (required)"},
        input_schema={
            "type": "object",
            "properties": {
                "network": {
                    "type": "string",
                    "description": "Nodit network to call. e.g. 'mainnet' or 'testnet'.",
                },
                "request_body": {
                    "type": "object",
                    "description": "GraphQL request body matching the API's spec.",
                },
            },
            "required": ["network", "request_body"],
            "additionalProperties": False,
        },
        callable=call_nodit_aptos_indexer_api,
        context=("client",),
    ),
}


def list_tools() -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "params": tool.params,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


async def call_tool(
    tool_name: str,
    params: Optional[Dict[str, Any]] = None,
    *,
    registry: ApiRegistry,
    client=default_client,
) -> Any:
    """Dispatch to a tool by name."""
    params = params or {}
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        return {"error": f"Unknown tool: {tool_name}"}

    available = {"registry": registry, "client": client}
    context = {name: available[name] for name in tool.context}
    if set(params).intersection(context):
        return {"error": "Invalid parameters."}

    # Match parameters by name; tools already handle validation and error shaping.
    try:
        result = tool.callable(**params, **context)
        if inspect.isawaitable(result):
            return await result
        return result
    except TypeError:
        return {"error": "Invalid parameters."}
    except Exception:
        logger.exception("Unexpected error calling tool %s", tool_name)
        return {"error": "Unexpected error while calling tool."}
