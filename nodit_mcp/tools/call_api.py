"""The call_nodit_api tool: validate, resolve, build the URI and dispatch."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from nodit_mcp.catalog import (
    ApiRegistry,
    OperationNotFoundError,
    build_uri,
    validate_api_request,
)
from nodit_mcp.metrics import default_metrics
from nodit_mcp.nodit_api import NoditApiError, default_client
from nodit_mcp.tools.common import describe_api_error, tool_error

logger = logging.getLogger(__name__)

TOOL_NAME = "call_nodit_api"


async def call_nodit_api(
    protocol: str,
    network: str,
    operation_id: str,
    request_body: Optional[Dict[str, Any]] = None,
    path_params: Optional[Dict[str, Any]] = None,
    query_params: Optional[Dict[str, Any]] = None,
    *,
    registry: ApiRegistry,
    client=default_client,
) -> Any:
    """
    Call a Nodit node or data API operation by operationId.

    Args:
        protocol: Chain name, e.g. "ethereum" or "polygon".
        network: Network name, e.g. "mainnet" or "amoy".
        operation_id: Operation id as listed by the list tools.
        request_body: JSON body sent for POST/PUT/PATCH operations.
        path_params: Values for path template variables.
        query_params: Query string parameters, serialized in the given order.
        registry: Operation registry to resolve against.
        client: Nodit API client (override for testing).

    Returns:
        The raw JSON response text, or an error dict.
    """
    rejection = validate_api_request(protocol, operation_id, registry)
    if rejection is not None:
        default_metrics.record_rejection(rejection.kind.value)
        return tool_error(rejection.message, TOOL_NAME)

    try:
        resolved = registry.resolve(operation_id)
    except OperationNotFoundError as exc:
        return tool_error(str(exc), TOOL_NAME)

    uri = build_uri(resolved, protocol, network, path_params, query_params)

    try:
        text = await client.request(resolved.method, uri, json_body=request_body)
    except NoditApiError as exc:
        return tool_error(describe_api_error(exc), TOOL_NAME)
    except Exception:
        logger.exception("Unexpected error calling %s", operation_id)
        return tool_error("Unexpected error while calling Nodit API.", TOOL_NAME)

    logger.info(
        "Tool (%s): API success for %s",
        TOOL_NAME,
        operation_id,
        extra={"tool": TOOL_NAME, "operation_id": operation_id},
    )
    return text
