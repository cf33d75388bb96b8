"""The get_nodit_api_spec tool."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from nodit_mcp.catalog import ApiFamily, ApiRegistry
from nodit_mcp.tools.common import tool_error

logger = logging.getLogger(__name__)

TOOL_NAME = "get_nodit_api_spec"
WEBHOOK_SUFFIX = "\nThis API cannot be invoked using the call_nodit_api tool."


def get_nodit_api_spec(operation_id: str, *, registry: ApiRegistry) -> Any:
    """Return the declared spec of a node, data or webhook operation as JSON text."""
    logger.info("Tool (%s): Request for operationId: %s", TOOL_NAME, operation_id)
    entry = registry.lookup(operation_id)
    if entry is None:
        return tool_error(f"Spec for operationId '{operation_id}' not found.", TOOL_NAME)

    details: Dict[str, Any] = entry.operation.to_dict()
    if entry.family is ApiFamily.WEBHOOK:
        description = details.get("description") or ""
        if not description.endswith(WEBHOOK_SUFFIX):
            details["description"] = description + WEBHOOK_SUFFIX

    spec = {
        "operationId": operation_id,
        "path": entry.operation.path,
        "method": entry.operation.method,
        "details": details,
    }
    return json.dumps(spec, indent=2, default=str)
