"""Minimal sanity checks for the Nodit MCP tools."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from nodit_mcp.catalog import load_registry  # noqa: E402
from nodit_mcp.config import default_config  # noqa: E402
from nodit_mcp.nodit_api import default_client  # noqa: E402
from nodit_mcp.tools import (  # noqa: E402
    call_nodit_api,
    get_nodit_api_spec,
    list_nodit_api_categories,
    list_nodit_node_apis,
)

# Override via env to exercise a different chain or operation.
SAMPLE_PROTOCOL = os.getenv("NODIT_SAMPLE_PROTOCOL", "ethereum")
SAMPLE_NETWORK = os.getenv("NODIT_SAMPLE_NETWORK", "mainnet")
SAMPLE_OPERATION_ID = os.getenv("NODIT_SAMPLE_OPERATION_ID", "eth_blockNumber")
# Opt-in to a live call (consumes API quota).
RUN_LIVE_CALL = os.getenv("RUN_NODIT_LIVE_CALL", "false").lower() in {"1", "true", "yes"}


async def main() -> None:
    registry = load_registry(default_config)
    print("Registry size:", len(registry))
    print(list_nodit_api_categories(registry=registry))
    print(list_nodit_node_apis(registry=registry))
    print("Spec:", get_nodit_api_spec(SAMPLE_OPERATION_ID, registry=registry))

    if RUN_LIVE_CALL:
        result = await call_nodit_api(
            SAMPLE_PROTOCOL,
            SAMPLE_NETWORK,
            SAMPLE_OPERATION_ID,
            {"jsonrpc": "2.0", "id": 1, "method": SAMPLE_OPERATION_ID, "params": []},
            registry=registry,
        )
        print("Call result:", result)
    await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
