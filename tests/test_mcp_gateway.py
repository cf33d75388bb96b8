import json

import pytest
from fastapi.testclient import TestClient

from nodit_mcp import mcp
from nodit_mcp.server import MCP_SERVER_NAME, MCP_SERVER_VERSION, app


class StubClient:
    def __init__(self, result="{}"):
        self.result = result
        self.calls = []

    async def request(self, method, url, *, json_body=None):
        self.calls.append((method, url, json_body))
        return self.result


def _rpc(method, params=None, rpc_id=1):
    payload = {"jsonrpc": "2.0", "id": rpc_id, "method": method}
    if params is not None:
        payload["params"] = params
    return payload


def test_mcp_list_tools(app_registry):
    client = TestClient(app)
    resp = client.post("/mcp", json=_rpc("tools/list"))
    assert resp.status_code == 200
    tools = resp.json()["result"]["tools"]
    names = {tool["name"] for tool in tools}
    assert names == set(mcp.TOOL_REGISTRY)
    assert "list_webhook_data_apis" in names
    call_tool = next(t for t in tools if t["name"] == "call_nodit_api")
    assert call_tool["inputSchema"]["required"] == ["protocol", "network", "operation_id"]


def test_mcp_initialize(app_registry):
    client = TestClient(app)
    resp = client.post(
        "/mcp",
        json=_rpc(
            "initialize",
            {"protocolVersion": "2025-03-26", "capabilities": {}, "clientInfo": {"name": "t"}},
            rpc_id=10,
        ),
    )
    data = resp.json()
    assert data["id"] == 10
    assert data["result"]["protocolVersion"] == "2025-03-26"
    assert data["result"]["serverInfo"] == {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION}


def test_mcp_initialize_requires_protocol_version(app_registry):
    client = TestClient(app)
    resp = client.post("/mcp", json=_rpc("initialize", {}))
    assert resp.json()["error"]["code"] == -32602


def test_mcp_call_listing_tool_returns_text(app_registry):
    client = TestClient(app)
    resp = client.post("/mcp", json=_rpc("tools/call", {"name": "list_nodit_data_apis", "arguments": {}}))
    result = resp.json()["result"]
    assert "isError" not in result
    assert result["content"][0]["type"] == "text"
    assert "getBlockByHashOrNumber" in result["content"][0]["text"]


def test_mcp_call_rejected_request_is_in_band_error(app_registry):
    client = TestClient(app)
    resp = client.post(
        "/mcp",
        json=_rpc(
            "call_tool",
            {
                "tool": "call_nodit_api",
                "params": {"protocol": "polygon", "network": "mainnet", "operation_id": "eth_blockNumber"},
            },
            rpc_id=2,
        ),
    )
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["isError"] is True
    assert "protocol prefix" in result["content"][0]["text"]
    assert result["structuredContent"]["error"].startswith("Tool Error:")


def test_mcp_unknown_tool_and_bad_params(app_registry):
    client = TestClient(app)
    resp = client.post("/mcp", json=_rpc("tools/call", {"name": "nope"}))
    assert resp.json()["result"]["structuredContent"] == {"error": "Unknown tool: nope"}

    resp = client.post(
        "/mcp", json=_rpc("tools/call", {"name": "get_nodit_api_spec", "arguments": {"bogus": 1}})
    )
    assert resp.json()["result"]["structuredContent"] == {"error": "Invalid parameters."}

    resp = client.post(
        "/mcp",
        json=_rpc("tools/call", {"name": "list_nodit_node_apis", "arguments": {"registry": "x"}}),
    )
    assert resp.json()["result"]["structuredContent"] == {"error": "Invalid parameters."}


def test_mcp_protocol_errors(app_registry):
    client = TestClient(app)
    resp = client.post("/mcp", content="not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == -32700

    resp = client.post("/mcp", json=[1, 2])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == -32600

    resp = client.post("/mcp", json=_rpc("tools/list", params=[1]))
    assert resp.json()["error"]["code"] == -32602

    resp = client.post("/mcp", json=_rpc("resources/list"))
    assert resp.json()["error"]["code"] == -32601


def test_mcp_initialized_notification_has_no_body(app_registry):
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert resp.status_code == 204
    assert resp.content == b""


@pytest.mark.asyncio
async def test_call_tool_injects_registry_and_client(registry):
    stub = StubClient(result='{"result": "0x10"}')
    result = await mcp.call_tool(
        "call_nodit_api",
        {
            "protocol": "ethereum",
            "network": "sepolia",
            "operation_id": "eth_blockNumber",
            "request_body": {"jsonrpc": "2.0", "id": 1, "method": "eth_blockNumber", "params": []},
        },
        registry=registry,
        client=stub,
    )
    assert result == '{"result": "0x10"}'
    assert stub.calls[0][:2] == ("post", "https://ethereum-sepolia.nodit.io/")


@pytest.mark.asyncio
async def test_call_tool_spec_lookup(registry):
    result = await mcp.call_tool("get_nodit_api_spec", {"operation_id": "getWebhooks"}, registry=registry)
    assert json.loads(result)["method"] == "get"
