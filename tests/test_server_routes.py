import json

from fastapi.testclient import TestClient

from nodit_mcp.server import app


def test_listing_routes_return_text(app_registry):
    client = TestClient(app)
    for path, marker in [
        ("/tools/api_categories", "Nodit Node API"),
        ("/tools/node_apis", "eth_getBalance"),
        ("/tools/data_apis", "getBlockByHashOrNumber"),
        ("/tools/webhook_apis", "createWebhook"),
        ("/tools/aptos_indexer/query_roots", "coin_activities"),
    ]:
        resp = client.get(path)
        assert resp.status_code == 200, path
        assert resp.headers["content-type"].startswith("text/plain")
        assert marker in resp.text


def test_api_spec_route(app_registry):
    client = TestClient(app)
    resp = client.get("/tools/api_spec/polygon-eth_blockNumber")
    assert resp.status_code == 200
    assert json.loads(resp.text)["operationId"] == "polygon-eth_blockNumber"

    missing = client.get("/tools/api_spec/eth_missing")
    assert missing.json() == {"error": "Tool Error: Spec for operationId 'eth_missing' not found."}


def test_aptos_indexer_spec_route(app_registry):
    client = TestClient(app)
    resp = client.get("/tools/aptos_indexer/spec/account_transactions")
    assert resp.status_code == 200
    assert resp.text.startswith("GraphQL specification for query root 'account_transactions':")


def test_tool_outcomes_are_counted(app_registry):
    client = TestClient(app)
    client.get("/tools/node_apis")
    client.get("/tools/api_spec/eth_missing")
    data = client.get("/metrics").json()
    assert data["tool_success"].get("list_nodit_node_apis") == 1
    assert data["tool_error"].get("get_nodit_api_spec") == 1
