import pytest

from nodit_mcp.catalog import ApiFamily
from nodit_mcp.catalog.classifier import (
    chain_of_node_key,
    classify,
    is_ethereum_node_api,
    is_node_api,
    is_webhook_api,
    lookup_key,
    method_name,
    node_lookup_key,
)


@pytest.mark.parametrize(
    "operation_id",
    ["eth_getBalance", "polygon-eth_blockNumber", "aptos_getAccount", "solana-getHealth", "sui-suix_getBalance"],
)
def test_node_api_identifiers(operation_id):
    assert is_node_api(operation_id)
    assert classify(operation_id) is ApiFamily.NODE


@pytest.mark.parametrize("operation_id", ["getBlockByHashOrNumber", "getTokenPricesByContracts"])
def test_data_api_identifiers(operation_id):
    assert not is_node_api(operation_id)
    assert classify(operation_id) is ApiFamily.DATA


def test_webhook_wins_over_node_shape():
    assert is_webhook_api("createWebhook")
    assert classify("createWebhook") is ApiFamily.WEBHOOK
    # Underscore would otherwise make it node-shaped.
    assert classify("update_Webhook") is ApiFamily.WEBHOOK


def test_bare_methods_use_ethereum_key():
    assert is_ethereum_node_api("eth_getBalance")
    assert node_lookup_key("eth_getBalance") == "ethereum-eth_getBalance"
    assert lookup_key("eth_getBalance") == (ApiFamily.NODE, "ethereum-eth_getBalance")


@pytest.mark.parametrize(
    "operation_id", ["polygon-eth_blockNumber", "sui-suix_getBalance", "aptos_getAccount", "solana-getHealth"]
)
def test_prefixed_methods_are_looked_up_verbatim(operation_id):
    assert not is_ethereum_node_api(operation_id)
    assert lookup_key(operation_id) == (ApiFamily.NODE, operation_id)


def test_data_and_webhook_keys_are_verbatim():
    assert lookup_key("getBlockByHashOrNumber") == (ApiFamily.DATA, "getBlockByHashOrNumber")
    assert lookup_key("deleteWebhook") == (ApiFamily.WEBHOOK, "deleteWebhook")


def test_chain_and_method_helpers():
    assert chain_of_node_key("polygon-eth_call") == "polygon"
    assert chain_of_node_key("aptos_getAccount") == "aptos"
    assert chain_of_node_key("ethereum-eth_call") == "ethereum"
    assert chain_of_node_key("eth_call") is None
    assert method_name("polygon-eth_call") == "eth_call"
    assert method_name("eth_call") == "eth_call"
