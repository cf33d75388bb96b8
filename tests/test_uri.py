import logging

from nodit_mcp.catalog import build_uri
from nodit_mcp.catalog.uri import template_variables


def test_data_api_path_uses_protocol_and_network(registry):
    resolved = registry.resolve("getBlockByHashOrNumber")
    uri = build_uri(resolved, "ethereum", "mainnet")
    assert uri == "https://web3.nodit.io/v1/ethereum/mainnet/blockchain/getBlockByHashOrNumber"


def test_chain_network_host_placeholder(registry):
    assert build_uri(registry.resolve("eth_getBalance"), "ethereum", "mainnet") == (
        "https://ethereum-mainnet.nodit.io/"
    )
    assert build_uri(registry.resolve("polygon-eth_blockNumber"), "polygon", "amoy") == (
        "https://polygon-amoy.nodit.io/"
    )
    assert build_uri(registry.resolve("sui-suix_getBalance"), "sui", "mainnet") == (
        "https://sui-mainnet.nodit.io/suix_getBalance"
    )


def test_network_only_placeholder(registry):
    uri = build_uri(
        registry.resolve("aptos_getAccount"), "aptos", "testnet", path_params={"address": "0x1"}
    )
    assert uri == "https://aptos-testnet.nodit.io/v1/accounts/0x1"


def test_query_params_keep_order_and_percent_encode(registry):
    uri = build_uri(
        registry.resolve("aptos_getAccount"),
        "aptos",
        "mainnet",
        path_params={"address": "0x1"},
        query_params={"b": "x y", "a": 1},
    )
    assert uri == "https://aptos-mainnet.nodit.io/v1/accounts/0x1?b=x%20y&a=1"


def test_query_values_are_stringified(registry):
    uri = build_uri(
        registry.resolve("getBlockByHashOrNumber"),
        "ethereum",
        "mainnet",
        query_params={"withLogs": True, "cursor": None, "limit": False},
    )
    assert uri.endswith("?withLogs=true&cursor=null&limit=false")


def test_path_params_override_derived_values(registry):
    uri = build_uri(
        registry.resolve("getBlockByHashOrNumber"),
        "ethereum",
        "mainnet",
        path_params={"network": "sepolia"},
    )
    assert uri == "https://web3.nodit.io/v1/ethereum/sepolia/blockchain/getBlockByHashOrNumber"


def test_unresolved_placeholders_stay_literal(registry, caplog):
    with caplog.at_level(logging.WARNING):
        uri = build_uri(registry.resolve("aptos_getAccount"), "aptos", "mainnet")
    assert uri == "https://aptos-mainnet.nodit.io/v1/accounts/{address}"
    assert "Unresolved URI template variables address" in caplog.text


def test_template_variables_are_distinct_and_ordered():
    assert template_variables("/{protocol}/{network}/{protocol}/{id}") == ["protocol", "network", "id"]
