"""LLM-facing tool implementations."""

from .categories import list_nodit_api_categories
from .node_apis import list_nodit_node_apis
from .data_apis import list_nodit_data_apis, list_webhook_data_apis
from .api_spec import get_nodit_api_spec
from .call_api import call_nodit_api
from .aptos_indexer import (
    list_nodit_aptos_indexer_api_query_root,
    get_nodit_aptos_indexer_api_spec,
    call_nodit_aptos_indexer_api,
)

__all__ = [
    "list_nodit_api_categories",
    "list_nodit_node_apis",
    "list_nodit_data_apis",
    "list_webhook_data_apis",
    "get_nodit_api_spec",
    "call_nodit_api",
    "list_nodit_aptos_indexer_api_query_root",
    "get_nodit_aptos_indexer_api_spec",
    "call_nodit_aptos_indexer_api",
]
