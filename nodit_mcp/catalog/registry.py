"""
Operation registry built once from the loaded specification documents.

Every entry is tagged with its family when the registry is built. Runtime
resolution classifies the incoming identifier once and then performs a single
keyed lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from nodit_mcp.catalog.classifier import ETHEREUM, ETHEREUM_KEY_PREFIX, chain_of_node_key, lookup_key
from nodit_mcp.catalog.models import (
    ApiFamily,
    GraphQLTable,
    Operation,
    ResolvedApiSpec,
    SpecDocument,
)

logger = logging.getLogger(__name__)

CANONICAL_NODE_PATH = "/"
CANONICAL_NODE_METHOD = "post"


class OperationNotFoundError(LookupError):
    """Raised when an operation id does not resolve to a registered operation."""

    def __init__(self, operation_id: str) -> None:
        super().__init__(f"No API spec found for operationId: {operation_id}")
        self.operation_id = operation_id


@dataclass(frozen=True, slots=True)
class NodeSpecSource:
    """A node API document together with the chain it was loaded for."""

    chain: str
    document: SpecDocument
    multi_path: bool = False


@dataclass(slots=True)
class LoadedDocuments:
    """Everything the specification loader produced, before indexing."""

    node_sources: List[NodeSpecSource] = field(default_factory=list)
    data_document: Optional[SpecDocument] = None
    webhook_document: Optional[SpecDocument] = None
    indexer_metadata: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    family: ApiFamily
    key: str
    document: SpecDocument
    operation: Operation
    chain: Optional[str] = None


class ApiRegistry:
    """Read-only index of every addressable operation and indexer query root."""

    def __init__(
        self,
        entries: Mapping[Tuple[ApiFamily, str], RegistryEntry],
        *,
        tables: Optional[Mapping[str, GraphQLTable]] = None,
        data_document: Optional[SpecDocument] = None,
        webhook_document: Optional[SpecDocument] = None,
    ) -> None:
        self._entries = MappingProxyType(dict(entries))
        self._tables = MappingProxyType(dict(tables or {}))
        self._data_document = data_document
        self._webhook_document = webhook_document

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def data_document(self) -> Optional[SpecDocument]:
        return self._data_document

    @property
    def webhook_document(self) -> Optional[SpecDocument]:
        return self._webhook_document

    def get(self, family: ApiFamily, key: str) -> Optional[RegistryEntry]:
        return self._entries.get((family, key))

    def lookup(self, operation_id: str) -> Optional[RegistryEntry]:
        family, key = lookup_key(operation_id)
        return self.get(family, key)

    def contains(self, operation_id: str) -> bool:
        return self.lookup(operation_id) is not None

    def resolve(self, operation_id: str) -> ResolvedApiSpec:
        """Resolve an operation id to its base URL, path template and method."""
        entry = self.lookup(operation_id)
        if entry is None or not entry.document.server_url:
            raise OperationNotFoundError(operation_id)
        operation = entry.operation
        return ResolvedApiSpec(
            base_url=entry.document.server_url,
            path_template=operation.path,
            method=operation.method,
            operation=operation,
        )

    def entries(self, family: ApiFamily) -> List[RegistryEntry]:
        return [entry for (entry_family, _), entry in self._entries.items() if entry_family is family]

    def chains(self, family: ApiFamily) -> Set[str]:
        """Chains a family supports, derived from registry keys or parameter enums."""
        if family is ApiFamily.NODE:
            chains = {ETHEREUM}
            for entry in self.entries(ApiFamily.NODE):
                chain = entry.chain or chain_of_node_key(entry.key)
                if chain:
                    chains.add(chain)
            return chains
        if family is ApiFamily.GRAPHQL_TABLE:
            return {"aptos"} if self._tables else set()
        chains = set()
        for entry in self.entries(family):
            chains.update(entry.operation.enum_values("chain"))
            chains.update(entry.operation.enum_values("protocol"))
        return chains

    def table(self, query_root: str) -> Optional[GraphQLTable]:
        return self._tables.get(query_root)

    def table_names(self) -> List[str]:
        return sorted(self._tables)


class _RegistryBuilder:
    def __init__(self) -> None:
        self._entries: Dict[Tuple[ApiFamily, str], RegistryEntry] = {}
        self._tables: Dict[str, GraphQLTable] = {}

    def add(self, entry: RegistryEntry) -> bool:
        operation_id = entry.operation.operation_id
        if lookup_key(operation_id) != (entry.family, entry.key):
            logger.warning(
                "Skipping operation %s from %s: id does not address %s key %s",
                operation_id,
                entry.document.name,
                entry.family.value,
                entry.key,
            )
            return False
        existing = self._entries.get((entry.family, entry.key))
        if existing is not None:
            logger.warning(
                "Duplicate %s operation key %s in %s; keeping definition from %s",
                entry.family.value,
                entry.key,
                entry.document.name,
                existing.document.name,
            )
            return False
        self._entries[(entry.family, entry.key)] = entry
        return True

    def add_table(self, table: GraphQLTable) -> None:
        if table.name in self._tables:
            logger.warning("Duplicate indexer query root %s; keeping first definition", table.name)
            return
        self._tables[table.name] = table

    def build(
        self,
        *,
        data_document: Optional[SpecDocument],
        webhook_document: Optional[SpecDocument],
    ) -> ApiRegistry:
        return ApiRegistry(
            self._entries,
            tables=self._tables,
            data_document=data_document,
            webhook_document=webhook_document,
        )


def _add_single_operation_source(builder: _RegistryBuilder, source: NodeSpecSource) -> None:
    methods = source.document.paths.get(CANONICAL_NODE_PATH) or {}
    operation = methods.get(CANONICAL_NODE_METHOD)
    if operation is None:
        logger.warning("Could not extract operationId from spec %s", source.document.name)
        return
    if source.chain == ETHEREUM:
        key = f"{ETHEREUM_KEY_PREFIX}{operation.operation_id}"
    else:
        key = operation.operation_id
    builder.add(
        RegistryEntry(
            family=ApiFamily.NODE,
            key=key,
            document=source.document,
            operation=operation,
            chain=source.chain,
        )
    )


def _add_multi_path_source(builder: _RegistryBuilder, source: NodeSpecSource) -> None:
    for operation in source.document.operations():
        key = operation.operation_id
        builder.add(
            RegistryEntry(
                family=ApiFamily.NODE,
                key=key,
                document=source.document.single_operation_view(operation),
                operation=operation,
                chain=chain_of_node_key(key) or source.chain,
            )
        )


def _add_family_document(
    builder: _RegistryBuilder, family: ApiFamily, document: Optional[SpecDocument]
) -> None:
    if document is None:
        return
    for operation in document.operations():
        builder.add(
            RegistryEntry(
                family=family,
                key=operation.operation_id,
                document=document,
                operation=operation,
            )
        )


def _iter_raw_indexer_tables(metadata: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    inner = metadata.get("metadata")
    sources = inner.get("sources") if isinstance(inner, dict) else None
    for source in sources if isinstance(sources, list) else []:
        if not isinstance(source, dict) or not isinstance(source.get("tables"), list):
            continue
        for raw_table in source["tables"]:
            if isinstance(raw_table, dict):
                yield raw_table


def _add_indexer_tables(builder: _RegistryBuilder, metadata: Mapping[str, Any]) -> None:
    for raw_table in _iter_raw_indexer_tables(metadata):
        try:
            table = GraphQLTable.from_raw(raw_table)
        except Exception:
            logger.exception("Error indexing Aptos indexer table %s", raw_table.get("table"))
            continue
        if table is not None:
            builder.add_table(table)


def build_registry(loaded: LoadedDocuments) -> ApiRegistry:
    """Index every loaded document. Never raises for an individual bad document."""
    builder = _RegistryBuilder()

    for source in loaded.node_sources:
        try:
            if source.multi_path:
                _add_multi_path_source(builder, source)
            else:
                _add_single_operation_source(builder, source)
        except Exception:
            logger.exception("Error indexing node spec %s", source.document.name)

    _add_family_document(builder, ApiFamily.DATA, loaded.data_document)
    _add_family_document(builder, ApiFamily.WEBHOOK, loaded.webhook_document)

    if loaded.indexer_metadata:
        _add_indexer_tables(builder, loaded.indexer_metadata)

    registry = builder.build(
        data_document=loaded.data_document,
        webhook_document=loaded.webhook_document,
    )
    logger.info(
        "Built operation registry: node=%d data=%d webhook=%d query_roots=%d",
        len(registry.entries(ApiFamily.NODE)),
        len(registry.entries(ApiFamily.DATA)),
        len(registry.entries(ApiFamily.WEBHOOK)),
        len(registry.table_names()),
    )
    return registry
