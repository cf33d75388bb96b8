"""
Specification loader.

Reads the Nodit OpenAPI documents (YAML or JSON) and the Aptos indexer
metadata from the specification directory. Files that cannot be read or parsed
are logged and skipped; a missing family simply yields no documents.

Layout under ``spec_dir``::

    reference/evm-<chain>-<method>.yaml          single-operation node APIs
    reference/sui-node-api/*.yaml                multi-path node APIs
    reference/solana-node-api/http-methods/*.yaml
    reference/aptos-node-api.yaml
    reference/web3-data-api.yaml                 data API
    reference/webhook.yaml                       webhook API
    nodit-aptos-indexer-api-schema.json          Aptos indexer metadata
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

from nodit_mcp.catalog.models import SpecDocument
from nodit_mcp.catalog.registry import (
    ApiRegistry,
    LoadedDocuments,
    NodeSpecSource,
    build_registry,
)
from nodit_mcp.config import NoditConfig, default_config

logger = logging.getLogger(__name__)

EVM_SPEC_PREFIX = "evm-"
DATA_API_FILE = "web3-data-api.yaml"
WEBHOOK_API_FILE = "webhook.yaml"
APTOS_NODE_API_FILE = "aptos-node-api.yaml"
SUI_NODE_API_DIR = Path("sui-node-api")
SOLANA_NODE_API_DIR = Path("solana-node-api") / "http-methods"
SPEC_SUFFIXES = (".yaml", ".yml", ".json")


def load_spec_file(path: Path) -> Any:
    """Parse one specification file as JSON or YAML depending on its suffix."""
    contents = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(contents)
    return yaml.safe_load(contents)


def _load_document(path: Path) -> Optional[SpecDocument]:
    try:
        return SpecDocument.from_openapi(path.name, load_spec_file(path))
    except (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError) as exc:
        logger.warning("Error loading spec file %s: %s", path, exc)
        return None


def _spec_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        logger.warning("Spec directory %s not found", directory)
        return []
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix in SPEC_SUFFIXES
    )


def _load_evm_sources(reference_dir: Path) -> List[NodeSpecSource]:
    sources: List[NodeSpecSource] = []
    for path in _spec_files(reference_dir):
        if not path.name.startswith(EVM_SPEC_PREFIX) or path.suffix != ".yaml":
            continue
        parts = path.stem.split("-")
        if len(parts) < 2:
            continue
        document = _load_document(path)
        if document is not None:
            sources.append(NodeSpecSource(chain=parts[1], document=document))
    return sources


def _load_multi_path_sources(directory: Path, chain: str) -> List[NodeSpecSource]:
    sources: List[NodeSpecSource] = []
    for path in _spec_files(directory):
        document = _load_document(path)
        if document is not None:
            sources.append(NodeSpecSource(chain=chain, document=document, multi_path=True))
    return sources


def _load_optional_document(path: Path) -> Optional[SpecDocument]:
    if not path.is_file():
        logger.warning("Spec file %s not found", path)
        return None
    return _load_document(path)


def load_indexer_metadata(path: Path) -> Optional[dict]:
    if not path.is_file():
        logger.warning("Aptos indexer schema %s not found", path)
        return None
    try:
        metadata = load_spec_file(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.warning("Error loading Aptos indexer schema %s: %s", path, exc)
        return None
    if not isinstance(metadata, dict):
        logger.warning("Aptos indexer schema %s is not a JSON object", path)
        return None
    return metadata


def load_documents(config: NoditConfig = default_config) -> LoadedDocuments:
    """Read every specification document under ``config.spec_dir``."""
    reference_dir = config.reference_dir

    node_sources = _load_evm_sources(reference_dir)
    node_sources.extend(_load_multi_path_sources(reference_dir / SUI_NODE_API_DIR, "sui"))
    node_sources.extend(_load_multi_path_sources(reference_dir / SOLANA_NODE_API_DIR, "solana"))
    aptos_document = _load_optional_document(reference_dir / APTOS_NODE_API_FILE)
    if aptos_document is not None:
        node_sources.append(NodeSpecSource(chain="aptos", document=aptos_document, multi_path=True))

    return LoadedDocuments(
        node_sources=node_sources,
        data_document=_load_optional_document(reference_dir / DATA_API_FILE),
        webhook_document=_load_optional_document(reference_dir / WEBHOOK_API_FILE),
        indexer_metadata=load_indexer_metadata(config.aptos_indexer_schema_path),
    )


def load_registry(config: NoditConfig = default_config) -> ApiRegistry:
    """Load all documents once and index them."""
    return build_registry(load_documents(config))
