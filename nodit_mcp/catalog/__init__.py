"""Operation resolution and request construction for Nodit APIs."""

from .models import (
    ApiFamily,
    GraphQLTable,
    Operation,
    Parameter,
    ResolvedApiSpec,
    SpecDocument,
    SpecFormatError,
)
from .registry import (
    ApiRegistry,
    LoadedDocuments,
    NodeSpecSource,
    OperationNotFoundError,
    RegistryEntry,
    build_registry,
)
from .policy import (
    BLOCKED_OPERATION_IDS,
    RejectionKind,
    ValidationError,
    validate_api_request,
)
from .uri import build_uri
from .loader import load_documents, load_registry

__all__ = [
    "ApiFamily",
    "ApiRegistry",
    "BLOCKED_OPERATION_IDS",
    "GraphQLTable",
    "LoadedDocuments",
    "NodeSpecSource",
    "Operation",
    "OperationNotFoundError",
    "Parameter",
    "RegistryEntry",
    "RejectionKind",
    "ResolvedApiSpec",
    "SpecDocument",
    "SpecFormatError",
    "ValidationError",
    "build_registry",
    "build_uri",
    "load_documents",
    "load_registry",
    "validate_api_request",
]
