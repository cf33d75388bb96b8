"""Nodit API client package."""

from .client import (
    MalformedResponseError,
    MissingApiKeyError,
    NoditApiClient,
    NoditApiError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
)

default_client = NoditApiClient()

__all__ = [
    "NoditApiClient",
    "NoditApiError",
    "MissingApiKeyError",
    "RequestTimeoutError",
    "TransportError",
    "UpstreamError",
    "MalformedResponseError",
    "default_client",
]
