"""
Configuration helpers for the Nodit MCP server.

This module centralizes specification directory selection, API key loading and
default timeouts. No secrets are stored in the repository; the API key is read
from environment or a local file if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

REPO_ROOT = Path(__file__).resolve().parent.parent

# Default connection settings
DEFAULT_SPEC_DIR = os.getenv("NODIT_SPEC_DIR", str(REPO_ROOT / "spec"))
DEFAULT_APTOS_INDEXER_URL = os.getenv(
    "NODIT_APTOS_INDEXER_URL", "https://aptos-{network}.nodit.io/v1/graphql"
)
DEFAULT_USER_AGENT = "nodit-mcp-server"
DEFAULT_TIMEOUT_SECONDS = 60.0


def _load_timeout() -> float:
    raw_timeout = os.getenv("NODIT_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return DEFAULT_TIMEOUT_SECONDS
    return DEFAULT_TIMEOUT_SECONDS


DEFAULT_TIMEOUT = _load_timeout()

# API key handling
API_KEY_ENV_VAR = "NODIT_API_KEY"
API_KEY_FILE_ENV_VAR = "NODIT_API_KEY_FILE"
DEFAULT_API_KEY_FILE = "apikey.txt"

LOG_LEVEL = os.getenv("NODIT_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("NODIT_MCP_LOG_FORMAT", "json")  # json or plain


def load_api_key() -> Optional[str]:
    """
    Load the Nodit API key from environment or a local file.

    Returns:
        The API key string if available, otherwise None. The key is never logged
        or returned to callers.
    """
    env_key = os.getenv(API_KEY_ENV_VAR)
    if env_key:
        return env_key.strip()

    key_path = os.getenv(API_KEY_FILE_ENV_VAR, DEFAULT_API_KEY_FILE)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or None

    return None


@dataclass(slots=True)
class NoditConfig:
    """Runtime configuration for Nodit API access."""

    spec_dir: str = DEFAULT_SPEC_DIR
    timeout: float = DEFAULT_TIMEOUT
    api_key: Optional[str] = load_api_key()
    user_agent: str = DEFAULT_USER_AGENT
    aptos_indexer_url: str = DEFAULT_APTOS_INDEXER_URL
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    @property
    def reference_dir(self) -> Path:
        return Path(self.spec_dir) / "reference"

    @property
    def aptos_indexer_schema_path(self) -> Path:
        return Path(self.spec_dir) / "nodit-aptos-indexer-api-schema.json"

    def aptos_indexer_endpoint(self, network: str) -> str:
        return self.aptos_indexer_url.replace("{network}", network)


default_config = NoditConfig()
