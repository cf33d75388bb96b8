import os
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from nodit_mcp.catalog import load_registry  # noqa: E402
from nodit_mcp.config import NoditConfig  # noqa: E402
from nodit_mcp.metrics import default_metrics  # noqa: E402

FIXTURE_SPEC_DIR = Path(__file__).parent / "fixtures" / "spec"


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture
def fixture_config():
    return NoditConfig(spec_dir=str(FIXTURE_SPEC_DIR), api_key="test-key")


@pytest.fixture
def registry(fixture_config):
    return load_registry(fixture_config)


@pytest.fixture
def app_registry(registry):
    from nodit_mcp.server import app

    previous = getattr(app.state, "registry", None)
    app.state.registry = registry
    yield registry
    app.state.registry = previous
