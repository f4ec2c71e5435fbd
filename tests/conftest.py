"""Pytest configuration for multi-shop tests.

Ensures the project root is in sys.path so imports work correctly, and
provides a project directory wired to a fake process runner.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config.settings import ToolSettings  # noqa: E402
from core.context import create_context  # noqa: E402
from fakes.runner import FakeRunner  # noqa: E402


def make_config(shop_id="shop-a", name="Shop A", production=None, staging=None, **extra):
    """Valid shop config document (camelCase, as on disk)."""
    config = {
        "shopId": shop_id,
        "name": name,
        "shopify": {
            "stores": {
                "production": {"domain": production or f"{shop_id}.myshopify.com", "branch": f"{shop_id}/main"},
                "staging": {"domain": staging or f"staging-{shop_id}.myshopify.com", "branch": f"{shop_id}/staging"},
            },
            "authentication": {"method": "theme-access-app"},
        },
    }
    config.update(extra)
    return config


def make_credentials(production="prod-token-123", staging="staging-token-456", developer="dev"):
    return {
        "developer": developer,
        "shopify": {
            "stores": {
                "production": {"themeToken": production},
                "staging": {"themeToken": staging},
            }
        },
    }


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "MULTI_SHOP_MAX_CONFIG_SIZE",
        "MULTI_SHOP_MIN_TOKEN_LENGTH",
        "MULTI_SHOP_MAX_TOKEN_LENGTH",
        "MULTI_SHOP_COMMAND_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def context(tmp_path, runner):
    return create_context(tmp_path, settings=ToolSettings(), runner=runner)


@pytest.fixture
def config_factory():
    return make_config


@pytest.fixture
def credentials_factory():
    return make_credentials
