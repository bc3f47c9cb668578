"""Shared pytest fixtures"""

import pytest
from click.testing import CliRunner

from cli import main
from core.config import ConfigStore
from core.context import HyContext
from tests.mocks.fake_api import API_URL, WORKSPACE_ID, FakeApi, MemorySecretStore

TEST_API_KEY = "sk_test_0123456789abcdef"


# ============================================================
# Local state
# ============================================================

@pytest.fixture
def config_path(tmp_path):
    """Config file location inside the test's temp dir"""
    return tmp_path / "hy" / "config.json"


@pytest.fixture
def config_store(config_path):
    """Empty config store backed by a temp file"""
    return ConfigStore(config_path)


@pytest.fixture
def secret_store():
    """In-memory keychain, initially empty"""
    return MemorySecretStore()


# ============================================================
# Fake API
# ============================================================

@pytest.fixture
def fake_api():
    """Fresh fake API with no routes"""
    return FakeApi()


@pytest.fixture
def hy_context(config_store, secret_store, fake_api):
    """Authenticated context talking to the fake API"""
    return HyContext(
        config=config_store,
        secrets=secret_store,
        environ={
            "HY_API_KEY": TEST_API_KEY,
            "HY_WORKSPACE_ID": WORKSPACE_ID,
            "HY_API_URL": API_URL,
        },
        transport=fake_api.transport,
    )


@pytest.fixture
def anon_context(config_store, secret_store, fake_api):
    """Context with no credentials anywhere"""
    return HyContext(
        config=config_store,
        secrets=secret_store,
        environ={"HY_API_URL": API_URL},
        transport=fake_api.transport,
    )


# ============================================================
# CLI
# ============================================================

@pytest.fixture
def runner():
    """Click CliRunner for testing CLI commands"""
    return CliRunner()


@pytest.fixture
def invoke(runner, hy_context):
    """Run `hy <args>` against the authenticated fake API context"""
    def _invoke(*args, input=None, obj=None):
        return runner.invoke(main, list(args), obj=obj or hy_context, input=input)
    return _invoke


# ============================================================
# Markers Configuration
# ============================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "live_api: marks tests that hit the real API (requires keys)"
    )
