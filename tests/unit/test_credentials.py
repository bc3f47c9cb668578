"""Unit tests for core/credentials.py and core/context.py - precedence and fail-fast"""

import pytest

from core.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from core.context import HyContext
from core.credentials import CredentialResolver
from core.errors import ConfigurationError
from tests.mocks.fake_api import MemorySecretStore


@pytest.fixture
def resolver_for(config_store):
    def _make(environ=None, keychain="", **overrides):
        return CredentialResolver(
            config_store,
            MemorySecretStore(keychain),
            environ or {},
            **overrides
        )
    return _make


class TestApiKey:

    def test_env_only(self, resolver_for):
        assert resolver_for({"HY_API_KEY": "sk_test"}).resolve_api_key() == "sk_test"

    def test_env_beats_keychain_and_config(self, resolver_for, config_store):
        config_store.set("api_key", "from_config")
        resolver = resolver_for({"HY_API_KEY": "from_env"}, keychain="from_keychain")
        assert resolver.api_key_with_source() == ("from_env", "env")

    def test_keychain_beats_config(self, resolver_for, config_store):
        config_store.set("api_key", "from_config")
        assert resolver_for(keychain="from_keychain").api_key_with_source() == (
            "from_keychain", "keychain",
        )

    def test_config_fallback(self, resolver_for, config_store):
        config_store.set("api_key", "from_config")
        assert resolver_for().api_key_with_source() == ("from_config", "config")

    def test_none(self, resolver_for):
        assert resolver_for().api_key_with_source() == ("", "")

    def test_empty_env_is_ignored(self, resolver_for):
        assert resolver_for({"HY_API_KEY": ""}, keychain="k").resolve_api_key() == "k"


class TestWorkspace:

    def test_flag_beats_env(self, resolver_for):
        resolver = resolver_for({"HY_WORKSPACE_ID": "ws_env"}, workspace_override="ws_flag")
        assert resolver.resolve_workspace_id() == "ws_flag"

    def test_env_beats_config(self, resolver_for, config_store):
        config_store.set("workspace_id", "ws_config")
        assert resolver_for({"HY_WORKSPACE_ID": "ws_env"}).resolve_workspace_id() == "ws_env"

    def test_config(self, resolver_for, config_store):
        config_store.set("workspace_id", "ws_config")
        assert resolver_for().resolve_workspace_id() == "ws_config"


class TestApiUrl:

    def test_default(self, resolver_for):
        assert resolver_for().resolve_api_url() == DEFAULT_API_URL

    def test_precedence(self, resolver_for, config_store):
        config_store.set("api_url", "https://config.test/api")
        assert resolver_for().resolve_api_url() == "https://config.test/api"
        assert resolver_for({"HY_API_URL": "https://env.test/api"}).resolve_api_url() == "https://env.test/api"
        assert resolver_for(
            {"HY_API_URL": "https://env.test/api"}, api_url_override="https://flag.test/api/",
        ).resolve_api_url() == "https://flag.test/api"


# ============================================================
# HyContext
# ============================================================

class TestContext:

    def test_client_requires_key(self, config_store):
        ctx = HyContext(config=config_store, secrets=MemorySecretStore(), environ={})
        with pytest.raises(ConfigurationError, match="not authenticated"):
            ctx.client()

    def test_client_requires_workspace(self, config_store):
        ctx = HyContext(config=config_store, secrets=MemorySecretStore("k"), environ={})
        with pytest.raises(ConfigurationError, match="no workspace"):
            ctx.client()

    def test_client_rejects_non_ascii_env_key(self, config_store):
        ctx = HyContext(
            config=config_store,
            secrets=MemorySecretStore(),
            environ={"HY_API_KEY": "sk_live_\u00e9", "HY_WORKSPACE_ID": "ws_1"},
        )
        with pytest.raises(ConfigurationError, match="HY_API_KEY environment variable contains non-ASCII"):
            ctx.client()

    def test_client_rejects_non_ascii_keychain_key(self, config_store):
        ctx = HyContext(
            config=config_store,
            secrets=MemorySecretStore("sk_live_\u2603"),
            environ={"HY_WORKSPACE_ID": "ws_1"},
        )
        with pytest.raises(ConfigurationError, match="system keychain contains non-ASCII"):
            ctx.client()

    def test_client_uses_resolved_values(self, config_store):
        config_store.set("timeout", "15")
        ctx = HyContext(
            config=config_store,
            secrets=MemorySecretStore(),
            environ={"HY_API_KEY": "sk_env", "HY_WORKSPACE_ID": "ws_env"},
            workspace_override="ws_flag",
        )
        with ctx.client() as client:
            assert client.api_key == "sk_env"
            assert client.workspace_id == "ws_flag"
            assert client.base_url == DEFAULT_API_URL
            assert client.timeout == 15.0

    def test_default_timeout(self, config_store):
        ctx = HyContext(config=config_store, secrets=MemorySecretStore(), environ={})
        assert ctx.timeout == DEFAULT_TIMEOUT

    def test_invalid_timeout(self, config_store):
        config_store.set("timeout", "forever")
        ctx = HyContext(config=config_store, secrets=MemorySecretStore(), environ={})
        with pytest.raises(ConfigurationError, match="invalid timeout"):
            ctx.timeout

    def test_create_uses_hy_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HY_CONFIG", str(tmp_path / "c.json"))
        assert HyContext.create().config.path == tmp_path / "c.json"

    def test_create_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HY_CONFIG", str(tmp_path / "env.json"))
        assert HyContext.create(str(tmp_path / "flag.json")).config.path == tmp_path / "flag.json"
