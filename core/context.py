"""
Per-invocation context.

Built once by the root command from flags, environment, config file and
keychain, then handed to every command through click's context object.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import httpx

from .api import ApiClient
from .config import ConfigStore, DEFAULT_TIMEOUT, ENV_API_KEY, ENV_CONFIG
from .credentials import CredentialResolver
from .errors import ConfigurationError
from .secrets import SecretStore

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "not authenticated. Run 'hy auth login' first"
NO_WORKSPACE = "no workspace configured. Run 'hy auth login' first"

KEY_SOURCES = {
    "env": f"{ENV_API_KEY} environment variable",
    "keychain": "system keychain",
    "config": "config file",
}


@dataclass
class HyContext:
    """Everything a command needs to talk to the API or local state."""
    config: ConfigStore
    secrets: SecretStore = field(default_factory=SecretStore)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    transport: Optional[httpx.BaseTransport] = None
    api_url_override: Optional[str] = None
    workspace_override: Optional[str] = None

    @classmethod
    def create(cls, config_path: Optional[str] = None) -> "HyContext":
        path = config_path or os.environ.get(ENV_CONFIG) or None
        return cls(config=ConfigStore(Path(path) if path else None))

    @property
    def credentials(self) -> CredentialResolver:
        return CredentialResolver(
            self.config,
            self.secrets,
            self.environ,
            api_url_override=self.api_url_override,
            workspace_override=self.workspace_override,
        )

    @property
    def timeout(self) -> float:
        raw = self.config.get("timeout")
        if not raw:
            return DEFAULT_TIMEOUT
        try:
            return float(raw)
        except ValueError:
            raise ConfigurationError(f"invalid timeout in config: {raw!r}")

    def client(self) -> ApiClient:
        """
        API client for the resolved identity.

        Raises:
            ConfigurationError: no API key, a key that cannot be sent as a
                header, or no workspace. Raised before any network activity.
        """
        creds = self.credentials
        api_key, source = creds.api_key_with_source()
        if not api_key:
            raise ConfigurationError(NOT_AUTHENTICATED)
        if not api_key.isascii():
            raise ConfigurationError(
                f"API key from {KEY_SOURCES.get(source, source)} contains non-ASCII characters"
            )

        workspace_id = creds.resolve_workspace_id()
        if not workspace_id:
            raise ConfigurationError(NO_WORKSPACE)

        return ApiClient(
            creds.resolve_api_url(),
            api_key,
            workspace_id,
            timeout=self.timeout,
            transport=self.transport,
        )
