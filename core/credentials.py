"""Resolve the active API key, workspace and API URL.

Each value comes from exactly one layer; the highest-priority non-empty layer
wins. Nothing here raises for a missing value: callers treat "" as
unauthenticated/unconfigured.
"""

import logging
from typing import Mapping, Optional, Tuple

from .config import (
    ConfigStore,
    DEFAULT_API_URL,
    ENV_API_KEY,
    ENV_API_URL,
    ENV_WORKSPACE_ID,
)
from .secrets import SecretStore

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Read-only view over flags, environment, keychain and config."""

    def __init__(
        self,
        config: ConfigStore,
        secrets: SecretStore,
        environ: Mapping[str, str],
        api_url_override: Optional[str] = None,
        workspace_override: Optional[str] = None,
    ):
        self.config = config
        self.secrets = secrets
        self.environ = environ
        self.api_url_override = api_url_override
        self.workspace_override = workspace_override

    def api_key_with_source(self) -> Tuple[str, str]:
        """
        The API key and the layer it came from.

        Returns:
            (key, source) where source is "env", "keychain", "config", or ""
            when no layer has a key
        """
        key = self.environ.get(ENV_API_KEY, "")
        if key:
            logger.debug(f"Using API key from {ENV_API_KEY}")
            return key, "env"

        key = self.secrets.get()
        if key:
            return key, "keychain"

        key = self.config.get("api_key")
        if key:
            logger.debug("Using API key from config file")
            return key, "config"
        return "", ""

    def resolve_api_key(self) -> str:
        return self.api_key_with_source()[0]

    def resolve_workspace_id(self) -> str:
        if self.workspace_override:
            return self.workspace_override
        return self.environ.get(ENV_WORKSPACE_ID, "") or self.config.get("workspace_id")

    def resolve_api_url(self) -> str:
        url = (
            self.api_url_override
            or self.environ.get(ENV_API_URL, "")
            or self.config.get("api_url")
            or DEFAULT_API_URL
        )
        return url.rstrip("/")
