"""
Local configuration file for the hy CLI.

The file is a flat JSON object. It is read at most once per process
(lazily, on first access) and written only by an explicit save().
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://studio.hypewell.ai/api"
DEFAULT_TIMEOUT = 120.0
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "hy" / "config.json"

# Environment overrides
ENV_API_KEY = "HY_API_KEY"
ENV_API_URL = "HY_API_URL"
ENV_WORKSPACE_ID = "HY_WORKSPACE_ID"
ENV_CONFIG = "HY_CONFIG"

# Keys `hy config set` accepts
KNOWN_KEYS = {
    "api_url": "API base URL",
    "workspace_id": "Current workspace ID",
    "api_key": "API key (only used when the keychain is unavailable)",
    "timeout": "Request timeout in seconds",
}

SENSITIVE_KEYS = {"api_key"}


def redact(value: str, keep: int = 12) -> str:
    """Shorten a secret for display: first `keep` chars plus the last four."""
    if len(value) <= keep + 4:
        return value[:4] + "..."
    return value[:keep] + "..." + value[-4:]


class ConfigStore:
    """Key/value access to the JSON config file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_CONFIG_PATH
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        if not self.path.exists():
            logger.debug(f"No config file at {self.path}")
            self._data = {}
            return self._data

        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"could not read config file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"config file {self.path} must contain a JSON object")

        logger.debug(f"Loaded config from {self.path}")
        self._data = data
        return self._data

    def get(self, key: str, default: str = "") -> str:
        value = self._load().get(key)
        if value is None or value == "":
            return default
        return str(value)

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value

    def unset(self, key: str) -> None:
        self._load().pop(key, None)

    def items(self) -> Dict[str, Any]:
        return dict(self._load())

    def save(self) -> None:
        """Write the current values back, creating the directory if needed."""
        data = self._load()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"failed to save config: {e}") from e
        logger.debug(f"Saved config to {self.path}")
