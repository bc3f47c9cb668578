"""API key models."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .wire import expect_list, expect_object, opt_str


DEFAULT_SCOPES = ["productions:read", "assets:read"]


@dataclass
class ApiKey:
    id: str
    name: str = ""
    key_prefix: str = ""
    scopes: List[str] = field(default_factory=list)
    last_used_at: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ApiKey":
        data = expect_object(data, "API key")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            key_prefix=data.get("keyPrefix") or "",
            scopes=[str(s) for s in expect_list(data, "scopes", "API key")],
            last_used_at=opt_str(data, "lastUsedAt"),
            created_at=opt_str(data, "createdAt"),
        )


@dataclass
class ApiKeyList:
    keys: List[ApiKey] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ApiKeyList":
        data = expect_object(data, "keys list")
        return cls(keys=[ApiKey.from_dict(k) for k in expect_list(data, "keys", "keys list")])


@dataclass
class CreatedApiKey:
    """Response to POST /keys. The only time the full key is ever returned."""
    id: str
    key: str
    name: str = ""
    key_prefix: str = ""
    scopes: List[str] = field(default_factory=list)
    warning: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CreatedApiKey":
        data = expect_object(data, "created key")
        return cls(
            id=str(data.get("id", "")),
            key=data.get("key") or "",
            name=data.get("name") or "",
            key_prefix=data.get("keyPrefix") or "",
            scopes=[str(s) for s in expect_list(data, "scopes", "created key")],
            warning=opt_str(data, "warning"),
        )
