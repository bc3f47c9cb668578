"""Test data factories for consistent test setup

Each factory returns a payload in the API's wire format (camelCase keys).
"""

from typing import Any, Dict, List


def make_production(
    production_id: str = "prod_abc123",
    name: str = "Q3 Recap",
    topic: str = "Quarterly results for the board",
    status: str = "draft",
    **kwargs
) -> Dict[str, Any]:
    """Factory for production payloads"""
    defaults = {
        "id": production_id,
        "name": name,
        "topic": topic,
        "status": status,
        "category": "business",
        "spec": {"scenes": [{"title": "Intro", "duration": 5}]},
        "createdAt": "2026-01-15T10:00:00Z",
        "updatedAt": "2026-01-16T12:30:00Z",
    }
    defaults.update(kwargs)
    return defaults


def make_production_list(count: int = 2, has_more: bool = False) -> Dict[str, Any]:
    """Factory for a productions list page"""
    return {
        "productions": [
            make_production(production_id=f"prod_{i+1}", name=f"Production {i+1}")
            for i in range(count)
        ],
        "nextCursor": "cursor_2" if has_more else None,
        "hasMore": has_more,
    }


def make_asset(
    asset_id: str = "asset_xyz789",
    name: str = "intro.mp4",
    asset_type: str = "video",
    size_bytes: int = 10485760,
    **kwargs
) -> Dict[str, Any]:
    """Factory for asset payloads"""
    defaults = {
        "id": asset_id,
        "name": name,
        "type": asset_type,
        "mimeType": "video/mp4",
        "sizeBytes": size_bytes,
        "downloadUrl": f"https://cdn.test/{asset_id}",
        "uploadedAt": "2026-01-15T10:00:00Z",
    }
    defaults.update(kwargs)
    return defaults


def make_api_key(
    key_id: str = "key_001",
    name: str = "CI pipeline",
    last_used_at: str = None,
    **kwargs
) -> Dict[str, Any]:
    """Factory for API key payloads (never includes the full key)"""
    defaults = {
        "id": key_id,
        "name": name,
        "keyPrefix": "sk_live_ab12",
        "scopes": ["productions:read", "assets:read"],
        "lastUsedAt": last_used_at,
        "createdAt": "2026-01-10T09:00:00Z",
    }
    defaults.update(kwargs)
    return defaults


def make_message(role: str = "assistant", content: str = "Sounds good.", **kwargs) -> Dict[str, Any]:
    """Factory for thread message payloads"""
    defaults = {
        "id": f"msg_{role}",
        "role": role,
        "content": content,
        "createdAt": "2026-01-15T10:00:00Z",
    }
    defaults.update(kwargs)
    return defaults


def make_chat_reply(content: str = "I shortened the intro.", changes: List[str] = None) -> Dict[str, Any]:
    """Factory for POST .../thread responses"""
    return {
        "userMessage": make_message("user", "Make the intro shorter"),
        "assistantMessage": make_message("assistant", content),
        "suggestedChanges": [
            {"type": "spec_update", "description": description}
            for description in (changes or [])
        ],
    }
