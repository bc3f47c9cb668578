"""Helpers for decoding API payloads into typed models."""

from typing import Any, Dict, List, Optional

from ..errors import MalformedResponseError


def expect_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedResponseError(f"malformed {what} response: expected a JSON object")
    return data


def expect_list(data: Dict[str, Any], key: str, what: str) -> List[Any]:
    """A collection field; absent or null counts as empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponseError(f"malformed {what} response: '{key}' is not a list")
    return value


def opt_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def opt_int(data: Dict[str, Any], key: str, what: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedResponseError(f"malformed {what} response: '{key}' is not a number")
