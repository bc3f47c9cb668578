"""Thread models - AI chat conversations."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .wire import expect_list, expect_object, opt_str


@dataclass
class ThreadMessage:
    id: str = ""
    role: str = "user"                  # user, assistant, system
    content: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ThreadMessage":
        data = expect_object(data, "thread message")
        return cls(
            id=str(data.get("id", "")),
            role=data.get("role") or "user",
            content=data.get("content") or "",
            created_at=opt_str(data, "createdAt"),
        )


@dataclass
class SuggestedChange:
    type: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "SuggestedChange":
        data = expect_object(data, "suggested change")
        return cls(type=data.get("type") or "", description=data.get("description") or "")


@dataclass
class ChatReply:
    """Response to POST .../thread."""
    assistant_message: ThreadMessage
    user_message: Optional[ThreadMessage] = None
    suggested_changes: List[SuggestedChange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ChatReply":
        data = expect_object(data, "chat")
        user = data.get("userMessage")
        return cls(
            assistant_message=ThreadMessage.from_dict(data.get("assistantMessage") or {}),
            user_message=ThreadMessage.from_dict(user) if user else None,
            suggested_changes=[
                SuggestedChange.from_dict(c) for c in expect_list(data, "suggestedChanges", "chat")
            ],
        )


@dataclass
class ThreadHistory:
    messages: List[ThreadMessage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ThreadHistory":
        data = expect_object(data, "thread history")
        return cls(messages=[ThreadMessage.from_dict(m) for m in expect_list(data, "messages", "thread history")])
