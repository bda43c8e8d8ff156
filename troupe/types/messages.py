"""Message types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolCall:
    id: str
    name: str
    arguments: str


@dataclass
class SystemMessage:
    content: str
    role: str = "system"


@dataclass
class UserMessage:
    content: str = ""
    role: str = "user"


@dataclass
class AssistantMessage:
    content: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    refusal: str | None = None
    role: str = "assistant"


@dataclass
class ToolMessage:
    content: str
    tool_call_id: str
    role: str = "tool"


Message = SystemMessage | UserMessage | AssistantMessage | ToolMessage


def message_to_dict(m: Message) -> dict[str, Any]:
    """Render a message in the OpenAI chat format expected by transports."""
    d: dict[str, Any] = {"role": m.role, "content": m.content}
    if getattr(m, "tool_calls", None):
        d["tool_calls"] = [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.name, "arguments": tc.arguments},
            }
            for tc in m.tool_calls
        ]
    if hasattr(m, "tool_call_id"):
        d["tool_call_id"] = m.tool_call_id
    return d
