"""
Stream Accumulator

Rebuilds one assistant message from a sequence of ``StreamChunk`` records.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..types import AssistantMessage, StreamChunk, ToolCall


@dataclass
class _PendingToolCall:
    id: str = ""
    name: str = ""
    arguments: str = ""


@dataclass
class StreamAccumulator:
    """
    Accumulates streamed content, refusal text and tool-call fragments.

    Tool-call fragments are merged per ``index``: the id and the function name
    are taken from the first fragment that carries them, argument text is
    concatenated in arrival order.
    """

    content: str = ""
    refusal: str | None = None
    finish_reason: str | None = None
    _tool_calls: dict[int, _PendingToolCall] = field(default_factory=dict)

    def update(self, chunk: StreamChunk) -> str | None:
        """
        Merge one chunk.

        Returns:
            The content fragment carried by the chunk, if any.
        """
        if chunk.finish_reason:
            self.finish_reason = chunk.finish_reason

        if chunk.refusal:
            self.refusal = (self.refusal or "") + chunk.refusal

        for fragment in chunk.tool_calls:
            pending = self._tool_calls.setdefault(fragment.index, _PendingToolCall())
            if fragment.id and not pending.id:
                pending.id = fragment.id
            if fragment.name and not pending.name:
                pending.name = fragment.name
            if fragment.arguments:
                pending.arguments += fragment.arguments

        if chunk.content:
            self.content += chunk.content
            return chunk.content
        return None

    @property
    def tool_calls(self) -> list[ToolCall]:
        return [
            ToolCall(id=tc.id, name=tc.name, arguments=tc.arguments)
            for _, tc in sorted(self._tool_calls.items())
        ]

    def has_tool_calls(self) -> bool:
        return bool(self._tool_calls)

    def get_message(self) -> AssistantMessage:
        return AssistantMessage(
            content=self.content,
            tool_calls=self.tool_calls,
            refusal=self.refusal,
        )

    def reset(self) -> None:
        self.content = ""
        self.refusal = None
        self.finish_reason = None
        self._tool_calls = {}


__all__ = [
    "StreamAccumulator",
]
