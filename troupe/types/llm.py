"""LLM transport types."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .messages import ToolCall

VALID_FINISH_REASONS = ("stop", "tool_calls", "function_call")


@dataclass
class ToolCallFragment:
    """Partial tool call streamed in a single chunk, keyed by ``index``."""

    index: int
    id: str | None = None
    name: str | None = None
    arguments: str | None = None


@dataclass
class StreamChunk:
    content: str | None = None
    tool_calls: list[ToolCallFragment] = field(default_factory=list)
    refusal: str | None = None
    finish_reason: str | None = None


@dataclass
class CompletionResult:
    content: str | None = None
    tool_calls: list[ToolCall] = field(default_factory=list)
    refusal: str | None = None
    finish_reason: str | None = "stop"


@runtime_checkable
class LLMCompletion(Protocol):
    """Transport callable.

    Returns a ``CompletionResult`` when ``stream`` is false, otherwise an async
    iterator of ``StreamChunk``. Implementations may be coroutines or async
    generator functions.
    """

    def __call__(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        stream: bool = False,
        parallel_tool_calls: bool | None = None,
    ) -> Awaitable[CompletionResult | AsyncIterator[StreamChunk]] | AsyncIterator[StreamChunk]: ...
