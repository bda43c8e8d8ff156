"""
ScriptedCompletion - replays canned responses

For unit tests and demos without an API key. Every request is recorded in
``calls`` so tests can assert on prompts, offered tools and flags.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncGenerator, Iterable
from typing import Any, Union
from uuid import uuid4

from ..types import CompletionResult, StreamChunk, ToolCall, ToolCallFragment
from ..utils import StreamAccumulator

ScriptedResponse = Union[str, CompletionResult, list[StreamChunk], BaseException]


def tool_call(name: str, arguments: str = "{}", id: str | None = None) -> ToolCall:
    return ToolCall(id=id or f"call_{uuid4().hex[:8]}", name=name, arguments=arguments)


def tool_calls_response(*calls: ToolCall, content: str | None = None) -> CompletionResult:
    """A completion that requests ``calls`` with ``finish_reason="tool_calls"``."""
    return CompletionResult(content=content, tool_calls=list(calls), finish_reason="tool_calls")


class ScriptedCompletion:
    """
    ``LLMCompletion`` returning one scripted response per request, in order.

    A response may be plain text, a ``CompletionResult``, a ready-made list of
    ``StreamChunk`` or an exception to raise. Text and results are split into
    several chunks when streamed so the accumulator sees realistic fragments.
    """

    def __init__(self, responses: Iterable[ScriptedResponse] = (), chunk_size: int = 4) -> None:
        self.responses: list[ScriptedResponse] = list(responses)
        self.chunk_size = chunk_size
        self.calls: list[dict[str, Any]] = []

    def add(self, *responses: ScriptedResponse) -> ScriptedCompletion:
        self.responses.extend(responses)
        return self

    @property
    def remaining(self) -> int:
        return len(self.responses)

    async def __call__(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        stream: bool = False,
        parallel_tool_calls: bool | None = None,
    ) -> CompletionResult | AsyncGenerator[StreamChunk, None]:
        self.calls.append(
            {
                "messages": copy.deepcopy(messages),
                "tools": copy.deepcopy(tools),
                "stream": stream,
                "parallel_tool_calls": parallel_tool_calls,
            }
        )
        if not self.responses:
            raise RuntimeError(f"ScriptedCompletion exhausted after {len(self.calls) - 1} call(s)")

        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response

        if stream:
            return self._stream(self._to_chunks(response))
        return self._to_result(response)

    def _to_result(self, response: ScriptedResponse) -> CompletionResult:
        if isinstance(response, CompletionResult):
            return response
        if isinstance(response, str):
            return CompletionResult(content=response)

        acc = StreamAccumulator()
        for chunk in response:
            acc.update(chunk)
        message = acc.get_message()
        return CompletionResult(
            content=message.content,
            tool_calls=message.tool_calls,
            refusal=message.refusal,
            finish_reason=acc.finish_reason,
        )

    def _to_chunks(self, response: ScriptedResponse) -> list[StreamChunk]:
        if isinstance(response, list):
            return response
        if isinstance(response, str):
            response = CompletionResult(content=response)

        chunks = [StreamChunk(content=piece) for piece in self._split(response.content or "")]
        for index, call in enumerate(response.tool_calls):
            head, tail = self._halves(call.arguments)
            chunks.append(
                StreamChunk(
                    tool_calls=[
                        ToolCallFragment(index=index, id=call.id, name=call.name, arguments=head)
                    ]
                )
            )
            if tail:
                chunks.append(
                    StreamChunk(tool_calls=[ToolCallFragment(index=index, arguments=tail)])
                )
        if response.refusal:
            chunks.append(StreamChunk(refusal=response.refusal))
        chunks.append(StreamChunk(finish_reason=response.finish_reason))
        return chunks

    def _split(self, text: str) -> list[str]:
        size = max(self.chunk_size, 1)
        return [text[i : i + size] for i in range(0, len(text), size)]

    @staticmethod
    def _halves(text: str) -> tuple[str, str]:
        mid = len(text) // 2
        return text[:mid], text[mid:]

    @staticmethod
    async def _stream(chunks: list[StreamChunk]) -> AsyncGenerator[StreamChunk, None]:
        for chunk in chunks:
            yield chunk
