"""OpenAI-compatible transport."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from openai import AsyncOpenAI

from ..config import ProviderSettings
from ..types import CompletionResult, StreamChunk, ToolCall, ToolCallFragment


class OpenAICompletion:
    """``LLMCompletion`` backed by ``AsyncOpenAI.chat.completions.create``.

    Streaming responses are converted chunk by chunk into ``StreamChunk``
    records; tool-call fragments are passed through unmerged.
    """

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        client: AsyncOpenAI | None = None,
        **extra: Any,
    ) -> None:
        self.settings = settings or ProviderSettings.from_env()
        self._client = client or AsyncOpenAI(
            api_key=self.settings.api_key, base_url=self.settings.base_url
        )
        self._extra = extra

    def _request(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None,
        stream: bool,
        parallel_tool_calls: bool | None,
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.settings.model,
            "messages": messages,
            **self._extra,
        }
        if self.settings.temperature is not None:
            kwargs["temperature"] = self.settings.temperature
        if tools:
            kwargs["tools"] = tools
            if parallel_tool_calls is not None:
                kwargs["parallel_tool_calls"] = parallel_tool_calls
        if stream:
            kwargs["stream"] = True
        return kwargs

    async def __call__(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        stream: bool = False,
        parallel_tool_calls: bool | None = None,
    ) -> CompletionResult | AsyncGenerator[StreamChunk, None]:
        kwargs = self._request(messages, tools, stream, parallel_tool_calls)
        resp = await self._client.chat.completions.create(**kwargs)
        if stream:
            return _convert_stream(resp)

        choice = resp.choices[0]
        tool_calls = [
            ToolCall(id=tc.id, name=tc.function.name, arguments=tc.function.arguments)
            for tc in choice.message.tool_calls or []
        ]
        return CompletionResult(
            content=choice.message.content,
            tool_calls=tool_calls,
            refusal=getattr(choice.message, "refusal", None),
            finish_reason=choice.finish_reason,
        )


async def _convert_stream(resp: Any) -> AsyncGenerator[StreamChunk, None]:
    async for chunk in resp:
        if not chunk.choices:
            continue
        choice = chunk.choices[0]
        delta = choice.delta
        fragments = []
        if delta and delta.tool_calls:
            for tc in delta.tool_calls:
                fragments.append(
                    ToolCallFragment(
                        index=tc.index,
                        id=tc.id,
                        name=tc.function.name if tc.function else None,
                        arguments=tc.function.arguments if tc.function else None,
                    )
                )
        yield StreamChunk(
            content=delta.content if delta else None,
            tool_calls=fragments,
            refusal=getattr(delta, "refusal", None) if delta else None,
            finish_reason=choice.finish_reason,
        )
