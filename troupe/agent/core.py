"""Agent - a Tool whose work is a bounded conversation loop with an LLM."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import to_jsonable_python

from ..errors import (
    ArgumentParseError,
    ConfigurationError,
    ToolError,
    ToolExecutionError,
    ToolResolutionError,
)
from ..events import EventBus
from ..observability import EventLogger
from ..prompts import AGENT_SYSTEM_PROMPT, build_agent_prompt, build_working_memory_prompt
from ..tools import WORKING_MEMORY_KEY, Tool
from ..types import (
    VALID_FINISH_REASONS,
    AssistantMessage,
    CompletionResult,
    LLMCompletion,
    Message,
    StreamChunk,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
    WorkingMemoryEntry,
    message_to_dict,
)
from ..utils import StreamAccumulator, string_or_list

logger = logging.getLogger(__name__)

NO_RESPONSE_FALLBACK = "Sorry, no response was generated"
MAX_ITERATIONS_FALLBACK = "Sorry, we reached the maximum number of iterations without a response"


class FallbackResponse(str):
    """Text returned instead of a model answer. ``reason`` tells which fallback."""

    reason: str

    def __new__(cls, text: str, reason: str) -> FallbackResponse:
        obj = super().__new__(cls, text)
        obj.reason = reason
        return obj


class Agent(Tool):
    """Role/goal driven agent.

    Each run streams completions from ``llm``, dispatches the tool calls the model
    asks for and feeds the results back, for at most ``max_iter`` tool rounds.
    One extra pass without tools forces a final answer.
    """

    DEFAULT_MAX_ITER = 5
    func_name_suffix = "Agent"

    def __init__(
        self,
        role: str,
        goal: str | None = None,
        *,
        backstory: str | Sequence[str] | None = None,
        approach: str | Sequence[str] | None = None,
        parameters: Any = None,
        llm: LLMCompletion | None = None,
        tools: Sequence[Tool] | None = None,
        max_iter: int | None = None,
        verbose: bool = False,
        allow_parallel_tool_calls: bool = False,
        output_type: type[BaseModel] | None = None,
        event_bus: EventBus | None = None,
        skip_propagation: bool = False,
    ) -> None:
        super().__init__(role, goal or role, parameters=parameters, event_bus=event_bus)
        self.role = role
        self.goal = goal
        self.backstory = string_or_list(backstory)
        self.approach = string_or_list(approach)
        self.llm = llm
        self.tools: list[Tool] = list(tools or [])
        self.max_iter = (
            max_iter if max_iter is not None else max(len(self.tools), self.DEFAULT_MAX_ITER)
        )
        self.verbose = verbose
        self.allow_parallel_tool_calls = allow_parallel_tool_calls
        self.output_type = output_type
        self.system_prompt = AGENT_SYSTEM_PROMPT

        if not skip_propagation:
            self.propagate()

    def propagate(self) -> None:
        for tool in self.tools:
            tool.parent = self
            tool.event_bus = self.event_bus
            tool.propagate()

    async def execute(self, args: dict[str, Any]) -> Any:
        # One logger per bus; a verbose ancestor already logs our events
        if not self.verbose or EventLogger.attached_to(self.event_bus):
            return await super().execute(args)

        event_logger = EventLogger().attach(self.event_bus)
        try:
            return await super().execute(args)
        finally:
            event_logger.detach()

    async def run(self, args: dict[str, Any]) -> Any:
        self.ensure_llm()
        tools = self.get_tool_schemas()

        # Working memory: from our peers and for our tools
        peers_working_memory = _coerce_working_memory(args.get(WORKING_MEMORY_KEY))
        tools_working_memory: list[WorkingMemoryEntry] = []

        messages: list[Message] = [SystemMessage(content=self.system_prompt)]
        if peers_working_memory:
            messages.append(
                AssistantMessage(content=build_working_memory_prompt(peers_working_memory))
            )
        # Rewritten before every request
        messages.append(UserMessage(content=""))

        for i in range(self.max_iter + 1):
            include_tools = i < self.max_iter
            tools_for_iteration = tools if include_tools else None
            parallel_tool_calls = self.allow_parallel_tool_calls if tools_for_iteration else None

            self._update_last_user_message(messages, self.get_prompt(args, include_tools))
            logger.debug("%s iteration %d/%d", self.graph_id, i, self.max_iter)

            message, finish_reason = await self._complete(
                messages, tools_for_iteration, parallel_tool_calls
            )

            if finish_reason not in VALID_FINISH_REASONS:
                self.emit_warn(f"Unexpected finish reason: {finish_reason}")

            if not message.tool_calls:
                return self._finalize(message.content)

            if not include_tools:
                logger.warning(
                    "%s requested %d tool call(s) on the final pass; ignoring",
                    self.graph_id,
                    len(message.tool_calls),
                )
                break

            messages.extend(await self._execute_tool_calls(message, tools_working_memory))

        self.emit_warn(f"Reached the maximum number of iterations ({self.max_iter})")
        return FallbackResponse(MAX_ITERATIONS_FALLBACK, "max_iterations")

    # -- Overridable by Team --

    def get_tool_schemas(self) -> list[dict[str, Any]] | None:
        schemas = [tool.to_schema() for tool in self.tools]
        return schemas or None

    def find_tool(self, func_name: str) -> Tool | None:
        table: dict[str, Tool] = {}
        for tool in self.tools:
            table.setdefault(tool.func_name, tool)
        return table.get(func_name)

    def get_prompt(self, args: dict[str, Any], include_tools: bool = True) -> str:
        return build_agent_prompt(
            role=self.role,
            goal=self.goal,
            approach=self.approach,
            backstory=self.backstory,
            tools=self.tools if include_tools else None,
            args=serialize_args(args),
        )

    def ensure_llm(self) -> None:
        if self.llm is None:
            raise ConfigurationError(f"LLM not configured for {self.name}")

    # -- Internals --

    async def _complete(
        self,
        messages: list[Message],
        tools: list[dict[str, Any]] | None,
        parallel_tool_calls: bool | None,
    ) -> tuple[AssistantMessage, str | None]:
        response = self.llm(
            messages=[message_to_dict(m) for m in messages],
            tools=tools,
            stream=True,
            parallel_tool_calls=parallel_tool_calls,
        )
        if inspect.isawaitable(response):
            response = await response

        if isinstance(response, CompletionResult):
            if response.content:
                self.emit_delta(response.content)
            message = AssistantMessage(
                content=response.content or "",
                tool_calls=list(response.tool_calls),
                refusal=response.refusal,
            )
            return message, response.finish_reason

        accumulator = StreamAccumulator()
        stream: AsyncIterator[StreamChunk] = response
        async for chunk in stream:
            content = accumulator.update(chunk)
            if content:
                self.emit_delta(content)
        return accumulator.get_message(), accumulator.finish_reason

    def _finalize(self, content: str) -> Any:
        if not content:
            return FallbackResponse(NO_RESPONSE_FALLBACK, "no_response")
        if self.output_type is None:
            return content
        try:
            return self.output_type.model_validate_json(content)
        except PydanticValidationError as e:
            self.emit_warn(
                f"Could not parse response as {self.output_type.__name__}: "
                f"{e.error_count()} error(s)"
            )
            return content

    async def _execute_tool_calls(
        self, message: AssistantMessage, working_memory: list[WorkingMemoryEntry]
    ) -> list[Message]:
        tool_calls = message.tool_calls

        # Models do not always respect parallel_tool_calls, so the flag decides here
        if self.allow_parallel_tool_calls:
            results = await asyncio.gather(
                *(self._execute_tool_call(tc, working_memory) for tc in tool_calls),
                return_exceptions=True,
            )
            # Siblings have settled; only now let an escaping error through
            for result in results:
                if isinstance(result, BaseException):
                    raise result
        else:
            results = []
            for tool_call in tool_calls:
                results.append(await self._execute_tool_call(tool_call, working_memory))

        serialized = [serialize_result(r) for r in results]
        working_memory.extend(
            WorkingMemoryEntry(name=tc.name, arguments=tc.arguments, result=s)
            for tc, s in zip(tool_calls, serialized)
        )

        return [
            AssistantMessage(content=message.content, tool_calls=tool_calls),
            *(
                ToolMessage(content=s, tool_call_id=tc.id)
                for tc, s in zip(tool_calls, serialized)
            ),
        ]

    async def _execute_tool_call(
        self, tool_call: ToolCall, working_memory: list[WorkingMemoryEntry]
    ) -> Any:
        try:
            tool = self.find_tool(tool_call.name)
            if tool is None:
                raise ToolResolutionError(tool_call.name)

            try:
                args = json.loads(tool_call.arguments) if tool_call.arguments else {}
            except json.JSONDecodeError as e:
                raise ArgumentParseError(tool_call.name, tool_call.arguments, e) from e
            if not isinstance(args, dict):
                raise ArgumentParseError(tool_call.name, tool_call.arguments)

            logger.debug("%s dispatching %s (%s)", self.graph_id, tool_call.name, tool_call.id)
            try:
                return await tool.execute({**args, WORKING_MEMORY_KEY: working_memory})
            except (ToolError, ConfigurationError):
                raise
            except Exception as e:
                raise ToolExecutionError(tool_call.name, e) from e
        except ToolError as e:
            logger.warning("Tool call %s (%s) failed: %s", tool_call.name, tool_call.id, e)
            return {"error": str(e)}

    @staticmethod
    def _update_last_user_message(messages: list[Message], content: str) -> None:
        for message in reversed(messages):
            if isinstance(message, UserMessage):
                message.content = content
                return
        raise RuntimeError("No user message found")


def serialize_args(args: dict[str, Any]) -> str:
    rest = {k: v for k, v in args.items() if k != WORKING_MEMORY_KEY}
    return json.dumps(rest, default=to_jsonable_python)


def serialize_result(result: Any) -> str:
    return json.dumps(result, default=to_jsonable_python)


def _coerce_working_memory(raw: Any) -> list[WorkingMemoryEntry]:
    entries = []
    for item in raw or []:
        if isinstance(item, WorkingMemoryEntry):
            entries.append(item)
        else:
            entries.append(WorkingMemoryEntry(**item))
    return entries
