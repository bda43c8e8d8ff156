"""Tool - the unit of work every agent, team and leaf tool builds on."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..events import EventBus
from ..types import (
    CompleteEvent,
    DataEvent,
    DeltaEvent,
    PlanEvent,
    PlanStep,
    StartEvent,
    WarnEvent,
)
from .schema import ToolSchema, as_schema

logger = logging.getLogger(__name__)

WORKING_MEMORY_KEY = "working_memory"
GRAPH_SEPARATOR = "->"


class Tool:
    """Named, schema-described unit of work.

    Subclasses implement ``run``; callers go through ``execute``, which validates
    the arguments and reports ``start``/``complete`` on the shared event bus.

    ``parent`` is only used to compute ``graph_id`` and ``depth``; both are
    derived from the live link each time they are read.
    """

    func_name_suffix = "Tool"

    def __init__(
        self,
        name: str,
        description: str,
        parameters: Any = None,
        event_bus: EventBus | None = None,
        parent: Tool | None = None,
        func_name_suffix: str | None = None,
    ) -> None:
        self.id = uuid.uuid4().hex[:8]
        self.name = name
        self.description = description
        self.parameters: ToolSchema = as_schema(parameters, name=_compact(name) + "Args")
        if func_name_suffix is not None:
            self.func_name_suffix = func_name_suffix
        self.func_name = self._make_func_name(self.func_name_suffix)
        self.event_bus = event_bus or EventBus()
        self.parent = parent

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, id={self.id!r})"

    # -- Identity --

    @property
    def graph_id(self) -> str:
        node = _compact(f"{self.name}:{self.id}")
        if self.parent is None:
            return node
        return f"{self.parent.graph_id}{GRAPH_SEPARATOR}{node}"

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def propagate(self) -> None:
        """Push the event bus down to owned children. Leaf tools own none."""

    # -- Public API --

    def to_schema(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.func_name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": self.parameters.properties(),
                    "required": self.parameters.required(),
                },
            },
        }

    async def execute(self, args: dict[str, Any]) -> Any:
        """Validate ``args``, run the tool and report progress.

        Raises ``ValidationError`` without emitting anything when the arguments
        do not match. Errors raised by ``run`` are reported on the ``complete``
        event and re-raised.
        """
        args = dict(args or {})
        working_memory = args.pop(WORKING_MEMORY_KEY, None)
        validated = self.validate_args(args)

        self.emit_start(f"Starting {self.name}", args=validated)
        run_args = dict(validated)
        if working_memory is not None:
            run_args[WORKING_MEMORY_KEY] = working_memory
        try:
            result = await self.run(run_args)
        except Exception as e:
            self.emit_complete(f"Failed to complete {self.name}", error=e)
            raise
        self.emit_complete(f"Successfully completed {self.name}")
        return result

    async def run(self, args: dict[str, Any]) -> Any:
        raise NotImplementedError

    def validate_args(self, args: dict[str, Any]) -> dict[str, Any]:
        try:
            return self.parameters.validate(args)
        except PydanticValidationError as e:
            raise ValidationError(self.func_name, _format_errors(e), e) from e

    # -- Events --

    def emit_start(self, message: str, args: Any = None) -> None:
        self.event_bus.emit(StartEvent(self.graph_id, self.depth, self, message, args))

    def emit_delta(self, content: str) -> None:
        self.event_bus.emit(DeltaEvent(self.graph_id, self.depth, self, content))

    def emit_complete(self, message: str, error: Exception | None = None) -> None:
        self.event_bus.emit(CompleteEvent(self.graph_id, self.depth, self, message, error))

    def emit_warn(self, message: str) -> None:
        logger.warning("%s: %s", self.graph_id, message)
        self.event_bus.emit(WarnEvent(self.graph_id, self.depth, self, message))

    def emit_data(self, data: Any) -> None:
        self.event_bus.emit(DataEvent(self.graph_id, self.depth, self, data))

    def emit_plan(self, plan: list[PlanStep]) -> None:
        self.event_bus.emit(PlanEvent(self.graph_id, self.depth, self, plan))

    # -- Internals --

    def _make_func_name(self, suffix: str) -> str:
        func_name = re.sub(r"[^A-Za-z0-9_-]", "", self.name)
        if suffix.lower() not in func_name.lower():
            func_name += suffix
        return func_name


def _compact(text: str) -> str:
    return re.sub(r"\s+", "", text)


def _format_errors(err: PydanticValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {e.get('msg', '')}")
    return "; ".join(parts)
