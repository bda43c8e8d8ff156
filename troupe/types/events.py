"""Event types published on the event bus.

Every event carries the hierarchical ``id`` of the emitting tool, its ``depth``
in the call tree and a reference to the tool itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from ..tools.base import Tool

EventKind = Literal["start", "delta", "complete", "warn", "data", "plan"]
PlanStepState = Literal["pending", "running", "completed"]

WILDCARD = "*"


@dataclass
class PlanStep:
    step: int
    content: str
    state: PlanStepState = "pending"


@dataclass
class StartEvent:
    id: str
    depth: int
    tool: Tool
    message: str
    args: Any = None
    type: str = "start"


@dataclass
class DeltaEvent:
    id: str
    depth: int
    tool: Tool
    content: str
    type: str = "delta"


@dataclass
class CompleteEvent:
    id: str
    depth: int
    tool: Tool
    message: str
    error: Exception | None = None
    type: str = "complete"


@dataclass
class WarnEvent:
    id: str
    depth: int
    tool: Tool
    message: str
    type: str = "warn"


@dataclass
class DataEvent:
    id: str
    depth: int
    tool: Tool
    data: Any
    type: str = "data"


@dataclass
class PlanEvent:
    id: str
    depth: int
    tool: Tool
    plan: list[PlanStep]
    type: str = "plan"


ToolEvent = StartEvent | DeltaEvent | CompleteEvent | WarnEvent | DataEvent | PlanEvent
