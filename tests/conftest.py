"""
Pytest Configuration and Fixtures
"""

import inspect
from collections.abc import Callable
from typing import Any

import pytest

from troupe import EventBus, Tool
from troupe.providers import ScriptedCompletion


class FunctionTool(Tool):
    """Leaf tool whose ``run`` delegates to a plain (sync or async) callable."""

    def __init__(self, name: str, fn: Callable[[dict[str, Any]], Any], **kwargs: Any) -> None:
        super().__init__(name, kwargs.pop("description", f"{name} test tool"), **kwargs)
        self.fn = fn
        self.calls: list[dict[str, Any]] = []

    async def run(self, args: dict[str, Any]) -> Any:
        self.calls.append(args)
        result = self.fn(args)
        if inspect.isawaitable(result):
            result = await result
        return result


class EventRecorder:
    """Wildcard subscriber keeping every event in arrival order."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[Any] = []
        bus.on_all(self.events.append)

    def of_type(self, event_type: str) -> list[Any]:
        return [e for e in self.events if e.type == event_type]

    @property
    def types(self) -> list[str]:
        return [e.type for e in self.events]


@pytest.fixture
def bus() -> EventBus:
    """Returns a fresh EventBus."""
    return EventBus()


@pytest.fixture
def events(bus: EventBus) -> EventRecorder:
    """Records everything emitted on ``bus``."""
    return EventRecorder(bus)


@pytest.fixture
def record_events() -> Callable[[EventBus], EventRecorder]:
    return EventRecorder


@pytest.fixture
def scripted() -> ScriptedCompletion:
    """Returns an empty ScriptedCompletion; tests add responses."""
    return ScriptedCompletion()


@pytest.fixture
def make_tool() -> Callable[..., FunctionTool]:
    """Factory for FunctionTool instances."""

    def factory(name: str = "Echo", fn: Callable[[dict[str, Any]], Any] | None = None, **kwargs):
        return FunctionTool(name, fn or (lambda args: args["input"]), **kwargs)

    return factory


@pytest.fixture
def echo_tool(make_tool) -> FunctionTool:
    return make_tool("Echo")
