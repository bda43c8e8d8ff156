"""Plan parsing and live plan-step tracking for teams."""

from __future__ import annotations

import dataclasses
import re
from typing import TYPE_CHECKING

from ..types import CompleteEvent, PlanStep, PlanStepState, StartEvent

if TYPE_CHECKING:
    from .core import Team

NO_PLAN_PLACEHOLDER = "No plan generated."

_ENUMERATION = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


def parse_plan(plan: str) -> list[PlanStep]:
    """One step per non-empty line, leading ``1.``, ``1)``, ``-`` or ``*`` removed."""
    steps: list[PlanStep] = []
    for line in plan.splitlines():
        content = _ENUMERATION.sub("", line).strip()
        if content:
            steps.append(PlanStep(step=len(steps) + 1, content=content))
    return steps


class PlanTracker:
    """Keeps a team's plan steps in sync with its members' start/complete events.

    Only events from the team's direct children count. A matching event moves
    the first not-yet-completed step that mentions the child's function name.
    """

    def __init__(self, team: Team, plan: str) -> None:
        self.team = team
        self.steps = parse_plan(plan)
        self._bus = None

    def snapshot(self) -> list[PlanStep]:
        return [dataclasses.replace(step) for step in self.steps]

    def start(self) -> None:
        self.team.emit_plan(self.snapshot())
        self._bus = self.team.event_bus
        self._bus.on("start", self._on_start)
        self._bus.on("complete", self._on_complete)

    def stop(self) -> None:
        for step in self.steps:
            step.state = "completed"
        self.team.emit_plan(self.snapshot())
        if self._bus is not None:
            self._bus.off("start", self._on_start)
            self._bus.off("complete", self._on_complete)
            self._bus = None

    def _on_start(self, event: StartEvent) -> None:
        self._advance(event, "running")

    def _on_complete(self, event: CompleteEvent) -> None:
        self._advance(event, "completed")

    def _advance(self, event: StartEvent | CompleteEvent, state: PlanStepState) -> None:
        if event.tool.parent is not self.team:
            return
        name = event.tool.func_name
        for step in self.steps:
            if name in step.content and step.state != "completed":
                step.state = state
                self.team.emit_plan(self.snapshot())
                return
