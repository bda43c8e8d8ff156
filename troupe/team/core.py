"""Team - an Agent whose tools are member agents, driven by a step plan."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..agent import Agent, serialize_args
from ..prompts import (
    TEAM_SYSTEM_PROMPT,
    build_agent_prompt,
    build_team_plan_prompt,
    build_team_prompt,
)
from ..tools import Tool
from ..types import CompletionResult, SystemMessage, UserMessage, message_to_dict
from ..utils import string_or_list
from .plan import NO_PLAN_PLACEHOLDER, PlanTracker

logger = logging.getLogger(__name__)

DEFAULT_TEAM_ROLE = "Agent Manager"
DEFAULT_TEAM_GOAL = "Use the provided agents to respond to the input"


class Team(Agent):
    """
    Multi-agent coordinator.

    Members are offered to the model as tools. Before running, the team makes
    sure a plan exists (generating one with the LLM when none was configured)
    and tracks each plan step while members start and complete.

    Example:
        ```python
        team = Team(agents=[weather_agent, writer_agent], llm=llm)
        story = await team.execute({"input": "A funny story about the weather in Tokyo"})
        ```
    """

    def __init__(
        self,
        agents: Sequence[Agent],
        role: str = DEFAULT_TEAM_ROLE,
        goal: str = DEFAULT_TEAM_GOAL,
        *,
        plan: str | Sequence[str] | None = None,
        max_iter: int | None = None,
        **kwargs: Any,
    ) -> None:
        if max_iter is None:
            max_iter = max(len(agents), self.DEFAULT_MAX_ITER)
        super().__init__(role, goal, max_iter=max_iter, skip_propagation=True, **kwargs)
        self.agents: list[Agent] = list(agents)
        self.plan = string_or_list(plan)
        self.system_prompt = TEAM_SYSTEM_PROMPT
        self._active_plan: str | None = None

        self.propagate()

    def propagate(self) -> None:
        """Share the event bus, the LLM and the generic tools with every member."""
        for agent in self.agents:
            agent.parent = self
            agent.tools = _unique([*self.tools, *agent.tools])
            agent.event_bus = self.event_bus
            if agent.llm is None:
                agent.llm = self.llm
            agent.propagate()

    async def run(self, args: dict[str, Any]) -> Any:
        self.ensure_llm()
        self.propagate()

        self._active_plan = await self.ensure_plan(args)
        tracker = PlanTracker(self, self._active_plan)
        tracker.start()
        try:
            return await super().run(args)
        finally:
            tracker.stop()
            self._active_plan = None

    async def ensure_plan(self, args: dict[str, Any]) -> str:
        """Return the configured plan, or ask the LLM for one.

        Planning never fails the run: errors and empty answers yield
        ``NO_PLAN_PLACEHOLDER``.
        """
        if self.plan:
            return self.plan

        self.ensure_llm()
        plan_prompt = build_team_plan_prompt(
            base_prompt=self.get_base_prompt(args),
            steps=len(self.agents) + 1,
        )
        messages = [
            SystemMessage(content=self.system_prompt),
            UserMessage(content=plan_prompt),
        ]
        try:
            response = await self.llm(messages=[message_to_dict(m) for m in messages])
        except Exception as e:
            logger.exception("Plan generation failed for %s", self.graph_id)
            self.emit_warn(f"Plan generation failed: {e}")
            return NO_PLAN_PLACEHOLDER

        content = response.content if isinstance(response, CompletionResult) else None
        if not content or not content.strip():
            self.emit_warn("Plan generation returned no content")
            return NO_PLAN_PLACEHOLDER
        return content.strip()

    # -- Tools in this context are agents --

    def get_tool_schemas(self) -> list[dict[str, Any]] | None:
        schemas = [agent.to_schema() for agent in self.agents]
        return schemas or None

    def find_tool(self, func_name: str) -> Tool | None:
        table: dict[str, Tool] = {}
        for agent in self.agents:
            table.setdefault(agent.func_name, agent)
        return table.get(func_name)

    def get_prompt(self, args: dict[str, Any], include_tools: bool = True) -> str:
        return build_team_prompt(
            base_prompt=self.get_base_prompt(args, include_tools),
            plan=self._active_plan or self.plan,
        )

    def get_base_prompt(self, args: dict[str, Any], include_tools: bool = True) -> str:
        return build_agent_prompt(
            role=self.role,
            goal=self.goal,
            approach=self.approach,
            backstory=self.backstory,
            tools=self.agents if include_tools else None,
            args=serialize_args(args),
        )


def _unique(tools: list[Tool]) -> list[Tool]:
    seen: set[int] = set()
    unique = []
    for tool in tools:
        if id(tool) not in seen:
            seen.add(id(tool))
            unique.append(tool)
    return unique


__all__ = ["Team", "DEFAULT_TEAM_ROLE", "DEFAULT_TEAM_GOAL"]
