"""Build agents and teams from declarative specs."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..agent import Agent
from ..errors import ConfigurationError
from ..team import DEFAULT_TEAM_GOAL, DEFAULT_TEAM_ROLE, Team
from ..tools import Tool
from ..types import LLMCompletion
from .models import AgentSpec, TeamSpec


def _resolve_tools(names: list[str], tools: Mapping[str, Tool] | None) -> list[Tool]:
    available = tools or {}
    resolved = []
    for name in names:
        if name not in available:
            raise ConfigurationError(
                f"Unknown tool '{name}'; available: {sorted(available) or 'none'}"
            )
        resolved.append(available[name])
    return resolved


def build_agent(
    spec: AgentSpec | Mapping[str, Any],
    llm: LLMCompletion | None = None,
    tools: Mapping[str, Tool] | None = None,
) -> Agent:
    if not isinstance(spec, AgentSpec):
        spec = _validate(AgentSpec, spec)
    return Agent(
        spec.role,
        spec.goal,
        backstory=spec.backstory,
        approach=spec.approach,
        parameters=spec.parameters,
        llm=llm,
        tools=_resolve_tools(spec.tools, tools),
        max_iter=spec.max_iter,
        verbose=spec.verbose,
        allow_parallel_tool_calls=spec.allow_parallel_tool_calls,
    )


def build_team(
    spec: TeamSpec | Mapping[str, Any],
    llm: LLMCompletion | None = None,
    tools: Mapping[str, Tool] | None = None,
) -> Team:
    """Members get no transport of their own; the team shares ``llm`` with them."""
    if not isinstance(spec, TeamSpec):
        spec = _validate(TeamSpec, spec)
    return Team(
        [build_agent(member, None, tools) for member in spec.agents],
        spec.role or DEFAULT_TEAM_ROLE,
        spec.goal or DEFAULT_TEAM_GOAL,
        plan=spec.plan,
        max_iter=spec.max_iter,
        backstory=spec.backstory,
        approach=spec.approach,
        llm=llm,
        tools=_resolve_tools(spec.tools, tools),
        verbose=spec.verbose,
        allow_parallel_tool_calls=spec.allow_parallel_tool_calls,
    )


def load_team_spec(path: str | Path) -> TeamSpec:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read team spec {path}: {e}", e) from e
    return _validate(TeamSpec, raw)


def _validate(model: type[AgentSpec] | type[TeamSpec], raw: Any) -> Any:
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid {model.__name__}: {e}", e) from e
