"""
Declarative agent and team descriptions

JSON-compatible pydantic models; ``build_agent``/``build_team`` turn them into
live objects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentSpec(BaseModel):
    """Agent description"""

    model_config = ConfigDict(extra="forbid")

    role: str = Field(..., description="Agent role, also its tool name")
    goal: str | None = Field(None, description="Goal; defaults to the role")
    backstory: str | list[str] | None = Field(None, description="Background")
    approach: str | list[str] | None = Field(None, description="Steps to follow")
    parameters: dict[str, Any] | None = Field(None, description="JSON Schema of the arguments")
    tools: list[str] = Field(default_factory=list, description="Tool names")
    max_iter: int | None = Field(None, ge=0, description="Tool-round budget")
    verbose: bool = Field(False, description="Log events while running")
    allow_parallel_tool_calls: bool = Field(False, description="Run tool calls concurrently")


class TeamSpec(BaseModel):
    """Team description"""

    model_config = ConfigDict(extra="forbid")

    role: str | None = Field(None, description="Team role")
    goal: str | None = Field(None, description="Team goal")
    backstory: str | list[str] | None = Field(None, description="Background")
    approach: str | list[str] | None = Field(None, description="Steps to follow")
    plan: str | list[str] | None = Field(None, description="Fixed plan; generated when unset")
    agents: list[AgentSpec] = Field(..., description="Members")
    tools: list[str] = Field(default_factory=list, description="Tools shared with every member")
    max_iter: int | None = Field(None, ge=0, description="Tool-round budget")
    verbose: bool = Field(False, description="Log events while running")
    allow_parallel_tool_calls: bool = Field(False, description="Run member calls concurrently")
