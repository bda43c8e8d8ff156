"""Configuration - transport settings and declarative agent/team specs."""

from .builder import build_agent, build_team, load_team_spec
from .models import AgentSpec, TeamSpec
from .settings import ProviderSettings

__all__ = [
    "AgentSpec",
    "ProviderSettings",
    "TeamSpec",
    "build_agent",
    "build_team",
    "load_team_spec",
]
