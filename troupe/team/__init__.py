"""Team coordinator and plan tracking."""

from .core import DEFAULT_TEAM_GOAL, DEFAULT_TEAM_ROLE, Team
from .plan import NO_PLAN_PLACEHOLDER, PlanTracker, parse_plan

__all__ = [
    "Team",
    "DEFAULT_TEAM_ROLE",
    "DEFAULT_TEAM_GOAL",
    "PlanTracker",
    "parse_plan",
    "NO_PLAN_PLACEHOLDER",
]
