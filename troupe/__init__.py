"""
troupe - LLM agents and teams on a shared event fabric

Tools, Agents and Teams form a call tree. Every node reports ``start``,
``delta``, ``complete``, ``warn``, ``data`` and ``plan`` events on one
``EventBus``; an Agent drives a bounded tool-calling loop against an LLM
transport and a Team coordinates member agents along a step plan.
"""

from .agent import MAX_ITERATIONS_FALLBACK, NO_RESPONSE_FALLBACK, Agent, FallbackResponse
from .config import (
    AgentSpec,
    ProviderSettings,
    TeamSpec,
    build_agent,
    build_team,
    load_team_spec,
)
from .errors import (
    ArgumentParseError,
    ConfigurationError,
    ToolError,
    ToolExecutionError,
    ToolResolutionError,
    TroupeError,
    ValidationError,
)
from .events import EventBus
from .team import NO_PLAN_PLACEHOLDER, PlanTracker, Team, parse_plan
from .tools import DictSchema, PydanticSchema, Tool, WeatherTool
from .types import (
    CompleteEvent,
    CompletionResult,
    DataEvent,
    DeltaEvent,
    LLMCompletion,
    PlanEvent,
    PlanStep,
    StartEvent,
    StreamChunk,
    ToolCall,
    ToolCallFragment,
    ToolEvent,
    WarnEvent,
    WorkingMemoryEntry,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Tool",
    "Agent",
    "Team",
    "EventBus",
    "FallbackResponse",
    "NO_RESPONSE_FALLBACK",
    "MAX_ITERATIONS_FALLBACK",
    "NO_PLAN_PLACEHOLDER",
    "PlanTracker",
    "parse_plan",
    # Tools
    "PydanticSchema",
    "DictSchema",
    "WeatherTool",
    # Events
    "ToolEvent",
    "StartEvent",
    "DeltaEvent",
    "CompleteEvent",
    "WarnEvent",
    "DataEvent",
    "PlanEvent",
    "PlanStep",
    # Transport
    "LLMCompletion",
    "CompletionResult",
    "StreamChunk",
    "ToolCall",
    "ToolCallFragment",
    "WorkingMemoryEntry",
    # Config
    "ProviderSettings",
    "AgentSpec",
    "TeamSpec",
    "build_agent",
    "build_team",
    "load_team_spec",
    # Errors
    "TroupeError",
    "ConfigurationError",
    "ToolError",
    "ValidationError",
    "ToolResolutionError",
    "ArgumentParseError",
    "ToolExecutionError",
]
