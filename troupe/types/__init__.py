"""Core type definitions - re-exported from sub-modules."""

from .events import (
    WILDCARD,
    CompleteEvent,
    DataEvent,
    DeltaEvent,
    EventKind,
    PlanEvent,
    PlanStep,
    PlanStepState,
    StartEvent,
    ToolEvent,
    WarnEvent,
)
from .llm import (
    VALID_FINISH_REASONS,
    CompletionResult,
    LLMCompletion,
    StreamChunk,
    ToolCallFragment,
)
from .memory import WorkingMemory, WorkingMemoryEntry
from .messages import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
    message_to_dict,
)

__all__ = [
    "WILDCARD", "EventKind", "PlanStep", "PlanStepState", "ToolEvent",
    "StartEvent", "DeltaEvent", "CompleteEvent", "WarnEvent", "DataEvent", "PlanEvent",
    "VALID_FINISH_REASONS", "CompletionResult", "LLMCompletion", "StreamChunk", "ToolCallFragment",
    "WorkingMemory", "WorkingMemoryEntry",
    "Message", "SystemMessage", "UserMessage", "AssistantMessage", "ToolMessage", "ToolCall",
    "message_to_dict",
]
