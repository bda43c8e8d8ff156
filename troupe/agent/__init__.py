"""Agent execution engine."""

from .core import (
    MAX_ITERATIONS_FALLBACK,
    NO_RESPONSE_FALLBACK,
    Agent,
    FallbackResponse,
    serialize_args,
    serialize_result,
)

__all__ = [
    "Agent",
    "FallbackResponse",
    "NO_RESPONSE_FALLBACK",
    "MAX_ITERATIONS_FALLBACK",
    "serialize_args",
    "serialize_result",
]
