"""LLM transports."""

from .mock import ScriptedCompletion, tool_call, tool_calls_response
from .openai import OpenAICompletion
from .presets import create_ollama, create_openai, create_vllm

__all__ = [
    "OpenAICompletion",
    "ScriptedCompletion",
    "create_ollama",
    "create_openai",
    "create_vllm",
    "tool_call",
    "tool_calls_response",
]
