"""Provider presets - OpenAI-compatible transport factories."""

from __future__ import annotations

from ..config import ProviderSettings
from .openai import OpenAICompletion


def create_openai(api_key: str, model: str = "gpt-4o-mini", **kw) -> OpenAICompletion:
    return OpenAICompletion(ProviderSettings(api_key=api_key, model=model, **kw))


# --- Local / self-hosted (OpenAI-compatible) ---


def create_ollama(
    model: str = "llama3", base_url: str = "http://localhost:11434/v1", **kw
) -> OpenAICompletion:
    return OpenAICompletion(
        ProviderSettings(api_key="ollama", model=model, base_url=base_url, **kw)
    )


def create_vllm(
    model: str = "default", base_url: str = "http://localhost:8000/v1", **kw
) -> OpenAICompletion:
    return OpenAICompletion(ProviderSettings(api_key="vllm", model=model, base_url=base_url, **kw))
