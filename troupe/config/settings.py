"""Transport settings."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class ProviderSettings(BaseModel):
    """Connection settings for an OpenAI-compatible endpoint."""

    api_key: str | None = Field(None, description="API key; the SDK reads OPENAI_API_KEY when unset")
    model: str = Field("gpt-4o-mini", description="Model name")
    base_url: str | None = Field(None, description="Endpoint override for compatible servers")
    temperature: float | None = Field(None, ge=0.0, le=2.0, description="Sampling temperature")

    @classmethod
    def from_env(cls) -> ProviderSettings:
        values = {
            "api_key": os.environ.get("OPENAI_API_KEY"),
            "model": os.environ.get("OPENAI_MODEL"),
            "base_url": os.environ.get("OPENAI_BASE_URL"),
        }
        return cls(**{k: v for k, v in values.items() if v})
