"""Weather lookup tool used by the examples. Returns made-up readings."""

from __future__ import annotations

import json
import random
from typing import Any

from pydantic import BaseModel, Field

from .base import Tool

CONDITIONS = ["Sunny", "Partly Cloudy", "Cloudy", "Light Rain", "Thunder"]


class WeatherInput(BaseModel):
    input: str = Field(..., description="The location to get weather for")


class WeatherTool(Tool):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(
            "Weather Tool",
            "Get weather information for a location",
            parameters=WeatherInput,
            **kwargs,
        )

    async def run(self, args: dict[str, Any]) -> str:
        weather = {
            "location": args["input"],
            "temperature": random.randint(10, 39),
            "condition": random.choice(CONDITIONS),
            "humidity": random.randint(40, 79),
            "windSpeed": random.randint(5, 24),
        }
        return json.dumps(weather, indent=2)
