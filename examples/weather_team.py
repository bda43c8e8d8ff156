"""
weather_team.py - a reporter and a writer working as a team

Shows:
- building a team from a JSON description
- sharing one OpenAI transport and one tool registry
- structured logging of every event (verbose=True)

Needs OPENAI_API_KEY in the environment or in a .env file at the repo root.
"""

import asyncio
import os
from pathlib import Path

from dotenv import load_dotenv

from troupe import ProviderSettings, WeatherTool, build_team, load_team_spec
from troupe.infra import configure_logging
from troupe.providers import OpenAICompletion

load_dotenv(Path(__file__).resolve().parents[1] / ".env")

SPEC_PATH = Path(__file__).with_name("weather_team.json")


async def main():
    if not os.environ.get("OPENAI_API_KEY"):
        print("Set OPENAI_API_KEY to run this example")
        return

    configure_logging(log_level=os.environ.get("LOG_LEVEL", "INFO"))

    llm = OpenAICompletion(ProviderSettings.from_env())
    team = build_team(load_team_spec(SPEC_PATH), llm=llm, tools={"weather": WeatherTool()})
    team.verbose = True

    response = await team.execute(
        {"input": "Write me a funny story about the current weather in Tokyo."}
    )
    print(response)


if __name__ == "__main__":
    asyncio.run(main())
