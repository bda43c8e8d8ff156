"""
thinking_team.py - analyst, strategist and critic on a hard prompt

Shows:
- approach lists rendered as numbered steps
- a wildcard subscriber streaming deltas and printing plan progress

Needs OPENAI_API_KEY in the environment or in a .env file at the repo root.
"""

import asyncio
import os
import random
from pathlib import Path

from dotenv import load_dotenv

from troupe import Agent, FallbackResponse, ProviderSettings, Team
from troupe.providers import OpenAICompletion

load_dotenv(Path(__file__).resolve().parents[1] / ".env")

PROMPTS = [
    "Analyze the social, economic, and political factors that led to the fall of the Soviet "
    "Union. Explore alternative outcomes if specific policies had been different.",
    "Design a fantasy world with a feudal governance system and an economy reliant on magical "
    "artifacts. Address how factions compete for these artifacts and propose resolutions.",
    "A small Midwest town with a declining manufacturing base wants to become a tech hub. "
    "Develop a plan to attract remote workers and partner with nearby universities.",
    "Design an oversight model for AI systems that allocate healthcare resources in a city "
    "with significant income inequality.",
]

STATE_MARKS = {"pending": " ", "running": ">", "completed": "x"}


def print_event(event):
    if event.type == "delta":
        print(event.content, end="", flush=True)
    elif event.type == "plan":
        print(f"\n[plan] {event.id}")
        for step in event.plan:
            print(f"  [{STATE_MARKS[step.state]}] {step.step}. {step.content}")
    elif event.type in ("start", "complete", "warn"):
        print(f"\n[{event.type}] {'  ' * event.depth}{event.id}: {event.message}")


async def main():
    if not os.environ.get("OPENAI_API_KEY"):
        print("Set OPENAI_API_KEY to run this example")
        return

    llm = OpenAICompletion(ProviderSettings.from_env())

    analyst = Agent(
        "Analyst",
        "Break down the topic into a clear analytical framework that surfaces key insights "
        "and challenges",
        approach=[
            "Break down key elements and relationships",
            "Identify relevant contexts and perspectives",
            "Surface important questions and challenges",
            "Create an organized framework for deeper exploration",
        ],
    )
    strategist = Agent(
        "Strategist",
        "Develop a comprehensive solution that addresses the core challenges identified",
        approach=[
            "Build on the analyst's framework",
            "Construct clear arguments and explanations",
            "Propose well-reasoned approaches or solutions",
        ],
    )
    critic = Agent(
        "Critic",
        "Evaluate and strengthen the proposed solution",
        approach=[
            "Examine logical consistency",
            "Identify gaps or weaknesses",
            "Suggest specific refinements to strengthen the analysis",
        ],
    )

    team = Team(
        [analyst, strategist, critic],
        goal="Generate an insightful, well-structured response that demonstrates deep "
        "comprehension of the topic",
        approach=[
            "Provide relevant context and foundational understanding",
            "Develop clear, well-reasoned arguments or solutions",
            "Address complexities and alternative perspectives",
            "Deliver a cohesive narrative",
        ],
        llm=llm,
    )
    team.event_bus.on_all(print_event)

    prompt = random.choice(PROMPTS)
    response = await team.execute({"input": prompt})

    print("\n---")
    print(prompt)
    print("---")
    if isinstance(response, FallbackResponse):
        print(f"(fallback: {response.reason})")
    print(response)


if __name__ == "__main__":
    asyncio.run(main())
