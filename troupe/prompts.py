"""Prompt builders for agents, teams, plans and working memory."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .types import WorkingMemoryEntry
from .utils import trim_indent

if TYPE_CHECKING:
    from .tools import Tool

AGENT_SYSTEM_PROMPT = trim_indent("""
    You are a helpful AI agent. The user does not see any of these messages except the last one.
    Only provide the response as requested. Do not include any intros, outros, labels, or quotes around the answer.
    Respond in the same language as the input. If you are not sure, respond in English.
    You must adhere to the provided role and goal.
""")

TEAM_SYSTEM_PROMPT = AGENT_SYSTEM_PROMPT + "\nYou must follow the plan exactly."


def build_agent_prompt(
    role: str,
    args: str,
    goal: str | None = None,
    approach: str | None = None,
    backstory: str | None = None,
    tools: Sequence[Tool] | None = None,
) -> str:
    lines = [f"Your role: {role}"]
    if backstory:
        lines += ["Your backstory:", backstory]
    if tools:
        lines.append("You can use these tools:")
        lines += [f"- {t.func_name}: {t.description}" for t in tools]
    lines.append(f"Input: {args}")
    if approach:
        lines += ["Your approach:", approach]
    if goal:
        lines.append(f"Your goal: {goal}")
    lines.append("Do not mention the tools used in your response.")
    return "\n".join(lines)


def build_team_prompt(base_prompt: str, plan: str | None = None) -> str:
    lines = [
        base_prompt,
        "The user cannot see any of the messages from the tools.",
        "Tools can see each other's results.",
        "You MUST incorporate all the information they provided into your response.",
        "Don't mention the tools or the plan in your response.",
    ]
    if plan:
        lines += [
            "Plan:",
            "---",
            plan,
            "---",
            "You must follow this plan exactly. Don't skip any steps.",
        ]
    return "\n".join(lines)


def build_team_plan_prompt(base_prompt: str, steps: int) -> str:
    return "\n".join([
        base_prompt,
        "---",
        "Your job is to write a simple plan to achieve this goal.",
        "Your plan can only use the tools provided. Do not suggest other tools.",
        f"You can use up to {steps} steps to achieve your goal.",
        "Respond with a brief, numbered list of steps.",
    ])


def build_working_memory_prompt(entries: Sequence[WorkingMemoryEntry]) -> str:
    lines = [
        "*This is additional context that only the assistant can see.*",
        "---",
    ]
    for entry in entries:
        lines += [
            f"## Source: {entry.name}",
            "### Arguments:",
            entry.arguments,
            "### Result:",
            entry.result,
            "---",
        ]
    return "\n".join(lines)
