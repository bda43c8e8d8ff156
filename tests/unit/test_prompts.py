"""
Prompt Builder Tests
"""

from troupe.prompts import (
    AGENT_SYSTEM_PROMPT,
    TEAM_SYSTEM_PROMPT,
    build_agent_prompt,
    build_team_plan_prompt,
    build_team_prompt,
    build_working_memory_prompt,
)
from troupe.types import WorkingMemoryEntry
from troupe.utils import string_or_list, trim_indent


class TestSystemPrompts:
    def test_agent_prompt_has_no_indentation(self):
        assert all(line == line.strip() for line in AGENT_SYSTEM_PROMPT.splitlines())
        assert AGENT_SYSTEM_PROMPT.startswith("You are a helpful AI agent.")

    def test_team_prompt_extends_agent_prompt(self):
        assert TEAM_SYSTEM_PROMPT.startswith(AGENT_SYSTEM_PROMPT)
        assert TEAM_SYSTEM_PROMPT.endswith("You must follow the plan exactly.")


class TestAgentPrompt:
    def test_minimal(self):
        prompt = build_agent_prompt(role="Scout", args='{"input": "x"}')

        assert prompt.splitlines() == [
            "Your role: Scout",
            'Input: {"input": "x"}',
            "Do not mention the tools used in your response.",
        ]

    def test_full(self, make_tool):
        prompt = build_agent_prompt(
            role="Scout",
            args="{}",
            goal="Find trails",
            approach="1. Look\n2. Report",
            backstory="Former ranger",
            tools=[make_tool("Map", description="Show a map")],
        )

        lines = prompt.splitlines()
        assert lines.index("Your backstory:") < lines.index("You can use these tools:")
        assert "- MapTool: Show a map" in lines
        assert lines.index("Input: {}") < lines.index("Your approach:")
        assert "Your goal: Find trails" in lines


class TestTeamPrompts:
    def test_plan_section_only_when_plan_given(self):
        assert "Plan:" not in build_team_prompt("base")
        assert "---\nSearch first\n---" in build_team_prompt("base", plan="Search first")

    def test_plan_prompt_mentions_step_budget(self):
        prompt = build_team_plan_prompt("base", steps=3)

        assert prompt.startswith("base\n---")
        assert "You can use up to 3 steps to achieve your goal." in prompt


class TestWorkingMemoryPrompt:
    def test_entries_are_listed_in_order(self):
        prompt = build_working_memory_prompt(
            [
                WorkingMemoryEntry(name="SearchTool", arguments='{"q": 1}', result='"a"'),
                WorkingMemoryEntry(name="MathTool", arguments="{}", result="42"),
            ]
        )

        assert prompt.index("## Source: SearchTool") < prompt.index("## Source: MathTool")
        assert "### Arguments:\n{\"q\": 1}\n### Result:\n\"a\"" in prompt


class TestHelpers:
    def test_string_or_list(self):
        assert string_or_list(["a", "b"]) == "1. a\n2. b"
        assert string_or_list("as is") == "as is"
        assert string_or_list(None) is None

    def test_trim_indent(self):
        assert trim_indent("\n    one\n\n      two\n") == "one\ntwo"
