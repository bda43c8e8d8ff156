"""
StreamAccumulator Unit Tests
"""

from troupe.types import StreamChunk, ToolCallFragment
from troupe.utils import StreamAccumulator


class TestContent:
    def test_update_returns_fragment_and_concatenates(self):
        acc = StreamAccumulator()

        assert acc.update(StreamChunk(content="Hel")) == "Hel"
        assert acc.update(StreamChunk(content="lo")) == "lo"
        assert acc.update(StreamChunk()) is None

        assert acc.content == "Hello"
        assert acc.get_message().content == "Hello"

    def test_refusal_is_concatenated(self):
        acc = StreamAccumulator()
        acc.update(StreamChunk(refusal="I can't "))
        acc.update(StreamChunk(refusal="help with that"))

        assert acc.get_message().refusal == "I can't help with that"

    def test_finish_reason_keeps_last_reported_value(self):
        acc = StreamAccumulator()
        acc.update(StreamChunk(content="x"))
        acc.update(StreamChunk(finish_reason="tool_calls"))
        acc.update(StreamChunk(finish_reason=None))

        assert acc.finish_reason == "tool_calls"


class TestToolCalls:
    def test_fragments_are_merged_per_index(self):
        acc = StreamAccumulator()
        acc.update(
            StreamChunk(tool_calls=[ToolCallFragment(index=0, id="call_a", name="SearchTool")])
        )
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=0, arguments='{"input": ')]))
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=0, arguments='"rain"}')]))

        (call,) = acc.tool_calls
        assert call.id == "call_a"
        assert call.name == "SearchTool"
        assert call.arguments == '{"input": "rain"}'

    def test_id_and_name_are_taken_from_first_fragment(self):
        acc = StreamAccumulator()
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=0, id="first", name="A")]))
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=0, id="second", name="B")]))

        assert acc.tool_calls[0].id == "first"
        assert acc.tool_calls[0].name == "A"

    def test_interleaved_calls_are_ordered_by_index(self):
        acc = StreamAccumulator()
        acc.update(
            StreamChunk(
                tool_calls=[
                    ToolCallFragment(index=1, id="b", name="Beta", arguments="{"),
                    ToolCallFragment(index=0, id="a", name="Alpha", arguments="{"),
                ]
            )
        )
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=1, arguments="}")]))
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=0, arguments="}")]))

        assert [(c.id, c.arguments) for c in acc.tool_calls] == [("a", "{}"), ("b", "{}")]
        assert acc.has_tool_calls()

    def test_reset(self):
        acc = StreamAccumulator()
        acc.update(StreamChunk(content="x", finish_reason="stop"))
        acc.update(StreamChunk(tool_calls=[ToolCallFragment(index=0, id="a", name="A")]))

        acc.reset()

        assert acc.content == ""
        assert acc.finish_reason is None
        assert not acc.has_tool_calls()
