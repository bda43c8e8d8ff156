"""
Tool Unit Tests
"""

import json

import pytest
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from troupe import Agent, DictSchema, PydanticSchema, Tool, ValidationError, WeatherTool
from troupe.tools import DEFAULT_PARAMETERS, WORKING_MEMORY_KEY


class SearchArgs(BaseModel):
    query: str = Field(..., description="What to look for")
    limit: int = Field(3, description="Maximum results")


class Point(BaseModel):
    lat: float
    lon: float
    title: str = ""


class GeoArgs(BaseModel):
    where: Point
    home: Point | None = None
    stops: list[Point] = []


class TestNaming:
    def test_func_name_strips_spaces_and_keeps_existing_suffix(self):
        assert WeatherTool().func_name == "WeatherTool"

    def test_func_name_appends_suffix(self, make_tool):
        assert make_tool("Search").func_name == "SearchTool"
        assert Agent("Story Writer").func_name == "StoryWriterAgent"

    def test_func_name_drops_characters_outside_function_charset(self, make_tool):
        assert make_tool("Web search (beta)!").func_name == "Websearchbeta" + "Tool"

    def test_id_is_unique_per_instance(self, make_tool):
        assert make_tool("A").id != make_tool("A").id


class TestGraphIdentity:
    def test_root_tool(self, make_tool):
        tool = make_tool("Echo Tool")
        assert tool.graph_id == f"EchoTool:{tool.id}"
        assert tool.depth == 0

    def test_child_is_prefixed_by_parent(self, echo_tool):
        agent = Agent("Head Writer", tools=[echo_tool])

        assert echo_tool.parent is agent
        assert echo_tool.graph_id == f"HeadWriter:{agent.id}->Echo:{echo_tool.id}"
        assert echo_tool.depth == 1

    def test_identity_follows_parent_link(self, echo_tool):
        inner = Agent("Inner", tools=[echo_tool])
        outer = Agent("Outer", tools=[inner])

        assert echo_tool.depth == 2
        assert echo_tool.graph_id.startswith(outer.graph_id + "->" + f"Inner:{inner.id}")


class TestSchema:
    def test_default_parameters(self, echo_tool):
        schema = echo_tool.to_schema()

        assert schema["type"] == "function"
        fn = schema["function"]
        assert fn["name"] == "EchoTool"
        assert fn["description"] == "Echo test tool"
        assert fn["parameters"] == {
            "type": "object",
            "properties": DEFAULT_PARAMETERS["properties"],
            "required": ["input"],
        }

    def test_pydantic_parameters(self):
        schema = PydanticSchema(SearchArgs)

        assert set(schema.properties()) == {"query", "limit"}
        assert "title" not in schema.properties()["query"]
        assert schema.properties()["query"]["description"] == "What to look for"
        assert schema.required() == ["query"]
        assert schema.validate({"query": "tokyo"}) == {"query": "tokyo", "limit": 3}

    def test_dict_parameters(self):
        schema = DictSchema(
            {
                "properties": {
                    "city": {"type": "string"},
                    "days": {"type": "integer"},
                },
                "required": ["city"],
            }
        )

        assert schema.validate({"city": "Oslo"}) == {"city": "Oslo"}
        assert schema.validate({"city": "Oslo", "days": "2"}) == {"city": "Oslo", "days": 2}
        with pytest.raises(PydanticValidationError):
            schema.validate({"days": 2})

    def test_empty_parameters_fall_back_to_default(self, make_tool):
        tool = make_tool("Blank", parameters={"properties": {}})
        assert tool.parameters.required() == ["input"]

    def test_dict_parameters_with_type_unions(self):
        schema = DictSchema(
            {
                "properties": {
                    "city": {"type": ["string", "null"]},
                    "count": {"type": ["integer", "string"]},
                    "odd": {"type": {"not": "hashable"}},
                },
                "required": ["city"],
            }
        )

        assert schema.validate({"city": None}) == {"city": None}
        assert schema.validate({"city": "Oslo", "count": 2}) == {"city": "Oslo", "count": 2}
        assert schema.validate({"city": "Oslo", "odd": [1]}) == {"city": "Oslo", "odd": [1]}
        with pytest.raises(PydanticValidationError):
            schema.validate({"city": ["Oslo"]})

    def test_tool_accepts_nullable_property(self, make_tool):
        tool = make_tool(
            "Lookup",
            parameters={"properties": {"city": {"type": ["string", "null"]}}, "required": []},
        )

        props = tool.to_schema()["function"]["parameters"]["properties"]
        assert props == {"city": {"type": ["string", "null"]}}

    def test_nested_models_are_inlined(self):
        schema = Tool("Geo", "geo", parameters=GeoArgs).to_schema()

        params = schema["function"]["parameters"]
        assert "$ref" not in json.dumps(params)
        where = params["properties"]["where"]
        assert where["type"] == "object"
        assert set(where["properties"]) == {"lat", "lon", "title"}
        assert where["properties"]["title"]["type"] == "string"
        assert where["required"] == ["lat", "lon"]
        home = params["properties"]["home"]["anyOf"]
        assert {"type": "null"} in home
        assert any(option.get("type") == "object" for option in home)
        assert params["properties"]["stops"]["items"]["properties"]["lat"] == {"type": "number"}


class TestExecute:
    @pytest.mark.asyncio
    async def test_emits_start_then_complete(self, make_tool, bus, events):
        tool = make_tool("Echo", event_bus=bus)

        result = await tool.execute({"input": "hi"})

        assert result == "hi"
        assert events.types == ["start", "complete"]
        start, complete = events.events
        assert start.args == {"input": "hi"}
        assert start.id == tool.graph_id
        assert start.tool is tool
        assert complete.error is None

    @pytest.mark.asyncio
    async def test_validated_args_reach_run(self, bus, events):
        class Search(Tool):
            async def run(self, args):
                return args

        tool = Search("Search", "search", parameters=SearchArgs, event_bus=bus)

        result = await tool.execute({"query": "rain"})

        assert result == {"query": "rain", "limit": 3}
        assert events.of_type("start")[0].args == {"query": "rain", "limit": 3}

    @pytest.mark.asyncio
    async def test_invalid_args_raise_before_start(self, make_tool, bus, events):
        tool = make_tool("Echo", event_bus=bus)

        with pytest.raises(ValidationError) as exc_info:
            await tool.execute({})

        assert exc_info.value.code == "TOOL_VALIDATION"
        assert exc_info.value.tool_name == "EchoTool"
        assert "input" in str(exc_info.value)
        assert events.events == []
        assert tool.calls == []

    @pytest.mark.asyncio
    async def test_run_failure_is_reported_and_reraised(self, make_tool, bus, events):
        def boom(args):
            raise RuntimeError("boom")

        tool = make_tool("Broken", fn=boom, event_bus=bus)

        with pytest.raises(RuntimeError, match="boom"):
            await tool.execute({"input": "x"})

        assert events.types == ["start", "complete"]
        assert isinstance(events.events[1].error, RuntimeError)

    @pytest.mark.asyncio
    async def test_working_memory_is_passed_but_not_reported(self, make_tool, bus, events):
        tool = make_tool("Echo", event_bus=bus)
        memory = []

        await tool.execute({"input": "hi", WORKING_MEMORY_KEY: memory})

        assert tool.calls[0][WORKING_MEMORY_KEY] is memory
        assert events.of_type("start")[0].args == {"input": "hi"}

    @pytest.mark.asyncio
    async def test_start_args_are_not_mutated_by_run(self, bus, events):
        class Mutating(Tool):
            async def run(self, args):
                args["input"] = "changed"
                return None

        await Mutating("Mutating", "m", event_bus=bus).execute({"input": "original"})

        assert events.of_type("start")[0].args == {"input": "original"}


class TestEmitters:
    def test_warn_data_and_plan(self, make_tool, bus, events, caplog):
        tool = make_tool("Echo", event_bus=bus)

        tool.emit_warn("careful")
        tool.emit_data({"rows": 3})
        tool.emit_delta("partial")

        assert events.types == ["warn", "data", "delta"]
        assert events.events[0].message == "careful"
        assert events.events[1].data == {"rows": 3}
        assert events.events[2].content == "partial"
        assert "careful" in caplog.text


class TestWeatherTool:
    @pytest.mark.asyncio
    async def test_returns_reading_for_location(self):
        result = json.loads(await WeatherTool().execute({"input": "Tokyo"}))

        assert result["location"] == "Tokyo"
        assert {"temperature", "condition", "humidity", "windSpeed"} <= set(result)
