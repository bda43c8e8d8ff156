"""Tools package - the Tool base class, schema adapters and leaf tools."""

from .base import GRAPH_SEPARATOR, WORKING_MEMORY_KEY, Tool
from .schema import DEFAULT_PARAMETERS, DictSchema, PydanticSchema, ToolSchema, as_schema
from .weather import WeatherTool

__all__ = [
    "Tool",
    "WORKING_MEMORY_KEY",
    "GRAPH_SEPARATOR",
    "ToolSchema",
    "PydanticSchema",
    "DictSchema",
    "DEFAULT_PARAMETERS",
    "as_schema",
    "WeatherTool",
]
