"""Tool schema - Pydantic-based parameter validation."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, create_model

_JSON_TYPES: dict[str, Any] = {
    "string": str,
    "number": float,
    "integer": int,
    "boolean": bool,
    "object": dict[str, Any],
    "array": list[Any],
}


@runtime_checkable
class ToolSchema(Protocol):
    def validate(self, raw: dict[str, Any]) -> dict[str, Any]: ...
    def properties(self) -> dict[str, Any]: ...
    def required(self) -> list[str]: ...


class PydanticSchema:
    """ToolSchema backed by a Pydantic model."""

    def __init__(self, model: type[BaseModel]) -> None:
        self.model = model
        self._json_schema = model.model_json_schema()

    def validate(self, raw: dict[str, Any]) -> dict[str, Any]:
        return self.model.model_validate(raw).model_dump()

    def properties(self) -> dict[str, Any]:
        defs = self._json_schema.get("$defs", {})
        props = self._json_schema.get("properties", {})
        return {k: _inline_refs(v, defs) for k, v in props.items()}

    def required(self) -> list[str]:
        return list(self._json_schema.get("required", []))


class DictSchema:
    """ToolSchema backed by a raw ``{"properties": ..., "required": [...]}`` dict.

    Validation goes through a Pydantic model generated from the property map.
    Unknown properties are kept.
    """

    def __init__(self, schema: dict[str, Any], name: str = "ToolArgs") -> None:
        self._properties: dict[str, Any] = dict(schema.get("properties") or {})
        self._required: list[str] = list(schema.get("required") or [])
        fields: dict[str, Any] = {}
        for key, prop in self._properties.items():
            py_type = _python_type(prop.get("type"))
            description = prop.get("description")
            if key in self._required:
                fields[key] = (py_type, Field(..., description=description))
            else:
                fields[key] = (Optional[py_type], Field(None, description=description))
        self.model = create_model(name, __config__=ConfigDict(extra="allow"), **fields)

    def validate(self, raw: dict[str, Any]) -> dict[str, Any]:
        return self.model.model_validate(raw).model_dump(exclude_unset=True)

    def properties(self) -> dict[str, Any]:
        return self._properties

    def required(self) -> list[str]:
        return self._required


def _python_type(json_type: Any) -> Any:
    """Map a JSON-Schema ``type`` (a name or a list of names) to a Python type."""
    if isinstance(json_type, str):
        return _JSON_TYPES.get(json_type, Any)
    if not isinstance(json_type, list):
        return Any

    nullable = "null" in json_type
    members = []
    for name in json_type:
        if name == "null":
            continue
        py_type = _python_type(name)
        if py_type is Any:
            return Any
        if py_type not in members:
            members.append(py_type)
    if not members:
        return Any
    py_type = members[0] if len(members) == 1 else Union[tuple(members)]
    return Optional[py_type] if nullable else py_type


def _inline_refs(node: Any, defs: dict[str, Any], seen: frozenset[str] = frozenset()) -> Any:
    """Replace local ``#/$defs/...`` references and drop ``title`` keys.

    Recursive models stop at the first repeat and are left as a bare object.
    """
    if isinstance(node, list):
        return [_inline_refs(item, defs, seen) for item in node]
    if not isinstance(node, dict):
        return node

    ref = node.get("$ref")
    if isinstance(ref, str) and ref.startswith("#/$defs/"):
        name = ref.split("/")[-1]
        if name in seen or name not in defs:
            return {"type": "object"}
        resolved = _inline_refs(defs[name], defs, seen | {name})
        extra = {k: v for k, v in node.items() if k != "$ref" and not _is_title(k, v)}
        return {**resolved, **_inline_refs(extra, defs, seen)}

    return {k: _inline_refs(v, defs, seen) for k, v in node.items() if not _is_title(k, v)}


def _is_title(key: str, value: Any) -> bool:
    # A property that is itself named "title" maps to a dict, not a label
    return key == "title" and isinstance(value, str)


DEFAULT_PARAMETERS: dict[str, Any] = {
    "properties": {
        "input": {
            "type": "string",
            "description": "Minimum input needed to complete the task",
        },
    },
    "required": ["input"],
}


def as_schema(parameters: Any = None, name: str = "ToolArgs") -> ToolSchema:
    """Normalize a model class, a schema dict or an existing ToolSchema.

    Anything without declared properties falls back to ``DEFAULT_PARAMETERS``.
    """
    if isinstance(parameters, (PydanticSchema, DictSchema)):
        return parameters
    if isinstance(parameters, type) and issubclass(parameters, BaseModel):
        return PydanticSchema(parameters)
    if isinstance(parameters, dict) and parameters.get("properties"):
        return DictSchema(parameters, name=name)
    if parameters is not None and isinstance(parameters, ToolSchema):
        return parameters
    return DictSchema(DEFAULT_PARAMETERS, name=name)
