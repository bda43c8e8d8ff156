"""Structured error hierarchy for agents, teams and tools."""

from __future__ import annotations


class TroupeError(Exception):
    def __init__(self, code: str, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.cause = cause

    @classmethod
    def wrap(cls, err: Exception) -> TroupeError:
        if isinstance(err, TroupeError):
            return err
        return TroupeError("UNKNOWN", str(err), err)


class ConfigurationError(TroupeError):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__("CONFIGURATION", message, cause)


class ToolError(TroupeError):
    def __init__(
        self, code: str, tool_name: str, message: str, cause: Exception | None = None
    ) -> None:
        super().__init__(code, message, cause)
        self.tool_name = tool_name


class ValidationError(ToolError):
    """Arguments passed to a tool do not match its declared parameters."""

    def __init__(self, tool_name: str, details: str, cause: Exception | None = None) -> None:
        super().__init__("TOOL_VALIDATION", tool_name, f"Invalid arguments: {details}", cause)
        self.details = details


class ToolResolutionError(ToolError):
    def __init__(self, tool_name: str) -> None:
        super().__init__("TOOL_NOT_FOUND", tool_name, f"Tool {tool_name} not found")


class ArgumentParseError(ToolError):
    def __init__(self, tool_name: str, raw_arguments: str, cause: Exception | None = None) -> None:
        super().__init__(
            "TOOL_ARGUMENTS", tool_name, f"Invalid JSON object: {raw_arguments}", cause
        )
        self.raw_arguments = raw_arguments


class ToolExecutionError(ToolError):
    def __init__(self, tool_name: str, cause: Exception) -> None:
        super().__init__("TOOL_EXECUTION", tool_name, f"Error executing tool: {cause}", cause)
