"""Small shared helpers."""

from __future__ import annotations

from .stream_accumulator import StreamAccumulator


def trim_indent(text: str) -> str:
    """Strip every line and drop the empty ones."""
    return "\n".join(line.strip() for line in text.strip().splitlines() if line.strip())


def string_or_list(value: str | list[str] | None) -> str | None:
    """Render a list as a numbered list; pass strings and ``None`` through."""
    if isinstance(value, (list, tuple)):
        return "\n".join(f"{i}. {item}" for i, item in enumerate(value, 1))
    return value


__all__ = ["StreamAccumulator", "trim_indent", "string_or_list"]
