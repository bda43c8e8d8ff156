"""Working memory types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WorkingMemoryEntry:
    """One completed tool invocation inside a single run."""

    name: str
    arguments: str
    result: str


WorkingMemory = list[WorkingMemoryEntry]
