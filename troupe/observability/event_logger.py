"""EventLogger - writes every event-bus event to a structlog logger."""

from __future__ import annotations

from typing import Any

import structlog

from ..events import EventBus
from ..types import WILDCARD, ToolEvent

_PAYLOAD_FIELDS = ("message", "args", "content", "data", "plan")


class EventLogger:
    """Wildcard subscriber. ``delta`` is logged at debug level, ``warn`` at warning."""

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger or structlog.get_logger("troupe.events")
        self._bus: EventBus | None = None

    def attach(self, bus: EventBus) -> EventLogger:
        self.detach()
        bus.on_all(self)
        self._bus = bus
        return self

    @staticmethod
    def attached_to(bus: EventBus) -> bool:
        return any(isinstance(h, EventLogger) for h in bus.handlers(WILDCARD))

    def detach(self) -> None:
        if self._bus is not None:
            self._bus.off_all(self)
            self._bus = None

    def __call__(self, event: ToolEvent) -> None:
        fields: dict[str, Any] = {"id": event.id, "depth": event.depth}
        for name in _PAYLOAD_FIELDS:
            value = getattr(event, name, None)
            if value is not None:
                fields[name] = value
        error = getattr(event, "error", None)
        if error is not None:
            fields["error"] = repr(error)

        if event.type == "delta":
            self._logger.debug(event.type, **fields)
        elif event.type == "warn":
            self._logger.warning(event.type, **fields)
        else:
            self._logger.info(event.type, **fields)
