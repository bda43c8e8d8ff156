"""Synchronous event bus shared by every tool in a call tree."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from ..types import WILDCARD, ToolEvent

logger = logging.getLogger(__name__)

Handler = Callable[[ToolEvent], Any]


class EventBus:
    """Publish/subscribe keyed by event type, plus a ``"*"`` wildcard subscription.

    Delivery happens inside ``emit``: handlers for the exact type run first, in
    registration order, then wildcard handlers. A failing handler is logged and
    skipped. A handler that returns an awaitable has it scheduled on the running
    loop.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._background_tasks: set[asyncio.Task[Any]] = set()

    def on(self, event_type: str, handler: Handler) -> None:
        handlers = self._handlers[event_type]
        if handler not in handlers:
            handlers.append(handler)

    def on_all(self, handler: Handler) -> None:
        self.on(WILDCARD, handler)

    def off(self, event_type: str, handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def off_all(self, handler: Handler) -> None:
        self.off(WILDCARD, handler)

    def handlers(self, event_type: str) -> list[Handler]:
        return list(self._handlers.get(event_type, []))

    @property
    def pending_tasks_count(self) -> int:
        return len(self._background_tasks)

    def emit(self, event: ToolEvent) -> None:
        event_type = getattr(event, "type", "")
        # Snapshot so handlers may (un)subscribe while being notified
        targets = list(self._handlers.get(event_type, []))
        if event_type != WILDCARD:
            targets += self._handlers.get(WILDCARD, [])
        for h in targets:
            try:
                result = h(event)
            except Exception:
                logger.exception("Event handler error for %s", event_type)
                continue
            if inspect.isawaitable(result):
                self._schedule(result, event_type)

    def _schedule(self, awaitable: Any, event_type: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running loop for async handler of %s; dropped", event_type)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        async def _run() -> None:
            try:
                await awaitable
            except Exception:
                logger.exception("Async event handler error for %s", event_type)

        task = loop.create_task(_run())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
