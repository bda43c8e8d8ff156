"""Observability - structured logging of event-bus traffic."""

from .event_logger import EventLogger

__all__ = ["EventLogger"]
