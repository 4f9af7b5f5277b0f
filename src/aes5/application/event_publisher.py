"""Ports through which audit services report domain events."""

from __future__ import annotations

import threading
from typing import Protocol

from aes5.domain.events import DomainEvent


class EventPublisher(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Publish a single event."""


class NullEventPublisher:
    """Discards every event; selected when ``AES5_EVENTS_ENABLED`` is off."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return


class InMemoryEventPublisher:
    """Keeps published events in arrival order for embedding applications."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[DomainEvent] = []

    @property
    def events(self) -> tuple[DomainEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            self._events.append(event)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
