"""Logging-backed implementation of the event publisher."""

from __future__ import annotations

import logging

from aes5.application.event_publisher import EventPublisher, NullEventPublisher
from aes5.domain.events import DomainEvent

LOGGER = logging.getLogger("aes5.events")


class LoggingEventPublisher:
    """Emit event payload summaries to structured logs."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def publish(self, event: DomainEvent) -> None:
        LOGGER.log(
            self._level,
            "domain_event_emitted",
            extra={
                "event_name": type(event).__name__,
                "correlation_id": event.correlation_id,
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


def build_event_publisher(events_enabled: bool) -> EventPublisher:
    """Logging publisher when events are enabled, otherwise a no-op one."""

    if events_enabled:
        return LoggingEventPublisher()
    return NullEventPublisher()
