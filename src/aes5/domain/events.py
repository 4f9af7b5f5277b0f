"""Domain event contracts for frequency audits."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class FrequencyValidated(DomainEvent):
    """A frequency was checked against the reference table."""


@dataclass(frozen=True, slots=True)
class RateClassified(DomainEvent):
    """A frequency was assigned a rate category."""


@dataclass(frozen=True, slots=True)
class BatchValidated(DomainEvent):
    """A batch of frequencies was validated in one timing window."""


@dataclass(frozen=True, slots=True)
class AudioProbed(DomainEvent):
    """An audio container header was read and its sample rate audited."""


@dataclass(frozen=True, slots=True)
class AuditFailed(DomainEvent):
    """An audit could not be completed for a correlation id."""
