"""DDD application layer."""

from .audit_service import FrequencyAuditService, SampleRateAudit
from .event_publisher import EventPublisher, InMemoryEventPublisher, NullEventPublisher

__all__ = ["EventPublisher", "InMemoryEventPublisher", "NullEventPublisher", "FrequencyAuditService", "SampleRateAudit"]
