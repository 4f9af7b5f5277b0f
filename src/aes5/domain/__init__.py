"""Domain events raised by the audit layer."""

from .events import AudioProbed, AuditFailed, BatchValidated, DomainEvent, FrequencyValidated, RateClassified

__all__ = [
    "DomainEvent",
    "FrequencyValidated",
    "RateClassified",
    "BatchValidated",
    "AudioProbed",
    "AuditFailed",
]
