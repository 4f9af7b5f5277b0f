"""API-facing handlers that delegate to application services."""

from __future__ import annotations

from aes5.application.audit_service import FrequencyAuditService, SampleRateAudit
from aes5.audio_probe import ProbeError
from aes5.compliance import ComplianceEngine
from aes5.frequency_contract import ClauseId
from aes5.frequency_validator import FrequencyValidationResult
from aes5.infrastructure.logging_event_publisher import build_event_publisher
from aes5.rate_categories import RateCategoryResult
from aes5.settings import load_active_config, load_runtime_settings

_event_publisher = build_event_publisher(load_runtime_settings().events_enabled)
audit_service = FrequencyAuditService(config=load_active_config(), event_publisher=_event_publisher)
compliance_engine = ComplianceEngine()


def validate_frequency(
    frequency: int,
    tolerance_ppm: float | None,
    correlation_id: str,
) -> FrequencyValidationResult:
    return audit_service.validate(frequency, tolerance_ppm, correlation_id=correlation_id)


def classify_frequency(frequency: int, correlation_id: str) -> RateCategoryResult:
    return audit_service.classify(frequency, correlation_id=correlation_id)


def clause_frequencies(clause: ClauseId) -> list[int]:
    return sorted(compliance_engine.get_supported_frequencies(clause))


def clause_compliance(frequency: int, clause: ClauseId) -> bool:
    return compliance_engine.verify_clause_compliance(frequency, clause)


def audit_uploaded_bytes(payload: bytes, filename: str | None, correlation_id: str) -> SampleRateAudit:
    return audit_service.audit_bytes(payload, filename=filename, correlation_id=correlation_id)


def metrics_snapshot() -> dict[str, dict[str, float | int]]:
    return {name: metrics.as_dict() for name, metrics in audit_service.metrics().items()}


__all__ = [
    "ProbeError",
    "audit_uploaded_bytes",
    "classify_frequency",
    "clause_compliance",
    "clause_frequencies",
    "metrics_snapshot",
    "validate_frequency",
]
