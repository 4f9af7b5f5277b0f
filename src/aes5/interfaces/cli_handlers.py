"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from aes5.application.audit_service import FrequencyAuditService
from aes5.compliance import ComplianceEngine
from aes5.families import (
    ApplicationContext,
    SamplingRateFamily,
    find_nearest_preferred_rate,
    get_conversion_info,
    validate_for_context,
)
from aes5.infrastructure.logging_event_publisher import build_event_publisher
from aes5.options import parse_case_insensitive_enum, parse_clause
from aes5.settings import load_active_config, load_runtime_settings

_event_publisher = build_event_publisher(load_runtime_settings().events_enabled)
audit_service = FrequencyAuditService(config=load_active_config(), event_publisher=_event_publisher)
compliance_engine = ComplianceEngine()


def validate_frequency(frequency: int, tolerance_ppm: float | None = None) -> dict[str, object]:
    correlation_id = str(uuid4())
    result = audit_service.validate(frequency, tolerance_ppm, correlation_id=correlation_id)
    return {**result.as_dict(), "correlation_id": correlation_id}


def classify_frequency(frequency: int) -> dict[str, object]:
    return audit_service.classify(frequency).as_dict()


def validate_batch(frequencies: list[int], tolerance_ppm: float | None = None) -> dict[str, object]:
    correlation_id = str(uuid4())
    status, details = audit_service.validate_batch(frequencies, tolerance_ppm, correlation_id=correlation_id)
    return {
        "status": status.value,
        "count": len(details),
        "results": [detail.as_dict() for detail in details],
        "correlation_id": correlation_id,
    }


def clause_report(clause: str, frequency: int | None = None) -> dict[str, object]:
    """Frequencies of ``clause`` and, when given, whether ``frequency`` complies.

    Raises ValueError for an unrecognised clause identifier.
    """

    resolved = parse_clause(clause)
    report: dict[str, object] = {
        "clause": resolved.value,
        "frequencies": sorted(compliance_engine.get_supported_frequencies(resolved)),
    }
    if frequency is not None:
        report["frequency_hz"] = frequency
        report["compliant"] = compliance_engine.verify_clause_compliance(frequency, resolved)
    return report


def conversion_report(from_rate: int, to_rate: int) -> dict[str, object]:
    return {"from_rate": from_rate, "to_rate": to_rate, **get_conversion_info(from_rate, to_rate).as_dict()}


def context_report(rate: int, context: str) -> dict[str, object]:
    """Suitability of ``rate`` for ``context``; unknown contexts are reported, not rejected."""

    try:
        resolved: ApplicationContext | str = parse_case_insensitive_enum(context, ApplicationContext)
    except ValueError:
        resolved = context
    suitability = validate_for_context(rate, resolved)
    context_name = resolved.value if isinstance(resolved, ApplicationContext) else resolved
    return {"rate": rate, "context": context_name, **suitability.as_dict()}


def nearest_report(rate: int, family: str | None = None) -> dict[str, object]:
    resolved = parse_case_insensitive_enum(family, SamplingRateFamily) if family else None
    info, distance = find_nearest_preferred_rate(rate, resolved)
    return {
        "rate": rate,
        "nearest_rate": info.rate,
        "distance_hz": distance,
        "family": info.family.value,
        "description": info.description,
    }


def audit_path(path: Path) -> dict[str, object]:
    """Probe ``path`` and audit its sample rate. ProbeError propagates."""

    correlation_id = str(uuid4())
    audit = audit_service.audit_file(path, correlation_id=correlation_id)
    return {**audit.as_dict(), "correlation_id": correlation_id}
