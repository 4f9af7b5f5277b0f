"""Public package exports for AES5 frequency audits with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ClauseId",
    "RateCategory",
    "ComplianceEngine",
    "ValidationCore",
    "ValidationMetrics",
    "ValidationResult",
    "FrequencyValidator",
    "FrequencyValidationResult",
    "create_frequency_validator",
    "RateCategoryManager",
    "RateCategoryResult",
    "create_rate_category_manager",
    "FrequencyAuditService",
    "ProbeError",
    "probe_audio_bytes",
    "probe_audio_file",
]

_EXPORT_MODULES: dict[str, str] = {
    "ClauseId": "aes5.frequency_contract",
    "RateCategory": "aes5.frequency_contract",
    "ComplianceEngine": "aes5.compliance",
    "ValidationCore": "aes5.validation_core",
    "ValidationMetrics": "aes5.validation_core",
    "ValidationResult": "aes5.validation_core",
    "FrequencyValidator": "aes5.frequency_validator",
    "FrequencyValidationResult": "aes5.frequency_validator",
    "create_frequency_validator": "aes5.frequency_validator",
    "RateCategoryManager": "aes5.rate_categories",
    "RateCategoryResult": "aes5.rate_categories",
    "create_rate_category_manager": "aes5.rate_categories",
    "FrequencyAuditService": "aes5.application.audit_service",
    "ProbeError": "aes5.audio_probe",
    "probe_audio_bytes": "aes5.audio_probe",
    "probe_audio_file": "aes5.audio_probe",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'aes5' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
