"""Application services orchestrating frequency audits."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from aes5.application.event_publisher import EventPublisher, NullEventPublisher
from aes5.audio_probe import AudioStreamInfo, ProbeError, probe_audio_bytes, probe_audio_file
from aes5.compliance import ComplianceEngine
from aes5.domain.events import AudioProbed, AuditFailed, BatchValidated, FrequencyValidated, RateClassified
from aes5.frequency_validator import FrequencyValidationResult, FrequencyValidator, create_frequency_validator
from aes5.rate_categories import RateCategoryManager, RateCategoryResult, create_rate_category_manager
from aes5.utils.config import ValidatorConfig
from aes5.validation_core import ValidationCore, ValidationMetrics, ValidationResult


@dataclass(frozen=True, slots=True)
class SampleRateAudit:
    """Validation and classification of one probed audio stream."""

    stream: AudioStreamInfo
    validation: FrequencyValidationResult
    category: RateCategoryResult

    @property
    def compliant(self) -> bool:
        return self.validation.is_valid and self.category.valid

    def as_dict(self) -> dict[str, object]:
        return {
            "stream": self.stream.as_dict(),
            "validation": self.validation.as_dict(),
            "category": self.category.as_dict(),
            "compliant": self.compliant,
        }


def _build_validator(config: ValidatorConfig) -> FrequencyValidator:
    return create_frequency_validator(
        ComplianceEngine(),
        ValidationCore(max_batch_size=config.max_batch_size),
    )


def _build_rate_manager(config: ValidatorConfig) -> RateCategoryManager:
    return create_rate_category_manager(ValidationCore(max_batch_size=config.max_batch_size))


@dataclass(slots=True)
class FrequencyAuditService:
    """Use case that validates, classifies and audits sampling frequencies."""

    config: ValidatorConfig = field(default_factory=ValidatorConfig)
    event_publisher: EventPublisher = field(default_factory=NullEventPublisher)
    validator: FrequencyValidator | None = None
    rate_manager: RateCategoryManager | None = None

    def __post_init__(self) -> None:
        if self.validator is None:
            self.validator = _build_validator(self.config)
        if self.rate_manager is None:
            self.rate_manager = _build_rate_manager(self.config)

    def validate(
        self,
        frequency: int,
        tolerance_ppm: float | None = None,
        correlation_id: str | None = None,
    ) -> FrequencyValidationResult:
        tolerance = self.config.tolerance.default_ppm if tolerance_ppm is None else tolerance_ppm
        result = self.validator.validate_frequency(frequency, tolerance)
        self.event_publisher.publish(
            FrequencyValidated(
                correlation_id=correlation_id or str(uuid4()),
                payload_summary={
                    "frequency_hz": frequency,
                    "status": result.status.value,
                    "closest_standard_frequency": result.closest_standard_frequency,
                    "tolerance_ppm": result.tolerance_ppm,
                    "clause": result.applicable_clause.value,
                },
            )
        )
        return result

    def classify(self, frequency: int, correlation_id: str | None = None) -> RateCategoryResult:
        result = self.rate_manager.classify_rate_category(frequency)
        self.event_publisher.publish(
            RateClassified(
                correlation_id=correlation_id or str(uuid4()),
                payload_summary={
                    "frequency_hz": frequency,
                    "category": result.category.value,
                    "multiplier": result.multiplier,
                },
            )
        )
        return result

    def validate_batch(
        self,
        frequencies: Sequence[int],
        tolerance_ppm: float | None = None,
        correlation_id: str | None = None,
    ) -> tuple[ValidationResult, list[FrequencyValidationResult]]:
        """Batch status plus a per-frequency breakdown of the first ``max_batch_size`` items.

        The breakdown does not add metrics samples beyond the single batch sample.
        """

        tolerance = self.config.tolerance.default_ppm if tolerance_ppm is None else tolerance_ppm
        status = self.validator.validate_frequencies(frequencies, tolerance)
        details = [
            self.validator.evaluate_frequency(frequency, tolerance)
            for frequency in list(frequencies)[: self.config.max_batch_size]
        ]
        self.event_publisher.publish(
            BatchValidated(
                correlation_id=correlation_id or str(uuid4()),
                payload_summary={
                    "count": len(details),
                    "status": status.value,
                    "tolerance_ppm": tolerance,
                },
            )
        )
        return status, details

    def audit_file(self, path: Path, correlation_id: str | None = None) -> SampleRateAudit:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            stream = probe_audio_file(path)
        except ProbeError as error:
            self._publish_failure(run_correlation_id, str(path), error)
            raise
        return self._audit_stream(stream, source=path.name, correlation_id=run_correlation_id)

    def audit_bytes(
        self,
        payload: bytes,
        filename: str | None = None,
        correlation_id: str | None = None,
    ) -> SampleRateAudit:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            stream = probe_audio_bytes(payload, filename=filename)
        except ProbeError as error:
            self._publish_failure(run_correlation_id, filename or "upload", error)
            raise
        return self._audit_stream(stream, source=filename or "upload", correlation_id=run_correlation_id)

    def metrics(self) -> dict[str, ValidationMetrics]:
        return {
            "frequency_validation": self.validator.get_metrics(),
            "rate_classification": self.rate_manager.get_metrics(),
        }

    def meets_realtime_constraints(self) -> bool:
        realtime = self.config.realtime
        return self.validator.meets_realtime_constraints(
            realtime.validator_budget_ns
        ) and self.rate_manager.meets_realtime_constraints(realtime.classifier_budget_ns)

    def _audit_stream(self, stream: AudioStreamInfo, *, source: str, correlation_id: str) -> SampleRateAudit:
        audit = SampleRateAudit(
            stream=stream,
            validation=self.validate(stream.sample_rate_hz, correlation_id=correlation_id),
            category=self.classify(stream.sample_rate_hz, correlation_id=correlation_id),
        )
        self.event_publisher.publish(
            AudioProbed(
                correlation_id=correlation_id,
                payload_summary={
                    "source": source,
                    "container": stream.container,
                    "sample_rate_hz": stream.sample_rate_hz,
                    "channel_count": stream.channel_count,
                    "compliant": audit.compliant,
                },
            )
        )
        return audit

    def _publish_failure(self, correlation_id: str, source: str, error: ProbeError) -> None:
        self.event_publisher.publish(
            AuditFailed(
                correlation_id=correlation_id,
                payload_summary={"source": source, "error_code": error.code, "error": error.message},
            )
        )

