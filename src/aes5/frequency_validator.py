"""Nearest-reference frequency validation with ppm tolerance and clause attribution.

Closest-frequency policy
------------------------
An arbitrary input is mapped to a reference frequency through an ordered table
of inclusive upper bounds, so a lookup costs one ``bisect`` over a handful of
entries. Region edges sit at the midpoint between neighbouring references,
except around the 48 kHz family:

* ``[46000, 47976]`` belongs to the 47 952 Hz pull-down, split from the primary
  frequency at their midpoint.
* ``[47977, 48100]`` belongs to the 48 000 Hz primary frequency. The pull-up
  variant inside this window wins only on an exact match.
* ``[48101, 68124]`` belongs to the 48 048 Hz pull-up.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable

from .compliance import ComplianceEngine
from .frequency_contract import (
    DEFAULT_TOLERANCE_PPM,
    MAX_TOLERANCE_PPM,
    PULL_DOWN_48K_HZ,
    PULL_UP_48K_HZ,
    VALIDATOR_REALTIME_BUDGET_NS,
    ClauseId,
)
from .validation_core import ValidationCore, ValidationMetrics, ValidationResult

_PPM_SCALE = 1_000_000

# (inclusive upper bound in Hz, reference frequency) in ascending order; the
# last reference owns everything above the final bound.
_CLOSEST_REFERENCE_REGIONS: tuple[tuple[int, int], ...] = (
    (38_050, 32_000),
    (45_999, 44_100),
    (47_976, PULL_DOWN_48K_HZ),
    (48_100, 48_000),
    (68_124, PULL_UP_48K_HZ),
    (92_100, 88_200),
    (136_200, 96_000),
    (184_200, 176_400),
    (288_000, 192_000),
)
_REGION_UPPER_BOUNDS: tuple[int, ...] = tuple(bound for bound, _ in _CLOSEST_REFERENCE_REGIONS)
_REGION_REFERENCES: tuple[int, ...] = tuple(reference for _, reference in _CLOSEST_REFERENCE_REGIONS) + (384_000,)
_EXACT_PULL_VARIANTS = frozenset({PULL_UP_48K_HZ})

_STATUS_DESCRIPTIONS: dict[ValidationResult, str] = {
    ValidationResult.VALID: "Frequency is valid according to AES5-2018",
    ValidationResult.INVALID_INPUT: "Invalid input frequency (must be > 0)",
    ValidationResult.OUT_OF_TOLERANCE: "Frequency is outside acceptable tolerance",
    ValidationResult.INTERNAL_ERROR: "Internal validation error",
}


@dataclass(frozen=True, slots=True)
class FrequencyValidationResult:
    """Outcome of validating one frequency against the reference table."""

    status: ValidationResult
    detected_frequency: int
    closest_standard_frequency: int
    tolerance_ppm: float
    applicable_clause: ClauseId

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationResult.VALID

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self.status]

    def as_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "detected_frequency": self.detected_frequency,
            "closest_standard_frequency": self.closest_standard_frequency,
            "tolerance_ppm": self.tolerance_ppm,
            "applicable_clause": self.applicable_clause.value,
            "description": self.description,
        }


@dataclass(slots=True)
class _FrequencyCheck:
    """Per-call context handed through ValidationCore to the check function."""

    tolerance_ppm: float
    result: FrequencyValidationResult | None = None


def _rejected(frequency: int, status: ValidationResult) -> FrequencyValidationResult:
    return FrequencyValidationResult(
        status=status,
        detected_frequency=frequency,
        closest_standard_frequency=0,
        tolerance_ppm=0.0,
        applicable_clause=ClauseId.UNKNOWN,
    )


class FrequencyValidator:
    """Validate sampling frequencies against the AES5-2018 reference table.

    The validator owns its compliance engine and validation core for its whole
    lifetime. It keeps no per-call state, so one instance may be shared between
    threads; only the metrics counters change between calls.
    """

    DEFAULT_TOLERANCE_PPM = DEFAULT_TOLERANCE_PPM

    def __init__(self, compliance_engine: ComplianceEngine, validation_core: ValidationCore) -> None:
        self._compliance_engine = compliance_engine
        self._validation_core = validation_core

    @property
    def compliance_engine(self) -> ComplianceEngine:
        return self._compliance_engine

    @property
    def validation_core(self) -> ValidationCore:
        return self._validation_core

    def find_closest_standard_frequency(self, frequency: int) -> int:
        if frequency in _EXACT_PULL_VARIANTS:
            return frequency
        return _REGION_REFERENCES[bisect_left(_REGION_UPPER_BOUNDS, frequency)]

    @staticmethod
    def calculate_tolerance_ppm(measured: int, reference: int) -> float:
        """Deviation of ``measured`` from ``reference`` in parts per million."""

        if reference <= 0:
            return MAX_TOLERANCE_PPM
        if measured == reference:
            return 0.0
        # int / int rounds once, so common cases like 48048 vs 48000 are exact.
        return abs(measured - reference) * _PPM_SCALE / reference

    def validate_frequency(
        self,
        frequency: int,
        tolerance_ppm: float = DEFAULT_TOLERANCE_PPM,
    ) -> FrequencyValidationResult:
        check = _FrequencyCheck(tolerance_ppm=tolerance_ppm)
        status = self._validation_core.validate(frequency, self._check_frequency, check)
        if check.result is None:
            return _rejected(frequency, status)
        return check.result

    def validate_frequencies(
        self,
        frequencies: Iterable[int],
        tolerance_ppm: float = DEFAULT_TOLERANCE_PPM,
    ) -> ValidationResult:
        """Validate a batch; returns the first non-valid status or ``VALID``."""

        check = _FrequencyCheck(tolerance_ppm=tolerance_ppm)
        return self._validation_core.batch_validate(frequencies, self._check_frequency, check)

    def get_metrics(self) -> ValidationMetrics:
        return self._validation_core.get_metrics()

    def reset_metrics(self) -> None:
        self._validation_core.reset_metrics()

    def meets_realtime_constraints(self, max_latency_ns: int = VALIDATOR_REALTIME_BUDGET_NS) -> bool:
        return self._validation_core.meets_realtime_constraints(max_latency_ns)

    def evaluate_frequency(self, frequency: int, tolerance_ppm: float = DEFAULT_TOLERANCE_PPM) -> FrequencyValidationResult:
        """Same outcome as ``validate_frequency`` without timing or a metrics sample."""

        if frequency <= 0 or tolerance_ppm < 0:
            return _rejected(frequency, ValidationResult.INVALID_INPUT)
        closest = self.find_closest_standard_frequency(frequency)
        deviation_ppm = self.calculate_tolerance_ppm(frequency, closest)
        status = (
            ValidationResult.VALID
            if deviation_ppm <= tolerance_ppm
            else ValidationResult.OUT_OF_TOLERANCE
        )
        return FrequencyValidationResult(
            status=status,
            detected_frequency=frequency,
            closest_standard_frequency=closest,
            tolerance_ppm=deviation_ppm,
            applicable_clause=self._compliance_engine.attribute_clause(closest),
        )

    def _check_frequency(self, frequency: int, check: _FrequencyCheck | None) -> ValidationResult:
        if check is None:
            return ValidationResult.INTERNAL_ERROR
        if frequency <= 0 or check.tolerance_ppm < 0:
            return ValidationResult.INVALID_INPUT
        check.result = self.evaluate_frequency(frequency, check.tolerance_ppm)
        return check.result.status


def create_frequency_validator(
    compliance_engine: ComplianceEngine | None = None,
    validation_core: ValidationCore | None = None,
) -> FrequencyValidator:
    """Build a validator, creating fresh collaborators for any left as None."""

    return FrequencyValidator(
        compliance_engine=compliance_engine if compliance_engine is not None else ComplianceEngine(),
        validation_core=validation_core if validation_core is not None else ValidationCore(),
    )
