"""AES5-2018 section 5.3 rate-category classification.

Two lookup paths share one bounds table:

* exact multiples of 1 kHz up to 432 kHz read a precomputed kHz-indexed table;
* everything else goes through a ``bisect`` over the band minima.

The kHz table is generated from the same vectorised band test used for bulk
classification, so both paths agree at every inclusive boundary.
"""

from __future__ import annotations

import threading
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .frequency_contract import (
    BASE_FREQUENCY_HZ,
    CLASSIFIER_REALTIME_BUDGET_NS,
    RATE_CATEGORY_BOUNDS,
    RATE_CATEGORY_SECTION,
    RateCategory,
)
from .validation_core import ValidationCore, ValidationMetrics, ValidationResult

# Code 0 is UNKNOWN; codes 1..6 follow RATE_CATEGORY_BOUNDS order.
CATEGORY_BY_CODE: tuple[RateCategory, ...] = (RateCategory.UNKNOWN,) + tuple(
    category for category, _, _ in RATE_CATEGORY_BOUNDS
)

_BAND_MINIMA: tuple[int, ...] = tuple(low for _, low, _ in RATE_CATEGORY_BOUNDS)
_BAND_MAXIMA: tuple[int, ...] = tuple(high for _, _, high in RATE_CATEGORY_BOUNDS)
_BAND_MINIMA_ARRAY = np.array(_BAND_MINIMA, dtype=np.int64)
_BAND_MAXIMA_ARRAY = np.array(_BAND_MAXIMA, dtype=np.int64)

_CATEGORY_NAMES: dict[RateCategory, str] = {
    RateCategory.UNKNOWN: "Unknown",
    RateCategory.QUARTER: "Quarter",
    RateCategory.HALF: "Half",
    RateCategory.BASIC: "Basic",
    RateCategory.DOUBLE: "Double",
    RateCategory.QUADRUPLE: "Quadruple",
    RateCategory.OCTUPLE: "Octuple",
}


def rate_category_codes(frequencies: Iterable[int] | np.ndarray) -> np.ndarray:
    """Vectorised classification returning one ``uint8`` code per frequency."""

    freqs = np.asarray(frequencies, dtype=np.int64)
    band_index = np.searchsorted(_BAND_MINIMA_ARRAY, freqs, side="right") - 1
    safe_index = np.clip(band_index, 0, None)
    in_band = (band_index >= 0) & (freqs <= _BAND_MAXIMA_ARRAY[safe_index])
    return np.where(in_band, band_index + 1, 0).astype(np.uint8)


_KHZ_TABLE_SIZE = _BAND_MAXIMA[-1] // 1000 + 1
_KHZ_CODE_TABLE = rate_category_codes(np.arange(_KHZ_TABLE_SIZE, dtype=np.int64) * 1000)
_KHZ_CODE_TABLE.setflags(write=False)
_KHZ_CATEGORY_TABLE: tuple[RateCategory, ...] = tuple(CATEGORY_BY_CODE[code] for code in _KHZ_CODE_TABLE.tolist())


def _category_by_range(frequency: int) -> RateCategory:
    index = bisect_right(_BAND_MINIMA, frequency) - 1
    if index >= 0 and frequency <= _BAND_MAXIMA[index]:
        return CATEGORY_BY_CODE[index + 1]
    return RateCategory.UNKNOWN


def determine_rate_category(frequency: int) -> RateCategory:
    """Classify a single frequency without memoisation or metrics."""

    khz, remainder = divmod(frequency, 1000)
    if remainder == 0 and 0 <= khz < _KHZ_TABLE_SIZE:
        return _KHZ_CATEGORY_TABLE[int(khz)]
    return _category_by_range(frequency)


def category_name(category: RateCategory) -> str:
    return _CATEGORY_NAMES[category]


def category_section(category: RateCategory) -> str:
    """AES5-2018 section governing ``category``, or ``"Unknown"``."""

    return "Unknown" if category is RateCategory.UNKNOWN else RATE_CATEGORY_SECTION


def get_frequency_range(category: RateCategory) -> tuple[int, int] | None:
    """Inclusive ``(min_hz, max_hz)`` of a category; None for ``UNKNOWN``."""

    for candidate, low, high in RATE_CATEGORY_BOUNDS:
        if candidate is category:
            return low, high
    return None


@dataclass(frozen=True, slots=True)
class RateCategoryResult:
    """Classification of one frequency.

    ``multiplier`` is ``frequency_hz / 48000`` for a recognised category and
    ``0.0`` otherwise. ``ratio`` carries the same value but is None when the
    frequency matched no category.
    """

    frequency_hz: int
    category: RateCategory
    multiplier: float
    valid: bool

    @property
    def ratio(self) -> float | None:
        return self.multiplier if self.valid else None

    @property
    def category_name(self) -> str:
        if self.category is RateCategory.UNKNOWN:
            return "Unknown"
        return f"{category_name(self.category)} Rate"

    @property
    def section(self) -> str:
        return category_section(self.category)

    def as_dict(self) -> dict[str, object]:
        return {
            "frequency_hz": self.frequency_hz,
            "category": self.category.value,
            "category_name": self.category_name,
            "multiplier": self.multiplier,
            "valid": self.valid,
            "section": self.section,
        }


def _build_result(frequency: int) -> RateCategoryResult:
    category = determine_rate_category(frequency)
    valid = category is not RateCategory.UNKNOWN
    return RateCategoryResult(
        frequency_hz=frequency,
        category=category,
        multiplier=frequency / BASE_FREQUENCY_HZ if valid else 0.0,
        valid=valid,
    )


class RateCategoryManager:
    """Classify frequencies into rate bands and track classification latency.

    The last classified frequency is memoised per thread, so repeated
    classification of the same rate on one audio thread skips both the lookup
    and the metrics sample.
    """

    def __init__(self, validation_core: ValidationCore) -> None:
        self._validation_core = validation_core
        self._memo = threading.local()

    @property
    def validation_core(self) -> ValidationCore:
        return self._validation_core

    def classify_rate_category(self, frequency: int) -> RateCategoryResult:
        cached: RateCategoryResult | None = getattr(self._memo, "last_result", None)
        if cached is not None and cached.frequency_hz == frequency:
            return cached

        self._validation_core.validate(frequency, _classification_check)
        result = _build_result(frequency)
        self._memo.last_result = result
        return result

    def get_rate_category(self, frequency: int) -> RateCategory:
        return self.classify_rate_category(frequency).category

    def calculate_rate_multiplier(self, frequency: int) -> float:
        return self.classify_rate_category(frequency).multiplier

    def is_valid_rate_category(self, frequency: int) -> bool:
        return self.classify_rate_category(frequency).valid

    def classify_many(self, frequencies: Iterable[int] | np.ndarray) -> list[RateCategory]:
        """Bulk classification through the vectorised path (no memo, no metrics)."""

        return [CATEGORY_BY_CODE[code] for code in rate_category_codes(frequencies).tolist()]

    def get_metrics(self) -> ValidationMetrics:
        return self._validation_core.get_metrics()

    def reset_metrics(self) -> None:
        self._validation_core.reset_metrics()

    def meets_realtime_constraints(self, max_latency_ns: int = CLASSIFIER_REALTIME_BUDGET_NS) -> bool:
        return self._validation_core.meets_realtime_constraints(max_latency_ns)


def _classification_check(frequency: int, context: object = None) -> ValidationResult:  # noqa: ARG001
    if determine_rate_category(frequency) is RateCategory.UNKNOWN:
        return ValidationResult.INVALID_INPUT
    return ValidationResult.VALID


def create_rate_category_manager(validation_core: ValidationCore | None = None) -> RateCategoryManager:
    """Build a manager, creating a fresh ValidationCore when none is given."""

    return RateCategoryManager(validation_core if validation_core is not None else ValidationCore())
