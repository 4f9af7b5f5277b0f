"""Real-time validation wrapper with latency and outcome telemetry.

``ValidationCore`` does not know what it validates: callers hand it a value,
a check function and an optional context, and it times the check and folds
the outcome into a running metrics block.

Metrics policy
--------------
* Each counter update happens under one short-lived lock, so concurrent
  callers never lose increments.
* ``max_latency_ns`` only grows until :meth:`ValidationCore.reset_metrics`.
* A reader takes a snapshot of all five counters at once; a snapshot taken
  while other threads are writing reflects some interleaving of whole samples.
* ``batch_validate`` records exactly one sample for the whole batch.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .frequency_contract import CORE_REALTIME_BUDGET_NS, MAX_BATCH_SIZE


class ValidationResult(str, Enum):
    """Outcome of a validating operation. Always returned, never raised."""

    VALID = "valid"
    INVALID_INPUT = "invalid_input"
    OUT_OF_TOLERANCE = "out_of_tolerance"
    INTERNAL_ERROR = "internal_error"


CheckFunction = Callable[[int, Any], ValidationResult]


@dataclass(frozen=True, slots=True)
class ValidationMetrics:
    """Read-only snapshot of a core's counters."""

    total_validations: int = 0
    successful_validations: int = 0
    failed_validations: int = 0
    max_latency_ns: int = 0
    total_latency_ns: int = 0

    @property
    def average_latency_ns(self) -> int:
        if self.total_validations == 0:
            return 0
        return self.total_latency_ns // self.total_validations

    @property
    def success_rate(self) -> float:
        """Percentage of successful validations, 0.0 when nothing ran."""

        if self.total_validations == 0:
            return 0.0
        return self.successful_validations / self.total_validations * 100.0

    def as_dict(self) -> dict[str, float | int]:
        return {
            "total_validations": self.total_validations,
            "successful_validations": self.successful_validations,
            "failed_validations": self.failed_validations,
            "max_latency_ns": self.max_latency_ns,
            "total_latency_ns": self.total_latency_ns,
            "average_latency_ns": self.average_latency_ns,
            "success_rate": self.success_rate,
        }


class ValidationCore:
    """Timing-instrumented execution wrapper around caller-supplied checks."""

    MAX_BATCH_SIZE = MAX_BATCH_SIZE

    def __init__(
        self,
        clock: Callable[[], int] = time.perf_counter_ns,
        max_batch_size: int = MAX_BATCH_SIZE,
    ) -> None:
        self._clock = clock
        self._max_batch_size = min(max(1, max_batch_size), self.MAX_BATCH_SIZE)
        self._lock = threading.Lock()
        self._total = 0
        self._successful = 0
        self._failed = 0
        self._max_latency_ns = 0
        self._total_latency_ns = 0

    def validate(
        self,
        value: int,
        check_function: Optional[CheckFunction],
        context: Any = None,
    ) -> ValidationResult:
        if check_function is None:
            self._record(ValidationResult.INTERNAL_ERROR, 0)
            return ValidationResult.INTERNAL_ERROR

        start_ns = self._clock()
        try:
            result = check_function(value, context)
        except Exception:
            self._record(ValidationResult.INTERNAL_ERROR, self._clock() - start_ns)
            raise
        self._record(result, self._clock() - start_ns)
        return result

    def batch_validate(
        self,
        values: Iterable[int],
        check_function: Optional[CheckFunction],
        context: Any = None,
    ) -> ValidationResult:
        """Validate up to ``max_batch_size`` values, stopping at the first failure.

        Values past the limit are ignored. One metrics sample covers the batch.
        """

        batch = list(values)[: self._max_batch_size] if values is not None else []
        if not batch or check_function is None:
            self._record(ValidationResult.INTERNAL_ERROR, 0)
            return ValidationResult.INTERNAL_ERROR

        overall = ValidationResult.VALID
        start_ns = self._clock()
        try:
            for value in batch:
                result = check_function(value, context)
                if result is not ValidationResult.VALID:
                    overall = result
                    break
        except Exception:
            self._record(ValidationResult.INTERNAL_ERROR, self._clock() - start_ns)
            raise
        self._record(overall, self._clock() - start_ns)
        return overall

    def get_metrics(self) -> ValidationMetrics:
        with self._lock:
            return ValidationMetrics(
                total_validations=self._total,
                successful_validations=self._successful,
                failed_validations=self._failed,
                max_latency_ns=self._max_latency_ns,
                total_latency_ns=self._total_latency_ns,
            )

    def reset_metrics(self) -> None:
        with self._lock:
            self._total = 0
            self._successful = 0
            self._failed = 0
            self._max_latency_ns = 0
            self._total_latency_ns = 0

    def meets_realtime_constraints(self, max_latency_ns: int = CORE_REALTIME_BUDGET_NS) -> bool:
        """True iff the worst latency observed so far is within ``max_latency_ns``."""

        with self._lock:
            return self._max_latency_ns <= max_latency_ns

    def _record(self, result: ValidationResult, latency_ns: int) -> None:
        latency_ns = max(0, latency_ns)
        with self._lock:
            self._total += 1
            self._total_latency_ns += latency_ns
            if result is ValidationResult.VALID:
                self._successful += 1
            else:
                self._failed += 1
            if latency_ns > self._max_latency_ns:
                self._max_latency_ns = latency_ns
