"""AES5-2018 reference data shared by every validation component.

Invariants
----------
* Each nominal frequency appears exactly once in the reference table, so it is
  attributed to exactly one clause.
* Rate-category bands are closed on both ends, pairwise disjoint and separated
  by gaps.
* All tables below are built at import time and never mutated.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ClauseId(str, Enum):
    """AES5-2018 clause a sampling frequency is attributed to."""

    SECTION_5_1 = "5.1"
    SECTION_5_2 = "5.2"
    SECTION_5_4 = "5.4"
    ANNEX_A = "A"
    UNKNOWN = "unknown"


class RateCategory(str, Enum):
    """AES5-2018 section 5.3 rate bands, ordered by frequency."""

    UNKNOWN = "unknown"
    QUARTER = "quarter"
    HALF = "half"
    BASIC = "basic"
    DOUBLE = "double"
    QUADRUPLE = "quadruple"
    OCTUPLE = "octuple"


@dataclass(frozen=True, slots=True)
class StandardFrequencyEntry:
    """One reference point of the AES5-2018 frequency table."""

    nominal_frequency_hz: int
    clause: ClauseId
    tolerance_ppm: int


PRIMARY_FREQUENCY_HZ = 48_000
CONSUMER_FREQUENCY_HZ = 44_100
LEGACY_FREQUENCY_HZ = 32_000
PULL_DOWN_48K_HZ = 47_952  # 48000 * 1000/1001
PULL_UP_48K_HZ = 48_048  # 48000 * 1001/1000

BASE_FREQUENCY_HZ = PRIMARY_FREQUENCY_HZ

DEFAULT_TOLERANCE_PPM = 100
TIGHT_TOLERANCE_PPM = 50
MAX_TOLERANCE_PPM = sys.float_info.max

MAX_BATCH_SIZE = 16

# Latency budgets in nanoseconds.
CORE_REALTIME_BUDGET_NS = 100_000
VALIDATOR_REALTIME_BUDGET_NS = 50_000
CLASSIFIER_REALTIME_BUDGET_NS = 10_000

STANDARD_FREQUENCIES: tuple[StandardFrequencyEntry, ...] = (
    StandardFrequencyEntry(LEGACY_FREQUENCY_HZ, ClauseId.SECTION_5_4, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(CONSUMER_FREQUENCY_HZ, ClauseId.SECTION_5_2, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(PULL_DOWN_48K_HZ, ClauseId.ANNEX_A, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(PRIMARY_FREQUENCY_HZ, ClauseId.SECTION_5_1, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(PULL_UP_48K_HZ, ClauseId.ANNEX_A, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(88_200, ClauseId.SECTION_5_2, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(96_000, ClauseId.SECTION_5_2, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(176_400, ClauseId.SECTION_5_2, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(192_000, ClauseId.SECTION_5_2, DEFAULT_TOLERANCE_PPM),
    StandardFrequencyEntry(384_000, ClauseId.SECTION_5_2, DEFAULT_TOLERANCE_PPM),
)

CLAUSE_BY_FREQUENCY: Mapping[int, ClauseId] = MappingProxyType(
    {entry.nominal_frequency_hz: entry.clause for entry in STANDARD_FREQUENCIES}
)

# Inclusive (min_hz, max_hz) per category, in ascending order.
RATE_CATEGORY_BOUNDS: tuple[tuple[RateCategory, int, int], ...] = (
    (RateCategory.QUARTER, 7_750, 13_500),
    (RateCategory.HALF, 15_500, 27_000),
    (RateCategory.BASIC, 31_000, 54_000),
    (RateCategory.DOUBLE, 62_000, 108_000),
    (RateCategory.QUADRUPLE, 124_000, 216_000),
    (RateCategory.OCTUPLE, 248_000, 432_000),
)

RATE_CATEGORY_SECTION = "5.3"


def clause_for_frequency(frequency_hz: int) -> ClauseId:
    """Return the clause a reference frequency belongs to, or ``UNKNOWN``."""

    return CLAUSE_BY_FREQUENCY.get(frequency_hz, ClauseId.UNKNOWN)
