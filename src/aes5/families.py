"""Preferred sampling-rate families and conversion metadata.

Reports whether a conversion between two preferred rates stays inside one
family and what ratio it implies. No resampling happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction


class SamplingRateFamily(str, Enum):
    """Hierarchical families of AES5-2018 preferred rates."""

    FAMILY_48K = "48k"
    FAMILY_44K = "44.1k"


class ApplicationContext(str, Enum):
    """Application contexts with recommended rate sets."""

    BROADCAST = "broadcast"
    MUSIC = "music"
    SPEECH = "speech"
    HIGH_RESOLUTION = "high-resolution"


@dataclass(frozen=True, slots=True)
class SamplingRateInfo:
    rate: int
    description: str
    multiplier: Fraction
    family: SamplingRateFamily


def _family(family: SamplingRateFamily, base: int, rows: tuple[tuple[int, str], ...]) -> tuple[SamplingRateInfo, ...]:
    return tuple(SamplingRateInfo(rate, description, Fraction(rate, base), family) for rate, description in rows)


SAMPLING_FREQUENCIES: dict[SamplingRateFamily, tuple[SamplingRateInfo, ...]] = {
    SamplingRateFamily.FAMILY_48K: _family(
        SamplingRateFamily.FAMILY_48K,
        48_000,
        (
            (8_000, "Speech/telephony applications"),
            (16_000, "Wideband speech/telephony"),
            (24_000, "Archive/broadcast applications"),
            (32_000, "Digital audio broadcasting"),
            (48_000, "Professional audio standard (recommended)"),
            (96_000, "High-resolution audio"),
            (192_000, "Ultra-high resolution audio"),
        ),
    ),
    SamplingRateFamily.FAMILY_44K: _family(
        SamplingRateFamily.FAMILY_44K,
        44_100,
        (
            (11_025, "Low-quality consumer audio"),
            (22_050, "Consumer multimedia"),
            (44_100, "CD audio standard"),
            (88_200, "High-resolution music production"),
            (176_400, "Ultra-high resolution music"),
        ),
    ),
}

_INFO_BY_RATE: dict[int, SamplingRateInfo] = {
    info.rate: info for infos in SAMPLING_FREQUENCIES.values() for info in infos
}

ALL_SAMPLING_RATES: tuple[int, ...] = tuple(sorted(_INFO_BY_RATE))

_CONTEXT_RULES: dict[ApplicationContext, tuple[tuple[int, ...], tuple[int, ...]]] = {
    # (recommended, acceptable)
    ApplicationContext.BROADCAST: ((48_000, 96_000), (32_000, 192_000)),
    ApplicationContext.MUSIC: ((44_100, 48_000, 88_200, 96_000), (176_400, 192_000)),
    ApplicationContext.SPEECH: ((8_000, 16_000), (24_000, 32_000)),
    ApplicationContext.HIGH_RESOLUTION: ((96_000, 192_000, 88_200, 176_400), (48_000, 44_100)),
}


@dataclass(frozen=True, slots=True)
class ConversionInfo:
    """Feasibility and ratio of converting between two preferred rates."""

    possible: bool
    reason: str
    same_family: bool | None = None
    complexity: str | None = None
    ratio: Fraction | None = None
    method: str | None = None

    @property
    def ratio_float(self) -> float | None:
        return float(self.ratio) if self.ratio is not None else None

    def as_dict(self) -> dict[str, object]:
        return {
            "possible": self.possible,
            "reason": self.reason,
            "same_family": self.same_family,
            "complexity": self.complexity,
            "ratio": self.ratio_float,
            "ratio_exact": str(self.ratio) if self.ratio is not None else None,
            "method": self.method,
        }


@dataclass(frozen=True, slots=True)
class ContextSuitability:
    valid: bool
    reason: str
    recommendation: str | None = None
    suggested_rates: tuple[int, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "recommendation": self.recommendation,
            "reason": self.reason,
            "suggested_rates": list(self.suggested_rates),
        }


def all_sampling_rates() -> tuple[int, ...]:
    return ALL_SAMPLING_RATES


def get_sampling_rate_family(rate: int) -> SamplingRateFamily | None:
    info = _INFO_BY_RATE.get(rate)
    return info.family if info is not None else None


def is_preferred_sampling_rate(rate: int) -> bool:
    return rate in _INFO_BY_RATE


def get_sampling_rate_info(rate: int) -> SamplingRateInfo | None:
    return _INFO_BY_RATE.get(rate)


def get_rates_in_family(rate: int) -> tuple[int, ...] | None:
    family = get_sampling_rate_family(rate)
    if family is None:
        return None
    return tuple(info.rate for info in SAMPLING_FREQUENCIES[family])


def find_nearest_preferred_rate(
    rate: int,
    family: SamplingRateFamily | None = None,
) -> tuple[SamplingRateInfo, int]:
    """Nearest preferred rate and its absolute distance; ties go to the lower rate."""

    candidates = SAMPLING_FREQUENCIES[family] if family is not None else tuple(
        _INFO_BY_RATE[candidate] for candidate in ALL_SAMPLING_RATES
    )
    nearest = min(candidates, key=lambda info: (abs(rate - info.rate), info.rate))
    return nearest, abs(rate - nearest.rate)


def get_conversion_info(from_rate: int, to_rate: int) -> ConversionInfo:
    from_family = get_sampling_rate_family(from_rate)
    to_family = get_sampling_rate_family(to_rate)

    if from_family is None or to_family is None:
        return ConversionInfo(
            possible=False,
            reason="One or both rates are not preferred sampling rates",
        )

    ratio = Fraction(to_rate, from_rate)
    if from_family is not to_family:
        return ConversionInfo(
            possible=True,
            same_family=False,
            complexity="high",
            reason="Conversion between different families requires sample rate conversion (SRC)",
            ratio=ratio,
        )

    if to_rate > from_rate:
        method = "upsampling"
    elif to_rate < from_rate:
        method = "downsampling"
    else:
        method = "none"
    return ConversionInfo(
        possible=True,
        same_family=True,
        complexity="low",
        reason="Conversion within the same family is simpler",
        ratio=ratio,
        method=method,
    )


def validate_for_context(rate: int, context: ApplicationContext | str) -> ContextSuitability:
    if get_sampling_rate_info(rate) is None:
        return ContextSuitability(
            valid=False,
            reason="Not a preferred sampling rate according to AES5-2018",
        )

    try:
        resolved = ApplicationContext(context)
    except ValueError:
        return ContextSuitability(
            valid=True,
            recommendation="unknown",
            reason="Unknown context, but rate is a preferred sampling rate",
        )

    recommended, acceptable = _CONTEXT_RULES[resolved]
    if rate in recommended:
        return ContextSuitability(
            valid=True,
            recommendation="recommended",
            reason=f"Recommended rate for {resolved.value} applications",
        )
    if rate in acceptable:
        return ContextSuitability(
            valid=True,
            recommendation="acceptable",
            reason=f"Acceptable rate for {resolved.value} applications",
        )
    return ContextSuitability(
        valid=False,
        recommendation="not-recommended",
        reason=f"Not typically used for {resolved.value} applications",
        suggested_rates=recommended,
    )
