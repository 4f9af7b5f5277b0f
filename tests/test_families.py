from fractions import Fraction

import pytest

from aes5.families import (
    ALL_SAMPLING_RATES,
    ApplicationContext,
    SamplingRateFamily,
    find_nearest_preferred_rate,
    get_conversion_info,
    get_rates_in_family,
    get_sampling_rate_family,
    get_sampling_rate_info,
    is_preferred_sampling_rate,
    validate_for_context,
)


def test_every_preferred_rate_belongs_to_one_family() -> None:
    assert len(ALL_SAMPLING_RATES) == 12
    assert get_sampling_rate_family(96_000) is SamplingRateFamily.FAMILY_48K
    assert get_sampling_rate_family(22_050) is SamplingRateFamily.FAMILY_44K
    assert get_sampling_rate_family(12_345) is None
    assert is_preferred_sampling_rate(8_000)
    assert not is_preferred_sampling_rate(384_000)


def test_rate_info_carries_exact_multiplier() -> None:
    info = get_sampling_rate_info(24_000)

    assert info is not None
    assert info.multiplier == Fraction(1, 2)
    assert get_sampling_rate_info(176_400).multiplier == Fraction(4)


def test_rates_in_family() -> None:
    assert get_rates_in_family(44_100) == (11_025, 22_050, 44_100, 88_200, 176_400)
    assert get_rates_in_family(12_345) is None


@pytest.mark.parametrize(
    ("rate", "family", "nearest", "distance"),
    [
        (47_000, None, 48_000, 1_000),
        (46_050, None, 44_100, 1_950),  # equidistant from 44.1k and 48k
        (44_100, SamplingRateFamily.FAMILY_48K, 48_000, 3_900),
        (1_000_000, SamplingRateFamily.FAMILY_44K, 176_400, 823_600),
        (0, None, 8_000, 8_000),
    ],
)
def test_find_nearest_preferred_rate(rate, family, nearest, distance) -> None:
    info, measured = find_nearest_preferred_rate(rate, family)

    assert info.rate == nearest
    assert measured == distance


def test_same_family_conversion_is_low_complexity() -> None:
    info = get_conversion_info(48_000, 96_000)

    assert info.possible
    assert info.same_family
    assert info.complexity == "low"
    assert info.ratio == Fraction(2)
    assert info.method == "upsampling"
    assert get_conversion_info(96_000, 32_000).method == "downsampling"
    assert get_conversion_info(44_100, 44_100).method == "none"


def test_cross_family_conversion_needs_src() -> None:
    info = get_conversion_info(44_100, 48_000)

    assert info.possible
    assert info.same_family is False
    assert info.complexity == "high"
    assert info.ratio == Fraction(160, 147)
    assert info.method is None
    assert info.as_dict()["ratio_exact"] == "160/147"
    assert info.ratio_float == pytest.approx(1.0884353741)


def test_conversion_from_non_preferred_rate_is_impossible() -> None:
    info = get_conversion_info(12_345, 48_000)

    assert not info.possible
    assert info.ratio is None
    assert info.as_dict()["ratio"] is None


@pytest.mark.parametrize(
    ("rate", "context", "recommendation", "valid"),
    [
        (48_000, ApplicationContext.BROADCAST, "recommended", True),
        (32_000, "broadcast", "acceptable", True),
        (44_100, ApplicationContext.MUSIC, "recommended", True),
        (16_000, ApplicationContext.SPEECH, "recommended", True),
        (48_000, ApplicationContext.HIGH_RESOLUTION, "acceptable", True),
        (8_000, ApplicationContext.BROADCAST, "not-recommended", False),
        (48_000, "podcast", "unknown", True),
    ],
)
def test_validate_for_context(rate, context, recommendation, valid) -> None:
    suitability = validate_for_context(rate, context)

    assert suitability.recommendation == recommendation
    assert suitability.valid is valid


def test_not_recommended_rate_suggests_alternatives() -> None:
    suitability = validate_for_context(8_000, ApplicationContext.BROADCAST)

    assert suitability.suggested_rates == (48_000, 96_000)
    assert suitability.as_dict()["suggested_rates"] == [48_000, 96_000]


def test_non_preferred_rate_is_never_suitable() -> None:
    suitability = validate_for_context(12_345, ApplicationContext.MUSIC)

    assert not suitability.valid
    assert suitability.recommendation is None
