import pytest

from aes5.families import ApplicationContext, SamplingRateFamily
from aes5.frequency_contract import ClauseId
from aes5.options import coerce_clause, enum_values, parse_case_insensitive_enum, parse_clause


def test_enum_values_preserves_declaration_order() -> None:
    assert enum_values(SamplingRateFamily) == ("48k", "44.1k")


def test_parse_case_insensitive_enum_accepts_values_and_names() -> None:
    assert parse_case_insensitive_enum("HIGH-RESOLUTION", ApplicationContext) is ApplicationContext.HIGH_RESOLUTION
    assert parse_case_insensitive_enum("family_44k", SamplingRateFamily) is SamplingRateFamily.FAMILY_44K


def test_parse_case_insensitive_enum_lists_allowed_values() -> None:
    with pytest.raises(ValueError, match="Allowed values: broadcast, music, speech, high-resolution"):
        parse_case_insensitive_enum("podcast", ApplicationContext)


def test_coerce_clause_rejects_unknown_and_non_strings() -> None:
    assert coerce_clause("unknown") is None
    assert coerce_clause(ClauseId.UNKNOWN) is None
    assert coerce_clause(51) is None  # type: ignore[arg-type]
    assert coerce_clause("annex_a") is ClauseId.ANNEX_A


def test_parse_clause_error_omits_unknown_sentinel() -> None:
    with pytest.raises(ValueError) as exc:
        parse_clause("5.3")

    assert "5.1, 5.2, 5.4, A" in str(exc.value)
    assert "unknown" not in str(exc.value).split("Allowed values:")[1]
