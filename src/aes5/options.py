"""Shared enum parsing helpers for CLI, API and config inputs."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from .frequency_contract import ClauseId

EnumT = TypeVar("EnumT", bound=Enum)

# Alternate spellings accepted for clause identifiers.
_CLAUSE_ALIASES: dict[str, ClauseId] = {
    "annex-a": ClauseId.ANNEX_A,
    "annex_a": ClauseId.ANNEX_A,
    "section_5_1": ClauseId.SECTION_5_1,
    "section_5_2": ClauseId.SECTION_5_2,
    "section_5_4": ClauseId.SECTION_5_4,
}


def enum_values(enum_cls: type[EnumT]) -> tuple[str, ...]:
    """Return enum values for UI/API hinting in declaration order."""

    return tuple(str(member.value) for member in enum_cls)


def parse_case_insensitive_enum(raw_value: str, enum_cls: type[EnumT]) -> EnumT:
    """Parse enum values case-insensitively and raise ValueError with allowed values."""

    normalized = raw_value.strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == normalized or member.name.lower() == normalized:
            return member

    allowed = ", ".join(enum_values(enum_cls))
    enum_name = enum_cls.__name__
    raise ValueError(f"Invalid {enum_name}: '{raw_value}'. Allowed values: {allowed}.")


def coerce_clause(clause: ClauseId | str) -> ClauseId | None:
    """Resolve a clause identifier, returning None for unrecognised input.

    ``ClauseId.UNKNOWN`` is never a lookup key, so it also resolves to None.
    """

    if isinstance(clause, ClauseId):
        return None if clause is ClauseId.UNKNOWN else clause
    if not isinstance(clause, str):
        return None

    normalized = clause.strip().lower()
    if normalized in _CLAUSE_ALIASES:
        return _CLAUSE_ALIASES[normalized]
    try:
        parsed = parse_case_insensitive_enum(normalized, ClauseId)
    except ValueError:
        return None
    return None if parsed is ClauseId.UNKNOWN else parsed


def parse_clause(raw_value: str) -> ClauseId:
    """Parse a clause identifier or raise ValueError listing the known clauses."""

    clause = coerce_clause(raw_value)
    if clause is None:
        allowed = ", ".join(value for value in enum_values(ClauseId) if value != ClauseId.UNKNOWN.value)
        raise ValueError(f"Invalid ClauseId: '{raw_value}'. Allowed values: {allowed}.")
    return clause
