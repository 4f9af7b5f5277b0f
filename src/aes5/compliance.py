"""Clause-by-clause AES5-2018 compliance lookups."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .frequency_contract import CLAUSE_BY_FREQUENCY, STANDARD_FREQUENCIES, ClauseId
from .options import coerce_clause

_EMPTY: frozenset[int] = frozenset()


def _build_clause_frequency_map() -> Mapping[ClauseId, frozenset[int]]:
    grouped: dict[ClauseId, set[int]] = {}
    for entry in STANDARD_FREQUENCIES:
        grouped.setdefault(entry.clause, set()).add(entry.nominal_frequency_hz)
    return MappingProxyType({clause: frozenset(members) for clause, members in grouped.items()})


CLAUSE_FREQUENCY_MAP = _build_clause_frequency_map()
ALL_SUPPORTED_FREQUENCIES: frozenset[int] = frozenset().union(*CLAUSE_FREQUENCY_MAP.values())


class ComplianceEngine:
    """Answer whether a frequency satisfies a given AES5-2018 clause.

    The engine is stateless; every instance reads the same immutable table, so
    instances are safe to share across threads.
    """

    __slots__ = ()

    def verify_clause_compliance(self, frequency: int, clause: ClauseId | str) -> bool:
        if frequency <= 0:
            return False
        return frequency in self.get_supported_frequencies(clause)

    def get_supported_frequencies(self, clause: ClauseId | str) -> frozenset[int]:
        resolved = coerce_clause(clause)
        if resolved is None:
            return _EMPTY
        return CLAUSE_FREQUENCY_MAP.get(resolved, _EMPTY)

    def is_clause_supported(self, clause: ClauseId | str) -> bool:
        resolved = coerce_clause(clause)
        return resolved is not None and resolved in CLAUSE_FREQUENCY_MAP

    def attribute_clause(self, frequency: int) -> ClauseId:
        """Return the single clause ``frequency`` belongs to, or ``UNKNOWN``."""

        return CLAUSE_BY_FREQUENCY.get(frequency, ClauseId.UNKNOWN)

    def all_supported_frequencies(self) -> frozenset[int]:
        """Union of every clause's frequencies."""

        return ALL_SUPPORTED_FREQUENCIES

    def supported_clauses(self) -> tuple[ClauseId, ...]:
        return tuple(clause for clause in ClauseId if clause in CLAUSE_FREQUENCY_MAP)
