"""SuggestionEngine — best-effort mapping from unrecognized terms to handles.

Output is advisory text for humans. Nothing downstream should parse it or
treat it as authoritative.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from kglcore.domain.types import TYPE_HANDLE
from kglcore.domain.vocabulary import VocabularyStore

SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "client": "person",
        "customer": "person",
        "user": "person",
        "staff": "person",
        "worker": "person",
        "employee": "person",
        "participant": "person",
        "beneficiary": "person",
        "appointment": "event",
        "meeting": "event",
        "visit": "event",
        "session": "event",
        "agency": "organization",
        "company": "organization",
        "provider": "organization",
        "partner": "organization",
        "firm": "organization",
        "plan": "goal",
        "objective": "goal",
        "job": "task",
        "action_item": "task",
        "note": "record",
        "document": "artifact",
        "file": "artifact",
        "location": "geography",
        "address": "geography",
        "period": "timeframe",
        "date": "timeframe",
        "score": "measurement",
        "metric": "indicator",
        "assessment": "activity",
        "referral": "activity",
        # Terms that usually split across more than one modelling choice
        "housing": "person_characteristic or person_need",
        "health": "person_characteristic or person_condition",
        "disability": "person_characteristic or person_limitation",
        "income": "resource or person_characteristic",
        "employment": "person_characteristic or person_activity",
    }
)


class SuggestionEngine:
    """Three-tier heuristic: synonym table, containment scan, fallback."""

    def __init__(
        self,
        vocabulary: VocabularyStore,
        synonyms: Mapping[str, str] = SYNONYMS,
    ) -> None:
        self._handles = vocabulary.handles
        self._synonyms = synonyms

    def suggest(self, handle: str) -> str:
        lower = handle.lower()
        if not lower:
            return self.fallback()

        target = self._synonyms.get(lower)
        if target is not None:
            return f'Map "{handle}" to canonical: {target}'

        # Declaration order decides ties between overlapping handles.
        for canonical in self._handles:
            if canonical in lower or lower in canonical:
                if canonical == TYPE_HANDLE:
                    # type_type is never generated
                    return f'Consider using "{canonical}"'
                return f'Consider using "{canonical}" or a compound like "{canonical}_type"'

        return self.fallback()

    def fallback(self) -> str:
        """Generic advice when nothing in the vocabulary resembles the input."""
        return f"Review the {len(self._handles)} canonical nodes in the vocabulary"
