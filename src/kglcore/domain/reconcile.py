"""Label reconciliation helpers for external graph stores.

A graph store tags each node label with a display glyph and a handle.
These helpers decide whether the tags are canonical and what they should
be. They hold no connection or transaction state: the caller fetches
rows, passes them in, and applies any updates itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from kglcore.domain.vocabulary import VocabularyStore

# Glyphs and handles that show up in legacy data but are not canonical.
INVALID_MAPPINGS: Mapping[str, str] = MappingProxyType(
    {
        "⌘": "Use ᚪ (geography) instead",
        "⊕": "Use ⟡ (measurement) instead",
        "⊞": "Use ⌖ (data) instead",
        "⚖": "Use ⟦ (record) or ᚠ (artifact) instead",
        "⊛": "Use ᚴ (organization) instead",
        "◈": "Use ⊙ (insight) instead",
        "⎔": "Use ▣ (program) instead",
        "ᛉ": "Use ◎ (person) instead",
        "⊡": "Not in KGL v1.3 - use appropriate node",
        "location": "Use geography instead",
        "metric": "Use measurement instead",
        "dataset": "Use data instead",
        "evidence": "Use record or artifact instead",
        "asset": "Use organization instead",
        "category": "Use type instead for classification, or indicator for KPIs",
        "context": "Not in KGL v1.3 - use case, story, or program",
    }
)

# Lowercased graph label -> canonical handle. Labels equal to a canonical
# handle resolve directly and need no entry.
LABEL_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "location": "geography",
        "place": "geography",
        "region": "geography",
        "client": "person",
        "user": "person",
        "individual": "person",
        "org": "organization",
        "agency": "organization",
        "provider": "organization",
        "facility": "organization",
        "healthcarefacility": "organization",
        "socialservice": "service",
        "intervention": "service",
        "encounter": "event",
        "healthencounter": "event",
        "appointment": "event",
        "healthmeasurement": "measurement",
        "assessment": "measurement",
        "metric": "measurement",
        "kpi": "indicator",
        "result": "outcome",
        "impact": "outcome",
        "grant": "resource",
        "funding": "resource",
        "benefit": "resource",
        "payment": "resource",
        "money": "resource",
        "period": "timeframe",
        "duration": "timeframe",
        "validation": "record",
        "datasource": "data",
        "dataset": "data",
        "context": "case",
        "problem": "issue",
        "tpurposetype": "type",
        "category": "type",
    }
)


@dataclass(frozen=True)
class MappingSuggestion:
    handle: str
    glyph: str


@dataclass(frozen=True)
class TagCheck:
    """Outcome of checking a glyph, a handle, or a glyph/handle pair."""

    valid: bool
    error: str | None = None
    handle: str | None = None
    glyph: str | None = None


@dataclass(frozen=True)
class LabelReconciliation:
    """Current versus suggested tags for one graph label."""

    label: str
    count: int
    current_glyph: str | None
    current_handle: str | None
    suggested_glyph: str | None
    suggested_handle: str | None
    is_valid: bool
    error: str | None = None

    @property
    def has_suggestion(self) -> bool:
        return self.suggested_glyph is not None and self.suggested_handle is not None

    @property
    def needs_update(self) -> bool:
        """True when a suggestion exists and differs from the current tags."""
        if not self.has_suggestion:
            return False
        return (
            self.current_glyph != self.suggested_glyph
            or self.current_handle != self.suggested_handle
        )


class LabelReconciler:
    """Pure glyph/handle checks against the canonical node list."""

    def __init__(
        self,
        vocabulary: VocabularyStore,
        label_synonyms: Mapping[str, str] = LABEL_SYNONYMS,
        invalid_mappings: Mapping[str, str] = INVALID_MAPPINGS,
    ) -> None:
        self._vocabulary = vocabulary
        self._label_synonyms = label_synonyms
        self._invalid = invalid_mappings

    def suggest_mapping(self, label: str) -> MappingSuggestion | None:
        lower = label.lower()
        handle = lower if lower in self._vocabulary else self._label_synonyms.get(lower)
        if handle is None:
            return None
        node = self._vocabulary.get(handle)
        if node is None:
            return None
        return MappingSuggestion(handle=node.handle, glyph=node.glyph)

    def validate_glyph(self, glyph: str) -> TagCheck:
        if glyph in self._invalid:
            return TagCheck(valid=False, error=f"Invalid glyph '{glyph}': {self._invalid[glyph]}")
        node = self._vocabulary.get_by_glyph(glyph)
        if node is None:
            return TagCheck(valid=False, error=f"Unknown glyph '{glyph}' - not in KGL v1.3")
        return TagCheck(valid=True, handle=node.handle, glyph=glyph)

    def validate_handle(self, handle: str) -> TagCheck:
        if handle in self._invalid:
            return TagCheck(
                valid=False, error=f"Invalid handle '{handle}': {self._invalid[handle]}"
            )
        node = self._vocabulary.get(handle)
        if node is None:
            return TagCheck(valid=False, error=f"Unknown handle '{handle}' - not in KGL v1.3")
        return TagCheck(valid=True, handle=handle, glyph=node.glyph)

    def validate_handle_glyph_pair(self, glyph: str, handle: str) -> TagCheck:
        node = self._vocabulary.get(handle)
        if node is None:
            return TagCheck(valid=False, error=f"Unknown handle '{handle}'")
        if node.glyph != glyph:
            return TagCheck(
                valid=False,
                error=(
                    f"Glyph mismatch for '{handle}': found '{glyph}', expected '{node.glyph}'"
                ),
            )
        return TagCheck(valid=True, handle=handle, glyph=glyph)

    def reconcile(
        self,
        label: str,
        current_glyph: str | None = None,
        current_handle: str | None = None,
        count: int = 0,
    ) -> LabelReconciliation:
        suggestion = self.suggest_mapping(label)

        check = TagCheck(valid=True)
        if current_glyph and current_handle:
            check = self.validate_handle_glyph_pair(current_glyph, current_handle)
        elif current_glyph:
            check = self.validate_glyph(current_glyph)
        elif current_handle:
            check = self.validate_handle(current_handle)

        return LabelReconciliation(
            label=label,
            count=count,
            current_glyph=current_glyph,
            current_handle=current_handle,
            suggested_glyph=suggestion.glyph if suggestion else None,
            suggested_handle=suggestion.handle if suggestion else None,
            is_valid=check.valid,
            error=check.error,
        )

    def reconcile_labels(self, rows: Iterable[Mapping[str, Any]]) -> list[LabelReconciliation]:
        """Reconcile ``{label, current_glyph, current_handle, count}`` rows in order."""
        return [
            self.reconcile(
                row["label"],
                current_glyph=row.get("current_glyph"),
                current_handle=row.get("current_handle"),
                count=int(row.get("count", 0)),
            )
            for row in rows
        ]
