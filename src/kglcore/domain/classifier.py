"""HandleClassifier — decides which generative level a string belongs to.

Priority order, first match wins:

1. L1 node handle
2. L2 compound handle
3. L2 type taxonomy handle
4. L3 sub-taxonomy: contains ``_type_`` and the part before its first
   occurrence is an L1 or L2 compound handle
5. invalid, with a suggestion

Exact matches come before the ``_type_`` substring test so a generated
handle that happens to contain ``_type_`` is never reported as L3.

L3 checks only the immediate parent segment; deeper ancestry and depth
are not enforced here (the build checkpoint warns on depth).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from kglcore.domain.generator import GeneratedVocabulary
from kglcore.domain.suggestions import SuggestionEngine
from kglcore.domain.types import (
    HANDLE_SEPARATOR,
    SUBTAXONOMY_MARKER,
    HandleLevel,
    NodeCategory,
)
from kglcore.domain.vocabulary import VocabularyStore

_BAD_FORMAT = "Not a valid compound format. Compounds must have format A_B."


@dataclass(frozen=True)
class HandleValidation:
    """Classification of a single handle."""

    handle: str
    is_valid: bool
    level: HandleLevel | None = None
    category: NodeCategory | None = None  # L1 only
    error: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class HandleBatchValidation:
    """Partition of a batch into valid handles and invalid results."""

    valid: list[str] = field(default_factory=list)
    invalid: list[HandleValidation] = field(default_factory=list)


@dataclass(frozen=True)
class CompoundAnalysis:
    """Decomposition of a compound handle into its components."""

    handle: str
    is_valid_compound: bool
    handle_a: str | None = None
    handle_b: str | None = None
    glyph_a: str | None = None
    glyph_b: str | None = None
    semantic_meaning: str | None = None
    type_link: str | None = None
    error: str | None = None


class HandleClassifier:
    """Classify handles against a vocabulary and its generated L2 set."""

    def __init__(
        self,
        vocabulary: VocabularyStore,
        generated: GeneratedVocabulary,
        suggestions: SuggestionEngine,
    ) -> None:
        self._vocabulary = vocabulary
        self._generated = generated
        self._suggestions = suggestions

    def classify(self, handle: str) -> HandleValidation:
        node = self._vocabulary.get(handle)
        if node is not None:
            return HandleValidation(
                handle=handle, is_valid=True, level=HandleLevel.L1, category=node.category
            )

        if self._generated.is_compound(handle):
            return HandleValidation(handle=handle, is_valid=True, level=HandleLevel.L2_COMPOUND)

        if self._generated.is_taxonomy(handle):
            return HandleValidation(handle=handle, is_valid=True, level=HandleLevel.L2_TAXONOMY)

        if self.is_subtaxonomy(handle):
            return HandleValidation(
                handle=handle, is_valid=True, level=HandleLevel.L3_SUBTAXONOMY
            )

        return HandleValidation(
            handle=handle,
            is_valid=False,
            error=f'"{handle}" is not a canonical KGL handle',
            suggestion=self._suggestions.suggest(handle),
        )

    def classify_many(self, handles: list[str]) -> HandleBatchValidation:
        """Classify each handle; invalid errors are prefixed with the handle."""
        batch = HandleBatchValidation()
        for handle in handles:
            result = self.classify(handle)
            if result.is_valid:
                batch.valid.append(handle)
            else:
                batch.invalid.append(replace(result, error=f"{handle}: {result.error}"))
        return batch

    def is_subtaxonomy(self, handle: str) -> bool:
        """True if *handle* matches ``<L1 or compound>_type_<anything>``."""
        parent, marker, _ = handle.partition(SUBTAXONOMY_MARKER)
        if not marker:
            return False
        return parent in self._vocabulary or self._generated.is_compound(parent)

    def is_canonical(self, handle: str) -> bool:
        return handle in self._vocabulary

    def analyze_compound(self, handle: str) -> CompoundAnalysis:
        compound = self._generated.compound(handle)
        if compound is None:
            if HANDLE_SEPARATOR not in handle:
                return CompoundAnalysis(handle=handle, is_valid_compound=False, error=_BAD_FORMAT)
            return CompoundAnalysis(
                handle=handle,
                is_valid_compound=False,
                error=(
                    f'Compound "{handle}" not found in generated compounds. '
                    "Check that both component handles are canonical."
                ),
            )
        return CompoundAnalysis(
            handle=handle,
            is_valid_compound=True,
            handle_a=compound.handle_a,
            handle_b=compound.handle_b,
            glyph_a=compound.glyph_a,
            glyph_b=compound.glyph_b,
            semantic_meaning=compound.semantic_meaning,
            type_link=compound.type_link,
        )
