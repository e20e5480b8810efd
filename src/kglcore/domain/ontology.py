"""Ontology — the immutable vocabulary context assembled once at bootstrap.

Every consumer receives the same :class:`Ontology` by reference. There are
no module-level registries: tests build fresh ontologies from custom node
or rule lists through :func:`build_ontology`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from kglcore.domain.classifier import HandleClassifier
from kglcore.domain.compatibility import NODE_MODIFIER_COMPATIBILITY, ModifierCompatibilityMatrix
from kglcore.domain.generator import CompoundGenerator, GeneratedVocabulary
from kglcore.domain.nodes import CANONICAL_NODES, Node
from kglcore.domain.reconcile import LabelReconciler
from kglcore.domain.rules import UNIVERSAL_RULES, Rule, RuleCatalog
from kglcore.domain.suggestions import SYNONYMS, SuggestionEngine
from kglcore.domain.vocabulary import VocabularyStore


@dataclass(frozen=True)
class Ontology:
    """Read-only bundle of every vocabulary structure."""

    vocabulary: VocabularyStore
    generated: GeneratedVocabulary
    compatibility: ModifierCompatibilityMatrix
    suggestions: SuggestionEngine
    classifier: HandleClassifier
    rules: RuleCatalog
    reconciler: LabelReconciler

    def known_handles(self) -> frozenset[str]:
        """L1 handles plus generated compounds and taxonomies."""
        return (
            frozenset(self.vocabulary.handles)
            | self.generated.compound_handles
            | self.generated.taxonomy_handles
        )


def build_ontology(
    nodes: Iterable[Node] = CANONICAL_NODES,
    rules: Iterable[Rule] = UNIVERSAL_RULES,
    *,
    node_modifiers: Mapping[str, tuple[str, ...]] = NODE_MODIFIER_COMPATIBILITY,
    synonyms: Mapping[str, str] = SYNONYMS,
) -> Ontology:
    """Derive every structure from the given source lists, in dependency order."""
    vocabulary = VocabularyStore(nodes)
    generated = CompoundGenerator(vocabulary).generate()
    suggestions = SuggestionEngine(vocabulary, synonyms)
    return Ontology(
        vocabulary=vocabulary,
        generated=generated,
        compatibility=ModifierCompatibilityMatrix(vocabulary, node_modifiers),
        suggestions=suggestions,
        classifier=HandleClassifier(vocabulary, generated, suggestions),
        rules=RuleCatalog(rules),
        reconciler=LabelReconciler(vocabulary),
    )
