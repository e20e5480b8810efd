"""CompoundGenerator — derives the L2 vocabulary from the L1 node list.

Generation runs as a strictly ordered pipeline:

1. Node type taxonomies: ``<node>_type`` for every node except ``type``
   itself (R04: type cannot classify itself).
2. Compounds: the full directed product of distinct non-Domain nodes
   (R02/R05/R12), then modifier-on-modifier pairs declared through
   ``valid_extensions`` that the product did not already cover.
3. Compound type taxonomies: ``<compound>_type`` for every compound,
   skipping handles already emitted in phase 1.

Phase 3 reads its category from the compound's first component, so it
must run after both earlier phases. Each phase deduplicates by set
membership, which makes regeneration idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from kglcore.domain.nodes import Node
from kglcore.domain.types import HANDLE_SEPARATOR, TYPE_HANDLE, TYPE_SUFFIX, NodeCategory
from kglcore.domain.vocabulary import VocabularyStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Compound:
    """Directed pairing ``A_B`` of two distinct non-Domain nodes."""

    handle_a: str
    glyph_a: str
    handle_b: str
    glyph_b: str
    handle: str
    glyph: str
    semantic_meaning: str

    @property
    def type_handle(self) -> str:
        return f"{self.handle}{TYPE_SUFFIX}"

    @property
    def type_link(self) -> str:
        """Field reference from the compound to its taxonomy (R07/R08)."""
        return f"{self.handle}-{self.type_handle}"


@dataclass(frozen=True)
class TypeTaxonomy:
    """Classification companion of a node or compound."""

    handle: str
    name: str
    glyph: str
    parent: str
    category: NodeCategory
    description: str


def type_taxonomy_handle(handle: str) -> str:
    """Taxonomy handle for a node or compound handle."""
    return f"{handle}{TYPE_SUFFIX}"


class GeneratedVocabulary:
    """Read-only result of one generation run, in emission order."""

    def __init__(
        self,
        compounds: tuple[Compound, ...],
        taxonomies: tuple[TypeTaxonomy, ...],
    ) -> None:
        self._compounds = compounds
        self._taxonomies = taxonomies
        self._compound_index = {c.handle: c for c in compounds}
        self._taxonomy_index = {t.handle: t for t in taxonomies}

    @property
    def compounds(self) -> tuple[Compound, ...]:
        return self._compounds

    @property
    def taxonomies(self) -> tuple[TypeTaxonomy, ...]:
        return self._taxonomies

    @property
    def compound_handles(self) -> frozenset[str]:
        return frozenset(self._compound_index)

    @property
    def taxonomy_handles(self) -> frozenset[str]:
        return frozenset(self._taxonomy_index)

    def compound(self, handle: str) -> Compound | None:
        return self._compound_index.get(handle)

    def taxonomy(self, handle: str) -> TypeTaxonomy | None:
        return self._taxonomy_index.get(handle)

    def is_compound(self, handle: str) -> bool:
        return handle in self._compound_index

    def is_taxonomy(self, handle: str) -> bool:
        return handle in self._taxonomy_index

    def has_type_taxonomy(self, handle: str) -> bool:
        return type_taxonomy_handle(handle) in self._taxonomy_index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneratedVocabulary):
            return NotImplemented
        return self._compounds == other._compounds and self._taxonomies == other._taxonomies

    def __hash__(self) -> int:
        return hash((self._compounds, self._taxonomies))


class CompoundGenerator:
    """Deterministic generator over a :class:`VocabularyStore`."""

    def __init__(self, vocabulary: VocabularyStore) -> None:
        self._vocabulary = vocabulary

    def generate(self) -> GeneratedVocabulary:
        """Run all three phases and return the frozen result."""
        type_node = self._vocabulary.get(TYPE_HANDLE)

        node_taxonomies = list(self._node_type_taxonomies(type_node))
        compounds = self._compounds()

        seen = {t.handle for t in node_taxonomies}
        compound_taxonomies: list[TypeTaxonomy] = []
        for taxonomy in self._compound_type_taxonomies(compounds, type_node):
            if taxonomy.handle in seen:
                continue
            seen.add(taxonomy.handle)
            compound_taxonomies.append(taxonomy)

        result = GeneratedVocabulary(
            compounds=tuple(compounds),
            taxonomies=(*node_taxonomies, *compound_taxonomies),
        )
        logger.debug(
            "Generated vocabulary: %d nodes, %d compounds, %d taxonomies",
            len(self._vocabulary),
            len(result.compounds),
            len(result.taxonomies),
        )
        return result

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _node_type_taxonomies(self, type_node: Node | None) -> Iterator[TypeTaxonomy]:
        if type_node is None:
            return
        for node in self._vocabulary:
            if node.handle == TYPE_HANDLE:
                continue
            yield TypeTaxonomy(
                handle=type_taxonomy_handle(node.handle),
                name=f"{node.name} Type",
                glyph=f"{node.glyph}{type_node.glyph}",
                parent=node.handle,
                category=node.category,
                description=f"{node.description} classification",
            )

    def _compounds(self) -> list[Compound]:
        eligible = [n for n in self._vocabulary if not n.is_domain]
        compounds: list[Compound] = []
        emitted: set[str] = set()

        for node_a in eligible:
            for node_b in eligible:
                if node_a.handle == node_b.handle:
                    continue
                compound = _make_compound(node_a, node_b, f"{node_a.name} related to {node_b.name}")
                compounds.append(compound)
                emitted.add(compound.handle)

        for node_a in self._vocabulary:
            if not node_a.is_modifier:
                continue
            for extension in node_a.valid_extensions:
                node_b = self._vocabulary.get(extension)
                if node_b is None or node_b.handle == node_a.handle:
                    logger.debug("Skipping extension %s of %s", extension, node_a.handle)
                    continue
                compound = _make_compound(node_a, node_b, f"{node_b.name} of a {node_a.name}")
                if compound.handle in emitted:
                    continue
                compounds.append(compound)
                emitted.add(compound.handle)

        return compounds

    def _compound_type_taxonomies(
        self,
        compounds: list[Compound],
        type_node: Node | None,
    ) -> Iterator[TypeTaxonomy]:
        if type_node is None:
            return
        for compound in compounds:
            parent_node = self._vocabulary.get(compound.handle_a)
            if parent_node is None:
                continue
            yield TypeTaxonomy(
                handle=compound.type_handle,
                name=f"{compound.semantic_meaning} Type",
                glyph=f"{compound.glyph}{type_node.glyph}",
                parent=compound.handle,
                category=parent_node.category,
                description=f"Classification for {compound.semantic_meaning}",
            )


def _make_compound(node_a: Node, node_b: Node, semantic_meaning: str) -> Compound:
    return Compound(
        handle_a=node_a.handle,
        glyph_a=node_a.glyph,
        handle_b=node_b.handle,
        glyph_b=node_b.glyph,
        handle=f"{node_a.handle}{HANDLE_SEPARATOR}{node_b.handle}",
        glyph=f"{node_a.glyph}{node_b.glyph}",
        semantic_meaning=semantic_meaning,
    )
