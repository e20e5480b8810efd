"""Tests for CompoundGenerator — L2 compound and taxonomy derivation."""

from __future__ import annotations

import itertools

from kglcore.domain.generator import CompoundGenerator, GeneratedVocabulary, type_taxonomy_handle
from kglcore.domain.types import NodeCategory
from kglcore.domain.vocabulary import VocabularyStore
from tests.conftest import make_node


def _generate(nodes=None) -> GeneratedVocabulary:
    store = VocabularyStore() if nodes is None else VocabularyStore(nodes)
    return CompoundGenerator(store).generate()


class TestCanonicalGeneration:
    def test_compound_count_is_full_directed_product(self) -> None:
        generated = _generate()
        # 40 non-Domain nodes -> 40 * 39 ordered pairs
        assert len(generated.compounds) == 40 * 39

    def test_taxonomy_count(self) -> None:
        generated = _generate()
        # 44 node taxonomies (all but "type") plus one per compound
        assert len(generated.taxonomies) == 44 + 40 * 39

    def test_every_ordered_pair_present(self) -> None:
        store = VocabularyStore()
        generated = CompoundGenerator(store).generate()
        eligible = [n.handle for n in store if not n.is_domain]
        for a, b in itertools.permutations(eligible, 2):
            assert generated.is_compound(f"{a}_{b}")

    def test_direction_matters(self) -> None:
        generated = _generate()
        forward = generated.compound("person_case")
        backward = generated.compound("case_person")
        assert forward is not None and backward is not None
        assert forward != backward
        assert forward.semantic_meaning == "Person related to Case"
        assert backward.semantic_meaning == "Case related to Person"

    def test_no_self_compounds(self) -> None:
        generated = _generate()
        assert all(c.handle_a != c.handle_b for c in generated.compounds)
        assert not generated.is_compound("person_person")

    def test_no_domain_compounds(self) -> None:
        store = VocabularyStore()
        generated = CompoundGenerator(store).generate()
        domains = set(store.domain_handles)
        for compound in generated.compounds:
            assert compound.handle_a not in domains
            assert compound.handle_b not in domains

    def test_type_never_classifies_itself(self) -> None:
        generated = _generate()
        assert not generated.is_taxonomy("type_type")
        assert not generated.is_compound("type_type")
        assert generated.taxonomy("type_status_type") is not None

    def test_every_node_but_type_has_taxonomy(self) -> None:
        store = VocabularyStore()
        generated = CompoundGenerator(store).generate()
        for node in store:
            assert generated.has_type_taxonomy(node.handle) == (node.handle != "type")

    def test_every_compound_has_taxonomy(self) -> None:
        generated = _generate()
        for compound in generated.compounds:
            assert generated.is_taxonomy(compound.type_handle)

    def test_compound_fields(self) -> None:
        compound = _generate().compound("event_status")
        assert compound is not None
        assert compound.handle_a == "event"
        assert compound.handle_b == "status"
        assert compound.glyph == compound.glyph_a + compound.glyph_b
        assert compound.type_handle == "event_status_type"
        assert compound.type_link == "event_status-event_status_type"

    def test_node_taxonomy_fields(self) -> None:
        taxonomy = _generate().taxonomy("person_type")
        assert taxonomy is not None
        assert taxonomy.parent == "person"
        assert taxonomy.name == "Person Type"
        assert taxonomy.glyph == "◎Ϡ"
        assert taxonomy.category == NodeCategory.CENTRAL
        assert taxonomy.description.endswith(" classification")

    def test_compound_taxonomy_inherits_first_component_category(self) -> None:
        taxonomy = _generate().taxonomy("status_person_type")
        assert taxonomy is not None
        assert taxonomy.parent == "status_person"
        assert taxonomy.category == NodeCategory.MODIFIER
        assert taxonomy.name == "Status related to Person Type"
        assert taxonomy.description == "Classification for Status related to Person"

    def test_node_taxonomies_come_first(self) -> None:
        generated = _generate()
        first = generated.taxonomies[:44]
        assert all("_" not in t.parent for t in first)
        assert generated.taxonomies[44].parent == generated.compounds[0].handle

    def test_handle_shared_by_compound_and_taxonomy(self) -> None:
        # "person_type" is both the person node's taxonomy and the compound person+type
        generated = _generate()
        assert generated.is_compound("person_type")
        assert generated.is_taxonomy("person_type")
        assert generated.is_taxonomy("person_type_type")

    def test_type_taxonomy_handle(self) -> None:
        assert type_taxonomy_handle("case_event") == "case_event_type"


class TestDeterminism:
    def test_regeneration_is_identical(self) -> None:
        store = VocabularyStore()
        first = CompoundGenerator(store).generate()
        second = CompoundGenerator(store).generate()
        assert first == second
        assert [c.handle for c in first.compounds] == [c.handle for c in second.compounds]
        assert [t.handle for t in first.taxonomies] == [t.handle for t in second.taxonomies]

    def test_no_duplicate_handles(self) -> None:
        generated = _generate()
        compound_handles = [c.handle for c in generated.compounds]
        taxonomy_handles = [t.handle for t in generated.taxonomies]
        assert len(compound_handles) == len(set(compound_handles))
        assert len(taxonomy_handles) == len(set(taxonomy_handles))

    def test_fresh_vocabularies_are_independent(self) -> None:
        small = _generate(
            [make_node("alpha"), make_node("beta"), make_node("type", NodeCategory.MODIFIER)]
        )
        assert len(small.compounds) == 6
        assert len(_generate().compounds) == 1560


class TestCustomVocabularies:
    def test_extension_adds_pair_missing_from_product(self) -> None:
        nodes = [
            make_node("alpha", NodeCategory.MODIFIER, valid_extensions=("realm",)),
            make_node("realm", NodeCategory.DOMAIN),
            make_node("type", NodeCategory.MODIFIER, glyph="T"),
        ]
        generated = _generate(nodes)
        compound = generated.compound("alpha_realm")
        assert compound is not None
        assert compound.semantic_meaning == "Realm of a Alpha"
        assert not generated.is_compound("realm_alpha")
        assert generated.is_taxonomy("alpha_realm_type")

    def test_extension_already_in_product_not_duplicated(self) -> None:
        nodes = [
            make_node("alpha", NodeCategory.MODIFIER, valid_extensions=("beta",)),
            make_node("beta", NodeCategory.MODIFIER),
        ]
        generated = _generate(nodes)
        handles = [c.handle for c in generated.compounds]
        assert handles == ["alpha_beta", "beta_alpha"]
        assert generated.compound("alpha_beta").semantic_meaning == "Alpha related to Beta"

    def test_unknown_and_self_extensions_skipped(self) -> None:
        nodes = [make_node("alpha", NodeCategory.MODIFIER, valid_extensions=("ghost", "alpha"))]
        generated = _generate(nodes)
        assert generated.compounds == ()

    def test_no_type_node_means_no_taxonomies(self) -> None:
        generated = _generate([make_node("alpha"), make_node("beta")])
        assert len(generated.compounds) == 2
        assert generated.taxonomies == ()

    def test_empty_vocabulary(self) -> None:
        generated = _generate([])
        assert generated.compounds == ()
        assert generated.taxonomies == ()
