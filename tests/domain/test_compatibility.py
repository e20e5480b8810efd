"""Tests for ModifierCompatibilityMatrix."""

from __future__ import annotations

from kglcore.domain.compatibility import NODE_MODIFIER_COMPATIBILITY, ModifierCompatibilityMatrix
from kglcore.domain.types import NodeCategory
from kglcore.domain.vocabulary import VocabularyStore
from tests.conftest import make_node


def _matrix() -> ModifierCompatibilityMatrix:
    return ModifierCompatibilityMatrix(VocabularyStore())


class TestNodeModifierCompatibility:
    def test_person_condition_valid(self) -> None:
        assert _matrix().is_modifier_valid_for_node("person", "condition")

    def test_record_condition_invalid(self) -> None:
        assert not _matrix().is_modifier_valid_for_node("record", "condition")

    def test_acuity_restricted(self) -> None:
        matrix = _matrix()
        allowed = {n for n, mods in NODE_MODIFIER_COMPATIBILITY.items() if "acuity" in mods}
        assert allowed == {"person", "case", "event"}
        assert not matrix.is_modifier_valid_for_node("organization", "acuity")

    def test_unknown_node_is_false_not_error(self) -> None:
        assert not _matrix().is_modifier_valid_for_node("spaceship", "status")

    def test_unknown_modifier_is_false(self) -> None:
        assert not _matrix().is_modifier_valid_for_node("person", "mood")

    def test_valid_modifiers_for_node_ordered(self) -> None:
        mods = _matrix().get_valid_modifiers_for_node("timeframe")
        assert mods == ["status", "characteristic", "limitation", "issue"]

    def test_valid_modifiers_for_unknown_node(self) -> None:
        assert _matrix().get_valid_modifiers_for_node("spaceship") == []

    def test_table_covers_every_non_modifier_node(self) -> None:
        store = VocabularyStore()
        for node in store:
            if node.is_modifier:
                continue
            assert node.handle in NODE_MODIFIER_COMPATIBILITY

    def test_status_always_allowed(self) -> None:
        assert all("status" in mods for mods in NODE_MODIFIER_COMPATIBILITY.values())


class TestModifierExtensions:
    def test_declared_extension(self) -> None:
        assert _matrix().is_modifier_on_modifier_valid("type", "status")

    def test_asymmetric_by_default(self) -> None:
        matrix = _matrix()
        assert matrix.is_modifier_on_modifier_valid("type", "status")
        assert not matrix.is_modifier_on_modifier_valid("status", "type")

    def test_symmetric_when_both_declared(self) -> None:
        matrix = _matrix()
        assert matrix.is_modifier_on_modifier_valid("status", "condition")
        assert matrix.is_modifier_on_modifier_valid("condition", "status")

    def test_no_self_extension(self) -> None:
        assert not _matrix().is_modifier_on_modifier_valid("role", "role")

    def test_unknown_handles(self) -> None:
        matrix = _matrix()
        assert not matrix.is_modifier_on_modifier_valid("ghost", "status")
        assert not matrix.is_modifier_on_modifier_valid("status", "ghost")

    def test_valid_extensions_declaration_order(self) -> None:
        assert _matrix().valid_extensions("status") == [
            "condition",
            "characteristic",
            "role",
            "capacity",
            "limitation",
        ]

    def test_valid_extensions_unknown(self) -> None:
        assert _matrix().valid_extensions("person") == []
        assert _matrix().valid_extensions("ghost") == []

    def test_non_modifier_extensions_ignored(self) -> None:
        node = make_node("alpha", NodeCategory.CONTENT, valid_extensions=("beta",))
        store = VocabularyStore([node])
        matrix = ModifierCompatibilityMatrix(store)
        assert not matrix.is_modifier_on_modifier_valid("alpha", "beta")

    def test_custom_node_table(self) -> None:
        matrix = ModifierCompatibilityMatrix(VocabularyStore(), {"person": ("role",)})
        assert matrix.is_modifier_valid_for_node("person", "role")
        assert not matrix.is_modifier_valid_for_node("person", "status")
        assert not matrix.is_modifier_valid_for_node("case", "status")
