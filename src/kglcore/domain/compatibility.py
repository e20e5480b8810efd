"""Modifier compatibility: two independent static relations.

(a) Modifier-on-modifier extension, read from each modifier's declared
    ``valid_extensions``. Held as a directed graph: ``A -> B`` means B may
    extend A. Asymmetric unless both directions are declared.
(b) Node-to-modifier semantic applicability, hand-curated below. This is
    narrower than grammatical validity: ``acuity`` combines with any node
    grammatically but only means something for person, case and event.

Unknown handles answer False (or an empty list), never raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

import networkx as nx

from kglcore.domain.vocabulary import VocabularyStore


_STRATEGIC = (
    "status",
    "characteristic",
    "risk",
    "capacity",
    "limitation",
    "target",
    "goal",
    "driver",
    "authority",
    "issue",
)
_PLANNED = (
    "status",
    "characteristic",
    "risk",
    "need",
    "capacity",
    "limitation",
    "target",
    "goal",
    "driver",
    "authority",
    "issue",
)
_OPERATIONAL = ("status", "characteristic", "risk", "capacity", "limitation", "driver", "issue")
_OBSERVED = ("status", "characteristic", "risk", "limitation", "driver", "issue")
_RECORDED = ("status", "characteristic", "limitation", "issue")

NODE_MODIFIER_COMPATIBILITY: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        # Domain
        "kompas": _STRATEGIC,
        "navigi": _PLANNED,
        "mareto": _STRATEGIC,
        "karto": _STRATEGIC,
        "volto": _STRATEGIC,
        # Central
        "resource": _PLANNED,
        "person": (
            "status",
            "condition",
            "characteristic",
            "role",
            "acuity",
            "risk",
            "need",
            "capacity",
            "limitation",
            "target",
            "goal",
            "driver",
            "issue",
        ),
        "insight": (
            "status",
            "characteristic",
            "risk",
            "limitation",
            "target",
            "goal",
            "driver",
            "issue",
        ),
        "outcome": ("status", "characteristic", "risk", "limitation", "target", "goal", "issue"),
        # Context
        "program": _PLANNED,
        "case": (
            "status",
            "condition",
            "characteristic",
            "acuity",
            "risk",
            "need",
            "capacity",
            "limitation",
            "issue",
        ),
        "story": (
            "status",
            "characteristic",
            "risk",
            "limitation",
            "target",
            "goal",
            "driver",
            "issue",
        ),
        "purpose": (
            "status",
            "characteristic",
            "risk",
            "capacity",
            "limitation",
            "target",
            "goal",
            "authority",
            "issue",
        ),
        # Content: temporal and structural
        "event": (
            "status",
            "condition",
            "characteristic",
            "acuity",
            "risk",
            "limitation",
            "driver",
            "issue",
        ),
        "timeframe": _RECORDED,
        "organization": (
            "status",
            "characteristic",
            "role",
            "risk",
            "need",
            "capacity",
            "limitation",
            "target",
            "goal",
            "driver",
            "authority",
            "issue",
        ),
        "geography": (
            "status",
            "characteristic",
            "risk",
            "need",
            "capacity",
            "limitation",
            "goal",
            "driver",
            "issue",
        ),
        # Content: operational
        "action": _OPERATIONAL,
        "activity": _OPERATIONAL,
        "service": (
            "status",
            "characteristic",
            "risk",
            "capacity",
            "limitation",
            "target",
            "driver",
            "issue",
        ),
        "task": (
            "status",
            "characteristic",
            "role",
            "risk",
            "capacity",
            "limitation",
            "authority",
            "issue",
        ),
        "project": _PLANNED,
        "initiative": _PLANNED,
        # Content: dynamics
        "need": (
            "status",
            "characteristic",
            "risk",
            "capacity",
            "limitation",
            "target",
            "goal",
            "driver",
            "issue",
        ),
        "risk": ("status", "characteristic", "capacity", "limitation", "driver", "issue"),
        "acuity": _OBSERVED,
        "target": (
            "status",
            "characteristic",
            "risk",
            "capacity",
            "limitation",
            "goal",
            "driver",
            "issue",
        ),
        "goal": (
            "status",
            "characteristic",
            "risk",
            "capacity",
            "limitation",
            "target",
            "driver",
            "issue",
        ),
        "driver": ("status", "characteristic", "risk", "capacity", "limitation", "issue"),
        "authority": (
            "status",
            "characteristic",
            "role",
            "risk",
            "capacity",
            "limitation",
            "driver",
            "issue",
        ),
        "issue": ("status", "characteristic", "risk", "capacity", "limitation", "driver"),
        # Content: data and measurement
        "indicator": _OBSERVED,
        "measurement": _OBSERVED,
        "record": _RECORDED,
        "model": _OPERATIONAL,
        "data": _RECORDED,
        "artifact": _RECORDED,
        "complexity": _OBSERVED,
    }
)


class ModifierCompatibilityMatrix:
    """Query surface over both compatibility relations."""

    def __init__(
        self,
        vocabulary: VocabularyStore,
        node_modifiers: Mapping[str, tuple[str, ...]] = NODE_MODIFIER_COMPATIBILITY,
    ) -> None:
        self._extensions = self._build_extension_graph(vocabulary)
        self._node_modifiers = {node: frozenset(mods) for node, mods in node_modifiers.items()}
        self._node_modifier_order = dict(node_modifiers)

    @staticmethod
    def _build_extension_graph(vocabulary: VocabularyStore) -> nx.DiGraph:
        g: nx.DiGraph = nx.DiGraph()
        for node in vocabulary:
            if not node.is_modifier:
                continue
            g.add_node(node.handle)
            for extension in node.valid_extensions:
                g.add_edge(node.handle, extension)
        return nx.freeze(g)

    # --- (a) modifier-on-modifier ---

    def is_modifier_on_modifier_valid(self, base: str, extension: str) -> bool:
        """True if *extension* is declared as a valid extension of *base*."""
        return self._extensions.has_edge(base, extension)

    def valid_extensions(self, modifier: str) -> list[str]:
        """Declared extensions of *modifier* in declaration order."""
        if modifier not in self._extensions:
            return []
        return list(self._extensions.successors(modifier))

    # --- (b) node-to-modifier ---

    def is_modifier_valid_for_node(self, node: str, modifier: str) -> bool:
        """True if *modifier* is semantically meaningful for *node*."""
        allowed = self._node_modifiers.get(node)
        if allowed is None:
            return False
        return modifier in allowed

    def get_valid_modifiers_for_node(self, node: str) -> list[str]:
        return list(self._node_modifier_order.get(node, ()))
