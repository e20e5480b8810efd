"""VocabularyStore — immutable holder of the L1 node list and its indices.

Every index is derived from the node list at construction; nothing here
is authored independently. Lookups for absent entries return None or an
empty tuple instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from kglcore.domain.nodes import CANONICAL_NODES, Node
from kglcore.domain.types import NodeCategory


class VocabularyStore:
    """Ordered, read-only view over a fixed list of nodes."""

    def __init__(self, nodes: Iterable[Node] = CANONICAL_NODES) -> None:
        ordered = tuple(nodes)
        by_handle: dict[str, Node] = {}
        by_category: dict[NodeCategory, list[Node]] = {}
        by_glyph: dict[str, Node] = {}
        for node in ordered:
            if node.handle in by_handle:
                msg = f"Duplicate node handle: {node.handle!r}"
                raise ValueError(msg)
            by_handle[node.handle] = node
            by_category.setdefault(node.category, []).append(node)
            # First declaration wins for shared display glyphs.
            by_glyph.setdefault(node.glyph, node)

        self._nodes = ordered
        self._by_handle = by_handle
        self._by_category = {k: tuple(v) for k, v in by_category.items()}
        self._by_glyph = by_glyph
        self._modifiers = frozenset(n.handle for n in ordered if n.is_modifier)
        self._domains = frozenset(n.handle for n in ordered if n.is_domain)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __contains__(self, handle: object) -> bool:
        return handle in self._by_handle

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def handles(self) -> tuple[str, ...]:
        return tuple(n.handle for n in self._nodes)

    @property
    def modifier_handles(self) -> tuple[str, ...]:
        return tuple(n.handle for n in self._nodes if n.is_modifier)

    @property
    def domain_handles(self) -> tuple[str, ...]:
        return tuple(n.handle for n in self._nodes if n.is_domain)

    def get(self, handle: str) -> Node | None:
        """Return the node for *handle*, or None if it is not canonical."""
        return self._by_handle.get(handle)

    def get_by_glyph(self, glyph: str) -> Node | None:
        """Return the first node (declaration order) displayed with *glyph*."""
        return self._by_glyph.get(glyph)

    def list_by_category(self, category: NodeCategory | str) -> tuple[Node, ...]:
        return self._by_category.get(NodeCategory(category), ())

    def list_by_subcategory(self, subcategory: str) -> tuple[Node, ...]:
        return tuple(n for n in self._nodes if n.subcategory == subcategory)

    def is_modifier(self, handle: str) -> bool:
        return handle in self._modifiers

    def is_domain(self, handle: str) -> bool:
        return handle in self._domains

    def search(self, query: str) -> tuple[Node, ...]:
        """Case-insensitive substring search over node names and descriptions."""
        needle = query.lower()
        return tuple(
            n for n in self._nodes if needle in n.name.lower() or needle in n.description.lower()
        )
