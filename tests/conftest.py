"""Shared pytest fixtures and test helpers for kglcore tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from kglcore.domain.nodes import Node
from kglcore.domain.ontology import Ontology, build_ontology
from kglcore.domain.types import NodeCategory
from kglcore.services.gateway import ValidationGateway
from kglcore.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(scope="session")
def ontology() -> Ontology:
    """Canonical ontology, built once; it is immutable so sharing is safe."""
    return build_ontology()


@pytest.fixture
def gateway(ontology: Ontology) -> ValidationGateway:
    """Fresh gateway in report mode over the shared ontology."""
    return ValidationGateway(ontology)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


def make_node(
    handle: str,
    category: NodeCategory = NodeCategory.CONTENT,
    *,
    glyph: str | None = None,
    valid_extensions: tuple[str, ...] = (),
) -> Node:
    """Small node for hand-built vocabularies."""
    return Node(
        handle=handle,
        name=handle.capitalize(),
        glyph=glyph or handle[:1].upper(),
        category=category,
        description=f"{handle} description",
        valid_extensions=valid_extensions,
    )
