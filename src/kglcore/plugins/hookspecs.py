"""Pluggy hook specifications for kglcore checkpoint extensions.

The export checkpoint performs no core checks; platform exporters attach
their own rules through ``validate_export``. ``post_checkpoint`` is a
notification fired after every checkpoint completes.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("kglcore")
hookimpl = pluggy.HookimplMarker("kglcore")


class KglHookSpec:
    """Hook specifications for the kglcore plugin system."""

    @hookspec
    def validate_export(
        self,
        modules: list[dict[str, Any]],
        taxonomies: list[dict[str, Any]],
    ) -> list[dict[str, Any]] | None:
        """Return export findings for the given items.

        Each finding is a mapping with ``message`` and optionally
        ``rule_id``, ``rule_name``, ``handle``, ``suggestion`` and
        ``severity`` (``"error"`` by default, or ``"warning"``).
        """

    @hookspec
    def post_checkpoint(
        self,
        stage: str,
        passed: bool,
        errors_found: int,
        warnings_found: int,
    ) -> None:
        """Called after a checkpoint completes, before strictness is applied."""
