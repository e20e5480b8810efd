"""Typed payload contracts for the validation gateway.

Checkpoint and report models are frozen; callers receive them by value
and may serialize them with ``model_dump``. Input items are validated on
the way in so a missing ``handle`` fails fast instead of deep inside a
stage check.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class CheckpointStage(StrEnum):
    """Pipeline stages, in execution order."""

    INGEST = "ingest"
    EXTRACT = "extract"
    MAP = "map"
    BUILD = "build"
    EXPORT = "export"


# Stages with substantive checks, run by ``validate_all``.
VALIDATED_STAGES: tuple[CheckpointStage, ...] = (
    CheckpointStage.MAP,
    CheckpointStage.BUILD,
    CheckpointStage.EXPORT,
)


class ModuleItem(BaseModel):
    """One module or taxonomy handed to a checkpoint.

    Only ``handle`` is read by core checks; other fields pass through to
    export plugins untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    handle: str


def coerce_items(items: Iterable[ModuleItem | Mapping[str, Any]]) -> list[ModuleItem]:
    """Validate raw mappings into :class:`ModuleItem`, passing models through."""
    return [
        item if isinstance(item, ModuleItem) else ModuleItem.model_validate(dict(item))
        for item in items
    ]


class ValidationIssue(BaseModel):
    """One finding. Errors fail a checkpoint; warnings never do."""

    model_config = {"frozen": True}

    rule_id: str | None = None
    rule_name: str | None = None
    message: str
    affected_handle: str | None = None
    suggestion: str | None = None


class ExportFinding(BaseModel):
    """Shape of a finding returned by a ``validate_export`` plugin."""

    message: str
    rule_id: str | None = None
    rule_name: str | None = None
    handle: str | None = None
    suggestion: str | None = None
    severity: Literal["error", "warning"] = "error"


class CheckpointStats(BaseModel):
    model_config = {"frozen": True}

    items_checked: int
    errors_found: int
    warnings_found: int


class CheckpointResult(BaseModel):
    """Outcome of one checkpoint call.

    Attributes:
        stage: The checkpoint that ran.
        passed: True when no errors survived rule filtering.
        errors: Findings that fail the checkpoint.
        warnings: Non-fatal findings.
        stats: Counts of items and findings.
        meta: Optional telemetry, populated when tracing is enabled.
    """

    model_config = {"frozen": True}

    stage: CheckpointStage
    passed: bool
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    stats: CheckpointStats
    meta: dict[str, Any] | None = None


class ValidationReport(BaseModel):
    """Aggregate of ``map``, ``build`` and ``export`` checkpoints."""

    model_config = {"frozen": True}

    is_valid: bool
    passed: int
    failed: int
    total_errors: int
    total_warnings: int
    checkpoints: list[CheckpointResult]
    rules_checked: list[str] = Field(default_factory=list)
    meta: dict[str, Any] | None = None


class GatewayStats(BaseModel):
    """Vocabulary and catalog sizes."""

    model_config = {"frozen": True}

    nodes: int
    modifiers: int
    compounds: int
    taxonomies: int
    rules: int
