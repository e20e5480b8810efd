"""ValidationGateway — staged checkpoint validation over the ontology.

Stage sequence: ingest → extract → map → build → export.

- ingest / extract: counting pass-throughs.
- map: every module and taxonomy handle must classify as L1, L2 or L3 (R06).
- build: compounds need a sibling ``<handle>_type`` (T01); taxonomies
  deeper than six separators raise a warning (T09).
- export: no core checks; ``validate_export`` plugins contribute findings.

Strictness is applied per checkpoint, after the stage has aggregated all
of its findings:

- ``strict`` raises :class:`CheckpointFailedError` if any error survived.
- ``warn`` logs a summary and every error and warning, then returns.
- ``report`` only returns.

The configuration is the only mutable state. ``configure`` builds a new
frozen :class:`GatewayConfig` and swaps it in a single assignment; each
checkpoint reads the current config once at entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeAlias

from pydantic import ValidationError

from kglcore.config.models import GatewayConfig, KglConfig, Strictness
from kglcore.domain.classifier import CompoundAnalysis, HandleBatchValidation, HandleValidation
from kglcore.domain.ontology import Ontology, build_ontology
from kglcore.domain.rules import Rule
from kglcore.domain.types import HANDLE_SEPARATOR, TYPE_SUFFIX, RuleCategory
from kglcore.plugins.manager import PluginManager
from kglcore.services.base import BaseService
from kglcore.services.contracts import (
    VALIDATED_STAGES,
    CheckpointResult,
    CheckpointStage,
    CheckpointStats,
    ExportFinding,
    GatewayStats,
    ModuleItem,
    ValidationIssue,
    ValidationReport,
    coerce_items,
)
from kglcore.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

CANONICAL_RULE_ID = "R06"
TYPE_TAXONOMY_RULE_ID = "T01"
DEPTH_RULE_ID = "T09"
MAX_TAXONOMY_DEPTH = 6

Items: TypeAlias = Iterable[ModuleItem | Mapping[str, Any]]


class CheckpointFailedError(Exception):
    """Raised in strict mode when a checkpoint finishes with errors."""

    def __init__(self, result: CheckpointResult) -> None:
        self.result = result
        self.stage = result.stage
        self.errors = result.errors
        self.first_error = result.errors[0] if result.errors else None
        first_message = self.first_error.message if self.first_error else None
        super().__init__(
            f"Validation failed at {self.stage} stage with {len(self.errors)} errors. "
            f"First error: {first_message}"
        )


class ValidationGateway(BaseService):
    """Checkpoint validation and read-only queries over one :class:`Ontology`."""

    def __init__(
        self,
        ontology: Ontology,
        config: GatewayConfig | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        super().__init__(ontology, plugins)
        self._config = config or GatewayConfig()

    @classmethod
    def from_config(
        cls,
        config: KglConfig,
        *,
        ontology: Ontology | None = None,
        plugins: PluginManager | None = None,
    ) -> ValidationGateway:
        """Build a gateway from a loaded ``kgl.toml``.

        Entry-point plugins are discovered when ``[plugins] enabled`` is set
        and no manager is passed in.
        """
        if plugins is None and config.plugins.enabled:
            plugins = PluginManager()
            names = plugins.discover_and_load()
            logger.debug("Loaded plugins: %s", names)
        return cls(ontology or build_ontology(), config.gateway, plugins)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def strictness(self) -> Strictness:
        return self._config.strictness

    def configure(self, **changes: Any) -> GatewayConfig:
        """Merge *changes* into the current config and swap it in atomically.

        Raises:
            ValueError: for unknown setting names.
            pydantic.ValidationError: for invalid values.
        """
        unknown = set(changes) - set(GatewayConfig.model_fields)
        if unknown:
            msg = f"Unknown gateway setting(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        merged = GatewayConfig.model_validate({**self._config.model_dump(), **changes})
        self._config = merged
        logger.debug("Gateway reconfigured: %s", merged)
        return merged

    # ------------------------------------------------------------------
    # Handle queries
    # ------------------------------------------------------------------

    def validate_handle(self, handle: str) -> HandleValidation:
        return self._ontology.classifier.classify(handle)

    def validate_handles(self, handles: Sequence[str]) -> HandleBatchValidation:
        return self._ontology.classifier.classify_many(list(handles))

    def is_canonical_handle(self, handle: str) -> bool:
        """True if *handle* is valid at any level (L1, L2 or L3)."""
        return self.validate_handle(handle).is_valid

    def analyze_compound(self, handle: str) -> CompoundAnalysis:
        return self._ontology.classifier.analyze_compound(handle)

    def is_modifier_valid_for_node(self, node: str, modifier: str) -> bool:
        return self._ontology.compatibility.is_modifier_valid_for_node(node, modifier)

    def get_valid_modifiers_for_node(self, node: str) -> list[str]:
        return self._ontology.compatibility.get_valid_modifiers_for_node(node)

    def is_modifier_on_modifier_valid(self, base: str, extension: str) -> bool:
        return self._ontology.compatibility.is_modifier_on_modifier_valid(base, extension)

    def suggest_alternative(self, handle: str) -> str:
        result = self.validate_handle(handle)
        return result.suggestion or self._ontology.suggestions.fallback()

    # ------------------------------------------------------------------
    # Rule access
    # ------------------------------------------------------------------

    def get_rule_definition(self, rule_id: str) -> Rule:
        """Return the rule for *rule_id*; raises ``RuleNotFoundError`` if unknown."""
        return self._ontology.rules.get(rule_id)

    def get_rules_by_category(self, category: RuleCategory | str) -> tuple[Rule, ...]:
        return self._ontology.rules.rules_by_category(category)

    def all_rule_ids(self) -> list[str]:
        return self._ontology.rules.all_rule_ids()

    def is_valid_rule_id(self, rule_id: str) -> bool:
        return self._ontology.rules.has_rule(rule_id)

    def stats(self) -> GatewayStats:
        vocabulary = self._ontology.vocabulary
        generated = self._ontology.generated
        return GatewayStats(
            nodes=len(vocabulary),
            modifiers=len(vocabulary.modifier_handles),
            compounds=len(generated.compounds),
            taxonomies=len(generated.taxonomies),
            rules=self._ontology.rules.rule_count,
        )

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    @traced
    def validate_checkpoint(
        self,
        stage: CheckpointStage | str,
        modules: Items,
        taxonomies: Items = (),
    ) -> CheckpointResult:
        """Run one checkpoint and apply the current strictness.

        Raises:
            ValueError: if *stage* is not a pipeline stage.
            CheckpointFailedError: in strict mode, after the stage completes
                with at least one error.
        """
        stage = CheckpointStage(stage)
        config = self._config
        module_items = coerce_items(modules)
        taxonomy_items = coerce_items(taxonomies)

        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        with trace_span(f"checkpoint.{stage}") as span:
            match stage:
                case CheckpointStage.INGEST:
                    items_checked = len(module_items) + len(taxonomy_items)
                case CheckpointStage.EXTRACT:
                    items_checked = len(module_items)
                case CheckpointStage.MAP:
                    errors.extend(self._check_map(module_items, taxonomy_items))
                    items_checked = len(module_items) + len(taxonomy_items)
                case CheckpointStage.BUILD:
                    build_errors, build_warnings = self._check_build(module_items, taxonomy_items)
                    errors.extend(build_errors)
                    warnings.extend(build_warnings)
                    items_checked = len(module_items) + len(taxonomy_items)
                case CheckpointStage.EXPORT:
                    export_errors, export_warnings = self._check_export(
                        module_items, taxonomy_items
                    )
                    errors.extend(export_errors)
                    warnings.extend(export_warnings)
                    items_checked = len(module_items) + len(taxonomy_items)
            if span:
                span.annotate("items_checked", items_checked)

        errors = self._filter(errors, config)
        warnings = self._filter(warnings, config)
        passed = not errors

        hook_failures: list[str] = []
        self._call_hook(
            "post_checkpoint",
            {
                "stage": str(stage),
                "passed": passed,
                "errors_found": len(errors),
                "warnings_found": len(warnings),
            },
            hook_failures,
        )
        warnings.extend(ValidationIssue(message=m) for m in hook_failures)

        result = CheckpointResult(
            stage=stage,
            passed=passed,
            errors=errors,
            warnings=warnings,
            stats=CheckpointStats(
                items_checked=items_checked,
                errors_found=len(errors),
                warnings_found=len(warnings),
            ),
        )
        self._apply_strictness(result, config.strictness)
        return result

    @traced
    def validate_all(self, modules: Items, taxonomies: Items = ()) -> ValidationReport:
        """Run map, build and export in order and aggregate the results.

        In strict mode the first failing stage raises and later stages do
        not run.
        """
        module_items = coerce_items(modules)
        taxonomy_items = coerce_items(taxonomies)

        checkpoints: list[CheckpointResult] = []
        rules_checked: dict[str, None] = {}
        for stage in VALIDATED_STAGES:
            result = self.validate_checkpoint(stage, module_items, taxonomy_items)
            checkpoints.append(result)
            for error in result.errors:
                if error.rule_id is not None:
                    rules_checked.setdefault(error.rule_id, None)

        total_errors = sum(len(c.errors) for c in checkpoints)
        total_warnings = sum(len(c.warnings) for c in checkpoints)
        passed = sum(1 for c in checkpoints if c.passed)
        report = ValidationReport(
            is_valid=total_errors == 0,
            passed=passed,
            failed=len(checkpoints) - passed,
            total_errors=total_errors,
            total_warnings=total_warnings,
            checkpoints=checkpoints,
            rules_checked=list(rules_checked),
        )
        logger.debug(
            "Full validation: valid=%s errors=%d warnings=%d",
            report.is_valid,
            total_errors,
            total_warnings,
        )
        return report

    # ------------------------------------------------------------------
    # Stage checks
    # ------------------------------------------------------------------

    def _check_map(
        self,
        modules: list[ModuleItem],
        taxonomies: list[ModuleItem],
    ) -> list[ValidationIssue]:
        errors: list[ValidationIssue] = []
        for kind, items in (("Module", modules), ("Taxonomy", taxonomies)):
            for item in items:
                result = self.validate_handle(item.handle)
                if result.is_valid:
                    continue
                errors.append(
                    self._issue(
                        CANONICAL_RULE_ID,
                        f'{kind} "{item.handle}" is not a canonical KGL handle',
                        handle=item.handle,
                        suggestion=result.suggestion,
                    )
                )
        return errors

    def _check_build(
        self,
        modules: list[ModuleItem],
        taxonomies: list[ModuleItem],
    ) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        present = {m.handle for m in modules} | {t.handle for t in taxonomies}

        for module in modules:
            handle = module.handle
            if HANDLE_SEPARATOR not in handle or handle.endswith(TYPE_SUFFIX):
                continue
            type_handle = f"{handle}{TYPE_SUFFIX}"
            if type_handle in present:
                continue
            errors.append(
                self._issue(
                    TYPE_TAXONOMY_RULE_ID,
                    f'Compound "{handle}" missing type taxonomy "{type_handle}"',
                    handle=handle,
                    suggestion=f'Create taxonomy module "{type_handle}"',
                )
            )

        for taxonomy in taxonomies:
            depth = taxonomy.handle.count(HANDLE_SEPARATOR)
            if depth > MAX_TAXONOMY_DEPTH:
                warnings.append(
                    self._issue(
                        DEPTH_RULE_ID,
                        f'Taxonomy "{taxonomy.handle}" has depth {depth} '
                        f"(> {MAX_TAXONOMY_DEPTH}). Consider flattening.",
                        handle=taxonomy.handle,
                    )
                )

        return errors, warnings

    def _check_export(
        self,
        modules: list[ModuleItem],
        taxonomies: list[ModuleItem],
    ) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        hook_failures: list[str] = []

        batches = self._call_hook(
            "validate_export",
            {
                "modules": [m.model_dump() for m in modules],
                "taxonomies": [t.model_dump() for t in taxonomies],
            },
            hook_failures,
        )
        warnings.extend(ValidationIssue(message=m) for m in hook_failures)

        for batch in batches:
            for raw in batch:
                try:
                    finding = ExportFinding.model_validate(raw)
                except ValidationError:
                    logger.warning("Ignoring malformed export finding: %r", raw)
                    warnings.append(
                        ValidationIssue(message=f"Ignored malformed export finding: {raw!r}")
                    )
                    continue
                issue = self._issue(
                    finding.rule_id,
                    finding.message,
                    handle=finding.handle,
                    suggestion=finding.suggestion,
                    rule_name=finding.rule_name,
                )
                if finding.severity == "warning":
                    warnings.append(issue)
                else:
                    errors.append(issue)

        return errors, warnings

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _issue(
        self,
        rule_id: str | None,
        message: str,
        *,
        handle: str | None = None,
        suggestion: str | None = None,
        rule_name: str | None = None,
    ) -> ValidationIssue:
        if rule_name is None and rule_id is not None:
            rule = self._ontology.rules.find(rule_id)
            rule_name = rule.name if rule else None
        return ValidationIssue(
            rule_id=rule_id,
            rule_name=rule_name,
            message=message,
            affected_handle=handle,
            suggestion=suggestion,
        )

    def _filter(
        self,
        findings: list[ValidationIssue],
        config: GatewayConfig,
    ) -> list[ValidationIssue]:
        """Drop findings for skipped rules and for rules outside enabled categories.

        Findings with no rule id, or with an id the catalog does not know,
        are never dropped by category.
        """
        kept: list[ValidationIssue] = []
        for finding in findings:
            if finding.rule_id is None:
                kept.append(finding)
                continue
            if finding.rule_id in config.skip_rules:
                continue
            if config.enabled_categories is not None:
                rule = self._ontology.rules.find(finding.rule_id)
                if rule is not None and rule.category not in config.enabled_categories:
                    continue
            kept.append(finding)
        return kept

    @staticmethod
    def _apply_strictness(result: CheckpointResult, strictness: Strictness) -> None:
        match strictness:
            case Strictness.STRICT if not result.passed:
                raise CheckpointFailedError(result)
            case Strictness.WARN if result.errors or result.warnings:
                logger.warning(
                    "%s stage: %d errors, %d warnings",
                    result.stage,
                    len(result.errors),
                    len(result.warnings),
                )
                for error in result.errors:
                    logger.warning("[%s] %s", error.rule_id, error.message)
                for warning in result.warnings:
                    logger.warning("[%s] %s", warning.rule_id or "-", warning.message)
            case _:
                logger.debug(
                    "%s stage %s: %d items, %d errors, %d warnings",
                    result.stage,
                    "passed" if result.passed else "failed",
                    result.stats.items_checked,
                    len(result.errors),
                    len(result.warnings),
                )
