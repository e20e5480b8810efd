"""RuleCatalog — the fixed set of universal modelling rules.

Rules are referenced by id everywhere else (gateway findings, reports).
Asking for an id that is not in the catalog is a caller bug and raises
:class:`RuleNotFoundError` listing every valid id.

Platform-specific rules (e.g. the Corteza build rules) are not part of
the universal catalog; exporters register their own checks through the
export checkpoint hook.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from kglcore.domain.types import RuleCategory

logger = logging.getLogger(__name__)

_SEMANTIC = RuleCategory.SEMANTIC
_STRUCTURE = RuleCategory.STRUCTURE
_NAMING = RuleCategory.NAMING
_TAXONOMY = RuleCategory.TAXONOMY
_MODIFIER = RuleCategory.MODIFIER
_SELECTION = RuleCategory.SELECTION
_NORMALIZATION = RuleCategory.NORMALIZATION


@dataclass(frozen=True)
class Rule:
    """A single validation rule definition."""

    id: str
    category: RuleCategory
    name: str
    description: str
    example_correct: str | None = None
    example_wrong: str | None = None
    error_if_violated: str | None = None

    @property
    def prefix(self) -> str:
        """Alphabetic id prefix, e.g. ``R`` for ``R06`` or ``CB`` for ``CB01``."""
        return self.id.rstrip("0123456789")


class RuleNotFoundError(KeyError):
    """Raised when a rule id is not in the catalog."""

    def __init__(self, rule_id: str, valid_ids: list[str]) -> None:
        self.rule_id = rule_id
        self.valid_ids = valid_ids
        super().__init__(rule_id)

    def __str__(self) -> str:
        return f"Unknown rule ID: {self.rule_id}. Valid IDs: {', '.join(self.valid_ids)}"


UNIVERSAL_RULES: tuple[Rule, ...] = (
    # --- R01-R16: semantic and structural grammar ---
    Rule(
        "R01",
        _SEMANTIC,
        "Semantic coherence",
        "Compound must describe a real thing. Every compound must have a coherent "
        "semantic meaning that represents an actual concept in the domain.",
        example_correct="case_event = event in a case ✓",
        error_if_violated="Semantic nonsense; compound has no real-world meaning",
    ),
    Rule(
        "R02",
        _SEMANTIC,
        "Order determines meaning",
        "A_B ≠ B_A; both valid, different meaning. The order of nodes in a compound "
        "determines the semantic relationship direction.",
        example_correct=(
            "event_status (Status OF an event) vs status_event (Event ABOUT status change)"
        ),
        example_wrong="event_status vs status_event",
        error_if_violated="Semantic ambiguity; relationship direction unclear",
    ),
    Rule(
        "R03",
        _STRUCTURE,
        "All nodes get type taxonomy",
        "Every compound and standalone node must have a corresponding type taxonomy "
        "for classification.",
        example_correct="case_event → case_event_type",
        error_if_violated="Missing classification; cannot categorize records",
    ),
    Rule(
        "R04",
        _STRUCTURE,
        "No type-type",
        'Type cannot classify itself. The "type" modifier cannot be applied to itself.',
        example_correct="Use status_type instead",
        example_wrong="type_type is invalid",
        error_if_violated="Circular reference; type classifying itself",
    ),
    Rule(
        "R05",
        _STRUCTURE,
        "No node repetition",
        "Same node cannot appear twice in a compound. Each node can only appear once.",
        example_correct="person_role, person_case",
        example_wrong="person_person invalid",
        error_if_violated="Invalid compound; duplicate node",
    ),
    Rule(
        "R06",
        _SEMANTIC,
        "Canonical nodes only",
        "All handles must derive from the 45 canonical nodes. No custom or "
        "non-canonical terms allowed.",
        example_correct="Map to canonical: person, person_characteristic, person_need",
        example_wrong="happy, housing, client",
        error_if_violated="Non-canonical term; must map to ontology",
    ),
    Rule(
        "R07",
        _NAMING,
        "Hyphen notation for fields",
        "Use hyphen (-) for FK field references, underscore (_) for compound handles.",
        example_correct="case-case_event (field referencing case_event module)",
        example_wrong="case.case_event",
        error_if_violated="Invalid field naming convention",
    ),
    Rule(
        "R08",
        _NAMING,
        "Full compound naming",
        "Spell out complete compound handle in references. Do not abbreviate.",
        example_correct="case_event-case_event_type (not case_event-type)",
        error_if_violated="Ambiguous reference; incomplete handle",
    ),
    Rule(
        "R09",
        _SEMANTIC,
        "All many-to-many",
        "No cardinality constraints in schema. All relationships are modeled as "
        "many-to-many. Business rules enforce limits at runtime.",
        example_correct="Business rules enforce limits, not schema",
        error_if_violated="Schema cardinality constraint; use business rules",
    ),
    Rule(
        "R10",
        _SEMANTIC,
        "Modifiers are standalone nodes",
        "Status, condition, characteristic, role, capacity, limitation are standalone "
        "nodes with their own type taxonomies.",
        example_correct="status → status_type exists as L2 taxonomy",
        error_if_violated="Missing modifier taxonomy",
    ),
    Rule(
        "R11",
        _SEMANTIC,
        "Compounds are nodes",
        "Compounds can be treated as nodes and receive their own type taxonomy.",
        example_correct="person_case → person_case_type",
        error_if_violated="Missing compound type taxonomy",
    ),
    Rule(
        "R12",
        _SEMANTIC,
        "Bidirectionality",
        "A_B valid means B_A is also grammatically valid (though semantically different).",
        example_correct="person_case AND case_person are both valid",
        error_if_violated="Asymmetric compound restriction",
    ),
    Rule(
        "R13",
        _NAMING,
        "Snake case convention",
        "All handles must be lowercase, singular, with underscores. No hyphens, "
        "plurals, or camelCase in handles.",
        example_correct="case_event_status ✓",
        example_wrong="CaseEventStatus, case-event, events",
        error_if_violated="Invalid handle format",
    ),
    Rule(
        "R14",
        _STRUCTURE,
        "Relationship modifier inheritance",
        "When A-B relationship exists, include A-B_type and optionally A-B_<modifier> "
        "for relationship attributes.",
        example_correct="person-outcome → person-outcome_type, person-outcome_status",
        error_if_violated="Missing relationship type taxonomy",
    ),
    Rule(
        "R15",
        _SEMANTIC,
        "Modifier scope follows compound",
        "When modifying a compound, the modifier follows the complete compound. "
        "A_B_modifier means \"the modifier OF A's relationship to B\".",
        example_correct="person_case_status (◎■Ͼ) - status OF the person-case relationship",
        example_wrong="person_status_case (◎Ͼ■) - implies person has status, then is in case",
        error_if_violated="Semantic ambiguity; modifier scope unclear",
    ),
    Rule(
        "R16",
        _SEMANTIC,
        "Modifier ordering grammar",
        "Modifiers follow specific ordering: (1) Base before extension for "
        "modifier-on-modifier, (2) Node then by specificity for multiple modifiers, "
        "(3) Type ALWAYS last, (4) Scoped compounds preserve hierarchy: "
        "scope → object → modifier → type.",
        example_correct=(
            "condition_status (ϟͼ), person_condition_status (◎ϟͼ), "
            "event_status_type (⧫ͼϠ), case_event_status_type (■⧫ͼϠ)"
        ),
        example_wrong="event_type_status (type not last), status_condition_person (wrong order)",
        error_if_violated="Semantic ambiguity; glyph sequence uninterpretable",
    ),
    # --- T01-T10: taxonomy structure ---
    Rule(
        "T01",
        _TAXONOMY,
        "Compound type taxonomy required",
        "Every compound MUST have a corresponding type taxonomy module for classification.",
        example_correct="Both case_condition AND case_condition_type modules exist",
        example_wrong="case_condition exists without case_condition_type",
        error_if_violated="Incomplete data model; missing type classification",
    ),
    Rule(
        "T02",
        _TAXONOMY,
        "Sub-type trigger",
        "Create Level 3+ sub-taxonomy when 2+ categorical values are needed within a "
        "taxonomy category.",
        example_correct=(
            "person_characteristic_type_gender module with Male, Female, Non-binary values"
        ),
        example_wrong="person_characteristic_type with Gender as freeform text value",
        error_if_violated="Uncontrolled categorical data",
    ),
    Rule(
        "T03",
        _TAXONOMY,
        "Sub-type grammar",
        "Sub-taxonomy naming: <parent_handle>_<category_lowercase>. Parent handle is "
        "preserved, category appended.",
        example_correct=(
            "person_characteristic_type_gender "
            "(parent: person_characteristic_type, category: Gender)"
        ),
        example_wrong="gender_type, person_gender",
        error_if_violated="Naming inconsistency; parent handle not preserved",
    ),
    Rule(
        "T04",
        _TAXONOMY,
        "Sub-type structure",
        "Standard sub-type taxonomy fields: _id, _name, _code, _description, "
        "_display_order, _is_active, -parent.",
        example_correct="Complete field set with parent reference and metadata",
        example_wrong="Only _id and _name fields",
        error_if_violated="Incomplete taxonomy structure",
    ),
    Rule(
        "T05",
        _TAXONOMY,
        "Sub-type reference",
        "Parent taxonomy references sub-type via value field. Sub-type values are "
        "selected, not entered as text.",
        example_correct=(
            "person_characteristic-person_characteristic_type_gender (Record → sub-taxonomy)"
        ),
        example_wrong="person_characteristic stores gender as text string",
        error_if_violated="No controlled vocabulary reference",
    ),
    Rule(
        "T06",
        _TAXONOMY,
        "Sub-type hierarchy",
        "Sub-types can have parent references for nested hierarchical values (L4+).",
        example_correct=(
            "person_characteristic_type_indigenous with parent references for nations/tribes"
        ),
        example_wrong="Flat list only, no hierarchy support",
        error_if_violated="Cannot model hierarchical taxonomy",
    ),
    Rule(
        "T07",
        _TAXONOMY,
        "Modifier taxonomy depth",
        "For each modifier taxonomy (type, status, characteristic, role, etc.), if any "
        "category has 2+ categorical values, a Level 3+ sub-taxonomy MUST exist. "
        "Depth is driven by USE CASE DATA.",
        example_correct=(
            'person_type has "Specialty" value → person_type_specialty exists with '
            "actual values (Cardiologist, Neurologist)"
        ),
        example_wrong=(
            'person_type taxonomy with "Specialty" as value, but no '
            "person_type_specialty sub-taxonomy"
        ),
        error_if_violated="Uncontrolled categorical data; cannot aggregate/report",
    ),
    Rule(
        "T08",
        _TAXONOMY,
        "One semantic dimension",
        "Each modifier sub-taxonomy MUST maintain ONE semantic dimension. All values "
        "must answer the same semantic question. No mixed dimensions.",
        example_correct=(
            "person_characteristic_type_language contains ONLY languages. "
            "Separate taxonomy for employment."
        ),
        example_wrong=(
            "person_characteristic_type_language containing [English, French, "
            "Full-Time Employee] - mixes language with employment"
        ),
        error_if_violated="Semantic incoherence; impossible to query/aggregate meaningfully",
    ),
    Rule(
        "T09",
        _TAXONOMY,
        "Depth limit warning",
        "Taxonomy depth beyond Level 6 triggers a warning. Deep hierarchies may "
        "indicate over-engineering or data model complexity.",
        example_correct="Flatten hierarchy or use separate linking modules for deep relationships",
        example_wrong="person_characteristic_type_indigenous_nation_band_community_family (L8)",
        error_if_violated="Warning: Excessive taxonomy depth may indicate design issue",
    ),
    Rule(
        "T10",
        _TAXONOMY,
        "Path computation field",
        "Hierarchical taxonomies (L3+) MUST include a computed path field for "
        "efficient querying and tree navigation.",
        example_correct='path field: "/person_type/specialty/cardiology" enabling LIKE queries',
        example_wrong="Hierarchical taxonomy without path field",
        error_if_violated="Missing path field; hierarchical queries inefficient",
    ),
    # --- M01-M04: modifier patterns ---
    Rule(
        "M01",
        _MODIFIER,
        "No freeform modifier attributes",
        "Modifier values (type, status, condition, characteristic, role, capacity, "
        "limitation) MUST NOT be freeform strings. Use the node_modifier compound "
        "pattern with taxonomy reference.",
        example_correct=(
            "person → person_characteristic → person_characteristic_type → "
            "person_characteristic_type_gender. event → event_status → event_status_type."
        ),
        example_wrong=(
            'person.gender = "Male" as String field, event.status = "Completed" as String'
        ),
        error_if_violated="Uncontrolled, unreportable modifier data",
    ),
    Rule(
        "M02",
        _MODIFIER,
        "Three-level modifier structure",
        "All modifier attributes use minimum 3-level structure: Node → Node_Modifier → "
        "Node_Modifier_Type. Sub-taxonomies extend to L3+ when needed.",
        example_correct=(
            "person_characteristic (L2) with type=Gender → "
            "person_characteristic_type_gender (L3) with value=Male"
        ),
        example_wrong='person.gender = "Male" (direct string)',
        error_if_violated="Cannot aggregate or report on modifier values",
    ),
    Rule(
        "M03",
        _MODIFIER,
        "Multi-value support",
        "Modifier compounds support multiple values per entity. Multiple records of the "
        "compound can exist for one entity.",
        example_correct=(
            "Multiple person_characteristic records of type=Language (English, French, Cree)"
        ),
        example_wrong="person_language as single String field",
        error_if_violated="Data loss; cannot capture multiple modifier values",
    ),
    Rule(
        "M04",
        _MODIFIER,
        "Modifier metadata",
        "Modifier compounds should track provenance: source, verification_status, "
        "effective_date, end_date, notes.",
        example_correct=(
            "person_characteristic with source=Self-Report, verified_at=2024-01-15, "
            "effective_date=2020-01-01"
        ),
        example_wrong="Just the modifier value with no context",
        error_if_violated="No audit trail for modifier values",
    ),
    # --- S01-S05: compound selection ---
    Rule(
        "S01",
        _SELECTION,
        "Spine first",
        "Start with operational spine nodes (person, case, event, service, program, "
        "organization) before adding modifiers or context.",
        example_correct=(
            "Confirm person is in scope, then add person_characteristic if demographics needed"
        ),
        example_wrong="Starting with person_characteristic before confirming person is needed",
        error_if_violated="Over-engineering; building compounds without spine anchor",
    ),
    Rule(
        "S02",
        _SELECTION,
        "Question test",
        "Each selected compound must answer a specific business question. If no "
        "question requires it, do not include it.",
        example_correct=(
            "Including person_acuity because the use case asks "
            "\"What is the client's acuity level?\""
        ),
        example_wrong="Including person_acuity because it exists in the ontology",
        error_if_violated="Unnecessary compound; no business question requires it",
    ),
    Rule(
        "S03",
        _SELECTION,
        "Minimal compounds",
        "Use the fewest compounds needed to answer all use case questions. Avoid "
        "redundant or overlapping compounds.",
        example_correct=(
            "Choose person_characteristic for traits, person_status for state transitions"
        ),
        example_wrong=(
            "Including both person_characteristic AND person_status for the same attribute"
        ),
        error_if_violated="Redundant compounds; data duplication",
    ),
    Rule(
        "S04",
        _SELECTION,
        "Modifier justification",
        "Each modifier compound must be justified by a use case need. Not all entities "
        "need all modifiers.",
        example_correct="Add person_capacity only if use case tracks client abilities",
        example_wrong=(
            "Adding person_capacity, person_limitation, person_condition to every person module"
        ),
        error_if_violated="Over-engineering; modifiers without use case need",
    ),
    Rule(
        "S05",
        _SELECTION,
        "Taxonomy follows selection",
        "Taxonomy values are populated AFTER compounds are selected. Do not design "
        "taxonomies before confirming compounds.",
        example_correct=(
            "Select person_characteristic first, then populate type values based on use case"
        ),
        example_wrong=(
            "Designing person_characteristic_type_gender values before confirming "
            "person_characteristic is needed"
        ),
        error_if_violated="Premature taxonomy design; may create unused structures",
    ),
    # --- N01-N07: cross-jurisdiction normalization ---
    Rule(
        "N01",
        _NORMALIZATION,
        "Normalization trigger",
        "Create normalization compound when same L2 category has different mechanisms, "
        "thresholds, or values across jurisdictions.",
        example_correct=(
            "person_geography_normalization with jurisdiction-specific mappings to "
            "normalized_rurality"
        ),
        example_wrong='Ignoring that BC and AB define "rural" differently',
        error_if_violated="Cross-jurisdiction data incomparable",
    ),
    Rule(
        "N02",
        _NORMALIZATION,
        "Reference taxonomy required",
        "Every normalization compound must reference a normalized_* taxonomy containing "
        "standardized values.",
        example_correct=(
            "person_age_normalization → normalized_age_band (e.g., 0-17, 18-34, 35-54, 55+)"
        ),
        example_wrong="Normalization compound without target taxonomy",
        error_if_violated="No standard reference for normalized values",
    ),
    Rule(
        "N03",
        _NORMALIZATION,
        "Mechanism metadata",
        "Record how source system implements concept: modifier, embedded, threshold, "
        "percentage, flat, time_unit.",
        example_correct=(
            'mechanism="threshold", source_threshold="65", notes="AB uses 65+, BC uses 55+"'
        ),
        example_wrong="Just mapping values without explaining source mechanism",
        error_if_violated="Cannot understand or debug normalization logic",
    ),
    Rule(
        "N04",
        _NORMALIZATION,
        "Calculated fields",
        "Include base_rate and effective_rate fields enabling cross-system comparison.",
        example_correct="base_rate=100.00, effective_rate=125.00, multiplier=1.25",
        example_wrong="Only storing normalized value without calculation context",
        error_if_violated="Cannot perform rate comparisons across systems",
    ),
    Rule(
        "N05",
        _NORMALIZATION,
        "Comparability score",
        "Include confidence measure (0.0-1.0) for imperfect cross-jurisdictional matches.",
        example_correct="comparability_score=0.85 (indicating 85% confidence in mapping)",
        example_wrong="Treating all normalizations as equally reliable",
        error_if_violated="No indication of normalization quality",
    ),
    Rule(
        "N06",
        _NORMALIZATION,
        "Source preservation",
        "Always preserve original source_code. Normalization adds normalized value, "
        "never replaces original.",
        example_correct='source_code="RURAL_BC", normalized_code="RURAL_STANDARD", both preserved',
        example_wrong="Overwriting source value with normalized value",
        error_if_violated="Loss of original source data",
    ),
    Rule(
        "N07",
        _NORMALIZATION,
        "Jurisdiction reference",
        "Every normalization compound must FK to geography_type_jurisdiction "
        "identifying source system.",
        example_correct="normalization-geography_type_jurisdiction (FK to BC, AB, ON, etc.)",
        example_wrong="Normalization without jurisdiction context",
        error_if_violated="Cannot identify source of normalized data",
    ),
)


class RuleCatalog:
    """Rules indexed by id and by category, in declaration order."""

    def __init__(self, rules: Iterable[Rule] = UNIVERSAL_RULES) -> None:
        by_id: dict[str, Rule] = {}
        by_category: dict[RuleCategory, list[Rule]] = {}
        for rule in rules:
            if rule.id in by_id:
                msg = f"Duplicate rule ID: {rule.id!r}"
                raise ValueError(msg)
            by_id[rule.id] = rule
            by_category.setdefault(rule.category, []).append(rule)

        self._by_id = by_id
        self._by_category = {k: tuple(v) for k, v in by_category.items()}
        logger.debug("Rule catalog: %d rules in %d categories", len(by_id), len(by_category))

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._by_id.values())

    @property
    def rule_count(self) -> int:
        return len(self._by_id)

    def get(self, rule_id: str) -> Rule:
        """Return the rule for *rule_id*.

        Raises:
            RuleNotFoundError: if *rule_id* is not in the catalog.
        """
        rule = self._by_id.get(rule_id)
        if rule is None:
            raise RuleNotFoundError(rule_id, self.all_rule_ids())
        return rule

    def find(self, rule_id: str) -> Rule | None:
        """Non-raising lookup for callers that already handle absence."""
        return self._by_id.get(rule_id)

    def has_rule(self, rule_id: str) -> bool:
        return rule_id in self._by_id

    def all_rule_ids(self) -> list[str]:
        return list(self._by_id)

    def rules_by_category(self, category: RuleCategory | str) -> tuple[Rule, ...]:
        """Rules in *category*; unknown category names give an empty tuple."""
        if category not in RuleCategory:
            return ()
        return self._by_category.get(RuleCategory(category), ())

    def rules_by_prefix(self, prefix: str) -> tuple[Rule, ...]:
        return tuple(r for r in self._by_id.values() if r.prefix == prefix)

    def validate_rule_id_exists(self, rule_id: str) -> tuple[bool, str | None]:
        """Check a rule id without raising; returns ``(valid, error)``."""
        if rule_id in self._by_id:
            return True, None
        return False, f"Rule ID {rule_id!r} not found in the rule catalog"
