"""Vocabulary classification enums.

Node categories and subcategories, handle levels, and rule categories.
Values are the exact strings used in the canonical data.
"""

from __future__ import annotations

from enum import StrEnum


class NodeCategory(StrEnum):
    """Primary category of an L1 node."""

    DOMAIN = "Domain"
    CENTRAL = "Central"
    CONTEXT = "Context"
    CONTENT = "Content"
    MODIFIER = "Modifier"


class ContentSubcategory(StrEnum):
    """Refinement for Content nodes."""

    TEMPORAL = "Temporal"
    OPERATIONAL = "Operational"
    DYNAMICS = "Dynamics"
    DATA = "Data"


class ModifierSubcategory(StrEnum):
    """Refinement for Modifier nodes."""

    CLASSIFICATION = "Classification"
    STATE = "State"
    TRAIT = "Trait"
    RELATION = "Relation"
    ABILITY = "Ability"
    CONSTRAINT = "Constraint"


class DomainSubcategory(StrEnum):
    """Refinement for Domain nodes."""

    META = "Meta"
    ACCESS = "Access"
    DELIVERY = "Delivery"
    ANALYSIS = "Analysis"
    OUTCOMES = "Outcomes"


class DomainFocus(StrEnum):
    """Domain affinity of Central and Context nodes."""

    KOMPAS = "kompas"
    NAVIGI = "navigi"
    MARETO = "mareto"
    KARTO = "karto"
    VOLTO = "volto"


class HandleLevel(StrEnum):
    """Depth of a handle in the generative hierarchy."""

    L1 = "L1"
    L2_COMPOUND = "L2_compound"
    L2_TAXONOMY = "L2_taxonomy"
    L3_SUBTAXONOMY = "L3_subtaxonomy"


class RuleCategory(StrEnum):
    """Categories of the rule catalog."""

    SEMANTIC = "Semantic"
    STRUCTURE = "Structure"
    NAMING = "Naming"
    TAXONOMY = "Taxonomy"
    MODIFIER = "Modifier"
    SELECTION = "Selection"
    NORMALIZATION = "Normalization"
    CORTEZA_BUILD = "Corteza Build"


# Separator between the components of a compound or taxonomy handle.
HANDLE_SEPARATOR = "_"

# Handle of the classification modifier; never classifies itself.
TYPE_HANDLE = "type"
TYPE_SUFFIX = "_type"
SUBTAXONOMY_MARKER = "_type_"
