"""Canonical L1 nodes — the fixed list every other vocabulary derives from.

INVARIANT: Handles are unique. Declaration order is significant: it fixes
iteration order for generation, suggestion scanning, and glyph
concatenation.
"""

from __future__ import annotations

from dataclasses import dataclass

from kglcore.domain.types import NodeCategory

_DOMAIN = NodeCategory.DOMAIN
_CENTRAL = NodeCategory.CENTRAL
_CONTEXT = NodeCategory.CONTEXT
_CONTENT = NodeCategory.CONTENT
_MODIFIER = NodeCategory.MODIFIER


@dataclass(frozen=True)
class Node:
    """A single atomic vocabulary entry."""

    handle: str
    name: str
    glyph: str
    category: NodeCategory
    description: str
    subcategory: str | None = None
    domain: str | None = None  # affinity to a Domain node handle
    default_rationale: str | None = None
    is_standalone_modifier: bool | None = None
    valid_extensions: tuple[str, ...] = ()  # modifiers this modifier may precede

    @property
    def is_modifier(self) -> bool:
        return self.category == NodeCategory.MODIFIER

    @property
    def is_domain(self) -> bool:
        return self.category == NodeCategory.DOMAIN


CANONICAL_NODES: tuple[Node, ...] = (
    # Domain (5)
    Node("kompas", "Kompas", "✵", _DOMAIN, "Meta domain", subcategory="Meta"),
    Node("navigi", "Navigi", "✶", _DOMAIN, "Help-seeker access", subcategory="Access"),
    Node("mareto", "Mareto", "✷", _DOMAIN, "Service delivery", subcategory="Delivery"),
    Node("karto", "Karto", "✸", _DOMAIN, "Analysis and insight", subcategory="Analysis"),
    Node("volto", "Volto", "✹", _DOMAIN, "Outcomes and value", subcategory="Outcomes"),
    # Central (4)
    Node(
        "resource",
        "Resource",
        "◉",
        _CENTRAL,
        "Available assets, supports, funding, payments, money, financial resources, budgets",
        domain="navigi",
        default_rationale="Central asset for tracking financial/material supports.",
    ),
    Node(
        "person",
        "Person",
        "◎",
        _CENTRAL,
        "Individual being served, client, participant, beneficiary, user",
        domain="mareto",
        default_rationale="Central entity for tracking clients, staff, and stakeholders.",
    ),
    Node(
        "insight",
        "Insight",
        "⊙",
        _CENTRAL,
        "Analytical finding, pattern, discovery, learning",
        domain="karto",
        default_rationale="Core for capturing analytical findings and discoveries.",
    ),
    Node(
        "outcome",
        "Outcome",
        "◯",
        _CENTRAL,
        "Result achieved, impact, benefit, change measured",
        domain="volto",
        default_rationale="Central for measuring impact and results.",
    ),
    # Context (4)
    Node(
        "program",
        "Program",
        "▣",
        _CONTEXT,
        "Structured service offering, initiative container, funded program",
        domain="navigi",
        default_rationale="Groups services and defines eligibility.",
    ),
    Node(
        "case",
        "Case",
        "■",
        _CONTEXT,
        "Container for service journey, client file, episode of care",
        domain="mareto",
        default_rationale="Container for a client's service journey.",
    ),
    Node(
        "story",
        "Story",
        "▦",
        _CONTEXT,
        "Narrative container, qualitative account",
        domain="karto",
        default_rationale="For qualitative accounts and narrative context.",
    ),
    Node(
        "purpose",
        "Purpose",
        "□",
        _CONTEXT,
        "Strategic intent, mission, vision, why",
        domain="volto",
        default_rationale="Defines strategic intent and value realization.",
    ),
    # Content: temporal and structural (4)
    Node(
        "event",
        "Event",
        "⧫",
        _CONTENT,
        "Significant occurrence, milestone, appointment, session, transaction",
        subcategory="Temporal",
        default_rationale="Captures appointments, milestones, and key interactions.",
    ),
    Node(
        "timeframe",
        "Timeframe",
        "⟲",
        _CONTENT,
        "Period, duration, schedule, date range",
        subcategory="Temporal",
    ),
    Node(
        "organization",
        "Organization",
        "ᚴ",
        _CONTENT,
        "Agency, institution, provider, funder, partner",
        subcategory="Temporal",
        default_rationale="Required for tracking referral partners, providers, and agencies.",
    ),
    Node(
        "geography",
        "Geography",
        "ᚪ",
        _CONTENT,
        "Location, address, region, territory, catchment",
        subcategory="Temporal",
    ),
    # Content: operational (6)
    Node("action", "Action", "↟", _CONTENT, "General operation, step taken", subcategory="Operational"),
    Node(
        "activity",
        "Activity",
        "↥",
        _CONTENT,
        "Discrete tracked action, engagement, intervention unit",
        subcategory="Operational",
    ),
    Node(
        "service",
        "Service",
        "ᚼ",
        _CONTENT,
        "Delivered intervention, support type, offering",
        subcategory="Operational",
        default_rationale="Tracks specific interventions delivered to clients.",
    ),
    Node(
        "task",
        "Task",
        "▪",
        _CONTENT,
        "Discrete work item, to-do, checklist item",
        subcategory="Operational",
        default_rationale="Manages discrete work items and follow-ups.",
    ),
    Node(
        "project",
        "Project",
        "ᚳ",
        _CONTENT,
        "Program element, funded project, grant-funded work",
        subcategory="Operational",
    ),
    Node(
        "initiative",
        "Initiative",
        "ᐯ",
        _CONTENT,
        "Strategic effort, campaign, reform",
        subcategory="Operational",
    ),
    # Content: dynamics (8)
    Node(
        "need",
        "Need",
        "ϫ",
        _CONTENT,
        "Requirement, gap, presenting issue, demand",
        subcategory="Dynamics",
        default_rationale="Captures client requirements and service gaps.",
    ),
    Node(
        "risk",
        "Risk",
        "Ϫ",
        _CONTENT,
        "Probability of harm, vulnerability, danger, hazard",
        subcategory="Dynamics",
        default_rationale="Identifies vulnerabilities and safety concerns.",
    ),
    Node(
        "acuity",
        "Acuity",
        "⋁",
        _CONTENT,
        "Intensity, severity level, priority, urgency",
        subcategory="Dynamics",
    ),
    Node(
        "target",
        "Target",
        "✽",
        _CONTENT,
        "Specific objective, KPI, quota, benchmark",
        subcategory="Dynamics",
        default_rationale="Defines specific objectives and key performance indicators.",
    ),
    Node(
        "goal",
        "Goal",
        "✹",
        _CONTENT,
        "Strategic objective, aim, aspiration",
        subcategory="Dynamics",
        default_rationale="Tracks strategic objectives for case planning and outcomes.",
    ),
    Node(
        "driver",
        "Driver",
        "⟰",
        _CONTENT,
        "Causal force, root cause, contributing factor",
        subcategory="Dynamics",
    ),
    Node(
        "authority",
        "Authority",
        "✠",
        _CONTENT,
        "Decision-making power, mandate, jurisdiction",
        subcategory="Dynamics",
    ),
    Node(
        "issue",
        "Issue",
        "ϩ",
        _CONTENT,
        "Problem, concern, barrier, blocker",
        subcategory="Dynamics",
        default_rationale="Identifies problems, concerns, or barriers.",
    ),
    # Content: data and measurement (7)
    Node(
        "measurement",
        "Measurement",
        "⟡",
        _CONTENT,
        "Assessment, evaluation, score, rating",
        subcategory="Data",
    ),
    Node(
        "indicator",
        "Indicator",
        "✼",
        _CONTENT,
        "Metric signal, KPI, measure definition",
        subcategory="Data",
    ),
    Node("record", "Record", "⟦", _CONTENT, "Database row or file, log entry", subcategory="Data"),
    Node(
        "model",
        "Model",
        "꩜",
        _CONTENT,
        "Statistical logic, algorithm, prediction model",
        subcategory="Data",
    ),
    Node("data", "Data", "⌖", _CONTENT, "Raw information, dataset, field", subcategory="Data"),
    Node(
        "artifact",
        "Artifact",
        "ᚠ",
        _CONTENT,
        "Produced output, report, document, deliverable",
        subcategory="Data",
    ),
    Node(
        "complexity",
        "Complexity",
        "꩝",
        _CONTENT,
        "Complexity measure, difficulty level",
        subcategory="Data",
    ),
    # Modifier (7)
    Node(
        "type",
        "Type",
        "Ϡ",
        _MODIFIER,
        "Classification (taxonomy only)",
        subcategory="Classification",
        is_standalone_modifier=False,
        valid_extensions=("status", "condition", "characteristic", "capacity", "limitation"),
    ),
    Node(
        "status",
        "Status",
        "Ͼ",
        _MODIFIER,
        "Phase or standing",
        subcategory="State",
        is_standalone_modifier=True,
        valid_extensions=("condition", "characteristic", "role", "capacity", "limitation"),
    ),
    Node(
        "condition",
        "Condition",
        "ϟ",
        _MODIFIER,
        "Temporary state",
        subcategory="State",
        is_standalone_modifier=True,
        valid_extensions=("status", "characteristic", "role", "capacity", "limitation"),
    ),
    Node(
        "characteristic",
        "Characteristic",
        "ϡ",
        _MODIFIER,
        "Trait",
        subcategory="Trait",
        is_standalone_modifier=True,
        valid_extensions=("status", "condition", "role", "capacity", "limitation"),
    ),
    Node(
        "role",
        "Role",
        "☨",
        _MODIFIER,
        "Functional relation",
        subcategory="Relation",
        is_standalone_modifier=True,
        valid_extensions=("status", "condition", "characteristic", "capacity", "limitation"),
    ),
    Node(
        "capacity",
        "Capacity",
        "⋀",
        _MODIFIER,
        "Ability or intensity",
        subcategory="Ability",
        is_standalone_modifier=True,
        valid_extensions=("status", "condition", "characteristic", "role", "limitation"),
    ),
    Node(
        "limitation",
        "Limitation",
        "ᚾ",
        _MODIFIER,
        "Constraint",
        subcategory="Constraint",
        is_standalone_modifier=True,
        valid_extensions=("status", "condition", "characteristic", "role", "capacity"),
    ),
)
