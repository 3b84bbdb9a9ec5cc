"""Rubric configuration for every keyword-weighted simulation.

All trigger vocabularies, weights, feedback copy and tone/offer rules live
here; ``services.text_scorer`` interprets them. The vocabulary is tuning
data and is expected to change as replies are reviewed.
"""

import logging

from models.schemas.rubric import AdjustmentRule, Criterion, WeightedRubric
from models.schemas.task_rubric import FieldCriterion, TaskRubric

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Customer comments: any single signal earns the whole criterion
# ---------------------------------------------------------------------------
COMMENT_REPLY_RUBRIC = WeightedRubric(
    name="customer-comments",
    criteria=[
        Criterion(
            name="empathy",
            weight=40,
            triggers=["sorry", "apolog", "understand", "thank", "appreciate"],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Shows empathy / understanding.",
            corrective_feedback="Missing empathy: start with an apology or acknowledgment.",
        ),
        Criterion(
            name="resolution",
            weight=40,
            triggers=[
                "refund", "replace", "voucher", "help", "fix", "send",
                "arrange", "process", "resolve", "solution",
            ],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Offered some form of help or solution.",
            corrective_feedback="No clear resolution or action proposed.",
        ),
        Criterion(
            name="clarity",
            weight=20,
            triggers=[
                "order", "id", "tomorrow", "within", "confirm", "please",
                "share", "contact", "follow",
            ],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Clear, or asks for necessary info / next steps.",
            corrective_feedback="Could be clearer or ask for order details.",
        ),
    ],
    adjustments=[
        AdjustmentRule(
            name="negative_tone",
            triggers=["stupid", "hate", "angry", "idiot", "trash", "terrible", "awful"],
            points=30,
            feedback="Avoid negative tone or harsh words.",
        ),
    ],
)

# ---------------------------------------------------------------------------
# Sales negotiation: two distinct phrases per competency earn full credit
# ---------------------------------------------------------------------------
NEGOTIATION_RUBRIC = WeightedRubric(
    name="sales-negotiation",
    criteria=[
        Criterion(
            name="empathy",
            weight=25,
            triggers=[
                "thanks", "thank you", "appreciate", "understand", "i appreciate",
                "sorry", "glad", "happy to hear", "great to hear",
            ],
            saturation=2,
            positive_threshold=0.4,
            positive_feedback="Good empathy: you acknowledged their concern or thanked them.",
            corrective_feedback="Missing empathy: start with recognition of their budget concern.",
        ),
        Criterion(
            name="value",
            weight=30,
            triggers=[
                "roi", "return on", "outcome", "saves", "save", "time",
                "efficiency", "productivity", "uptime", "support", "integration",
                "reduce cost", "value", "benefit", "results",
            ],
            saturation=2,
            positive_threshold=0.3,
            positive_feedback="You reinforced value: linked features to ROI/outcomes.",
            corrective_feedback="Value reinforcement is missing: reiterate key outcomes you deliver.",
        ),
        Criterion(
            name="alternatives",
            weight=30,
            triggers=[
                "pilot", "trial", "6-month", "6 month", "6 months", "12-month",
                "12 month", "12 months", "commit", "commitment", "startup discount",
                "discount", "phased", "limited", "seat", "seats", "tier", "bundle",
                "option", "pay monthly", "monthly",
            ],
            saturation=2,
            positive_threshold=0.4,
            positive_feedback=(
                "Good: you proposed alternatives that protect margin while moving the deal forward."
            ),
            corrective_feedback=(
                "No strong alternative offer: suggest conditional concessions "
                "(pilot, longer commitment, limited features)."
            ),
        ),
        Criterion(
            name="closing",
            weight=15,
            triggers=[
                "call", "jump on", "shall i", "shall we", "which option",
                "which would work", "finalise", "finalize", "sign", "ready to move",
                "next step", "let me know", "confirm", "send updated quote",
            ],
            saturation=2,
            positive_threshold=0.3,
            positive_feedback="Nice close / next step: you asked for a decision or offered a call/quote.",
            corrective_feedback="Missing a clear call-to-action: close with a next step.",
        ),
    ],
    adjustments=[
        AdjustmentRule(
            name="conditional_offer",
            triggers=[
                "if you commit", "if you sign", "commit to", "12 months", "6 months",
                "for 12 months", "for 6 months", "pilot", "trial",
            ],
            targets=["alternatives"],
            ratio_scale=1.2,
            is_penalty=False,
        ),
        AdjustmentRule(
            name="unconditional_discount",
            pattern=r"\b(?:30|50)(?:\s?%|\s?percent)",
            unless=[
                "if", "commit", "commitment", "sign", "for 12", "for 6", "on 12",
                "on 6", "with a", "subject to", "upon", "when you", "if you",
            ],
            targets=["alternatives"],
            ratio_offset=-0.35,
            feedback=(
                "You offered a discount but it appeared unconditional: prefer conditional concessions."
            ),
        ),
    ],
)

# ---------------------------------------------------------------------------
# Team conflict: any single signal earns the whole criterion
# ---------------------------------------------------------------------------
CONFLICT_RUBRIC = WeightedRubric(
    name="team-conflict",
    criteria=[
        Criterion(
            name="empathy",
            weight=25,
            triggers=[
                "understand", "acknowledge", "hear", "appreciate", "thank",
                "see", "perspective", "valid",
            ],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Good empathy: you acknowledged both perspectives.",
            corrective_feedback="Missing empathy: acknowledge both team members' viewpoints.",
        ),
        Criterion(
            name="neutrality",
            weight=25,
            triggers=[
                "both", "team", "together", "we", "us", "align", "common",
                "goal", "objective",
            ],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Maintained neutrality: focused on team goals.",
            corrective_feedback="Could be more neutral: emphasize shared objectives.",
        ),
        Criterion(
            name="solution",
            weight=30,
            triggers=[
                "suggest", "propose", "how about", "let's", "can we", "meet",
                "discuss", "compromise", "alternative", "option",
            ],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Proposed a solution or next step.",
            corrective_feedback="No clear solution offered: suggest a concrete next action.",
        ),
        Criterion(
            name="deescalation",
            weight=20,
            triggers=[
                "calm", "step back", "pause", "take a moment", "focus on",
                "priority", "deadline",
            ],
            saturation=1,
            positive_threshold=0.0,
            positive_feedback="Helped de-escalate the situation.",
            corrective_feedback="Could add de-escalation language (e.g. \"Let's focus on...\").",
        ),
    ],
    adjustments=[
        AdjustmentRule(
            name="aggressive_tone",
            triggers=["wrong", "fault", "blame", "always", "never", "should have", "need to"],
            targets=["empathy", "neutrality"],
            points=15,
            feedback="Tone may come across as taking sides or being aggressive.",
        ),
    ],
)

_RUBRICS: dict[str, WeightedRubric] = {
    r.name: r for r in (COMMENT_REPLY_RUBRIC, NEGOTIATION_RUBRIC, CONFLICT_RUBRIC)
}


def get_rubric(name: str) -> WeightedRubric:
    """Look up a rubric by simulation type."""
    try:
        return _RUBRICS[name]
    except KeyError:
        raise ValueError(f"Unknown rubric: {name}") from None


def list_rubrics() -> list[str]:
    return sorted(_RUBRICS)


# ---------------------------------------------------------------------------
# Multi-field task forms (smartwatch product launch)
# ---------------------------------------------------------------------------
MARKET_RESEARCH_TASK_RUBRIC = TaskRubric(
    name="market-research",
    criteria=[
        FieldCriterion(
            field="target_market",
            max_score=30,
            keywords=["persona", "target", "age", "demographic", "segment", "user", "customer"],
            min_length=40,
        ),
        FieldCriterion(
            field="user_needs",
            max_score=30,
            keywords=["need", "requirement", "want", "desire", "pain", "problem", "challenge"],
            min_length=40,
        ),
        FieldCriterion(
            field="competitive_diff",
            max_score=20,
            keywords=["competitor", "competitive", "differentiator", "advantage", "unique", "vs", "versus"],
            min_length=30,
        ),
        FieldCriterion(
            field="constraints",
            max_score=20,
            keywords=[
                "regulatory", "hipaa", "privacy", "battery", "price", "cost",
                "budget", "constraint", "limit", "regulation",
            ],
        ),
    ],
)

DATA_INSIGHTS_TASK_RUBRIC = TaskRubric(
    name="data-insights",
    criteria=[
        FieldCriterion(
            field="insights",
            max_score=40,
            keywords=[
                "battery", "power", "charge", "accuracy", "sensor", "step",
                "onboarding", "setup", "retention", "churn",
            ],
            min_length=60,
        ),
        FieldCriterion(
            field="prioritized_actions",
            max_score=30,
            keywords=["battery", "firmware", "accuracy", "onboarding", "priority"],
            min_length=40,
        ),
        FieldCriterion(
            field="customer_replies",
            max_score=30,
            keywords=["sorry", "apologize", "understand", "update", "fix"],
            min_length=40,
        ),
    ],
)

_TASK_RUBRICS: dict[str, TaskRubric] = {
    r.name: r for r in (MARKET_RESEARCH_TASK_RUBRIC, DATA_INSIGHTS_TASK_RUBRIC)
}

# Share of the final grade per task of the launch simulation (sums to 100)
LAUNCH_TASK_WEIGHTS: dict[str, int] = {
    "task1": 18,
    "task2": 12,
    "task3": 12,
    "task4": 12,
    "task5": 14,
    "task6": 22,
    "task7": 10,
}

# How much each task evidences each skill
LAUNCH_SKILL_MAPPING: dict[str, dict[str, float]] = {
    "task1": {"Product Sense": 0.4, "Data Insights": 0.3, "Communication": 0.3},
    "task2": {"Technical Feasibility": 0.5, "Teaming & Planning": 0.5},
    "task3": {"Teaming & Planning": 0.6, "Product Sense": 0.4},
    "task4": {"UX": 1.0},
    "task5": {"GTM & Marketing": 0.7, "Product Sense": 0.3},
    "task6": {"Data Insights": 0.5, "Communication": 0.5},
    "task7": {"Communication": 0.6, "Product Sense": 0.4},
}


def get_task_rubric(name: str) -> TaskRubric:
    """Look up a task form rubric by name."""
    try:
        return _TASK_RUBRICS[name]
    except KeyError:
        raise ValueError(f"Unknown task rubric: {name}") from None


def list_task_rubrics() -> list[str]:
    return sorted(_TASK_RUBRICS)
