"""Keyword-weighted scoring of free-text simulation replies.

One interpreter over ``WeightedRubric`` configuration:

1. Find which trigger phrases of each criterion occur in the reply
2. Hit ratio = distinct hits / saturation, capped at 1.0
3. Apply bonus/penalty rules to the ratios of their target criteria
4. Sub-score = weight * ratio (rounded), then point penalties
5. Total = sum of sub-scores, clamped to 0-100
"""

import logging
import math
import re
from functools import lru_cache

from models.responses import ScoreResult
from models.schemas.rubric import AdjustmentRule, WeightedRubric

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, as the simulation UI always has."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return int(min(high, max(low, value)))


@lru_cache(maxsize=1024)
def _trigger_regex(trigger: str) -> re.Pattern:
    # Phrases match at the start of a word so stems like "apolog" still hit
    return re.compile(r"\b" + re.escape(trigger.lower()))


def find_triggers(text: str, triggers: list[str]) -> list[str]:
    """Return the distinct triggers present in ``text`` (case-insensitive)."""
    lowered = (text or "").lower()
    if not lowered.strip():
        return []
    return [t for t in dict.fromkeys(triggers) if _trigger_regex(t).search(lowered)]


def _rule_fires(rule: AdjustmentRule, text: str) -> bool:
    lowered = (text or "").lower()
    detected = bool(find_triggers(lowered, rule.triggers))
    if not detected and rule.pattern:
        detected = re.search(rule.pattern, lowered) is not None
    if not detected:
        return False
    return not find_triggers(lowered, rule.unless)


def score_keyword_weighted(text: str, rubric: WeightedRubric) -> ScoreResult:
    """Score a free-text reply against a weighted rubric."""
    matched: dict[str, list[str]] = {}
    ratios: dict[str, float] = {}
    for criterion in rubric.criteria:
        hits = find_triggers(text, criterion.triggers)
        matched[criterion.name] = hits
        ratios[criterion.name] = min(1.0, len(hits) / criterion.hits_for_full_credit)

    fired = [rule for rule in rubric.adjustments if _rule_fires(rule, text)]

    for rule in fired:
        for target in rule.targets:
            adjusted = ratios[target] * rule.ratio_scale + rule.ratio_offset
            ratios[target] = min(1.0, max(0.0, adjusted))

    per_criterion = {
        c.name: round_half_up(c.weight * ratios[c.name]) for c in rubric.criteria
    }

    total_deduction = 0
    for rule in fired:
        if not rule.points:
            continue
        if rule.targets:
            for target in rule.targets:
                per_criterion[target] = max(0, per_criterion[target] - rule.points)
        else:
            total_deduction += rule.points

    total = clamp_score(sum(per_criterion.values()) - total_deduction)

    feedback: list[str] = []
    for c in rubric.criteria:
        if ratios[c.name] > c.positive_threshold:
            feedback.append(c.positive_feedback)
        else:
            feedback.append(c.corrective_feedback)
    feedback.extend(rule.feedback for rule in fired if rule.feedback)

    penalties = [rule.name for rule in fired if rule.is_penalty]
    if penalties:
        logger.debug("Rubric %s penalties fired: %s", rubric.name, penalties)

    return ScoreResult(
        total=total,
        per_criterion=per_criterion,
        feedback=feedback,
        hit_ratios={name: round(r, 4) for name, r in ratios.items()},
        matched_triggers=matched,
        penalties=penalties,
    )


def average_total(results: list[ScoreResult]) -> int:
    """Rounded mean of several reply scores. Returns 0 for no replies."""
    if not results:
        return 0
    return round_half_up(sum(r.total for r in results) / len(results))
