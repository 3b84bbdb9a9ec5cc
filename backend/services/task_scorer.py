"""Scoring of multi-field task forms and of a whole simulation run.

A task form is a set of named text fields. With a ``TaskRubric`` each field
earns keyword coverage plus length bonuses up to its ``max_score``; without
one the submission falls back to a length-only estimate. The per-task scores
are then combined into a weighted final score and per-skill scores.
"""

import logging

from models.responses import TaskScoreResult, TaskSummary
from models.schemas.task_rubric import FieldCriterion, TaskRubric
from services.errors import SubmissionError
from services.rubrics import LAUNCH_SKILL_MAPPING, LAUNCH_TASK_WEIGHTS
from services.text_scorer import clamp_score, find_triggers, round_half_up

logger = logging.getLogger(__name__)

MIN_LENGTH_BONUS = 0.3
DETAIL_BONUS = 0.2
DETAIL_CHARS = 50

# Length fallback: this many characters earn full marks
FULL_LENGTH_CHARS = 500
LENGTH_SCORE_FLOOR = 20


def _field_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value if v is not None)
    return str(value)


def keyword_coverage(text: str, keywords: list[str]) -> float:
    """Share of ``keywords`` present in ``text``, 0.0 when there are none."""
    keywords = list(dict.fromkeys(keywords))
    if not keywords:
        return 0.0
    return min(1.0, len(find_triggers(text, keywords)) / len(keywords))


def score_field(text: str, criterion: FieldCriterion) -> float:
    """Unrounded points for one field, at most ``criterion.max_score``."""
    score = keyword_coverage(text, criterion.keywords) * criterion.max_score
    if criterion.min_length is not None and len(text) >= criterion.min_length:
        score += criterion.max_score * MIN_LENGTH_BONUS
    if len(text) > DETAIL_CHARS:
        score += criterion.max_score * DETAIL_BONUS
    return min(score, criterion.max_score)


def score_task_rubric(submission: dict, rubric: TaskRubric) -> TaskScoreResult:
    """Score a task form field by field and normalize to 0-100."""
    breakdown: dict[str, int] = {}
    strengths: list[str] = []
    improvements: list[str] = []
    total = 0.0

    for criterion in rubric.criteria:
        text = _field_text(submission.get(criterion.field))
        score = score_field(text, criterion)
        total += score
        breakdown[criterion.field] = round_half_up(score)

        if score >= criterion.max_score * 0.8:
            strengths.append(f"Strong {criterion.field} analysis")
        elif score < criterion.max_score * 0.5:
            improvements.append(f"Improve {criterion.field} - add more detail and analysis")

    return TaskScoreResult(
        score=clamp_score(round_half_up(total / rubric.max_possible * 100)),
        breakdown=breakdown,
        strengths=strengths or ["Good effort on the task"],
        improvements=improvements or ["Continue practicing"],
        method="rubric",
    )


def score_by_length(submission: dict) -> TaskScoreResult:
    """Length-only estimate for tasks without a rubric. Never below 20."""
    length = sum(len(_field_text(v)) for v in submission.values())
    score = max(LENGTH_SCORE_FLOOR, min(round_half_up(length / FULL_LENGTH_CHARS * 100), 100))
    return TaskScoreResult(
        score=score,
        strengths=["Good detail in your response"] if length > 200 else [],
        improvements=["Add more detail to your response"] if length < 100 else ["Keep practicing"],
        method="length",
    )


def score_task(submission: dict, rubric: TaskRubric | None = None) -> TaskScoreResult:
    if rubric is None:
        logger.debug("No rubric for task submission, using length-based scoring")
        return score_by_length(submission)
    return score_task_rubric(submission, rubric)


def _weighted_mean(scores: dict[str, int], weights: dict[str, float]) -> int:
    weight_sum = sum(weights.values())
    if weight_sum <= 0:
        raise SubmissionError("Task weights must sum to more than zero")
    weighted = sum(scores.get(task_id, 0) * w for task_id, w in weights.items())
    return round_half_up(weighted / weight_sum)


def calculate_final_score(
    task_scores: dict[str, int],
    weights: dict[str, float] | None = None,
) -> int:
    """Weighted mean of task scores; tasks without a score count as 0."""
    return _weighted_mean(task_scores, LAUNCH_TASK_WEIGHTS if weights is None else weights)


def calculate_skill_breakdown(
    task_scores: dict[str, int],
    skill_mapping: dict[str, dict[str, float]] | None = None,
) -> dict[str, int]:
    """Per-skill weighted mean over the tasks that evidence each skill."""
    if skill_mapping is None:
        skill_mapping = LAUNCH_SKILL_MAPPING
    per_skill: dict[str, dict[str, float]] = {}
    for task_id, skills in skill_mapping.items():
        for skill, weight in skills.items():
            per_skill.setdefault(skill, {})[task_id] = weight
    return {skill: _weighted_mean(task_scores, weights) for skill, weights in per_skill.items()}


def summarize_tasks(task_scores: dict[str, int]) -> TaskSummary:
    return TaskSummary(
        final_score=calculate_final_score(task_scores),
        skills=calculate_skill_breakdown(task_scores),
    )
