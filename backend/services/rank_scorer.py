"""Rank-distance scoring for the task prioritization exercise."""

import logging
from collections import Counter

from models.responses import RankDistanceResult, TaskDistance
from services.errors import SubmissionError
from services.text_scorer import clamp_score, round_half_up

logger = logging.getLogger(__name__)


def _validate(user_order: list[str], ideal_ranks: dict[str, int]) -> None:
    if not ideal_ranks:
        raise SubmissionError("No tasks to rank")

    duplicates = sorted(k for k, n in Counter(user_order).items() if n > 1)
    if duplicates:
        raise SubmissionError(f"Duplicate task ids in ranking: {', '.join(duplicates)}")

    submitted = set(user_order)
    expected = set(ideal_ranks)
    missing = sorted(expected - submitted)
    unknown = sorted(submitted - expected)
    if missing or unknown:
        parts = []
        if missing:
            parts.append(f"missing {', '.join(missing)}")
        if unknown:
            parts.append(f"unknown {', '.join(unknown)}")
        raise SubmissionError(f"Ranking does not match the task set: {'; '.join(parts)}")

    if sorted(ideal_ranks.values()) != list(range(1, len(ideal_ranks) + 1)):
        raise SubmissionError("Ideal ranks must be exactly 1..n")


def _verdict(distance: int, user_rank: int, ideal_rank: int) -> tuple[str, str]:
    if distance == 0:
        return "correct", f"Good: placed correctly at #{user_rank}."
    if distance == 1:
        return (
            "acceptable",
            f"Acceptable: slightly off (placed #{user_rank}, ideal #{ideal_rank}).",
        )
    return (
        "problem",
        f"Problem: placed #{user_rank} but ideal is #{ideal_rank}, consider moving this.",
    )


def score_rank_distance(
    user_order: list[str],
    ideal_ranks: dict[str, int],
) -> RankDistanceResult:
    """Grade a user's task ranking against the ideal ranking.

    Raises SubmissionError unless ``user_order`` is a permutation of
    exactly the tasks in ``ideal_ranks``.
    """
    _validate(user_order, ideal_ranks)

    per_task: list[TaskDistance] = []
    total_distance = 0
    for idx, task_id in enumerate(user_order):
        user_rank = idx + 1
        ideal_rank = ideal_ranks[task_id]
        distance = abs(user_rank - ideal_rank)
        total_distance += distance
        verdict, message = _verdict(distance, user_rank, ideal_rank)
        per_task.append(TaskDistance(
            id=task_id,
            user_rank=user_rank,
            ideal_rank=ideal_rank,
            distance=distance,
            verdict=verdict,
            message=message,
        ))

    n = len(user_order)
    max_distance = n * (n - 1) / 2
    if max_distance == 0:
        # A single task can only be in the ideal order
        total = 100
    else:
        total = clamp_score(round_half_up((1 - total_distance / max_distance) * 100))

    return RankDistanceResult(
        total=total,
        total_distance=total_distance,
        max_distance=max_distance,
        per_task=per_task,
        feedback=[t.message for t in per_task],
    )
