"""Placement-correctness scoring for drag-and-drop classification."""

import logging

from models.responses import PlacementResult
from services.errors import SubmissionError
from services.text_scorer import round_half_up

logger = logging.getLogger(__name__)


def score_placement(
    placements: dict[str, str],
    correct: dict[str, str],
) -> PlacementResult:
    """Grade item -> category placements against the reference mapping.

    Placements for items outside ``correct`` are ignored; items the user
    never placed count as incorrect.
    """
    if not correct:
        raise SubmissionError("No reference placements to grade against")

    per_item: dict[str, bool] = {}
    feedback: list[str] = []
    for item_id, category in correct.items():
        placed = placements.get(item_id)
        per_item[item_id] = placed == category
        if placed is None:
            feedback.append(f"'{item_id}' was not placed (belongs in '{category}').")
        elif placed != category:
            feedback.append(f"'{item_id}' placed in '{placed}' but belongs in '{category}'.")

    correct_count = sum(per_item.values())
    ignored = sorted(item for item in placements if item not in correct)
    if ignored:
        logger.debug("Ignoring placements for unknown items: %s", ignored)

    if correct_count == len(correct):
        feedback.insert(0, "All items placed correctly.")

    return PlacementResult(
        total=round_half_up(100 * correct_count / len(correct)),
        per_item=per_item,
        correct_count=correct_count,
        total_items=len(correct),
        ignored_items=ignored,
        feedback=feedback,
    )
