import pytest

from services.errors import SubmissionError
from services.placement_scorer import score_placement

CORRECT = {
    "item1": "urgent-important",
    "item2": "important-not-urgent",
    "item3": "urgent-important",
}


def test_all_correct():
    result = score_placement(dict(CORRECT), CORRECT)
    assert result.total == 100
    assert all(result.per_item.values())
    assert result.feedback == ["All items placed correctly."]


def test_empty_placements_score_zero():
    result = score_placement({}, CORRECT)
    assert result.total == 0
    assert result.correct_count == 0
    assert result.per_item == {"item1": False, "item2": False, "item3": False}
    assert len(result.feedback) == 3


def test_partial_and_unplaced():
    placements = {"item1": "urgent-important", "item2": "urgent-important"}
    result = score_placement(placements, CORRECT)
    assert result.total == 33
    assert result.per_item == {"item1": True, "item2": False, "item3": False}
    assert "'item2' placed in 'urgent-important' but belongs in 'important-not-urgent'." in result.feedback
    assert "'item3' was not placed (belongs in 'urgent-important')." in result.feedback


def test_extra_items_are_ignored():
    placements = dict(CORRECT, item9="urgent-important")
    result = score_placement(placements, CORRECT)
    assert result.total == 100
    assert result.ignored_items == ["item9"]
    assert "item9" not in result.per_item


def test_two_of_three_rounds_up():
    placements = {"item1": "urgent-important", "item2": "important-not-urgent"}
    assert score_placement(placements, CORRECT).total == 67


def test_rejects_empty_reference():
    with pytest.raises(SubmissionError):
        score_placement({"item1": "x"}, {})
