import pytest

from services.errors import SubmissionError
from services.rank_scorer import score_rank_distance

IDEAL_10 = {str(i): i for i in range(1, 11)}


def test_ideal_order_scores_100():
    order = [str(i) for i in range(1, 11)]
    result = score_rank_distance(order, IDEAL_10)
    assert result.total == 100
    assert result.total_distance == 0
    assert all(t.distance == 0 for t in result.per_task)
    assert all(t.verdict == "correct" for t in result.per_task)


def test_reverse_order_of_ten_scores_zero():
    order = [str(i) for i in range(10, 0, -1)]
    result = score_rank_distance(order, IDEAL_10)
    assert result.max_distance == 45
    assert result.total_distance == 50
    assert result.total == 0


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_reverse_order_is_minimum(n):
    ideal = {f"t{i}": i for i in range(1, n + 1)}
    order = [f"t{i}" for i in range(n, 0, -1)]
    result = score_rank_distance(order, ideal)
    total_distance = sum(abs((n - i + 1) - i) for i in range(1, n + 1))
    expected = max(0, round((1 - total_distance / (n * (n - 1) / 2)) * 100))
    assert result.total_distance == total_distance
    assert result.total == expected


def test_adjacent_swap_is_acceptable():
    ideal = {"a": 1, "b": 2, "c": 3, "d": 4}
    result = score_rank_distance(["b", "a", "c", "d"], ideal)
    assert result.total_distance == 2
    assert result.total == 67
    assert [t.verdict for t in result.per_task] == ["acceptable", "acceptable", "correct", "correct"]
    assert result.feedback[0] == "Acceptable: slightly off (placed #1, ideal #2)."


def test_far_move_is_a_problem():
    ideal = {"a": 1, "b": 2, "c": 3}
    result = score_rank_distance(["c", "b", "a"], ideal)
    assert result.per_task[0].verdict == "problem"
    assert result.per_task[0].message == "Problem: placed #1 but ideal is #3, consider moving this."
    assert result.per_task[1].message == "Good: placed correctly at #2."


def test_single_task():
    result = score_rank_distance(["only"], {"only": 1})
    assert result.total == 100
    assert result.max_distance == 0


def test_rejects_duplicates():
    with pytest.raises(SubmissionError, match="Duplicate"):
        score_rank_distance(["a", "a", "b"], {"a": 1, "b": 2, "c": 3})


def test_rejects_missing_task():
    with pytest.raises(SubmissionError, match="missing c"):
        score_rank_distance(["a", "b"], {"a": 1, "b": 2, "c": 3})


def test_rejects_unknown_task():
    with pytest.raises(SubmissionError, match="unknown z"):
        score_rank_distance(["a", "b", "z"], {"a": 1, "b": 2, "c": 3})


def test_rejects_non_contiguous_ideal_ranks():
    with pytest.raises(SubmissionError, match="1..n"):
        score_rank_distance(["a", "b"], {"a": 1, "b": 3})


def test_rejects_empty_ranking():
    with pytest.raises(SubmissionError, match="No tasks to rank"):
        score_rank_distance([], {})


def test_submission_error_is_value_error():
    with pytest.raises(ValueError):
        score_rank_distance([], {"a": 1})
