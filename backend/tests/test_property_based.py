"""Property-based checks of the scoring invariants."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from services.placement_scorer import score_placement
from services.rank_scorer import score_rank_distance
from services.rubrics import COMMENT_REPLY_RUBRIC, CONFLICT_RUBRIC, NEGOTIATION_RUBRIC
from services.text_scorer import score_keyword_weighted

RUBRICS = [COMMENT_REPLY_RUBRIC, NEGOTIATION_RUBRIC, CONFLICT_RUBRIC]

# Mix arbitrary text with real trigger phrases so rules actually fire
_vocabulary = sorted({
    t
    for r in RUBRICS
    for t in [*(x for c in r.criteria for x in c.triggers), *(x for a in r.adjustments for x in a.triggers)]
} | {"30%", "50 percent", "if"})

reply_st = st.one_of(
    st.text(max_size=300),
    st.lists(st.sampled_from(_vocabulary), max_size=40).map(" ".join),
)


@pytest.mark.property
@settings(max_examples=200)
@given(text=reply_st, rubric_idx=st.integers(min_value=0, max_value=len(RUBRICS) - 1))
def test_text_total_in_range_and_bounded_by_weights(text, rubric_idx):
    rubric = RUBRICS[rubric_idx]
    result = score_keyword_weighted(text, rubric)
    assert 0 <= result.total <= 100
    for name, weight in rubric.weights.items():
        assert 0 <= result.per_criterion[name] <= weight
    assert len(result.feedback) >= len(rubric.criteria)


@pytest.mark.property
@settings(max_examples=100)
@given(text=reply_st)
def test_text_scoring_is_idempotent(text):
    for rubric in RUBRICS:
        assert score_keyword_weighted(text, rubric) == score_keyword_weighted(text, rubric)


@pytest.mark.property
@settings(max_examples=200)
@given(order=st.permutations([f"t{i}" for i in range(1, 9)]))
def test_rank_total_in_range(order):
    ideal = {f"t{i}": i for i in range(1, 9)}
    result = score_rank_distance(list(order), ideal)
    assert 0 <= result.total <= 100
    assert result.total_distance == sum(t.distance for t in result.per_task)


@pytest.mark.property
@settings(max_examples=200)
@given(
    placements=st.dictionaries(
        st.sampled_from(["a", "b", "c", "d", "x"]),
        st.sampled_from(["cat1", "cat2"]),
    )
)
def test_placement_total_in_range(placements):
    correct = {"a": "cat1", "b": "cat2", "c": "cat1", "d": "cat2"}
    result = score_placement(placements, correct)
    assert 0 <= result.total <= 100
    assert result.correct_count == sum(result.per_item.values())
