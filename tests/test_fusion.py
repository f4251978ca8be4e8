"""Tests for result fusion strategies."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from docmesh.config import ConfigError
from docmesh.search import (
    FusionParams,
    SearchResult,
    available_strategies,
    fuse,
    get_fusion_strategy,
    rrf_fuse,
    validate_params,
    weighted_sum_fuse,
)


def hit(key: str, score: float = 1.0, **kwargs) -> SearchResult:
    return SearchResult(document_id=f"doc-{key}", chunk_id=key, score=score, **kwargs)


def keys(results: list[SearchResult]) -> list[str]:
    return [r.key for r in results]


class TestRRF:
    def test_items_in_both_lists_at_mirrored_ranks_tie(self):
        """x and y both score 1/61 + 1/62; ties keep first-appearance order."""
        results = rrf_fuse([hit("x"), hit("y")], [hit("y"), hit("x")], FusionParams())

        assert keys(results) == ["x", "y"]
        expected = 1 / 61 + 1 / 62
        assert results[0].score == pytest.approx(expected)
        assert results[1].score == pytest.approx(expected)

    def test_item_in_both_lists_outranks_single_list_items(self):
        results = rrf_fuse([hit("a"), hit("shared")], [hit("shared"), hit("b")], FusionParams())

        assert keys(results)[0] == "shared"

    def test_disjoint_lists_interleave(self):
        results = rrf_fuse([hit("a1"), hit("a2")], [hit("b1"), hit("b2")], FusionParams())

        assert keys(results) == ["a1", "b1", "a2", "b2"]

    def test_scores_use_rank_constant(self):
        results = rrf_fuse([hit("a")], [], FusionParams.for_rrf(rrf_k=1, top_k=10))

        assert results[0].score == pytest.approx(0.5)

    def test_truncates_to_top_k(self):
        vector = [hit(f"v{i}") for i in range(10)]
        graph = [hit(f"g{i}") for i in range(10)]

        results = rrf_fuse(vector, graph, FusionParams.for_rrf(rrf_k=60, top_k=3))

        assert keys(results) == ["v0", "g0", "v1"]

    def test_document_id_is_key_when_no_chunk(self):
        a = SearchResult(document_id="d1", score=3.0)
        b = SearchResult(document_id="d1", score=0.2)

        results = rrf_fuse([a], [b], FusionParams())

        assert len(results) == 1
        assert results[0].score == pytest.approx(2 / 61)

    def test_first_list_record_is_kept(self):
        results = rrf_fuse(
            [hit("x", snippet="from vector")],
            [hit("x", snippet="from graph", heading_path="# G")],
            FusionParams(),
        )

        assert results[0].snippet == "from vector"
        assert results[0].heading_path is None

    def test_second_list_record_used_when_only_there(self):
        results = rrf_fuse([], [hit("x", snippet="from graph")], FusionParams())

        assert results[0].snippet == "from graph"

    def test_inputs_are_not_mutated(self):
        original = hit("x", score=7.0)

        rrf_fuse([original], [], FusionParams())

        assert original.score == 7.0

    def test_both_empty(self):
        assert rrf_fuse([], [], FusionParams()) == []

    @pytest.mark.parametrize("params", [FusionParams(rrf_k=0), FusionParams(top_k=0)])
    def test_non_positive_parameters_raise(self, params):
        with pytest.raises(ConfigError, match="must be positive"):
            rrf_fuse([hit("a")], [], params)


class TestWeightedSum:
    def test_max_score_item_in_one_list_gets_that_weight(self):
        params = FusionParams.for_weighted_sum(0.6, 0.4, top_k=10)

        results = weighted_sum_fuse([hit("a", 5.0), hit("b", 2.5)], [], params)

        assert keys(results) == ["a", "b"]
        assert results[0].score == pytest.approx(0.6)
        assert results[1].score == pytest.approx(0.3)

    def test_item_in_both_lists_wins(self):
        params = FusionParams.for_weighted_sum(0.6, 0.4, top_k=10)

        results = weighted_sum_fuse([hit("x", 2.0), hit("y", 1.0)], [hit("y", 10.0)], params)

        assert keys(results) == ["y", "x"]
        assert results[0].score == pytest.approx(0.6 * 0.5 + 0.4)
        assert results[1].score == pytest.approx(0.6)

    def test_zero_max_score_does_not_divide_by_zero(self):
        params = FusionParams.for_weighted_sum(0.5, 0.5, top_k=10)

        results = weighted_sum_fuse([hit("a", 0.0)], [hit("b", 4.0)], params)

        assert keys(results) == ["b", "a"]
        assert results[1].score == 0.0

    def test_truncates_to_top_k(self):
        params = FusionParams.for_weighted_sum(0.6, 0.4, top_k=2)

        results = weighted_sum_fuse([hit(f"v{i}", 10 - i) for i in range(5)], [], params)

        assert keys(results) == ["v0", "v1"]

    def test_rrf_k_is_ignored(self):
        params = FusionParams(rrf_k=0)

        assert keys(weighted_sum_fuse([hit("a")], [], params)) == ["a"]

    def test_non_positive_top_k_raises(self):
        with pytest.raises(ConfigError):
            weighted_sum_fuse([hit("a")], [], FusionParams(top_k=-1))


class TestFusionParams:
    def test_defaults(self):
        assert FusionParams.defaults() == FusionParams(rrf_k=60, vector_weight=0.6, graph_weight=0.4, top_k=10)

    def test_factories_keep_other_defaults(self):
        assert FusionParams.for_rrf(30, 5).vector_weight == 0.6
        assert FusionParams.for_weighted_sum(0.5, 0.5, 3).rrf_k == 60


class TestStrategyLookup:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("rrf", rrf_fuse),
            ("RRF", rrf_fuse),
            (" weighted_sum ", weighted_sum_fuse),
            ("WEIGHTED_SUM", weighted_sum_fuse),
            (None, rrf_fuse),
        ],
    )
    def test_lookup_is_case_insensitive(self, name, expected):
        assert get_fusion_strategy(name) is expected

    def test_unknown_strategy_lists_available(self):
        with pytest.raises(ConfigError, match="Unknown fusion strategy: borda. Available: rrf, weighted_sum"):
            get_fusion_strategy("borda")

    def test_available_strategies(self):
        assert available_strategies() == ["rrf", "weighted_sum"]

    def test_validate_params_checks_rrf_k_only_for_rrf(self):
        validate_params(weighted_sum_fuse, FusionParams(rrf_k=0))

        with pytest.raises(ConfigError, match="rrf_k must be positive"):
            validate_params(rrf_fuse, FusionParams(rrf_k=0))
        with pytest.raises(ConfigError, match="top_k must be positive"):
            validate_params(weighted_sum_fuse, FusionParams(top_k=0))

    def test_fuse_dispatches_by_name(self):
        params = FusionParams.for_weighted_sum(1.0, 0.0, top_k=10)

        results = fuse([hit("a", 2.0)], [hit("b", 9.0)], params, strategy="weighted_sum")

        assert results[0].score == pytest.approx(1.0)
        assert results[1].score == 0.0


result_lists = st.lists(
    st.builds(hit, st.sampled_from("abcdefghij"), st.floats(0, 100)), max_size=15
)


@given(vector=result_lists, graph=result_lists, top_k=st.integers(1, 12))
def test_fused_results_are_unique_sorted_and_bounded(vector, graph, top_k):
    """Property: for every strategy, output keys are unique and scores non-increasing."""
    for strategy in available_strategies():
        results = fuse(vector, graph, FusionParams(top_k=top_k), strategy)

        result_keys = keys(results)
        assert len(result_keys) == len(set(result_keys))
        assert len(results) <= top_k
        assert len(results) == min(top_k, len(set(keys(vector)) | set(keys(graph))))
        assert all(a.score >= b.score for a, b in zip(results, results[1:]))
