"""Fusion of two ranked result lists into one.

Two strategies are available by name:

    rrf           score(d) = sum over lists of 1 / (rrf_k + rank + 1)
    weighted_sum  score(d) = vector_weight * a(d) / max(a) + graph_weight * b(d) / max(b)

Both are pure functions of (vector_results, graph_results, params). The
identity of a hit is its chunk id, or its document id for document-level
hits. When a hit appears in both lists the first list's record is kept;
only its score is replaced by the fused score.
"""

import logging
from typing import Callable

from docmesh.config import ConfigError
from docmesh.constants.search import DEFAULT_FUSION_STRATEGY, RRF_STRATEGY, WEIGHTED_SUM_STRATEGY
from docmesh.search.models import FusionParams, SearchResult

logger = logging.getLogger(__name__)

FusionStrategy = Callable[[list[SearchResult], list[SearchResult], FusionParams], list[SearchResult]]


def _require_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")


def _rank(
    scores: dict[str, float], records: dict[str, SearchResult], top_k: int
) -> list[SearchResult]:
    """Sort keys by fused score and copy the top records with their new score.

    sorted() is stable, so equal scores keep first-appearance order.
    """
    ordered = sorted(scores, key=lambda key: -scores[key])
    return [records[key].model_copy(update={"score": scores[key]}) for key in ordered[:top_k]]


def rrf_fuse(
    vector_results: list[SearchResult],
    graph_results: list[SearchResult],
    params: FusionParams,
) -> list[SearchResult]:
    """Merge two ranked lists with Reciprocal Rank Fusion.

    Args:
        vector_results: First ranked list (best first).
        graph_results: Second ranked list (best first).
        params: Uses rrf_k and top_k.

    Returns:
        Up to top_k results sorted by summed reciprocal rank, highest first.

    Raises:
        ConfigError: If rrf_k or top_k is not positive.
    """
    validate_params(rrf_fuse, params)

    logger.debug(
        f"RRF fusion: vector_results={len(vector_results)}, graph_results={len(graph_results)}, "
        f"rrf_k={params.rrf_k}, top_k={params.top_k}"
    )

    scores: dict[str, float] = {}
    records: dict[str, SearchResult] = {}

    for rank, result in enumerate(vector_results):
        key = result.key
        scores[key] = scores.get(key, 0.0) + 1.0 / (params.rrf_k + rank + 1)
        records[key] = result

    for rank, result in enumerate(graph_results):
        key = result.key
        scores[key] = scores.get(key, 0.0) + 1.0 / (params.rrf_k + rank + 1)
        records.setdefault(key, result)

    return _rank(scores, records, params.top_k)


def _max_score(results: list[SearchResult]) -> float:
    """Normalization divisor for a list; 1.0 when the list is empty or peaks at zero."""
    max_score = max((r.score for r in results), default=1.0)
    return max_score if max_score != 0 else 1.0


def weighted_sum_fuse(
    vector_results: list[SearchResult],
    graph_results: list[SearchResult],
    params: FusionParams,
) -> list[SearchResult]:
    """Merge two scored lists with a weighted sum of max-normalized scores.

    Args:
        vector_results: First scored list.
        graph_results: Second scored list.
        params: Uses vector_weight, graph_weight and top_k.

    Returns:
        Up to top_k results sorted by weighted score, highest first. A hit
        missing from one list gets nothing from that side.

    Raises:
        ConfigError: If top_k is not positive.
    """
    validate_params(weighted_sum_fuse, params)

    logger.debug(
        f"WeightedSum fusion: vector_results={len(vector_results)}, "
        f"graph_results={len(graph_results)}, vector_weight={params.vector_weight}, "
        f"graph_weight={params.graph_weight}, top_k={params.top_k}"
    )

    max_vector = _max_score(vector_results)
    max_graph = _max_score(graph_results)

    scores: dict[str, float] = {}
    records: dict[str, SearchResult] = {}

    for result in vector_results:
        key = result.key
        scores[key] = scores.get(key, 0.0) + params.vector_weight * (result.score / max_vector)
        records[key] = result

    for result in graph_results:
        key = result.key
        scores[key] = scores.get(key, 0.0) + params.graph_weight * (result.score / max_graph)
        records.setdefault(key, result)

    return _rank(scores, records, params.top_k)


FUSION_STRATEGIES: dict[str, FusionStrategy] = {
    RRF_STRATEGY: rrf_fuse,
    WEIGHTED_SUM_STRATEGY: weighted_sum_fuse,
}


def validate_params(strategy: FusionStrategy, params: FusionParams) -> None:
    """Check the parameters a fusion strategy reads.

    Args:
        strategy: Fusion function the parameters are meant for.
        params: Parameters to check. top_k is always checked, rrf_k only for RRF.

    Raises:
        ConfigError: If a checked parameter is not positive.
    """
    if strategy is rrf_fuse:
        _require_positive("rrf_k", params.rrf_k)
    _require_positive("top_k", params.top_k)


def available_strategies() -> list[str]:
    """Names accepted by get_fusion_strategy()."""
    return list(FUSION_STRATEGIES)


def get_fusion_strategy(name: str | None) -> FusionStrategy:
    """Look up a fusion strategy by case-insensitive name.

    Args:
        name: Strategy name such as "rrf" or "WEIGHTED_SUM". None selects the default.

    Returns:
        The fusion function.

    Raises:
        ConfigError: If no strategy has that name.
    """
    normalized = name.strip().lower() if name is not None else DEFAULT_FUSION_STRATEGY
    try:
        return FUSION_STRATEGIES[normalized]
    except KeyError:
        raise ConfigError(
            f"Unknown fusion strategy: {name}. Available: {', '.join(available_strategies())}"
        ) from None


def fuse(
    vector_results: list[SearchResult],
    graph_results: list[SearchResult],
    params: FusionParams,
    strategy: str | None = None,
) -> list[SearchResult]:
    """Fuse two result lists with the named strategy."""
    return get_fusion_strategy(strategy)(vector_results, graph_results, params)
