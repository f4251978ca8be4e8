"""Result fusion and hybrid search."""

from docmesh.search.models import FusionParams, SearchResult
from docmesh.search.fusion import (
    FUSION_STRATEGIES,
    FusionStrategy,
    available_strategies,
    fuse,
    get_fusion_strategy,
    rrf_fuse,
    validate_params,
    weighted_sum_fuse,
)
from docmesh.search.hybrid import HybridSearchService, Retriever

__all__ = [
    # Models
    "FusionParams",
    "SearchResult",
    # Fusion
    "FUSION_STRATEGIES",
    "FusionStrategy",
    "available_strategies",
    "fuse",
    "get_fusion_strategy",
    "rrf_fuse",
    "validate_params",
    "weighted_sum_fuse",
    # Service
    "HybridSearchService",
    "Retriever",
]
