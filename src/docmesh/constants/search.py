"""Hybrid search and fusion defaults.

Hybrid search runs a keyword retrieval and a semantic retrieval for the same
query, then merges the two ranked lists with a named fusion strategy.
"""

# =============================================================================
# Fusion Strategies
# =============================================================================
# "rrf" scores items by reciprocal rank and ignores raw scores entirely.
# "weighted_sum" normalizes each list by its best score and blends the two
# lists with VECTOR_WEIGHT / GRAPH_WEIGHT.

RRF_STRATEGY = "rrf"
WEIGHTED_SUM_STRATEGY = "weighted_sum"
DEFAULT_FUSION_STRATEGY = RRF_STRATEGY

# =============================================================================
# Fusion Parameters
# =============================================================================
# RRF_K = 60 is the constant from the original RRF paper; larger values flatten
# the difference between top and lower ranks.

DEFAULT_RRF_K = 60
DEFAULT_VECTOR_WEIGHT = 0.6
DEFAULT_GRAPH_WEIGHT = 0.4
DEFAULT_TOP_K = 10

# =============================================================================
# Retrieval Fan-out
# =============================================================================
# Each retrieval fetches more candidates than the final result count so that
# items ranked low in one list can still surface after fusion.

RETRIEVAL_FANOUT = 2
