"""Search result and fusion parameter models."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from docmesh.constants.search import (
    DEFAULT_GRAPH_WEIGHT,
    DEFAULT_RRF_K,
    DEFAULT_TOP_K,
    DEFAULT_VECTOR_WEIGHT,
)


class SearchResult(BaseModel):
    """A single hit from a retrieval backend or from fusion."""

    document_id: str = Field(..., description="Document the hit belongs to")
    repository_id: str | None = Field(None, description="Repository of the document")
    path: str = Field("", description="Repository-relative document path")
    commit_sha: str | None = Field(None, description="Commit the indexed version came from")
    chunk_id: str | None = Field(None, description="Chunk id for chunk-level hits")
    heading_path: str | None = Field(None, description="Heading path of the chunk")
    score: float = Field(..., description="Backend score, or fused score after fusion")
    snippet: str | None = Field(None, description="Matched text excerpt")
    highlighted_snippet: str | None = Field(None, description="Excerpt with match markup")

    @property
    def key(self) -> str:
        """Identity used to match the same hit across result lists."""
        return self.chunk_id if self.chunk_id is not None else self.document_id


@dataclass(frozen=True)
class FusionParams:
    """Parameters for a fusion strategy.

    Each strategy reads only the fields it needs: rrf_k for RRF, the two
    weights for weighted-sum, and top_k for both.
    """

    rrf_k: int = DEFAULT_RRF_K
    vector_weight: float = DEFAULT_VECTOR_WEIGHT
    graph_weight: float = DEFAULT_GRAPH_WEIGHT
    top_k: int = DEFAULT_TOP_K

    @classmethod
    def defaults(cls) -> "FusionParams":
        return cls()

    @classmethod
    def for_rrf(cls, rrf_k: int, top_k: int) -> "FusionParams":
        return cls(rrf_k=rrf_k, top_k=top_k)

    @classmethod
    def for_weighted_sum(
        cls, vector_weight: float, graph_weight: float, top_k: int
    ) -> "FusionParams":
        return cls(vector_weight=vector_weight, graph_weight=graph_weight, top_k=top_k)
