"""Hybrid search: keyword and semantic retrieval merged by a fusion strategy."""

import asyncio
import logging
from typing import Protocol

from docmesh.config import Config, load_settings
from docmesh.constants.search import DEFAULT_RRF_K, RETRIEVAL_FANOUT, RRF_STRATEGY
from docmesh.search.fusion import available_strategies, get_fusion_strategy, validate_params
from docmesh.search.models import FusionParams, SearchResult

logger = logging.getLogger(__name__)


class Retriever(Protocol):
    """A retrieval backend returning hits best-first."""

    async def search(self, project_id: str, query: str, limit: int) -> list[SearchResult]: ...


class HybridSearchService:
    """Runs keyword and semantic search side by side and fuses the results."""

    def __init__(
        self,
        keyword_retriever: Retriever,
        semantic_retriever: Retriever,
        settings: Config | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            keyword_retriever: Lexical backend; its hits become the first fusion list.
            semantic_retriever: Vector backend; its hits become the second fusion list.
            settings: Supplies the default strategy and parameters. Defaults to load_settings().
        """
        self._keyword = keyword_retriever
        self._semantic = semantic_retriever
        self._settings = settings or load_settings()

    async def hybrid_search(
        self,
        project_id: str,
        query: str,
        params: FusionParams | None = None,
        strategy: str | None = None,
    ) -> list[SearchResult]:
        """Search both backends and fuse the two result lists.

        Both backends are queried concurrently for top_k * 2 hits each. The
        strategy and parameters are checked before any backend is called, so
        a bad name or a non-positive top_k fails without touching the backends.

        Args:
            project_id: Project to search in.
            query: Search query.
            params: Fusion parameters. Defaults to the [hybrid] settings.
            strategy: Fusion strategy name. Defaults to the [hybrid] settings.

        Returns:
            Fused results, at most params.top_k.

        Raises:
            ConfigError: If the strategy name or parameters are invalid.
        """
        params = params or self._settings.fusion_params()
        strategy_name = strategy or self._settings.hybrid.fusion_strategy
        fuse = get_fusion_strategy(strategy_name)
        validate_params(fuse, params)

        limit = params.top_k * RETRIEVAL_FANOUT
        keyword_results, semantic_results = await asyncio.gather(
            self._keyword.search(project_id, query, limit),
            self._semantic.search(project_id, query, limit),
        )

        logger.debug(
            f"Hybrid search: keyword={len(keyword_results)}, semantic={len(semantic_results)}, "
            f"strategy={strategy_name}, query={query!r}"
        )

        return fuse(keyword_results, semantic_results, params)

    async def hybrid_search_top_k(
        self, project_id: str, query: str, top_k: int
    ) -> list[SearchResult]:
        """Hybrid search with RRF and the standard rank constant."""
        return await self.hybrid_search(
            project_id, query, FusionParams.for_rrf(DEFAULT_RRF_K, top_k), RRF_STRATEGY
        )

    def available_strategies(self) -> list[str]:
        return available_strategies()
