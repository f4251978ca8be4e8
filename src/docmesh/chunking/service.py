"""Chunk document versions and persist the result."""

import logging
from typing import Protocol

from docmesh.chunking.markdown import MarkdownChunker
from docmesh.chunking.models import BatchChunkResult, Chunk, DocumentVersion

logger = logging.getLogger(__name__)


class ChunkStore(Protocol):
    """Persistence for chunks, keyed by document version."""

    def save_all(self, chunks: list[Chunk]) -> list[Chunk]: ...

    def find_by_version(self, document_version_id: str) -> list[Chunk]: ...

    def count_by_version(self, document_version_id: str) -> int: ...

    def delete_by_version(self, document_version_id: str) -> None: ...


class ChunkingService:
    """Replaces the stored chunks of a document version with fresh ones."""

    def __init__(self, chunker: MarkdownChunker, store: ChunkStore) -> None:
        self._chunker = chunker
        self._store = store

    def chunk_and_save(self, version: DocumentVersion) -> list[Chunk]:
        """Chunk a document version and store the chunks.

        Existing chunks of the version are deleted first; chunks are never
        patched in place.

        Args:
            version: Document version to chunk.

        Returns:
            Saved chunks ordered by chunk_index. Empty if the version has no content.

        Raises:
            ValueError: If version is None.
        """
        if version is None:
            raise ValueError("DocumentVersion cannot be None")

        if not version.content:
            logger.debug(f"DocumentVersion {version.id} has no content, skipping chunking")
            return []

        self.delete_chunks(version.id)

        results = self._chunker.chunk(version.content)
        logger.debug(f"Created {len(results)} chunks for DocumentVersion {version.id}")

        chunks = [
            Chunk(
                document_version_id=version.id,
                chunk_index=index,
                content=result.content,
                heading_path=result.heading_path,
                token_count=result.token_count,
            )
            for index, result in enumerate(results)
        ]

        saved = self._store.save_all(chunks)
        logger.info(f"Saved {len(saved)} chunks for DocumentVersion {version.id}")
        return saved

    def get_chunks(self, document_version_id: str) -> list[Chunk]:
        """Return stored chunks of a version in chunk_index order."""
        return sorted(
            self._store.find_by_version(document_version_id), key=lambda c: c.chunk_index
        )

    def count_chunks(self, document_version_id: str) -> int:
        return self._store.count_by_version(document_version_id)

    def delete_chunks(self, document_version_id: str) -> None:
        """Delete all stored chunks of a version, if there are any."""
        count = self._store.count_by_version(document_version_id)
        if count > 0:
            self._store.delete_by_version(document_version_id)
            logger.debug(f"Deleted {count} chunks for DocumentVersion {document_version_id}")

    def batch_chunk(self, versions: list[DocumentVersion]) -> BatchChunkResult:
        """Chunk many document versions, isolating failures per version.

        A version that raises is logged and recorded in the result; the
        remaining versions are still processed.

        Args:
            versions: Document versions to chunk.

        Returns:
            Ids of versions that succeeded and errors of those that failed.
        """
        result = BatchChunkResult()

        for version in versions:
            version_id = version.id if version is not None else None
            try:
                self.chunk_and_save(version)
                result.succeeded.append(version_id)
            except Exception as e:
                logger.error(
                    f"Failed to chunk DocumentVersion {version_id}: {e}", exc_info=True
                )
                result.failed[version_id] = str(e)

        logger.info(f"Batch chunking completed: {len(result.succeeded)}/{result.total} successful")
        return result
