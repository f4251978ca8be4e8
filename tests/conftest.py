"""Shared pytest fixtures for all tests."""

import pytest

from docmesh.chunking import Chunk, MarkdownChunker, TokenCounter
from docmesh.config import ChunkingConfig, load_settings
from docmesh.links import DocType, DocumentRef, LinkRecord, LinkType


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the load_settings cache around each test."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture(scope="session")
def token_counter():
    """A cl100k_base counter, built once because loading the encoding is slow."""
    return TokenCounter()


@pytest.fixture
def make_chunker(token_counter):
    """Build a MarkdownChunker with explicit limits."""

    def _make(
        max_tokens: int = 512,
        overlap_tokens: int = 50,
        min_tokens: int = 100,
        separator: str = " > ",
    ) -> MarkdownChunker:
        config = ChunkingConfig(
            max_tokens=max_tokens,
            overlap_tokens=overlap_tokens,
            min_tokens=min_tokens,
            heading_path_separator=separator,
            encoding="cl100k_base",
        )
        return MarkdownChunker(token_counter, config)

    return _make


class InMemoryChunkStore:
    """ChunkStore keeping chunks in a dict, with call tracking."""

    def __init__(self):
        self.chunks: dict[str, list[Chunk]] = {}
        self.deleted: list[str] = []

    def save_all(self, chunks):
        for chunk in chunks:
            self.chunks.setdefault(chunk.document_version_id, []).append(chunk)
        return list(chunks)

    def find_by_version(self, document_version_id):
        return list(self.chunks.get(document_version_id, []))

    def count_by_version(self, document_version_id):
        return len(self.chunks.get(document_version_id, []))

    def delete_by_version(self, document_version_id):
        self.deleted.append(document_version_id)
        self.chunks.pop(document_version_id, None)


@pytest.fixture
def chunk_store():
    return InMemoryChunkStore()


def make_doc(doc_id: str, doc_type: DocType = DocType.MD) -> DocumentRef:
    """Document with path and title derived from its id."""
    return DocumentRef(id=doc_id, path=f"docs/{doc_id}.md", title=doc_id.upper(), doc_type=doc_type)


def make_link(
    link_id: str,
    source: DocumentRef,
    target: DocumentRef | None,
    link_type: LinkType = LinkType.INTERNAL,
    anchor_text: str | None = None,
    broken: bool = False,
) -> LinkRecord:
    return LinkRecord(
        id=link_id,
        source=source,
        target=target,
        link_type=link_type,
        anchor_text=anchor_text if anchor_text is not None else f"to {target.id if target else '?'}",
        broken=broken,
    )
