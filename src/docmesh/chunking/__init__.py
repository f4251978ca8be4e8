"""Markdown chunking for retrieval."""

from docmesh.chunking.blocks import Block, ContentBlock, HeadingBlock, parse_blocks
from docmesh.chunking.markdown import MarkdownChunker
from docmesh.chunking.models import BatchChunkResult, Chunk, ChunkResult, DocumentVersion
from docmesh.chunking.service import ChunkingService, ChunkStore
from docmesh.chunking.tokens import TokenCounter

__all__ = [
    # Models
    "Block",
    "ContentBlock",
    "HeadingBlock",
    "ChunkResult",
    "Chunk",
    "DocumentVersion",
    "BatchChunkResult",
    # Parsing
    "parse_blocks",
    # Chunking
    "TokenCounter",
    "MarkdownChunker",
    # Service
    "ChunkStore",
    "ChunkingService",
]
