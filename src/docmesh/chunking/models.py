"""Data models for document chunking."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChunkResult:
    """A chunk produced by the Markdown chunker.

    Attributes:
        content: Trimmed chunk text.
        heading_path: Enclosing headings, e.g. "# Title > ## Section".
        token_count: Tokens in content, counted with the chunker's counter.
    """

    content: str
    heading_path: str
    token_count: int


@dataclass
class DocumentVersion:
    """A single version of a document, as handed over by the storage layer."""

    id: str
    content: str | None
    path: str = ""
    commit_sha: str | None = None


@dataclass
class Chunk:
    """A persisted chunk of a document version.

    Attributes:
        document_version_id: Owning document version.
        chunk_index: Position of the chunk within the version (0-based, contiguous).
        content: Chunk text.
        heading_path: Enclosing headings.
        token_count: Tokens in content.
        metadata: Extra fields the store may attach (ids, timestamps).
    """

    document_version_id: str
    chunk_index: int
    content: str
    heading_path: str
    token_count: int
    metadata: dict = field(default_factory=dict)


@dataclass
class BatchChunkResult:
    """Outcome of chunking many document versions.

    Attributes:
        succeeded: Ids of versions that were chunked and saved.
        failed: Version id -> error message for versions that raised (None for a
            missing version).
    """

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str | None, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        """Number of versions attempted."""
        return len(self.succeeded) + len(self.failed)
