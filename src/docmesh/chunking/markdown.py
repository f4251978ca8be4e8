"""Heading-aware Markdown chunking with token budgets."""

from docmesh.chunking.blocks import HeadingBlock, parse_blocks
from docmesh.chunking.models import ChunkResult
from docmesh.chunking.tokens import TokenCounter
from docmesh.config import ChunkingConfig, load_settings

PARAGRAPH_SEPARATOR = "\n\n"


class MarkdownChunker:
    """Splits Markdown documents into heading-scoped, token-bounded chunks.

    A chunk is closed whenever a new heading starts or the running text
    reaches max_tokens. Chunks smaller than min_tokens are folded into the
    previous chunk when the merged text still fits, and a chunk closed for
    size seeds the next one with up to overlap_tokens of its trailing
    paragraphs.
    """

    def __init__(
        self,
        token_counter: TokenCounter | None = None,
        config: ChunkingConfig | None = None,
    ) -> None:
        """Initialize the chunker.

        Args:
            token_counter: Counter used for every size decision. Defaults to one
                built from the configured encoding.
            config: Chunking settings. Defaults to load_settings().chunking.
        """
        self._config = config or load_settings().chunking
        self._counter = token_counter or TokenCounter(self._config.encoding)

    @property
    def token_counter(self) -> TokenCounter:
        return self._counter

    def chunk(self, markdown: str | None) -> list[ChunkResult]:
        """Split Markdown text into chunks.

        Args:
            markdown: Markdown source. None and "" produce no chunks.

        Returns:
            Chunks in document order.
        """
        if not markdown:
            return []

        chunks: list[ChunkResult] = []
        heading_stack: list[tuple[int, str]] = []
        current_chunk: list[str] = []
        current_heading_path = ""

        for block in parse_blocks(markdown):
            if isinstance(block, HeadingBlock):
                if current_chunk:
                    self._emit("".join(current_chunk), current_heading_path, chunks)
                    current_chunk = []

                self._push_heading(heading_stack, block.level, block.text)
                current_heading_path = self._build_heading_path(heading_stack)
                current_chunk.append(block.raw + PARAGRAPH_SEPARATOR)
            else:
                current_chunk.append(block.raw + PARAGRAPH_SEPARATOR)

                if self._counter.count_tokens("".join(current_chunk)) >= self._config.max_tokens:
                    self._emit("".join(current_chunk), current_heading_path, chunks)
                    current_chunk = []

                    if chunks:
                        overlap = self.extract_overlap(chunks[-1].content)
                        if overlap:
                            current_chunk.append(overlap + PARAGRAPH_SEPARATOR)

        if current_chunk:
            self._emit("".join(current_chunk), current_heading_path, chunks)

        return chunks

    @staticmethod
    def _push_heading(stack: list[tuple[int, str]], level: int, text: str) -> None:
        """Pop headings at the same or a deeper level, then push the new one."""
        while stack and stack[-1][0] >= level:
            stack.pop()
        stack.append((level, text))

    def _build_heading_path(self, stack: list[tuple[int, str]]) -> str:
        if not stack:
            return ""
        return self._config.heading_path_separator.join(
            f"{'#' * level} {text}" for level, text in stack
        )

    def _emit(self, content: str, heading_path: str, chunks: list[ChunkResult]) -> None:
        """Append a closed chunk, merging it backwards when it is too small."""
        trimmed = content.strip()
        if not trimmed:
            return

        token_count = self._counter.count_tokens(trimmed)

        if token_count < self._config.min_tokens and chunks:
            previous = chunks[-1]
            merged = previous.content + PARAGRAPH_SEPARATOR + trimmed
            merged_count = self._counter.count_tokens(merged)
            if merged_count <= self._config.max_tokens:
                chunks[-1] = ChunkResult(
                    content=merged,
                    heading_path=previous.heading_path,
                    token_count=merged_count,
                )
                return

        chunks.append(ChunkResult(content=trimmed, heading_path=heading_path, token_count=token_count))

    def extract_overlap(self, content: str) -> str:
        """Take trailing whole paragraphs of content within the overlap budget.

        Args:
            content: Text of the chunk that was just closed.

        Returns:
            Trimmed overlap text, or "" when overlap is disabled or the last
            paragraph alone exceeds the budget.
        """
        budget = self._config.overlap_tokens
        if budget <= 0:
            return ""

        overlap = ""
        for paragraph in reversed(content.split(PARAGRAPH_SEPARATOR)):
            candidate = paragraph + PARAGRAPH_SEPARATOR + overlap
            if self._counter.count_tokens(candidate) > budget:
                break
            overlap = candidate

        return overlap.strip()
