"""Token counting backed by tiktoken."""

import tiktoken

from docmesh.constants.chunking import DEFAULT_ENCODING


class TokenCounter:
    """Counts and truncates text in tokens of a tiktoken encoding.

    The default cl100k_base encoding matches the tokenizer used by
    text-embedding-ada-002 and text-embedding-3-*, so chunk budgets line up
    with what the embedding backend will actually see.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self._encoding = tiktoken.get_encoding(encoding_name)
        self.encoding_name = encoding_name

    def count_tokens(self, text: str | None) -> int:
        """Count tokens in text.

        Args:
            text: Text to count. None and "" count as zero.

        Returns:
            Number of tokens.
        """
        if not text:
            return 0
        return len(self._encoding.encode(text, disallowed_special=()))

    def truncate(self, text: str | None, max_tokens: int) -> str | None:
        """Cut text down to at most max_tokens tokens.

        Binary-searches over character cut points, re-counting each candidate
        prefix, and returns the longest prefix that fits.

        Args:
            text: Text to truncate. None and "" are returned unchanged.
            max_tokens: Token budget.

        Returns:
            The text itself if it fits, otherwise its longest fitting prefix.
        """
        if not text:
            return text

        if self.count_tokens(text) <= max_tokens:
            return text

        left = 0
        right = len(text)
        result = ""

        while left < right:
            mid = (left + right + 1) // 2
            candidate = text[:mid]
            if self.count_tokens(candidate) <= max_tokens:
                result = candidate
                left = mid
            else:
                right = mid - 1

        return result
