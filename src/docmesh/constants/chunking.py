"""Chunking defaults.

These values control how Markdown documents are split into retrieval-sized
passages before embedding. They are the schema defaults for the [chunking]
section of the config file.
"""

# =============================================================================
# Token Budgets
# =============================================================================
# MAX_TOKENS is the size at which a running chunk is closed. A chunk may end up
# slightly larger than this, because the block that crosses the limit is kept
# whole. Chunks smaller than MIN_TOKENS are folded into the previous chunk when
# the merged result still fits. OVERLAP_TOKENS bounds how much trailing text of
# a closed chunk is repeated at the start of the next one.

DEFAULT_MAX_TOKENS = 512
DEFAULT_OVERLAP_TOKENS = 50
DEFAULT_MIN_TOKENS = 100

# =============================================================================
# Heading Paths
# =============================================================================
# Each chunk records the headings enclosing it, e.g. "# Guide > ## Install".

DEFAULT_HEADING_PATH_SEPARATOR = " > "

# =============================================================================
# Tokenizer
# =============================================================================
# cl100k_base matches the tokenizer of the common OpenAI embedding models.

DEFAULT_ENCODING = "cl100k_base"
