"""Configuration constants.

Re-exports all defaults for convenient importing:
    from docmesh.constants import DEFAULT_RRF_K, DEFAULT_MAX_TOKENS
"""

from docmesh.constants.chunking import *  # noqa: F403
from docmesh.constants.search import *  # noqa: F403
