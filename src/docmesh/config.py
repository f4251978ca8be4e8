"""Configuration system for docmesh.

Settings are loaded from an optional INI file (path given by the DOCMESH_CONFIG
environment variable) and validated against CONFIG_SCHEMA. Every section has
sensible defaults, so the library works with no configuration at all.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional
import os

from docmesh.constants.chunking import (
    DEFAULT_ENCODING,
    DEFAULT_HEADING_PATH_SEPARATOR,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MIN_TOKENS,
    DEFAULT_OVERLAP_TOKENS,
)
from docmesh.constants.search import (
    DEFAULT_FUSION_STRATEGY,
    DEFAULT_GRAPH_WEIGHT,
    DEFAULT_RRF_K,
    DEFAULT_TOP_K,
    DEFAULT_VECTOR_WEIGHT,
)

if TYPE_CHECKING:
    from docmesh.search.models import FusionParams


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "chunking": {
        "max_tokens": (int, DEFAULT_MAX_TOKENS, 1, 32768, "Token budget per chunk"),
        "overlap_tokens": (int, DEFAULT_OVERLAP_TOKENS, 0, 4096, "Overlap carried into next chunk"),
        "min_tokens": (int, DEFAULT_MIN_TOKENS, 0, 32768, "Chunks below this merge backwards"),
        "heading_path_separator": (
            str,
            DEFAULT_HEADING_PATH_SEPARATOR,
            None,
            None,
            "Separator between headings in a heading path",
        ),
        "encoding": (str, DEFAULT_ENCODING, None, None, "tiktoken encoding name"),
    },
    "hybrid": {
        "fusion_strategy": (str, DEFAULT_FUSION_STRATEGY, None, None, "rrf or weighted_sum"),
        "rrf_k": (int, DEFAULT_RRF_K, 1, None, "RRF rank constant"),
        "vector_weight": (float, DEFAULT_VECTOR_WEIGHT, 0.0, 1.0, "Weight of the first list"),
        "graph_weight": (float, DEFAULT_GRAPH_WEIGHT, 0.0, 1.0, "Weight of the second list"),
        "top_k": (int, DEFAULT_TOP_K, 1, 1000, "Results returned after fusion"),
    },
    "graph": {
        "default_depth": (int, 1, 0, 10, "Default neighborhood traversal depth"),
    },
}


@dataclass(frozen=True)
class ChunkingConfig:
    """Chunking configuration."""

    max_tokens: int
    overlap_tokens: int
    min_tokens: int
    heading_path_separator: str
    encoding: str


@dataclass(frozen=True)
class HybridConfig:
    """Hybrid search / fusion configuration."""

    fusion_strategy: str
    rrf_k: int
    vector_weight: float
    graph_weight: float
    top_k: int


@dataclass(frozen=True)
class GraphConfig:
    """Document graph configuration."""

    default_depth: int


def _defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: bool | int | float | str
            try:
                if typ is bool:
                    value = raw_value.lower() in ("true", "1", "yes", "on")
                elif typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    # Quotes let separators keep their surrounding spaces
                    value = raw_value.strip('"')
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float) and value is not None:
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


@dataclass(frozen=True)
class Config:
    """Complete docmesh configuration."""

    chunking: ChunkingConfig = None  # type: ignore[assignment]
    hybrid: HybridConfig = None  # type: ignore[assignment]
    graph: GraphConfig = None  # type: ignore[assignment]
    source_path: Optional[Path] = None

    def __post_init__(self):
        """Fill in any section left unset with schema defaults."""
        if self.chunking is None:
            object.__setattr__(self, "chunking", ChunkingConfig(**_defaults("chunking")))
        if self.hybrid is None:
            object.__setattr__(self, "hybrid", HybridConfig(**_defaults("hybrid")))
        if self.graph is None:
            object.__setattr__(self, "graph", GraphConfig(**_defaults("graph")))

    def fusion_params(self) -> "FusionParams":
        """Build fusion parameters from the [hybrid] section."""
        from docmesh.search.models import FusionParams

        return FusionParams(
            rrf_k=self.hybrid.rrf_k,
            vector_weight=self.hybrid.vector_weight,
            graph_weight=self.hybrid.graph_weight,
            top_k=self.hybrid.top_k,
        )


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from an INI file.

    Args:
        config_path: Path to config file. If None or missing, schema defaults are used.

    Returns:
        Config object with all sections populated.

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    return Config(
        chunking=ChunkingConfig(**_load_section(parser, "chunking", CONFIG_SCHEMA["chunking"])),
        hybrid=HybridConfig(**_load_section(parser, "hybrid", CONFIG_SCHEMA["hybrid"])),
        graph=GraphConfig(**_load_section(parser, "graph", CONFIG_SCHEMA["graph"])),
        source_path=config_path if config_path and config_path.exists() else None,
    )


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from the environment and optional config file.

    Settings are cached for the lifetime of the process.
    Use load_settings.cache_clear() to reload settings.

    Returns:
        Config object populated from DOCMESH_CONFIG and environment overrides.

    Raises:
        ConfigError: If the file or an override holds an invalid value.
    """
    config_path_str = os.getenv("DOCMESH_CONFIG")
    base_config = load_config(Path(config_path_str) if config_path_str else None)

    chunking = base_config.chunking
    max_tokens_env = os.getenv("DOCMESH_CHUNK_MAX_TOKENS")
    if max_tokens_env:
        try:
            max_tokens = int(max_tokens_env)
        except ValueError as e:
            raise ConfigError(
                f"Invalid DOCMESH_CHUNK_MAX_TOKENS: {max_tokens_env!r} (expected int)"
            ) from e
        _, _, min_val, max_val, _ = CONFIG_SCHEMA["chunking"]["max_tokens"]
        if max_tokens < min_val:
            raise ConfigError(
                f"DOCMESH_CHUNK_MAX_TOKENS is {max_tokens}, but minimum is {min_val}"
            )
        if max_tokens > max_val:
            raise ConfigError(
                f"DOCMESH_CHUNK_MAX_TOKENS is {max_tokens}, but maximum is {max_val}"
            )
        chunking = ChunkingConfig(
            max_tokens=max_tokens,
            overlap_tokens=chunking.overlap_tokens,
            min_tokens=chunking.min_tokens,
            heading_path_separator=chunking.heading_path_separator,
            encoding=chunking.encoding,
        )

    hybrid = base_config.hybrid
    strategy_env = os.getenv("DOCMESH_FUSION_STRATEGY")
    if strategy_env:
        hybrid = HybridConfig(
            fusion_strategy=strategy_env,
            rrf_k=hybrid.rrf_k,
            vector_weight=hybrid.vector_weight,
            graph_weight=hybrid.graph_weight,
            top_k=hybrid.top_k,
        )

    return Config(
        chunking=chunking,
        hybrid=hybrid,
        graph=base_config.graph,
        source_path=base_config.source_path,
    )
