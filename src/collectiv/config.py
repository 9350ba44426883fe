"""Collectiv configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (COLLECTIV_CHUNK_SIZE, COLLECTIV_OVERLAP_SIZE,
                             COLLECTIV_GENERATION_MODEL)
  3. Per-project collectiv.yaml  (in the current working directory)
  4. Global ~/.collectiv/config.yaml  (defaults only — no API keys)
  5. Hardcoded defaults

Global config must never contain API keys; use environment variables instead.
All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import re
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".collectiv"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "collectiv.yaml"

# Key names that look like credentials — forbidden in global config.
# Does NOT match legitimate keys like max_context_tokens.
_API_KEY_RE: re.Pattern[str] = re.compile(
    r"api[_\-]?(?:key|secret)"
    r"|_token$"
    r"|^token$"
    r"|_secret$"
    r"|^secret$"
    r"|passw(?:ord|d)"
    r"|credential",
    re.IGNORECASE,
)

_KNOWN_SECTIONS: frozenset[str] = frozenset(
    ["site", "chunking", "retrieval", "graph", "answers", "generation"]
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid or forbidden value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class SiteCfg:
    """Site identity used in prompts and JSON-LD (collectiv.yaml: site:)."""

    name: str = "Collectiv"
    base_url: str = "http://localhost:3000"


@dataclass
class ChunkingCfg:
    """Sentence chunker sizes in characters (collectiv.yaml: chunking:)."""

    chunk_size: int = 1_024
    overlap_size: int = 128


@dataclass
class RetrievalCfg:
    """Retrieval configuration (collectiv.yaml: retrieval:)."""

    top_k: int = 5
    max_context_tokens: int = 4_000
    min_query_length: int = 2


@dataclass
class GraphCfg:
    """Knowledge graph configuration (collectiv.yaml: graph:).

    Attributes:
        max_connections_per_article: Cap on ``related`` edges per node.
        similarity_threshold: Minimum Jaccard score for a ``related`` edge (exclusive).
        recommendation_limit: Default number of BFS recommendations.
    """

    max_connections_per_article: int = 10
    similarity_threshold: float = 0.1
    recommendation_limit: int = 5


@dataclass
class AnswersCfg:
    """Atomic-answer configuration (collectiv.yaml: answers:)."""

    min_words: int = 40
    max_words: int = 60
    confidence: float = 0.95
    summary_words: int = 50


@dataclass
class GenerationCfg:
    """LLM generation configuration for ``collectiv ask`` (collectiv.yaml: generation:)."""

    model: str = "openai/gpt-4o-mini"
    max_tokens: int = 1_024


@dataclass
class CollectivConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    site: SiteCfg = field(default_factory=SiteCfg)
    chunking: ChunkingCfg = field(default_factory=ChunkingCfg)
    retrieval: RetrievalCfg = field(default_factory=RetrievalCfg)
    graph: GraphCfg = field(default_factory=GraphCfg)
    answers: AnswersCfg = field(default_factory=AnswersCfg)
    generation: GenerationCfg = field(default_factory=GenerationCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _check_no_api_keys(data: dict[str, Any], source: Path) -> None:
    """Raise ConfigError if *data* contains any API-key-like key names."""

    def _scan(obj: Any, path: str) -> None:
        if isinstance(obj, dict):
            for k, v in obj.items():
                full = f"{path}.{k}" if path else k
                if _API_KEY_RE.search(str(k)):
                    raise ConfigError(
                        f"Global config '{source}' contains a forbidden key '{full}'.\n"
                        f"  API keys must be set via environment variables, not config files.\n"
                        f"  Remove '{full}' from {source.name} and use:\n"
                        f"    export {str(k).upper().replace('-', '_')}=<value>"
                    )
                _scan(v, full)

    _scan(data, "")


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def validate_config(cfg: CollectivConfig) -> None:
    """Raise ConfigError for values the core cannot work with."""
    ch = cfg.chunking
    if ch.chunk_size < 1:
        raise ConfigError(f"chunking.chunk_size must be >= 1 (got {ch.chunk_size})")
    if not 0 <= ch.overlap_size < ch.chunk_size:
        raise ConfigError(
            f"chunking.overlap_size must be in [0, chunk_size) "
            f"(got overlap_size={ch.overlap_size}, chunk_size={ch.chunk_size})"
        )
    if cfg.retrieval.top_k < 1:
        raise ConfigError(f"retrieval.top_k must be >= 1 (got {cfg.retrieval.top_k})")
    if cfg.retrieval.max_context_tokens < 0:
        raise ConfigError("retrieval.max_context_tokens must be >= 0")
    if not 0.0 <= cfg.graph.similarity_threshold <= 1.0:
        raise ConfigError(
            f"graph.similarity_threshold must be in [0, 1] "
            f"(got {cfg.graph.similarity_threshold})"
        )
    a = cfg.answers
    if not 0 < a.min_words <= a.max_words:
        raise ConfigError(
            f"answers.min_words must be in (0, max_words] "
            f"(got min_words={a.min_words}, max_words={a.max_words})"
        )
    if not 0.0 <= a.confidence <= 1.0:
        raise ConfigError(f"answers.confidence must be in [0, 1] (got {a.confidence})")


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> CollectivConfig:
    """Build a *CollectivConfig* from a merged raw YAML dict."""
    cfg = CollectivConfig()

    try:
        if "site" in data:
            s = data["site"] or {}
            cfg.site = SiteCfg(
                name=str(s.get("name", cfg.site.name)),
                base_url=str(s.get("base_url", cfg.site.base_url)),
            )

        if "chunking" in data:
            c = data["chunking"] or {}
            cfg.chunking = ChunkingCfg(
                chunk_size=int(c.get("chunk_size", cfg.chunking.chunk_size)),
                overlap_size=int(c.get("overlap_size", cfg.chunking.overlap_size)),
            )

        if "retrieval" in data:
            r = data["retrieval"] or {}
            cfg.retrieval = RetrievalCfg(
                top_k=int(r.get("top_k", cfg.retrieval.top_k)),
                max_context_tokens=int(
                    r.get("max_context_tokens", cfg.retrieval.max_context_tokens)
                ),
                min_query_length=int(
                    r.get("min_query_length", cfg.retrieval.min_query_length)
                ),
            )

        if "graph" in data:
            g = data["graph"] or {}
            cfg.graph = GraphCfg(
                max_connections_per_article=int(
                    g.get("max_connections_per_article", cfg.graph.max_connections_per_article)
                ),
                similarity_threshold=float(
                    g.get("similarity_threshold", cfg.graph.similarity_threshold)
                ),
                recommendation_limit=int(
                    g.get("recommendation_limit", cfg.graph.recommendation_limit)
                ),
            )

        if "answers" in data:
            a = data["answers"] or {}
            cfg.answers = AnswersCfg(
                min_words=int(a.get("min_words", cfg.answers.min_words)),
                max_words=int(a.get("max_words", cfg.answers.max_words)),
                confidence=float(a.get("confidence", cfg.answers.confidence)),
                summary_words=int(a.get("summary_words", cfg.answers.summary_words)),
            )

        if "generation" in data:
            gen = data["generation"] or {}
            cfg.generation = GenerationCfg(
                model=str(gen.get("model", cfg.generation.model)),
                max_tokens=int(gen.get("max_tokens", cfg.generation.max_tokens)),
            )
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc

    return cfg


def _apply_env_overrides(cfg: CollectivConfig) -> CollectivConfig:
    """Apply COLLECTIV_* environment variable overrides (layer 2)."""
    try:
        if value := os.environ.get("COLLECTIV_CHUNK_SIZE"):
            cfg.chunking.chunk_size = int(value)
        if value := os.environ.get("COLLECTIV_OVERLAP_SIZE"):
            cfg.chunking.overlap_size = int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid COLLECTIV_* environment value: {exc}") from exc
    if model := os.environ.get("COLLECTIV_GENERATION_MODEL"):
        cfg.generation.model = model
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return data


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> CollectivConfig:
    """Load and return a merged *CollectivConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *collectiv.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Raises:
        ConfigError: If a file is not a YAML mapping, the global config contains
            API-key-like fields, or a value is out of range.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    # Layer 1: global config
    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _check_no_api_keys(raw_global, global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    # Layer 2: per-project config
    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _cfg_from_dict(merged)

    # Layer 3: env var overrides
    cfg = _apply_env_overrides(cfg)

    validate_config(cfg)
    return cfg
