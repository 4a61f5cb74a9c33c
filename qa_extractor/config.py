"""Configuration for answer extraction and evidence ranking.

This module intentionally stays minimal: a frozen dataclass with defaults that
match the reference behavior (sequential lookups, fixed stop lists), plus a
small mapping loader for entrypoints.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple


DEFAULT_STOP_LABELS: Tuple[str, ...] = ("PP", "SBAR")
DEFAULT_QUESTION_WORDS: Tuple[str, ...] = ("how", "what", "who", "which", "where", "when")

INDEX_BACKENDS = ("local", "lucene")


@dataclass(frozen=True)
class ExtractorConfig:
    """Knobs for the extraction pipeline."""

    # Evidence index
    index_backend: str = "local"
    index_root: str = ""
    bm25_k1: float = 0.9
    bm25_b: float = 0.4

    # Query prefix filtering
    stop_labels: Tuple[str, ...] = DEFAULT_STOP_LABELS
    question_words: Tuple[str, ...] = DEFAULT_QUESTION_WORDS

    # Concurrency (1 => sequential)
    search_workers: int = 1
    passage_workers: int = 1

    # Web search hardening. The pipeline never builds a provider itself; these
    # are handed to GoogleCustomSearchProvider via search_provider_options().
    search_timeout: float = 10.0
    search_retries: int = 2
    search_backoff: float = 0.5

    def resolved_index_root(self) -> str:
        """Directory for ephemeral Lucene indexes (system temp dir if unset)."""
        return self.index_root or os.environ.get("ANSWER_INDEX_PATH", "") or tempfile.gettempdir()

    def search_provider_options(self) -> Dict[str, Any]:
        """Keyword arguments for `GoogleCustomSearchProvider` (timeout, retries, backoff)."""
        return {
            "timeout": self.search_timeout,
            "max_retries": self.search_retries,
            "backoff": self.search_backoff,
        }

    def validate(self) -> "ExtractorConfig":
        if self.index_backend not in INDEX_BACKENDS:
            raise ValueError(f"Unknown index backend: {self.index_backend!r} (expected one of {INDEX_BACKENDS})")
        if self.bm25_k1 <= 0:
            raise ValueError("bm25_k1 must be > 0")
        if not (0.0 <= self.bm25_b <= 1.0):
            raise ValueError("bm25_b must be in [0, 1]")
        if not isinstance(self.search_workers, int) or self.search_workers <= 0:
            raise ValueError("search_workers must be a positive integer")
        if not isinstance(self.passage_workers, int) or self.passage_workers <= 0:
            raise ValueError("passage_workers must be a positive integer")
        if self.search_timeout <= 0:
            raise ValueError("search_timeout must be > 0")
        if not isinstance(self.search_retries, int) or self.search_retries < 0:
            raise ValueError("search_retries must be a non-negative integer")
        if self.search_backoff < 0:
            raise ValueError("search_backoff must be >= 0")
        if any(not isinstance(s, str) or not s for s in self.stop_labels):
            raise ValueError("stop_labels must be non-empty strings")
        return self


def default_extractor_config() -> ExtractorConfig:
    """Reference configuration: local BM25 index, sequential lookups."""
    return ExtractorConfig().validate()


def config_from_mapping(params: Mapping[str, Any], base: ExtractorConfig | None = None) -> ExtractorConfig:
    """Build a config from a plain mapping (e.g. parsed JSON or CLI args).

    Unknown keys are rejected; `None` values keep the base value.
    """
    base = base or ExtractorConfig()
    known = {f.name for f in fields(ExtractorConfig)}
    unknown = sorted(set(params.keys()) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    updates = {}
    for key, value in params.items():
        if value is None:
            continue
        if key in ("stop_labels", "question_words"):
            if isinstance(value, str):
                value = (value,)
            value = tuple(str(v) for v in value)
        updates[key] = value
    return replace(base, **updates).validate()
