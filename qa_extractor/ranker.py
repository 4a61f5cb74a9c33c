"""Evidence-based ranking of candidate answers.

The query prefix (question topic) is run against the evidence index; the
candidate whose snippet text scores highest wins. Every candidate is eligible
(k = number of candidates).
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from qa_extractor.config import ExtractorConfig
from qa_extractor.evidence.index import EvidenceIndex
from qa_extractor.evidence.indexer import build_evidence_index
from qa_extractor.search.provider import WebSearchProvider


log = logging.getLogger("qa_extractor.ranker")


def top_answer(index: EvidenceIndex, query_prefix: str, limit: int) -> str:
    """Return the id of the best-scoring evidence document, or "" if nothing matches."""
    if limit <= 0 or len(index) == 0:
        return ""
    hits = index.search(query_prefix, k=limit)
    for h in hits:
        log.debug("%f %s", h.score, h.docid)
    if hits:
        return hits[0].docid
    return ""


def rank_candidates(
    query_prefix: str,
    candidates: Sequence[str],
    *,
    search_provider: WebSearchProvider,
    config: Optional[ExtractorConfig] = None,
) -> str:
    """Build a throwaway evidence index for `candidates` and return the top one.

    The index is released before this function returns, whatever the outcome.
    """
    if not candidates:
        return ""
    with build_evidence_index(
        query_prefix, candidates, search_provider=search_provider, config=config
    ) as index:
        return top_answer(index, query_prefix, len(candidates))
