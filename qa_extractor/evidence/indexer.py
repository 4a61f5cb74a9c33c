"""Evidence collection: one web search per candidate, one index per question.

All snippets are fetched before anything is written, and the index is
committed only after the last document is added. If any search or write
fails, the partially built index is released and the error propagates.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence

from qa_extractor.config import ExtractorConfig
from qa_extractor.evidence.index import EvidenceIndex, open_evidence_index
from qa_extractor.search.provider import WebSearchProvider


log = logging.getLogger("qa_extractor.evidence.indexer")


def evidence_query(prefix: str, candidate: str) -> str:
    """Search query for one candidate: the question topic followed by the answer."""
    return prefix + candidate


def fetch_evidence(
    prefix: str,
    candidates: Sequence[str],
    *,
    search_provider: WebSearchProvider,
    workers: int = 1,
) -> List[str]:
    """Search once per candidate; results are returned in candidate order."""
    queries = [evidence_query(prefix, c) for c in candidates]
    if workers <= 1 or len(queries) <= 1:
        return [search_provider.search(q) for q in queries]

    with ThreadPoolExecutor(max_workers=min(workers, len(queries))) as pool:
        futures: List[Future] = [pool.submit(search_provider.search, q) for q in queries]
        try:
            return [f.result() for f in futures]
        except BaseException:
            for f in futures:
                f.cancel()
            raise


def build_evidence_index(
    prefix: str,
    candidates: Sequence[str],
    *,
    search_provider: WebSearchProvider,
    config: Optional[ExtractorConfig] = None,
) -> EvidenceIndex:
    """Return a committed evidence index with exactly one document per candidate.

    The caller owns the returned index and must close it (use `with`).
    """
    cfg = config or ExtractorConfig()
    t0 = time.perf_counter()
    snippets = fetch_evidence(prefix, candidates, search_provider=search_provider, workers=cfg.search_workers)

    index = open_evidence_index(cfg)
    try:
        for answer, text in zip(candidates, snippets):
            index.add(answer, text)
        index.commit()
    except BaseException:
        index.close()
        raise

    log.debug(
        "Indexed evidence for %d candidates (backend=%s, workers=%d) in %.2fs.",
        len(candidates),
        cfg.index_backend,
        cfg.search_workers,
        time.perf_counter() - t0,
    )
    return index
