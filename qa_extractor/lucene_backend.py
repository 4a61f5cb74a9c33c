"""Pyserini Lucene backend helpers.

Centralizes initialization and common operations so the evidence index stays
simple. Pyserini is imported lazily; everything else in the package works
without it (the `local` evidence backend does not need Java).

Expected usage:
    from qa_extractor.lucene_backend import open_indexer, open_searcher, set_bm25, search

    writer = open_indexer("/tmp/evidence-x")
    writer.add_doc_dict({"id": "Alan Turing", "contents": "..."})
    writer.close()
    searcher = open_searcher("/tmp/evidence-x")
    set_bm25(searcher, k1=0.9, b=0.4)
    hits = search(searcher, "imitation game proposed", topk=3)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SearchHit:
    docid: str
    score: float
    rank: int


def _require_pyserini():
    try:
        from pyserini.index.lucene import LuceneIndexer  # type: ignore
        from pyserini.search.lucene import LuceneSearcher  # type: ignore
    except Exception as e:
        raise RuntimeError(
            "The 'lucene' evidence backend requires the optional dependency 'pyserini' "
            "(and a Java 21 runtime). Install it, or use index_backend='local'."
        ) from e
    return LuceneIndexer, LuceneSearcher


def open_indexer(index_dir: str):
    """Create a Pyserini LuceneIndexer writing JSON docs ({id, contents}) to `index_dir`."""
    LuceneIndexer, _ = _require_pyserini()
    return LuceneIndexer(index_dir=index_dir, threads=1)


def open_searcher(index_dir: str):
    """Create a Pyserini LuceneSearcher over a committed index."""
    _, LuceneSearcher = _require_pyserini()
    return LuceneSearcher(index_dir)


def set_bm25(searcher, k1: float, b: float) -> None:
    """Set BM25 parameters on a LuceneSearcher."""
    if k1 <= 0:
        raise ValueError("k1 must be > 0")
    if not (0.0 <= b <= 1.0):
        raise ValueError("b must be in [0, 1]")
    searcher.set_bm25(k1=k1, b=b)


def search(searcher, query: str, topk: int = 10) -> List[SearchHit]:
    """Execute a search and normalize results.

    Returns a list of SearchHit with ranks starting at 1.
    """
    if not isinstance(query, str) or not query.strip():
        return []
    if not isinstance(topk, int) or topk <= 0:
        raise ValueError("topk must be a positive integer")

    hits = searcher.search(query, k=topk)
    out: List[SearchHit] = []
    for i, h in enumerate(hits, start=1):
        # Pyserini returns objects with .docid and .score
        out.append(SearchHit(docid=str(h.docid), score=float(h.score), rank=i))
    return out
