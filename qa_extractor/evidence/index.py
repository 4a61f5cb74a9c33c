"""Ephemeral evidence indexes.

One index holds the web-search snippets collected for one question's candidate
answers: document id = the candidate string (stored verbatim, never tokenized),
document text = its snippet (tokenized and scored).

Lifecycle: `add()` every document, `commit()` once, then `search()`; `close()`
releases everything. Indexes are context managers and must not be shared
between questions or reused after `close()`.

Backends:
- `LocalEvidenceIndex`: in-memory BM25 over the snippet set.
- `LuceneEvidenceIndex`: Pyserini/Lucene index in a fresh temporary directory
  under the configured index root, removed on close.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections import Counter
from typing import List, Optional, Tuple

from qa_extractor.config import ExtractorConfig
from qa_extractor.evidence.text_scoring import bm25_score, compute_df, tokenize
from qa_extractor.lucene_backend import SearchHit, open_indexer, open_searcher, search, set_bm25


log = logging.getLogger("qa_extractor.evidence.index")


class EvidenceIndexError(RuntimeError):
    """Writing to or querying an evidence index failed."""


class EvidenceIndex(ABC):
    """Write-once, then read, then release."""

    def __init__(self) -> None:
        self._count = 0
        self._committed = False
        self._closed = False

    def __len__(self) -> int:
        return self._count

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "EvidenceIndex":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise EvidenceIndexError("evidence index is closed")

    def add(self, answer: str, text: str) -> None:
        """Add one candidate's evidence document."""
        self._check_open()
        if self._committed:
            raise EvidenceIndexError("cannot add documents after commit")
        if not isinstance(answer, str) or not answer:
            raise ValueError("answer must be a non-empty string")
        self._add(answer, text or "")
        self._count += 1

    def commit(self) -> None:
        """Make all added documents searchable. Called once, after the last add."""
        self._check_open()
        if self._committed:
            raise EvidenceIndexError("evidence index already committed")
        self._commit()
        self._committed = True

    def search(self, query: str, k: int) -> List[SearchHit]:
        """Top-k hits for `query` over the snippet text, best first."""
        self._check_open()
        if not self._committed:
            raise EvidenceIndexError("evidence index must be committed before searching")
        if not isinstance(k, int) or k <= 0:
            raise ValueError("k must be a positive integer")
        if self._count == 0:
            return []
        return self._search(query, k)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._release()

    @abstractmethod
    def _add(self, answer: str, text: str) -> None:
        ...

    @abstractmethod
    def _commit(self) -> None:
        ...

    @abstractmethod
    def _search(self, query: str, k: int) -> List[SearchHit]:
        ...

    @abstractmethod
    def _release(self) -> None:
        ...


class LocalEvidenceIndex(EvidenceIndex):
    """In-memory BM25 index. Ties keep insertion order."""

    def __init__(self, *, k1: float = 0.9, b: float = 0.4) -> None:
        super().__init__()
        if k1 <= 0:
            raise ValueError("k1 must be > 0")
        if not (0.0 <= b <= 1.0):
            raise ValueError("b must be in [0, 1]")
        self.k1 = float(k1)
        self.b = float(b)
        self._docs: List[Tuple[str, str]] = []
        self._tokens: List[List[str]] = []
        self._df: dict = {}
        self._avgdl = 0.0

    def _add(self, answer: str, text: str) -> None:
        self._docs.append((answer, text))

    def _commit(self) -> None:
        self._tokens = [tokenize(text) for _answer, text in self._docs]
        self._df = compute_df(self._tokens)
        n = len(self._tokens)
        self._avgdl = sum(len(t) for t in self._tokens) / float(n) if n else 0.0

    def _search(self, query: str, k: int) -> List[SearchHit]:
        q_terms = tokenize(query)
        if not q_terms:
            return []
        n_docs = len(self._tokens)
        scored: List[Tuple[float, int]] = []
        for i, toks in enumerate(self._tokens):
            s = bm25_score(
                query_terms=q_terms,
                doc_tf=Counter(toks),
                doc_len=len(toks),
                avgdl=self._avgdl,
                df=self._df,
                n_docs=n_docs,
                k1=self.k1,
                b=self.b,
            )
            # Like Lucene, documents matching no query term are not hits.
            if s > 0.0:
                scored.append((s, i))
        scored.sort(key=lambda x: (-x[0], x[1]))
        return [
            SearchHit(docid=self._docs[i][0], score=s, rank=rank)
            for rank, (s, i) in enumerate(scored[:k], start=1)
        ]

    def _release(self) -> None:
        self._docs = []
        self._tokens = []
        self._df = {}


class LuceneEvidenceIndex(EvidenceIndex):
    """Lucene index in a private temporary directory (BM25 scoring)."""

    def __init__(self, index_root: str, *, k1: float = 0.9, b: float = 0.4) -> None:
        super().__init__()
        self.k1 = float(k1)
        self.b = float(b)
        try:
            self.index_dir = tempfile.mkdtemp(prefix="evidence-", dir=index_root)
        except OSError as e:
            raise EvidenceIndexError(f"Unable to create evidence index under {index_root!r}") from e
        self._writer = None
        self._searcher = None
        try:
            self._writer = open_indexer(self.index_dir)
        except Exception:
            shutil.rmtree(self.index_dir, ignore_errors=True)
            raise

    def _add(self, answer: str, text: str) -> None:
        try:
            self._writer.add_doc_dict({"id": answer, "contents": text})
        except Exception as e:
            raise EvidenceIndexError(f"Unable to index evidence for {answer!r}") from e

    def _commit(self) -> None:
        try:
            self._writer.close()
            self._writer = None
            self._searcher = open_searcher(self.index_dir)
            set_bm25(self._searcher, k1=self.k1, b=self.b)
        except Exception as e:
            raise EvidenceIndexError(f"Unable to commit evidence index {self.index_dir}") from e

    def _search(self, query: str, k: int) -> List[SearchHit]:
        try:
            return search(self._searcher, query, topk=k)
        except Exception as e:
            raise EvidenceIndexError(f"Evidence query failed: {query!r}") from e

    def _release(self) -> None:
        try:
            if self._searcher is not None:
                self._searcher.close()
            elif self._writer is not None:
                self._writer.close()
        except Exception:
            log.warning("Error while closing evidence index %s", self.index_dir, exc_info=True)
        finally:
            self._searcher = None
            self._writer = None
            shutil.rmtree(self.index_dir, ignore_errors=True)


def open_evidence_index(config: Optional[ExtractorConfig] = None) -> EvidenceIndex:
    """Create a fresh, empty evidence index for the configured backend."""
    cfg = config or ExtractorConfig()
    if cfg.index_backend == "local":
        return LocalEvidenceIndex(k1=cfg.bm25_k1, b=cfg.bm25_b)
    if cfg.index_backend == "lucene":
        return LuceneEvidenceIndex(cfg.resolved_index_root(), k1=cfg.bm25_k1, b=cfg.bm25_b)
    raise ValueError(f"Unknown index backend: {cfg.index_backend!r} (expected 'local' or 'lucene')")
