"""Local text scoring for small evidence sets (no LuceneSearcher).

In-memory BM25 over the handful of snippets collected for one question. The
analyzer approximates Lucene's: lower-cased word tokens minus the classic
English stop set.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Dict, List, Sequence


_TOKEN_RE = re.compile(r"\b\w+\b")

# Lucene's ENGLISH_STOP_WORDS_SET.
STOPWORDS = frozenset(
    """a an and are as at be but by for if in into is it no not of on or such
    that the their then there these they this to was will with""".split()
)


def tokenize(text: str) -> List[str]:
    return [t for t in _TOKEN_RE.findall((text or "").lower()) if t not in STOPWORDS]


def bm25_score(
    *,
    query_terms: Sequence[str],
    doc_tf: Counter,
    doc_len: int,
    avgdl: float,
    df: Dict[str, int],
    n_docs: int,
    k1: float,
    b: float,
) -> float:
    if doc_len <= 0 or n_docs <= 0 or avgdl <= 0:
        return 0.0

    score = 0.0
    for t in query_terms:
        tf = doc_tf.get(t, 0)
        if tf <= 0:
            continue
        dft = df.get(t, 0)
        # Lucene BM25 idf: always positive, even for terms in every doc.
        idf = math.log(1.0 + (n_docs - dft + 0.5) / (dft + 0.5))
        denom = tf + k1 * (1.0 - b + b * (doc_len / avgdl))
        score += idf * (tf * (k1 + 1.0)) / denom
    return float(score)


def compute_df(docs_tokens: Sequence[Sequence[str]]) -> Dict[str, int]:
    df: Dict[str, int] = {}
    for toks in docs_tokens:
        for t in set(toks):
            df[t] = df.get(t, 0) + 1
    return df
