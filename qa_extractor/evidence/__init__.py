"""Per-question evidence indexes built from web search snippets."""

from qa_extractor.evidence.index import (
    EvidenceIndex,
    EvidenceIndexError,
    LocalEvidenceIndex,
    LuceneEvidenceIndex,
    open_evidence_index,
)
from qa_extractor.evidence.indexer import build_evidence_index, evidence_query, fetch_evidence

__all__ = [
    "EvidenceIndex",
    "EvidenceIndexError",
    "LocalEvidenceIndex",
    "LuceneEvidenceIndex",
    "build_evidence_index",
    "evidence_query",
    "fetch_evidence",
    "open_evidence_index",
]
