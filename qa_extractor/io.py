"""I/O utilities for passages, static evidence and results.

Expected inputs:
- passages file: `document_id<TAB>passage_text` (one passage per line)
- evidence file (offline search): `query<TAB>result_text` (one query per line)

Output:
- results file: `answer<TAB>document_id` (one result per line, passage order)
"""

from __future__ import annotations

import sys
from typing import Dict, Iterable, List, Optional, Sequence, TextIO, Tuple

from qa_extractor.types import Passage, ResultInfo


def _iter_nonempty_lines(path: str) -> Iterable[Tuple[int, str]]:
    """Yield (line_no, stripped_line) skipping empty/whitespace-only lines."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for i, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line:
                continue
            yield i, line


def _split_tsv(path: str, line_no: int, line: str, what: str) -> Tuple[str, str]:
    if "\t" not in line:
        raise ValueError(f"{path}:{line_no}: expected TAB-separated '{what}', got: {line!r}")
    key, value = line.split("\t", 1)
    return key.strip(), value.strip()


def load_passages(path: str) -> List[Passage]:
    """Load passages in file order (duplicate document ids are allowed)."""
    passages: List[Passage] = []
    for line_no, line in _iter_nonempty_lines(path):
        doc_id, text = _split_tsv(path, line_no, line, "document_id<TAB>text")
        if not doc_id:
            raise ValueError(f"{path}:{line_no}: empty document_id")
        if not text:
            raise ValueError(f"{path}:{line_no}: empty passage text for document_id={doc_id!r}")
        passages.append(Passage(document_id=doc_id, content=text))
    return passages


def load_static_evidence(path: str) -> Dict[str, str]:
    """Load `query -> result text`; repeated queries have their texts joined."""
    evidence: Dict[str, str] = {}
    for line_no, line in _iter_nonempty_lines(path):
        query, text = _split_tsv(path, line_no, line, "query<TAB>result_text")
        query = " ".join(query.split())
        if not query:
            raise ValueError(f"{path}:{line_no}: empty query")
        if query in evidence:
            evidence[query] = evidence[query] + "\n" + text
        else:
            evidence[query] = text
    return evidence


def format_results(results: Sequence[ResultInfo]) -> List[str]:
    lines: List[str] = []
    for r in results:
        if "\t" in r.answer or "\n" in r.answer:
            raise ValueError(f"Answer contains TAB/newline: {r.answer!r}")
        lines.append(f"{r.answer}\t{r.document_id}\n")
    return lines


def write_results(results: Sequence[ResultInfo], output_path: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Write results to `output_path`, or to `stream` (stdout by default)."""
    lines = format_results(results)
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.writelines(lines)
        return
    (stream or sys.stdout).writelines(lines)
