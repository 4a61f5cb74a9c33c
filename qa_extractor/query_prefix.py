"""Query prefix: the topic of a question as a short keyword string.

The question is chunked, prepositional/subordinate chunks are dropped, and so
are chunks consisting only of an interrogative word. The remaining chunk texts
are concatenated in order, each followed by one space:

    [NP What] [NP apple] [PP of doom] [VP falls]  ->  "apple falls "

The prefix seeds every evidence search (`prefix + candidate`) and is the
ranking query against the evidence index.
"""

from __future__ import annotations

from typing import Iterable, List

from qa_extractor.config import DEFAULT_QUESTION_WORDS, DEFAULT_STOP_LABELS
from qa_extractor.markup import parse_chunk_markup, typed_spans
from qa_extractor.nlp.chunker import Chunker


def query_prefix_from_chunks(
    chunked_text: str,
    *,
    stop_labels: Iterable[str] = DEFAULT_STOP_LABELS,
    question_words: Iterable[str] = DEFAULT_QUESTION_WORDS,
) -> str:
    """Filter already-chunked text into a query prefix (may be "")."""
    stops = tuple(stop_labels)
    qwords = {w.lower() for w in question_words}

    parts: List[str] = []
    for span in typed_spans(parse_chunk_markup(chunked_text)):
        if span.label.startswith(stops):
            continue
        content = span.content.strip()
        if content.lower() in qwords:
            continue
        parts.append(content + " ")
    return "".join(parts)


def build_query_prefix(
    question_text: str,
    chunker: Chunker,
    *,
    stop_labels: Iterable[str] = DEFAULT_STOP_LABELS,
    question_words: Iterable[str] = DEFAULT_QUESTION_WORDS,
) -> str:
    """Chunk a raw question and return its query prefix."""
    return query_prefix_from_chunks(
        chunker.chunk(question_text),
        stop_labels=stop_labels,
        question_words=question_words,
    )
