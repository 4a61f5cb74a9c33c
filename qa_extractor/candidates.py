"""Candidate answers from entity-tagged passages.

A candidate is the detagged, trimmed text of an entity span whose label is one
of the expected answer types. Candidates are unique (exact string match, first
occurrence wins) and keep passage order.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, List

from qa_extractor.answer_types import expected_entity_types
from qa_extractor.markup import parse_entity_markup, typed_spans
from qa_extractor.nlp.tagger import EntityTagger
from qa_extractor.types import QuestionInfo


log = logging.getLogger("qa_extractor.candidates")


def map_candidates(tagged_text: str, entity_types: AbstractSet[str]) -> List[str]:
    """Filter tagger output down to unique answer strings of the expected types."""
    if not entity_types:
        return []

    out: List[str] = []
    seen = set()
    for span in typed_spans(parse_entity_markup(tagged_text)):
        if span.label not in entity_types:
            continue
        answer = span.content.strip()
        if not answer or answer in seen:
            continue
        seen.add(answer)
        out.append(answer)
    return out


def extract_candidates(text: str, question: QuestionInfo, tagger: EntityTagger) -> List[str]:
    """Tag a passage and map it to candidates (skips the tagger if no type can match)."""
    entity_types = expected_entity_types(question)
    if not entity_types:
        log.debug("No expected entity types for %s/%s", question.query_type.value, question.query_subtype.value)
        return []
    return map_candidates(tagger.tag(text), entity_types)
