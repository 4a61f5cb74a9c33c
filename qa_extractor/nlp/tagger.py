"""Entity tagger interface and the default NLTK-based implementation.

Tagger output is the input text with entities wrapped inline, e.g.
`<PERSON>Alan Turing</PERSON> proposed the test in <DATE>1950</DATE> .`
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from qa_extractor.markup import parse_entity_markup
from qa_extractor.nlp._nltk import require_nltk, with_nltk_data
from qa_extractor.types import TypedSpan


NLTK_TAGGER_DATA = (
    "punkt",
    "punkt_tab",
    "averaged_perceptron_tagger",
    "averaged_perceptron_tagger_eng",
    "maxent_ne_chunker",
    "maxent_ne_chunker_tab",
    "words",
)

# NLTK ne_chunk labels -> labels used by the answer type table.
NE_LABEL_MAP: Dict[str, str] = {
    "PERSON": "PERSON",
    "ORGANIZATION": "ORGANIZATION",
    "LOCATION": "LOCATION",
    "GPE": "LOCATION",
    "GSP": "LOCATION",
    "FACILITY": "LOCATION",
}

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December|"
    "Jan\\.?|Feb\\.?|Mar\\.?|Apr\\.?|Jun\\.?|Jul\\.?|Aug\\.?|Sep\\.?|Sept\\.?|Oct\\.?|Nov\\.?|Dec\\.?"
)

# ne_chunk has no numeric classes; these patterns fill in MONEY/PERCENT/TIME/DATE.
# Order matters: earlier patterns claim their text first.
NUMERIC_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("MONEY", re.compile(r"(?:[$£€]\s?\d[\d,]*(?:\.\d+)?(?:\s(?:million|billion|thousand))?)"
                         r"|(?:\b\d[\d,]*(?:\.\d+)?\s(?:dollars|euros|pounds)\b)", re.IGNORECASE)),
    ("PERCENT", re.compile(r"\b\d+(?:\.\d+)?\s?(?:%|percent\b|per\scent\b)", re.IGNORECASE)),
    ("TIME", re.compile(r"\b\d{1,2}(?::\d{2})?\s?(?:a\.m\.|p\.m\.|am\b|pm\b)", re.IGNORECASE)),
    ("DATE", re.compile(rf"\b(?:(?:{_MONTHS})\s\d{{1,2}}(?:\s?,\s\d{{4}})?|\d{{1,2}}\s(?:{_MONTHS})(?:\s\d{{4}})?"
                        rf"|(?:{_MONTHS})\s\d{{4}}|(?:1[0-9]|20)\d{{2}}s?)\b")),
]


class EntityTagger(ABC):
    """Contract for entity taggers: text in, inline-annotated text out."""

    @abstractmethod
    def tag(self, text: str) -> str:
        ...


def tag_numeric_entities(text: str) -> str:
    """Wrap MONEY/PERCENT/TIME/DATE expressions found outside existing entity spans."""
    out: List[str] = []
    for seg in parse_entity_markup(text):
        if isinstance(seg, TypedSpan):
            out.append(f"<{seg.label}>{seg.content}</{seg.label}>")
        else:
            out.append(_tag_plain(seg.text, 0))
    return "".join(out)


def _tag_plain(text: str, pattern_idx: int) -> str:
    if pattern_idx >= len(NUMERIC_PATTERNS) or not text:
        return text
    label, pattern = NUMERIC_PATTERNS[pattern_idx]
    out: List[str] = []
    pos = 0
    for m in pattern.finditer(text):
        out.append(_tag_plain(text[pos:m.start()], pattern_idx + 1))
        out.append(f"<{label}>{m.group(0)}</{label}>")
        pos = m.end()
    out.append(_tag_plain(text[pos:], pattern_idx + 1))
    return "".join(out)


class NltkEntityTagger(EntityTagger):
    """NLTK `ne_chunk` tagger plus regex-based numeric entities.

    Tokens are re-joined with single spaces, so punctuation ends up separated
    from words (`Turing .`), as with most tokenizing taggers.
    """

    def __init__(self, *, numeric_entities: bool = True) -> None:
        self._nltk = require_nltk()
        self.numeric_entities = bool(numeric_entities)

    def _tag_sentence(self, sentence: str) -> str:
        nltk = self._nltk
        tokens = nltk.word_tokenize(sentence)
        tree = nltk.ne_chunk(nltk.pos_tag(tokens))
        parts: List[str] = []
        for node in tree:
            if isinstance(node, nltk.Tree):
                label = NE_LABEL_MAP.get(node.label(), node.label())
                words = " ".join(w for w, _pos in node.leaves())
                parts.append(f"<{label}>{words}</{label}>")
            else:
                parts.append(node[0])
        return " ".join(parts)

    def tag(self, text: str) -> str:
        if not text or not text.strip():
            return ""

        def _run() -> str:
            return " ".join(self._tag_sentence(s) for s in self._nltk.sent_tokenize(text))

        tagged = with_nltk_data(_run, NLTK_TAGGER_DATA)
        if self.numeric_entities:
            tagged = tag_numeric_entities(tagged)
        return tagged
