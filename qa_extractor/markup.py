"""Parsing of inline annotations produced by the NLP collaborators.

Two syntaxes are supported:
- entity tagger output: `<PERSON>Alan Turing</PERSON> proposed the test.`
- chunker output: `[NP The apple] [PP of] [NP doom] [VP falls]`

Both are turned into a flat sequence of segments (`PlainText` | `TypedSpan`) so
that candidate extraction and query building never touch the markup itself.
"""

from __future__ import annotations

import re
from typing import List, Pattern, Sequence

from qa_extractor.types import PlainText, Segment, TypedSpan


# Closing tag must repeat the opening label; anything else stays plain text.
_ENTITY_RE = re.compile(r"<([A-Za-z][\w-]*)>(.*?)</\1>", re.DOTALL)
_CHUNK_RE = re.compile(r"\[(\w+)([^\]]*)\]")


def _parse(text: str, pattern: Pattern[str]) -> List[Segment]:
    if not text:
        return []
    out: List[Segment] = []
    pos = 0
    for m in pattern.finditer(text):
        if m.start() > pos:
            out.append(PlainText(text[pos:m.start()]))
        out.append(TypedSpan(label=m.group(1), content=m.group(2)))
        pos = m.end()
    if pos < len(text):
        out.append(PlainText(text[pos:]))
    return out


def parse_entity_markup(text: str) -> List[Segment]:
    """Split tagger output into plain text and `<LABEL>...</LABEL>` spans."""
    return _parse(text, _ENTITY_RE)


def parse_chunk_markup(text: str) -> List[Segment]:
    """Split chunker output into plain text and `[LABEL ...]` spans."""
    return _parse(text, _CHUNK_RE)


def typed_spans(segments: Sequence[Segment]) -> List[TypedSpan]:
    return [s for s in segments if isinstance(s, TypedSpan)]


def strip_markup(segments: Sequence[Segment]) -> str:
    """Render segments back to text without any markers."""
    parts: List[str] = []
    for s in segments:
        if isinstance(s, TypedSpan):
            parts.append(s.content)
        else:
            parts.append(s.text)
    return "".join(parts)
