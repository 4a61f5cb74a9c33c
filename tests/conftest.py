from __future__ import annotations

from typing import Dict, List, Mapping

import pytest

from qa_extractor.nlp.chunker import Chunker
from qa_extractor.nlp.tagger import EntityTagger
from qa_extractor.search.provider import SearchProviderError, WebSearchProvider


class DictTagger(EntityTagger):
    """Returns pre-tagged text per passage; raises for passages listed in `fail`."""

    def __init__(self, tagged: Mapping[str, str], fail=()) -> None:
        self.tagged = dict(tagged)
        self.fail = set(fail)
        self.calls: List[str] = []

    def tag(self, text: str) -> str:
        self.calls.append(text)
        if text in self.fail:
            raise RuntimeError(f"tagger failed on {text!r}")
        return self.tagged.get(text, text)


class FixedChunker(Chunker):
    def __init__(self, chunked: str, fail: bool = False) -> None:
        self.chunked = chunked
        self.fail = fail
        self.calls: List[str] = []

    def chunk(self, text: str) -> str:
        self.calls.append(text)
        if self.fail:
            raise RuntimeError("chunker failed")
        return self.chunked


class CandidateSearch(WebSearchProvider):
    """Evidence keyed by candidate: the query is `prefix + candidate`."""

    def __init__(self, snippets: Dict[str, str], fail=()) -> None:
        self.snippets = dict(snippets)
        self.fail = set(fail)
        self.calls: List[str] = []

    def search(self, query: str) -> str:
        self.calls.append(query)
        # Longest key first so "Alan Turing" wins over "Turing".
        for candidate in sorted(self.snippets, key=len, reverse=True):
            if query.endswith(candidate):
                if candidate in self.fail:
                    raise SearchProviderError(f"search failed for {query!r}")
                return self.snippets[candidate]
        return ""


@pytest.fixture
def turing_snippets() -> Dict[str, str]:
    return {
        "Alan Turing": "Alan Turing proposed the imitation test in 1950.",
        "1950": "The Turing test was proposed by Alan Turing in 1950.",
        "3pm": "The meeting starts at 3pm every day.",
    }
