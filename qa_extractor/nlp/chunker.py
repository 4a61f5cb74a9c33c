"""Chunker interface and the default NLTK `RegexpParser` implementation.

Chunker output is the input text with shallow syntactic chunks bracketed inline:
`[NP Who] [VP proposed] [NP the imitation game] [PP in] [NP 1950] ?`
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from qa_extractor.nlp._nltk import require_nltk, with_nltk_data


NLTK_CHUNKER_DATA = ("punkt", "punkt_tab", "averaged_perceptron_tagger", "averaged_perceptron_tagger_eng")

# Rules are applied in order; later rules never split earlier chunks.
# `that`/`which` as relative pronouns (WDT) open a subordinate clause.
CHUNK_GRAMMAR = r"""
SBAR: {<WDT|WP\$>}
NP: {<DT|PRP\$|POS>?<JJ.*|CD|VBN|VBG>*<NN.*>+<POS>?<NN.*>*}
    {<NNP>+}
    {<CD>+}
    {<PRP|WP|EX>}
PP: {<IN|TO>}
VP: {<MD>?<VB.*>+<RP>?}
ADJP: {<RB.*>?<JJ.*>+}
ADVP: {<WRB|RB.*>+}
"""


class Chunker(ABC):
    """Contract for chunkers: text in, `[LABEL content]`-annotated text out."""

    @abstractmethod
    def chunk(self, text: str) -> str:
        ...


class NltkChunker(Chunker):
    """Shallow chunker over NLTK POS tags."""

    def __init__(self, grammar: str = CHUNK_GRAMMAR) -> None:
        self._nltk = require_nltk()
        self._parser = self._nltk.RegexpParser(grammar)

    def chunk(self, text: str) -> str:
        if not text or not text.strip():
            return ""
        nltk = self._nltk

        def _run() -> str:
            tagged = nltk.pos_tag(nltk.word_tokenize(text))
            tree = self._parser.parse(tagged)
            parts: List[str] = []
            for node in tree:
                if isinstance(node, nltk.Tree):
                    words = " ".join(w for w, _pos in node.leaves())
                    parts.append(f"[{node.label()} {words}]")
                else:
                    parts.append(node[0])
            return " ".join(parts)

        return with_nltk_data(_run, NLTK_CHUNKER_DATA)
