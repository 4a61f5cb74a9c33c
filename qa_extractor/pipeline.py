"""Answer extraction pipeline wiring.

Pipeline (per question):
1) For each passage, tag entities and keep those of the expected answer types
2) Build the query prefix from the question (once, on first need)
3) Search the web for `prefix + candidate`, index the snippets
4) Rank candidates by how well their evidence matches the prefix
5) Emit (answer, document_id) for passages that produced an answer

Passages are independent units of work: a failure while processing one
passage is logged and that passage yields no result.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from qa_extractor.candidates import extract_candidates
from qa_extractor.config import ExtractorConfig, default_extractor_config
from qa_extractor.nlp.chunker import Chunker
from qa_extractor.nlp.tagger import EntityTagger
from qa_extractor.query_prefix import build_query_prefix
from qa_extractor.ranker import rank_candidates
from qa_extractor.search.provider import WebSearchProvider
from qa_extractor.types import Passage, QuestionInfo, ResultInfo


class _QueryPrefix:
    """Question topic, computed at most once per question (thread-safe)."""

    def __init__(self, question: QuestionInfo, chunker: Chunker, config: ExtractorConfig) -> None:
        self._question = question
        self._chunker = chunker
        self._config = config
        self._lock = threading.Lock()
        self._value: Optional[str] = None
        self._error: Optional[BaseException] = None

    def get(self) -> str:
        with self._lock:
            if self._error is not None:
                raise RuntimeError(f"query prefix unavailable: {self._error}") from self._error
            if self._value is None:
                try:
                    self._value = build_query_prefix(
                        self._question.raw,
                        self._chunker,
                        stop_labels=self._config.stop_labels,
                        question_words=self._config.question_words,
                    )
                except Exception as e:
                    self._error = e
                    raise
            return self._value


class AnswerExtractor:
    """Extracts and verifies entity answers from candidate passages."""

    def __init__(
        self,
        *,
        tagger: EntityTagger,
        chunker: Chunker,
        search_provider: WebSearchProvider,
        config: Optional[ExtractorConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.tagger = tagger
        self.chunker = chunker
        self.search_provider = search_provider
        self.config = (config or default_extractor_config()).validate()
        self.log = logger or logging.getLogger("qa_extractor.pipeline")

    def answer_passage(self, passage: Passage, question: QuestionInfo, prefix: Optional[_QueryPrefix] = None) -> str:
        """Best verified answer for one passage, or "" if none. Errors propagate."""
        candidates = extract_candidates(passage.content, question, self.tagger)
        if not candidates:
            return ""
        prefix = prefix or _QueryPrefix(question, self.chunker, self.config)
        query_prefix = prefix.get()
        self.log.debug("Passage %s: %d candidates, prefix=%r", passage.document_id, len(candidates), query_prefix)
        return rank_candidates(
            query_prefix,
            candidates,
            search_provider=self.search_provider,
            config=self.config,
        )

    def _process(self, passage: Passage, question: QuestionInfo, prefix: _QueryPrefix) -> Optional[ResultInfo]:
        try:
            answer = self.answer_passage(passage, question, prefix)
        except Exception:
            self.log.exception(
                "Unable to rank answers for passage doc=%s (question=%r)", passage.document_id, question.raw
            )
            return None
        if not answer:
            return None
        return ResultInfo(answer=answer, document_id=passage.document_id)

    def extract_answers(self, passages: Sequence[Passage], question: QuestionInfo) -> List[ResultInfo]:
        """Run the pipeline over all passages; results follow passage order."""
        t0 = time.perf_counter()
        prefix = _QueryPrefix(question, self.chunker, self.config)
        workers = self.config.passage_workers

        if workers <= 1 or len(passages) <= 1:
            outcomes = [self._process(p, question, prefix) for p in passages]
        else:
            with ThreadPoolExecutor(max_workers=min(workers, len(passages))) as pool:
                outcomes = list(pool.map(lambda p: self._process(p, question, prefix), passages))

        results = [r for r in outcomes if r is not None]
        self.log.info(
            "Extracted %d answers from %d passages (type=%s) in %.2fs.",
            len(results),
            len(passages),
            question.query_subtype.value,
            time.perf_counter() - t0,
        )
        return results
