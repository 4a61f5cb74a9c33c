from __future__ import annotations

import argparse
import logging
import os

from qa_extractor.config import INDEX_BACKENDS, config_from_mapping
from qa_extractor.io import load_passages, load_static_evidence, write_results
from qa_extractor.logging_utils import configure_logging
from qa_extractor.nlp.chunker import NltkChunker
from qa_extractor.nlp.tagger import NltkEntityTagger
from qa_extractor.pipeline import AnswerExtractor
from qa_extractor.search.provider import GoogleCustomSearchProvider, StaticSearchProvider, WebSearchProvider
from qa_extractor.types import QuestionInfo


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Extract and verify entity answers from candidate passages.")
    p.add_argument("--question", required=True, help="Raw question text.")
    p.add_argument("--query-type", required=True, help="Coarse question type (e.g. HUM, LOC, NUM).")
    p.add_argument("--query-subtype", required=True, help="Fine question type (e.g. ind, HUM:ind, date).")
    p.add_argument("--passages", required=True, help="Passages file: document_id<TAB>text per line.")
    p.add_argument("--output", default=None, help="Results file (answer<TAB>document_id); stdout if omitted.")
    p.add_argument("--log-level", default="INFO", help="Logging level (INFO, DEBUG, ...).")

    # Evidence search
    p.add_argument("--search", choices=["google", "static"], default="google")
    p.add_argument("--evidence", default=None, help="Static evidence file: query<TAB>result_text per line.")
    p.add_argument("--search-timeout", type=float, default=None)
    p.add_argument("--search-retries", type=int, default=None)
    p.add_argument("--search-backoff", type=float, default=None, help="Base delay in seconds between search retries.")
    p.add_argument("--search-workers", type=int, default=None)
    p.add_argument("--passage-workers", type=int, default=None)

    # Evidence index
    p.add_argument("--index-backend", choices=list(INDEX_BACKENDS), default=None)
    p.add_argument("--index-root", default=None, help="Directory for ephemeral Lucene indexes.")
    p.add_argument("--k1", type=float, default=None)
    p.add_argument("--b", type=float, default=None)
    return p


def build_search_provider(args: argparse.Namespace, config) -> WebSearchProvider:
    if args.search == "static":
        if not args.evidence:
            raise ValueError("--search static requires --evidence")
        return StaticSearchProvider(load_static_evidence(args.evidence))
    return GoogleCustomSearchProvider.from_env(os.environ, **config.search_provider_options())


def main() -> int:
    args = build_arg_parser().parse_args()
    configure_logging(args.log_level)
    log = logging.getLogger("main")

    config = config_from_mapping(
        {
            "index_backend": args.index_backend,
            "index_root": args.index_root,
            "bm25_k1": args.k1,
            "bm25_b": args.b,
            "search_timeout": args.search_timeout,
            "search_retries": args.search_retries,
            "search_backoff": args.search_backoff,
            "search_workers": args.search_workers,
            "passage_workers": args.passage_workers,
        }
    )
    question = QuestionInfo.from_labels(args.question, args.query_type, args.query_subtype)
    passages = load_passages(args.passages)
    log.info("Loaded %d passages for question=%r (%s)", len(passages), question.raw, question.query_subtype.value)

    extractor = AnswerExtractor(
        tagger=NltkEntityTagger(),
        chunker=NltkChunker(),
        search_provider=build_search_provider(args, config),
        config=config,
    )
    results = extractor.extract_answers(passages, question)
    write_results(results, args.output)
    if args.output:
        log.info("Wrote %d results: %s", len(results), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
