import sys

import pytest

from qa_extractor.candidates import map_candidates
from qa_extractor.nlp.tagger import tag_numeric_entities


def test_numeric_entities_tagged():
    tagged = tag_numeric_entities("It cost $ 5 million , rose 12 % by 3pm on May 4 , 1950 .")
    assert map_candidates(tagged, {"MONEY"}) == ["$ 5 million"]
    assert map_candidates(tagged, {"PERCENT"}) == ["12 %"]
    assert map_candidates(tagged, {"TIME"}) == ["3pm"]
    assert map_candidates(tagged, {"DATE"}) == ["May 4 , 1950"]


def test_numeric_entities_leave_existing_spans_alone():
    tagged = tag_numeric_entities("<ORGANIZATION>Studio 1950</ORGANIZATION> opened in 1950 .")
    assert map_candidates(tagged, {"ORGANIZATION"}) == ["Studio 1950"]
    assert map_candidates(tagged, {"DATE"}) == ["1950"]


def test_year_tagged_as_date():
    assert tag_numeric_entities("in 1950 .") == "in <DATE>1950</DATE> ."


def test_missing_nltk_reports_core_dependency(monkeypatch):
    from qa_extractor.nlp._nltk import require_nltk

    monkeypatch.setitem(sys.modules, "nltk", None)
    with pytest.raises(RuntimeError, match="core dependency"):
        require_nltk()


def _nltk_ready(*resources):
    try:
        import nltk
    except ImportError:
        return False
    for res in resources:
        try:
            nltk.data.find(res)
        except LookupError:
            return False
    return True


@pytest.mark.skipif(
    not _nltk_ready("tokenizers/punkt_tab", "taggers/averaged_perceptron_tagger_eng"),
    reason="NLTK tokenizer/tagger data not installed",
)
def test_nltk_chunker_brackets_chunks():
    from qa_extractor.nlp.chunker import NltkChunker
    from qa_extractor.query_prefix import build_query_prefix

    chunked = NltkChunker().chunk("Who proposed the imitation game?")
    assert chunked.startswith("[NP Who]")
    prefix = build_query_prefix("Who proposed the imitation game?", NltkChunker())
    assert "imitation game" in prefix
    assert not prefix.lower().startswith("who")


@pytest.mark.skipif(
    not _nltk_ready(
        "tokenizers/punkt_tab",
        "taggers/averaged_perceptron_tagger_eng",
        "chunkers/maxent_ne_chunker_tab",
        "corpora/words",
    ),
    reason="NLTK NE chunker data not installed",
)
def test_nltk_tagger_finds_people_and_years():
    from qa_extractor.nlp.tagger import NltkEntityTagger

    tagged = NltkEntityTagger().tag("Alan Turing proposed the test in 1950.")
    assert "1950" in map_candidates(tagged, {"DATE"})
    assert any("Turing" in c for c in map_candidates(tagged, {"PERSON", "ORGANIZATION", "LOCATION"}))
