from qa_extractor.query_prefix import build_query_prefix, query_prefix_from_chunks

from conftest import FixedChunker


def test_stop_label_chunks_are_dropped():
    assert query_prefix_from_chunks("[NP apple][PP of doom][VP falls]") == "apple falls "


def test_stop_labels_match_by_prefix():
    assert query_prefix_from_chunks("[NP cats] [SBAR that] [PPX odd] [VP purr]") == "cats purr "


def test_question_words_dropped_case_insensitively():
    chunks = "[NP What] [VP is] [NP the capital] [PP of] [NP France] ?"
    assert query_prefix_from_chunks(chunks) == "is the capital France "
    assert query_prefix_from_chunks("[ADVP WHEN] [VP did] [NP it] [VP end]") == "did it end "


def test_question_word_only_removed_when_whole_chunk():
    assert query_prefix_from_chunks("[NP what color] [VP is] [NP it]") == "what color is it "


def test_plain_text_outside_chunks_is_ignored():
    assert query_prefix_from_chunks("Well , [NP Ada] [VP wrote] ?") == "Ada wrote "


def test_everything_filtered_gives_empty_prefix():
    assert query_prefix_from_chunks("[NP Who] [PP in] [SBAR which]") == ""
    assert query_prefix_from_chunks("") == ""


def test_custom_stop_lists():
    chunks = "[NP Who] [VP proposed] [NP the test]"
    assert query_prefix_from_chunks(chunks, stop_labels=("VP",), question_words=()) == "Who the test "


def test_build_query_prefix_runs_chunker():
    chunker = FixedChunker("[NP Who] [VP proposed] [NP the test] ?")
    assert build_query_prefix("Who proposed the test?", chunker) == "proposed the test "
    assert chunker.calls == ["Who proposed the test?"]
