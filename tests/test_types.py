import pytest

from qa_extractor.types import QueryType, QuerySubType, QuestionInfo


def test_query_type_parse():
    assert QueryType.parse("hum") is QueryType.HUM
    assert QueryType.parse("NUM:date") is QueryType.NUM
    with pytest.raises(ValueError):
        QueryType.parse("XYZ")


def test_query_subtype_parse():
    assert QuerySubType.parse("HUM:ind") is QuerySubType.HUM_ind
    assert QuerySubType.parse("num:Date") is QuerySubType.NUM_date
    assert QuerySubType.parse("desc", QueryType.HUM) is QuerySubType.HUM_desc
    assert QuerySubType.parse("desc", QueryType.DESC) is QuerySubType.DESC_desc


def test_query_subtype_parse_errors():
    with pytest.raises(ValueError):
        QuerySubType.parse("ind")
    with pytest.raises(ValueError):
        QuerySubType.parse("HUM:ind", QueryType.NUM)
    with pytest.raises(ValueError):
        QuerySubType.parse("HUM:nope")


def test_subtype_properties():
    assert QuerySubType.NUM_perc.query_type is QueryType.NUM
    assert QuerySubType.NUM_perc.fine == "perc"


def test_question_info_from_labels():
    q = QuestionInfo.from_labels("Who proposed the test?", "HUM", "ind")
    assert q == QuestionInfo("Who proposed the test?", QueryType.HUM, QuerySubType.HUM_ind)
