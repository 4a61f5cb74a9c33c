import pytest

from qa_extractor.answer_types import expected_entity_types, resolve_entity_types
from qa_extractor.types import QueryType, QuerySubType, QuestionInfo


@pytest.mark.parametrize(
    "subtype, expected",
    [
        (QuerySubType.HUM_ind, {"PERSON"}),
        (QuerySubType.HUM_desc, {"PERSON"}),
        (QuerySubType.HUM_title, {"PERSON"}),
        (QuerySubType.HUM_gr, {"ORGANIZATION"}),
        (QuerySubType.NUM_date, {"TIME", "DATE"}),
        (QuerySubType.NUM_period, {"TIME", "DATE"}),
        (QuerySubType.NUM_money, {"MONEY"}),
        (QuerySubType.NUM_perc, {"PERCENT"}),
    ],
)
def test_table_entries(subtype, expected):
    assert resolve_entity_types(subtype.query_type, subtype) == frozenset(expected)


@pytest.mark.parametrize("subtype", [s for s in QuerySubType if s.query_type is QueryType.LOC])
def test_location_matches_every_subtype(subtype):
    assert resolve_entity_types(QueryType.LOC, subtype) == frozenset({"LOCATION"})


@pytest.mark.parametrize(
    "subtype",
    [QuerySubType.NUM_count, QuerySubType.NUM_dist, QuerySubType.ENTY_animal, QuerySubType.DESC_def, QuerySubType.ABBR_exp],
)
def test_unmapped_combinations_are_empty(subtype):
    assert resolve_entity_types(subtype.query_type, subtype) == frozenset()


def test_every_combination_resolves():
    for qtype in QueryType:
        for subtype in QuerySubType:
            assert isinstance(resolve_entity_types(qtype, subtype), frozenset)


def test_expected_entity_types_from_question():
    q = QuestionInfo("Who founded IBM?", QueryType.HUM, QuerySubType.HUM_gr)
    assert expected_entity_types(q) == frozenset({"ORGANIZATION"})
