"""Expected entity types per question category.

The mapping is a fixed lookup table keyed by (coarse type, fine subtype), with a
per-coarse-type wildcard. Anything not listed maps to the empty set, which
means no candidate can pass the type filter.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from qa_extractor.types import QueryType, QuerySubType, QuestionInfo


NO_TYPES: FrozenSet[str] = frozenset()

# (coarse, fine) -> labels; fine=None matches every subtype of the coarse type.
ENTITY_TYPE_TABLE: Dict[Tuple[QueryType, Optional[QuerySubType]], FrozenSet[str]] = {
    (QueryType.LOC, None): frozenset({"LOCATION"}),
    (QueryType.HUM, QuerySubType.HUM_ind): frozenset({"PERSON"}),
    (QueryType.HUM, QuerySubType.HUM_desc): frozenset({"PERSON"}),
    (QueryType.HUM, QuerySubType.HUM_title): frozenset({"PERSON"}),
    (QueryType.HUM, QuerySubType.HUM_gr): frozenset({"ORGANIZATION"}),
    (QueryType.NUM, QuerySubType.NUM_date): frozenset({"TIME", "DATE"}),
    (QueryType.NUM, QuerySubType.NUM_period): frozenset({"TIME", "DATE"}),
    (QueryType.NUM, QuerySubType.NUM_money): frozenset({"MONEY"}),
    (QueryType.NUM, QuerySubType.NUM_perc): frozenset({"PERCENT"}),
}


def resolve_entity_types(query_type: QueryType, query_subtype: QuerySubType) -> FrozenSet[str]:
    """Return the entity labels an answer to this kind of question may carry."""
    wildcard = ENTITY_TYPE_TABLE.get((query_type, None))
    if wildcard is not None:
        return wildcard
    return ENTITY_TYPE_TABLE.get((query_type, query_subtype), NO_TYPES)


def expected_entity_types(question: QuestionInfo) -> FrozenSet[str]:
    return resolve_entity_types(question.query_type, question.query_subtype)
