"""Core dataclasses for the answer extraction pipeline.

These types are intentionally lightweight and backend-agnostic (no Pyserini/NLTK deps).
They provide a shared interchange format across:
- question classification (produced upstream)
- passage retrieval (produced upstream)
- candidate extraction / evidence ranking
- result writing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class QueryType(Enum):
    """Coarse question category assigned by the upstream classifier."""

    ABBR = "ABBR"
    DESC = "DESC"
    ENTY = "ENTY"
    HUM = "HUM"
    LOC = "LOC"
    NUM = "NUM"

    @classmethod
    def parse(cls, label: str) -> "QueryType":
        """Parse `"HUM"` or `"HUM:ind"` (case-insensitive)."""
        if not isinstance(label, str) or not label.strip():
            raise ValueError("query type label must be a non-empty string")
        coarse = label.strip().split(":", 1)[0].upper()
        try:
            return cls(coarse)
        except ValueError as e:
            raise ValueError(f"Unknown query type: {label!r}") from e


class QuerySubType(Enum):
    """Fine question category; the value is the classifier's `COARSE:fine` label."""

    ABBR_abb = "ABBR:abb"
    ABBR_exp = "ABBR:exp"

    DESC_def = "DESC:def"
    DESC_desc = "DESC:desc"
    DESC_manner = "DESC:manner"
    DESC_reason = "DESC:reason"

    ENTY_animal = "ENTY:animal"
    ENTY_body = "ENTY:body"
    ENTY_color = "ENTY:color"
    ENTY_cremat = "ENTY:cremat"
    ENTY_currency = "ENTY:currency"
    ENTY_dismed = "ENTY:dismed"
    ENTY_event = "ENTY:event"
    ENTY_food = "ENTY:food"
    ENTY_instru = "ENTY:instru"
    ENTY_lang = "ENTY:lang"
    ENTY_letter = "ENTY:letter"
    ENTY_other = "ENTY:other"
    ENTY_plant = "ENTY:plant"
    ENTY_product = "ENTY:product"
    ENTY_religion = "ENTY:religion"
    ENTY_sport = "ENTY:sport"
    ENTY_substance = "ENTY:substance"
    ENTY_symbol = "ENTY:symbol"
    ENTY_techmeth = "ENTY:techmeth"
    ENTY_termeq = "ENTY:termeq"
    ENTY_veh = "ENTY:veh"
    ENTY_word = "ENTY:word"

    HUM_desc = "HUM:desc"
    HUM_gr = "HUM:gr"
    HUM_ind = "HUM:ind"
    HUM_title = "HUM:title"

    LOC_city = "LOC:city"
    LOC_country = "LOC:country"
    LOC_mount = "LOC:mount"
    LOC_other = "LOC:other"
    LOC_state = "LOC:state"

    NUM_code = "NUM:code"
    NUM_count = "NUM:count"
    NUM_date = "NUM:date"
    NUM_dist = "NUM:dist"
    NUM_money = "NUM:money"
    NUM_ord = "NUM:ord"
    NUM_other = "NUM:other"
    NUM_perc = "NUM:perc"
    NUM_period = "NUM:period"
    NUM_speed = "NUM:speed"
    NUM_temp = "NUM:temp"
    NUM_volsize = "NUM:volsize"
    NUM_weight = "NUM:weight"

    @property
    def query_type(self) -> QueryType:
        return QueryType(self.value.split(":", 1)[0])

    @property
    def fine(self) -> str:
        return self.value.split(":", 1)[1]

    @classmethod
    def parse(cls, label: str, query_type: Optional[QueryType] = None) -> "QuerySubType":
        """Parse `"HUM:ind"`, or a bare fine label like `"ind"` given its coarse type.

        Bare labels are ambiguous across coarse types (e.g. `desc`, `other`), so
        `query_type` is required for them.
        """
        if not isinstance(label, str) or not label.strip():
            raise ValueError("query subtype label must be a non-empty string")
        text = label.strip()
        if ":" in text:
            coarse, fine = text.split(":", 1)
            qtype = QueryType.parse(coarse)
            if query_type is not None and qtype is not query_type:
                raise ValueError(f"Subtype {label!r} does not belong to query type {query_type.value}")
        else:
            if query_type is None:
                raise ValueError(f"Bare subtype {label!r} needs a query type (use e.g. 'HUM:ind')")
            qtype, fine = query_type, text
        key = f"{qtype.value}:{fine.strip().lower()}"
        for member in cls:
            if member.value.lower() == key.lower():
                return member
        raise ValueError(f"Unknown query subtype: {label!r}")


@dataclass(frozen=True)
class QuestionInfo:
    """A classified question (read-only to this package)."""

    raw: str
    query_type: QueryType
    query_subtype: QuerySubType

    @classmethod
    def from_labels(cls, raw: str, query_type: str, query_subtype: str) -> "QuestionInfo":
        qtype = QueryType.parse(query_type)
        return cls(raw=raw, query_type=qtype, query_subtype=QuerySubType.parse(query_subtype, qtype))


@dataclass(frozen=True)
class Passage:
    """A candidate passage and the document it came from."""

    document_id: str
    content: str


@dataclass(frozen=True)
class ResultInfo:
    """An extracted answer with its source document."""

    answer: str
    document_id: str


@dataclass(frozen=True)
class PlainText:
    """Unannotated text between spans."""

    text: str


@dataclass(frozen=True)
class TypedSpan:
    """An annotated span: a type label and the inner text."""

    label: str
    content: str


Segment = Union[PlainText, TypedSpan]
