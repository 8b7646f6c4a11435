"""
검색 파라미터 → OpenSearch Query DSL 변환.

클라이언트가 보낸 느슨한 문자열 파라미터(query string)를 세 가지 쿼리 형태 중 하나로 바꾼다.

    query=...                       → FreeText   (GET _search?q=...)
    name/id/job/relationship_status/age 중 하나 이상 → BoolQuery  ({"bool": {"must": [...]}})
    아무것도 없음                    → MatchAll   ({"match_all": {}})

`query`가 있으면 다른 필드는 무시한다(전문 검색과 구조 검색은 섞지 않음).
검색 가능한 필드는 SEARCHABLE_FIELDS 로 제한한다.

예시:
    req = build_search_request({"name": "kim", "size": "10"})
    req.to_body()
    # {"from": 0, "size": 10, "query": {"bool": {"must": [{"match": {"name": "kim"}}]}}}
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Mapping, Union
from pydantic import BaseModel, ConfigDict, Field, model_serializer


JSONDict = dict[str, Any]
Scalar = Union[str, int, float, bool]

SEARCHABLE_FIELDS: tuple[str, ...] = ("name", "id", "job", "relationship_status", "age")
DEFAULT_SIZE = 30
DEFAULT_FROM = 0
_UINT64_MAX = 2**64 - 1
_UINT_RE = re.compile(r"\+?[0-9]+")


class RangeOp(str, Enum):
    gte = "gte"
    lte = "lte"
    gt = "gt"
    lt = "lt"
    # eq/neq 는 표준 range 연산이 아니지만 다른 연산과 같은 range 형태로 직렬화한다.
    eq = "eq"
    neq = "neq"

    @classmethod
    def from_symbol(cls, symbol: str) -> RangeOp:
        """'>=', '<=', '>', '<', '=', '!=' 를 RangeOp 로 변환한다."""
        try:
            return _RANGE_SYMBOLS[symbol]
        except KeyError:
            raise ValueError(f"unsupported range operator: {symbol}") from None


_RANGE_SYMBOLS: dict[str, RangeOp] = {
    ">=": RangeOp.gte,
    "<=": RangeOp.lte,
    ">": RangeOp.gt,
    "<": RangeOp.lt,
    "=": RangeOp.eq,
    "!=": RangeOp.neq,
}


# ================== clauses ==================
class MatchClause(BaseModel):
    """{"match": {name: text}}"""
    model_config = ConfigDict(frozen=True)

    name: str
    text: str

    @model_serializer
    def to_dsl(self) -> JSONDict:
        return {"match": {self.name: self.text}}


class TermClause(BaseModel):
    """{"term": {name: value}}"""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Scalar

    @model_serializer
    def to_dsl(self) -> JSONDict:
        return {"term": {self.name: self.value}}


class RangeClause(BaseModel):
    """{"range": {name: {op: value}}}"""
    model_config = ConfigDict(frozen=True)

    name: str
    op: RangeOp
    value: Scalar

    @model_serializer
    def to_dsl(self) -> JSONDict:
        return {"range": {self.name: {self.op.value: self.value}}}


Clause = Union[MatchClause, TermClause, RangeClause]


class BooleanClauses(BaseModel):
    """
    bool 쿼리의 절 묶음.
    비어 있는 목록은 직렬화 결과에서 키 자체를 생략한다. 목록 내 순서는 유지된다.
    """
    must: list[Clause] = Field(default_factory=list)
    must_not: list[Clause] = Field(default_factory=list)
    filter: list[Clause] = Field(default_factory=list)
    should: list[TermClause] = Field(default_factory=list)

    @model_serializer
    def to_dsl(self) -> JSONDict:
        body: JSONDict = {}
        for key in ("must", "must_not", "filter", "should"):
            clauses = getattr(self, key)
            if clauses:
                body[key] = [c.model_dump() for c in clauses]
        return body


# ================== query expression ==================
class FreeText(BaseModel):
    """전문 검색. 본문이 아니라 q= 쿼리 파라미터로 전송되므로 DSL 은 None."""
    model_config = ConfigDict(frozen=True)

    text: str

    @model_serializer
    def to_dsl(self) -> None:
        return None


class BoolQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    clauses: BooleanClauses

    @model_serializer
    def to_dsl(self) -> JSONDict:
        return {"bool": self.clauses.model_dump()}


class MatchAll(BaseModel):
    model_config = ConfigDict(frozen=True)

    @model_serializer
    def to_dsl(self) -> JSONDict:
        return {"match_all": {}}


QueryExpression = Union[FreeText, BoolQuery, MatchAll]


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: QueryExpression
    size: int = Field(DEFAULT_SIZE, ge=0)
    from_: int = Field(DEFAULT_FROM, ge=0, alias="from")

    @property
    def free_text(self) -> str | None:
        """FreeText 쿼리면 검색어, 아니면 None."""
        return self.query.text if isinstance(self.query, FreeText) else None

    def to_body(self) -> JSONDict:
        """
        _search 요청 바디.
        FreeText 는 q= 로 보내므로 from/size 만 담는다.
        """
        body: JSONDict = {"from": self.from_, "size": self.size}
        if not isinstance(self.query, FreeText):
            body["query"] = self.query.model_dump()
        return body


# ================== builder ==================
def _parse_uint(raw: str | None, default: int) -> int:
    """부호 없는 정수 파싱. 없거나 파싱 불가면 default (오류 아님)."""
    if raw is None or not _UINT_RE.fullmatch(raw):
        return default
    value = int(raw)
    return value if value <= _UINT64_MAX else default


def build_query(params: Mapping[str, str]) -> QueryExpression:
    if "query" in params:
        return FreeText(text=params["query"])

    must = [MatchClause(name=f, text=params[f]) for f in SEARCHABLE_FIELDS if f in params]
    if must:
        return BoolQuery(clauses=BooleanClauses(must=must))
    return MatchAll()


def build_search_request(params: Mapping[str, str]) -> SearchRequest:
    """
    검색 파라미터를 SearchRequest 로 변환한다. 어떤 입력에도 실패하지 않는다.

    Args:
        params: query string 파라미터(키/값 모두 문자열)
    Returns:
        SearchRequest: 쿼리 + size(기본 30) + from(기본 0)
    """
    return SearchRequest(
        query=build_query(params),
        size=_parse_uint(params.get("size"), DEFAULT_SIZE),
        from_=_parse_uint(params.get("from"), DEFAULT_FROM),
    )
