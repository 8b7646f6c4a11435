"""
검색 백엔드 응답 envelope 모델.

- ActionEnvelope[T]: 문서 단건 색인/조회(_doc) 응답
- SearchEnvelope: _search 응답 (hits.hits[]._source 는 가공하지 않은 원본)

_search 결과를 도메인 모델로 바꿀 때는 hit 단위로 검증하고,
형태가 맞지 않는 hit 은 조용히 버린다(부분 결과 우선).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class ActionResult(str, Enum):
    created = "created"
    updated = "updated"
    deleted = "deleted"
    not_found = "not_found"
    noop = "noop"


class ActionEnvelope(BaseModel, Generic[T]):
    """
    PUT/GET {index}/_doc/{id} 응답.
    조회 시 문서가 없으면 found=false 이고 source 는 None (오류 아님).
    """
    model_config = ConfigDict(populate_by_name=True)

    index: str = Field(..., alias="_index")
    id: str = Field(..., alias="_id")
    version: int | None = Field(None, alias="_version")
    doc_type: str | None = Field(None, alias="_type")
    result: ActionResult | None = None
    created: bool | None = None
    found: bool | None = None
    source: T | None = Field(None, alias="_source")

    def is_result(self, result: ActionResult) -> bool:
        """result 태그 일치 여부. created/found 플래그는 보지 않는다."""
        return self.result == result

    @property
    def is_created(self) -> bool:
        return self.is_result(ActionResult.created)

    @property
    def is_found(self) -> bool:
        return bool(self.found)


class SearchHit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    index: str = Field(..., alias="_index")
    score: float | None = Field(None, alias="_score")
    source: Any = Field(None, alias="_source")


class SearchHits(BaseModel):
    # total 형태는 백엔드 버전마다 다르다(int 또는 {"value", "relation"}). 해석하지 않는다.
    total: Any = None
    max_score: float | None = None
    hits: list[SearchHit] = Field(default_factory=list)


class SearchEnvelope(BaseModel):
    took: int
    timed_out: bool
    hits: SearchHits

    def documents(self, model: type[M]) -> list[M]:
        """
        hits 의 _source 를 model 로 변환한다.

        hit 마다 독립적으로 검증하며, 실패한 hit 은 결과에서 빠진다.
        따라서 반환 개수는 len(hits.hits) 보다 작을 수 있다.

        Args:
            model: 변환 대상 Pydantic 모델
        Returns:
            list[M]: 검증을 통과한 문서 목록(원래 순서 유지)
        """
        docs: list[M] = []
        for hit in self.hits.hits:
            try:
                docs.append(model.model_validate(hit.source))
            except ValidationError as e:
                logger.debug("envelope.documents: drop hit id=%s index=%s errors=%s",
                             hit.id, hit.index, e.error_count())
        return docs
