"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar
from pydantic import BaseModel

from .envelopes import ActionEnvelope, SearchEnvelope
from .query_dsl import SearchRequest

M = TypeVar("M", bound=BaseModel)


class DocumentStorePort(Protocol):
    """
    문서 저장소(OpenSearch/Elasticsearch 호환) 접근.

    세 연산 모두 재시도하지 않으며, 실패는 SearchBackendError 하위 예외로 즉시 전달한다.
    """

    def create(self, index: str, doc_id: str, document: dict[str, Any]) -> ActionEnvelope[Any]:
        """
        Returns:
            ActionEnvelope: 색인 결과(result 태그로 성공 여부 판단)
        """
        ...

    def get(self, index: str, doc_id: str, model: type[M]) -> ActionEnvelope[M]:
        """
        Returns:
            ActionEnvelope[M]: 문서가 없으면 source=None
        """
        ...

    def search(self, request: SearchRequest, index: str | None = None) -> SearchEnvelope:
        """
        Returns:
            SearchEnvelope: 가공하지 않은 hits 를 담은 검색 결과
        """
        ...

    def ping(self) -> bool:
        ...
