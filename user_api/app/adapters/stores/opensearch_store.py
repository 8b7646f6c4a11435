"""
OpenSearch(Elasticsearch 호환) REST API 로 문서를 색인/조회/검색하는 DocumentStorePort 구현체.

URL 규칙:
    문서 단건:   {base}/{index}/_doc/{id}
    전문 검색:   GET  {base}/_search?q=<text>   (body: from/size)
    구조 검색:   POST {base}/_search            (body: from/size/query)

응답은 opensearch-py 가 JSON 으로 읽은 dict 를 다시 envelope 모델로 검증한다.
JSON 이 아니거나 envelope 형태가 아니면 DeserializationError.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar
from urllib.parse import quote
from opensearchpy import OpenSearch
from opensearchpy.exceptions import (
    ConnectionError as OpenSearchConnectionError,
    SerializationError,
    TransportError,
)
from pydantic import BaseModel, ValidationError

from user_api.app.domain.ports import DocumentStorePort
from user_api.app.domain.envelopes import ActionEnvelope, SearchEnvelope
from user_api.app.domain.query_dsl import SearchRequest
from user_api.app.platform.exceptions import (
    BackendConnectionError,
    DeserializationError,
    InvalidAddressError,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
E = TypeVar("E", bound=BaseModel)


def build_client(host: str, port: int, scheme: str = "http") -> OpenSearch:
    """
    공유 OpenSearch 클라이언트를 만든다.
    내부 urllib3 커넥션 풀(keep-alive)은 스레드 간 공유해도 안전하다.
    재시도는 하지 않는다(max_retries=0).
    """
    if not host:
        raise InvalidAddressError("backend host is empty")
    if not 0 < port <= 65535:
        raise InvalidAddressError(f"backend port out of range: {port}")

    return OpenSearch(
        hosts=[{"host": host, "port": port, "scheme": scheme}],
        verify_certs=False,
        max_retries=0,
        retry_on_timeout=False,
    )


class OpenSearchDocumentStore(DocumentStorePort):

    def __init__(self, client: OpenSearch) -> None:
        self.client = client

    # ================= public API =================
    def create(self, index: str, doc_id: str, document: dict[str, Any]) -> ActionEnvelope[Any]:
        """
        문서를 {index}/_doc/{id} 에 색인한다.

        Args:
            index: 인덱스 이름
            doc_id: 문서 id
            document: _source 로 저장할 문서
        Returns:
            ActionEnvelope: 색인 결과. 성공 여부는 호출자가 result 태그로 판단한다.
        """
        logger.info("store.create: index=%s id=%s", index, doc_id)
        raw = self._call(self.client.index, index=index, id=doc_id, body=document)
        return self._into(ActionEnvelope[Any], raw)

    def get(self, index: str, doc_id: str, model: type[M]) -> ActionEnvelope[M]:
        """
        문서를 {index}/_doc/{id} 에서 조회한다.
        404(found=false)는 오류로 보지 않고 source=None 인 envelope 로 돌려준다.

        Args:
            index: 인덱스 이름
            doc_id: 문서 id
            model: _source 를 변환할 모델
        Returns:
            ActionEnvelope[M]
        """
        logger.info("store.get: index=%s id=%s", index, doc_id)
        raw = self._call(self.client.get, index=index, id=doc_id, ignore=404)
        return self._into(ActionEnvelope[model], raw)

    def search(self, request: SearchRequest, index: str | None = None) -> SearchEnvelope:
        """
        검색을 수행한다.

        - FreeText: GET _search?q=<text>, body 에는 from/size 만
        - BoolQuery/MatchAll: POST _search, body 에 query DSL 포함

        Args:
            request: build_search_request 결과
            index: 검색 대상 인덱스(없으면 전체)
        Returns:
            SearchEnvelope: 검색 결과(hits 원본)
        """
        body = request.to_body()
        text = request.free_text
        if text is not None:
            logger.info("store.search: mode=text q=%s body=%s", text, body)
            raw = self._call(
                self.client.transport.perform_request,
                "GET", self._search_path(index), params={"q": text}, body=body,
            )
        else:
            logger.info("store.search: mode=dsl body=%s", body)
            if index is None:
                raw = self._call(self.client.search, body=body)
            else:
                raw = self._call(self.client.search, index=index, body=body)
        return self._into(SearchEnvelope, raw)

    def ping(self) -> bool:
        return self.client.ping()

    # ================= internals =================
    @staticmethod
    def _search_path(index: str | None) -> str:
        if index is None:
            return "/_search"
        return f"/{quote(index, safe='')}/_search"

    @staticmethod
    def _call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        opensearch-py 호출을 감싸 예외를 도메인 예외로 바꾼다.

        - 연결/타임아웃 실패      → BackendConnectionError
        - 응답이 JSON 이 아님      → DeserializationError
        - 그 밖의 비정상 상태 코드 → DeserializationError (에러 본문은 envelope 형태가 아님)
        """
        try:
            return fn(*args, **kwargs)
        except OpenSearchConnectionError as e:
            logger.warning("store: connection failed: %s", e)
            raise BackendConnectionError(str(e)) from e
        except SerializationError as e:
            logger.warning("store: response is not JSON: %s", e)
            raise DeserializationError(str(e)) from e
        except TransportError as e:
            logger.warning("store: unexpected response status=%s error=%s", e.status_code, e.error)
            raise DeserializationError(f"unexpected response status={e.status_code}") from e

    @staticmethod
    def _into(envelope: type[E], raw: Any) -> E:
        """이미 JSON 으로 읽힌 응답을 envelope 모델로 다시 해석한다."""
        try:
            return envelope.model_validate(raw)
        except ValidationError as e:
            logger.warning("store: response does not match %s: %s", envelope.__name__, e.error_count())
            raise DeserializationError(f"response does not match {envelope.__name__}") from e
