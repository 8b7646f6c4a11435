from __future__ import annotations

from fastapi import Depends, Request
from opensearchpy import OpenSearch

from user_api.app.domain.ports import DocumentStorePort
from user_api.app.domain.services.user_service import UserService
from user_api.app.adapters.stores.opensearch_store import OpenSearchDocumentStore, build_client
from user_api.app.platform.config import settings
from user_api.app.platform.exceptions import InvalidInput


# ---- 클라이언트 ----
def get_opensearch(request: Request) -> OpenSearch:
    """
    앱 시작 시 main.py의 lifespan에서 만들어 넣어둔 OpenSearch 클라이언트를 꺼낸다.
    없으면(테스트 등) 즉석 생성.
    """
    if hasattr(request.app.state, "opensearch"):
        return request.app.state.opensearch

    return build_client(settings.DB_HOST, settings.DB_PORT, settings.DB_SCHEME)


def get_document_store(os: OpenSearch = Depends(get_opensearch)) -> DocumentStorePort:
    """
    FastAPI DI에서 OpenSearch 클라이언트를 받아 DocumentStorePort 구현체를 주입한다.
    """
    return OpenSearchDocumentStore(os)


def get_user_service(store: DocumentStorePort = Depends(get_document_store)) -> UserService:
    """
    FastAPI DI에서 DocumentStorePort 를 받아 UserService를 생성해 주입한다.
    """
    return UserService(store, index=settings.USERS_INDEX)


# ---- 요청 제한 ----
async def limit_body_size(request: Request) -> None:
    """
    요청 바디가 MAX_BODY_BYTES 를 넘으면 InvalidInput(400)으로 거절한다.
    Content-Length 가 없거나(chunked) 거짓이어도 실제 바디 길이로 한 번 더 확인한다.
    """
    limit = settings.MAX_BODY_BYTES
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise InvalidInput(f"request body too large: {declared} > {limit} bytes")

    body = await request.body()
    if len(body) > limit:
        raise InvalidInput(f"request body too large: {len(body)} > {limit} bytes")
