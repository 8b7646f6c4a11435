# app/domain/services/user_service.py
"""
UserService
===========

사용자 생성/조회/검색 유스케이스.

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체(OpenSearchDocumentStore)는 adapters 레이어에서 주입합니다.
- 백엔드 예외(SearchBackendError)는 잡지 않고 그대로 전파합니다.

예시:
    svc = UserService(store, index="users")
    user = svc.create_user(UserInput(name="kim", age=30))
    svc.get_user(str(user.id))
    svc.search_users({"name": "kim"})
"""

from __future__ import annotations

import logging
from typing import Mapping

from user_api.app.domain.ports import DocumentStorePort
from user_api.app.domain.models import User, UserInput
from user_api.app.domain.query_dsl import build_search_request
from user_api.app.platform.exceptions import UserCreationFailed, UserNotFound

logger = logging.getLogger(__name__)

class UserService:

    def __init__(
        self,
        store: DocumentStorePort,
        index: str = "users") -> None:
        self._store = store
        self._index = index

    # ================= public API =================
    def create_user(self, data: UserInput) -> User:
        """
        새 id 를 부여해 사용자를 저장한다.
        Args:
            data: UserInput   : 생성 요청
        Returns:
            User: 저장된 사용자(id 포함)
        Raises:
            UserCreationFailed: 응답 result 가 'created' 가 아닌 경우
        """
        user = User.from_input(data)
        user_id = str(user.id)
        envelope = self._store.create(self._index, user_id, user.to_document())
        if not envelope.is_created:
            result = envelope.result.value if envelope.result else None
            raise UserCreationFailed(user_id, result)
        logger.info("service.create_user: id=%s version=%s", user_id, envelope.version)
        return user

    def get_user(self, user_id: str) -> User:
        """
        Args:
            user_id: str    : 사용자 id
        Returns:
            User: 조회된 사용자
        Raises:
            UserNotFound: 문서가 없는 경우(source 없음)
        """
        envelope = self._store.get(self._index, user_id, User)
        if envelope.source is None:
            raise UserNotFound(user_id)
        return envelope.source

    def search_users(self, params: Mapping[str, str]) -> list[User]:
        """
        검색 파라미터로 사용자를 검색한다.
        형태가 맞지 않는 문서는 결과에서 빠진다.
        Args:
            params: query string 파라미터
        Returns:
            list[User]: 검색된 사용자 목록
        """
        request = build_search_request(params)
        envelope = self._store.search(request)
        users = envelope.documents(User)
        logger.info("service.search_users: hits=%s users=%s", len(envelope.hits.hits), len(users))
        return users
