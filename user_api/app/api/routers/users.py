from fastapi import APIRouter, Depends, Request
from typing import List
from user_api.app.api.deps import get_user_service, limit_body_size, UserService
from user_api.app.domain.models import User, UserInput
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

# 실패 응답은 모두 빈 JSON 본문(null)
_FAILURES = {
    400: {"description": "잘못된 요청 값 또는 검색 백엔드 오류"},
}

@router.post(
    "",
    summary="사용자 생성",
    description="요청 바디로 사용자를 생성합니다. id는 서버가 UUID로 부여합니다.",
    operation_id="createUser",
    status_code=200,
    response_model=User,
    responses=_FAILURES,
    dependencies=[Depends(limit_body_size)],
)
def create_user(req: UserInput, svc: UserService = Depends(get_user_service)):
    logger.info(f"CreateUserRequest: {req}")
    return svc.create_user(req)


@router.get(
    "/search",
    summary="사용자 검색",
    description=(
        "`query`가 있으면 전문 검색(q=)을 수행하고 다른 필드는 무시합니다. "
        "없으면 `name`, `id`, `job`, `relationship_status`, `age` 중 주어진 필드를 모두 만족하는 "
        "사용자를 찾습니다. 아무 필드도 없으면 전체를 반환합니다. "
        "`size`(기본 30), `from`(기본 0)으로 범위를 지정합니다. "
        "형태가 맞지 않는 문서는 결과에서 제외됩니다."
    ),
    operation_id="searchUsers",
    status_code=200,
    response_model=List[User],
    responses=_FAILURES,
)
def search_users(request: Request, svc: UserService = Depends(get_user_service)):
    params = dict(request.query_params)
    logger.info(f"SearchUsersRequest: {params}")
    return svc.search_users(params)


@router.get(
    "/{user_id}",
    summary="사용자 조회",
    operation_id="getUser",
    status_code=200,
    response_model=User,
    responses={
        **_FAILURES,
        404: {"description": "사용자 없음"},
    },
)
def get_user(user_id: str, svc: UserService = Depends(get_user_service)):
    return svc.get_user(user_id)
