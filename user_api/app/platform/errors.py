from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import status
from starlette.exceptions import HTTPException as StarletteHTTPException
from user_api.app.platform.logging import request_id_ctx
from user_api.app.platform import exceptions as domainex
import logging

logger = logging.getLogger(__name__)

def error_envelope(message, code="BAD_REQUEST", details=None, trace_id=None):
    return {
        "success": False,
        "error": {
            "code": code, "message": message, "details": details
        },
        "trace_id": trace_id
    }

def empty_response(status_code: int) -> JSONResponse:
    """users API 실패 응답: 본문은 빈 JSON(null)."""
    return JSONResponse(status_code=status_code, content=None)

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # 라우팅 실패(404/405) 등 프레임워크 레벨 에러
    return JSONResponse(status_code=exc.status_code,
                        content=error_envelope(
                            exc.detail,
                            code=f"HTTP_{exc.status_code}",
                            trace_id=request_id_ctx.get()))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 잘못된 요청 바디/파라미터는 400 + 빈 본문
    logger.warning("Validation error: path=%s errors=%s", request.url.path, exc.errors())
    return empty_response(status.HTTP_400_BAD_REQUEST)

async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content=error_envelope(
                            "Internal server error",
                            code="INTERNAL_ERROR",
                            trace_id=request_id_ctx.get()))

async def domain_exception_handler(request: Request, exc: domainex.DomainError):
    """
    도메인/유즈케이스 예외를 HTTP로 매핑.

    - ResourceNotFound → 404
    - 그 밖의 모든 도메인 예외(백엔드 연결/역직렬화 실패 포함) → 400
    """
    if isinstance(exc, domainex.ResourceNotFound):
        http_status = status.HTTP_404_NOT_FOUND
    else:
        http_status = status.HTTP_400_BAD_REQUEST

    logger.warning(
        "Domain error: %s (%s) path=%s", exc, type(exc).__name__, request.url.path
    )
    return empty_response(http_status)
