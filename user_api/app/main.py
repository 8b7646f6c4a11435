from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from user_api.app.api.routers import health, users
from user_api.app.adapters.stores.opensearch_store import build_client
from user_api.app.platform.config import settings
from user_api.app.platform.logging import setup_logging
from user_api.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from user_api.app.platform import exceptions as domainex
from user_api.app.middlewares.request_context import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # OpenSearch 클라이언트를 한 번만 생성해서 공유 (요청 간 커넥션 풀 재사용)
    app.state.opensearch = build_client(settings.DB_HOST, settings.DB_PORT, settings.DB_SCHEME)
    logger.info("opensearch client ready: %s", settings.opensearch_address)
    try:
        yield
    finally:
        try:
            app.state.opensearch.close()
        except Exception:
            logger.warning("failed to close opensearch client", exc_info=True)

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)
app.include_router(health.router)
app.include_router(users.router)

# Global Exception Filter
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)
# 응답 압축(Accept-Encoding: gzip, 500 byte 이상)
app.add_middleware(GZipMiddleware, minimum_size=500)


def run() -> None:
    """uvicorn 으로 SERVER_HOST:SERVER_PORT 에서 서버를 띄운다."""
    import uvicorn

    uvicorn.run(
        "user_api.app.main:app",
        host=str(settings.SERVER_HOST),
        port=settings.SERVER_PORT,
    )


if __name__ == "__main__":
    run()
