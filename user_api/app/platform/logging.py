# app/platform/logging.py
import os
import json
import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone

# ===== Request ID =====
request_id_ctx = ContextVar("request_id", default="-")

class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True

# 레코드에 extra로 실려 올 수 있는 필드(access 로그, 백엔드 호출 로그)
EXTRA_FIELDS = (
    "http_method", "path", "status_code", "duration_ms", "client_ip", "user_agent",
    "backend_op", "backend_index", "doc_id",
)

# ===== JSON Formatter =====
class JsonFormatter(logging.Formatter):
    """
    JSON 라인 출력: Logstash에서 바로 파싱 가능.
    access/백엔드 로그에 extra로 넘긴 필드가 있으면 함께 포함.
    """
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        # 예외 스택
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for k in EXTRA_FIELDS:
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False, default=str)

# ===== Text Formatter (로컬 확인용) =====
TEXT_DEFAULT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"
TEXT_ACCESS = "%(asctime)s %(levelname)s [access] [%(request_id)s] %(message)s"

def _file_handler(filename: str, formatter: str, level: str) -> dict:
    return {
        "class": "logging.handlers.TimedRotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": filename,
        "when": "midnight",
        "backupCount": 14,
        "encoding": "utf-8",
        "filters": ["request_id"],
    }

def setup_logging(
    *,
    log_to_file: bool = False,
    log_dir: str = "/var/log/app",
    as_json: bool = True,
    level: str = "INFO",
) -> None:
    """
    - app 로그: root, uvicorn.error, opensearch(클라이언트 라이브러리)
    - access 로그: uvicorn.access
    - 중복 방지: 하위 로거는 propagate=False
    """
    os.environ.setdefault("TZ", "UTC")

    app_fmt = "json" if as_json else "text_default"
    access_fmt = "json" if as_json else "text_access"

    handlers = {
        "console_app": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": app_fmt,
            "filters": ["request_id"],
        },
        "console_access": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": access_fmt,
            "filters": ["request_id"],
        },
    }
    app_handlers = ["console_app"]
    access_handlers = ["console_access"]

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file_app"] = _file_handler(f"{log_dir}/app.log", app_fmt, level)
        handlers["file_access"] = _file_handler(f"{log_dir}/access.log", access_fmt, level)
        app_handlers.append("file_app")
        access_handlers.append("file_access")

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIDFilter}
        },
        "formatters": {
            "json": {"()": JsonFormatter},
            "text_default": {"format": TEXT_DEFAULT},
            "text_access": {"format": TEXT_ACCESS},
        },
        "handlers": handlers,
        "loggers": {
            "": {"handlers": app_handlers, "level": level, "propagate": False},
            "uvicorn.error": {"handlers": app_handlers, "level": level, "propagate": False},
            # opensearch-py 는 요청마다 INFO 로그를 남기므로 WARNING 이상만
            "opensearch": {"handlers": app_handlers, "level": "WARNING", "propagate": False},
            "uvicorn.access": {"handlers": access_handlers, "level": level, "propagate": False},
        },
    })
