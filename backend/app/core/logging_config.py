"""
Logging for the mock service. Everything goes through the "mockapi" logger;
request and project ids travel in context variables so every line can carry them.
"""

import logging
import sys
import json
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional
from contextvars import ContextVar

from app.core.config import settings


request_id_var: ContextVar[str] = ContextVar('request_id', default='')
project_id_var: ContextVar[str] = ContextVar('project_id', default='')

# LogRecord attributes that are not user supplied "extra" fields
_RESERVED_RECORD_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'message', 'taskName', 'request_id', 'project_id',
})


def get_request_id() -> str:
    return request_id_var.get() or ''


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_project_id() -> str:
    return project_id_var.get() or ''


def set_project_id(project_id: str) -> None:
    project_id_var.set(project_id)


def generate_request_id() -> str:
    """Short id echoed back in X-Request-ID"""
    return str(uuid.uuid4())[:8]


class JSONFormatter(logging.Formatter):
    """One JSON object per record; extra fields are copied through"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        project_id = get_project_id()
        if project_id:
            log_data["project_id"] = project_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info) if record.exc_info[0] else None
            }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    """Fills %(request_id)s and %(project_id)s, using - when unset"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        record.project_id = get_project_id() or '-'
        return super().format(record)


class MockApiLogger(logging.Logger):
    """Logger with one method per structured event the service emits"""

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        self.info(
            f"HTTP {method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": duration_ms,
                **kwargs
            }
        )

    def log_mock_dispatch(self, method: str, path: str, endpoint_id: Optional[str],
                          status_code: int, **kwargs) -> None:
        """Log the outcome of a mock dispatch"""
        level = logging.INFO if status_code < 400 else logging.WARNING
        self.log(
            level,
            f"Mock {method} {path} -> "
            f"{'endpoint ' + endpoint_id if endpoint_id else 'no endpoint'} [{status_code}]",
            extra={
                "event_type": "mock_dispatch",
                "http_method": method,
                "mock_path": path,
                "endpoint_id": endpoint_id,
                "http_status": status_code,
                **kwargs
            }
        )

    def log_auth_event(self, event: str, success: bool, reason: str = None,
                       **kwargs) -> None:
        """Log API key checks"""
        level = logging.INFO if success else logging.WARNING
        self.log(
            level,
            f"Auth {event}: {'success' if success else 'failed'}" +
            (f" - {reason}" if reason else ""),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "failure_reason": reason,
                **kwargs
            }
        )

    def log_error_with_context(self, error: Exception, context: str = None,
                               **kwargs) -> None:
        self.error(
            f"Error in {context}: {type(error).__name__}: {str(error)}",
            exc_info=True,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_message": str(error),
                "error_context": context,
                **kwargs
            }
        )


_DEV_CONSOLE_FORMAT = "%(levelname)-8s | [%(request_id)s] %(message)s"
_DEV_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | [%(request_id)s] [%(project_id)s] | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024


def _build_handlers() -> List[logging.Handler]:
    """Console handler plus an optional rotating file; JSON lines in production"""
    if settings.is_production:
        console_formatter = file_formatter = JSONFormatter()
        console_level = logging.INFO
    else:
        console_formatter = ContextualFormatter(_DEV_CONSOLE_FORMAT)
        file_formatter = ContextualFormatter(_DEV_FILE_FORMAT)
        console_level = logging.DEBUG if settings.DEBUG else logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(console_formatter)
    handlers: List[logging.Handler] = [console]

    if settings.LOG_FILE:
        log_file = RotatingFileHandler(
            Path(settings.LOG_FILE),
            maxBytes=_LOG_FILE_MAX_BYTES,
            backupCount=10 if settings.is_production else 5,
        )
        log_file.setLevel(logging.DEBUG)
        log_file.setFormatter(file_formatter)
        handlers.append(log_file)

    return handlers


def setup_logging() -> MockApiLogger:
    logging.setLoggerClass(MockApiLogger)

    mock_logger = logging.getLogger("mockapi")
    mock_logger.__class__ = MockApiLogger
    mock_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    mock_logger.propagate = False

    mock_logger.handlers.clear()
    for handler in _build_handlers():
        mock_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "sqlalchemy.engine", "faker"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    mock_logger.debug(
        "Logging initialized",
        extra={"environment": settings.ENVIRONMENT, "json_logging": settings.is_production},
    )
    return mock_logger


logger: MockApiLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'get_request_id',
    'set_request_id',
    'get_project_id',
    'set_project_id',
    'generate_request_id',
    'MockApiLogger',
    'JSONFormatter',
    'ContextualFormatter',
]
