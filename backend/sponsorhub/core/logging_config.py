"""
SponsorHub - Centralized Logging Configuration

Everything logs through the single ``sponsorhub`` logger. Production writes
one JSON object per line; every other environment writes readable text.
Both carry the request id and acting user id of the current request.
"""

import logging
import sys
import json
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from sponsorhub.core.config import settings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024

# Per-request tracing context, filled in by RequestLoggingMiddleware and get_current_user
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

# Attributes every LogRecord has; anything else came in through ``extra=``
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord('', logging.INFO, '', 0, '', None, None))
) | {'message', 'asctime', 'request_id', 'user_id'}


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_user_id() -> str:
    return user_id_var.get()


def set_user_id(user_id: str) -> None:
    user_id_var.set(user_id)


def generate_request_id() -> str:
    """Short id, long enough to grep for within a day of logs"""
    return uuid.uuid4().hex[:12]


class JSONFormatter(logging.Formatter):
    """Structured line format for production log shipping"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
            "request_id": get_request_id() or None,
            "user_id": get_user_id() or None,
        }

        context = {
            key: value for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_FIELDS and not key.startswith('_')
        }
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0]:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
            }

        return json.dumps(entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Text formatter that exposes %(request_id)s and %(user_id)s"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        record.user_id = get_user_id() or 'anon'
        return super().format(record)


class SponsorHubLogger(logging.Logger):
    """Logger with one helper per kind of domain event we care to search for"""

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self.log(
            level,
            f"{method} {path} -> {status_code} in {duration_ms:.1f}ms",
            extra={"kind": "http", "status": status_code, "duration_ms": round(duration_ms, 2), **kwargs}
        )

    def log_auth_event(self, event: str, success: bool, user_email: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        """register / login / refresh / logout outcomes; failures log at WARNING"""
        outcome = "ok" if success else f"failed ({reason})" if reason else "failed"
        self.log(
            logging.INFO if success else logging.WARNING,
            f"auth.{event} {outcome} for {user_email or 'unknown'}",
            extra={"kind": "auth", "auth_event": event, "success": success, "email": user_email, **kwargs}
        )

    def log_status_change(self, entity: str, entity_id: str, old_status: str,
                          new_status: str, **kwargs) -> None:
        """Lifecycle transition of an event, proposal, request or collaboration"""
        self.info(
            f"{entity} {entity_id}: {old_status} -> {new_status}",
            extra={"kind": "transition", "entity": entity, "entity_id": entity_id,
                   "from_status": old_status, "to_status": new_status, **kwargs}
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None,
                               **kwargs) -> None:
        self.error(
            f"{type(error).__name__} during {context or 'request'}: {error}",
            exc_info=error,
            extra={"kind": "error", "error_type": type(error).__name__, **kwargs}
        )


def _file_handler(formatter: logging.Formatter, backups: int) -> RotatingFileHandler:
    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=backups)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> SponsorHubLogger:
    """(Re)configure the ``sponsorhub`` logger from settings"""
    logging.setLoggerClass(SponsorHubLogger)
    logger = logging.getLogger("sponsorhub")
    logger.__class__ = SponsorHubLogger  # created before setLoggerClass in some import orders
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False
    logger.handlers.clear()

    json_logs = settings.ENVIRONMENT == "production"
    if json_logs:
        console_formatter = file_formatter = JSONFormatter()
    else:
        console_formatter = ContextualFormatter("%(levelname)-7s [%(request_id)s] %(message)s")
        file_formatter = ContextualFormatter(
            "%(asctime)s %(levelname)-7s [%(request_id)s] [%(user_id)s] "
            "%(module)s.%(funcName)s:%(lineno)d %(message)s"
        )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(console_formatter)
    logger.addHandler(console)

    if settings.LOG_FILE:
        logger.addHandler(_file_handler(file_formatter, backups=10 if json_logs else 3))

    for noisy in ("httpx", "uvicorn.access", "sqlalchemy.engine", "aiosqlite"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.debug(f"Logging ready (environment={settings.ENVIRONMENT}, json={json_logs})")
    return logger


logger: SponsorHubLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'get_request_id',
    'set_request_id',
    'get_user_id',
    'set_user_id',
    'generate_request_id',
    'SponsorHubLogger',
]
