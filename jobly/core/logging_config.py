"""
Structured logging for the API.

Every record handled by the console handler is stamped with the HTTP
method and path of the request being served, taken from context
variables that the request middleware in main.py binds. Records logged
outside a request (startup, migrations, scripts) carry neither field.
"""

import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from pythonjsonlogger import jsonlogger

request_method: ContextVar[Optional[str]] = ContextVar("request_method", default=None)
request_path: ContextVar[Optional[str]] = ContextVar("request_path", default=None)


def bind_request_context(method: str, path: str) -> Tuple[Token, Token]:
    """Bind the current request; pass the result to reset_request_context when done."""
    return request_method.set(method), request_path.set(path)


def reset_request_context(tokens: Tuple[Token, Token]) -> None:
    method_token, path_token = tokens
    request_method.reset(method_token)
    request_path.reset(path_token)


class RequestContextFilter(logging.Filter):
    """Copy the bound request onto each record at emit time."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_method = request_method.get()
        record.request_path = request_path.get()
        return True


class RequestJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for API logs.

    Output keys: timestamp, level, logger, message, plus method/path while
    a request is bound and source location for warnings and above.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        method = getattr(record, 'request_method', None) or request_method.get()
        if method:
            log_record['method'] = method
            log_record['path'] = getattr(record, 'request_path', None) or request_path.get()

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.pathname}:{record.lineno}"


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure the root logger with a single stdout handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON lines when True, plain text with the request prefix otherwise
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.addFilter(RequestContextFilter())

    if json_logs:
        formatter = RequestJsonFormatter('%(message)s')
    else:
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s [%(request_method)s %(request_path)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # SQL echo and bcrypt backend chatter
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
