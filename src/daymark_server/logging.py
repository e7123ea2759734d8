"""Structured logging for Daymark server.

structlog renders every record, including ones from the standard library
(uvicorn, SQLAlchemy), as JSON lines or coloured console output. Request
scoped values such as the request id and the caller's user id are bound with
``structlog.contextvars`` and merged into every event logged while the
request is being served.

Usage:
    from daymark_server.logging import setup_logging

    setup_logging("INFO")
    logger = structlog.get_logger(__name__)
    logger.info("priority_created", priority_id="abc123", day_id="def456")
"""

from __future__ import annotations

import logging
import sys
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from structlog.types import Processor

REQUEST_ID_HEADER = "X-Request-ID"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Args:
        level: Root log level name, e.g. "DEBUG" or "WARNING"
        json_output: JSON lines when True, human-readable console otherwise
    """
    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())

    # uvicorn installs its own handlers; make it propagate to ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request id (and the caller, when known) and log each request.

    The id is taken from an incoming ``X-Request-ID`` header when present,
    otherwise generated, and echoed back on the response.
    """

    def __init__(self, app, user_id_header: str = "X-User-Id") -> None:
        super().__init__(app)
        self.user_id_header = user_id_header
        self.logger = structlog.get_logger("daymark_server.requests")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        user_id = request.headers.get(self.user_id_header)
        if user_id:
            structlog.contextvars.bind_contextvars(user_id=user_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
            self.logger.info(
                "request_finished",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            self.logger.exception(
                "request_failed",
                method=request.method,
                path=request.url.path,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            raise
        finally:
            structlog.contextvars.clear_contextvars()


# --- Audit Event Functions ---


def log_task_promoted(
    logger: structlog.stdlib.BoundLogger,
    user_id: str,
    task_id: str,
    priority_id: str,
    day_id: str,
) -> None:
    """Log a matrix task promoted to a day priority.

    Args:
        logger: Logger instance
        user_id: Owner of the task
        task_id: Deleted source task
        priority_id: Created priority
        day_id: Day the priority landed on
    """
    logger.info(
        "task_promoted",
        user_id=user_id,
        task_id=task_id,
        priority_id=priority_id,
        day_id=day_id,
    )


def log_carry_forward(
    logger: structlog.stdlib.BoundLogger,
    user_id: str,
    from_date: str,
    to_date: str,
    carried: int,
    skipped: int,
) -> None:
    """Log the outcome of an end-of-day carry-forward."""
    logger.info(
        "priorities_carried_forward",
        user_id=user_id,
        from_date=from_date,
        to_date=to_date,
        carried=carried,
        skipped=skipped,
    )


def log_capacity_rejected(
    logger: structlog.stdlib.BoundLogger,
    user_id: str,
    resource: str,
    limit: int,
) -> None:
    """Log an insert refused because a per-day or per-user limit was reached."""
    logger.warning(
        "capacity_rejected",
        user_id=user_id,
        resource=resource,
        limit=limit,
    )


def log_request_rejected(
    logger: structlog.stdlib.BoundLogger,
    path: str,
    status: int,
    error_type: str,
    detail: str,
) -> None:
    """Log a request refused by the service layer (404, 403 or 400).

    Client mistakes are expected traffic, so they are warnings, not errors.
    """
    logger.warning(
        "request_rejected",
        path=path,
        status=status,
        error_type=error_type,
        detail=detail,
    )
