import logging
import os
import sys
from contextvars import ContextVar

from pythonjsonlogger import jsonlogger

from hotel.core.config import settings

# Request id of the HTTP request being handled; "-" outside requests (scheduler ticks, startup)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# Loggers of the status sweep. LOG_SWEEP_LEVEL=WARNING hides per-room changes
SWEEP_LOGGERS = (
    "hotel.jobs.room_status_job",
    "hotel.services.reconciliation_service",
)


class RequestIdFilter(logging.Filter):
    """Adds `request_id` to every record so formatters can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get()
        return True


def _level(name: str, default: str) -> int:
    return getattr(logging, os.getenv(name, default).upper(), logging.INFO)


def setup_logging() -> None:
    level = _level("LOG_LEVEL", "INFO")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplication
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())

    if settings.log_format.lower() == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(request_id)s %(message)s",
            json_ensure_ascii=False,
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    sweep_level = _level("LOG_SWEEP_LEVEL", logging.getLevelName(level))
    for name in SWEEP_LOGGERS:
        logging.getLogger(name).setLevel(sweep_level)

    # Scheduler logs every tick at INFO
    logging.getLogger("apscheduler").setLevel(max(level, logging.WARNING))
    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    # Request timing is logged by RequestLoggerMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
