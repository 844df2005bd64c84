"""
Structured logging for the staff records service.

``configure_logging`` is called once by the embedding process (the seed
script, a worker, a test session). Modules obtain loggers with
``structlog.get_logger(__name__)`` and never configure handlers themselves.
"""
import logging
import sys
import time
from typing import Optional

import structlog

from .config import settings


def configure_logging(
    service_name: Optional[str] = None,
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    include_stdlib: bool = True,
):
    """Configure structlog rendering; unset arguments fall back to settings."""
    service_name = service_name or settings.service_name
    level = getattr(logging, (log_level or settings.log_level).upper())
    if json_logs is None:
        json_logs = settings.json_logs

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context(service_name, settings.environment),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if include_stdlib:
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
        # SQL echo is controlled by DB_ECHO
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def add_service_context(service_name: str, environment: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("environment", environment)
        return event_dict
    return processor


class PerformanceLogger:
    """Time a block and log its completion or failure with the given context."""

    def __init__(self, operation: str, **context):
        self.operation = operation
        self.context = context
        self.logger = structlog.get_logger("py_hrms_records.performance")
        self.started = 0.0

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.debug("operation_started", operation=self.operation, **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(
                "operation_completed",
                operation=self.operation,
                duration_ms=self.elapsed_ms,
                **self.context
            )
        else:
            self.logger.warning(
                "operation_failed",
                operation=self.operation,
                duration_ms=self.elapsed_ms,
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                **self.context
            )
        return False


def log_audit_event(action: str, resource: str, resource_id: Optional[int] = None, **data):
    """Record a committed change to a staff member or record file."""
    structlog.get_logger("py_hrms_records.audit").info(
        "audit_event",
        action=action,
        resource=resource,
        resource_id=resource_id,
        **data
    )

