"""
Prometheus metrics for the staff records service.

Everything lives on ``service_registry`` so an embedding process decides
whether and where to expose it (``get_metrics`` renders the text format).
"""
import time
from functools import wraps
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from .config import settings

service_registry = CollectorRegistry()

# Store calls, one sample per *_tx invocation
store_operations_total = Counter(
    "records_store_operations_total",
    "Store operations by table and outcome",
    ["operation", "table", "status", "service"],
    registry=service_registry,
)

store_operation_duration_seconds = Histogram(
    "records_store_operation_duration_seconds",
    "Store operation duration in seconds",
    ["operation", "table", "service"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=service_registry,
)

# Coordinator calls; outcome is "success" or the raised error class name
coordinator_operations_total = Counter(
    "records_coordinator_operations_total",
    "Coordinator operations by outcome",
    ["operation", "outcome", "service"],
    registry=service_registry,
)


def track_db_operation(operation: str, table: str, service_name: Optional[str] = None):
    """Count and time a store method; failures are counted with status="error"."""
    service = service_name or settings.service_name

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            status = "error"
            try:
                result = func(*args, **kwargs)
                status = "success"
                return result
            finally:
                store_operations_total.labels(
                    operation=operation, table=table, status=status, service=service
                ).inc()
                store_operation_duration_seconds.labels(
                    operation=operation, table=table, service=service
                ).observe(time.perf_counter() - started)

        return wrapper
    return decorator


def record_business_operation(operation: str, outcome: str, service_name: Optional[str] = None):
    coordinator_operations_total.labels(
        operation=operation,
        outcome=outcome,
        service=service_name or settings.service_name,
    ).inc()


def get_metrics() -> str:
    return generate_latest(service_registry).decode("utf-8")
