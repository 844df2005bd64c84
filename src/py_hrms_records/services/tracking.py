from contextlib import contextmanager

from ..logging import PerformanceLogger
from ..metrics import record_business_operation


@contextmanager
def tracked_operation(operation: str, **context):
    """Time a coordinator operation and count its outcome."""
    with PerformanceLogger(operation, **context):
        try:
            yield
        except Exception as exc:
            record_business_operation(operation, type(exc).__name__)
            raise
    record_business_operation(operation, "success")
