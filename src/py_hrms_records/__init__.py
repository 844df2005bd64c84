"""AgenticHR Staff Records Library."""

from .config import Settings, load_settings, settings
from .db import (
    Base,
    configure_database,
    current_session,
    get_engine,
    get_session_factory,
    init_db,
    transaction_scope,
)
from .entities import EntityState, RecordFile, RecordStatus, StaffMember
from .exceptions import (
    ConflictError,
    MissingRecordFileError,
    NotFoundError,
    PersistenceError,
    RecordsError,
    TransactionUsageError,
    UnsupportedOperationError,
    ValidationError,
)
from .logging import configure_logging
from .services import RecordFileService, StaffService, build_staff_service
from .stores import BaseStore, RecordFileStore, StaffStore

__all__ = [
    # Config
    "Settings",
    "load_settings",
    "settings",

    # Database
    "Base",
    "configure_database",
    "current_session",
    "get_engine",
    "get_session_factory",
    "init_db",
    "transaction_scope",

    # Entities
    "EntityState",
    "RecordFile",
    "RecordStatus",
    "StaffMember",

    # Errors
    "ConflictError",
    "MissingRecordFileError",
    "NotFoundError",
    "PersistenceError",
    "RecordsError",
    "TransactionUsageError",
    "UnsupportedOperationError",
    "ValidationError",

    # Logging
    "configure_logging",

    # Stores and services
    "BaseStore",
    "RecordFileStore",
    "StaffStore",
    "RecordFileService",
    "StaffService",
    "build_staff_service",
]

__version__ = "0.1.0"
