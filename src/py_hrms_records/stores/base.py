"""
Store contract shared by the staff and record file stores.

Every operation comes in two forms:

- a participating ``*_tx`` form that runs on a session owned by the caller
  and never commits or closes it, and
- a standalone form that opens its own transaction scope around the
  participating form.

Coordinators that need cross-entity atomicity only use the ``*_tx`` forms.
Stores that do not override a participating form fail loudly instead of
falling back to autocommit behaviour.
"""
from contextlib import contextmanager
from typing import Generic, Iterator, List, Optional, TypeVar

from sqlalchemy.orm import Session

from ..db import SessionFactory, ensure_no_active_scope, transaction_scope
from ..exceptions import UnsupportedOperationError

T = TypeVar("T")

UNSUPPORTED_TRANSACTION_MESSAGE = (
    "Transactional operation '{operation}' is not supported by {store}. "
    "Override {operation}() to enable it."
)


class BaseStore(Generic[T]):
    """Dual-mode persistence contract for one entity type."""

    table: str = ""

    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self.session_factory = session_factory

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            UNSUPPORTED_TRANSACTION_MESSAGE.format(
                operation=operation, store=type(self).__name__
            )
        )

    @contextmanager
    def _standalone(self, operation: str) -> Iterator[Session]:
        ensure_no_active_scope(f"{type(self).__name__}.{operation}")
        with transaction_scope(self.session_factory) as session:
            yield session

    # Participating forms

    def create_tx(self, entity: T, session: Session) -> T:
        raise self._unsupported("create_tx")

    def update_tx(self, entity: T, session: Session) -> bool:
        raise self._unsupported("update_tx")

    def soft_delete_tx(self, entity_id: int, session: Session) -> bool:
        raise self._unsupported("soft_delete_tx")

    def find_by_id_tx(self, entity_id: int, session: Session) -> Optional[T]:
        raise self._unsupported("find_by_id_tx")

    def find_all_tx(self, session: Session) -> List[T]:
        raise self._unsupported("find_all_tx")

    # Standalone forms

    def create(self, entity: T) -> T:
        with self._standalone("create") as session:
            return self.create_tx(entity, session)

    def update(self, entity: T) -> bool:
        with self._standalone("update") as session:
            return self.update_tx(entity, session)

    def soft_delete(self, entity_id: int) -> bool:
        with self._standalone("soft_delete") as session:
            return self.soft_delete_tx(entity_id, session)

    def find_by_id(self, entity_id: int) -> Optional[T]:
        with self._standalone("find_by_id") as session:
            return self.find_by_id_tx(entity_id, session)

    def find_all(self) -> List[T]:
        with self._standalone("find_all") as session:
            return self.find_all_tx(session)
