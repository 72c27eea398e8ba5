"""Key-value state backends."""

from abc import ABC, abstractmethod

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chrononotes.exc import StorageError
from chrononotes.models.state import StateEntry


class StateBackend(ABC):
    """
    A key-value store addressed by ``(scope, field)`` pairs.

    Implementations raise :class:`~chrononotes.exc.StorageError` when a value
    cannot be read or written.
    """

    @abstractmethod
    def get(self, scope: str, field: str) -> str | None:
        """
        Read a value.

        Args:
            scope: Scope name
            field: Field name

        Returns:
            The stored value, or None if nothing is stored

        """

    @abstractmethod
    def set(self, scope: str, field: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Args:
            scope: Scope name
            field: Field name
            value: Value to store

        """

    @abstractmethod
    def remove(self, scope: str, field: str) -> None:
        """
        Delete a value if it exists.

        Args:
            scope: Scope name
            field: Field name

        """


class MemoryBackend(StateBackend):
    """Backend that keeps values in a nested ``scope -> field -> value`` dict."""

    def __init__(self) -> None:
        #: The stored values.
        self.data: dict[str, dict[str, str]] = {}

    def get(self, scope: str, field: str) -> str | None:
        return self.data.get(scope, {}).get(field)

    def set(self, scope: str, field: str, value: str) -> None:
        self.data.setdefault(scope, {})[field] = value

    def remove(self, scope: str, field: str) -> None:
        fields = self.data.get(scope)
        if fields is None:
            return
        fields.pop(field, None)
        if not fields:
            del self.data[scope]


class DatabaseBackend(StateBackend):
    """
    Backend that keeps values in the ``state_entries`` table.  Every write is
    committed immediately.

    Args:
        session: SQLAlchemy session

    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, scope: str, field: str) -> str | None:
        try:
            entry = StateEntry.get(self.session, scope, field)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(scope, field, e) from e
        return entry.value if entry is not None else None

    def set(self, scope: str, field: str, value: str) -> None:
        try:
            StateEntry.put(self.session, scope, field, value)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(scope, field, e) from e

    def remove(self, scope: str, field: str) -> None:
        try:
            StateEntry.remove(self.session, scope, field)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(scope, field, e) from e
