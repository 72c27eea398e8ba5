"""State entry model."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, Session, mapped_column

from chrononotes.db import Base


class StateEntry(Base):
    """
    One persisted value, addressed by a ``(scope, field)`` pair.  A scope is
    either a project ID or the application-wide scope.
    """

    __tablename__ = "state_entries"

    #: The scope the value belongs to.
    scope: Mapped[str] = mapped_column(String, primary_key=True)
    #: The field name within the scope.
    field: Mapped[str] = mapped_column(String, primary_key=True)
    #: The stored value.
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    #: The date and time the value was last written.
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )

    @classmethod
    def get(cls, session: Session, scope: str, field: str) -> "StateEntry | None":
        """
        Get an entry by scope and field.

        Args:
            session: SQLAlchemy session
            scope: Scope name
            field: Field name

        Returns:
            The entry or None if not found

        """
        return session.get(cls, (scope, field))

    @classmethod
    def put(cls, session: Session, scope: str, field: str, value: str) -> "StateEntry":
        """
        Create or overwrite an entry.  The caller commits.

        Args:
            session: SQLAlchemy session
            scope: Scope name
            field: Field name
            value: Value to store

        Returns:
            The stored entry

        """
        entry = cls.get(session, scope, field)
        if entry is None:
            entry = cls(scope=scope, field=field, value=value)
            session.add(entry)
        else:
            entry.value = value
        return entry

    @classmethod
    def remove(cls, session: Session, scope: str, field: str) -> None:
        """
        Delete an entry if it exists.  The caller commits.

        Args:
            session: SQLAlchemy session
            scope: Scope name
            field: Field name

        """
        entry = cls.get(session, scope, field)
        if entry is not None:
            session.delete(entry)
