"""Base repository class with common data access operations."""

from contextlib import AbstractContextManager
from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from monobase.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common data access operations.

    Usage:
        class EmailTemplateRepository(BaseRepository[EmailTemplate]):
            model = EmailTemplate

        repo = EmailTemplateRepository(session)
        template = repo.get_by_id(template_id)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: Any) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def get_all(self, limit: int = 100, offset: int = 0) -> list[T]:
        """Get all records with pagination."""
        return self.session.query(self.model).offset(offset).limit(limit).all()

    def count(self, **filters) -> int:
        """Get count of records, optionally filtered by column equality."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        for key, value in filters.items():
            if key not in self.model.__table__.columns:
                raise ValueError(f"Unknown filter key: {key}")
            query = query.filter(getattr(self.model, key) == value)
        return query.scalar() or 0

    def savepoint(self) -> AbstractContextManager[Any]:
        """
        Scope work in a nested transaction.

        A failure inside rolls back only the savepoint, leaving the session
        usable for subsequent work.
        """
        return self.session.begin_nested()
