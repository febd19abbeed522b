"""Unit of work - one transaction scope per service call."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from classbook.models.domain import User, Teacher
from classbook.repositories.base import LessonRepository, Repository
from classbook.repositories.lesson_repository import SqlLessonRepository
from classbook.repositories.user_repository import SqlUserRepository, SqlTeacherRepository

logger = logging.getLogger(__name__)


class UnitOfWork(ABC):
    """
    Transaction scope exposing the lesson, user and teacher repositories.

    Usage:
        with uow:
            lesson = uow.lessons.get(5)
            ...
            uow.commit()

    Leaving the block without commit() rolls back. An exception inside
    the block always rolls back and is re-raised.
    """

    lessons: LessonRepository
    users: Repository[User]
    teachers: Repository[Teacher]

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            logger.warning("Rolling back after %s: %s", exc_type.__name__, exc)
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Commit everything done in this scope."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Discard anything not yet committed."""
        pass


class SqlUnitOfWork(UnitOfWork):
    """Unit of work backed by a SQLAlchemy session per scope."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session: Optional[Session] = None

    def __enter__(self) -> "SqlUnitOfWork":
        if self.session is not None:
            raise RuntimeError("Unit of work is already active")

        self.session = self.session_factory()
        self.lessons = SqlLessonRepository(self.session)
        self.users = SqlUserRepository(self.session)
        self.teachers = SqlTeacherRepository(self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self.session.close()
            self.session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
