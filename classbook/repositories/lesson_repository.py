"""Lesson repository - SQLAlchemy implementation."""

from typing import Optional, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from classbook.models.domain import Lesson
from classbook.repositories.base import LessonRepository
from classbook.repositories.tables import LessonRow, UserRow


class SqlLessonRepository(LessonRepository):
    """
    Repository for lesson data access.

    Works inside a session owned by a unit of work; it flushes but
    never commits.
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, lesson_id: int) -> Optional[Lesson]:
        """Get lesson by ID."""
        row = self.session.get(LessonRow, lesson_id)

        if row is None:
            return None

        return self._to_domain(row)

    def list(self) -> List[Lesson]:
        """List all lessons in ID order."""
        rows = self.session.scalars(select(LessonRow).order_by(LessonRow.id)).all()
        return [self._to_domain(row) for row in rows]

    def search_by_title(
        self,
        text: str,
        page: int,
        size: int,
        descending: bool = False
    ) -> Tuple[List[Lesson], int]:
        """Case-insensitive title search, one page at a time."""
        condition = LessonRow.title.icontains(text or "", autoescape=True)
        title_order = LessonRow.title.desc() if descending else LessonRow.title.asc()

        total = self.session.scalar(
            select(func.count()).select_from(LessonRow).where(condition)
        )
        rows = self.session.scalars(
            select(LessonRow)
            .where(condition)
            .order_by(title_order, LessonRow.id)
            .offset(page * size)
            .limit(size)
        ).all()

        return [self._to_domain(row) for row in rows], total or 0

    def save(self, lesson: Lesson) -> Lesson:
        """Insert or update a lesson, including teacher and enrollments."""
        row = None
        if lesson.id is not None:
            row = self.session.get(LessonRow, lesson.id)
        if row is None:
            row = LessonRow()
            self.session.add(row)

        row.title = lesson.title
        row.description = lesson.description
        row.start = lesson.start
        row.end = lesson.end
        row.teacher_id = lesson.teacher_id
        self._sync_users(row, lesson.user_ids)

        self.session.flush()
        lesson.id = row.id
        return lesson

    def delete(self, lesson_id: int) -> bool:
        """Delete lesson and its enrollments."""
        row = self.session.get(LessonRow, lesson_id)

        if row is None:
            return False

        self.session.delete(row)
        self.session.flush()
        return True

    def _sync_users(self, row: LessonRow, user_ids: set) -> None:
        """Make the row's enrolled users match ``user_ids``."""
        current = {user.id for user in row.users}

        for user in list(row.users):
            if user.id not in user_ids:
                row.users.remove(user)

        missing = set(user_ids) - current
        if missing:
            users = self.session.scalars(select(UserRow).where(UserRow.id.in_(missing))).all()
            row.users.extend(users)

    @staticmethod
    def _to_domain(row: LessonRow) -> Lesson:
        """Convert ORM row to domain entity."""
        return Lesson(
            id=row.id,
            title=row.title,
            description=row.description,
            start=row.start,
            end=row.end,
            teacher_id=row.teacher_id,
            user_ids={user.id for user in row.users},
        )
