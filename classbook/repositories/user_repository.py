"""User and teacher repositories - SQLAlchemy implementation."""

from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from classbook.models.domain import User, Teacher
from classbook.repositories.base import Repository
from classbook.repositories.tables import LessonRow, UserRow, TeacherRow


class SqlUserRepository(Repository[User]):
    """
    Repository for user data.

    Users are owned by account management; lessons only read them and
    link enrollments, so save() updates the username and adds missing
    lesson links but never drops existing ones.
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        row = self.session.get(UserRow, user_id)
        if row is None:
            return None
        return self._to_domain(row)

    def list(self) -> List[User]:
        """List all users."""
        rows = self.session.scalars(select(UserRow).order_by(UserRow.id)).all()
        return [self._to_domain(row) for row in rows]

    def save(self, user: User) -> User:
        """Insert or update a user."""
        row = self.session.get(UserRow, user.id) if user.id is not None else None
        if row is None:
            row = UserRow(id=user.id)
            self.session.add(row)

        row.username = user.username

        linked = {lesson.id for lesson in row.lessons}
        missing = set(user.lesson_ids) - linked
        if missing:
            lessons = self.session.scalars(select(LessonRow).where(LessonRow.id.in_(missing))).all()
            row.lessons.extend(lessons)

        self.session.flush()
        user.id = row.id
        return user

    def delete(self, user_id: int) -> bool:
        """Delete user."""
        row = self.session.get(UserRow, user_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True

    @staticmethod
    def _to_domain(row: UserRow) -> User:
        return User(
            id=row.id,
            username=row.username,
            lesson_ids={lesson.id for lesson in row.lessons},
        )


class SqlTeacherRepository(Repository[Teacher]):
    """Repository for teacher data."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, teacher_id: int) -> Optional[Teacher]:
        """Get teacher by ID."""
        row = self.session.get(TeacherRow, teacher_id)
        if row is None:
            return None
        return self._to_domain(row)

    def list(self) -> List[Teacher]:
        """List all teachers."""
        rows = self.session.scalars(select(TeacherRow).order_by(TeacherRow.id)).all()
        return [self._to_domain(row) for row in rows]

    def save(self, teacher: Teacher) -> Teacher:
        """Insert or update a teacher."""
        row = self.session.get(TeacherRow, teacher.id) if teacher.id is not None else None
        if row is None:
            row = TeacherRow(id=teacher.id)
            self.session.add(row)

        row.first_name = teacher.first_name
        row.last_name = teacher.last_name

        self.session.flush()
        teacher.id = row.id
        return teacher

    def delete(self, teacher_id: int) -> bool:
        """Delete teacher."""
        row = self.session.get(TeacherRow, teacher_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True

    @staticmethod
    def _to_domain(row: TeacherRow) -> Teacher:
        return Teacher(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
        )
