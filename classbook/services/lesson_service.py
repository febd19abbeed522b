"""Lesson service - business logic for lesson management."""

import logging
from datetime import datetime
from functools import partial
from typing import Callable, Optional, List

from classbook.db import create_db_engine, create_session_factory, init_db
from classbook.exceptions import (
    ConflictingIdentifierError,
    InvalidIdentifierError,
    WrongTimeError,
)
from classbook.models.domain import Lesson, SortDirection, utc_now
from classbook.models.dto import (
    LessonDTO,
    LessonPageDTO,
    LessonRegistrationDTO,
    TeacherDTO,
)
from classbook.repositories.unit_of_work import UnitOfWork, SqlUnitOfWork
from classbook.services.config_service import ConfigService, get_config_service

logger = logging.getLogger(__name__)


class LessonService:
    """
    Service for lesson management business logic.

    Responsibilities:
    - Enforce time rules (edit and delete only before a lesson starts)
    - Turn missing entities into InvalidIdentifierError
    - Run every call inside its own unit of work
    - Convert between domain entities and DTOs

    Does NOT:
    - Handle HTTP requests or map errors to status codes
    - Touch sessions or SQL (that's the repository layer)
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        config_service: Optional[ConfigService] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            uow_factory: Returns a fresh unit of work; called once per operation
            config_service: Defaults to the global configuration
            clock: Current time as naive UTC
        """
        self.uow_factory = uow_factory
        self.config_service = config_service or get_config_service()
        self.clock = clock

    def find_all_lessons(
        self,
        page: int,
        sort: Optional[str],
        text: Optional[str]
    ) -> LessonPageDTO:
        """
        Return one page of lessons whose title contains ``text``.

        Business rules:
        - Page numbers start at 0
        - "DESC" sorts by title descending, anything else ascending
        - Matching ignores case; empty text matches every lesson
        """
        if page < 0:
            raise ValueError(f"Page number must not be negative, got {page}")

        size = self.config_service.get_page_size()
        direction = SortDirection.from_text(sort)

        with self.uow_factory() as uow:
            lessons, total = uow.lessons.search_by_title(
                text or "",
                page,
                size,
                descending=direction is SortDirection.DESC,
            )

        return LessonPageDTO(
            items=[self._to_dto(lesson) for lesson in lessons],
            page=page,
            size=size,
            total=total,
        )

    def add_user(self, lesson_id: int, user_id: Optional[int]) -> LessonDTO:
        """Enroll a user in a lesson, linking both sides."""
        with self.uow_factory() as uow:
            lesson = self._get_lesson_or_raise(uow, lesson_id)

            if user_id is None:
                logger.warning("Enrollment in lesson %s rejected: no user id", lesson_id)
                raise InvalidIdentifierError("User", None)

            user = uow.users.get(user_id)
            if user is None:
                logger.warning("Enrollment in lesson %s rejected: user %s not found", lesson_id, user_id)
                raise InvalidIdentifierError("User", user_id)

            lesson.add_user(user.id)
            user.add_lesson(lesson.id)
            lesson = uow.lessons.save(lesson)
            uow.users.save(user)
            uow.commit()

        logger.info("Enrolled user %s in lesson %s", user_id, lesson_id)
        return self._to_dto(lesson)

    def add_teacher(self, lesson_id: int, teacher: TeacherDTO) -> LessonDTO:
        """Assign (or replace) the lesson's teacher."""
        with self.uow_factory() as uow:
            lesson = self._get_lesson_or_raise(uow, lesson_id)

            found = uow.teachers.get(teacher.id)
            if found is None:
                logger.warning("Teacher %s not found for lesson %s", teacher.id, lesson_id)
                raise InvalidIdentifierError("Teacher", teacher.id)

            lesson.teacher_id = found.id
            lesson = uow.lessons.save(lesson)
            uow.commit()

        logger.info("Assigned teacher %s to lesson %s", found.id, lesson_id)
        return self._to_dto(lesson)

    def find_lesson(self, lesson_id: int) -> LessonDTO:
        """Get lesson by ID, raising if it does not exist."""
        with self.uow_factory() as uow:
            lesson = self._get_lesson_or_raise(uow, lesson_id)
        return self._to_dto(lesson)

    def find_by_id(self, lesson_id: int) -> Optional[LessonDTO]:
        """Get lesson by ID, or None."""
        with self.uow_factory() as uow:
            lesson = uow.lessons.get(lesson_id)

        if not lesson:
            return None

        return self._to_dto(lesson)

    def save(self, request: LessonRegistrationDTO) -> LessonDTO:
        """Create a new lesson. Any id in the request is ignored."""
        lesson = Lesson(
            id=None,
            title=request.title,
            description=request.description,
            start=request.start,
            end=request.end,
        )

        with self.uow_factory() as uow:
            lesson = uow.lessons.save(lesson)
            uow.commit()

        logger.info("Created lesson %s '%s'", lesson.id, lesson.title)
        return self._to_dto(lesson)

    def edit_lesson(self, lesson_id: int, request: LessonRegistrationDTO) -> LessonDTO:
        """
        Overwrite a lesson's title, description and times.

        Business rules:
        - The path id must equal the payload id
        - Only lessons that have not started yet are changed; a started
          lesson is returned as it is, without an error
        """
        if lesson_id != request.id:
            logger.warning("Edit rejected: path id %s, payload id %s", lesson_id, request.id)
            raise ConflictingIdentifierError(lesson_id, request.id)

        with self.uow_factory() as uow:
            lesson = self._get_lesson_or_raise(uow, request.id)

            if lesson.has_started(self.clock()):
                logger.debug("Lesson %s already started at %s; edit skipped", lesson.id, lesson.start)
            else:
                lesson.title = request.title
                lesson.description = request.description
                lesson.start = request.start
                lesson.end = request.end
                lesson = uow.lessons.save(lesson)
                uow.commit()
                logger.info("Edited lesson %s", lesson.id)

        return self._to_dto(lesson)

    def delete(self, lesson_id: int) -> LessonDTO:
        """Delete a lesson that has not started yet. Returns its last state."""
        with self.uow_factory() as uow:
            lesson = self._get_lesson_or_raise(uow, lesson_id)

            if lesson.has_started(self.clock()):
                logger.warning("Lesson %s started at %s; refusing to delete", lesson.id, lesson.start)
                raise WrongTimeError(
                    f"Lesson {lesson.id} started at {lesson.start.isoformat()} and can no longer be deleted"
                )

            deleted = self._to_dto(lesson)
            uow.lessons.delete(lesson.id)
            uow.commit()

        logger.info("Deleted lesson %s", lesson_id)
        return deleted

    def delete_all(self) -> List[LessonDTO]:
        """Delete every lesson that starts in the future. Returns what was deleted."""
        deleted = []

        with self.uow_factory() as uow:
            now = self.clock()
            for lesson in uow.lessons.list():
                if lesson.has_started(now):
                    continue
                deleted.append(self._to_dto(lesson))
                uow.lessons.delete(lesson.id)
            uow.commit()

        logger.info("Deleted %d future lessons", len(deleted))
        return deleted

    def _get_lesson_or_raise(self, uow: UnitOfWork, lesson_id: Optional[int]) -> Lesson:
        """Look up a lesson in the active unit of work."""
        lesson = uow.lessons.get(lesson_id) if lesson_id is not None else None

        if lesson is None:
            logger.warning("Lesson %s not found", lesson_id)
            raise InvalidIdentifierError("Lesson", lesson_id)

        return lesson

    @staticmethod
    def _to_dto(lesson: Lesson) -> LessonDTO:
        """Convert domain entity to DTO."""
        return LessonDTO(
            id=lesson.id,
            title=lesson.title,
            description=lesson.description,
            start=lesson.start,
            end=lesson.end,
            teacher_id=lesson.teacher_id,
            user_ids=sorted(lesson.user_ids),
        )


def build_lesson_service(database_url: Optional[str] = None) -> LessonService:
    """Wire a LessonService to a SQL database, creating tables if needed."""
    engine = create_db_engine(database_url)
    init_db(engine)
    return LessonService(partial(SqlUnitOfWork, create_session_factory(engine)))
