"""Domain entities - internal representation (framework-agnostic)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Set


def utc_now() -> datetime:
    """Current time as naive UTC, the form lesson times are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an offset-aware time to naive UTC; naive times are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SortDirection(str, Enum):
    """Sort direction for lesson listings."""
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def from_text(cls, text: Optional[str]) -> "SortDirection":
        """Only an exact "DESC" sorts descending; anything else is ascending."""
        if text == cls.DESC.value:
            return cls.DESC
        return cls.ASC


@dataclass
class Lesson:
    """Lesson domain entity."""
    id: Optional[int]
    title: str
    description: str
    start: datetime
    end: datetime
    teacher_id: Optional[int] = None
    user_ids: Set[int] = field(default_factory=set)

    def has_started(self, now: datetime) -> bool:
        """True once the start time is at or before ``now``."""
        return self.start <= now

    def add_user(self, user_id: int) -> None:
        """Enroll a user; enrolling twice is a no-op."""
        self.user_ids.add(user_id)


@dataclass
class User:
    """User domain entity. Only read and linked by lessons."""
    id: int
    username: str
    lesson_ids: Set[int] = field(default_factory=set)

    def add_lesson(self, lesson_id: int) -> None:
        """Record enrollment in a lesson."""
        self.lesson_ids.add(lesson_id)


@dataclass
class Teacher:
    """Teacher domain entity."""
    id: int
    first_name: str
    last_name: str

