"""Data Transfer Objects - service contracts."""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime
from typing import Optional, List

from classbook.models.domain import to_naive_utc


class LessonDTO(BaseModel):
    """Read-only snapshot of a lesson returned by every service call."""
    id: int
    title: str
    description: str
    start: datetime
    end: datetime
    teacher_id: Optional[int] = None
    user_ids: List[int] = []

    model_config = ConfigDict(frozen=True)


class LessonRegistrationDTO(BaseModel):
    """Caller payload used to create a lesson or overwrite its editable fields."""
    id: Optional[int] = None
    title: str
    description: str
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        """Store times as naive UTC so they compare against the UTC clock."""
        return to_naive_utc(value)


class TeacherDTO(BaseModel):
    """Teacher reference passed when assigning a lesson's teacher."""
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LessonPageDTO(BaseModel):
    """One page of a title search."""
    items: List[LessonDTO]
    page: int = Field(ge=0)
    size: int = Field(ge=1)
    total: int = Field(ge=0)

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every match."""
        return -(-self.total // self.size)
