"""Base repository interfaces."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Tuple

from classbook.models.domain import Lesson

T = TypeVar('T')


class Repository(ABC, Generic[T]):
    """
    Base repository interface.

    Abstracts data access so services never touch sessions or SQL.
    Lookups return None instead of raising; callers decide what a
    missing entity means.
    """

    @abstractmethod
    def get(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities."""
        pass

    @abstractmethod
    def save(self, entity: T) -> T:
        """Save entity (create or update). Returns it with its ID assigned."""
        pass

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Delete entity by ID. Returns True if deleted, False if not found."""
        pass


class LessonRepository(Repository[Lesson]):
    """Lesson repository with title search."""

    @abstractmethod
    def search_by_title(
        self,
        text: str,
        page: int,
        size: int,
        descending: bool = False
    ) -> Tuple[List[Lesson], int]:
        """
        Case-insensitive substring search on title, ordered by title.

        Returns the requested page of lessons and the total match count.
        """
        pass
