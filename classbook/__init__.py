"""Classbook lesson management.

Service layer for scheduled class sessions:
- Create, edit and delete lessons (edits and deletes only before a lesson starts)
- Enroll users and assign teachers
- Paginated, case-insensitive title search

Usage:
    from classbook import build_lesson_service

    service = build_lesson_service()
    page = service.find_all_lessons(0, "ASC", "python")
"""

from .services.lesson_service import LessonService, build_lesson_service

__all__ = ['LessonService', 'build_lesson_service']
