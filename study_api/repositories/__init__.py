"""Repositories module for data access layer."""

from .subject_repository import (
    SubjectRepository,
    SubjectNotFoundError,
    get_subject_repository,
)
from .flashcard_repository import (
    FlashcardRepository,
    FlashcardNotFoundError,
    FlashcardConflictError,
    get_flashcard_repository,
)

__all__ = [
    "SubjectRepository",
    "SubjectNotFoundError",
    "get_subject_repository",
    "FlashcardRepository",
    "FlashcardNotFoundError",
    "FlashcardConflictError",
    "get_flashcard_repository",
]
