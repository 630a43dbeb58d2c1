"""Models module for Pydantic schemas."""

from .subject import (
    Subject,
    SubjectBase,
    SubjectCreate,
    SubjectUpdate,
    SubjectResponse,
    SubjectListResponse,
)
from .flashcard import (
    Difficulty,
    Flashcard,
    FlashcardBase,
    FlashcardCreate,
    FlashcardUpdate,
    FlashcardResponse,
    FlashcardListResponse,
)
from .dashboard import (
    DashboardFlashcardSummary,
    DashboardResponse,
    DifficultyActivityResponse,
    PendingSubjectResponse,
    SearchResponse,
    SearchResult,
    SearchType,
)
from .review import (
    CalendarDayFlashcardsResponse,
    CalendarDayResponse,
    CalendarFlashcard,
    CalendarResponse,
    DayCountResponse,
    ReviewRequest,
    ReviewResponse,
    ReviewStatsResponse,
    StudyReviewRequest,
    StudySessionResponse,
    SubjectStatsResponse,
)

__all__ = [
    "Subject",
    "SubjectBase",
    "SubjectCreate",
    "SubjectUpdate",
    "SubjectResponse",
    "SubjectListResponse",
    "Difficulty",
    "Flashcard",
    "FlashcardBase",
    "FlashcardCreate",
    "FlashcardUpdate",
    "FlashcardResponse",
    "FlashcardListResponse",
    "CalendarDayFlashcardsResponse",
    "CalendarDayResponse",
    "CalendarFlashcard",
    "CalendarResponse",
    "DayCountResponse",
    "ReviewRequest",
    "ReviewResponse",
    "ReviewStatsResponse",
    "StudyReviewRequest",
    "StudySessionResponse",
    "SubjectStatsResponse",
    "DashboardFlashcardSummary",
    "DashboardResponse",
    "DifficultyActivityResponse",
    "PendingSubjectResponse",
    "SearchResponse",
    "SearchResult",
    "SearchType",
]
