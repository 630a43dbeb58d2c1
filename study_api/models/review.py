"""Models for review, study-session and statistics endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from study_api.models.flashcard import FlashcardResponse
from study_api.models.subject import SubjectResponse


class ReviewRequest(BaseModel):
    """Request for POST /flashcards/update-review.

    Fields are untyped at the schema level so the handler can answer 400
    with a specific message instead of a generic 422.
    """

    flashcardId: Any = Field(None, description="ID of the reviewed flashcard")
    quality: Any = Field(None, description="Recall quality: hard, medium or easy")


class StudyReviewRequest(ReviewRequest):
    """Request for POST /subjects/{subject_id}/study/review."""

    pass


class ReviewResponse(BaseModel):
    """Result of applying a review to a flashcard."""

    success: bool = True
    flashcard: FlashcardResponse
    nextReviewIn: int = Field(..., ge=0, description="Days until the next review (0 = again today)")
    message: str


class ReviewStatsResponse(BaseModel):
    """Response for GET /flashcards/update-review."""

    total: int = Field(..., ge=0)
    reviewed: int = Field(..., ge=0, description="Flashcards reviewed at least once")
    dueToday: int = Field(..., ge=0, description="Flashcards never scheduled or due today or earlier")


class StudySessionResponse(BaseModel):
    """Response for GET /subjects/{subject_id}/study."""

    subjectId: str
    flashcards: list[FlashcardResponse]
    count: int
    dueCount: int


class DayCountResponse(BaseModel):
    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    count: int = Field(..., ge=0)


class SubjectStatsResponse(BaseModel):
    """Response for GET /subjects/{subject_id}/stats."""

    subject: SubjectResponse
    total: int
    reviewed: int
    dueToday: int
    byDifficulty: dict[str, int]
    byCategory: dict[str, int]
    studyTimeMinutes: int
    weeklyActivity: list[DayCountResponse]
    upcomingReviews: list[DayCountResponse]


class CalendarDayResponse(BaseModel):
    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    count: int = Field(..., ge=0)
    reviewed: int = Field(..., ge=0, description="Flashcards last reviewed on this day")
    pending: int = Field(..., ge=0, description="Flashcards scheduled for this day")


class CalendarResponse(BaseModel):
    """Response for GET /calendar."""

    year: int
    month: int
    days: list[CalendarDayResponse]


class CalendarFlashcard(BaseModel):
    """Flashcard scheduled on a given day, with its subject's display info."""

    id: str
    front: str
    difficulty: str
    category: str
    nextReviewAt: str | None
    subjectId: str
    subjectName: str | None = None
    subjectColor: str | None = None
    subjectIcon: str | None = None


class CalendarDayFlashcardsResponse(BaseModel):
    """Response for GET /calendar/{day}."""

    date: str
    flashcards: list[CalendarFlashcard]
    count: int
