"""Models for the dashboard and search endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from study_api.models.subject import SubjectResponse


class DashboardFlashcardSummary(BaseModel):
    total: int = Field(..., ge=0)
    reviewed: int = Field(..., ge=0, description="Flashcards reviewed at least once")
    dueToday: int = Field(..., ge=0)
    byDifficulty: dict[str, int]
    byCategory: dict[str, int]


class DifficultyActivityResponse(BaseModel):
    """Reviews on one day, split by the cards' authoring difficulty."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    easy: int = Field(0, ge=0)
    medium: int = Field(0, ge=0)
    hard: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class PendingSubjectResponse(BaseModel):
    subjectId: str
    subjectName: str
    subjectColor: str
    subjectIcon: str
    pendingCount: int = Field(..., ge=1)


class DashboardResponse(BaseModel):
    """Response for GET /dashboard."""

    subjects: int = Field(..., ge=0, description="Number of subjects the user owns")
    flashcards: DashboardFlashcardSummary
    studyStreak: int = Field(..., ge=0, description="Consecutive days with reviews")
    lastStudyDate: str | None = Field(None, description="Most recent review timestamp")
    totalStudyTime: int = Field(..., ge=0, description="Estimated study time in minutes")
    weeklyActivity: list[DifficultyActivityResponse]
    pendingBySubject: list[PendingSubjectResponse]
    recentSubjects: list[SubjectResponse]

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "subjects": 2,
                "flashcards": {
                    "total": 40,
                    "reviewed": 25,
                    "dueToday": 6,
                    "byDifficulty": {"easy": 10, "medium": 20, "hard": 10},
                    "byCategory": {"concept": 30, "definition": 10},
                },
                "studyStreak": 3,
                "lastStudyDate": "2025-03-10T09:00:00Z",
                "totalStudyTime": 13,
                "weeklyActivity": [
                    {"date": "2025-03-10", "easy": 2, "medium": 1, "hard": 0, "total": 3}
                ],
                "pendingBySubject": [
                    {
                        "subjectId": "123e4567-e89b-12d3-a456-426614174000",
                        "subjectName": "Organic Chemistry",
                        "subjectColor": "#8b5cf6",
                        "subjectIcon": "🧪",
                        "pendingCount": 6,
                    }
                ],
                "recentSubjects": [],
            }
        }


SearchType = Literal["all", "subject", "flashcard"]


class SearchResult(BaseModel):
    """A subject or flashcard matching a search query."""

    id: str
    type: Literal["subject", "flashcard"]
    title: str = Field(..., description="Subject name or flashcard front")
    content: str | None = Field(None, description="Subject description or flashcard back")
    subjectId: str
    subjectName: str | None = None
    subjectIcon: str | None = None
    difficulty: str | None = None
    category: str | None = None


class SearchResponse(BaseModel):
    """Response for GET /search."""

    query: str
    results: list[SearchResult]
    count: int
