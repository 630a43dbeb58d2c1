"""Statistics and calendar API router."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from study_api.auth import CurrentUser, get_current_user
from study_api.models import (
    CalendarDayFlashcardsResponse,
    CalendarDayResponse,
    CalendarFlashcard,
    CalendarResponse,
    DayCountResponse,
    SubjectResponse,
    SubjectStatsResponse,
)
from study_api.repositories import (
    SubjectNotFoundError,
    get_flashcard_repository,
    get_subject_repository,
)
from study_api.srs.due import DayCount, calendar_month, cards_due_on, subject_stats
from study_api.srs.time import utc_now


router = APIRouter(tags=["stats"])


def _day_counts(days: list[DayCount]) -> list[DayCountResponse]:
    return [DayCountResponse(date=day.date.isoformat(), count=day.count) for day in days]


@router.get("/subjects/{subject_id}/stats", response_model=SubjectStatsResponse)
async def get_subject_stats(
    subject_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> SubjectStatsResponse:
    """Review statistics for one subject."""
    try:
        subject = get_subject_repository().get_by_id(subject_id, user.user_id)
    except SubjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subject with ID {subject_id} not found",
        )

    flashcards = get_flashcard_repository().list_by_subject(subject_id, user.user_id)
    stats = subject_stats(flashcards, utc_now())

    return SubjectStatsResponse(
        subject=SubjectResponse(**subject.model_dump()),
        total=stats.summary.total,
        reviewed=stats.summary.reviewed,
        dueToday=stats.summary.due_today,
        byDifficulty=stats.by_difficulty,
        byCategory=stats.by_category,
        studyTimeMinutes=stats.study_time_minutes,
        weeklyActivity=_day_counts(stats.weekly_activity),
        upcomingReviews=_day_counts(stats.upcoming_reviews),
    )


@router.get("/calendar", response_model=CalendarResponse)
async def get_calendar(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    year: int | None = Query(None, ge=1970, le=9999),
    month: int | None = Query(None, ge=1, le=12),
) -> CalendarResponse:
    """Per-day review activity for a month (defaults to the current UTC month)."""
    today = utc_now().date()
    year = year or today.year
    month = month or today.month

    flashcards = get_flashcard_repository().list_by_user(user.user_id)
    days = calendar_month(flashcards, year, month)

    return CalendarResponse(
        year=year,
        month=month,
        days=[
            CalendarDayResponse(
                date=day.date.isoformat(),
                count=day.count,
                reviewed=day.reviewed,
                pending=day.pending,
            )
            for day in days
        ],
    )


@router.get("/calendar/{day}", response_model=CalendarDayFlashcardsResponse)
async def get_calendar_day(
    day: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> CalendarDayFlashcardsResponse:
    """Flashcards scheduled for a given day (YYYY-MM-DD)."""
    try:
        target = date.fromisoformat(day)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid date {day!r}; expected YYYY-MM-DD",
        )

    flashcards = cards_due_on(get_flashcard_repository().list_by_user(user.user_id), target)
    flashcards.sort(key=lambda c: c.nextReviewAt)
    subjects = {s.id: s for s in get_subject_repository().list_by_user(user.user_id)}

    items = []
    for card in flashcards:
        subject = subjects.get(card.subjectId)
        items.append(
            CalendarFlashcard(
                id=card.id,
                front=card.front,
                difficulty=card.difficulty,
                category=card.category,
                nextReviewAt=card.nextReviewAt,
                subjectId=card.subjectId,
                subjectName=subject.name if subject else None,
                subjectColor=subject.color if subject else None,
                subjectIcon=subject.icon if subject else None,
            )
        )

    return CalendarDayFlashcardsResponse(date=target.isoformat(), flashcards=items, count=len(items))
