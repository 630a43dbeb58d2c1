"""Dashboard API router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from study_api.auth import CurrentUser, get_current_user
from study_api.models import (
    DashboardFlashcardSummary,
    DashboardResponse,
    DifficultyActivityResponse,
    PendingSubjectResponse,
    SubjectResponse,
)
from study_api.repositories import get_flashcard_repository, get_subject_repository
from study_api.srs.due import dashboard_stats
from study_api.srs.time import utc_datetime_to_iso_z, utc_now


router = APIRouter(tags=["dashboard"])

RECENT_SUBJECTS_LIMIT = 3


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user: Annotated[CurrentUser, Depends(get_current_user)]
) -> DashboardResponse:
    """Study progress over all of the user's subjects and flashcards."""
    subjects = get_subject_repository().list_by_user(user.user_id)
    flashcards = get_flashcard_repository().list_by_user(user.user_id)
    stats = dashboard_stats(flashcards, utc_now())

    subjects_by_id = {subject.id: subject for subject in subjects}
    pending = []
    for subject_id, count in stats.pending_by_subject:
        # Cards whose subject is gone are left out
        subject = subjects_by_id.get(subject_id)
        if subject is None:
            continue
        pending.append(
            PendingSubjectResponse(
                subjectId=subject.id,
                subjectName=subject.name,
                subjectColor=subject.color,
                subjectIcon=subject.icon,
                pendingCount=count,
            )
        )

    recent = sorted(subjects, key=lambda s: s.updatedAt, reverse=True)[:RECENT_SUBJECTS_LIMIT]
    last_reviewed_at = stats.streak.last_reviewed_at

    return DashboardResponse(
        subjects=len(subjects),
        flashcards=DashboardFlashcardSummary(
            total=stats.summary.total,
            reviewed=stats.summary.reviewed,
            dueToday=stats.summary.due_today,
            byDifficulty=stats.by_difficulty,
            byCategory=stats.by_category,
        ),
        studyStreak=stats.streak.days,
        lastStudyDate=utc_datetime_to_iso_z(last_reviewed_at) if last_reviewed_at else None,
        totalStudyTime=stats.study_time_minutes,
        weeklyActivity=[
            DifficultyActivityResponse(
                date=day.date.isoformat(),
                easy=day.easy,
                medium=day.medium,
                hard=day.hard,
                total=day.total,
            )
            for day in stats.weekly_activity
        ],
        pendingBySubject=pending,
        recentSubjects=[SubjectResponse(**subject.model_dump()) for subject in recent],
    )
