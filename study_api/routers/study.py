"""Study session API router."""

from __future__ import annotations

import random
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from study_api.auth import CurrentUser, get_current_user
from study_api.models import (
    Flashcard,
    FlashcardResponse,
    ReviewResponse,
    StudyReviewRequest,
    StudySessionResponse,
)
from study_api.repositories import get_flashcard_repository, get_subject_repository
from study_api.routers.reviews import parse_review_request, record_review
from study_api.srs.due import is_due
from study_api.srs.time import utc_now


router = APIRouter(prefix="/subjects/{subject_id}/study", tags=["study"])


def _verify_subject_ownership(subject_id: str, user_id: str) -> None:
    if not get_subject_repository().exists(subject_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subject with ID {subject_id} not found",
        )


def order_for_study(flashcards: list[Flashcard]) -> list[Flashcard]:
    """Never-scheduled cards first, then by nextReviewAt ascending."""
    return sorted(flashcards, key=lambda c: (c.nextReviewAt is not None, c.nextReviewAt or ""))


@router.get("", response_model=StudySessionResponse)
async def start_study_session(
    subject_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    shuffle: bool = Query(True, description="Shuffle the queue"),
    dueOnly: bool = Query(False, description="Only include cards due today"),
) -> StudySessionResponse:
    """Return the study queue for a subject."""
    _verify_subject_ownership(subject_id, user.user_id)

    now = utc_now()
    flashcards = order_for_study(get_flashcard_repository().list_by_subject(subject_id, user.user_id))
    due_count = sum(1 for card in flashcards if is_due(card.nextReviewAt, now))
    if dueOnly:
        flashcards = [card for card in flashcards if is_due(card.nextReviewAt, now)]
    if shuffle:
        random.shuffle(flashcards)

    return StudySessionResponse(
        subjectId=subject_id,
        flashcards=[FlashcardResponse(**card.model_dump()) for card in flashcards],
        count=len(flashcards),
        dueCount=due_count,
    )


@router.post("/review", response_model=ReviewResponse)
async def review_in_session(
    subject_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    body: StudyReviewRequest | None = None,
) -> ReviewResponse:
    """Record a review made during a study session of this subject."""
    flashcard_id, quality = parse_review_request(body)
    _verify_subject_ownership(subject_id, user.user_id)
    return record_review(
        get_flashcard_repository(),
        flashcard_id,
        user.user_id,
        quality,
        subject_id=subject_id,
    )
