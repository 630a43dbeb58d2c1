"""Review API router.

`record_review` is the single write path for reviews: both this router and
the study-session router go through it, so a flashcard is scheduled the same
way no matter where it was reviewed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from study_api.auth import CurrentUser, get_current_user
from study_api.models import (
    Flashcard,
    FlashcardResponse,
    ReviewRequest,
    ReviewResponse,
    ReviewStatsResponse,
)
from study_api.repositories import (
    FlashcardConflictError,
    FlashcardNotFoundError,
    FlashcardRepository,
    get_flashcard_repository,
)
from study_api.srs.due import summarize_reviews
from study_api.srs.scheduler import QUALITIES, Quality, ReviewOutcome, compute_next_review
from study_api.srs.time import utc_datetime_to_iso_z, utc_now

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/flashcards", tags=["reviews"])

# Attempts at the read-review-write cycle before giving up on a contended card
MAX_REVIEW_ATTEMPTS = 3


def parse_review_request(body: ReviewRequest | None) -> tuple[str, Quality]:
    """Validate a review body, answering 400 for missing or invalid values."""
    if body is None or not body.flashcardId or not body.quality:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="flashcardId and quality are required",
        )
    if not isinstance(body.flashcardId, str):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="flashcardId must be a string",
        )
    if body.quality not in QUALITIES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"quality must be one of: {', '.join(QUALITIES)}",
        )
    return body.flashcardId, body.quality


def review_message(interval_days: int) -> str:
    if interval_days == 0:
        return "Review this card again soon"
    unit = "day" if interval_days == 1 else "days"
    return f"Next review in {interval_days} {unit}"


def apply_review(flashcard: Flashcard, quality: Quality, now: datetime) -> ReviewOutcome:
    """Apply a review to a flashcard's review fields.

    Updates easeFactor, nextReviewAt, lastReviewedAt, updatedAt and increments
    timesReviewed. The flashcard is mutated in place.
    """
    outcome = compute_next_review(
        quality,
        flashcard.timesReviewed,
        flashcard.easeFactor,
        now=now,
    )

    now_iso = utc_datetime_to_iso_z(now)
    flashcard.timesReviewed += 1
    flashcard.easeFactor = outcome.ease_factor
    flashcard.nextReviewAt = utc_datetime_to_iso_z(outcome.next_review_at)
    flashcard.lastReviewedAt = now_iso
    flashcard.updatedAt = now_iso
    return outcome


def _not_found(flashcard_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Flashcard with ID {flashcard_id} not found",
    )


def record_review(
    flashcard_repo: FlashcardRepository,
    flashcard_id: str,
    user_id: str,
    quality: Quality,
    subject_id: str | None = None,
) -> ReviewResponse:
    """Review a stored flashcard and persist the result.

    The card is re-read and the review re-applied when the stored document
    changed between read and write.

    Args:
        flashcard_repo: Repository used to read and persist the card
        flashcard_id: ID of the reviewed card
        user_id: Owner of the card
        quality: Validated recall quality
        subject_id: When given, the card must belong to this subject

    Raises:
        HTTPException: 404 if the card does not exist (or not in the subject),
            409 if every write attempt conflicted.
    """
    for attempt in range(1, MAX_REVIEW_ATTEMPTS + 1):
        try:
            flashcard = flashcard_repo.get_by_id(flashcard_id, user_id)
        except FlashcardNotFoundError:
            raise _not_found(flashcard_id)
        if subject_id is not None and flashcard.subjectId != subject_id:
            raise _not_found(flashcard_id)

        outcome = apply_review(flashcard, quality, utc_now())
        try:
            updated = flashcard_repo.replace(flashcard)
        except FlashcardConflictError:
            logger.warning(
                "Review write conflict: card=%s attempt=%d/%d",
                flashcard_id,
                attempt,
                MAX_REVIEW_ATTEMPTS,
            )
            continue
        except FlashcardNotFoundError:
            raise _not_found(flashcard_id)

        logger.info(
            "Review applied: user=%s card=%s quality=%s interval=%d ease=%.2f next_review_at=%s",
            user_id,
            flashcard_id,
            quality,
            outcome.interval_days,
            outcome.ease_factor,
            updated.nextReviewAt,
        )
        return ReviewResponse(
            flashcard=FlashcardResponse(**updated.model_dump()),
            nextReviewIn=outcome.interval_days,
            message=review_message(outcome.interval_days),
        )

    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Flashcard with ID {flashcard_id} is being reviewed elsewhere; try again",
    )


@router.post("/update-review", response_model=ReviewResponse)
async def update_review(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    body: ReviewRequest | None = None,
) -> ReviewResponse:
    """Record a review of one of the user's flashcards and schedule the next one."""
    flashcard_id, quality = parse_review_request(body)
    return record_review(get_flashcard_repository(), flashcard_id, user.user_id, quality)


@router.get("/update-review", response_model=ReviewStatsResponse)
async def review_stats(
    user: Annotated[CurrentUser, Depends(get_current_user)]
) -> ReviewStatsResponse:
    """Summarize review progress over all of the user's flashcards."""
    flashcards = get_flashcard_repository().list_by_user(user.user_id)
    summary = summarize_reviews(flashcards, utc_now())
    return ReviewStatsResponse(
        total=summary.total,
        reviewed=summary.reviewed,
        dueToday=summary.due_today,
    )
