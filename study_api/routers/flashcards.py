"""Flashcards API router."""

from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from study_api.auth import get_current_user, CurrentUser
from study_api.models import (
    Flashcard,
    FlashcardCreate,
    FlashcardUpdate,
    FlashcardResponse,
    FlashcardListResponse,
)
from study_api.repositories import (
    get_flashcard_repository,
    get_subject_repository,
    FlashcardConflictError,
    FlashcardNotFoundError,
    SubjectNotFoundError,
)

router = APIRouter(prefix="/subjects/{subject_id}/flashcards", tags=["flashcards"])


def verify_subject_ownership(subject_id: str, user_id: str) -> None:
    """Verify that the subject exists and belongs to the user."""
    if not get_subject_repository().exists(subject_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subject with ID {subject_id} not found",
        )


def get_flashcard_in_subject(subject_id: str, flashcard_id: str, user_id: str) -> Flashcard:
    """Load a flashcard, answering 404 unless it belongs to the subject."""
    try:
        flashcard = get_flashcard_repository().get_by_id(flashcard_id, user_id)
    except FlashcardNotFoundError:
        flashcard = None
    if flashcard is None or flashcard.subjectId != subject_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flashcard with ID {flashcard_id} not found in subject {subject_id}",
        )
    return flashcard


@router.get("", response_model=FlashcardListResponse)
async def list_flashcards(
    subject_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> FlashcardListResponse:
    verify_subject_ownership(subject_id, user.user_id)
    flashcards = get_flashcard_repository().list_by_subject(subject_id, user.user_id)
    return FlashcardListResponse(
        flashcards=[FlashcardResponse(**flashcard.model_dump()) for flashcard in flashcards],
        count=len(flashcards),
    )


@router.get("/{flashcard_id}", response_model=FlashcardResponse)
async def get_flashcard(
    subject_id: str, flashcard_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> FlashcardResponse:
    verify_subject_ownership(subject_id, user.user_id)
    flashcard = get_flashcard_in_subject(subject_id, flashcard_id, user.user_id)
    return FlashcardResponse(**flashcard.model_dump())


@router.post("", response_model=FlashcardResponse, status_code=status.HTTP_201_CREATED)
async def create_flashcard(
    subject_id: str,
    flashcard_create: FlashcardCreate,
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FlashcardResponse:
    """Create a new, never-reviewed flashcard in a subject."""
    try:
        flashcard = get_flashcard_repository().create(subject_id, user.user_id, flashcard_create)
    except SubjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subject with ID {subject_id} not found",
        )
    return FlashcardResponse(**flashcard.model_dump())


@router.put("/{flashcard_id}", response_model=FlashcardResponse)
async def update_flashcard(
    subject_id: str,
    flashcard_id: str,
    flashcard_update: FlashcardUpdate,
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FlashcardResponse:
    """Update a flashcard's content. Review state is left untouched."""
    verify_subject_ownership(subject_id, user.user_id)
    get_flashcard_in_subject(subject_id, flashcard_id, user.user_id)

    try:
        flashcard = get_flashcard_repository().update(flashcard_id, user.user_id, flashcard_update)
    except FlashcardConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Flashcard with ID {flashcard_id} was modified concurrently",
        )
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flashcard with ID {flashcard_id} not found",
        )
    return FlashcardResponse(**flashcard.model_dump())


@router.delete("/{flashcard_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flashcard(
    subject_id: str, flashcard_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> None:
    verify_subject_ownership(subject_id, user.user_id)
    get_flashcard_in_subject(subject_id, flashcard_id, user.user_id)

    try:
        get_flashcard_repository().delete(flashcard_id, user.user_id)
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flashcard with ID {flashcard_id} not found",
        )
