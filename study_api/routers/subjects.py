"""Subjects API router."""

from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from study_api.models import SubjectCreate, SubjectUpdate, SubjectResponse, SubjectListResponse
from study_api.repositories import get_subject_repository, SubjectNotFoundError, get_flashcard_repository
from study_api.auth import get_current_user, CurrentUser

router = APIRouter(prefix="/subjects", tags=["subjects"])


def _subject_not_found(subject_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Subject with ID {subject_id} not found",
    )


@router.get("", response_model=SubjectListResponse)
async def list_subjects(user: Annotated[CurrentUser, Depends(get_current_user)]) -> SubjectListResponse:
    """List all subjects for the current user."""
    subjects = get_subject_repository().list_by_user(user.user_id)
    return SubjectListResponse(
        subjects=[SubjectResponse(**subject.model_dump()) for subject in subjects],
        count=len(subjects),
    )


@router.get("/{subject_id}", response_model=SubjectResponse)
async def get_subject(
    subject_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> SubjectResponse:
    try:
        subject = get_subject_repository().get_by_id(subject_id, user.user_id)
    except SubjectNotFoundError:
        raise _subject_not_found(subject_id)
    return SubjectResponse(**subject.model_dump())


@router.post("", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject(
    subject_create: SubjectCreate, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> SubjectResponse:
    subject = get_subject_repository().create(subject_create, user.user_id)
    return SubjectResponse(**subject.model_dump())


@router.put("/{subject_id}", response_model=SubjectResponse)
async def update_subject(
    subject_id: str,
    subject_update: SubjectUpdate,
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> SubjectResponse:
    try:
        subject = get_subject_repository().update(subject_id, user.user_id, subject_update)
    except SubjectNotFoundError:
        raise _subject_not_found(subject_id)
    return SubjectResponse(**subject.model_dump())


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subject(
    subject_id: str, user: Annotated[CurrentUser, Depends(get_current_user)]
) -> None:
    """Delete a subject and all its flashcards."""
    subject_repo = get_subject_repository()
    if not subject_repo.exists(subject_id, user.user_id):
        raise _subject_not_found(subject_id)

    get_flashcard_repository().delete_by_subject(subject_id, user.user_id)
    try:
        subject_repo.delete(subject_id, user.user_id)
    except SubjectNotFoundError:
        raise _subject_not_found(subject_id)
