"""Search API router."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from study_api.auth import CurrentUser, get_current_user
from study_api.models import Difficulty, SearchResponse, SearchResult, SearchType
from study_api.repositories import get_flashcard_repository, get_subject_repository

logger = logging.getLogger(__name__)


router = APIRouter(tags=["search"])

# Matches fetched per kind, and returned overall
PER_TYPE_LIMIT = 10
RESULT_LIMIT = 20


@router.get("/search", response_model=SearchResponse)
async def search(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    q: str = Query(..., min_length=2, max_length=200, description="Text to look for"),
    kind: SearchType = Query("all", alias="type", description="Restrict results to subjects or flashcards"),
    difficulty: Difficulty | None = Query(None, description="Only flashcards of this difficulty"),
    category: str | None = Query(None, description="Only flashcards of this category"),
    subjectId: str | None = Query(None, description="Only flashcards of this subject"),
) -> SearchResponse:
    """Case-insensitive substring search over subject names and flashcard text."""
    results: list[SearchResult] = []

    if kind in ("all", "subject"):
        for subject in get_subject_repository().search(user.user_id, q, limit=PER_TYPE_LIMIT):
            results.append(
                SearchResult(
                    id=subject.id,
                    type="subject",
                    title=subject.name,
                    content=subject.description,
                    subjectId=subject.id,
                    subjectName=subject.name,
                    subjectIcon=subject.icon,
                )
            )

    if kind in ("all", "flashcard"):
        flashcards = get_flashcard_repository().search(
            user.user_id,
            q,
            difficulty=difficulty,
            category=category,
            subject_id=subjectId,
            limit=PER_TYPE_LIMIT,
        )
        subjects = {s.id: s for s in get_subject_repository().list_by_user(user.user_id)}
        for card in flashcards:
            subject = subjects.get(card.subjectId)
            results.append(
                SearchResult(
                    id=card.id,
                    type="flashcard",
                    title=card.front,
                    content=card.back,
                    subjectId=card.subjectId,
                    subjectName=subject.name if subject else None,
                    subjectIcon=subject.icon if subject else None,
                    difficulty=card.difficulty,
                    category=card.category,
                )
            )

    results = results[:RESULT_LIMIT]
    logger.debug("Search: user=%s type=%s results=%d", user.user_id, kind, len(results))
    return SearchResponse(query=q, results=results, count=len(results))
