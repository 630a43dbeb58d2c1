"""Flashcard models for API requests and responses."""

from typing import Literal
from pydantic import BaseModel, Field, field_validator
from uuid import uuid4

from study_api.srs.scheduler import DEFAULT_EASE_FACTOR
from study_api.srs.time import utc_now_iso


# Authoring label set when the card is written; the scheduler never changes it
Difficulty = Literal["easy", "medium", "hard"]

DEFAULT_CATEGORY = "concept"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


class FlashcardBase(BaseModel):
    """Base flashcard model with common fields."""

    front: str = Field(..., min_length=1, max_length=2000, description="Question side of the card")
    back: str = Field(..., min_length=1, max_length=2000, description="Answer side of the card")
    category: str = Field(DEFAULT_CATEGORY, min_length=1, max_length=100)
    difficulty: Difficulty = Field("medium", description="Authoring difficulty label")


class FlashcardCreate(FlashcardBase):
    """Model for creating a new flashcard."""

    documentId: str | None = Field(None, description="Source document reference")


class FlashcardUpdate(BaseModel):
    """Model for updating an existing flashcard's content.

    Review fields are not editable here; they only change through reviews.
    """

    front: str | None = Field(None, min_length=1, max_length=2000)
    back: str | None = Field(None, min_length=1, max_length=2000)
    category: str | None = Field(None, min_length=1, max_length=100)
    difficulty: Difficulty | None = None


class Flashcard(FlashcardBase):
    """Full flashcard model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    subjectId: str = Field(..., description="Parent subject ID")
    userId: str = Field(..., description="Owner user ID (partition key)")
    documentId: str | None = Field(None, description="Source document reference")
    createdAt: str = Field(default_factory=utc_now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=utc_now_iso, description="Last update timestamp")

    # Review state (persisted)
    timesReviewed: int = Field(0, ge=0, description="Completed reviews")
    easeFactor: float | None = Field(DEFAULT_EASE_FACTOR, description="Ease factor, within [1.3, 2.5]; null means a new card")
    lastReviewedAt: str | None = Field(None, description="Last review timestamp (UTC ISO Z)")
    nextReviewAt: str | None = Field(None, description="Next review timestamp (UTC ISO Z); null when never reviewed")

    # Cosmos concurrency token; read from storage, never written back
    etag: str | None = Field(None, alias="_etag", exclude=True)

    @field_validator("timesReviewed", mode="before")
    @classmethod
    def default_times_reviewed(cls, v):
        # Documents written before review tracking store null
        return 0 if v is None else v

    class Config:
        """Pydantic config."""

        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174001",
                "subjectId": "123e4567-e89b-12d3-a456-426614174000",
                "userId": "user-001",
                "front": "What is an SN2 reaction?",
                "back": "A one-step bimolecular nucleophilic substitution",
                "category": "concept",
                "difficulty": "medium",
                "timesReviewed": 0,
                "easeFactor": 2.5,
                "lastReviewedAt": None,
                "nextReviewAt": None,
                "createdAt": "2025-01-01T00:00:00Z",
                "updatedAt": "2025-01-01T00:00:00Z",
            }
        }


class FlashcardResponse(FlashcardBase):
    """Flashcard response model returned by API."""

    id: str
    subjectId: str
    userId: str
    documentId: str | None
    createdAt: str
    updatedAt: str

    timesReviewed: int
    easeFactor: float | None
    lastReviewedAt: str | None
    nextReviewAt: str | None


class FlashcardListResponse(BaseModel):
    """Response containing a list of flashcards."""

    flashcards: list[FlashcardResponse]
    count: int
