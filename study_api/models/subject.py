"""Subject models for API requests and responses."""

from pydantic import BaseModel, Field
from uuid import uuid4

from study_api.srs.time import utc_now_iso


DEFAULT_COLOR = "#8b5cf6"
DEFAULT_ICON = "📚"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


class SubjectBase(BaseModel):
    """Base subject model with common fields."""

    name: str = Field(..., min_length=1, max_length=200, description="Name of the subject")
    description: str | None = Field(None, max_length=1000, description="Optional description")
    color: str = Field(DEFAULT_COLOR, pattern=r"^#[0-9a-fA-F]{6}$", description="Display color (hex)")
    icon: str = Field(DEFAULT_ICON, min_length=1, max_length=16, description="Display icon")


class SubjectCreate(SubjectBase):
    """Model for creating a new subject."""

    pass


class SubjectUpdate(BaseModel):
    """Model for updating an existing subject."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    color: str | None = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    icon: str | None = Field(None, min_length=1, max_length=16)


class Subject(SubjectBase):
    """Full subject model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    userId: str = Field(..., description="Owner user ID (partition key)")
    createdAt: str = Field(default_factory=utc_now_iso, description="Creation timestamp")
    updatedAt: str = Field(default_factory=utc_now_iso, description="Last update timestamp")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "userId": "user-001",
                "name": "Organic Chemistry",
                "description": "Reaction mechanisms and nomenclature",
                "color": "#8b5cf6",
                "icon": "🧪",
                "createdAt": "2025-01-01T00:00:00Z",
                "updatedAt": "2025-01-01T00:00:00Z",
            }
        }


class SubjectResponse(SubjectBase):
    """Subject response model returned by API."""

    id: str
    userId: str
    createdAt: str
    updatedAt: str


class SubjectListResponse(BaseModel):
    """Response containing a list of subjects."""

    subjects: list[SubjectResponse]
    count: int
