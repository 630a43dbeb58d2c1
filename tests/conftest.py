"""Pytest configuration and fixtures."""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest

# Auth is disabled during tests; requests identify themselves with X-User-Id
os.environ["AUTH_ENABLED"] = "false"

from fastapi.testclient import TestClient

from study_api.auth import get_auth_settings
from study_api.main import app
from study_api.models import Flashcard, Subject
from study_api.repositories import (
    FlashcardConflictError,
    FlashcardNotFoundError,
    SubjectNotFoundError,
)

import study_api.routers.dashboard as dashboard_module
import study_api.routers.flashcards as flashcards_module
import study_api.routers.reviews as reviews_module
import study_api.routers.search as search_module
import study_api.routers.stats as stats_module
import study_api.routers.study as study_module
import study_api.routers.subjects as subjects_module


USER_ID = "user-1"
OTHER_USER_ID = "user-2"
FIXED_NOW = datetime(2025, 3, 10, 15, 30, 0, tzinfo=timezone.utc)


@dataclass
class StubSubjectRepo:
    subjects: dict[str, dict] = field(default_factory=dict)

    def list_by_user(self, user_id: str) -> list[Subject]:
        return [Subject(**raw) for raw in self.subjects.values() if raw["userId"] == user_id]

    def search(self, user_id: str, text: str, limit: int = 10) -> list[Subject]:
        text = text.lower()
        return [s for s in self.list_by_user(user_id) if text in s.name.lower()][:limit]

    def get_by_id(self, subject_id: str, user_id: str) -> Subject:
        raw = self.subjects.get(subject_id)
        if raw is None or raw["userId"] != user_id:
            raise SubjectNotFoundError(f"Subject with ID {subject_id} not found")
        return Subject(**raw)

    def exists(self, subject_id: str, user_id: str) -> bool:
        try:
            self.get_by_id(subject_id, user_id)
            return True
        except SubjectNotFoundError:
            return False

    def create(self, subject_create, user_id: str) -> Subject:
        subject = Subject(userId=user_id, **subject_create.model_dump())
        self.subjects[subject.id] = subject.model_dump()
        return subject

    def update(self, subject_id: str, user_id: str, subject_update) -> Subject:
        subject = self.get_by_id(subject_id, user_id)
        for key, value in subject_update.model_dump(exclude_unset=True).items():
            setattr(subject, key, value)
        self.subjects[subject_id] = subject.model_dump()
        return subject

    def delete(self, subject_id: str, user_id: str) -> None:
        self.get_by_id(subject_id, user_id)
        del self.subjects[subject_id]


@dataclass
class StubFlashcardRepo:
    flashcards: dict[str, dict] = field(default_factory=dict)
    # Number of upcoming replace() calls that fail with a write conflict
    conflicts: int = 0
    replace_calls: int = 0
    subject_repo: StubSubjectRepo | None = None

    def list_by_user(self, user_id: str) -> list[Flashcard]:
        return [Flashcard(**raw) for raw in self.flashcards.values() if raw["userId"] == user_id]

    def list_by_subject(self, subject_id: str, user_id: str) -> list[Flashcard]:
        return [card for card in self.list_by_user(user_id) if card.subjectId == subject_id]

    def search(
        self,
        user_id: str,
        text: str,
        difficulty=None,
        category=None,
        subject_id=None,
        limit: int = 10,
    ) -> list[Flashcard]:
        text = text.lower()
        matches = [
            card
            for card in self.list_by_user(user_id)
            if (text in card.front.lower() or text in card.back.lower())
            and difficulty in (None, card.difficulty)
            and category in (None, card.category)
            and subject_id in (None, card.subjectId)
        ]
        return matches[:limit]

    def get_by_id(self, flashcard_id: str, user_id: str) -> Flashcard:
        raw = self.flashcards.get(flashcard_id)
        if raw is None or raw["userId"] != user_id:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard_id} not found")
        return Flashcard(**raw)

    def create(self, subject_id: str, user_id: str, flashcard_create) -> Flashcard:
        if self.subject_repo is not None and not self.subject_repo.exists(subject_id, user_id):
            raise SubjectNotFoundError(f"Subject with ID {subject_id} not found")
        flashcard = Flashcard(subjectId=subject_id, userId=user_id, **flashcard_create.model_dump())
        self.flashcards[flashcard.id] = flashcard.model_dump()
        return flashcard

    def update(self, flashcard_id: str, user_id: str, flashcard_update) -> Flashcard:
        flashcard = self.get_by_id(flashcard_id, user_id)
        for key, value in flashcard_update.model_dump(exclude_unset=True).items():
            setattr(flashcard, key, value)
        return self.replace(flashcard)

    def replace(self, flashcard: Flashcard) -> Flashcard:
        self.replace_calls += 1
        if self.conflicts > 0:
            self.conflicts -= 1
            raise FlashcardConflictError(f"Flashcard with ID {flashcard.id} was modified concurrently")
        self.flashcards[flashcard.id] = flashcard.model_dump()
        return Flashcard(**self.flashcards[flashcard.id])

    def delete(self, flashcard_id: str, user_id: str) -> None:
        self.get_by_id(flashcard_id, user_id)
        del self.flashcards[flashcard_id]

    def delete_by_subject(self, subject_id: str, user_id: str) -> int:
        doomed = [card.id for card in self.list_by_subject(subject_id, user_id)]
        for flashcard_id in doomed:
            del self.flashcards[flashcard_id]
        return len(doomed)


def make_subject(subject_id: str = "subject-1", user_id: str = USER_ID, **overrides) -> dict:
    raw = {
        "id": subject_id,
        "userId": user_id,
        "name": "Biology",
        "description": None,
        "color": "#22c55e",
        "icon": "🧬",
        "createdAt": "2025-03-01T00:00:00Z",
        "updatedAt": "2025-03-01T00:00:00Z",
    }
    raw.update(overrides)
    return raw


def make_flashcard(
    flashcard_id: str = "card-1",
    subject_id: str = "subject-1",
    user_id: str = USER_ID,
    **overrides,
) -> dict:
    raw = {
        "id": flashcard_id,
        "subjectId": subject_id,
        "userId": user_id,
        "documentId": None,
        "front": "What does the mitochondrion produce?",
        "back": "ATP",
        "category": "concept",
        "difficulty": "medium",
        "createdAt": "2025-03-01T00:00:00Z",
        "updatedAt": "2025-03-01T00:00:00Z",
        "timesReviewed": 0,
        "easeFactor": 2.5,
        "lastReviewedAt": None,
        "nextReviewAt": None,
    }
    raw.update(overrides)
    return raw


@pytest.fixture(autouse=True)
def reset_auth_settings():
    """Drop cached auth settings so env changes in one test don't leak."""
    get_auth_settings.cache_clear()
    yield
    get_auth_settings.cache_clear()


@pytest.fixture
def subject_repo() -> StubSubjectRepo:
    return StubSubjectRepo(subjects={"subject-1": make_subject()})


@pytest.fixture
def flashcard_repo(subject_repo) -> StubFlashcardRepo:
    return StubFlashcardRepo(subject_repo=subject_repo)


@pytest.fixture
def stub_repos(monkeypatch, subject_repo, flashcard_repo):
    """Route every repository lookup in the routers to in-memory stubs."""
    routers = (
        subjects_module,
        flashcards_module,
        reviews_module,
        study_module,
        stats_module,
        dashboard_module,
        search_module,
    )
    for module in routers:
        monkeypatch.setattr(module, "get_subject_repository", lambda: subject_repo, raising=False)
        monkeypatch.setattr(module, "get_flashcard_repository", lambda: flashcard_repo, raising=False)
    return subject_repo, flashcard_repo


@pytest.fixture
def fixed_now(monkeypatch) -> datetime:
    """Freeze the clock used by the routers."""
    for module in (reviews_module, study_module, stats_module, dashboard_module):
        monkeypatch.setattr(module, "utc_now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def headers() -> dict:
    return {"X-User-Id": USER_ID}


@pytest.fixture
def auth_disabled_env(monkeypatch):
    """Fixture that ensures AUTH_ENABLED is false."""
    monkeypatch.setenv("AUTH_ENABLED", "false")


@pytest.fixture
def auth_enabled_env(monkeypatch):
    """Fixture that enables auth with test configuration."""
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes!!")
