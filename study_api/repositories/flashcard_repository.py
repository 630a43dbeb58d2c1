"""Repository for Flashcard CRUD operations."""

from azure.core import MatchConditions
from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosAccessConditionFailedError, CosmosResourceNotFoundError

from study_api.db import get_flashcards_container
from study_api.models import Flashcard, FlashcardCreate, FlashcardUpdate
from study_api.repositories.subject_repository import SubjectNotFoundError, get_subject_repository
from study_api.srs.time import utc_now_iso


class FlashcardNotFoundError(Exception):
    """Raised when a flashcard is not found."""

    pass


class FlashcardConflictError(Exception):
    """Raised when a flashcard changed since it was read."""

    pass


class FlashcardRepository:
    """Repository for Flashcard database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_flashcards_container()
        return self._container

    def _query(self, query: str, user_id: str, **params) -> list[dict]:
        parameters = [{"name": f"@{name}", "value": value} for name, value in params.items()]
        parameters.append({"name": "@userId", "value": user_id})
        return list(
            self.container.query_items(
                query=query,
                parameters=parameters,
                partition_key=user_id,
            )
        )

    def list_by_user(self, user_id: str) -> list[Flashcard]:
        """List every flashcard owned by a user."""
        items = self._query("SELECT * FROM c WHERE c.userId = @userId", user_id)
        return [Flashcard(**item) for item in items]

    def list_by_subject(self, subject_id: str, user_id: str) -> list[Flashcard]:
        """List a subject's flashcards, newest first."""
        items = self._query(
            "SELECT * FROM c WHERE c.subjectId = @subjectId AND c.userId = @userId "
            "ORDER BY c.createdAt DESC",
            user_id,
            subjectId=subject_id,
        )
        return [Flashcard(**item) for item in items]

    def search(
        self,
        user_id: str,
        text: str,
        difficulty: str | None = None,
        category: str | None = None,
        subject_id: str | None = None,
        limit: int = 10,
    ) -> list[Flashcard]:
        """Flashcards whose front or back contains ``text``, ignoring case.

        Optional filters narrow the match to one difficulty, category or subject.
        """
        clauses = [
            "c.userId = @userId",
            "(CONTAINS(LOWER(c.front), @text) OR CONTAINS(LOWER(c.back), @text))",
        ]
        params = {"text": text.lower(), "limit": limit}
        if difficulty is not None:
            clauses.append("c.difficulty = @difficulty")
            params["difficulty"] = difficulty
        if category is not None:
            clauses.append("c.category = @category")
            params["category"] = category
        if subject_id is not None:
            clauses.append("c.subjectId = @subjectId")
            params["subjectId"] = subject_id

        items = self._query(
            "SELECT TOP @limit * FROM c WHERE " + " AND ".join(clauses) + " ORDER BY c.updatedAt DESC",
            user_id,
            **params,
        )
        return [Flashcard(**item) for item in items]

    def get_by_id(self, flashcard_id: str, user_id: str) -> Flashcard:
        try:
            item = self.container.read_item(item=flashcard_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard_id} not found")
        return Flashcard(**item)

    def create(self, subject_id: str, user_id: str, flashcard_create: FlashcardCreate) -> Flashcard:
        """Create a new flashcard in a subject.

        Raises:
            SubjectNotFoundError: If the subject does not exist for this user.
        """
        if not get_subject_repository().exists(subject_id, user_id):
            raise SubjectNotFoundError(f"Subject with ID {subject_id} not found")

        flashcard = Flashcard(subjectId=subject_id, userId=user_id, **flashcard_create.model_dump())
        created_item = self.container.create_item(body=flashcard.model_dump())
        return Flashcard(**created_item)

    def update(self, flashcard_id: str, user_id: str, flashcard_update: FlashcardUpdate) -> Flashcard:
        existing = self.get_by_id(flashcard_id, user_id)

        update_data = flashcard_update.model_dump(exclude_unset=True)
        if not update_data:
            return existing

        for key, value in update_data.items():
            setattr(existing, key, value)
        existing.updatedAt = utc_now_iso()
        return self.replace(existing)

    def replace(self, flashcard: Flashcard) -> Flashcard:
        """Persist a full flashcard document.

        When the flashcard carries an etag the write only succeeds if the stored
        document is unchanged since it was read.

        Raises:
            FlashcardConflictError: If the stored document changed in between.
            FlashcardNotFoundError: If the document no longer exists.
        """
        kwargs = {}
        if flashcard.etag:
            kwargs = {"etag": flashcard.etag, "match_condition": MatchConditions.IfNotModified}

        try:
            updated_item = self.container.replace_item(
                item=flashcard.id,
                body=flashcard.model_dump(),
                **kwargs,
            )
        except CosmosAccessConditionFailedError:
            raise FlashcardConflictError(f"Flashcard with ID {flashcard.id} was modified concurrently")
        except CosmosResourceNotFoundError:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard.id} not found")
        return Flashcard(**updated_item)

    def delete(self, flashcard_id: str, user_id: str) -> None:
        try:
            self.container.delete_item(item=flashcard_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard_id} not found")

    def delete_by_subject(self, subject_id: str, user_id: str) -> int:
        """Delete all flashcards in a subject. Returns count of deleted flashcards."""
        flashcards = self.list_by_subject(subject_id, user_id)
        for flashcard in flashcards:
            self.container.delete_item(item=flashcard.id, partition_key=user_id)
        return len(flashcards)


# Singleton instance
_flashcard_repository: FlashcardRepository | None = None


def get_flashcard_repository() -> FlashcardRepository:
    """Get the flashcard repository singleton."""
    global _flashcard_repository
    if _flashcard_repository is None:
        _flashcard_repository = FlashcardRepository()
    return _flashcard_repository
