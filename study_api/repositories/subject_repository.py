"""Repository for Subject CRUD operations."""

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from study_api.db import get_subjects_container
from study_api.models import Subject, SubjectCreate, SubjectUpdate
from study_api.srs.time import utc_now_iso


class SubjectNotFoundError(Exception):
    """Raised when a subject is not found."""

    pass


class SubjectRepository:
    """Repository for Subject database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_subjects_container()
        return self._container

    def list_by_user(self, user_id: str) -> list[Subject]:
        """List all subjects for a user, newest first."""
        query = "SELECT * FROM c WHERE c.userId = @userId ORDER BY c.createdAt DESC"
        parameters = [{"name": "@userId", "value": user_id}]

        items = self.container.query_items(
            query=query,
            parameters=parameters,
            partition_key=user_id,
        )
        return [Subject(**item) for item in items]

    def search(self, user_id: str, text: str, limit: int = 10) -> list[Subject]:
        """Subjects whose name contains ``text``, ignoring case."""
        query = (
            "SELECT TOP @limit * FROM c WHERE c.userId = @userId "
            "AND CONTAINS(LOWER(c.name), @text) ORDER BY c.updatedAt DESC"
        )
        parameters = [
            {"name": "@userId", "value": user_id},
            {"name": "@text", "value": text.lower()},
            {"name": "@limit", "value": limit},
        ]

        items = self.container.query_items(
            query=query,
            parameters=parameters,
            partition_key=user_id,
        )
        return [Subject(**item) for item in items]

    def get_by_id(self, subject_id: str, user_id: str) -> Subject:
        try:
            item = self.container.read_item(item=subject_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise SubjectNotFoundError(f"Subject with ID {subject_id} not found")
        return Subject(**item)

    def create(self, subject_create: SubjectCreate, user_id: str) -> Subject:
        subject = Subject(userId=user_id, **subject_create.model_dump())
        created_item = self.container.create_item(body=subject.model_dump())
        return Subject(**created_item)

    def update(self, subject_id: str, user_id: str, subject_update: SubjectUpdate) -> Subject:
        """Update an existing subject; a no-op update returns it unchanged."""
        existing = self.get_by_id(subject_id, user_id)

        update_data = subject_update.model_dump(exclude_unset=True)
        if not update_data:
            return existing

        for key, value in update_data.items():
            setattr(existing, key, value)
        existing.updatedAt = utc_now_iso()

        updated_item = self.container.replace_item(item=subject_id, body=existing.model_dump())
        return Subject(**updated_item)

    def delete(self, subject_id: str, user_id: str) -> None:
        try:
            self.container.delete_item(item=subject_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise SubjectNotFoundError(f"Subject with ID {subject_id} not found")

    def exists(self, subject_id: str, user_id: str) -> bool:
        try:
            self.get_by_id(subject_id, user_id)
            return True
        except SubjectNotFoundError:
            return False


# Singleton instance
_subject_repository: SubjectRepository | None = None


def get_subject_repository() -> SubjectRepository:
    """Get the subject repository singleton."""
    global _subject_repository
    if _subject_repository is None:
        _subject_repository = SubjectRepository()
    return _subject_repository
