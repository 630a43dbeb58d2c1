"""Tests for the Cosmos-backed repositories using mocked containers."""

import pytest
from unittest.mock import MagicMock, patch

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosAccessConditionFailedError, CosmosResourceNotFoundError

from study_api.models import FlashcardCreate, FlashcardUpdate, SubjectCreate, SubjectUpdate
from study_api.repositories import (
    FlashcardConflictError,
    FlashcardNotFoundError,
    FlashcardRepository,
    SubjectNotFoundError,
    SubjectRepository,
)

from conftest import USER_ID, make_flashcard, make_subject


def not_found():
    return CosmosResourceNotFoundError(status_code=404, message="Entity with the specified id does not exist")


def echo_body(*args, **kwargs):
    return dict(kwargs["body"])


@pytest.fixture
def container():
    mock = MagicMock()
    mock.create_item.side_effect = echo_body
    mock.replace_item.side_effect = echo_body
    return mock


class TestSubjectRepository:
    def test_list_by_user_queries_partition(self, container):
        container.query_items.return_value = [make_subject()]
        repo = SubjectRepository(container)

        subjects = repo.list_by_user(USER_ID)

        assert [s.name for s in subjects] == ["Biology"]
        kwargs = container.query_items.call_args.kwargs
        assert kwargs["partition_key"] == USER_ID
        assert {"name": "@userId", "value": USER_ID} in kwargs["parameters"]

    def test_search_matches_name_ignoring_case(self, container):
        container.query_items.return_value = [make_subject()]

        SubjectRepository(container).search(USER_ID, "BIO", limit=5)

        kwargs = container.query_items.call_args.kwargs
        assert "CONTAINS(LOWER(c.name), @text)" in kwargs["query"]
        assert "TOP @limit" in kwargs["query"]
        assert {"name": "@text", "value": "bio"} in kwargs["parameters"]
        assert {"name": "@limit", "value": 5} in kwargs["parameters"]
        assert kwargs["partition_key"] == USER_ID

    def test_get_missing_subject(self, container):
        container.read_item.side_effect = not_found()

        with pytest.raises(SubjectNotFoundError):
            SubjectRepository(container).get_by_id("missing", USER_ID)

    def test_exists(self, container):
        container.read_item.side_effect = [make_subject(), not_found()]
        repo = SubjectRepository(container)

        assert repo.exists("subject-1", USER_ID) is True
        assert repo.exists("missing", USER_ID) is False

    def test_create(self, container):
        subject = SubjectRepository(container).create(SubjectCreate(name="Physics"), USER_ID)

        body = container.create_item.call_args.kwargs["body"]
        assert body["userId"] == USER_ID
        assert body["color"] == "#8b5cf6"
        assert subject.id == body["id"]

    def test_update(self, container):
        container.read_item.return_value = make_subject()

        subject = SubjectRepository(container).update("subject-1", USER_ID, SubjectUpdate(name="Genetics"))

        assert subject.name == "Genetics"
        assert subject.updatedAt != "2025-03-01T00:00:00Z"
        container.replace_item.assert_called_once()

    def test_empty_update_does_not_write(self, container):
        container.read_item.return_value = make_subject()

        subject = SubjectRepository(container).update("subject-1", USER_ID, SubjectUpdate())

        assert subject.name == "Biology"
        container.replace_item.assert_not_called()

    def test_delete_missing_subject(self, container):
        container.delete_item.side_effect = not_found()

        with pytest.raises(SubjectNotFoundError):
            SubjectRepository(container).delete("missing", USER_ID)


class TestFlashcardRepository:
    def test_reads_etag_without_writing_it_back(self, container):
        container.read_item.return_value = make_flashcard(_etag='"0000-etag"')
        repo = FlashcardRepository(container)

        flashcard = repo.get_by_id("card-1", USER_ID)

        assert flashcard.etag == '"0000-etag"'
        assert "_etag" not in flashcard.model_dump()
        assert "etag" not in flashcard.model_dump()

    def test_replace_is_conditional_on_etag(self, container):
        container.read_item.return_value = make_flashcard(_etag='"0000-etag"')
        repo = FlashcardRepository(container)
        flashcard = repo.get_by_id("card-1", USER_ID)

        repo.replace(flashcard)

        kwargs = container.replace_item.call_args.kwargs
        assert kwargs["item"] == "card-1"
        assert kwargs["etag"] == '"0000-etag"'
        assert kwargs["match_condition"] == MatchConditions.IfNotModified

    def test_replace_without_etag_is_unconditional(self, container):
        container.read_item.return_value = make_flashcard()
        repo = FlashcardRepository(container)

        repo.replace(repo.get_by_id("card-1", USER_ID))

        assert "match_condition" not in container.replace_item.call_args.kwargs

    def test_precondition_failure_is_a_conflict(self, container):
        container.read_item.return_value = make_flashcard(_etag='"stale"')
        container.replace_item.side_effect = CosmosAccessConditionFailedError(
            status_code=412, message="One of the specified pre-condition is not met"
        )
        repo = FlashcardRepository(container)

        with pytest.raises(FlashcardConflictError):
            repo.replace(repo.get_by_id("card-1", USER_ID))

    def test_replace_missing_flashcard(self, container):
        container.read_item.return_value = make_flashcard()
        container.replace_item.side_effect = not_found()
        repo = FlashcardRepository(container)

        with pytest.raises(FlashcardNotFoundError):
            repo.replace(repo.get_by_id("card-1", USER_ID))

    def test_get_missing_flashcard(self, container):
        container.read_item.side_effect = not_found()

        with pytest.raises(FlashcardNotFoundError):
            FlashcardRepository(container).get_by_id("missing", USER_ID)

    def test_list_by_subject_filters_on_subject(self, container):
        container.query_items.return_value = [make_flashcard()]

        flashcards = FlashcardRepository(container).list_by_subject("subject-1", USER_ID)

        assert [f.id for f in flashcards] == ["card-1"]
        kwargs = container.query_items.call_args.kwargs
        assert kwargs["partition_key"] == USER_ID
        assert {"name": "@subjectId", "value": "subject-1"} in kwargs["parameters"]

    def test_search_matches_front_or_back(self, container):
        container.query_items.return_value = [make_flashcard()]

        flashcards = FlashcardRepository(container).search(USER_ID, "ATP")

        assert [f.id for f in flashcards] == ["card-1"]
        kwargs = container.query_items.call_args.kwargs
        assert "CONTAINS(LOWER(c.front), @text) OR CONTAINS(LOWER(c.back), @text)" in kwargs["query"]
        assert "@difficulty" not in kwargs["query"]
        assert {"name": "@text", "value": "atp"} in kwargs["parameters"]
        assert kwargs["partition_key"] == USER_ID

    def test_search_filters(self, container):
        container.query_items.return_value = []

        FlashcardRepository(container).search(
            USER_ID, "cell", difficulty="hard", category="concept", subject_id="subject-1"
        )

        kwargs = container.query_items.call_args.kwargs
        assert "c.difficulty = @difficulty" in kwargs["query"]
        assert "c.category = @category" in kwargs["query"]
        assert "c.subjectId = @subjectId" in kwargs["query"]
        assert {"name": "@difficulty", "value": "hard"} in kwargs["parameters"]
        assert {"name": "@subjectId", "value": "subject-1"} in kwargs["parameters"]

    def test_create_starts_unreviewed(self, container):
        subject_repo = MagicMock()
        subject_repo.exists.return_value = True

        with patch(
            "study_api.repositories.flashcard_repository.get_subject_repository",
            return_value=subject_repo,
        ):
            flashcard = FlashcardRepository(container).create(
                "subject-1", USER_ID, FlashcardCreate(front="Q", back="A")
            )

        assert flashcard.timesReviewed == 0
        assert flashcard.easeFactor == 2.5
        assert flashcard.nextReviewAt is None
        body = container.create_item.call_args.kwargs["body"]
        assert body["subjectId"] == "subject-1"

    def test_create_in_unknown_subject(self, container):
        subject_repo = MagicMock()
        subject_repo.exists.return_value = False

        with patch(
            "study_api.repositories.flashcard_repository.get_subject_repository",
            return_value=subject_repo,
        ):
            with pytest.raises(SubjectNotFoundError):
                FlashcardRepository(container).create("missing", USER_ID, FlashcardCreate(front="Q", back="A"))

        container.create_item.assert_not_called()

    def test_update_leaves_review_state(self, container):
        container.read_item.return_value = make_flashcard(timesReviewed=4, easeFactor=1.8)

        flashcard = FlashcardRepository(container).update("card-1", USER_ID, FlashcardUpdate(back="B"))

        assert flashcard.back == "B"
        assert flashcard.timesReviewed == 4
        assert flashcard.easeFactor == 1.8

    def test_delete_by_subject(self, container):
        container.query_items.return_value = [make_flashcard("a"), make_flashcard("b")]

        deleted = FlashcardRepository(container).delete_by_subject("subject-1", USER_ID)

        assert deleted == 2
        assert [c.kwargs["item"] for c in container.delete_item.call_args_list] == ["a", "b"]
