"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

import uuid
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from app.core.exceptions import DatabaseError, RecordNotFoundError
from app.core.logging import setup_logging
from app.models.resource import Resource, ResourceCategory, ResourceStatus
from app.models.review import ResourceReview
from app.models.status_history import ResourceStatusHistory
from app.models.video_metadata import VideoMetadata

# Setup logging for tests
setup_logging()


def _detached_copy(resource: Resource) -> Resource:
    """Copy column values into a new instance, like a fresh session load."""
    return Resource(**{column.key: getattr(resource, column.key) for column in Resource.__table__.columns})


class FakeResourceRepository:
    """In-memory stand-in for ResourceRepository.

    Every read returns a fresh copy, so callers cannot mutate stored rows
    without calling update_resource(). Operations named in ``fail_on``
    raise DatabaseError.
    """

    def __init__(self) -> None:
        self.resources: dict[uuid.UUID, Resource] = {}
        self.reviews: list[ResourceReview] = []
        self.history: list[ResourceStatusHistory] = []
        self.overrides: dict[uuid.UUID, VideoMetadata] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise DatabaseError(f"{operation} failed", operation=operation)

    def add_resource(self, resource: Resource) -> Resource:
        self.resources[resource.id] = _detached_copy(resource)
        return resource

    def stored(self, resource_id: uuid.UUID) -> Resource:
        return self.resources[resource_id]

    async def get_resource(self, resource_id: uuid.UUID) -> Resource:
        self._enter("get_resource")
        if resource_id not in self.resources:
            raise RecordNotFoundError(model="Resource", record_id=str(resource_id))
        return _detached_copy(self.resources[resource_id])

    async def update_resource(self, resource: Resource) -> Resource:
        self._enter("update_resource")
        if resource.id not in self.resources:
            raise RecordNotFoundError(model="Resource", record_id=str(resource.id))
        self.resources[resource.id] = _detached_copy(resource)
        return resource

    async def insert_review(self, review: ResourceReview) -> ResourceReview:
        self._enter("insert_review")
        if review.id is None:
            review.id = uuid.uuid4()
        if review.reviewed_at is None:
            review.reviewed_at = datetime.now(tz=UTC)
        self.reviews.append(review)
        return review

    async def list_reviews(self, resource_id: uuid.UUID) -> list[ResourceReview]:
        self._enter("list_reviews")
        rows = [r for r in self.reviews if r.resource_id == resource_id]
        return sorted(rows, key=lambda r: r.reviewed_at, reverse=True)

    async def get_publication_overrides(self, resource_id: uuid.UUID) -> VideoMetadata:
        self._enter("get_publication_overrides")
        if resource_id not in self.overrides:
            raise RecordNotFoundError(model="VideoMetadata", record_id=str(resource_id))
        return self.overrides[resource_id]

    async def insert_history_entry(self, entry: ResourceStatusHistory) -> ResourceStatusHistory:
        self._enter("insert_history_entry")
        if entry.id is None:
            entry.id = uuid.uuid4()
        if entry.changed_at is None:
            entry.changed_at = datetime.now(tz=UTC)
        self.history.append(entry)
        return entry

    async def list_status_history(self, resource_id: uuid.UUID) -> list[ResourceStatusHistory]:
        self._enter("list_status_history")
        return [e for e in self.history if e.resource_id == resource_id]


@pytest.fixture
def fake_repository() -> FakeResourceRepository:
    """Create an empty in-memory repository."""
    return FakeResourceRepository()


@pytest.fixture
def make_resource() -> Callable[..., Resource]:
    """Factory for Resource rows with sensible defaults."""

    def _make(**overrides) -> Resource:
        values = {
            "id": uuid.uuid4(),
            "title": "Fractions on a Number Line",
            "category": ResourceCategory.VIDEO,
            "summary": "Placing fractions between 0 and 1.",
            "subjects": ["Math", "Fractions"],
            "grade_levels": ["3", "4"],
            "drive_link": "https://drive.google.com/file/d/1AbC_dEf-123/view?usp=sharing",
            "status": ResourceStatus.UNDER_REVIEW,
            "published_url": None,
            "contributor_id": uuid.uuid4(),
        }
        values.update(overrides)
        return Resource(**values)

    return _make

