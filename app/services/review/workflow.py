"""Review workflow orchestrator.

Drives a resource through its review lifecycle. Status changes and their
history entries are applied synchronously; publication of an approved
Video resource is handed to a dispatcher and never awaited.
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.core.exceptions import NonEditableFieldError
from app.core.logging import get_logger
from app.models.resource import Resource, ResourceStatus
from app.models.review import ResourceReview, ReviewDecision
from app.repositories.resource_repository import ResourceRepository
from app.services.publisher.metadata import ResourceSnapshot
from app.services.review.history import StatusHistoryRecorder
from app.services.review.transitions import (
    ContributorEdited,
    ExplicitStatusSet,
    StatusEvent,
    event_for_decision,
    is_lifecycle_transition,
    next_status,
)

if TYPE_CHECKING:
    from app.services.publisher.dispatch import PublicationDispatcher

logger = get_logger(__name__)

# Resource fields a contributor may edit directly
EDITABLE_FIELDS = frozenset(
    {"title", "category", "slug", "summary", "subjects", "grade_levels", "drive_link"}
)


@dataclass
class ReviewOutcome:
    """Result of recording a review decision.

    Attributes:
        review: Stored review
        old_status: Resource status before the review
        new_status: Resource status after the review
        publication_dispatched: Whether a background publication was launched
    """

    review: ResourceReview
    old_status: ResourceStatus
    new_status: ResourceStatus
    publication_dispatched: bool = False

    @property
    def status_changed(self) -> bool:
        return self.old_status != self.new_status


class ReviewWorkflow:
    """Apply review decisions and contributor edits to resources.

    Example:
        >>> workflow = ReviewWorkflow(repository, recorder, dispatcher)
        >>> outcome = await workflow.record_review(review, actor_id)
        >>> outcome.new_status
        <ResourceStatus.APPROVED: 'Approved'>
    """

    def __init__(
        self,
        repository: ResourceRepository,
        recorder: StatusHistoryRecorder,
        dispatcher: "PublicationDispatcher | None" = None,
    ) -> None:
        """Initialize workflow.

        Args:
            repository: Storage adapter
            recorder: Status history recorder
            dispatcher: Background publication launcher, None when
                publication is not configured
        """
        self.repository = repository
        self.recorder = recorder
        self.dispatcher = dispatcher

    async def record_review(
        self, review: ResourceReview, actor_id: uuid.UUID | None = None
    ) -> ReviewOutcome:
        """Store a review decision and apply the resulting status.

        Args:
            review: New review row
            actor_id: Authenticated actor (defaults to the reviewer)

        Returns:
            ReviewOutcome

        Raises:
            RecordNotFoundError: If the reviewed resource does not exist
        """
        resource = await self.repository.get_resource(review.resource_id)
        stored = await self.repository.insert_review(review)
        actor_id = actor_id or stored.reviewer_id

        old_status = ResourceStatus(resource.status)
        new_status = await self._apply_status(
            resource, event_for_decision(stored.decision), actor_id
        )

        logger.info(
            "Review recorded",
            resource_id=str(resource.id),
            review_id=str(stored.id),
            decision=ReviewDecision(stored.decision).value,
            old_status=old_status.value,
            new_status=new_status.value,
        )

        dispatched = False
        if (
            new_status != old_status
            and ReviewDecision(stored.decision) == ReviewDecision.APPROVED
            and resource.is_video
        ):
            dispatched = self._launch_publication(resource, actor_id)

        return ReviewOutcome(
            review=stored,
            old_status=old_status,
            new_status=new_status,
            publication_dispatched=dispatched,
        )

    async def update_resource(
        self,
        resource_id: uuid.UUID,
        changes: Mapping[str, Any],
        actor_id: uuid.UUID | None = None,
        status: ResourceStatus | None = None,
    ) -> Resource:
        """Apply edits to a resource.

        Without an explicit status, the save counts as a contributor edit,
        which resurfaces a NeedsRevision resource to reviewers.

        Args:
            resource_id: Resource to edit
            changes: New values keyed by field name
            actor_id: Authenticated actor
            status: Explicit status override

        Returns:
            Updated resource

        Raises:
            RecordNotFoundError: If the resource does not exist
            NonEditableFieldError: If changes name a field that cannot be edited
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise NonEditableFieldError(sorted(unknown), resource_id=str(resource_id))

        resource = await self.repository.get_resource(resource_id)
        for field_name, value in changes.items():
            setattr(resource, field_name, value)

        event: StatusEvent = ExplicitStatusSet(status) if status is not None else ContributorEdited()
        await self._apply_status(resource, event, actor_id, persist_unchanged=True)

        logger.info(
            "Resource updated",
            resource_id=str(resource_id),
            fields=sorted(changes),
            status=ResourceStatus(resource.status).value,
        )
        return resource

    async def _apply_status(
        self,
        resource: Resource,
        event: StatusEvent,
        actor_id: uuid.UUID | None,
        persist_unchanged: bool = False,
    ) -> ResourceStatus:
        """Compute, persist and record the status that follows an event."""
        old_status = ResourceStatus(resource.status)
        new_status = next_status(old_status, event)

        if new_status == old_status:
            if persist_unchanged:
                await self.repository.update_resource(resource)
            return new_status

        if not is_lifecycle_transition(old_status, new_status):
            logger.info(
                "Status change outside review lifecycle",
                resource_id=str(resource.id),
                old_status=old_status.value,
                new_status=new_status.value,
                event=type(event).__name__,
            )

        resource.status = new_status
        await self.repository.update_resource(resource)
        await self.recorder.record(resource.id, old_status, new_status, actor_id)
        return new_status

    def _launch_publication(self, resource: Resource, actor_id: uuid.UUID | None) -> bool:
        """Hand an approved Video resource to the publication dispatcher."""
        if self.dispatcher is None:
            logger.warning(
                "Publication not configured, skipping upload",
                resource_id=str(resource.id),
            )
            return False

        snapshot = ResourceSnapshot.from_resource(resource, approved_by=actor_id)
        try:
            self.dispatcher.dispatch(snapshot)
        except Exception as e:
            logger.error(
                "Failed to launch publication",
                resource_id=str(resource.id),
                error=str(e),
                exc_info=True,
            )
            return False
        return True


__all__ = [
    "EDITABLE_FIELDS",
    "ReviewOutcome",
    "ReviewWorkflow",
]
