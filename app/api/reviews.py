"""Review decision endpoints."""

import uuid

from fastapi import APIRouter, Depends, status

from app.api.deps import get_actor_id
from app.api.schemas import ReviewCreate, ReviewOutcomeResponse, ReviewResponse
from app.core.container import get_resource_repository, get_review_workflow
from app.core.logging import get_logger
from app.models.review import ResourceReview
from app.repositories.resource_repository import ResourceRepository
from app.services.review.workflow import ReviewWorkflow

logger = get_logger(__name__)

router = APIRouter(tags=["reviews"])


@router.post(
    "/reviews",
    response_model=ReviewOutcomeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    payload: ReviewCreate,
    actor_id: uuid.UUID = Depends(get_actor_id),
    workflow: ReviewWorkflow = Depends(get_review_workflow),
) -> ReviewOutcomeResponse:
    """Record a review decision.

    Returns once the review and the resulting status are stored. Publication
    of an approved video continues in the background; its result shows up
    later on the resource's ``status`` and ``published_url``.
    """
    review = ResourceReview(
        resource_id=payload.resource_id,
        reviewer_id=actor_id,
        reviewer_role_id=payload.reviewer_role_id,
        decision=payload.decision,
        comment_summary=payload.comment_summary,
    )
    outcome = await workflow.record_review(review, actor_id)

    return ReviewOutcomeResponse(
        review=ReviewResponse.model_validate(outcome.review),
        old_status=outcome.old_status,
        new_status=outcome.new_status,
        publication_dispatched=outcome.publication_dispatched,
    )


@router.get("/resources/{resource_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(
    resource_id: uuid.UUID,
    repository: ResourceRepository = Depends(get_resource_repository),
) -> list[ReviewResponse]:
    """List review decisions of a resource, newest first."""
    await repository.get_resource(resource_id)
    reviews = await repository.list_reviews(resource_id)
    return [ReviewResponse.model_validate(review) for review in reviews]


__all__ = ["router"]
