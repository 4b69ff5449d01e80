"""Resource endpoints."""

import uuid

from fastapi import APIRouter, Depends

from app.api.deps import get_actor_id
from app.api.schemas import ResourceResponse, ResourceUpdate, StatusHistoryResponse
from app.core.container import get_resource_repository, get_review_workflow
from app.repositories.resource_repository import ResourceRepository
from app.services.review.workflow import ReviewWorkflow

router = APIRouter(prefix="/resources", tags=["resources"])


@router.patch("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: uuid.UUID,
    payload: ResourceUpdate,
    actor_id: uuid.UUID = Depends(get_actor_id),
    workflow: ReviewWorkflow = Depends(get_review_workflow),
) -> ResourceResponse:
    """Edit a resource.

    Saving a NeedsRevision resource without an explicit status sends it
    back to review.
    """
    changes = payload.model_dump(exclude_unset=True)
    new_status = changes.pop("status", None)

    resource = await workflow.update_resource(resource_id, changes, actor_id, status=new_status)
    return ResourceResponse.model_validate(resource)


@router.get("/{resource_id}/history", response_model=list[StatusHistoryResponse])
async def list_status_history(
    resource_id: uuid.UUID,
    repository: ResourceRepository = Depends(get_resource_repository),
) -> list[StatusHistoryResponse]:
    """List status transitions of a resource, oldest first."""
    await repository.get_resource(resource_id)
    entries = await repository.list_status_history(resource_id)
    return [StatusHistoryResponse.model_validate(entry) for entry in entries]


__all__ = ["router"]
