"""Resource status transition rules.

Pure decision logic: derive the next ResourceStatus from the current one
and a single event. Rules apply in priority order:

1. An explicit status supplied by the caller wins outright.
2. A contributor save on a NeedsRevision resource resurfaces it as UnderReview.
3. A Rejected review yields NeedsRevision.
4. An Approved review yields Approved.
5. Anything else leaves the status unchanged.

PUBLISHED is never produced here; only publication reconciliation sets it.
"""

from dataclasses import dataclass

from app.core.state_machine import create_resource_state_machine
from app.models.resource import ResourceStatus
from app.models.review import ReviewDecision


@dataclass(frozen=True)
class ContributorEdited:
    """A contributor saved edits without choosing a status."""


@dataclass(frozen=True)
class ReviewApproved:
    """A reviewer approved the resource."""


@dataclass(frozen=True)
class ReviewRejected:
    """A reviewer rejected the resource."""


@dataclass(frozen=True)
class ExplicitStatusSet:
    """The caller set the status directly (administrative override).

    Attributes:
        value: Status to apply
    """

    value: ResourceStatus


StatusEvent = ContributorEdited | ReviewApproved | ReviewRejected | ExplicitStatusSet


def next_status(current: ResourceStatus, event: StatusEvent) -> ResourceStatus:
    """Compute the status that follows an event.

    Args:
        current: Current resource status
        event: Edit, review or explicit-status event

    Returns:
        New status (equal to current when nothing changes)
    """
    if isinstance(event, ExplicitStatusSet):
        return ResourceStatus(event.value)
    if isinstance(event, ContributorEdited) and current == ResourceStatus.NEEDS_REVISION:
        return ResourceStatus.UNDER_REVIEW
    if isinstance(event, ReviewRejected):
        return ResourceStatus.NEEDS_REVISION
    if isinstance(event, ReviewApproved):
        return ResourceStatus.APPROVED
    return ResourceStatus(current)


def event_for_decision(decision: ReviewDecision | str) -> ReviewApproved | ReviewRejected:
    """Map a stored review decision to its status event.

    Args:
        decision: Review decision value

    Returns:
        Matching review event

    Raises:
        ValueError: If decision is not a known ReviewDecision
    """
    if ReviewDecision(decision) == ReviewDecision.APPROVED:
        return ReviewApproved()
    return ReviewRejected()


def is_lifecycle_transition(old: ResourceStatus, new: ResourceStatus) -> bool:
    """Check whether a status change follows the documented lifecycle graph.

    Args:
        old: Previous status
        new: New status

    Returns:
        True if the graph allows old -> new
    """
    return create_resource_state_machine(ResourceStatus(old).value).can_transition(
        ResourceStatus(new)
    )


__all__ = [
    "ContributorEdited",
    "ExplicitStatusSet",
    "ReviewApproved",
    "ReviewRejected",
    "StatusEvent",
    "event_for_decision",
    "is_lifecycle_transition",
    "next_status",
]
