"""Review lifecycle services.

Status transition rules, status history and the workflow that applies
review decisions and contributor edits.
"""

from app.services.review.history import StatusHistoryRecorder
from app.services.review.transitions import (
    ContributorEdited,
    ExplicitStatusSet,
    ReviewApproved,
    ReviewRejected,
    StatusEvent,
    event_for_decision,
    is_lifecycle_transition,
    next_status,
)
from app.services.review.workflow import ReviewOutcome, ReviewWorkflow

__all__ = [
    "ContributorEdited",
    "ExplicitStatusSet",
    "ReviewApproved",
    "ReviewOutcome",
    "ReviewRejected",
    "ReviewWorkflow",
    "StatusEvent",
    "StatusHistoryRecorder",
    "event_for_decision",
    "is_lifecycle_transition",
    "next_status",
]
