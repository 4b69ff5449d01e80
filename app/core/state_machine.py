"""Generic State Machine for model status transitions.

This module provides a reusable state machine pattern for managing
status transitions and declares the Resource review lifecycle graph.

Example:
    # Define transitions
    TRANSITIONS: TransitionMap[ResourceStatus] = {
        ResourceStatus.SUBMITTED: [ResourceStatus.UNDER_REVIEW],
        ResourceStatus.UNDER_REVIEW: [ResourceStatus.NEEDS_REVISION, ResourceStatus.APPROVED],
        ...
    }

    # Create state machine
    sm = StateMachine(ResourceStatus.SUBMITTED, TRANSITIONS)

    # Check a proposed change against the graph
    sm.can_transition(ResourceStatus.UNDER_REVIEW)  # True
"""

from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T", bound=str | Enum)

# Type alias for transition maps
TransitionMap = dict[T, list[T]]


class StateMachine(Generic[T]):
    """Generic state machine for status transitions.

    Provides a type-safe way to manage status transitions with
    explicit allowed transitions defined upfront.

    Attributes:
        current: Current state
        transitions: Map of allowed transitions from each state
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    def can_transition(self, target: T) -> bool:
        """Check if transition to target state is allowed.

        Args:
            target: Target state to check

        Returns:
            True if transition is allowed, False otherwise
        """
        return target in self.allowed_transitions


# ============================================
# Resource Lifecycle
# ============================================


def get_resource_transitions() -> TransitionMap:
    """Get transition map for ResourceStatus.

    Review decisions are honored from any non-terminal state, so
    APPROVED and NEEDS_REVISION are reachable from each of them.
    PUBLISHED is only entered by publication reconciliation.
    """
    from app.models.resource import ResourceStatus

    return {
        ResourceStatus.SUBMITTED: [
            ResourceStatus.UNDER_REVIEW,
            ResourceStatus.NEEDS_REVISION,
            ResourceStatus.APPROVED,
        ],
        ResourceStatus.UNDER_REVIEW: [ResourceStatus.NEEDS_REVISION, ResourceStatus.APPROVED],
        ResourceStatus.NEEDS_REVISION: [ResourceStatus.UNDER_REVIEW, ResourceStatus.APPROVED],
        ResourceStatus.APPROVED: [ResourceStatus.PUBLISHED, ResourceStatus.NEEDS_REVISION],
        ResourceStatus.PUBLISHED: [],  # Terminal state
    }


def create_resource_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for Resource status.

    Args:
        initial_status: Initial status (default: SUBMITTED)

    Returns:
        Configured StateMachine for Resource
    """
    from app.models.resource import ResourceStatus

    initial = ResourceStatus(initial_status) if initial_status else ResourceStatus.SUBMITTED
    return StateMachine(initial, get_resource_transitions())
