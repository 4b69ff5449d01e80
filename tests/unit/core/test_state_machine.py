"""Unit tests for StateMachine."""

import pytest

from app.core.state_machine import (
    StateMachine,
    create_resource_state_machine,
    get_resource_transitions,
)
from app.models.resource import ResourceStatus


class TestStateMachine:
    """Tests for generic StateMachine."""

    @pytest.fixture
    def state_machine(self):
        """Create state machine with a small linear graph."""
        return StateMachine("start", {"start": ["middle", "end"], "middle": ["end"], "end": []})

    def test_initial_state(self, state_machine):
        """Test state machine starts in initial state."""
        assert state_machine.current == "start"

    def test_can_transition(self, state_machine):
        """Test allowed and unknown targets."""
        assert state_machine.can_transition("middle") is True
        assert state_machine.can_transition("nonexistent") is False

    def test_unknown_state_has_no_transitions(self):
        """Test a state missing from the map is treated as terminal."""
        assert StateMachine("orphan", {"start": ["end"]}).allowed_transitions == []


class TestResourceStateMachine:
    """Tests for Resource lifecycle state machine."""

    def test_create_with_default(self):
        """Test creating with default initial state."""
        assert create_resource_state_machine().current == ResourceStatus.SUBMITTED

    def test_create_with_initial(self):
        """Test creating with specific initial state."""
        sm = create_resource_state_machine("NeedsRevision")
        assert sm.current == ResourceStatus.NEEDS_REVISION

    @pytest.mark.parametrize(
        ("old", "new"),
        [
            ("Submitted", ResourceStatus.UNDER_REVIEW),
            ("UnderReview", ResourceStatus.APPROVED),
            ("UnderReview", ResourceStatus.NEEDS_REVISION),
            ("NeedsRevision", ResourceStatus.UNDER_REVIEW),
            ("Approved", ResourceStatus.PUBLISHED),
        ],
    )
    def test_review_lifecycle_edges(self, old, new):
        """Test the documented review and publication edges."""
        assert create_resource_state_machine(old).can_transition(new) is True

    def test_published_is_terminal(self):
        """Test PUBLISHED is a terminal state."""
        assert create_resource_state_machine("Published").allowed_transitions == []

    def test_published_only_from_approved(self):
        """Test only APPROVED leads to PUBLISHED."""
        transitions = get_resource_transitions()
        sources = [s for s, targets in transitions.items() if ResourceStatus.PUBLISHED in targets]
        assert sources == [ResourceStatus.APPROVED]

    def test_cannot_skip_to_published(self):
        """Test UNDER_REVIEW cannot jump straight to PUBLISHED."""
        sm = create_resource_state_machine("UnderReview")
        assert sm.can_transition(ResourceStatus.PUBLISHED) is False

    def test_every_status_has_entry(self):
        """Test transition map covers all statuses."""
        assert set(get_resource_transitions()) == set(ResourceStatus)
