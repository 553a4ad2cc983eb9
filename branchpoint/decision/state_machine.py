"""State machine for the decision lifecycle with transition guards."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional, Set, Tuple

from branchpoint.db.enums import DecisionState
from branchpoint.decision.error_codes import ErrorCode, ErrorCodeDictionary


def parse_state(value: Optional[str]) -> DecisionState:
    """
    Parse a stored state string with fallback to DRAFT.

    Args:
        value: State string value

    Returns:
        DecisionState enum value, defaults to DRAFT if missing or invalid
    """
    try:
        return DecisionState((value or "").upper())
    except ValueError:
        return DecisionState.DRAFT


def display_state(decision: Dict[str, Any], branch_count: int) -> str:
    """ACTIVE for a draft that has at least one branch, else the stored state."""
    state = parse_state(decision.get("state"))
    if state == DecisionState.DRAFT and branch_count > 0:
        return DecisionState.ACTIVE.value
    return state.value


@dataclass
class StateTransition:
    """
    Represents a state transition with metadata.

    Attributes:
        from_state: Source state
        to_state: Target state
        timestamp: When the transition occurred
        reason: Optional reason for transition
    """

    from_state: DecisionState
    to_state: DecisionState
    timestamp: datetime
    reason: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert transition to dictionary for serialization."""
        return {
            "fromState": self.from_state.value,
            "toState": self.to_state.value,
            "timestamp": self.timestamp.isoformat(),
            "reason": self.reason,
        }


class DecisionStateMachine:
    """
    Guards lifecycle transitions of a single decision record.

    Only DRAFT, COMMITTED and RESOLVED are ever stored. ACTIVE is a
    display state and is accepted as a source state so a record written
    by another client with that value can still be finalized.
    """

    VALID_TRANSITIONS: ClassVar[Dict[DecisionState, Set[DecisionState]]] = {
        DecisionState.DRAFT: {
            DecisionState.COMMITTED,
            DecisionState.RESOLVED,
        },
        DecisionState.ACTIVE: {
            DecisionState.COMMITTED,
            DecisionState.RESOLVED,
        },
        DecisionState.COMMITTED: set(),  # Terminal state
        DecisionState.RESOLVED: set(),  # Terminal state
        DecisionState.ARCHIVED: set(),
    }

    TERMINAL_STATES: ClassVar[Set[DecisionState]] = {
        DecisionState.COMMITTED,
        DecisionState.RESOLVED,
        DecisionState.ARCHIVED,
    }

    def __init__(self, decision: Dict[str, Any]):
        """
        Initialize state machine with a decision record.

        Args:
            decision: Stored decision dictionary to manage state for
        """
        self.decision = decision
        self.current_state = parse_state(decision.get("state"))
        self.transition_history: List[StateTransition] = []

    @property
    def is_terminal(self) -> bool:
        return self.current_state in self.TERMINAL_STATES

    def can_transition_to(
        self, target_state: DecisionState
    ) -> Tuple[bool, Optional[ErrorCode]]:
        """
        Check if transition to target state is allowed.

        Returns:
            Tuple of (can_transition, error_code_if_blocked)
        """
        if self.is_terminal:
            return False, ErrorCodeDictionary.DECISION_004

        allowed_states = self.VALID_TRANSITIONS.get(self.current_state, set())
        if target_state not in allowed_states:
            return False, ErrorCodeDictionary.DECISION_004

        return True, None

    def transition_to(
        self,
        target_state: DecisionState,
        reason: Optional[str] = None,
    ) -> Tuple[bool, Optional[ErrorCode]]:
        """
        Attempt to transition to target state.

        Updates ``state`` on the wrapped decision record when allowed.

        Args:
            target_state: Target state to transition to
            reason: Optional reason for transition

        Returns:
            Tuple of (success, error_code_if_failed)
        """
        can_transition, error = self.can_transition_to(target_state)

        if not can_transition:
            return False, error

        transition = StateTransition(
            from_state=self.current_state,
            to_state=target_state,
            timestamp=datetime.now(timezone.utc),
            reason=reason,
        )
        self.transition_history.append(transition)

        self.current_state = target_state
        self.decision["state"] = target_state.value

        return True, None

    def get_last_transition(self) -> Optional[StateTransition]:
        """Get the most recent transition, if any."""
        return self.transition_history[-1] if self.transition_history else None
