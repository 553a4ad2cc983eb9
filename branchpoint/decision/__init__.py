"""Decision lifecycle: error codes, state machine and audit events"""
from branchpoint.decision.error_codes import ErrorCode, ErrorCodeDictionary, ErrorSeverity
from branchpoint.decision.state_machine import DecisionStateMachine, StateTransition

__all__ = [
    "ErrorCode",
    "ErrorCodeDictionary",
    "ErrorSeverity",
    "DecisionStateMachine",
    "StateTransition",
]
