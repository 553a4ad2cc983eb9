"""Custom exceptions for the BranchPoint decision engine"""
from typing import Any, Dict, Optional

from branchpoint.decision.error_codes import ErrorCode


class BranchPointError(Exception):
    """Base exception for decision-engine errors"""

    def __init__(
        self,
        error_code: ErrorCode,
        entity_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        self.error_code = error_code
        self.entity_id = entity_id
        self.context = context or {}
        self.message = message or error_code.message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses"""
        return {
            "code": self.error_code.code,
            "message": self.message,
            "remediation_steps": self.error_code.remediation_steps,
            "severity": self.error_code.severity,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "context": self.context,
        }


class ValidationError(BranchPointError):
    """Exception raised when caller input violates a constraint"""
    pass


class NotFoundError(BranchPointError):
    """Exception raised when a record is missing or owned by another user"""
    pass


class StateTransitionError(ValidationError):
    """Exception raised when a decision cannot move to the requested state"""
    pass


class GenerationError(BranchPointError):
    """Exception raised when the text-generation backend fails"""
    pass
