"""Error Code Dictionary - standardized error responses with remediation steps."""
from dataclasses import dataclass
from typing import ClassVar, Dict, List

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    ERROR = "error"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorCode:
    """
    Standardized error code with remediation.

    Attributes:
        code: Unique error code identifier (e.g., DECISION_001)
        message: Human-readable error message
        remediation_steps: List of steps to resolve the error
        severity: Error severity level
    """

    code: str
    message: str
    remediation_steps: List[str]
    severity: str = ErrorSeverity.ERROR.value

    def to_dict(self) -> Dict[str, str]:
        """Convert error code to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "remediation_steps": self.remediation_steps,
            "severity": self.severity,
        }


class ErrorCodeDictionary:
    """
    Catalog of every error the decision engine can report.

    Codes are grouped by category prefix (DECISION, BRANCH, CONFIDENCE,
    COMPARISON, GROUP, SIMULATION, GENERATION, SYSTEM).
    """

    # Decision Errors (DECISION_*)
    DECISION_001: ClassVar[ErrorCode] = ErrorCode(
        code="DECISION_001",
        message="Title is required",
        remediation_steps=[
            "Provide a non-empty decision title",
            "A leading 'Life Branch' prefix is removed before the check",
        ],
    )

    DECISION_002: ClassVar[ErrorCode] = ErrorCode(
        code="DECISION_002",
        message="Decision not found",
        remediation_steps=[
            "Verify the decision ID is correct",
            "Check that the x-user-id header matches the decision owner",
        ],
    )

    DECISION_003: ClassVar[ErrorCode] = ErrorCode(
        code="DECISION_003",
        message="Pre-confidence must be between 1 and 5",
        remediation_steps=[
            "Send an integer between 1 and 5",
            "Omit preConfidence to use the default of 3",
        ],
    )

    DECISION_004: ClassVar[ErrorCode] = ErrorCode(
        code="DECISION_004",
        message="Decision has already been finalized",
        remediation_steps=[
            "Committed and resolved decisions cannot change state",
            "Create a new decision or a sub-decision instead",
        ],
    )

    # Branch Errors (BRANCH_*)
    BRANCH_001: ClassVar[ErrorCode] = ErrorCode(
        code="BRANCH_001",
        message="Branch name is required",
        remediation_steps=[
            "Provide a non-empty branch name",
        ],
    )

    BRANCH_002: ClassVar[ErrorCode] = ErrorCode(
        code="BRANCH_002",
        message="Branch not found",
        remediation_steps=[
            "Verify the branch ID is correct",
            "Create the branch before simulating it",
        ],
    )

    BRANCH_003: ClassVar[ErrorCode] = ErrorCode(
        code="BRANCH_003",
        message="Final branch not found or does not belong to this decision",
        remediation_steps=[
            "Choose a branch created under this decision",
            "List the decision's branches with GET /decisions/{id}",
        ],
    )

    BRANCH_004: ClassVar[ErrorCode] = ErrorCode(
        code="BRANCH_004",
        message="Final branch ID is required",
        remediation_steps=[
            "Send finalBranchId with the chosen branch",
        ],
    )

    # Confidence Errors (CONFIDENCE_*)
    CONFIDENCE_001: ClassVar[ErrorCode] = ErrorCode(
        code="CONFIDENCE_001",
        message="Post-confidence must be between 1 and 5",
        remediation_steps=[
            "Send postConfidence as an integer between 1 and 5",
        ],
    )

    # Comparison Errors (COMPARISON_*)
    COMPARISON_001: ClassVar[ErrorCode] = ErrorCode(
        code="COMPARISON_001",
        message="At least 2 branches must be simulated before comparison",
        remediation_steps=[
            "Run POST /simulate for at least two branches of this decision",
        ],
    )

    # Group Errors (GROUP_*)
    GROUP_001: ClassVar[ErrorCode] = ErrorCode(
        code="GROUP_001",
        message="At least 2 decisions are required to create a group",
        remediation_steps=[
            "Select two or more distinct decisions",
        ],
    )

    GROUP_002: ClassVar[ErrorCode] = ErrorCode(
        code="GROUP_002",
        message="Group name is required",
        remediation_steps=[
            "Provide a non-empty groupName",
        ],
    )

    GROUP_003: ClassVar[ErrorCode] = ErrorCode(
        code="GROUP_003",
        message="Some decisions not found or do not belong to user",
        remediation_steps=[
            "Only group decisions owned by the requesting user",
            "Verify every decision ID exists",
        ],
    )

    # Simulation Errors (SIMULATION_*)
    SIMULATION_001: ClassVar[ErrorCode] = ErrorCode(
        code="SIMULATION_001",
        message="Branch ID is required",
        remediation_steps=[
            "Send branchId of the branch to simulate",
        ],
    )

    # Generation Errors (GENERATION_*)
    GENERATION_001: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_001",
        message="Decision title is required",
        remediation_steps=[
            "Send decisionTitle in the request body",
        ],
    )

    GENERATION_002: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_002",
        message="Original decision and chosen path are required",
        remediation_steps=[
            "Send both originalDecision and chosenPath",
        ],
    )

    GENERATION_003: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_003",
        message="Original decision, chosen path, and path description are required",
        remediation_steps=[
            "Send originalDecision, chosenPath and pathDescription",
        ],
    )

    GENERATION_004: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_004",
        message="Decision title and user responses are required",
        remediation_steps=[
            "Send decisionTitle and a list of userResponses",
        ],
    )

    GENERATION_005: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_005",
        message="Original decision and follow-up name are required",
        remediation_steps=[
            "Send both originalDecision and followUpName",
        ],
    )

    GENERATION_006: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_006",
        message="Original decision, chosen path, and broad category are required",
        remediation_steps=[
            "Send originalDecision, chosenPath and broadCategory",
        ],
    )

    GENERATION_007: ClassVar[ErrorCode] = ErrorCode(
        code="GENERATION_007",
        message="Text generation failed",
        remediation_steps=[
            "Check that OPENAI_API_KEY is configured",
            "Retry the request later",
        ],
        severity=ErrorSeverity.WARNING.value,
    )

    # System Errors (SYSTEM_*)
    SYSTEM_001: ClassVar[ErrorCode] = ErrorCode(
        code="SYSTEM_001",
        message="Internal server error",
        remediation_steps=[
            "Retry the request",
            "Check the server logs for details",
        ],
        severity=ErrorSeverity.CRITICAL.value,
    )

    SYSTEM_002: ClassVar[ErrorCode] = ErrorCode(
        code="SYSTEM_002",
        message="Invalid request body",
        remediation_steps=[
            "Check field names and types against the API contract",
        ],
    )
