"""Pydantic schemas for API requests and responses"""
from branchpoint.schemas.decisions import (
    BranchCreate,
    BranchCreateResponse,
    CommitRequest,
    DecisionCreate,
    DecisionCreateResponse,
    FinalizeResponse,
    GroupCreate,
    GroupCreateResponse,
    ResolveRequest,
    ResolveResponse,
    SimulateRequest,
    SimulateResponse,
)
from branchpoint.schemas.generation import (
    ClarificationRequest,
    DecisionSummaryRequest,
    FollowUpDecisionsRequest,
    FollowUpSimulationRequest,
    GenerateBranchesRequest,
    PathForwardRequest,
    SpecificFollowUpRequest,
)

__all__ = [
    "BranchCreate",
    "BranchCreateResponse",
    "CommitRequest",
    "DecisionCreate",
    "DecisionCreateResponse",
    "FinalizeResponse",
    "GroupCreate",
    "GroupCreateResponse",
    "ResolveRequest",
    "ResolveResponse",
    "SimulateRequest",
    "SimulateResponse",
    "ClarificationRequest",
    "DecisionSummaryRequest",
    "FollowUpDecisionsRequest",
    "FollowUpSimulationRequest",
    "GenerateBranchesRequest",
    "PathForwardRequest",
    "SpecificFollowUpRequest",
]
