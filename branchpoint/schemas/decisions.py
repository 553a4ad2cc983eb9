"""Pydantic schemas for decision, branch and simulation requests and responses"""
from typing import Any, Dict, List, Optional

from pydantic import Field, StrictInt

from branchpoint.db.enums import PersonaStyle
from branchpoint.schemas.base import CamelModel


class DecisionCreate(CamelModel):
    """Request model for creating a decision"""
    title: Optional[str] = None
    description: Optional[str] = None
    pre_confidence: Optional[StrictInt] = Field(None, description="1-5, defaults to 3")


class DecisionCreateResponse(CamelModel):
    decision_id: str
    title: str
    state: str
    pre_confidence: int
    created_at: str


class BranchCreate(CamelModel):
    """Request model for adding a branch to a decision"""
    name: Optional[str] = None
    description: Optional[str] = None


class BranchCreateResponse(CamelModel):
    branch_id: str
    decision_id: str
    created_at: str


class SimulateRequest(CamelModel):
    """Request model for simulating a branch"""
    branch_id: Optional[str] = None
    persona_style: PersonaStyle = PersonaStyle.ANALYTICAL


class SimulateResponse(CamelModel):
    conversation_id: str
    simulation_output: Dict[str, Any]
    messages: List[Dict[str, Any]]


class CommitRequest(CamelModel):
    """Request model for committing a decision"""
    final_branch_id: Optional[str] = None
    post_confidence: Optional[StrictInt] = None


class ResolveRequest(CommitRequest):
    """Request model for resolving a decision, optionally opening a sub-decision"""
    create_sub_decision: bool = False
    sub_decision_title: Optional[str] = None
    sub_decision_description: Optional[str] = None


class FinalizeResponse(CamelModel):
    """Response model for commit and resolve"""
    status: str
    decision_id: str
    final_branch_id: str
    pre_confidence: int
    post_confidence: int
    confidence_delta: int


class SubDecisionSummary(CamelModel):
    decision_id: str
    title: str
    created_at: str


class ResolveResponse(FinalizeResponse):
    sub_decision: Optional[SubDecisionSummary] = None


class GroupCreate(CamelModel):
    """Request model for grouping decisions"""
    decision_ids: Optional[List[str]] = None
    group_name: Optional[str] = None
    group_description: Optional[str] = None


class GroupCreateResponse(CamelModel):
    group_id: str
    name: str
    description: str
    decision_ids: List[str]
    created_at: str
