"""Pydantic schemas for stateless generation requests"""
from typing import Any, List, Optional

from branchpoint.schemas.base import CamelModel


class GenerateBranchesRequest(CamelModel):
    decision_title: Optional[str] = None
    decision_description: Optional[str] = None


class FollowUpDecisionsRequest(CamelModel):
    original_decision: Optional[str] = None
    chosen_path: Optional[str] = None
    simulation_result: Optional[Any] = None


class FollowUpSimulationRequest(CamelModel):
    original_decision: Optional[str] = None
    follow_up_name: Optional[str] = None
    follow_up_description: Optional[str] = None


class SpecificFollowUpRequest(CamelModel):
    original_decision: Optional[str] = None
    chosen_path: Optional[str] = None
    broad_category: Optional[str] = None
    simulation_result: Optional[Any] = None


class PathForwardRequest(CamelModel):
    original_decision: Optional[str] = None
    chosen_path: Optional[str] = None
    path_description: Optional[str] = None


class ClarificationRequest(CamelModel):
    """Used by both the clarification check and clarifying questions"""
    decision_title: Optional[str] = None
    decision_description: Optional[str] = None


class UserResponse(CamelModel):
    """One answered clarifying question"""
    question: str = ""
    answer: str = ""


class DecisionSummaryRequest(CamelModel):
    decision_title: Optional[str] = None
    original_description: Optional[str] = None
    user_responses: Optional[List[UserResponse]] = None
