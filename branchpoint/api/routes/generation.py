"""Stateless generation routes: branches, follow-ups and clarification"""
from fastapi import APIRouter, Depends

from branchpoint.api.dependencies import get_generation_service
from branchpoint.schemas.generation import (
    ClarificationRequest,
    DecisionSummaryRequest,
    FollowUpDecisionsRequest,
    FollowUpSimulationRequest,
    GenerateBranchesRequest,
    PathForwardRequest,
    SpecificFollowUpRequest,
)
from branchpoint.services.generation_service import GenerationService

router = APIRouter(tags=["generation"])


@router.post("/generate-branches")
async def generate_branches(
    body: GenerateBranchesRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """
    Generate exactly two branches for a decision.

    Falls back to rule-based suggestions when generation fails; ``source``
    tells which one answered.
    """
    return await service.generate_branches(body.decision_title, body.decision_description)


@router.post("/generate-followup-decisions")
async def generate_followup_decisions(
    body: FollowUpDecisionsRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Storyline after a choice plus 3-4 follow-up decisions."""
    return await service.generate_followup_decisions(
        body.original_decision, body.chosen_path, body.simulation_result
    )


@router.post("/generate-followup-simulation")
async def generate_followup_simulation(
    body: FollowUpSimulationRequest,
    service: GenerationService = Depends(get_generation_service),
):
    return await service.generate_followup_simulation(
        body.original_decision, body.follow_up_name, body.follow_up_description
    )


@router.post("/generate-specific-followup-decisions")
async def generate_specific_followup_decisions(
    body: SpecificFollowUpRequest,
    service: GenerationService = Depends(get_generation_service),
):
    return await service.generate_specific_followup_decisions(
        body.original_decision,
        body.chosen_path,
        body.broad_category,
        body.simulation_result,
    )


@router.post("/generate-path-forward")
async def generate_path_forward(
    body: PathForwardRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Action plan for a chosen follow-up path."""
    return await service.generate_path_forward(
        body.original_decision, body.chosen_path, body.path_description
    )


@router.post("/check-clarification-needed")
async def check_clarification_needed(
    body: ClarificationRequest,
    service: GenerationService = Depends(get_generation_service),
):
    return await service.check_clarification_needed(
        body.decision_title, body.decision_description
    )


@router.post("/generate-clarifying-questions")
async def generate_clarifying_questions(
    body: ClarificationRequest,
    service: GenerationService = Depends(get_generation_service),
):
    return await service.generate_clarifying_questions(
        body.decision_title, body.decision_description
    )


@router.post("/generate-decision-summary")
async def generate_decision_summary(
    body: DecisionSummaryRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Fold clarifying answers into an enhanced decision description."""
    responses = (
        [response.model_dump() for response in body.user_responses]
        if body.user_responses is not None
        else None
    )
    return await service.generate_decision_summary(
        body.decision_title, body.original_description, responses
    )
