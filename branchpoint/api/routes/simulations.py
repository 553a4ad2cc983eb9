"""Branch simulation routes"""
from fastapi import APIRouter, Depends

from branchpoint.api.dependencies import get_decision_service
from branchpoint.core.identity import get_current_user_id
from branchpoint.schemas.decisions import SimulateRequest, SimulateResponse
from branchpoint.services.decision_service import DecisionService

router = APIRouter(tags=["simulations"])


@router.post("/simulate", response_model=SimulateResponse)
async def simulate_branch(
    body: SimulateRequest,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """
    Simulate life one year after choosing a branch.

    Always returns a simulation; generation failures yield fallback content.

    Raises:
        ValidationError: 400 if branchId is missing
        NotFoundError: 404 if the branch or its decision is missing
    """
    return await service.simulate(user_id, body.branch_id, body.persona_style)
