"""Decision, branch, comparison and lifecycle routes"""
from fastapi import APIRouter, Depends, status

from branchpoint.api.dependencies import get_decision_service
from branchpoint.core.identity import get_current_user_id
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
)
from branchpoint.services.decision_service import DecisionService

router = APIRouter(prefix="/decisions", tags=["decisions"])


@router.post("", response_model=DecisionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_decision(
    body: DecisionCreate,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """
    Create a decision in DRAFT state.

    Raises:
        ValidationError: 400 if the title is empty or pre-confidence out of range
    """
    return await service.create_decision(
        user_id, body.title, body.description, body.pre_confidence
    )


@router.get("")
async def list_decisions(
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """List the caller's decisions, newest first."""
    decisions = await service.list_decisions(user_id)
    return {"decisions": decisions, "count": len(decisions)}


# Static paths must be registered before /{decision_id}
@router.get("/tree")
async def get_decision_tree(
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """The caller's decision forest with depth metrics."""
    return await service.build_tree(user_id)


@router.post("/group", response_model=GroupCreateResponse, status_code=status.HTTP_201_CREATED)
async def group_decisions(
    body: GroupCreate,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """
    Group two or more of the caller's decisions.

    Raises:
        ValidationError: 400 for fewer than 2 decisions, no name, or foreign decisions
    """
    return await service.group_decisions(
        user_id, body.decision_ids, body.group_name, body.group_description
    )


@router.get("/groups")
async def list_groups(
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """The caller's groups with their decisions."""
    groups = await service.list_groups(user_id)
    return {"groups": groups, "count": len(groups)}


@router.get("/{decision_id}")
async def get_decision(
    decision_id: str,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """
    Get a decision with its branches and their conversations.

    Raises:
        NotFoundError: 404 if the decision is missing or not owned by the caller
    """
    return await service.get_decision(user_id, decision_id)


@router.post(
    "/{decision_id}/branches",
    response_model=BranchCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_branch(
    decision_id: str,
    body: BranchCreate,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """Add a branch to a decision."""
    return await service.create_branch(user_id, decision_id, body.name, body.description)


@router.get("/{decision_id}/comparison")
async def compare_branches(
    decision_id: str,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """
    Compare the first two simulated branches.

    Raises:
        NotFoundError: 404 if the decision is missing
        ValidationError: 400 if fewer than 2 branches were simulated
    """
    return await service.compare(user_id, decision_id)


@router.post("/{decision_id}/commit", response_model=FinalizeResponse)
async def commit_decision(
    decision_id: str,
    body: CommitRequest,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """Finalize a decision on one of its branches."""
    return await service.commit(
        user_id, decision_id, body.final_branch_id, body.post_confidence
    )


@router.post("/{decision_id}/resolve", response_model=ResolveResponse)
async def resolve_decision(
    decision_id: str,
    body: ResolveRequest,
    user_id: str = Depends(get_current_user_id),
    service: DecisionService = Depends(get_decision_service),
):
    """Finalize a decision and optionally open a sub-decision."""
    return await service.resolve(
        user_id,
        decision_id,
        body.final_branch_id,
        body.post_confidence,
        create_sub_decision=body.create_sub_decision,
        sub_decision_title=body.sub_decision_title,
        sub_decision_description=body.sub_decision_description,
    )
