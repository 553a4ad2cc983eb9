"""
Generation Service - stateless AI helpers that do not touch the store.

Validates required inputs, then delegates to the decision advisor. Branch
generation is the one call whose failure is handled here, by the
rule-based suggestions in ``branchpoint.ai.fallback_branches``.
"""
import logging
from typing import Any, Dict, List, Optional

from branchpoint.ai.advisor import DecisionAdvisor
from branchpoint.ai.fallback_branches import matching_rule, suggest_branches
from branchpoint.decision.error_codes import ErrorCode, ErrorCodeDictionary
from branchpoint.exceptions import GenerationError, ValidationError
from branchpoint.utils import new_id

logger = logging.getLogger(__name__)


def _require(error_code: ErrorCode, **values: Any) -> None:
    """Raise ValidationError naming every blank value."""
    missing = [
        name
        for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(error_code, context={"missing": missing})


class GenerationService:
    """Service for branch, follow-up and clarification generation."""

    def __init__(self, advisor: DecisionAdvisor):
        self.advisor = advisor

    async def generate_branches(
        self,
        decision_title: Optional[str],
        decision_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Two candidate branches for a decision.

        Returns:
            {"branches": [{branchId, name, description}, ...], "source": "ai" | "fallback"}

        Raises:
            ValidationError: If the title is missing
        """
        _require(ErrorCodeDictionary.GENERATION_001, decisionTitle=decision_title)

        try:
            branches = await self.advisor.generate_branches(decision_title, decision_description)
            source = "ai"
        except GenerationError as e:
            logger.warning(
                f"Branch generation failed, using '{matching_rule(decision_title, decision_description)}' rule: {e}"
            )
            branches = suggest_branches(decision_title, decision_description)
            source = "fallback"

        return {
            "branches": [{"branchId": new_id(source), **branch} for branch in branches],
            "source": source,
        }

    async def generate_followup_decisions(
        self,
        original_decision: Optional[str],
        chosen_path: Optional[str],
        simulation_result: Any = None,
    ) -> Dict[str, Any]:
        _require(
            ErrorCodeDictionary.GENERATION_002,
            originalDecision=original_decision,
            chosenPath=chosen_path,
        )
        return dict(
            await self.advisor.generate_followup_decisions(
                original_decision, chosen_path, simulation_result
            )
        )

    async def generate_followup_simulation(
        self,
        original_decision: Optional[str],
        follow_up_name: Optional[str],
        follow_up_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        _require(
            ErrorCodeDictionary.GENERATION_005,
            originalDecision=original_decision,
            followUpName=follow_up_name,
        )
        simulation = await self.advisor.generate_followup_simulation(
            original_decision, follow_up_name, follow_up_description
        )
        return {"simulation": dict(simulation)}

    async def generate_specific_followup_decisions(
        self,
        original_decision: Optional[str],
        chosen_path: Optional[str],
        broad_category: Optional[str],
        simulation_result: Any = None,
    ) -> Dict[str, Any]:
        _require(
            ErrorCodeDictionary.GENERATION_006,
            originalDecision=original_decision,
            chosenPath=chosen_path,
            broadCategory=broad_category,
        )
        decisions = await self.advisor.generate_specific_followup_decisions(
            original_decision, chosen_path, broad_category, simulation_result
        )
        return {"specificDecisions": decisions}

    async def generate_path_forward(
        self,
        original_decision: Optional[str],
        chosen_path: Optional[str],
        path_description: Optional[str],
    ) -> Dict[str, Any]:
        _require(
            ErrorCodeDictionary.GENERATION_003,
            originalDecision=original_decision,
            chosenPath=chosen_path,
            pathDescription=path_description,
        )
        plan = await self.advisor.generate_path_forward(
            original_decision, chosen_path, path_description
        )
        return {"pathForward": dict(plan)}

    async def check_clarification_needed(
        self,
        decision_title: Optional[str],
        decision_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        _require(ErrorCodeDictionary.GENERATION_001, decisionTitle=decision_title)
        return dict(
            await self.advisor.check_clarification_needed(decision_title, decision_description)
        )

    async def generate_clarifying_questions(
        self,
        decision_title: Optional[str],
        decision_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        _require(ErrorCodeDictionary.GENERATION_001, decisionTitle=decision_title)
        questions = await self.advisor.generate_clarifying_questions(
            decision_title, decision_description
        )
        return {"questions": questions}

    async def generate_decision_summary(
        self,
        decision_title: Optional[str],
        original_description: Optional[str],
        user_responses: Optional[List[Dict[str, str]]],
    ) -> Dict[str, Any]:
        """
        Fold clarifying answers into an enhanced description.

        Raises:
            ValidationError: If the title is missing or no response list is given
        """
        _require(
            ErrorCodeDictionary.GENERATION_004,
            decisionTitle=decision_title,
            userResponses=user_responses,
        )
        return dict(
            await self.advisor.generate_decision_summary(
                decision_title, original_description, user_responses
            )
        )
