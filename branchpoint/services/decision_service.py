"""
Decision Service - business logic for decisions, branches and simulations.

Routes call these methods rather than touching the store or the advisor
directly. Every method takes the caller's user id; decisions are only
visible through their (decisionId, userId) key.
"""
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Set

from branchpoint.ai.advisor import DecisionAdvisor
from branchpoint.core.config import settings
from branchpoint.db.enums import DecisionState, MessageSender, PersonaStyle, Table
from branchpoint.decision.error_codes import ErrorCodeDictionary
from branchpoint.decision.event_logger import EventLogger
from branchpoint.decision.state_machine import DecisionStateMachine, display_state
from branchpoint.exceptions import NotFoundError, StateTransitionError, ValidationError
from branchpoint.storage.base import DocumentStore
from branchpoint.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)

TITLE_PREFIX = "life branch"


def normalize_title(title: Optional[str]) -> str:
    """
    Remove a leading "life branch" (any case) and surrounding whitespace.

    The prefix check runs on the raw title, so leading whitespace keeps
    the prefix in place.
    """
    if not title:
        return ""
    if title.lower().startswith(TITLE_PREFIX):
        title = title[len(TITLE_PREFIX):]
    return title.strip()


class DecisionService:
    """
    Service for decision lifecycle operations.

    Args:
        store: Document store holding every table
        advisor: Decision advisor used for simulations and comparisons
    """

    def __init__(self, store: DocumentStore, advisor: DecisionAdvisor):
        self.store = store
        self.advisor = advisor

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _get_owned_decision(self, user_id: str, decision_id: str) -> Dict[str, Any]:
        decision = None
        if decision_id:
            decision = await self.store.get(
                Table.DECISIONS.value, {"decisionId": decision_id, "userId": user_id}
            )
        if decision is None:
            raise NotFoundError(ErrorCodeDictionary.DECISION_002, entity_id=decision_id)
        return decision

    async def _get_branch(self, branch_id: str) -> Optional[Dict[str, Any]]:
        return await self.store.get(Table.BRANCHES.value, {"branchId": branch_id})

    async def _branches_of(self, decision_id: str) -> List[Dict[str, Any]]:
        return await self.store.query(Table.BRANCHES.value, decisionId=decision_id)

    async def _conversations_of(self, branch_id: str) -> List[Dict[str, Any]]:
        conversations = await self.store.query(Table.CONVERSATIONS.value, branchId=branch_id)
        return sorted(conversations, key=lambda c: c.get("createdAt") or "")

    # ------------------------------------------------------------------
    # Decisions and branches
    # ------------------------------------------------------------------

    def _resolve_pre_confidence(self, pre_confidence: Optional[int]) -> int:
        if not pre_confidence:
            return settings.default_pre_confidence
        if not settings.min_confidence <= pre_confidence <= settings.max_confidence:
            raise ValidationError(
                ErrorCodeDictionary.DECISION_003,
                context={"preConfidence": pre_confidence},
            )
        return pre_confidence

    async def create_decision(
        self,
        user_id: str,
        title: Optional[str],
        description: Optional[str] = None,
        pre_confidence: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Create a DRAFT decision.

        Args:
            user_id: Owner
            title: Decision title; a leading "life branch" is removed
            description: Optional context
            pre_confidence: 1-5, defaults to 3 when omitted

        Returns:
            The stored decision record

        Raises:
            ValidationError: If the title is empty or pre-confidence out of range
        """
        clean_title = normalize_title(title)
        if not clean_title:
            raise ValidationError(ErrorCodeDictionary.DECISION_001)

        now = utc_now_iso()
        decision = {
            "decisionId": new_id("decision"),
            "userId": user_id,
            "title": clean_title,
            "description": description or "",
            "preConfidence": self._resolve_pre_confidence(pre_confidence),
            "state": DecisionState.DRAFT.value,
            "isRootDecision": True,
            "createdAt": now,
            "updatedAt": now,
        }
        await self.store.put(Table.DECISIONS.value, decision)
        logger.info(f"Created decision {decision['decisionId']} for user {user_id}")
        return decision

    async def list_decisions(self, user_id: str) -> List[Dict[str, Any]]:
        """The caller's decisions, newest first."""
        decisions = await self.store.query(Table.DECISIONS.value, userId=user_id)
        return sorted(decisions, key=lambda d: d.get("createdAt") or "", reverse=True)

    async def get_decision(self, user_id: str, decision_id: str) -> Dict[str, Any]:
        """
        A decision with its branches and each branch's conversations.

        Raises:
            NotFoundError: If the decision is missing or owned by someone else
        """
        decision = await self._get_owned_decision(user_id, decision_id)
        branches = await self._branches_of(decision_id)

        decision["displayState"] = display_state(decision, len(branches))
        return {
            "decision": decision,
            "branches": [
                {**branch, "conversations": await self._conversations_of(branch["branchId"])}
                for branch in branches
            ],
        }

    async def create_branch(
        self,
        user_id: str,
        decision_id: str,
        name: Optional[str],
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Add a branch to a decision.

        Raises:
            NotFoundError: If the decision is missing or not owned by the caller
            ValidationError: If the name is empty
        """
        await self._get_owned_decision(user_id, decision_id)

        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError(ErrorCodeDictionary.BRANCH_001, entity_id=decision_id)

        branch = {
            "branchId": new_id("branch"),
            "decisionId": decision_id,
            "name": clean_name,
            "description": description or "",
            "createdAt": utc_now_iso(),
        }
        await self.store.put(Table.BRANCHES.value, branch)
        logger.info(f"Created branch {branch['branchId']} for decision {decision_id}")
        return branch

    # ------------------------------------------------------------------
    # Simulation and comparison
    # ------------------------------------------------------------------

    @staticmethod
    def _build_messages(
        decision: Dict[str, Any],
        branch: Dict[str, Any],
        output: Dict[str, Any],
        created_at: str,
    ) -> List[Dict[str, Any]]:
        texts = [
            (
                f'I\'m Future-You, one year from now. I chose the "{branch["name"]}" path '
                f'for "{decision["title"]}". Let me share what I learned...'
            ),
            f"Here are some questions that would have helped me make this choice: {', '.join(output['questions'])}",
            f"Optimistic scenario: {output['optimisticScenario']}",
            f"Challenging scenario: {output['challengingScenario']}",
            f"Summary: {output['summary']}",
        ]
        return [
            {
                "messageId": new_id("msg"),
                "sender": MessageSender.FUTURE_YOU.value,
                "text": text,
                "createdAt": created_at,
            }
            for text in texts
        ]

    async def simulate(
        self,
        user_id: str,
        branch_id: Optional[str],
        persona_style: PersonaStyle = PersonaStyle.ANALYTICAL,
    ) -> Dict[str, Any]:
        """
        Run a simulation for a branch and persist it as a conversation.

        The advisor never fails here; its fallback content is stored the
        same way as generated content.

        Raises:
            ValidationError: If no branch id is given
            NotFoundError: If the branch or its decision is missing
        """
        if not branch_id:
            raise ValidationError(ErrorCodeDictionary.SIMULATION_001)

        branch = await self._get_branch(branch_id)
        if branch is None:
            raise NotFoundError(ErrorCodeDictionary.BRANCH_002, entity_id=branch_id)
        decision = await self._get_owned_decision(user_id, branch["decisionId"])

        style = PersonaStyle(persona_style).value
        result = await self.advisor.generate_simulation(
            decision["title"],
            branch["name"],
            branch.get("description", ""),
            style,
            decision.get("description", ""),
        )
        simulation_output = {
            "questions": result["questions"],
            "optimisticScenario": result["optimisticScenario"],
            "challengingScenario": result["challengingScenario"],
            "summary": result["summary"],
            "personaStyle": style,
            "confidenceDeltaRecommendation": result["confidenceDeltaRecommendation"],
        }

        now = utc_now_iso()
        conversation = {
            "conversationId": new_id("conv"),
            "branchId": branch_id,
            "messages": self._build_messages(decision, branch, simulation_output, now),
            "simulationOutput": simulation_output,
            "createdAt": now,
            "updatedAt": now,
        }
        await self.store.put(Table.CONVERSATIONS.value, conversation)
        await self.store.update(Table.BRANCHES.value, {"branchId": branch_id}, {"lastSimulatedAt": now})
        logger.info(f"Simulated branch {branch_id} as conversation {conversation['conversationId']}")

        return {
            "conversationId": conversation["conversationId"],
            "simulationOutput": simulation_output,
            "messages": conversation["messages"],
        }

    async def compare(self, user_id: str, decision_id: str) -> Dict[str, Any]:
        """
        Compare the first two simulated branches of a decision.

        Raises:
            NotFoundError: If the decision is missing or not owned by the caller
            ValidationError: If fewer than two branches have been simulated
        """
        decision = await self._get_owned_decision(user_id, decision_id)
        simulated = [b for b in await self._branches_of(decision_id) if b.get("lastSimulatedAt")]
        if len(simulated) < 2:
            raise ValidationError(
                ErrorCodeDictionary.COMPARISON_001,
                entity_id=decision_id,
                context={"simulatedBranches": len(simulated)},
            )

        compared = simulated[:2]
        inputs = []
        for branch in compared:
            conversations = await self._conversations_of(branch["branchId"])
            latest = conversations[-1].get("simulationOutput") if conversations else None
            inputs.append({
                "name": branch["name"],
                "description": branch.get("description", ""),
                "simulation": latest,
            })

        generated_diff = await self.advisor.generate_comparison(decision["title"], inputs)
        comparison = {
            "comparisonId": new_id("comp"),
            "decisionId": decision_id,
            "branchesCompared": [branch["branchId"] for branch in compared],
            "generatedDiff": generated_diff,
            "createdAt": utc_now_iso(),
        }
        await self.store.put(Table.COMPARISONS.value, comparison)

        return {
            "comparisonId": comparison["comparisonId"],
            "generatedDiff": generated_diff,
            "branches": compared,
        }

    # ------------------------------------------------------------------
    # Commit and resolve
    # ------------------------------------------------------------------

    async def _validate_finalize(
        self,
        user_id: str,
        decision_id: str,
        final_branch_id: Optional[str],
        post_confidence: Optional[int],
        target_state: DecisionState,
    ):
        """Shared checks for commit and resolve. Returns (decision, branch, state machine)."""
        decision = await self._get_owned_decision(user_id, decision_id)

        if not final_branch_id:
            raise ValidationError(ErrorCodeDictionary.BRANCH_004, entity_id=decision_id)

        if (
            post_confidence is None
            or not settings.min_confidence <= post_confidence <= settings.max_confidence
        ):
            raise ValidationError(
                ErrorCodeDictionary.CONFIDENCE_001,
                entity_id=decision_id,
                context={"postConfidence": post_confidence},
            )

        branch = await self._get_branch(final_branch_id)
        if branch is None or branch.get("decisionId") != decision_id:
            raise NotFoundError(ErrorCodeDictionary.BRANCH_003, entity_id=final_branch_id)

        machine = DecisionStateMachine(decision)
        allowed, error = machine.can_transition_to(target_state)
        if not allowed:
            raise StateTransitionError(
                error,
                entity_id=decision_id,
                context={"currentState": machine.current_state.value, "targetState": target_state.value},
            )
        return decision, branch, machine

    @staticmethod
    def _metric_payload(
        event: str,
        decision: Dict[str, Any],
        branch: Dict[str, Any],
        post_confidence: int,
    ) -> Dict[str, Any]:
        pre_confidence = decision.get("preConfidence", settings.default_pre_confidence)
        return {
            "event": event,
            "decisionId": decision["decisionId"],
            "finalBranchId": branch["branchId"],
            "preConfidence": pre_confidence,
            "postConfidence": post_confidence,
            "confidenceDelta": post_confidence - pre_confidence,
            "decisionTitle": decision["title"],
            "finalBranchName": branch["name"],
        }

    async def commit(
        self,
        user_id: str,
        decision_id: str,
        final_branch_id: Optional[str],
        post_confidence: Optional[int],
    ) -> Dict[str, Any]:
        """
        Finalize a decision on one branch.

        Raises:
            NotFoundError: If the decision or final branch is missing
            ValidationError: If the branch id is missing or confidence out of range
            StateTransitionError: If the decision is already finalized
        """
        decision, branch, machine = await self._validate_finalize(
            user_id, decision_id, final_branch_id, post_confidence, DecisionState.COMMITTED
        )
        machine.transition_to(DecisionState.COMMITTED, reason="commit")

        await self.store.update(
            Table.DECISIONS.value,
            {"decisionId": decision_id, "userId": user_id},
            {
                "state": DecisionState.COMMITTED.value,
                "postConfidence": post_confidence,
                "updatedAt": utc_now_iso(),
            },
        )

        payload = self._metric_payload("commit", decision, branch, post_confidence)
        await EventLogger.log_metric(self.store, user_id, payload)
        await EventLogger.log_state_transition(
            self.store, user_id, decision_id, machine.get_last_transition()
        )
        logger.info(f"Decision {decision_id} committed to branch {final_branch_id}")

        return {
            "status": "committed",
            "decisionId": decision_id,
            "finalBranchId": final_branch_id,
            "preConfidence": payload["preConfidence"],
            "postConfidence": post_confidence,
            "confidenceDelta": payload["confidenceDelta"],
        }

    async def resolve(
        self,
        user_id: str,
        decision_id: str,
        final_branch_id: Optional[str],
        post_confidence: Optional[int],
        create_sub_decision: bool = False,
        sub_decision_title: Optional[str] = None,
        sub_decision_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Finalize a decision and optionally open a follow-up sub-decision.

        A sub-decision is created only when ``create_sub_decision`` is set and
        the title is non-empty after trimming.

        Raises:
            NotFoundError: If the decision or final branch is missing
            ValidationError: If the branch id is missing or confidence out of range
            StateTransitionError: If the decision is already finalized
        """
        decision, branch, machine = await self._validate_finalize(
            user_id, decision_id, final_branch_id, post_confidence, DecisionState.RESOLVED
        )
        machine.transition_to(DecisionState.RESOLVED, reason="resolve")

        now = utc_now_iso()
        await self.store.update(
            Table.DECISIONS.value,
            {"decisionId": decision_id, "userId": user_id},
            {
                "state": DecisionState.RESOLVED.value,
                "postConfidence": post_confidence,
                "resolvedAt": now,
                "updatedAt": now,
            },
        )

        sub_decision = None
        clean_title = (sub_decision_title or "").strip()
        if create_sub_decision and clean_title:
            sub_decision = {
                "decisionId": new_id("decision"),
                "userId": user_id,
                "title": clean_title,
                "description": sub_decision_description or "",
                "preConfidence": settings.default_pre_confidence,
                "state": DecisionState.DRAFT.value,
                "parentDecisionId": decision_id,
                "parentBranchId": final_branch_id,
                "isRootDecision": False,
                "createdAt": now,
                "updatedAt": now,
            }
            await self.store.put(Table.DECISIONS.value, sub_decision)
            logger.info(f"Created sub-decision {sub_decision['decisionId']} under {decision_id}")

        payload = self._metric_payload("resolve", decision, branch, post_confidence)
        payload["subDecisionCreated"] = sub_decision is not None
        await EventLogger.log_metric(self.store, user_id, payload)
        await EventLogger.log_state_transition(
            self.store, user_id, decision_id, machine.get_last_transition()
        )
        logger.info(f"Decision {decision_id} resolved with branch {final_branch_id}")

        return {
            "status": "resolved",
            "decisionId": decision_id,
            "finalBranchId": final_branch_id,
            "preConfidence": payload["preConfidence"],
            "postConfidence": post_confidence,
            "confidenceDelta": payload["confidenceDelta"],
            "subDecision": {
                "decisionId": sub_decision["decisionId"],
                "title": sub_decision["title"],
                "createdAt": sub_decision["createdAt"],
            } if sub_decision else None,
        }

    # ------------------------------------------------------------------
    # Tree and groups
    # ------------------------------------------------------------------

    async def build_tree(self, user_id: str) -> Dict[str, Any]:
        """
        The caller's decisions as a forest linked by ``parentDecisionId``.

        A decision whose parent is not among the caller's decisions is a
        root. ``maxDepth`` is the longest parent chain plus one, or 0 when
        there are no decisions.
        """
        decisions = await self.store.query(Table.DECISIONS.value, userId=user_id)
        by_id = {d["decisionId"]: d for d in decisions}

        children: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        roots: List[Dict[str, Any]] = []
        for decision in decisions:
            parent_id = decision.get("parentDecisionId")
            if parent_id and parent_id in by_id and parent_id != decision["decisionId"]:
                children[parent_id].append(decision)
            else:
                roots.append(decision)

        branches_by_decision = {
            decision_id: await self._branches_of(decision_id) for decision_id in by_id
        }
        visited: Set[str] = set()

        def build_node(decision: Dict[str, Any], level: int) -> Dict[str, Any]:
            visited.add(decision["decisionId"])
            return {
                "decision": decision,
                "branches": branches_by_decision.get(decision["decisionId"], []),
                "children": [
                    build_node(child, level + 1)
                    for child in children.get(decision["decisionId"], [])
                    if child["decisionId"] not in visited
                ],
                "level": level,
            }

        nodes = [build_node(root, 0) for root in roots]
        # Parent cycles leave decisions unreachable from any root
        for decision in decisions:
            if decision["decisionId"] not in visited:
                nodes.append(build_node(decision, 0))

        return {
            "rootDecision": nodes[0]["decision"] if nodes else None,
            "nodes": nodes,
            "maxDepth": self._max_depth(decisions, by_id),
            "totalDecisions": len(decisions),
        }

    @staticmethod
    def _max_depth(decisions: List[Dict[str, Any]], by_id: Dict[str, Dict[str, Any]]) -> int:
        if not decisions:
            return 0
        deepest = 0
        for decision in decisions:
            depth = 0
            seen = {decision["decisionId"]}
            parent_id = decision.get("parentDecisionId")
            while parent_id and parent_id in by_id and parent_id not in seen:
                depth += 1
                seen.add(parent_id)
                parent_id = by_id[parent_id].get("parentDecisionId")
            deepest = max(deepest, depth)
        return deepest + 1

    async def group_decisions(
        self,
        user_id: str,
        decision_ids: Optional[List[str]],
        group_name: Optional[str],
        group_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Group two or more of the caller's decisions under a name.

        Duplicate ids are collapsed, keeping first occurrence order.

        Raises:
            ValidationError: If fewer than two distinct ids, no name, or a foreign id
        """
        unique_ids = list(dict.fromkeys(i for i in (decision_ids or []) if i))
        if len(unique_ids) < 2:
            raise ValidationError(ErrorCodeDictionary.GROUP_001)

        name = (group_name or "").strip()
        if not name:
            raise ValidationError(ErrorCodeDictionary.GROUP_002)

        missing = [
            decision_id
            for decision_id in unique_ids
            if await self.store.get(
                Table.DECISIONS.value, {"decisionId": decision_id, "userId": user_id}
            ) is None
        ]
        if missing:
            raise ValidationError(ErrorCodeDictionary.GROUP_003, context={"decisionIds": missing})

        group = {
            "groupId": new_id("group"),
            "userId": user_id,
            "name": name,
            "description": group_description or "",
            "decisionIds": unique_ids,
            "createdAt": utc_now_iso(),
        }
        await self.store.put(Table.DECISION_GROUPS.value, group)
        logger.info(f"Created group {group['groupId']} with {len(unique_ids)} decisions")
        return group

    async def list_groups(self, user_id: str) -> List[Dict[str, Any]]:
        """The caller's groups, each with its resolved decision records."""
        groups = await self.store.query(Table.DECISION_GROUPS.value, userId=user_id)
        result = []
        for group in groups:
            decisions = []
            for decision_id in group.get("decisionIds", []):
                decision = await self.store.get(
                    Table.DECISIONS.value, {"decisionId": decision_id, "userId": user_id}
                )
                if decision is not None:
                    decisions.append(decision)
            result.append({**group, "decisions": decisions})
        return result
