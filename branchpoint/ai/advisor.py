"""Decision advisor: prompt building, generation and response shaping.

Every public method except ``generate_branches`` always returns a usable
result. Backend failures, unparseable output and missing fields degrade to
fixed fallback content, and are logged as warnings.
"""
import logging
from typing import Any, Dict, List, Optional

from branchpoint.ai import prompts
from branchpoint.ai.client import TextGenerator
from branchpoint.ai.json_extraction import extract_json_object
from branchpoint.core.config import settings
from branchpoint.decision.error_codes import ErrorCodeDictionary
from branchpoint.exceptions import GenerationError
from branchpoint.types import (
    ActionPlan,
    ClarificationCheck,
    ComparisonDiff,
    DecisionSummary,
    FollowUpDecisions,
    NamedOption,
    SimulationResult,
)

logger = logging.getLogger(__name__)


FALLBACK_SIMULATION_QUESTIONS = [
    "How did this choice affect my daily routine?",
    "What relationships were impacted?",
    "Did my financial situation change?",
    "How did my stress levels change?",
    "What new opportunities opened up?",
]

FALLBACK_CLARIFYING_QUESTIONS = [
    "What's the main reason you're considering this decision right now?",
    "What are the most important factors you're weighing?",
    "What would success look like for you in this situation?",
    "What concerns or fears do you have about this decision?",
    "How does this decision fit into your broader life goals?",
]

FOLLOW_UP_CATEGORIES: List[NamedOption] = [
    {
        "name": "Continue Current Path",
        "description": "Stay committed to your chosen direction and see where it leads",
    },
    {
        "name": "Pivot Strategy",
        "description": "Adjust your approach based on new information and experiences",
    },
    {
        "name": "Explore New Opportunities",
        "description": "Look for additional options that have emerged from your choice",
    },
]

SPECIFIC_FOLLOW_UPS: Dict[str, List[NamedOption]] = {
    "Continue Current Path": [
        {
            "name": "Double Down on Current Approach",
            "description": "Invest more time and energy into your current strategy to maximize results and build momentum",
        },
        {
            "name": "Seek Mentorship and Guidance",
            "description": "Find experienced mentors who can help you navigate your current path more effectively and avoid common pitfalls",
        },
        {
            "name": "Track Progress and Optimize",
            "description": "Implement systems to monitor your progress and make data-driven improvements to your approach",
        },
        {
            "name": "Build Support Systems",
            "description": "Create networks and systems that will help you succeed in your chosen direction",
        },
    ],
    "Pivot Strategy": [
        {
            "name": "Adjust Timeline and Expectations",
            "description": "Modify your timeline and expectations based on new information and experiences",
        },
        {
            "name": "Change Tactics While Keeping Goals",
            "description": "Maintain your core objectives but change the methods you use to achieve them",
        },
        {
            "name": "Seek Alternative Approaches",
            "description": "Explore different ways to reach the same destination with a fresh perspective",
        },
        {
            "name": "Test New Strategies",
            "description": "Experiment with small changes to see what works better for your situation",
        },
    ],
    "Explore New Opportunities": [
        {
            "name": "Research Emerging Options",
            "description": "Investigate new opportunities that have become available since your decision",
        },
        {
            "name": "Network and Build Connections",
            "description": "Expand your network to discover new possibilities and pathways you hadn't considered",
        },
        {
            "name": "Develop New Skills",
            "description": "Acquire new capabilities that open up additional opportunities and career paths",
        },
        {
            "name": "Explore Side Projects",
            "description": "Start small experiments or side projects to test new directions without major commitment",
        },
    ],
}

DEFAULT_SPECIFIC_FOLLOW_UPS: List[NamedOption] = [
    {
        "name": "Reflect and Reassess",
        "description": "Take time to think about your situation and consider your options carefully",
    },
    {
        "name": "Seek Additional Information",
        "description": "Gather more data and insights to make better-informed decisions",
    },
    {
        "name": "Consult with Others",
        "description": "Get advice and perspectives from trusted friends, family, or professionals",
    },
]

SUMMARY_OPENER = "Here's what I understand about your situation..."

MIN_FOLLOW_UPS = 3
MAX_FOLLOW_UPS = 4
MIN_CLARIFYING_QUESTIONS = 3
MAX_CLARIFYING_QUESTIONS = 5


# ============================================================================
# Field helpers
# ============================================================================

def _text(value: Any, default: str) -> str:
    """Non-empty string or the default."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _sized_list(items: List[str], padding: List[str], minimum: int, maximum: int) -> List[str]:
    """Trim to ``maximum`` and top up from ``padding`` until ``minimum`` is reached."""
    result = items[:maximum]
    for extra in padding:
        if len(result) >= minimum:
            break
        if extra not in result:
            result.append(extra)
    return result


def _float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _options(value: Any) -> List[NamedOption]:
    """Valid ``{name, description}`` items; entries without a name are skipped."""
    if not isinstance(value, list):
        return []
    options: List[NamedOption] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        name = _text(item.get("name"), "")
        if not name:
            continue
        options.append({"name": name, "description": _text(item.get("description"), "")})
    return options


class DecisionAdvisor:
    """
    Generates decision content through a text-generation backend.

    Args:
        text_generator: Backend producing free text for a prompt
        question_count: Number of questions in a simulation result
    """

    def __init__(self, text_generator: TextGenerator, question_count: Optional[int] = None):
        self.text_generator = text_generator
        self.question_count = question_count or settings.simulation_question_count

    async def _ask(self, operation: str, prompt: str, model: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Run one prompt and parse the JSON object out of the reply.

        Returns None (after logging) on any backend or parse failure.
        """
        try:
            text = await self.text_generator.generate(prompt, model=model)
        except Exception as e:
            logger.warning(f"{operation}: generation failed, using fallback ({e})")
            return None

        parsed = extract_json_object(text)
        if parsed is None:
            logger.warning(f"{operation}: no JSON object in response, using fallback")
        return parsed

    # ------------------------------------------------------------------
    # Simulation and comparison
    # ------------------------------------------------------------------

    def fallback_simulation(self, branch_name: str) -> SimulationResult:
        return {
            "questions": _sized_list(
                [], FALLBACK_SIMULATION_QUESTIONS, self.question_count, self.question_count
            ),
            "optimisticScenario": (
                f'In one year, after choosing "{branch_name}", I found that this path '
                f"provided the structure and opportunities I needed to grow."
            ),
            "challengingScenario": (
                f'In one year, after choosing "{branch_name}", I faced some unexpected '
                f"challenges that tested my commitment to this path."
            ),
            "summary": (
                "Major tradeoffs: Consider the long-term vs short-term benefits, personal "
                "growth vs stability, and financial impact vs fulfillment."
            ),
            "confidenceDeltaRecommendation": 0.5,
        }

    async def generate_simulation(
        self,
        decision_title: str,
        branch_name: str,
        branch_description: str,
        persona_style: str = "analytical",
        decision_description: Optional[str] = None,
    ) -> SimulationResult:
        """
        Imagine life one year after choosing a branch.

        Args:
            decision_title: Title of the parent decision
            branch_name: Name of the simulated branch
            branch_description: Description of the simulated branch
            persona_style: "analytical" or "empathetic"
            decision_description: Extra decision context, may be empty

        Returns:
            SimulationResult with exactly ``question_count`` questions
        """
        prompt = prompts.simulation_prompt(
            decision_title,
            branch_name,
            branch_description,
            persona_style,
            decision_description,
            self.question_count,
        )
        parsed = await self._ask("generate_simulation", prompt)
        if parsed is None:
            return self.fallback_simulation(branch_name)

        questions = _sized_list(
            _string_list(parsed.get("questions")),
            FALLBACK_SIMULATION_QUESTIONS,
            self.question_count,
            self.question_count,
        )
        return {
            "questions": questions,
            "optimisticScenario": _text(
                parsed.get("optimisticScenario", parsed.get("optimistic_scenario")), ""
            ),
            "challengingScenario": _text(
                parsed.get("challengingScenario", parsed.get("challenging_scenario")), ""
            ),
            "summary": _text(parsed.get("summary"), ""),
            "confidenceDeltaRecommendation": _float(
                parsed.get(
                    "confidenceDeltaRecommendation",
                    parsed.get("confidence_delta_recommendation"),
                ),
                0.0,
            ),
        }

    @staticmethod
    def fallback_comparison(first: str, second: str) -> ComparisonDiff:
        return {
            "tradeoffs": [
                f"{first} offers more structure and predictability, while {second} provides flexibility and spontaneity",
                f"Time investment: {first} requires more upfront planning, {second} allows for more organic growth",
                f"Risk tolerance: {first} is lower risk with steady progress, {second} has higher potential but more uncertainty",
            ],
            "mergeConflicts": [
                f"Conflicting time commitments between {first} and {second}",
                "Different approaches to decision-making that may create internal tension",
                "Resource allocation conflicts - both paths require significant investment",
            ],
            "recommendedMerge": (
                f"Based on the analysis, I recommend a hybrid approach that combines the structured "
                f"planning from {first} with the flexibility of {second}. Start with a clear framework "
                f"but remain open to opportunities that align with your core values."
            ),
            "confidenceImpact": (
                "This decision will likely increase your confidence in your chosen path. The structured "
                "analysis and future-self perspective provide clarity that reduces decision anxiety."
            ),
        }

    async def generate_comparison(
        self,
        decision_title: str,
        branches: List[Dict[str, Any]],
    ) -> ComparisonDiff:
        """
        Compare two simulated branches.

        Args:
            decision_title: Title of the decision
            branches: Two dicts with ``name``, ``description`` and ``simulation``
        """
        first = branches[0].get("name", "Option A") if branches else "Option A"
        second = branches[1].get("name", "Option B") if len(branches) > 1 else "Option B"

        parsed = await self._ask(
            "generate_comparison", prompts.comparison_prompt(decision_title, branches)
        )
        if parsed is None:
            return self.fallback_comparison(first, second)

        return {
            "tradeoffs": _string_list(parsed.get("tradeoffs")),
            "mergeConflicts": _string_list(parsed.get("mergeConflicts")),
            "recommendedMerge": _text(
                parsed.get("recommendedMerge"), "Consider both options carefully."
            ),
            "confidenceImpact": _text(
                parsed.get("confidenceImpact"), "This decision will impact your confidence."
            ),
        }

    # ------------------------------------------------------------------
    # Branch generation
    # ------------------------------------------------------------------

    async def generate_branches(self, title: str, description: Optional[str] = None) -> List[NamedOption]:
        """
        Generate exactly two branches for a decision.

        Unlike the other methods this one has no built-in fallback; callers
        choose their own.

        Raises:
            GenerationError: If the backend fails or does not return two branches
        """
        text = await self.text_generator.generate(
            prompts.branches_prompt(title, description),
            model=settings.openai_fast_model,
        )
        parsed = extract_json_object(text)
        branches = _options(parsed.get("branches")) if parsed else []
        if len(branches) != 2:
            raise GenerationError(
                ErrorCodeDictionary.GENERATION_007,
                context={"reason": "expected exactly 2 branches", "received": len(branches)},
                message="Invalid branch generation response",
            )
        return branches

    # ------------------------------------------------------------------
    # Follow-ups
    # ------------------------------------------------------------------

    async def generate_followup_decisions(
        self,
        original_decision: str,
        chosen_path: str,
        simulation_result: Any = None,
    ) -> FollowUpDecisions:
        """Storyline after a choice plus 3-4 follow-up decisions."""
        parsed = await self._ask(
            "generate_followup_decisions",
            prompts.followup_decisions_prompt(original_decision, chosen_path, simulation_result),
        )
        if parsed is None:
            return {
                "storyline": (
                    f'After choosing "{chosen_path}", your life takes an interesting turn. '
                    f"The decision brings both expected and unexpected changes, opening new doors "
                    f"while presenting fresh challenges. You find yourself at a crossroads, ready "
                    f"to make the next important choice in your journey."
                ),
                "followUpDecisions": [dict(option) for option in FOLLOW_UP_CATEGORIES],
            }

        options = _options(parsed.get("followUpDecisions"))
        if len(options) < MIN_FOLLOW_UPS:
            options = [dict(option) for option in FOLLOW_UP_CATEGORIES]
        return {
            "storyline": _text(parsed.get("storyline"), "Your journey continues..."),
            "followUpDecisions": options[:MAX_FOLLOW_UPS],
        }

    async def generate_followup_simulation(
        self,
        original_decision: str,
        follow_up_name: str,
        follow_up_description: Optional[str] = None,
    ) -> ActionPlan:
        """Action plan for pursuing one follow-up decision."""
        parsed = await self._ask(
            "generate_followup_simulation",
            prompts.followup_simulation_prompt(original_decision, follow_up_name, follow_up_description),
        )
        if parsed is None:
            return {
                "actionPlan": (
                    f'Here\'s a detailed plan for "{follow_up_name}": Start by breaking this down '
                    f"into smaller, manageable steps that you can take immediately."
                ),
                "potentialOutcomes": "By choosing this path, you'll likely see positive changes in your situation within the next 3-6 months.",
                "nextSteps": "Begin by taking one small action today that moves you in this direction.",
                "timeline": "You can expect to see initial results within 1-2 months, with more significant progress by 6 months.",
                "resources": "Consider what resources, skills, or support you'll need to succeed in this direction.",
            }

        return {
            "actionPlan": _text(parsed.get("actionPlan"), "Create a step-by-step plan to move forward with this direction."),
            "potentialOutcomes": _text(parsed.get("potentialOutcomes"), "This path will likely lead to positive changes in your situation."),
            "nextSteps": _text(parsed.get("nextSteps"), "Start by taking small, concrete actions that align with your goals."),
            "timeline": _text(parsed.get("timeline"), "You can expect to see progress within 1-3 months."),
            "resources": _text(parsed.get("resources"), "Consider what skills, support, or resources you might need."),
        }

    @staticmethod
    def fallback_specific_followups(broad_category: str) -> List[NamedOption]:
        options = SPECIFIC_FOLLOW_UPS.get(broad_category, DEFAULT_SPECIFIC_FOLLOW_UPS)
        return [dict(option) for option in options]

    async def generate_specific_followup_decisions(
        self,
        original_decision: str,
        chosen_path: str,
        broad_category: str,
        simulation_result: Any = None,
    ) -> List[NamedOption]:
        """3-4 concrete decisions inside a broad follow-up category."""
        parsed = await self._ask(
            "generate_specific_followup_decisions",
            prompts.specific_followup_prompt(
                original_decision, chosen_path, broad_category, simulation_result
            ),
        )
        options = _options(parsed.get("specificDecisions")) if parsed else []
        if len(options) < MIN_FOLLOW_UPS:
            if parsed is not None:
                logger.warning(
                    f"generate_specific_followup_decisions: {len(options)} usable items, using fallback"
                )
            return self.fallback_specific_followups(broad_category)
        return options[:MAX_FOLLOW_UPS]

    async def generate_path_forward(
        self,
        original_decision: str,
        chosen_path: str,
        path_description: str,
    ) -> ActionPlan:
        """Detailed plan for a chosen follow-up path."""
        parsed = await self._ask(
            "generate_path_forward",
            prompts.path_forward_prompt(original_decision, chosen_path, path_description),
        )
        if parsed is None:
            return {
                "actionPlan": f'Create a detailed plan for "{chosen_path}" by researching best practices and setting specific goals.',
                "potentialOutcomes": f'By pursuing "{chosen_path}", you\'ll likely see positive changes within 3-6 months.',
                "nextSteps": "1) Research and gather information 2) Set specific goals 3) Create a timeline 4) Take action 5) Monitor progress",
                "timeline": "Month 1-2: Planning and preparation. Month 3-4: Active implementation. Month 5-6: Evaluation and adjustment.",
                "resources": "Educational materials, mentors, professional networks, and relevant tools for your chosen path.",
            }

        return {
            "actionPlan": _text(parsed.get("actionPlan"), "Create a detailed plan for your chosen path."),
            "potentialOutcomes": _text(parsed.get("potentialOutcomes"), "You can expect positive changes within 3-6 months."),
            "nextSteps": _text(parsed.get("nextSteps"), "1) Research your options 2) Set specific goals 3) Take action 4) Monitor progress 5) Adjust as needed"),
            "timeline": _text(parsed.get("timeline"), "Month 1-2: Planning phase. Month 3-4: Implementation. Month 5-6: Evaluation."),
            "resources": _text(parsed.get("resources"), "Educational materials, mentors, professional networks, and relevant tools."),
        }

    # ------------------------------------------------------------------
    # Clarification
    # ------------------------------------------------------------------

    async def check_clarification_needed(self, title: str, description: Optional[str] = None) -> ClarificationCheck:
        """Whether the decision needs more context before simulating."""
        parsed = await self._ask(
            "check_clarification_needed", prompts.clarification_check_prompt(title, description)
        )
        if parsed is None:
            # Ask for clarification when the check itself is unavailable
            return {"needsClarification": True, "reason": "Unable to analyze decision context"}

        needs = parsed.get("needsClarification")
        return {
            "needsClarification": needs if isinstance(needs, bool) else False,
            "reason": _text(parsed.get("reason"), "Insufficient context for realistic simulation"),
        }

    async def generate_clarifying_questions(self, title: str, description: Optional[str] = None) -> List[str]:
        """3-5 questions that would make a simulation more realistic."""
        parsed = await self._ask(
            "generate_clarifying_questions", prompts.clarifying_questions_prompt(title, description)
        )
        questions = _string_list(parsed.get("questions")) if parsed else []
        if not questions:
            return list(FALLBACK_CLARIFYING_QUESTIONS)
        return _sized_list(
            questions,
            FALLBACK_CLARIFYING_QUESTIONS,
            MIN_CLARIFYING_QUESTIONS,
            MAX_CLARIFYING_QUESTIONS,
        )

    async def generate_decision_summary(
        self,
        title: str,
        original_description: Optional[str],
        user_responses: List[Dict[str, str]],
    ) -> DecisionSummary:
        """Fold question/answer pairs into an enhanced decision description."""
        original = original_description or ""
        parsed = await self._ask(
            "generate_decision_summary",
            prompts.decision_summary_prompt(title, original, user_responses),
        )
        if parsed is None:
            return {"summary": SUMMARY_OPENER, "enhancedDescription": original}

        return {
            "summary": _text(parsed.get("summary"), SUMMARY_OPENER),
            "enhancedDescription": _text(parsed.get("enhancedDescription"), original),
        }
