"""Type definitions for BranchPoint - TypedDict classes for adapter results"""
from typing import List, TypedDict


# ============================================================================
# Simulation Types
# ============================================================================

class SimulationResult(TypedDict):
    """Simulation content produced for one branch"""
    questions: List[str]
    optimisticScenario: str
    challengingScenario: str
    summary: str
    confidenceDeltaRecommendation: float


class ComparisonDiff(TypedDict):
    """Tradeoff analysis between two simulated branches"""
    tradeoffs: List[str]
    mergeConflicts: List[str]
    recommendedMerge: str
    confidenceImpact: str


# ============================================================================
# Generation Types
# ============================================================================

class NamedOption(TypedDict):
    """A named choice: a generated branch or a follow-up decision"""
    name: str
    description: str


class FollowUpDecisions(TypedDict):
    storyline: str
    followUpDecisions: List[NamedOption]


class ActionPlan(TypedDict):
    """Plan returned by follow-up simulation and path-forward generation"""
    actionPlan: str
    potentialOutcomes: str
    nextSteps: str
    timeline: str
    resources: str


class ClarificationCheck(TypedDict):
    needsClarification: bool
    reason: str


class DecisionSummary(TypedDict):
    summary: str
    enhancedDescription: str
