"""Business logic services"""
from branchpoint.services.decision_service import DecisionService
from branchpoint.services.generation_service import GenerationService

__all__ = ["DecisionService", "GenerationService"]
