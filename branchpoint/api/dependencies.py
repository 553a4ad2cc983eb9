"""FastAPI dependency injection for BranchPoint services"""
from fastapi import Depends, Request

from branchpoint.ai.advisor import DecisionAdvisor
from branchpoint.ai.client import TextGenerator
from branchpoint.services.decision_service import DecisionService
from branchpoint.services.generation_service import GenerationService
from branchpoint.storage.base import DocumentStore


# Shared backends, created once in the application lifespan
def get_store(request: Request) -> DocumentStore:
    """Get the application's document store"""
    return request.app.state.store


def get_text_generator(request: Request) -> TextGenerator:
    """Get the application's text-generation backend"""
    return request.app.state.text_generator


# Services
def get_advisor(text_generator: TextGenerator = Depends(get_text_generator)) -> DecisionAdvisor:
    """Get decision advisor instance"""
    return DecisionAdvisor(text_generator)


def get_decision_service(
    store: DocumentStore = Depends(get_store),
    advisor: DecisionAdvisor = Depends(get_advisor),
) -> DecisionService:
    """Get decision service instance"""
    return DecisionService(store, advisor)


def get_generation_service(advisor: DecisionAdvisor = Depends(get_advisor)) -> GenerationService:
    """Get generation service instance"""
    return GenerationService(advisor)
