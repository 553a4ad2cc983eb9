"""Pytest configuration and shared fixtures"""
import json
from typing import Any, Callable, List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from branchpoint.ai.advisor import DecisionAdvisor
from branchpoint.ai.client import TextGenerator
from branchpoint.decision.error_codes import ErrorCodeDictionary
from branchpoint.exceptions import GenerationError
from branchpoint.services.decision_service import DecisionService
from branchpoint.services.generation_service import GenerationService
from branchpoint.storage.memory import InMemoryDocumentStore

Reply = Union[str, dict, Exception]


class FakeTextGenerator(TextGenerator):
    """
    Scripted text generator.

    Replies are consumed in order; dicts are sent as JSON text and
    exceptions are raised. With no replies left every call fails the way
    an unconfigured backend does.
    """

    def __init__(self, replies: Optional[List[Reply]] = None, responder: Optional[Callable[[str], Reply]] = None):
        self.replies: List[Reply] = list(replies or [])
        self.responder = responder
        self.prompts: List[str] = []
        self.models: List[Optional[str]] = []

    def queue(self, *replies: Reply) -> "FakeTextGenerator":
        self.replies.extend(replies)
        return self

    async def generate(self, prompt: str, *, model: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        self.models.append(model)
        if self.responder is not None:
            reply: Any = self.responder(prompt)
        elif self.replies:
            reply = self.replies.pop(0)
        else:
            raise GenerationError(ErrorCodeDictionary.GENERATION_007, message="No scripted reply")

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply


@pytest.fixture
def make_generator():
    """Factory for scripted text generators"""
    return FakeTextGenerator


@pytest.fixture
def fake_generator():
    """Text generator that fails unless replies are queued"""
    return FakeTextGenerator()


@pytest.fixture
def store():
    """Fresh in-memory document store"""
    return InMemoryDocumentStore()


@pytest.fixture
def advisor(fake_generator):
    return DecisionAdvisor(fake_generator)


@pytest.fixture
def decision_service(store, advisor):
    return DecisionService(store, advisor)


@pytest.fixture
def generation_service(advisor):
    return GenerationService(advisor)


@pytest.fixture
def user_id():
    return "user_test_owner"


@pytest.fixture
def other_user_id():
    return "user_test_other"


@pytest.fixture
def client(store, fake_generator):
    """Test client with the store and text generator swapped for fakes"""
    from branchpoint.api.dependencies import get_store, get_text_generator
    from branchpoint.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_text_generator] = lambda: fake_generator
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def headers(user_id):
    return {"x-user-id": user_id}
