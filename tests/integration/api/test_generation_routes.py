"""Integration tests for stateless generation routes"""
import pytest


class TestGenerateBranchesRoute:
    """Tests for /generate-branches"""

    @pytest.mark.integration
    def test_generated(self, client, fake_generator):
        fake_generator.queue({
            "branches": [
                {"name": "Stay", "description": "Keep the flat"},
                {"name": "Move", "description": "Go to Denver"},
            ]
        })

        response = client.post("/generate-branches", json={"decisionTitle": "Move to Denver?"})

        assert response.status_code == 200
        assert response.json()["source"] == "ai"
        assert [b["name"] for b in response.json()["branches"]] == ["Stay", "Move"]

    @pytest.mark.integration
    def test_fallback(self, client):
        response = client.post("/generate-branches", json={"decisionTitle": "Rent or buy?"})

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "fallback"
        assert [b["name"] for b in body["branches"]] == ["Rent", "Buy"]

    @pytest.mark.integration
    def test_title_required(self, client):
        response = client.post("/generate-branches", json={})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "GENERATION_001"


class TestFollowUpRoutes:
    """Tests for follow-up generation routes"""

    @pytest.mark.integration
    def test_followup_decisions(self, client):
        response = client.post(
            "/generate-followup-decisions",
            json={"originalDecision": "Move?", "chosenPath": "Denver"},
        )

        assert response.status_code == 200
        assert len(response.json()["followUpDecisions"]) == 3

    @pytest.mark.integration
    def test_followup_decisions_validation(self, client):
        response = client.post("/generate-followup-decisions", json={"originalDecision": "Move?"})

        assert response.status_code == 400

    @pytest.mark.integration
    def test_followup_simulation(self, client):
        response = client.post(
            "/generate-followup-simulation",
            json={"originalDecision": "Move?", "followUpName": "Find a flat"},
        )

        assert response.status_code == 200
        assert "actionPlan" in response.json()["simulation"]

    @pytest.mark.integration
    def test_specific_followups(self, client):
        response = client.post(
            "/generate-specific-followup-decisions",
            json={"originalDecision": "Move?", "chosenPath": "Denver", "broadCategory": "Pivot Strategy"},
        )

        assert response.status_code == 200
        assert len(response.json()["specificDecisions"]) == 4

    @pytest.mark.integration
    def test_path_forward(self, client):
        response = client.post(
            "/generate-path-forward",
            json={"originalDecision": "Move?", "chosenPath": "Denver", "pathDescription": "Mountains"},
        )

        assert response.status_code == 200
        assert "Denver" in response.json()["pathForward"]["actionPlan"]

    @pytest.mark.integration
    def test_path_forward_validation(self, client):
        response = client.post(
            "/generate-path-forward", json={"originalDecision": "Move?", "chosenPath": "Denver"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "GENERATION_003"


class TestClarificationRoutes:
    """Tests for clarification routes"""

    @pytest.mark.integration
    def test_check_clarification(self, client):
        response = client.post("/check-clarification-needed", json={"decisionTitle": "Move?"})

        assert response.status_code == 200
        assert response.json()["needsClarification"] is True

    @pytest.mark.integration
    def test_clarifying_questions(self, client, fake_generator):
        fake_generator.queue({"questions": ["Why now?", "Who else?", "Budget?", "Timeline?"]})

        response = client.post("/generate-clarifying-questions", json={"decisionTitle": "Move?"})

        assert response.json()["questions"] == ["Why now?", "Who else?", "Budget?", "Timeline?"]

    @pytest.mark.integration
    def test_decision_summary(self, client, fake_generator):
        fake_generator.queue({"summary": "You want space.", "enhancedDescription": "Move for space."})

        response = client.post(
            "/generate-decision-summary",
            json={
                "decisionTitle": "Move?",
                "originalDescription": "Thinking about it",
                "userResponses": [{"question": "Why?", "answer": "Space"}],
            },
        )

        assert response.status_code == 200
        assert response.json() == {"summary": "You want space.", "enhancedDescription": "Move for space."}
        assert "Q1: Why?\nA1: Space" in fake_generator.prompts[0]

    @pytest.mark.integration
    def test_decision_summary_requires_responses(self, client):
        response = client.post("/generate-decision-summary", json={"decisionTitle": "Move?"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "GENERATION_004"
