"""Integration tests for decision, simulation and lifecycle routes"""
import pytest


def _create_decision(client, headers, **body):
    response = client.post("/decisions", json={"title": "Should I take the job?", **body}, headers=headers)
    assert response.status_code == 201
    return response.json()["decisionId"]


def _create_branch(client, headers, decision_id, name):
    response = client.post(f"/decisions/{decision_id}/branches", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["branchId"]


class TestHealth:
    """Tests for service endpoints"""

    @pytest.mark.integration
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "BranchPoint API is running"}

    @pytest.mark.integration
    def test_root(self, client):
        assert client.get("/").json()["name"] == "BranchPoint"


class TestDecisionRoutes:
    """Tests for creating and reading decisions"""

    @pytest.mark.integration
    def test_create_decision(self, client, headers):
        """Test a new decision starts as DRAFT"""
        response = client.post("/decisions", json={"title": "Should I take the job?"}, headers=headers)

        assert response.status_code == 201
        body = response.json()
        assert body["decisionId"]
        assert body["state"] == "DRAFT"
        assert body["preConfidence"] == 3
        assert body["title"] == "Should I take the job?"

    @pytest.mark.integration
    def test_create_decision_without_title(self, client, headers):
        response = client.post("/decisions", json={"title": "Life Branch  "}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Title is required"

    @pytest.mark.integration
    def test_invalid_body_is_400(self, client, headers):
        response = client.post("/decisions", json={"title": "T", "preConfidence": "high"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SYSTEM_002"

    @pytest.mark.integration
    def test_boolean_pre_confidence_is_rejected(self, client, headers):
        response = client.post("/decisions", json={"title": "T", "preConfidence": True}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SYSTEM_002"

    @pytest.mark.integration
    def test_list_and_get(self, client, headers):
        decision_id = _create_decision(client, headers)
        _create_branch(client, headers, decision_id, "Accept offer")

        listing = client.get("/decisions", headers=headers).json()
        detail = client.get(f"/decisions/{decision_id}", headers=headers)

        assert listing["count"] == 1
        assert listing["decisions"][0]["decisionId"] == decision_id
        assert detail.status_code == 200
        assert detail.json()["decision"]["displayState"] == "ACTIVE"
        assert detail.json()["branches"][0]["name"] == "Accept offer"
        assert client.get(f"/decisions/{decision_id}", headers=headers).json() == detail.json()

    @pytest.mark.integration
    def test_decisions_are_scoped_to_caller(self, client, headers):
        decision_id = _create_decision(client, headers)
        stranger = {"x-user-id": "user_stranger"}

        assert client.get(f"/decisions/{decision_id}", headers=stranger).status_code == 404
        assert client.get("/decisions", headers=stranger).json()["count"] == 0

    @pytest.mark.integration
    def test_missing_header_gets_fresh_identity(self, client, headers):
        _create_decision(client, headers)

        assert client.get("/decisions").json()["count"] == 0

    @pytest.mark.integration
    def test_branch_on_missing_decision(self, client, headers):
        response = client.post("/decisions/decision_missing/branches", json={"name": "A"}, headers=headers)

        assert response.status_code == 404


class TestSimulationAndComparison:
    """Tests for simulate and compare"""

    @pytest.mark.integration
    def test_simulate_compare(self, client, headers):
        """Test simulating both branches allows a comparison naming both"""
        decision_id = _create_decision(client, headers)
        accept = _create_branch(client, headers, decision_id, "Accept offer")
        decline = _create_branch(client, headers, decision_id, "Decline offer")

        for branch_id in (accept, decline):
            response = client.post(
                "/simulate", json={"branchId": branch_id, "personaStyle": "empathetic"}, headers=headers
            )
            assert response.status_code == 200
            output = response.json()["simulationOutput"]
            assert len(output["questions"]) == 5
            assert output["personaStyle"] == "empathetic"

        response = client.get(f"/decisions/{decision_id}/comparison", headers=headers)

        assert response.status_code == 200
        tradeoffs = response.json()["generatedDiff"]["tradeoffs"]
        assert any("Accept offer" in t and "Decline offer" in t for t in tradeoffs)

    @pytest.mark.integration
    def test_compare_needs_two_simulations(self, client, headers):
        decision_id = _create_decision(client, headers)
        branch_id = _create_branch(client, headers, decision_id, "Accept offer")
        client.post("/simulate", json={"branchId": branch_id}, headers=headers)

        response = client.get(f"/decisions/{decision_id}/comparison", headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "COMPARISON_001"

    @pytest.mark.integration
    def test_simulate_requires_branch_id(self, client, headers):
        assert client.post("/simulate", json={}, headers=headers).status_code == 400

    @pytest.mark.integration
    def test_simulate_unknown_branch(self, client, headers):
        assert client.post("/simulate", json={"branchId": "branch_x"}, headers=headers).status_code == 404

    @pytest.mark.integration
    def test_simulate_rejects_unknown_persona(self, client, headers):
        response = client.post("/simulate", json={"branchId": "b", "personaStyle": "sarcastic"}, headers=headers)

        assert response.status_code == 400


class TestFinalizeRoutes:
    """Tests for commit and resolve"""

    @pytest.mark.integration
    def test_commit_with_foreign_branch(self, client, headers):
        decision_id = _create_decision(client, headers)
        other_decision = _create_decision(client, headers, title="Another?")
        unrelated = _create_branch(client, headers, other_decision, "Elsewhere")

        response = client.post(
            f"/decisions/{decision_id}/commit",
            json={"finalBranchId": unrelated, "postConfidence": 4},
            headers=headers,
        )

        assert response.status_code == 404

    @pytest.mark.integration
    def test_commit_then_commit_again(self, client, headers):
        decision_id = _create_decision(client, headers)
        branch_id = _create_branch(client, headers, decision_id, "Accept offer")
        body = {"finalBranchId": branch_id, "postConfidence": 5}

        first = client.post(f"/decisions/{decision_id}/commit", json=body, headers=headers)
        second = client.post(f"/decisions/{decision_id}/commit", json=body, headers=headers)

        assert first.status_code == 200
        assert first.json()["status"] == "committed"
        assert first.json()["confidenceDelta"] == 2
        assert second.status_code == 400
        assert second.json()["error"]["code"] == "DECISION_004"

    @pytest.mark.integration
    @pytest.mark.parametrize("post_confidence", [0, 6])
    def test_commit_confidence_out_of_range(self, client, headers, post_confidence):
        decision_id = _create_decision(client, headers)
        branch_id = _create_branch(client, headers, decision_id, "Accept offer")

        response = client.post(
            f"/decisions/{decision_id}/commit",
            json={"finalBranchId": branch_id, "postConfidence": post_confidence},
            headers=headers,
        )

        assert response.status_code == 400

    @pytest.mark.integration
    def test_commit_rejects_boolean_confidence(self, client, headers):
        decision_id = _create_decision(client, headers)
        branch_id = _create_branch(client, headers, decision_id, "Accept offer")

        response = client.post(
            f"/decisions/{decision_id}/commit",
            json={"finalBranchId": branch_id, "postConfidence": True},
            headers=headers,
        )
        detail = client.get(f"/decisions/{decision_id}", headers=headers).json()

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SYSTEM_002"
        assert detail["decision"]["state"] == "DRAFT"

    @pytest.mark.integration
    def test_resolve_with_sub_decision(self, client, headers):
        decision_id = _create_decision(client, headers, preConfidence=3)
        branch_id = _create_branch(client, headers, decision_id, "Decline offer")

        response = client.post(
            f"/decisions/{decision_id}/resolve",
            json={
                "finalBranchId": branch_id,
                "postConfidence": 2,
                "createSubDecision": True,
                "subDecisionTitle": "What next?",
            },
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "resolved"
        assert body["confidenceDelta"] == -1
        assert body["subDecision"]["title"] == "What next?"

        tree = client.get("/decisions/tree", headers=headers).json()
        assert tree["totalDecisions"] == 2
        assert tree["maxDepth"] == 2
        assert tree["nodes"][0]["children"][0]["decision"]["parentBranchId"] == branch_id

    @pytest.mark.integration
    def test_resolve_without_sub_decision(self, client, headers):
        decision_id = _create_decision(client, headers)
        branch_id = _create_branch(client, headers, decision_id, "Accept offer")

        response = client.post(
            f"/decisions/{decision_id}/resolve",
            json={"finalBranchId": branch_id, "postConfidence": 3},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["subDecision"] is None


class TestGroupRoutes:
    """Tests for decision groups"""

    @pytest.mark.integration
    def test_group_and_list(self, client, headers):
        first = _create_decision(client, headers, title="One")
        second = _create_decision(client, headers, title="Two")

        response = client.post(
            "/decisions/group",
            json={"decisionIds": [first, second], "groupName": "Career"},
            headers=headers,
        )
        groups = client.get("/decisions/groups", headers=headers).json()

        assert response.status_code == 201
        assert response.json()["decisionIds"] == [first, second]
        assert groups["count"] == 1
        assert {d["title"] for d in groups["groups"][0]["decisions"]} == {"One", "Two"}

    @pytest.mark.integration
    def test_group_needs_two_decisions(self, client, headers):
        first = _create_decision(client, headers)

        response = client.post(
            "/decisions/group", json={"decisionIds": [first], "groupName": "Solo"}, headers=headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "GROUP_001"
