import pytest

from app.services.template_selector import EMAIL_TEMPLATE, MEETING_PREP_TEMPLATE


@pytest.mark.integration
class TestChatEndpoint:
    """POST/GET /api/ai"""

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, {"action": "meeting_prep"}])
    def test_missing_message_is_rejected(self, client, body):
        response = client.post("/api/ai", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}

    def test_invalid_json_is_rejected(self, client):
        response = client.post("/api/ai", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_fallback_when_llm_unreachable(self, client, unreachable_llm):
        response = client.post("/api/ai", json={"message": "Can you draft a note to the client?"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["response"] == EMAIL_TEMPLATE
        assert data["model"] == "fallback"
        assert data["context"]["confidence"] == 0.85
        assert 5 <= data["context"]["patterns_used"] <= 14
        assert data["context"]["autonomous_actions"] == ["draft_email", "apply_writing_style"]
        assert data["timestamp"].endswith("Z")

    def test_action_overrides_keywords(self, client):
        response = client.post("/api/ai", json={"message": "email the team", "action": "meeting_prep"})
        assert response.status_code == 200
        assert response.json()["response"] == MEETING_PREP_TEMPLATE

    def test_unknown_action_and_context_are_ignored(self, client):
        response = client.post("/api/ai", json={
            "message": "write an email",
            "action": "launch_rocket",
            "context": "not an object",
        })
        assert response.status_code == 200
        assert response.json()["response"] == EMAIL_TEMPLATE

    def test_llm_answer(self, client, install_llm):
        fake = install_llm(content="Dear team, ...", model_name="gpt-4o-mini-2024-07-18")

        response = client.post("/api/ai", json={
            "message": "Draft a status update",
            "context": {"user_name": "Sam", "history": [{"role": "user", "content": "hi"}]},
            "multimodal": [{"type": "text", "data": "Q3 numbers", "filename": "q3.txt"}],
        })

        data = response.json()
        assert response.status_code == 200
        assert data["response"] == "Dear team, ..."
        assert data["model"] == "gpt-4o-mini-2024-07-18"
        assert data["context"]["confidence"] == 0.95
        assert len(fake.calls) == 1

    def test_capabilities(self, client):
        response = client.get("/api/ai")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "RockstarAI processing API is ready"
        assert data["status"] == "active"
        assert "Email Generation" in data["capabilities"]
