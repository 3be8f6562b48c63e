import pytest

from app.services import service_manager


@pytest.mark.integration
class TestKnowledgeBaseEndpoints:
    """GET/POST/DELETE /api/knowledge-base"""

    def test_list_all(self, client):
        data = client.get("/api/knowledge-base").json()
        assert data["success"] is True
        assert data["total"] == 2
        assert data["stats"]["total_documents"] == 2
        assert data["stats"]["average_importance"] == 8.0

    def test_query_returns_matches_by_importance(self, client):
        data = client.get("/api/knowledge-base", params={"query": "sales"}).json()
        assert [doc["filename"] for doc in data["documents"]] == ["sales-strategy-2024.pdf"]

        data = client.get("/api/knowledge-base", params={"query": "and"}).json()
        scores = [doc["insights"]["importance_score"] for doc in data["documents"]]
        assert scores == [9, 7]

    def test_type_filter_and_limit(self, client):
        data = client.get("/api/knowledge-base", params={"type": "txt"}).json()
        assert [doc["id"] for doc in data["documents"]] == ["2"]

        data = client.get("/api/knowledge-base", params={"limit": 1}).json()
        assert data["total"] == 1
        assert data["stats"]["total_documents"] == 1

    def test_processed_filter(self, client):
        data = client.get("/api/knowledge-base", params={"processed": "false"}).json()
        assert data["documents"] == []

    def test_add_text_content(self, client):
        content = "Urgent: prepare the board meeting deck. " * 10
        response = client.post("/api/knowledge-base", json={
            "content": content,
            "filename": "board.txt",
            "tags": ["board"],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Content processed and added to knowledge base"
        document = data["document"]
        assert document["processed"] is True
        assert document["content"] == content[:200] + "..."
        assert document["insights"]["importance_score"] == 8
        assert document["metadata"]["source"] == "text_input"

    def test_added_content_is_not_persisted(self, client):
        client.post("/api/knowledge-base", json={"content": "quarterly roadmap draft"})
        assert client.get("/api/knowledge-base").json()["total"] == 2

    def test_missing_content(self, client):
        response = client.post("/api/knowledge-base", json={"type": "txt"})
        assert response.status_code == 400
        assert response.json() == {"error": "Content is required"}

    def test_multipart_upload_is_simulated(self, client):
        response = client.post(
            "/api/knowledge-base",
            files={"file": ("plan.docx", b"ignored bytes", "application/octet-stream")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Document uploaded and processed successfully"
        assert data["document"]["filename"] == "uploaded-document.pdf"
        assert data["document"]["size"] == 1024000
        assert data["document"]["metadata"]["tags"] == ["business", "strategy"]

    def test_delete(self, client):
        response = client.request("DELETE", "/api/knowledge-base", json={"document_ids": ["1", "2"]})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "deleted_count": 2,
            "message": "Successfully deleted 2 documents",
        }

    @pytest.mark.parametrize("body", [{}, {"document_ids": None}])
    def test_delete_requires_ids(self, client, body):
        response = client.request("DELETE", "/api/knowledge-base", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "document_ids array is required"}

    def test_delete_rejects_non_list(self, client):
        response = client.request("DELETE", "/api/knowledge-base", json={"document_ids": "1"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_service_is_shared_across_requests(self, client, monkeypatch):
        service = service_manager.get_knowledge_base_service()
        seen = []
        original = service.process_document

        async def recording(document):
            seen.append(service_manager.get_knowledge_base_service())
            return await original(document)

        monkeypatch.setattr(service, "process_document", recording)
        client.post("/api/knowledge-base", json={"content": "first note"})
        client.post("/api/knowledge-base", json={"content": "second note"})

        assert len(seen) == 2
        assert all(s is service for s in seen)


@pytest.mark.unit
class TestKnowledgeBaseServiceRegistration:
    """Knowledge base service lookup"""

    def test_unset_service_raises(self, monkeypatch):
        monkeypatch.setattr(service_manager, "knowledge_base_service", None)
        with pytest.raises(RuntimeError, match="Knowledge base service is not available"):
            service_manager.get_knowledge_base_service()
