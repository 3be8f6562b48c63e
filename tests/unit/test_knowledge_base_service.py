import pytest

from app.schemas.knowledge_base import DocumentInsights
from app.services.knowledge_base_service import (
    KnowledgeBaseService,
    analyze_sentiment,
    calculate_importance_score,
    calculate_stats,
    extract_key_points,
    filter_documents,
    heuristic_insights,
    parse_ai_insights,
    search_documents,
)
from app.services.stores import SEED_DOCUMENTS


@pytest.mark.unit
class TestSearchAndStats:
    """Filtering, search ordering and aggregate statistics"""

    def test_search_matches_tags_and_sorts_by_importance(self):
        results = search_documents(SEED_DOCUMENTS, "SALES")
        assert [doc.id for doc in results] == ["1"]

    def test_search_orders_descending_importance(self):
        # both seeded documents contain "e"
        results = search_documents(SEED_DOCUMENTS, "e")
        scores = [doc.insights.importance_score for doc in results]
        assert scores == sorted(scores, reverse=True)
        assert len(results) == 2

    def test_filter_by_type_and_processed(self):
        assert [d.id for d in filter_documents(SEED_DOCUMENTS, "txt")] == ["2"]
        assert filter_documents(SEED_DOCUMENTS, processed=False) == []

    def test_stats(self):
        stats = calculate_stats(SEED_DOCUMENTS)
        assert stats.total_documents == 2
        assert stats.processed_documents == 2
        assert stats.processing_rate == 100
        assert stats.total_size_bytes == 245678 + 12543
        assert stats.type_breakdown == {"pdf": 1, "txt": 1}
        assert stats.average_importance == 8.0

    def test_stats_empty(self):
        stats = calculate_stats([])
        assert stats.processing_rate == 0
        assert stats.average_importance == 0.0


@pytest.mark.unit
class TestHeuristics:
    """Insight extraction without a model"""

    def test_key_points(self):
        content = "Short one. This sentence is definitely long enough! And this one is too, right? ok"
        assert extract_key_points(content) == [
            "This sentence is definitely long enough",
            "And this one is too, right",
        ]

    def test_key_points_capped_at_five(self):
        content = ". ".join(f"Sentence number {i} with plenty of words" for i in range(8))
        assert len(extract_key_points(content)) == 5

    @pytest.mark.parametrize("content,expected", [
        ("a great and excellent quarter", "positive"),
        ("one problem and another issue", "negative"),
        ("good but bad", "neutral"),
    ])
    def test_sentiment(self, content, expected):
        assert analyze_sentiment(content) == expected

    def test_importance_score(self):
        assert calculate_importance_score("plain text") == 5
        assert calculate_importance_score("URGENT: deadline for the meeting") == 9
        assert calculate_importance_score("important asap action " + "x" * 1000) == 10

    def test_summary_is_prefix_with_ellipsis(self):
        insights = heuristic_insights("z" * 300)
        assert insights.summary == "z" * 200 + "..."


@pytest.mark.unit
class TestModelInsights:
    """Parsing and fallback around the OpenAI client"""

    def test_parse_valid_payload(self):
        insights = parse_ai_insights(
            '{"summary": "S", "key_points": ["a", "b"], "sentiment": "Positive", "importance_score": 12}'
        )
        assert insights == DocumentInsights(
            summary="S", key_points=["a", "b"], sentiment="positive", importance_score=10
        )

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"key_points": []}'])
    def test_parse_invalid_payload(self, raw):
        with pytest.raises(ValueError):
            parse_ai_insights(raw)

    @pytest.mark.asyncio
    async def test_process_document_without_client_uses_heuristics(self):
        service = KnowledgeBaseService()
        assert service.client is None

        document = service.document_from_text("Urgent: review the contract before the deadline.")
        processed = await service.process_document(document)

        assert processed.processed is True
        assert processed.metadata.processed_date is not None
        assert processed.insights.importance_score == 8
        assert document.processed is False

    @pytest.mark.asyncio
    async def test_process_document_falls_back_when_client_fails(self):
        class BrokenCompletions:
            def create(self, **kwargs):
                raise ConnectionError("unreachable")

        class BrokenClient:
            class chat:
                completions = BrokenCompletions()

        service = KnowledgeBaseService(client=BrokenClient())
        processed = await service.process_document(service.simulated_upload())

        assert processed.insights.summary.endswith("...")
        assert processed.filename == "uploaded-document.pdf"
        assert processed.size == 1024000
