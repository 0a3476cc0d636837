"""API endpoint tests: FastAPI endpoints with mocked LLM and datastore.

Tests the HTTP layer: request/response shapes, status codes and error bodies.
"""
import json
from unittest.mock import MagicMock

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from herbaverse.config import DISCLAIMER
from herbaverse.dependencies import get_quiz_generator, get_recommender
from herbaverse.main import app
from herbaverse.services.knowledge_base import default_knowledge_base
from herbaverse.services.persistence import RecommendationStore
from herbaverse.services.quiz import QuizGenerator
from herbaverse.services.reasoning import PlantReasoner
from herbaverse.services.recommendation import PlantRecommender

AI_BODY = json.dumps({
    "conditions": ["burns"],
    "recommendations": [
        {"plantId": "neem", "plantName": "Neem", "confidence": 0.5,
         "reasoning": "Antibacterial", "usage": "Paste", "precautions": "External only"},
        {"plantId": "aloe-vera", "plantName": "Aloe Vera", "confidence": 0.8,
         "reasoning": "Soothes burns", "usage": "Apply gel", "precautions": "Patch test"},
    ],
})

QUIZ_BODY = json.dumps({
    "title_en": "Plants",
    "title_hi": "पौधे",
    "description_en": "",
    "description_hi": "",
    "questions": [{
        "question_en": "Which plant has a soothing gel?",
        "question_hi": "किस पौधे में सुखदायक जेल होता है?",
        "options": ["Aloe Vera", "Neem", "Turmeric", "Tulsi"],
        "correct_answer": 0,
        "explanation_en": "Aloe leaves contain gel.",
        "explanation_hi": "एलोवेरा की पत्तियों में जेल होता है।",
    }],
}, ensure_ascii=False)

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


@pytest.fixture
def llm_client(make_client):
    return make_client(AI_BODY)


@pytest.fixture
def supabase():
    return MagicMock()


@pytest.fixture
def client(llm_client, supabase):
    recommender = PlantRecommender(
        reasoner=PlantReasoner(llm_client, default_knowledge_base),
        knowledge_base=default_knowledge_base,
        store=RecommendationStore(supabase),
    )
    app.dependency_overrides[get_recommender] = lambda: recommender
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# HEALTH & CATALOG
# =============================================================================

class TestHealthEndpoint:
    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "online"

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["plants"] == 3


class TestPlantCatalog:
    def test_list(self, client):
        plants = client.get("/plants").json()["plants"]
        assert [p["id"] for p in plants] == ["aloe-vera", "turmeric", "neem"]

    def test_detail(self, client):
        data = client.get("/plants/turmeric").json()
        assert data["scientificName"] == "Curcuma longa"
        assert "Powder" in data["preparationMethods"]

    def test_unknown_plant(self, client):
        assert client.get("/plants/ginseng").status_code == 404


# =============================================================================
# RECOMMENDATIONS
# =============================================================================

class TestRecommendEndpoint:
    def test_success_shape(self, client, aloe_query):
        resp = client.post("/recommend", json={"query": aloe_query})
        assert resp.status_code == 200
        data = resp.json()
        assert set(data) == {"query", "conditions", "recommendations", "disclaimer"}
        assert data["query"] == aloe_query
        assert data["disclaimer"] == DISCLAIMER
        top = data["recommendations"][0]
        assert top["plantId"] == "aloe-vera"
        assert top["confidence"] == 0.54
        assert top["matchedSymptoms"] == ["burn", "gel"]

    def test_legacy_path(self, client, aloe_query):
        resp = client.post("/ai-plant-suggestions", json={"query": aloe_query})
        assert resp.status_code == 200

    def test_ranking_non_increasing(self, client, aloe_query):
        recs = client.post("/recommend", json={"query": aloe_query}).json()["recommendations"]
        scores = [r["confidence"] for r in recs]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.parametrize("body", [{"query": ""}, {"query": "   "}, {}])
    def test_empty_query(self, client, llm_client, body):
        resp = client.post("/recommend", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Query is required", "query": body.get("query") or "unknown"}
        assert llm_client.chat.completions.create.await_count == 0

    def test_user_id_writes_audit_row(self, client, supabase, aloe_query):
        resp = client.post("/recommend", json={"query": aloe_query, "userId": "user-42"})
        assert resp.status_code == 200
        supabase.table.assert_called_with("plant_recommendations")
        row = supabase.table.return_value.insert.call_args.args[0]
        assert row["user_id"] == "user-42"
        assert row["query_text"] == aloe_query
        assert row["recommended_plants"] == resp.json()["recommendations"]
        assert row["ai_response"] == AI_BODY

    def test_no_user_id_no_audit_row(self, client, supabase, aloe_query):
        client.post("/recommend", json={"query": aloe_query, "userId": None})
        supabase.table.assert_not_called()

    def test_persistence_failure_does_not_change_response(self, client, supabase, aloe_query):
        baseline = client.post("/recommend", json={"query": aloe_query})

        supabase.table.return_value.insert.return_value.execute.side_effect = RuntimeError("db down")
        resp = client.post("/recommend", json={"query": aloe_query, "userId": "user-42"})

        assert resp.status_code == baseline.status_code == 200
        assert resp.json() == baseline.json()


class TestRecommendErrors:
    def test_malformed_upstream(self, client, llm_client, make_completion):
        llm_client.chat.completions.create.return_value = make_completion("Sorry, I can't help")
        resp = client.post("/recommend", json={"query": "burn"})
        assert resp.status_code == 500
        data = resp.json()
        assert data["query"] == "burn"
        assert "recommendations" not in data
        assert "Sorry" not in data["error"]

    @pytest.mark.parametrize("status", [429, 402])
    def test_upstream_status_passthrough(self, client, llm_client, status):
        error = openai.APIStatusError("err", response=httpx.Response(status, request=_REQUEST), body=None)
        llm_client.chat.completions.create.side_effect = error
        resp = client.post("/recommend", json={"query": "burn"})
        assert resp.status_code == status
        assert resp.json()["query"] == "burn"

    def test_upstream_server_error(self, client, llm_client):
        error = openai.APIStatusError("err", response=httpx.Response(500, request=_REQUEST), body=None)
        llm_client.chat.completions.create.side_effect = error
        assert client.post("/recommend", json={"query": "burn"}).status_code == 502

    def test_connection_error(self, client, llm_client):
        llm_client.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQUEST)
        assert client.post("/recommend", json={"query": "burn"}).status_code == 502

    def test_unexpected_error_is_generic(self, client, llm_client):
        llm_client.chat.completions.create.side_effect = KeyError("internal detail")
        resp = client.post("/recommend", json={"query": "burn"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to process plant suggestions", "query": "burn"}

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_confidence_dropped(self, client, llm_client, make_completion, aloe_query, literal):
        body = (
            '{"conditions": [], "recommendations": ['
            '{"plantId": "aloe-vera", "plantName": "Aloe Vera", "confidence": %s},'
            '{"plantId": "neem", "plantName": "Neem", "confidence": 0.9}]}' % literal
        )
        llm_client.chat.completions.create.return_value = make_completion(body)
        resp = client.post("/recommend", json={"query": aloe_query})
        assert resp.status_code == 200
        recs = resp.json()["recommendations"]
        assert [r["plantId"] for r in recs] == ["neem"]
        assert recs[0]["confidence"] == 0.45

    def test_non_string_query(self, client, llm_client):
        resp = client.post("/recommend", json={"query": 123})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Query must be a string", "query": "123"}
        assert llm_client.chat.completions.create.await_count == 0

    @pytest.mark.parametrize("path", ["/recommend", "/ai-plant-suggestions"])
    def test_body_not_json(self, client, llm_client, path):
        resp = client.post(path, content="not json", headers={"content-type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request body", "query": "unknown"}
        assert llm_client.chat.completions.create.await_count == 0

    def test_user_id_wrong_type(self, client, llm_client):
        resp = client.post("/recommend", json={"query": "burn", "userId": ["a"]})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request body"


# =============================================================================
# QUIZ
# =============================================================================

class TestQuizEndpoint:
    def test_success(self, client, make_client):
        quiz_client = make_client(QUIZ_BODY)
        app.dependency_overrides[get_quiz_generator] = lambda: QuizGenerator(quiz_client)
        resp = client.post("/generate-quiz", json={"topic": "Aloe", "difficulty": "easy", "numQuestions": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["quiz"]["questions"][0]["correct_answer"] == 0

    def test_rate_limited_upstream(self, client, make_client):
        error = openai.APIStatusError("err", response=httpx.Response(429, request=_REQUEST), body=None)
        quiz_client = make_client(side_effect=error)
        app.dependency_overrides[get_quiz_generator] = lambda: QuizGenerator(quiz_client)
        resp = client.post("/generate-quiz", json={})
        assert resp.status_code == 429
        assert resp.json() == {"error": "Rate limit exceeded. Please try again later.", "success": False}

    def test_not_configured(self, client):
        app.dependency_overrides[get_quiz_generator] = lambda: QuizGenerator(None)
        resp = client.post("/generate-quiz", json={"topic": "Neem"})
        assert resp.status_code == 503
        assert resp.json()["success"] is False

    def test_question_count_validated(self, client):
        assert client.post("/generate-quiz", json={"numQuestions": 0}).status_code == 422
