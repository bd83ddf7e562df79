import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch
from speakeval.config import Config
from speakeval.main import app, sessions


class TestAPI:
    """Test cases for FastAPI endpoints."""

    @pytest.fixture
    def client(self):
        """Create test client."""
        return TestClient(app)

    @pytest.fixture(autouse=True)
    def clear_sessions(self):
        sessions.clear()
        yield
        sessions.clear()

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert "version" in data

    def test_health_endpoint(self, client):
        """Test health check endpoint."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["configuration"]["weights_sum_to_one"] is True
        assert data["active_sessions"] == 0

    def test_questions_endpoint(self, client):
        """Test question listing endpoint."""
        response = client.get("/api/v1/questions/evaluation")
        assert response.status_code == 200
        questions = response.json()
        assert len(questions) == 10
        assert "What kind of music do you like?" in questions

        response = client.get("/api/v1/questions/learning")
        assert len(response.json()) == 5

    def test_questions_endpoint_invalid_set(self, client):
        response = client.get("/api/v1/questions/advanced")
        assert response.status_code == 422  # Validation error

    def test_expected_endpoint(self, client):
        response = client.get("/api/v1/expected", params={"question": "Where do you live?"})
        assert response.status_code == 200
        data = response.json()
        assert data["answers"][0] == "I live in New York City."

    def test_evaluate_endpoint(self, client):
        """Test successful evaluation."""
        response = client.post(
            "/api/v1/evaluate",
            json={
                "question": "What did you do yesterday?",
                "response": "I visited my family yesterday.",
                "confidence": 0.92,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["passed"] is True
        assert data["score"] > 70
        assert data["correction"] is None

    def test_evaluate_endpoint_empty_response(self, client):
        response = client.post(
            "/api/v1/evaluate", json={"question": "How are you today?", "response": ""}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 0
        assert data["passed"] is False
        assert data["correction"]

    def test_evaluate_endpoint_missing_response(self, client):
        """Test evaluation with missing response."""
        response = client.post("/api/v1/evaluate", json={"question": "How are you today?"})
        assert response.status_code == 422  # Validation error

    def test_evaluate_endpoint_invalid_confidence(self, client):
        response = client.post(
            "/api/v1/evaluate",
            json={"question": "How are you today?", "response": "fine", "confidence": 2},
        )
        assert response.status_code == 422

    def test_evaluate_endpoint_server_error(self, client):
        """Test server error handling."""
        with patch("speakeval.main.evaluator.evaluate", side_effect=Exception("Test error")):
            response = client.post(
                "/api/v1/evaluate",
                json={"question": "How are you today?", "response": "fine"},
            )

            assert response.status_code == 500
            data = response.json()
            assert data["error"] == "HTTP 500"
            assert "Test error" in data["message"]

    def test_breakdown_endpoint(self, client):
        response = client.post(
            "/api/v1/evaluate/breakdown",
            json={"response": "i am fine thank you", "expected": "i am fine thank you"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["keyword_score"] == pytest.approx(100)
        assert data["semantic_score"] == pytest.approx(70)
        assert data["score"] == pytest.approx(91)

    def test_breakdown_endpoint_server_error(self, client):
        with patch("speakeval.main.evaluator.scorer.breakdown", side_effect=Exception("Test error")):
            response = client.post(
                "/api/v1/evaluate/breakdown",
                json={"response": "hello", "expected": "hello"},
            )

            assert response.status_code == 500
            data = response.json()
            assert data["error"] == "HTTP 500"
            assert "Test error" in data["message"]

    def test_correction_endpoint(self, client):
        response = client.post(
            "/api/v1/correction",
            json={"question": "Where do you live?", "response": "gibberish xyz"},
        )
        assert response.status_code == 200
        assert response.json()["correction"] == "I'm from London, England."

    def test_batch_evaluate_endpoint(self, client):
        """Test batch evaluation endpoint."""
        response = client.post(
            "/api/v1/evaluate/batch",
            json={
                "items": [
                    {"question": "How are you today?", "response": ""},
                    {"question": "Quantum chromodynamics", "response": "hello"},
                ]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_items"] == 2
        assert data["successful_evaluations"] == 2
        assert data["results"][0]["score"] == 0
        assert data["results"][1]["score"] == 50

    def test_batch_evaluate_empty_items(self, client):
        """Test batch evaluation with empty items list."""
        response = client.post("/api/v1/evaluate/batch", json={"items": []})

        assert response.status_code == 400
        data = response.json()
        assert "No items provided" in data["message"]

    def test_batch_evaluate_too_many_items(self, client):
        """Test batch evaluation with too many items."""
        items = [{"question": f"Question {i}", "response": "answer"} for i in range(51)]

        response = client.post("/api/v1/evaluate/batch", json={"items": items})

        assert response.status_code == 400
        data = response.json()
        assert "cannot exceed 50" in data["message"]

    def test_session_flow(self, client):
        response = client.post("/api/v1/sessions", json={"mode": "evaluation"})
        assert response.status_code == 200
        state = response.json()
        session_id = state["session_id"]
        assert state["current_question"] == "How are you today?"
        assert state["is_complete"] is False

        response = client.post(
            f"/api/v1/sessions/{session_id}/responses", json={"response": ""}
        )
        assert response.status_code == 200
        feedback = response.json()
        assert feedback["result"]["passed"] is False
        assert feedback["spoken_text"].startswith("Almost correct!")

        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["current_index"] == 1
        assert state["summary"]["answered"] == 1

    def test_learning_session_advance(self, client):
        session_id = client.post("/api/v1/sessions", json={}).json()["session_id"]
        state = client.post(f"/api/v1/sessions/{session_id}/advance").json()
        assert state["mode"] == "learning"
        assert state["current_question"] == "What is your favorite hobby?"

    def test_completed_session_conflict(self, client):
        session_id = client.post("/api/v1/sessions", json={"mode": "learning"}).json()[
            "session_id"
        ]
        for _ in range(5):
            client.post(f"/api/v1/sessions/{session_id}/advance")

        response = client.post(
            f"/api/v1/sessions/{session_id}/responses", json={"response": "hello"}
        )
        assert response.status_code == 409
        assert "complete" in response.json()["message"]

    def test_evaluation_session_advance_conflict(self, client):
        session_id = client.post("/api/v1/sessions", json={"mode": "evaluation"}).json()[
            "session_id"
        ]
        response = client.post(f"/api/v1/sessions/{session_id}/advance")
        assert response.status_code == 409
        assert "submitted" in response.json()["message"]

        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["current_index"] == 0

    def test_delete_session(self, client):
        session_id = client.post("/api/v1/sessions", json={"mode": "learning"}).json()[
            "session_id"
        ]
        response = client.delete(f"/api/v1/sessions/{session_id}")
        assert response.status_code == 200
        assert response.json()["session_id"] == session_id
        assert session_id not in sessions

        response = client.delete(f"/api/v1/sessions/{session_id}")
        assert response.status_code == 404

    def test_finished_sessions_are_evicted_at_limit(self, client):
        with patch.object(Config, "MAX_SESSIONS", 3):
            for _ in range(20):
                session_id = client.post(
                    "/api/v1/sessions", json={"mode": "evaluation"}
                ).json()["session_id"]
                for _ in range(10):
                    client.post(
                        f"/api/v1/sessions/{session_id}/responses", json={"response": ""}
                    )

            assert len(sessions) <= 3

    def test_active_session_survives_eviction_of_finished_ones(self, client):
        with patch.object(Config, "MAX_SESSIONS", 2):
            active_id = client.post("/api/v1/sessions", json={"mode": "learning"}).json()[
                "session_id"
            ]
            finished_id = client.post("/api/v1/sessions", json={"mode": "learning"}).json()[
                "session_id"
            ]
            for _ in range(5):
                client.post(f"/api/v1/sessions/{finished_id}/advance")

            client.post("/api/v1/sessions", json={"mode": "learning"})

            assert active_id in sessions
            assert finished_id not in sessions
            assert len(sessions) == 2

    def test_unknown_session(self, client):
        response = client.get("/api/v1/sessions/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "HTTP 404"


if __name__ == "__main__":
    pytest.main([__file__])
