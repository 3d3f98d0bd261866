"""Tests for the admin question endpoints."""

from collections.abc import Callable

from flask.testing import FlaskClient

from app.models.question import Question


class TestQuestionsList:
    """Tests for GET /api/admin/questions."""

    def test_list_active_only(
        self, client: FlaskClient, make_question: Callable[..., Question]
    ) -> None:
        kept = make_question("Kept", [("Yes", 0)])
        removed = make_question("Removed")
        client.delete(f"/api/admin/questions/{removed.question_id}")

        response = client.get("/api/admin/questions")

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert [q["question_id"] for q in data] == [kept.question_id]
        assert data[0]["answers"][0]["answer_text"] == "Yes"
        assert "answer_id" in data[0]["answers"][0]


class TestQuestionsWrite:
    """Tests for creating, updating and deleting questions."""

    def test_create(self, client: FlaskClient) -> None:
        response = client.post(
            "/api/admin/questions",
            json={
                "question_text": "How rested do you feel?",
                "answers": [
                    {"answer_text": "Very", "score": 0},
                    {"answer_text": "Barely", "score": 15},
                    {"answer_text": "", "score": 99},
                ],
            },
        )

        assert response.status_code == 201
        data = response.get_json()
        assert data["message"] == "Question created successfully"
        assert [a["answer_text"] for a in data["data"]["answers"]] == ["Very", "Barely"]

    def test_create_requires_text(self, client: FlaskClient) -> None:
        response = client.post("/api/admin/questions", json={"question_text": ""})

        assert response.status_code == 400

    def test_update_replaces_answers(
        self, client: FlaskClient, make_question: Callable[..., Question]
    ) -> None:
        question = make_question("Old", [("A", 1), ("B", 2)])

        response = client.put(
            f"/api/admin/questions/{question.question_id}",
            json={"question_text": "New", "answers": [{"answer_text": "C", "score": 3}]},
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["question_text"] == "New"
        assert [(a["answer_text"], a["score"]) for a in data["answers"]] == [("C", 3)]

    def test_update_missing(self, client: FlaskClient) -> None:
        response = client.put("/api/admin/questions/9999", json={"question_text": "X"})

        assert response.status_code == 404

    def test_delete(self, client: FlaskClient, make_question: Callable[..., Question]) -> None:
        question = make_question("Going")

        response = client.delete(f"/api/admin/questions/{question.question_id}")

        assert response.status_code == 200
        assert response.get_json()["message"] == "Question deleted successfully"

        again = client.delete(f"/api/admin/questions/{question.question_id}")
        assert again.status_code == 404
