"""End-to-end tests for question, answer, user and tag endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from stackit.config import Settings
from stackit.interface.api.app import create_app
from stackit.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by the in-memory container."""
    app_instance = create_app(build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client


def bearer(username: str | None = None) -> dict[str, str]:
    token = create_token(str(uuid4()), Settings().auth, username=username)
    return {"Authorization": f"Bearer {token}"}


QUESTION = {
    "title": "How do I merge two dicts?",
    "description": "I want a new dict with the keys of both.",
    "tags": ["Python", "dict"],
}


class TestHealthEndpoint:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestQuestionEndpoints:
    """End-to-end tests for the question API."""

    def test_ask_and_read_question(self, client):
        # Arrange
        headers = bearer("curious")

        # Act
        created = client.post("/questions", json=QUESTION, headers=headers)
        question_id = created.json()["question_id"]
        page = client.get(f"/questions/{question_id}")

        # Assert
        assert created.status_code == 201
        assert created.json()["tags"] == ["python", "dict"]
        assert created.json()["author_username"] == "curious"
        assert page.status_code == 200
        assert page.json()["title"] == QUESTION["title"]
        assert page.json()["answers"] == []
        assert page.json()["user_vote"] is None

    def test_ask_requires_auth(self, client):
        response = client.post("/questions", json=QUESTION)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"

    def test_missing_fields_are_bad_request(self, client):
        response = client.post("/questions", json={"title": "Only a title"}, headers=bearer())

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "invalid_argument"
        assert payload["errors"]

    def test_unknown_question_is_not_found(self, client):
        response = client.get(f"/questions/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Question not found",
            "error": "not_found",
            "retryable": False,
        }

    def test_listing_and_unanswered_filter(self, client):
        headers = bearer()
        answered = client.post("/questions", json=QUESTION, headers=headers).json()
        client.post(
            "/questions",
            json={**QUESTION, "title": "Second question", "tags": ["rust"]},
            headers=headers,
        )
        client.post(
            f"/questions/{answered['question_id']}/answers",
            json={"content": "Use the | operator."},
            headers=bearer(),
        )

        everything = client.get("/questions").json()
        unanswered = client.get("/questions", params={"filter": "unanswered"}).json()
        tagged = client.get("/questions", params={"tag": "rust"}).json()

        assert everything["count"] == 2
        assert [q["title"] for q in unanswered["data"]] == ["Second question"]
        assert tagged["count"] == 1

    def test_only_author_may_edit(self, client):
        author = bearer()
        question_id = client.post("/questions", json=QUESTION, headers=author).json()[
            "question_id"
        ]

        forbidden = client.patch(
            f"/questions/{question_id}", json={"title": "Hijacked"}, headers=bearer()
        )
        allowed = client.patch(
            f"/questions/{question_id}", json={"title": "Merging dicts"}, headers=author
        )

        assert forbidden.status_code == 403
        assert forbidden.json()["error"] == "not_authorized"
        assert allowed.status_code == 200
        assert allowed.json()["title"] == "Merging dicts"

    def test_delete_question(self, client):
        author = bearer()
        question_id = client.post("/questions", json=QUESTION, headers=author).json()[
            "question_id"
        ]

        response = client.delete(f"/questions/{question_id}", headers=author)

        assert response.status_code == 204
        assert client.get(f"/questions/{question_id}").status_code == 404


class TestAnswerEndpoints:
    def test_accept_answer(self, client):
        asker = bearer()
        question_id = client.post("/questions", json=QUESTION, headers=asker).json()[
            "question_id"
        ]
        answer_id = client.post(
            f"/questions/{question_id}/answers",
            json={"content": "Use {**a, **b}."},
            headers=bearer(),
        ).json()["answer_id"]

        response = client.post(f"/answers/{answer_id}/accept", headers=asker)

        assert response.status_code == 200
        assert response.json()["is_accepted"] is True
        page = client.get(f"/questions/{question_id}").json()
        assert page["accepted_answer_id"] == answer_id


class TestUserEndpoints:
    def test_me_provisions_profile(self, client):
        headers = bearer("newcomer")

        me = client.get("/users/me", headers=headers)
        public = client.get("/users/newcomer")

        assert me.status_code == 200
        assert me.json()["username"] == "newcomer"
        assert public.status_code == 200
        assert public.json()["user_id"] == me.json()["user_id"]

    def test_cookie_auth(self, client):
        token = create_token(str(uuid4()), Settings().auth, username="cookie_fan")
        response = client.get("/users/me", headers={"Cookie": f"auth_token={token}"})

        assert response.status_code == 200
        assert response.json()["username"] == "cookie_fan"

    def test_unknown_user_is_not_found(self, client):
        response = client.get("/users/nobody_here")

        assert response.status_code == 404


class TestTagEndpoints:
    def test_popular_tags(self, client):
        headers = bearer()
        client.post("/questions", json=QUESTION, headers=headers)
        client.post("/questions", json={**QUESTION, "tags": ["python"]}, headers=headers)

        response = client.get("/tags/popular")

        assert response.status_code == 200
        tags = response.json()["tags"]
        assert tags[0] == {"name": "python", "count": 2}
