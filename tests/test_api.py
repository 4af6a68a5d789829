# tests/test_api.py
"""Tests for the HTTP API."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

pytest.importorskip("fastapi", reason="Tests require fastapi package")

from conftest import FakeLLMClient, no_sleep
from fastapi.testclient import TestClient

from cfarag.api import GENERATE_PATH, OBJECTIVES_PATH, create_app, watch_disconnect
from cfarag.exceptions import PersistenceError
from cfarag.persistence import QuestionRepository
from cfarag.pipeline import QuestionPipeline
from cfarag.service import GenerateRequest, GenerateResponse, QuestionService


@pytest.fixture
def repository():
    return MagicMock(spec=QuestionRepository)


@pytest.fixture
def client(materials_dir, repository):
    pipeline = QuestionPipeline(
        llm_client=FakeLLMClient(),
        materials_dir=materials_dir,
        repository=repository,
        sleep=no_sleep,
    )
    return TestClient(create_app(QuestionService(pipeline)))


class TestGenerateEndpoint:
    def test_generate(self, client):
        response = client.post(GENERATE_PATH, json={"topic_area": "Fixed Income", "count": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert len(body["questions"]) == 2
        assert body["questions"][0]["topic_area"] == "Fixed Income"
        assert body["questions"][0]["source_material"].startswith("RAG: ")
        assert body["saved"] is False
        assert "outcome" not in body

    def test_invalid_topic(self, client):
        response = client.post(GENERATE_PATH, json={"topic_area": "Astrology"})

        assert response.status_code == 400
        body = response.json()
        assert "Astrology" in body["error"]
        assert "Fixed Income" in body["details"]

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"topic_area": "Fixed Income", "count": 0},
            {"topic_area": "Fixed Income", "count": 51},
            {"topic_area": "Fixed Income", "difficulty": "expert"},
        ],
    )
    def test_invalid_request(self, client, payload):
        response = client.post(GENERATE_PATH, json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_no_source_material(self, client):
        response = client.post(GENERATE_PATH, json={"topic_area": "Derivatives"})

        assert response.status_code == 404
        body = response.json()
        assert body["count"] == 0
        assert "Derivatives" in body["error"]

    def test_save(self, client, repository):
        repository.insert_questions.return_value = 1

        response = client.post(
            GENERATE_PATH,
            json={
                "topic_area": "fixed-income",
                "save_to_database": True,
                "created_by": "admin@example.com",
            },
        )

        assert response.status_code == 200
        assert response.json()["saved_count"] == 1
        questions, created_by = repository.insert_questions.call_args.args
        assert len(questions) == 1
        assert created_by == "admin@example.com"

    def test_save_failure(self, client, repository):
        repository.insert_questions.side_effect = PersistenceError("locked", saved=0)

        response = client.post(
            GENERATE_PATH, json={"topic_area": "Fixed Income", "save_to_database": True}
        )

        assert response.status_code == 500
        body = response.json()
        assert body["count"] == 1
        assert body["error"].startswith("Questions generated but failed to save")


class TestInfoEndpoints:
    def test_status(self, client):
        response = client.get(GENERATE_PATH)

        assert response.status_code == 200
        body = response.json()
        assert body["method"] == "POST"
        assert body["rag_ready"] is True

    def test_topics(self, client):
        response = client.get("/api/admin/topics")

        assert response.status_code == 200
        assert len(response.json()["topics"]["Fixed Income"]) == 2

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class DisconnectingRequest:
    """Request stand-in that reports a disconnect after ``polls`` checks."""

    def __init__(self, polls: int) -> None:
        self.polls = polls
        self.checks = 0
        self.url = MagicMock(path=GENERATE_PATH)

    async def is_disconnected(self) -> bool:
        self.checks += 1
        return self.checks > self.polls


class TestClientDisconnect:
    @pytest.mark.asyncio
    async def test_watch_sets_event_on_disconnect(self):
        request = DisconnectingRequest(polls=2)
        cancel_event = asyncio.Event()

        await watch_disconnect(request, cancel_event, interval=0)

        assert cancel_event.is_set()
        assert request.checks == 3

    @pytest.mark.asyncio
    async def test_watch_stops_when_event_already_set(self):
        request = DisconnectingRequest(polls=100)
        cancel_event = asyncio.Event()
        cancel_event.set()

        await watch_disconnect(request, cancel_event, interval=0)

        assert request.checks == 0

    @pytest.mark.asyncio
    async def test_disconnect_stops_batch(self, materials_dir, fake_llm):
        pipeline = QuestionPipeline(
            llm_client=fake_llm, materials_dir=materials_dir, sleep=no_sleep
        )
        request = DisconnectingRequest(polls=0)
        cancel_event = asyncio.Event()

        await watch_disconnect(request, cancel_event, interval=0)
        response = await QuestionService(pipeline).generate(
            GenerateRequest(topic_area="Fixed Income", count=5), cancel_event
        )

        assert response.count == 0
        assert fake_llm.calls == []

    def test_endpoint_passes_cancel_event(self):
        service = MagicMock(spec=QuestionService)
        service.generate = AsyncMock(return_value=GenerateResponse(count=0))
        client = TestClient(create_app(service))

        response = client.post(GENERATE_PATH, json={"topic_area": "Fixed Income"})

        assert response.status_code == 200
        payload, cancel_event = service.generate.call_args.args
        assert payload.topic_area == "Fixed Income"
        assert isinstance(cancel_event, asyncio.Event)
        assert not cancel_event.is_set()


class TestLearningObjectives:
    def test_list(self, client):
        response = client.get(OBJECTIVES_PATH, params={"topic": "fixed-income"})

        assert response.status_code == 200
        body = response.json()
        assert body["topic"] == "Fixed Income"
        assert body["objectives"][0]["id"] == "FI-FIIF-1"

    def test_invalid_topic(self, client):
        response = client.get(OBJECTIVES_PATH, params={"topic": "Astrology"})
        assert response.status_code == 400

    def test_generate_fills_objective_text(self, client):
        response = client.post(
            GENERATE_PATH,
            json={"topic_area": "Fixed Income", "learning_objective_id": "FI-FIIF-1"},
        )

        assert response.status_code == 200
        assert response.json()["questions"][0]["learning_objective_id"] == "FI-FIIF-1"

    def test_generate_objective_from_other_topic(self, client):
        response = client.post(
            GENERATE_PATH,
            json={"topic_area": "Fixed Income", "learning_objective_id": "ECON-FMS-1"},
        )

        assert response.status_code == 400
        assert "ECON-FMS-1" in response.json()["error"]
