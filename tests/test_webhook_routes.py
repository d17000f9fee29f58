import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from transcription_ingestor.dependencies import get_ingestor
from transcription_ingestor.routes import webhooks_router
from tests.factories import make_event


@pytest.fixture
def client(ingestor):
    app = FastAPI()
    app.include_router(webhooks_router)
    app.dependency_overrides[get_ingestor] = lambda: ingestor
    return TestClient(app)


def test_accepted_callback_returns_200(seed, client):
    seed()

    response = client.post("/webhooks/deepgram", json=make_event("dg-123"))

    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "accepted"
    assert body["file_id"] == "f1"
    assert body["status"] == "COMPLETED"


def test_redelivered_callback_returns_200(seed, client):
    seed()
    client.post("/webhooks/deepgram", json=make_event("dg-123"))

    response = client.post("/webhooks/deepgram", json=make_event("dg-123"))

    assert response.status_code == 200
    assert response.json() == {"kind": "already_processed", "file_id": "f1"}


def test_unknown_request_returns_404(seed, client):
    seed()

    response = client.post("/webhooks/deepgram", json=make_event("dg-999"))

    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_missing_request_id_returns_400(client):
    response = client.post("/webhooks/deepgram", json=make_event(request_id=None))

    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


def test_failed_write_returns_500(seed, client, state_machine, monkeypatch):
    seed()

    def fail_completion(db_session, file_id):
        raise RuntimeError("status update failed")

    monkeypatch.setattr(state_machine, "commit_completed", fail_completion)

    response = client.post("/webhooks/deepgram", json=make_event("dg-123"))

    assert response.status_code == 500
    assert response.json()["kind"] == "server_error"


def test_only_post_is_allowed(client):
    assert client.get("/webhooks/deepgram").status_code == 405
