import pytest
from fastapi.testclient import TestClient

from conftest import form, signed_headers


@pytest.fixture(scope="module")
def client():
    from main import app

    with TestClient(app) as c:
        yield c


def test_health_is_not_guarded(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unsigned_command_is_rejected(client):
    response = client.post("/slack/command", content=form(command="/deploy", text="api"))

    assert response.status_code == 400
    assert response.json() == {"error": "invalid signature"}


def test_forged_command_is_rejected(client):
    body = form(command="/deploy", text="api")

    response = client.post("/slack/command", content=body, headers=signed_headers(body, secret="forged"))

    assert response.status_code == 401
    assert response.json() == {"error": "unauthorized"}


def test_signed_command_is_acknowledged(client):
    body = form(command="/deploy", text="  api  ", user_id="U1")

    response = client.post("/slack/command", content=body, headers=signed_headers(body))

    assert response.status_code == 200
    assert response.json() == {"response_type": "ephemeral", "text": "Received `/deploy api`"}


def test_empty_text_returns_usage(client):
    body = form(command="/deploy")

    response = client.post("/slack/command", content=body, headers=signed_headers(body))

    assert response.status_code == 200
    assert response.json()["text"] == "Usage: `/deploy <arguments>`"
