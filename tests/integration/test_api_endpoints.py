"""Integration tests for the HTTP API."""

import random
import time

import pytest
from fastapi.testclient import TestClient

from cforce.app import app
from cforce.config.message import ERROR_MESSAGES
from cforce.orchestrator import IntelOrchestrator
from tests.fakes import SCAN_PAYLOAD, FakeGateway, dumps


@pytest.fixture
def fake_gateway():
    return FakeGateway(delay=0.05)


@pytest.fixture
def client(settings, fake_gateway):
    with TestClient(app) as client:
        app.state.orchestrator = IntelOrchestrator(
            settings, gateway=fake_gateway, rng=random.Random(7)
        )
        yield client


def _wait_settled(client, kind, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        body = client.get(f"/api/pipelines/{kind}").json()
        if body["status"] != "running":
            return body
        time.sleep(0.02)
    raise AssertionError(f"{kind} run did not settle")


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_session_and_page_switch(client):
    response = client.get("/api/session")
    assert response.status_code == 200
    body = response.json()
    assert body["page"] == "SCANNER"
    assert body["runs"]["SCAN"]["status"] == "idle"

    response = client.put("/api/session/page", json={"page": "ASSISTANT"})
    assert response.status_code == 200
    assert response.json()["page"] == "ASSISTANT"

    assert client.put("/api/session/page", json={"page": "NOWHERE"}).status_code == 422


def test_scan_run_lifecycle(client, fake_gateway):
    fake_gateway.responses.append(dumps(SCAN_PAYLOAD))

    response = client.post("/api/pipelines/SCAN/runs", json={"target": " example.com "})
    assert response.status_code == 202
    assert response.json()["status"] == "running"
    assert response.json()["target"] == "example.com"

    duplicate = client.post("/api/pipelines/SCAN/runs", json={"target": "example.com"})
    assert duplicate.status_code == 409

    body = _wait_settled(client, "SCAN")
    assert body["status"] == "succeeded"
    assert body["view"]["server_ip"] == "93.184.216.34"

    report = client.get("/api/pipelines/SCAN/report")
    assert report.status_code == 200
    assert report.headers["content-type"] == "application/pdf"
    assert "C-FORCE_REPORT_example_com.pdf" in report.headers["content-disposition"]
    assert report.content.startswith(b"%PDF")

    log = client.get("/api/session").json()["log"]
    assert log[0]["severity"] == "warning"


def test_failed_run_reports_error(client, fake_gateway):
    fake_gateway.responses.append("I cannot comply")

    assert client.post("/api/pipelines/IP_TRACE/runs", json={"target": "Palestine"}).status_code == 202
    body = _wait_settled(client, "IP_TRACE")

    assert body["status"] == "failed"
    assert body["error"] == ERROR_MESSAGES["parse_failure"]
    assert body["view"] is None
    assert client.get("/api/pipelines/IP_TRACE/report").status_code == 404


@pytest.mark.parametrize(
    "path,payload",
    [
        ("/api/pipelines/SCAN/runs", {"target": "   "}),
        ("/api/pipelines/SCAN/runs", {}),
        ("/api/pipelines/NMAP/runs", {"target": "example.com"}),
    ],
)
def test_invalid_run_requests(client, path, payload):
    assert client.post(path, json=payload).status_code == 422


def test_assistant_messages(client, fake_gateway):
    fake_gateway.responses.append("Rotate the exposed keys.")

    response = client.post("/api/assistant/messages", json={"message": "What should I fix?"})
    assert response.status_code == 200
    assert response.json() == {"role": "assistant", "content": "Rotate the exposed keys."}

    history = client.get("/api/assistant/messages").json()
    assert [m["role"] for m in history["messages"]] == ["user", "assistant"]
    assert history["pending"] is False

    assert client.post("/api/assistant/messages", json={"message": " "}).status_code == 422
