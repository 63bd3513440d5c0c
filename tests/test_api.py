"""Tests for the HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

from rlce.config import settings
from rlce.errors import ExtractionError
from rlce.main import app
from rlce.models.segment import LineRange, SegmentCommand
from rlce.routes import reconstruction

SOURCE = "\n".join(f"Line {i}" for i in range(1, 11))


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_number(client):
    response = client.post("/api/number", json={"text": "alpha\nbeta"})
    assert response.status_code == 200
    assert response.json() == {"numbered_text": "1: alpha\n2: beta", "total_lines": 2}


def test_reconstruct_single(client):
    command = {
        "firstLine": "=== Extracted Data ===",
        "ranges": [{"startLine": 2, "endLine": 4}, {"startLine": 7, "endLine": 9}],
        "lastLine": "=== End ===",
    }
    response = client.post("/api/reconstruct", json={"source_text": SOURCE, "command": json.dumps(command)})
    assert response.status_code == 200
    body = response.json()
    assert body["text"] == (
        "=== Extracted Data ===\nLine 2\nLine 3\nLine 4\nLine 7\nLine 8\nLine 9\n=== End ===\n"
    )
    assert body["segment_count"] == 1
    assert body["total_lines"] == 10


def test_reconstruct_array(client):
    command = [
        {"ranges": [{"startLine": 1, "endLine": 1}]},
        {"ranges": [{"startLine": 10, "endLine": 10}]},
    ]
    response = client.post("/api/reconstruct", json={"source_text": SOURCE, "command": json.dumps(command)})
    assert response.status_code == 200
    assert response.json()["text"] == "Line 1\n\nLine 10\n\n"
    assert response.json()["segment_count"] == 2


def test_reconstruct_bad_json(client):
    response = client.post("/api/reconstruct", json={"source_text": SOURCE, "command": "{oops"})
    assert response.status_code == 400


def test_reconstruct_trivial_segment(client):
    response = client.post("/api/reconstruct", json={"source_text": SOURCE, "command": '{"ranges": []}'})
    assert response.status_code == 400
    assert "at least one range" in response.json()["detail"]


def test_reconstruct_line_out_of_range(client):
    command = json.dumps({"ranges": [{"startLine": 50, "endLine": 55}]})
    response = client.post("/api/reconstruct", json={"source_text": SOURCE, "command": command})
    assert response.status_code == 422
    assert "Line 50" in response.json()["detail"]
    assert "10 lines" in response.json()["detail"]


def test_sample(client):
    response = client.get("/api/sample")
    assert response.status_code == 200
    assert response.json()["firstLine"] == "Start of document"
    assert response.json()["nestedSegments"][0]["ranges"] == [{"startLine": 20, "endLine": 25}]


def test_extract(client, monkeypatch):
    calls = []

    def fake_request_segments(doc, instructions, model=None):
        calls.append((doc.total_lines, instructions, model))
        return [SegmentCommand(first_line="Picked", ranges=[LineRange(start_line=3, end_line=4)])]

    monkeypatch.setattr(reconstruction, "request_segments", fake_request_segments)

    response = client.post(
        "/api/extract",
        json={"source_text": SOURCE, "instructions": "lines three and four", "model": "m"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["text"] == "Picked\nLine 3\nLine 4\n\n"
    assert body["segments"][0]["firstLine"] == "Picked"
    assert body["total_lines"] == 10
    assert calls == [(10, "lines three and four", "m")]


def test_extract_llm_failure(client, monkeypatch):
    def failing_request_segments(doc, instructions, model=None):
        raise ExtractionError("Failed to parse segment response — got None")

    monkeypatch.setattr(reconstruction, "request_segments", failing_request_segments)

    response = client.post("/api/extract", json={"source_text": SOURCE, "instructions": "x"})
    assert response.status_code == 502


def test_extract_without_api_key(client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)
    response = client.post("/api/extract", json={"source_text": SOURCE, "instructions": "x"})
    assert response.status_code == 503
