import json

import pytest
from fastapi.testclient import TestClient

from orfo.api import main
from orfo.api.spellcheck import SpellCheckService


@pytest.fixture
def provider(monkeypatch, fake_provider):
    fake_provider.reply = json.dumps({"results": [{"word": "qala", "isCorrect": False, "suggestions": ["qála"]}]})
    monkeypatch.setattr(main, "spellcheck_service", SpellCheckService(fake_provider))
    return fake_provider


@pytest.fixture
def client():
    return TestClient(main.app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_detect(client):
    response = client.post("/api/detect", json={"text": "сәлем бол"})
    assert response.status_code == 200
    assert response.json() == {"script": "cyrillic", "cyrillic_count": 8, "latin_count": 1}


def test_transliterate(client):
    response = client.post("/api/transliterate", json={"text": "қала", "target": "latin"})
    assert response.status_code == 200
    assert response.json() == {"original": "қала", "converted": "qala", "from": "cyrillic", "to": "latin"}


def test_transliterate_auto(client):
    response = client.post("/api/transliterate", json={"text": "shaxar"})
    assert response.json()["converted"] == "шахар"


def test_transliterate_rejects_bad_target(client):
    response = client.post("/api/transliterate", json={"text": "qala", "target": "mixed"})
    assert response.status_code == 422


def test_spellcheck(client, provider):
    response = client.post("/api/spellcheck", json={"text": "Úlken qala."})
    assert response.status_code == 200
    body = response.json()
    assert body["results"] == [
        {"word": "qala", "isCorrect": False, "suggestions": ["qála"], "start": 6, "end": 10}
    ]
    assert body["statistics"]["incorrectWords"] == 1
    assert body["error"] is None


def test_spellcheck_provider_failure(client, monkeypatch, failing_provider):
    monkeypatch.setattr(main, "spellcheck_service", SpellCheckService(failing_provider))
    response = client.post("/api/spellcheck", json={"text": "qala"})
    assert response.status_code == 502


def test_spellcheck_batch(client, provider):
    response = client.post("/api/spellcheck/batch", json={"texts": ["qala", "úlken qala"]})
    assert response.status_code == 200
    assert [item["results"][0]["start"] for item in response.json()] == [0, 6]


def test_suggestions(client, monkeypatch, fake_provider):
    fake_provider.reply = '{"suggestions": [{"word": "qala", "confidence": 90}]}'
    monkeypatch.setattr(main, "spellcheck_service", SpellCheckService(fake_provider))
    response = client.post("/api/suggestions", json={"word": "qla", "limit": 3})
    assert response.status_code == 200
    assert response.json() == [{"word": "qala", "confidence": 90.0}]
