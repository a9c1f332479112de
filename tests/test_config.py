import dataclasses

import pytest

from smart_advisor.config import DEFAULT_CORS_ORIGINS, Settings, load_settings

def test_defaults_without_key(monkeypatch):
    for var in ("AWS_BEARER_TOKEN_BEDROCK", "USE_BEDROCK", "PORT", "API_BASE_URL", "CORS_ORIGINS", "MODEL_ID", "REQUEST_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    s = load_settings()
    assert s.ai_enabled is False
    assert s.port == 3001
    assert s.api_base_url == "http://localhost:3001/api"
    assert s.cors_origins == DEFAULT_CORS_ORIGINS
    assert s.request_timeout == 30.0

def test_key_enables_ai(monkeypatch):
    monkeypatch.setenv("AWS_BEARER_TOKEN_BEDROCK", "bedrock-api-key")
    monkeypatch.setenv("USE_BEDROCK", "1")
    monkeypatch.setenv("MODEL_ID", "test-model")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.delenv("API_BASE_URL", raising=False)
    s = load_settings()
    assert s.ai_enabled is True
    assert s.model_id == "test-model"
    assert s.api_base_url == "http://localhost:8080/api"

def test_use_bedrock_zero_forces_mock(monkeypatch):
    monkeypatch.setenv("AWS_BEARER_TOKEN_BEDROCK", "bedrock-api-key")
    monkeypatch.setenv("USE_BEDROCK", "0")
    assert load_settings().ai_enabled is False

def test_cors_origins_csv(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example ,")
    assert load_settings().cors_origins == ("https://a.example", "https://b.example")

def test_settings_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Settings().port = 1
