import pytest

from title_suggest.config import settings


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)
