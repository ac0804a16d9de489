import pytest

from config import require_api_key


def test_missing_api_key_is_fatal(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        require_api_key()


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    assert require_api_key() == "abc"
