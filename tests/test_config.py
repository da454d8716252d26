"""
Tests for settings loading.
"""

from unittest.mock import patch

import pytest

from idphoto.config import DEFAULT_MODEL, Settings


def test_from_env_reads_google_api_key():
    with patch.dict("os.environ", {"GOOGLE_API_KEY": "google-key", "API_KEY": "legacy-key"}, clear=True):
        settings = Settings.from_env()

    assert settings.api_key.get_secret_value() == "google-key"
    assert settings.model == DEFAULT_MODEL
    assert settings.timeout == 120.0


def test_from_env_falls_back_to_api_key():
    with patch.dict("os.environ", {"API_KEY": "legacy-key", "GEMINI_TIMEOUT": "30"}, clear=True):
        settings = Settings.from_env()

    assert settings.api_key.get_secret_value() == "legacy-key"
    assert settings.timeout == 30.0


def test_missing_key_is_none():
    with patch.dict("os.environ", {}, clear=True):
        assert Settings.from_env().api_key is None


def test_api_key_is_masked():
    settings = Settings(api_key="super-secret")

    assert "super-secret" not in repr(settings)
    assert "super-secret" not in str(settings)
    assert "super-secret" not in settings.model_dump_json()


def test_invalid_timeout_raises_value_error():
    with patch.dict("os.environ", {"GEMINI_TIMEOUT": "abc"}, clear=True):
        with pytest.raises(ValueError):
            Settings.from_env()
