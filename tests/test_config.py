"""Tests for settings read from the environment."""

import pytest

import app as backend
from config import Settings
from errors import ConfigurationError
from llm_wrapper import get_diagnosis
from pydantic_models import DiagnosisRequest


class TestSettings:

    def test_defaults(self):
        settings = Settings({})

        assert settings.LLM_PROVIDER == "gemini"
        assert settings.LLM_MODEL == "gemini-2.0-flash"
        assert settings.LLM_TIMEOUT == 15.0
        assert settings.LLM_MAX_TOKENS == 1500
        assert settings.LLM_TEMPERATURE == 0.0

    def test_numeric_values_are_read(self):
        settings = Settings({"LLM_TIMEOUT": "30", "LLM_MAX_TOKENS": "800", "LLM_TEMPERATURE": "0.4"})

        assert settings.LLM_TIMEOUT == 30.0
        assert settings.LLM_MAX_TOKENS == 800
        assert settings.LLM_TEMPERATURE == 0.4

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_numeric_values_fall_back_to_defaults(self, value):
        settings = Settings({"LLM_TIMEOUT": value, "LLM_MAX_TOKENS": value, "LLM_TEMPERATURE": value})

        assert settings.LLM_TIMEOUT == 15.0
        assert settings.LLM_MAX_TOKENS == 1500
        assert settings.LLM_TEMPERATURE == 0.0

    @pytest.mark.parametrize("name,value", [
        ("LLM_TIMEOUT", "lima belas"),
        ("LLM_MAX_TOKENS", "1.5k"),
        ("LLM_TEMPERATURE", "panas"),
    ])
    def test_malformed_numeric_value_is_configuration_error(self, name, value):
        with pytest.raises(ConfigurationError) as exc:
            Settings({name: value})
        assert exc.value.message == f"Konfigurasi tidak valid: {name}"

    def test_key_lookup_per_provider(self):
        settings = Settings({"GEMINI_API_KEY": " gem ", "OPENAI_API_KEY": "sk"})

        assert settings.api_key_for("gemini") == "gem"
        assert settings.api_key_for("openai") == "sk"
        assert settings.api_key_for("mock") == ""


def test_blank_timeout_still_reaches_the_model(clean_env):
    clean_env.setenv("LLM_PROVIDER", "mock")
    clean_env.setenv("LLM_TIMEOUT", "")
    request = DiagnosisRequest(symptoms=["fever"], age=30, gender="male")

    assert get_diagnosis(request)["urgencyLevel"] == "Normal"


def test_malformed_environment_is_configuration_error(clean_env):
    clean_env.setenv("LLM_MAX_TOKENS", "banyak")
    request = DiagnosisRequest(symptoms=["fever"], age=30, gender="male")

    with pytest.raises(ConfigurationError):
        get_diagnosis(request)


def test_malformed_environment_reaches_client_as_configuration_error(clean_env):
    clean_env.setenv("LLM_TEMPERATURE", "panas")

    resp = backend.app.test_client().post(
        "/api/diagnosis", json={"symptoms": ["fever"], "age": 30, "gender": "male"}
    )

    assert resp.status_code == 500
    assert resp.get_json() == {
        "error": "Terjadi kesalahan: Konfigurasi tidak valid: LLM_TEMPERATURE",
        "kind": "configuration",
    }
