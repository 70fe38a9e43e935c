"""Tests for configuration loading and provider selection."""

import logging
from contextlib import contextmanager
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from classify_api.adapters import factory
from classify_api.adapters.factory import build_provider
from classify_api.adapters.ollama_adapter import OllamaAdapter
from classify_api.core.config import (
    ExtractionSettings,
    configure_logging,
    get_extraction_settings,
    load_config,
)


@pytest.fixture(autouse=True)
def no_provider_override(monkeypatch):
    monkeypatch.delenv("LLM_PROVIDER", raising=False)


class TestLoadConfig:
    def test_reads_yaml_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("extraction:\n  provider: ollama\n  max_attempts: 5\n")

        config = load_config(str(path))

        assert config["extraction"]["provider"] == "ollama"

    def test_project_config_is_found(self) -> None:
        config = load_config("config.yaml")

        assert config["extraction"]["max_attempts"] == 3
        assert config["extraction"]["backoff_ms"] == 500

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.yaml"))

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("extraction: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(str(path))

    def test_empty_file_gives_empty_config(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(str(path)) == {}


class TestExtractionSettings:
    def test_defaults(self) -> None:
        settings = get_extraction_settings({})

        assert settings.provider == "gemini"
        assert settings.max_attempts == 3
        assert settings.backoff_ms == 500
        assert settings.ollama.model == "llama3"

    def test_nested_sections(self) -> None:
        settings = get_extraction_settings(
            {"extraction": {"provider": "ollama", "ollama": {"host": "http://localhost:11434"}}}
        )

        assert settings.provider == "ollama"
        assert settings.ollama.host == "http://localhost:11434"

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("LLM_PROVIDER", " None ")

        assert get_extraction_settings({"extraction": {"provider": "gemini"}}).provider == "none"

    @pytest.mark.parametrize(
        "section",
        [{"provider": "openai"}, {"max_attempts": 0}, {"backoff_ms": -1}],
    )
    def test_invalid_values_rejected(self, section: dict) -> None:
        with pytest.raises(ValidationError):
            get_extraction_settings({"extraction": section})


class TestBuildProvider:
    def test_none_disables_remote_tier(self) -> None:
        assert build_provider(ExtractionSettings(provider="none"), api_key="secret") is None

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_gemini_without_credential_is_fallback_mode(self, api_key) -> None:
        assert build_provider(ExtractionSettings(provider="gemini"), api_key=api_key) is None

    def test_gemini_with_credential(self, monkeypatch) -> None:
        created = {}

        class StubGemini:
            def __init__(self, api_key, model_name, timeout_ms):
                created.update(api_key=api_key, model_name=model_name, timeout_ms=timeout_ms)

        monkeypatch.setattr(factory, "GeminiAdapter", StubGemini)

        provider = build_provider(ExtractionSettings(provider="gemini"), api_key="secret")

        assert isinstance(provider, StubGemini)
        assert created == {"api_key": "secret", "model_name": "gemini-flash-latest", "timeout_ms": 30000}

    def test_ollama_needs_no_credential(self) -> None:
        provider = build_provider(ExtractionSettings(provider="ollama"))

        assert isinstance(provider, OllamaAdapter)
        assert provider.api_url == "http://ollama:11434/api/generate"


@contextmanager
def bare_root_logger():
    """Temporarily strips root handlers so basicConfig takes effect."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


class TestConfigureLogging:
    @pytest.mark.parametrize(
        "env_value,expected",
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR)],
    )
    def test_root_level_follows_log_level(self, monkeypatch, env_value: str, expected: int) -> None:
        monkeypatch.setenv("LOG_LEVEL", env_value)

        with bare_root_logger() as root:
            configure_logging()
            level = root.level

        assert level == expected

    def test_defaults_to_info(self, monkeypatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        with bare_root_logger() as root:
            configure_logging()
            level = root.level

        assert level == logging.INFO

    def test_unknown_level_falls_back_to_info(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")

        with bare_root_logger() as root:
            configure_logging()
            level = root.level

        assert level == logging.INFO

    def test_second_call_keeps_first_configuration(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        with bare_root_logger() as root:
            configure_logging()
            monkeypatch.setenv("LOG_LEVEL", "ERROR")
            configure_logging()
            level, handler_count = root.level, len(root.handlers)

        assert level == logging.DEBUG
        assert handler_count == 1
