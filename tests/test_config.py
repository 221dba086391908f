import logging
import os
from unittest.mock import patch

from vitality.config import (
    AppSettings,
    OpenAISettings,
    Settings,
    StorageSettings,
    load_settings,
    validate_settings,
)


def test_load_settings_smoke(tmp_path):
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings is not None
    assert hasattr(settings, "openai")
    assert hasattr(settings, "storage")
    assert hasattr(settings, "app")


def test_defaults(tmp_path):
    with patch.dict(os.environ, {}, clear=True):
        settings = load_settings(str(tmp_path / "missing.env"))

    assert settings.openai.api_key is None
    assert settings.openai.model_name == "gpt-4o-mini"
    assert settings.openai.max_tokens == 500
    assert settings.storage.history_retention_days == 30
    assert settings.storage.max_cached_replies == 100
    assert settings.app.assistant_cache_hours == 24
    assert settings.app.use_fallback_assistant is True
    assert settings.app.log_level == "INFO"


def test_environment_overrides(tmp_path):
    env = {
        "OPENAI_API_KEY": "sk-test",
        "OPENAI_BASE_URL": "http://localhost:8080/v1/",
        "OPENAI_TEMPERATURE": "0.2",
        "VITALITY_STORAGE_ROOT": str(tmp_path),
        "VITALITY_USE_FALLBACK_ASSISTANT": "false",
        "VITALITY_LOG_LEVEL": "debug",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = load_settings(str(tmp_path / "missing.env"))

    assert settings.openai.is_configured
    assert settings.openai.base_url == "http://localhost:8080/v1"
    assert settings.openai.temperature == 0.2
    assert settings.storage.local_root == str(tmp_path)
    assert settings.app.use_fallback_assistant is False
    assert settings.app.log_level == "DEBUG"


def test_env_file_does_not_override_environment(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENAI_MODEL=from-file\nVITALITY_MAX_CACHED_REPLIES=7\n")

    with patch.dict(os.environ, {"OPENAI_MODEL": "from-env"}, clear=True):
        settings = load_settings(str(env_file))

    assert settings.openai.model_name == "from-env"
    assert settings.storage.max_cached_replies == 7


def test_validate_settings_returns_list():
    errors = validate_settings(Settings())
    assert errors == []


def test_validate_settings_reports_problems():
    settings = Settings(
        openai=OpenAISettings(api_key=None, max_tokens=0, temperature=3.0),
        storage=StorageSettings(history_retention_days=0, max_cached_replies=0),
        app=AppSettings(assistant_cache_hours=-1, use_fallback_assistant=False),
    )
    errors = validate_settings(settings)

    assert len(errors) == 6
    assert any("OPENAI_API_KEY" in error for error in errors)
    assert any("OPENAI_TEMPERATURE" in error for error in errors)


def test_log_level_is_applied_to_package_logger(tmp_path):
    package_logger = logging.getLogger("vitality")
    previous = package_logger.level
    try:
        with patch.dict(os.environ, {"VITALITY_LOG_LEVEL": "warning"}, clear=True):
            settings = load_settings(str(tmp_path / "missing.env"))

        assert settings.app.log_level == "WARNING"
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(previous)


def test_validate_settings_rejects_unknown_log_level():
    settings = Settings(app=AppSettings(log_level="LOUD"))
    assert validate_settings(settings) == ["VITALITY_LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL."]
