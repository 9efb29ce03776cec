"""
Tests for environment-driven configuration.
"""
import json
import logging

from translateme.config.loader import ConfigLoader
from translateme.config.settings import ClearPolicy, Environment, LogLevel, Settings
from translateme.core.logging import JsonFormatter, configure_logging


def test_defaults():
    settings = Settings()
    assert settings.translation.base_url == "https://api.mymemory.translated.net/get"
    assert settings.translation.timeout_seconds is None
    assert settings.history.batch_delete is True
    assert settings.history.clear_policy == ClearPolicy.RECONCILE


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("HISTORY_CLEAR_POLICY", "OPTIMISTIC")
    monkeypatch.setenv("HISTORY_BATCH_DELETE", "false")
    monkeypatch.setenv("TRANSLATION_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ENVIRONMENT", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.history.clear_policy == ClearPolicy.OPTIMISTIC
    assert settings.history.batch_delete is False
    assert settings.translation.timeout_seconds == 2.5
    assert settings.environment == Environment.TESTING
    assert settings.log_level == LogLevel.DEBUG


def test_loader_without_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = ConfigLoader.load_environment_config("staging")
    assert settings.environment == Environment.STAGING
    assert ConfigLoader.validate_environment_config("staging")
    assert ConfigLoader.get_available_environments() == []


def test_loader_reads_nested_groups_from_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env.production").write_text(
        "LOG_FORMAT=text\n"
        "HISTORY_DATABASE_URL=postgresql+asyncpg://user:pw@db:5432/translateme\n"
        "HISTORY_CLEAR_POLICY=optimistic\n"
        "HISTORY_BATCH_DELETE=false\n"
        "TRANSLATION_TIMEOUT_SECONDS=3\n"
        "TRANSLATION_CONTACT_EMAIL=ops@example.com\n"
    )

    settings = ConfigLoader.load_environment_config("production")

    assert settings.environment == Environment.PRODUCTION
    assert settings.log_format == "text"
    assert settings.history.database_url == "postgresql+asyncpg://user:pw@db:5432/translateme"
    assert settings.history.clear_policy == ClearPolicy.OPTIMISTIC
    assert settings.history.batch_delete is False
    assert settings.translation.timeout_seconds == 3
    assert settings.translation.contact_email == "ops@example.com"
    assert ConfigLoader.get_available_environments() == ["production"]


def test_default_env_file_reaches_nested_groups(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("HISTORY_CLEAR_POLICY=optimistic\n")

    assert Settings().history.clear_policy == ClearPolicy.OPTIMISTIC


def test_sample_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = ConfigLoader.create_sample_env_file("production")

    content = (tmp_path / path).read_text()
    assert "ENVIRONMENT=production" in content
    assert "HISTORY_CLEAR_POLICY=reconcile" in content
    assert "postgresql+asyncpg://" in content
    assert ConfigLoader.get_available_environments() == []


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("translateme.test", logging.INFO, __file__, 1, "saved %s", ("x",), None)
    record.request_id = "abc"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "saved x"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "abc"
    assert "args" not in payload


def test_configure_logging_replaces_its_own_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])

    configure_logging("INFO", "json")
    configure_logging("INFO", "text")

    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_configure_logging_keeps_foreign_handlers(monkeypatch):
    root = logging.getLogger()
    foreign = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [foreign])

    configure_logging("INFO", "json")

    assert root.handlers == [foreign]
