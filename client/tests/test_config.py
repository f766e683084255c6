"""
Tests for settings, logging setup and the default notifier.
"""
import json
import logging

from connection_setup.config import Settings
from connection_setup.logging_config import PACKAGE_LOGGER, JSONFormatter, setup_logging
from connection_setup.ui import LoggingNotifier, Severity


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.max_upload_bytes == 524_288_000
    assert settings.system_prompt_min_length == 10
    assert settings.show_sample_datasets is False


def test_environment_aliases(monkeypatch):
    monkeypatch.setenv("SHOW_SAMPLE_DATASETS", "true")
    monkeypatch.setenv("API_BASE_URL", "http://backend:7377")

    settings = Settings(_env_file=None)

    assert settings.show_sample_datasets is True
    assert settings.api_base_url == "http://backend:7377"


def test_setup_logging_json():
    logger = setup_logging(Settings(_env_file=None, log_level="DEBUG", log_format="json"))

    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)


def test_json_formatter():
    record = logging.LogRecord("connection_setup.x", logging.INFO, __file__, 1, "hello %s", ("db",), None)

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello db"
    assert payload["level"] == "INFO"


def test_logging_notifier_maps_severity(caplog):
    with caplog.at_level(logging.INFO, logger="connection_setup"):
        LoggingNotifier().notify(Severity.ERROR, "Invalid DSN")

    assert caplog.records[-1].levelno == logging.ERROR
    assert "Invalid DSN" in caplog.records[-1].getMessage()
