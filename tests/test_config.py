"""Tests for application settings."""

import json
import logging
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from study_helper.config import Settings, configure_logging
from study_helper.domain.study.services import SubjectSortOrder

_SETTING_NAMES = (
    "DATABASE_URL",
    "STUDY_API_BASE_URL",
    "REQUEST_TIMEOUT",
    "SUBJECT_ORDER",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTING_NAMES:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///study.db"
        assert settings.STUDY_API_BASE_URL == "https://wp.zybooks.com/study-helper.php"
        assert settings.REQUEST_TIMEOUT == 30.0
        assert settings.ENVIRONMENT == "development"
        assert settings.subject_sort_order is SubjectSortOrder.ALPHABETIC

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STUDY_API_BASE_URL", "  https://example.test/api.php \n")
        monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("SUBJECT_ORDER", "new_first")

        settings = Settings(_env_file=None)

        assert settings.STUDY_API_BASE_URL == "https://example.test/api.php"
        assert settings.REQUEST_TIMEOUT == 2.5
        assert settings.subject_sort_order is SubjectSortOrder.NEW_FIRST

    def test_unknown_order_falls_back_to_oldest_first(self) -> None:
        settings = Settings(SUBJECT_ORDER="by_colour", _env_file=None)
        assert settings.subject_sort_order is SubjectSortOrder.OLD_FIRST

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("DATABASE_URL=sqlite:///from-env-file.db\n")
        monkeypatch.chdir(tmp_path)

        assert Settings().DATABASE_URL == "sqlite:///from-env-file.db"

    def test_invalid_environment(self) -> None:
        with pytest.raises(ValidationError):
            Settings(ENVIRONMENT="staging", _env_file=None)


class TestConfigureLogging:
    def test_production_renders_json(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        configure_logging("production")
        try:
            structlog.get_logger("study_helper.tests").info("subject_added", subject_id=1)
        finally:
            structlog.reset_defaults()

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "subject_added"
        assert event["subject_id"] == 1
        assert event["level"] == "info"
