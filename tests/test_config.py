"""Tests for configuration helpers."""

from zoneinfo import ZoneInfo

from macro_planner.config import Settings, parse_timezone


def test_parse_timezone() -> None:
    assert parse_timezone(None) is None
    assert parse_timezone("  ") is None
    assert parse_timezone(" America/New_York ") == ZoneInfo("America/New_York")


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("MACRO_PLANNER_STORAGE_NAMESPACE", "envPlanner")
    monkeypatch.setenv("MACRO_PLANNER_OPENAI_MODEL", "gpt-4.1-mini")

    settings = Settings()

    assert settings.storage_namespace == "envPlanner"
    assert settings.openai_model == "gpt-4.1-mini"
    assert settings.openai_max_tokens == 200
