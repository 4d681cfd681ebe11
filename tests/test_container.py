"""Tests for container wiring."""

from pathlib import Path

from macro_planner.adapters.file_storage import FileStorage
from macro_planner.adapters.openai_macro_client import OpenAIMacroClient
from macro_planner.config import Settings
from macro_planner.containers import build_container


def test_build_container_uses_file_storage(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.storage, FileStorage)
    assert container.storage.root == settings.data_dir
    assert container.entry_store.storage is container.storage
    assert container.settings_store.goal_store is container.goal_store
    assert container.settings_store.entry_store is container.entry_store
    assert container.macro_parse_service.client_factory == OpenAIMacroClient.create


def test_build_container_applies_namespace_and_timezone(tmp_path: Path) -> None:
    settings = Settings(
        data_dir=tmp_path,
        storage_namespace="testPlanner",
        timezone="Europe/Berlin",
    )

    container = build_container(settings)
    container.goal_store.set(180)

    assert (tmp_path / "testPlanner.goalWeightLb").read_text(encoding="utf-8") == "180"
    assert str(container.entry_store.timezone) == "Europe/Berlin"
    assert container.stats_service.timezone == container.entry_store.timezone
