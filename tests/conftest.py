"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from macro_planner.config import Settings
from macro_planner.containers import AppContainer, build_container
from macro_planner.domain.errors import MacroClientError, StorageError
from macro_planner.services.entries import EntryStore
from macro_planner.services.goals import GoalStore
from macro_planner.services.macro_parser import MacroClient, MacroParseService
from macro_planner.services.stats import StatsService
from macro_planner.services.storage import InMemoryStorage, StorageKeys
from macro_planner.services.user_settings import SettingsStore

NEW_YORK = ZoneInfo("America/New_York")


class FailingStorage(InMemoryStorage):
    """In-memory storage whose writes fail for selected keys."""

    def __init__(self, failing_keys: set[str] | None = None) -> None:
        super().__init__()
        self.failing_keys = set(failing_keys or ())

    def set(self, key: str, value: str) -> None:
        if key in self.failing_keys:
            raise StorageError(f"quota exceeded for {key}")
        super().set(key, value)

    def remove(self, key: str) -> None:
        if key in self.failing_keys:
            raise StorageError(f"cannot remove {key}")
        super().remove(key)


@dataclass
class FakeMacroClient(MacroClient):
    """Fake macro client returning canned content."""

    content: str | None = (
        '{"protein_g": 30, "carbs_g": 40, "fat_g": 10, '
        '"calories": 999, "notes": "two eggs and toast"}'
    )
    error: Exception | None = None
    close_error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        self.calls.append(
            {
                "model": model,
                "system_prompt": system_prompt,
                "prompt": prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.content

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


def unreachable_client() -> FakeMacroClient:
    return FakeMacroClient(error=MacroClientError("connection refused"))


@pytest.fixture
def keys() -> StorageKeys:
    return StorageKeys.for_namespace()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def goal_store(storage: InMemoryStorage, keys: StorageKeys) -> GoalStore:
    return GoalStore(storage, keys)


@pytest.fixture
def entry_store(storage: InMemoryStorage, keys: StorageKeys) -> EntryStore:
    return EntryStore(storage, keys, timezone=NEW_YORK)


@pytest.fixture
def settings_store(
    storage: InMemoryStorage,
    keys: StorageKeys,
    goal_store: GoalStore,
    entry_store: EntryStore,
) -> SettingsStore:
    return SettingsStore(
        storage=storage, keys=keys, goal_store=goal_store, entry_store=entry_store
    )


@pytest.fixture
def stats_service(entry_store: EntryStore, goal_store: GoalStore) -> StatsService:
    return StatsService(entry_store, goal_store, timezone=NEW_YORK)


@pytest.fixture
def macro_client() -> FakeMacroClient:
    return FakeMacroClient()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", timezone="America/New_York")


@pytest.fixture
def container(
    settings: Settings, storage: InMemoryStorage, macro_client: FakeMacroClient
) -> AppContainer:
    built = build_container(settings, storage=storage)
    built.macro_parse_service = MacroParseService(
        client_factory=lambda _api_key: macro_client,
        model=settings.openai_model,
    )
    return built
