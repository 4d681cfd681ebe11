"""Dependency container wiring for the application."""

from dataclasses import dataclass

from macro_planner.adapters.file_storage import FileStorage
from macro_planner.adapters.openai_macro_client import OpenAIMacroClient
from macro_planner.config import Settings, parse_timezone
from macro_planner.services.entries import EntryStore
from macro_planner.services.goals import GoalStore
from macro_planner.services.macro_parser import MacroParseService
from macro_planner.services.stats import StatsService
from macro_planner.services.storage import KeyValueStorage, StorageKeys
from macro_planner.services.user_settings import SettingsStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: KeyValueStorage
    goal_store: GoalStore
    entry_store: EntryStore
    settings_store: SettingsStore
    stats_service: StatsService
    macro_parse_service: MacroParseService


def build_container(
    settings: Settings | None = None, storage: KeyValueStorage | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_storage = storage or FileStorage(resolved_settings.data_dir)
    keys = StorageKeys.for_namespace(resolved_settings.storage_namespace)
    timezone = parse_timezone(resolved_settings.timezone)

    goal_store = GoalStore(resolved_storage, keys)
    entry_store = EntryStore(resolved_storage, keys, timezone=timezone)
    settings_store = SettingsStore(
        storage=resolved_storage,
        keys=keys,
        goal_store=goal_store,
        entry_store=entry_store,
    )
    stats_service = StatsService(entry_store, goal_store, timezone=timezone)
    macro_parse_service = MacroParseService(
        client_factory=OpenAIMacroClient.create,
        model=resolved_settings.openai_model,
        max_tokens=resolved_settings.openai_max_tokens,
        temperature=resolved_settings.openai_temperature,
    )

    return AppContainer(
        settings=resolved_settings,
        storage=resolved_storage,
        goal_store=goal_store,
        entry_store=entry_store,
        settings_store=settings_store,
        stats_service=stats_service,
        macro_parse_service=macro_parse_service,
    )
