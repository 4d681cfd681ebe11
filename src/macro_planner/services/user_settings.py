"""Settings store for the external-service credential and data reset."""

import logging
from dataclasses import dataclass

from macro_planner.services.entries import EntryStore
from macro_planner.services.goals import GoalStore
from macro_planner.services.storage import KeyValueStorage, StorageKeys

_logger = logging.getLogger(__name__)


@dataclass
class SettingsStore:
    """Holds the optional API key and clears all stored data on request."""

    storage: KeyValueStorage
    keys: StorageKeys
    goal_store: GoalStore
    entry_store: EntryStore

    def get_credential(self) -> str | None:
        """Return the stored API key, if any."""
        return self.storage.get(self.keys.credential)

    def set_credential(self, value: str) -> None:
        """Persist the API key."""
        self.storage.set(self.keys.credential, value)

    def clear_credential(self) -> None:
        """Remove the stored API key."""
        self.storage.remove(self.keys.credential)

    def has_credential(self) -> bool:
        """Return True when an API key is stored."""
        return bool(self.get_credential())

    def clear_all(self) -> None:
        """Clear the goal weight, every entry and the API key, in that order.

        There is no rollback: if a step fails, earlier steps stay applied.
        """
        self.goal_store.clear()
        self.entry_store.clear()
        self.clear_credential()
        _logger.info("Cleared all stored data")
