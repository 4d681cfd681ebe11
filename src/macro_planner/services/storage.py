"""Key/value storage abstractions."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueStorage(Protocol):
    """Synchronous string-keyed storage medium.

    Implementations raise ``StorageError`` when the medium fails.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""

    def remove(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


@dataclass(frozen=True)
class StorageKeys:
    """Storage keys shared by the stores under a common namespace."""

    goal_weight: str
    entries: str
    credential: str

    @classmethod
    def for_namespace(cls, namespace: str = "macroPlanner") -> "StorageKeys":
        """Build the key set for a namespace."""
        return cls(
            goal_weight=f"{namespace}.goalWeightLb",
            entries=f"{namespace}.entries",
            credential=f"{namespace}.settings.apiKey",
        )


@dataclass
class InMemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and ephemeral sessions."""

    _values: dict[str, str]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        self._values[key] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        """Return the stored keys."""
        return list(self._values)
