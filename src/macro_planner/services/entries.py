"""Food entry store."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, tzinfo
from uuid import uuid4

from macro_planner.domain.entries import EntryDraft, FoodEntry
from macro_planner.services.calculations import (
    derive_calories,
    derive_date_key,
    ensure_aware,
)
from macro_planner.services.storage import KeyValueStorage, StorageKeys

_logger = logging.getLogger(__name__)

_SOURCES = {"manual", "ai"}


def _new_id() -> str:
    return str(uuid4())


@dataclass
class EntryStore:
    """CRUD store for food entries with derived-field recomputation.

    The whole collection is read and rewritten on every mutation.
    """

    storage: KeyValueStorage
    keys: StorageKeys
    timezone: tzinfo | None = None
    id_factory: Callable[[], str] = field(default=_new_id)

    def get_all(self) -> list[FoodEntry]:
        """Return all entries, most recent first.

        A payload that is not a JSON array is removed and read as empty.
        """
        stored = self.storage.get(self.keys.entries)
        if not stored:
            return []
        try:
            payload = json.loads(stored)
        except ValueError:
            _logger.warning("Resetting corrupt entries payload")
            self.clear()
            return []
        if not isinstance(payload, list):
            _logger.warning("Resetting entries payload that is not a list")
            self.clear()
            return []

        entries: list[FoodEntry] = []
        for row in payload:
            entry = _parse_entry(row, self.timezone)
            if entry is None:
                _logger.warning("Skipping undecodable entry: %r", row)
                continue
            entries.append(entry)
        return sorted(entries, key=lambda entry: entry.logged_at, reverse=True)

    def get(self, entry_id: str) -> FoodEntry | None:
        """Return an entry by id."""
        for entry in self.get_all():
            if entry.id == entry_id:
                return entry
        return None

    def add(self, draft: EntryDraft) -> FoodEntry:
        """Store a new entry and return it with its id and derived fields."""
        entries = self.get_all()
        logged_at = ensure_aware(draft.logged_at, self.timezone)
        entry = FoodEntry(
            id=self.id_factory(),
            logged_at=logged_at,
            date_key=derive_date_key(logged_at, self.timezone),
            label=draft.label,
            protein_g=draft.protein_g,
            carbs_g=draft.carbs_g,
            fat_g=draft.fat_g,
            calories=derive_calories(draft.protein_g, draft.carbs_g, draft.fat_g),
            source=draft.source,
            raw_text=draft.raw_text,
        )
        entries.append(entry)
        self._write(entries)
        return entry

    def update(  # noqa: PLR0913
        self,
        entry_id: str,
        *,
        logged_at: datetime | None = None,
        label: str | None = None,
        protein_g: float | None = None,
        carbs_g: float | None = None,
        fat_g: float | None = None,
    ) -> FoodEntry | None:
        """Apply changes to an entry and re-derive its date key and calories.

        Arguments left as None keep their current value. Returns None when no
        entry has the given id.
        """
        entries = self.get_all()
        index = next(
            (i for i, entry in enumerate(entries) if entry.id == entry_id), None
        )
        if index is None:
            return None

        current = entries[index]
        merged = replace(
            current,
            logged_at=current.logged_at
            if logged_at is None
            else ensure_aware(logged_at, self.timezone),
            label=current.label if label is None else label,
            protein_g=current.protein_g if protein_g is None else protein_g,
            carbs_g=current.carbs_g if carbs_g is None else carbs_g,
            fat_g=current.fat_g if fat_g is None else fat_g,
        )
        updated = replace(
            merged,
            date_key=derive_date_key(merged.logged_at, self.timezone),
            calories=derive_calories(merged.protein_g, merged.carbs_g, merged.fat_g),
        )
        entries[index] = updated
        self._write(entries)
        return updated

    def delete(self, entry_id: str) -> bool:
        """Delete an entry; return False when the id is unknown."""
        entries = self.get_all()
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._write(remaining)
        return True

    def clear(self) -> None:
        """Remove the whole entry collection."""
        self.storage.remove(self.keys.entries)

    def _write(self, entries: list[FoodEntry]) -> None:
        payload = [entry_to_payload(entry) for entry in entries]
        self.storage.set(self.keys.entries, json.dumps(payload))


def entry_to_payload(entry: FoodEntry) -> dict[str, object]:
    """Serialize an entry using the persisted field names."""
    return {
        "id": entry.id,
        "datetime": entry.logged_at.isoformat(),
        "dateKey": entry.date_key,
        "label": entry.label,
        "protein_g": entry.protein_g,
        "carbs_g": entry.carbs_g,
        "fat_g": entry.fat_g,
        "calories": entry.calories,
        "source": entry.source,
        "rawText": entry.raw_text,
    }


def _parse_entry(row: object, tz: tzinfo | None) -> FoodEntry | None:
    if not isinstance(row, dict):
        return None
    try:
        logged_at = ensure_aware(datetime.fromisoformat(str(row["datetime"])), tz)
        source = str(row.get("source") or "manual")
        raw_text = row.get("rawText")
        return FoodEntry(
            id=str(row["id"]),
            logged_at=logged_at,
            date_key=str(row["dateKey"]),
            label=str(row.get("label") or ""),
            protein_g=float(row["protein_g"]),
            carbs_g=float(row["carbs_g"]),
            fat_g=float(row["fat_g"]),
            calories=int(row["calories"]),
            source=source if source in _SOURCES else "manual",
            raw_text=str(raw_text) if raw_text is not None else None,
        )
    except (KeyError, TypeError, ValueError):
        return None
