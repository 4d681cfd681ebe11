"""Goal weight store."""

import logging
import math
from dataclasses import dataclass

from macro_planner.services.storage import KeyValueStorage, StorageKeys

_logger = logging.getLogger(__name__)


@dataclass
class GoalStore:
    """Persists the single goal body weight in pounds."""

    storage: KeyValueStorage
    keys: StorageKeys

    def get(self) -> float | None:
        """Return the goal weight, or None when unset or invalid."""
        stored = self.storage.get(self.keys.goal_weight)
        if not stored:
            return None
        try:
            weight = float(stored)
        except ValueError:
            _logger.warning("Ignoring unparsable goal weight: %r", stored)
            return None
        if not math.isfinite(weight) or weight <= 0:
            return None
        return weight

    def set(self, weight: float) -> None:
        """Persist a positive goal weight; other values are ignored."""
        if not math.isfinite(weight) or weight <= 0:
            return
        self.storage.set(self.keys.goal_weight, str(weight))

    def clear(self) -> None:
        """Remove the stored goal weight."""
        self.storage.remove(self.keys.goal_weight)
