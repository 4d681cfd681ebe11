"""File-backed key/value storage."""

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from macro_planner.domain.errors import StorageError
from macro_planner.services.storage import KeyValueStorage

_KEY_PATTERN = re.compile(r"[A-Za-z0-9._-]+")


@dataclass
class FileStorage(KeyValueStorage):
    """Stores each key as a UTF-8 file in a data directory.

    A write replaces the key's file atomically; keys are independent. Bytes
    that are not valid UTF-8 are read as replacement characters, leaving the
    decision about corrupt values to the caller.
    """

    root: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Failed to read {key}") from exc

    def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous one."""
        path = self._path_for(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {key}") from exc

    def remove(self, key: str) -> None:
        """Delete a key's file if it exists."""
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove {key}") from exc

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.fullmatch(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / key
