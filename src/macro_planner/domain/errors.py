"""Error types raised by the macro planner core."""


class StorageError(RuntimeError):
    """Raised when the storage medium rejects a read or write."""


class MacroClientError(RuntimeError):
    """Raised by macro clients when the upstream service cannot be reached."""
