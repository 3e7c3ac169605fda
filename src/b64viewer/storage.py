"""Ephemeral session storage for the last encoded, viewed or pasted input.

Entries live in a single JSON object on disk keyed by `StorageKey` values.
Every operation is best effort: failures are logged and reported through the
return value, never raised.
"""

from __future__ import annotations

import json
from pathlib import Path

from b64viewer.logging import get_logger
from b64viewer.settings import Settings, get_settings
from b64viewer.typing.enums import StorageKey
from b64viewer.typing.models import StoredFile

logger = get_logger(__name__)


class SessionStorage:
    """String and file slots persisted in a JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SessionStorage:
        """Build storage at the configured path."""
        config = settings or get_settings()
        return cls(Path(config.storage_path))

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    def _read_entries(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        entries = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(entries, dict):
            raise ValueError("Session storage must hold a JSON object")  # noqa: TRY003, TRY004
        return entries

    def _write_entries(self, entries: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(entries), encoding="utf-8")

    def save(self, key: StorageKey, stored: StoredFile) -> bool:
        """Store an encoded file.

        Args:
            key (StorageKey): Storage slot.
            stored (StoredFile): File to store.

        Returns:
            bool: True when the entry was written.
        """
        return self.save_string(key, stored.model_dump_json())

    def save_string(self, key: StorageKey, value: str) -> bool:
        """Store a raw string.

        Args:
            key (StorageKey): Storage slot.
            value (str): Value to store.

        Returns:
            bool: True when the entry was written.
        """
        try:
            entries = self._read_entries()
        except (OSError, ValueError):
            entries = {}
        entries[key.value] = value
        try:
            self._write_entries(entries)
        except OSError as exc:
            logger.warning("Failed to save to session storage", extra={"key": key.value, "error": str(exc)})
            return False
        return True

    def load(self, key: StorageKey) -> StoredFile | None:
        """Load an encoded file, or None when absent or unreadable."""
        raw = self.load_string(key)
        if not raw:
            return None
        try:
            return StoredFile.model_validate_json(raw)
        except ValueError:
            return None

    def load_string(self, key: StorageKey) -> str | None:
        """Load a raw string, or None when absent or unreadable."""
        try:
            value = self._read_entries().get(key.value)
        except (OSError, ValueError):
            return None
        return value if isinstance(value, str) else None

    def remove(self, key: StorageKey) -> None:
        """Drop one slot."""
        try:
            entries = self._read_entries()
            if entries.pop(key.value, None) is not None:
                self._write_entries(entries)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to remove from session storage", extra={"key": key.value, "error": str(exc)})

    def clear_all(self) -> None:
        """Drop every slot owned by the application."""
        try:
            entries = self._read_entries()
        except (OSError, ValueError):
            entries = {}
        for key in StorageKey:
            entries.pop(key.value, None)
        try:
            if entries:
                self._write_entries(entries)
            else:
                self._path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to clear session storage", extra={"error": str(exc)})
