"""Key-value persistence backends for the todo store."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Protocol

from todolist.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.todolist/todos.json"

_TRUTHY = {"1", "true", "yes"}


def debug_enabled() -> bool:
    """Return True when TODOLIST_DEBUG asks for debug logging.

    Read on every call so tests and long-running shells can toggle it.
    """
    return os.environ.get("TODOLIST_DEBUG", "").strip().lower() in _TRUTHY


class KeyValueStorage(Protocol):
    """Synchronous key-value surface the todo store persists into."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-memory key-value storage."""

    def __init__(self, data: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStorage:
    """Key-value storage kept as a single JSON object on disk.

    Every ``set`` rewrites the whole file through a temporary file in the
    same directory followed by an atomic replace, so the file on disk is
    always either the old or the new version.
    """

    def __init__(self, path: str | os.PathLike = DEFAULT_DB_PATH):
        self.path = Path(path).expanduser()

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _create_backup(self, error_message: str) -> str:
        """Copy the current file next to itself before reporting it as broken.

        Args:
            error_message: Description of the error that triggered the backup.

        Returns:
            Path to the backup file.

        Raises:
            StorageError: If the backup cannot be written.
        """
        backup_path = str(self.path) + ".backup"
        try:
            shutil.copy2(self.path, backup_path)
            logger.error(f"{error_message}. Backup created at {backup_path}")
        except OSError as backup_error:
            logger.error(f"Failed to create backup: {backup_error}")
            raise StorageError(f"{error_message}. Failed to create backup") from backup_error
        return backup_path

    def _read(self) -> dict[str, str]:
        """Read the key-value map, or an empty map when the file is absent."""
        if not self.path.exists():
            if debug_enabled():
                logger.debug(f"Storage file {self.path} does not exist, starting empty")
            return {}

        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw_data = json.load(f)
        except json.JSONDecodeError as e:
            backup_path = self._create_backup(f"Invalid JSON in {self.path}")
            raise StorageError(f"Invalid JSON in {self.path}. Backup saved to {backup_path}") from e

        if not isinstance(raw_data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw_data.items()
        ):
            backup_path = self._create_backup(f"Invalid schema in {self.path}")
            raise StorageError(
                f"Invalid schema in {self.path}: expected an object of strings. "
                f"Backup saved to {backup_path}"
            )

        if debug_enabled():
            logger.debug(f"Read {len(raw_data)} key(s) from {self.path}")
        return raw_data

    def _write(self, data: dict[str, str]) -> None:
        """Write the key-value map atomically."""
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if os.name != "nt":
                self.path.parent.chmod(0o700)

        payload = json.dumps(data, indent=2, ensure_ascii=False)

        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=self.path.name + ".",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                # Restrict permissions before any data is written
                try:
                    os.fchmod(f.fileno(), 0o600)
                except AttributeError:
                    # os.fchmod is not available on Windows
                    os.chmod(temp_path, 0o600)
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())

            Path(temp_path).replace(self.path)
        except BaseException:
            Path(temp_path).unlink(missing_ok=True)
            raise

        if debug_enabled():
            logger.debug(f"Wrote {len(payload)} bytes to {self.path}")
