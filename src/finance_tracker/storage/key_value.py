import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

class StorageError(Exception):
    """Raised when the key-value store cannot be read or written."""
    pass

class StorageConfig:
    """Key-value storage configuration settings."""

    def __init__(self, path: Path | str = "data/storage.json"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

class KeyValueStore(ABC):
    """
    A string-to-string store, the local analogue of browser local storage.

    Values are opaque strings; callers own serialization.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value under a key, overwriting any prior value.

        Raises:
            StorageError: If the backing store cannot be written
        """
        pass

class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Nothing survives the session."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

class JsonFileKeyValueStore(KeyValueStore):
    """
    Keeps every key in a single JSON object on disk.

    Each write rewrites the whole file through a temporary sibling,
    so a failed write leaves the previous snapshot in place.
    """

    def __init__(self, config: StorageConfig):
        self.config = config

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all(strict=False)
        data[key] = value
        self._write_all(data)

    def _read_all(self, strict: bool = True) -> Dict[str, str]:
        """
        Load the whole file.

        Args:
            strict: Raise on a corrupt file. When False, a corrupt file
                is treated as empty so the next write replaces it.
        """
        path = self.config.path
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            if strict:
                raise StorageError(f"Could not read storage file {path}: {e}") from e
            logger.warning("Discarding unreadable storage file %s: %s", path, e)
            return {}

        if not isinstance(data, dict):
            if strict:
                raise StorageError(f"Storage file {path} does not contain a JSON object")
            logger.warning("Discarding storage file %s: not a JSON object", path)
            return {}

        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        path = self.config.path
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Could not write storage file {path}: {e}") from e
