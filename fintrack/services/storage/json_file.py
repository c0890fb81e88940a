"""
JSON File Storage Implementation

Each key is stored as ``<data_dir>/<key>.json``.

TRADEOFFS:
- One file per collection, rewritten in full on every change
  (fine for personal-scale data)
- Writes go to a temporary file first and are moved into place, so a
  crash never leaves half a collection on disk
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

from fintrack.services.storage.interface import (
    KeyValueStorage,
    StorageKeyError,
    StorageReadError,
    StorageWriteError,
)


VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")

SUFFIX = ".json"


class JsonFileStorage(KeyValueStorage):
    """Key-value storage backed by a directory of JSON files."""

    def __init__(self, data_dir: Union[str, Path]):
        self._dir = Path(data_dir).expanduser()

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        if not VALID_KEY.match(key):
            raise StorageKeyError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}{SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Could not read {path}: {e}")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageWriteError(f"Could not write {path}: {e}")

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageWriteError(f"Could not delete {key}: {e}")

    def keys(self) -> list[str]:
        if not self._dir.is_dir():
            return []
        return sorted(p.name[: -len(SUFFIX)] for p in self._dir.glob(f"*{SUFFIX}"))
