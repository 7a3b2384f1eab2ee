"""JSON-file slot.

The file holds a single JSON object mapping keys to string values, the
same shape a browser's local storage area has.  Writes go to a sibling
temporary file first and are moved into place with :func:`os.replace`.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from pyvehold.exceptions import HoldStorageError

_logger = logging.getLogger(__name__)


class JsonFileSlot:
    """Slot persisted as a JSON object file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self, key: str = "") -> dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise HoldStorageError(f"Cannot read {self._path}: {exc}", key=key, backend="json") from exc
        try:
            data = json.loads(text) if text.strip() else {}
        except ValueError:
            _logger.warning("Slot file %s is not valid JSON; treating it as empty", self._path)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Slot file %s does not hold a JSON object; treating it as empty", self._path)
            return {}
        return data

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._load(key).get(key)
        if value is None or isinstance(value, str):
            return value
        # Hand-edited files may inline the object instead of a string.
        return json.dumps(value)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load(key)
            data[key] = value
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self._path.name}.",
                    suffix=".tmp",
                    dir=self._path.parent,
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        json.dump(data, fh, ensure_ascii=False, indent=2)
                    os.replace(tmp_name, self._path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                raise HoldStorageError(f"Cannot write {self._path}: {exc}", key=key, backend="json") from exc
