"""Durable key-value slots the ledger is persisted to."""

from __future__ import annotations

import os
from pathlib import Path

from pyvehold._constants import SQLITE_SUFFIXES
from pyvehold.storage.base import KeyValueSlot
from pyvehold.storage.files import JsonFileSlot
from pyvehold.storage.memory import MemorySlot
from pyvehold.storage.sqlite import SqliteSlot


def open_slot(path: str | os.PathLike[str] | None) -> KeyValueSlot:
    """Pick a slot backend for *path*.

    ``None`` (or an empty string) gives a :class:`MemorySlot`; ``":memory:"``
    and SQLite suffixes give a :class:`SqliteSlot`; anything else a
    :class:`JsonFileSlot`.
    """
    if not path:
        return MemorySlot()
    if os.fspath(path) == ":memory:" or Path(path).suffix.lower() in SQLITE_SUFFIXES:
        return SqliteSlot(os.fspath(path))
    return JsonFileSlot(path)


__all__ = [
    "JsonFileSlot",
    "KeyValueSlot",
    "MemorySlot",
    "SqliteSlot",
    "open_slot",
]
