"""KeyValueSlot protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueSlot(Protocol):
    """A durable string-valued key-value area.

    ``get`` returns ``None`` for a missing key.  Implementations raise
    :class:`~pyvehold.exceptions.HoldStorageError` on I/O failure.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
