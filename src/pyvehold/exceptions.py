"""Custom exception hierarchy for pyvehold.

Rejected hold placements are *not* exceptions; they come back as
:class:`~pyvehold.models.result.HoldRejected` values.  The classes here
cover configuration mistakes and storage backends that fail at the I/O
level.
"""

from __future__ import annotations


class HoldError(Exception):
    """Base exception for all pyvehold errors."""


class HoldConfigError(HoldError):
    """Invalid or missing configuration."""


class HoldStorageError(HoldError):
    """The key-value slot backend could not be read or written."""

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
        backend: str = "",
    ) -> None:
        self.key = key
        self.backend = backend
        super().__init__(message)
