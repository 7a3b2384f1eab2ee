"""Base model and enum for persisted ledger data.

Every ledger model inherits from :class:`HoldBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys of the persisted
  blob map automatically to snake_case fields.
* ``frozen=True``; state changes produce new instances via
  ``model_copy(update=...)``.

Closed enums inherit from :class:`HoldEnum` whose ``_missing_`` hook
resolves any unmapped value to the *first* declared member instead of
raising ``ValueError``.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HoldEnum(enum.StrEnum):
    """Base for string enums read back from storage.

    Subclasses declare their fallback member first.
    """

    @classmethod
    def _missing_(cls, value: object) -> HoldEnum:
        return next(iter(cls))


class HoldBaseModel(BaseModel):
    """Base for ledger models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict in persisted (camelCase) form."""
        return self.model_dump(mode="json", by_alias=True)
