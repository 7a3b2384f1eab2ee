"""Hold record and ledger models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pyvehold._constants import DEFAULT_DEPOSIT_AMOUNT, LEDGER_VERSION
from pyvehold.models._base import HoldBaseModel, HoldEnum


class HoldStatus(HoldEnum):
    """Hold state of a single vehicle.

    ``AVAILABLE`` is declared first so that any unrecognised stored
    value resolves to it.
    """

    AVAILABLE = "AVAILABLE"
    ON_HOLD = "ON_HOLD"
    CANCELLED = "CANCELLED"


class HoldRecord(HoldBaseModel):
    """Hold state for one vehicle.

    Timestamps are integer milliseconds since the epoch.
    """

    vehicle_id: str
    status: HoldStatus = HoldStatus.AVAILABLE
    holder_email: str | None = None
    deposit_amount: float = DEFAULT_DEPOSIT_AMOUNT
    hold_started_at: int | None = None
    hold_expires_at: int | None = None
    cancelled_at: int | None = None

    @property
    def is_on_hold(self) -> bool:
        """Whether the record is ON_HOLD as stored (expiry not evaluated)."""
        return self.status is HoldStatus.ON_HOLD


class HoldLedger(HoldBaseModel):
    """The complete vehicle -> hold mapping, persisted as one unit."""

    version: Literal[1] = LEDGER_VERSION
    holds: dict[str, HoldRecord] = Field(default_factory=dict)

    def active_vehicle_id(self) -> str | None:
        """Return the first ON_HOLD vehicle in ledger order, if any."""
        for vehicle_id, record in self.holds.items():
            if record.is_on_hold:
                return vehicle_id
        return None

    def with_record(self, record: HoldRecord) -> HoldLedger:
        """Return a copy with *record* inserted or replaced."""
        return HoldLedger(holds={**self.holds, record.vehicle_id: record})

    def without(self, vehicle_id: str) -> HoldLedger:
        """Return a copy with *vehicle_id* removed."""
        return HoldLedger(holds={k: v for k, v in self.holds.items() if k != vehicle_id})
