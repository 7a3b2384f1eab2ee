"""Outcome of a hold placement.

Placement never raises for business-rule conflicts; callers branch on
``ok`` (or ``isinstance``) instead::

    result = store.place_on_hold("V1", "a@x.com")
    if not result.ok:
        show_blocked(result.reason, result.active_vehicle_id)
"""

from __future__ import annotations

import enum
from typing import Literal

from pyvehold.models._base import HoldBaseModel
from pyvehold.models.hold import HoldRecord


class HoldRejectionReason(enum.StrEnum):
    LOCKED_BY_OTHER_VEHICLE = "LOCKED_BY_OTHER_VEHICLE"
    ALREADY_ON_HOLD = "ALREADY_ON_HOLD"


class HoldPlaced(HoldBaseModel):
    ok: Literal[True] = True
    record: HoldRecord


class HoldRejected(HoldBaseModel):
    """Placement refused.

    ``active_vehicle_id`` names the blocking vehicle and is only set for
    ``LOCKED_BY_OTHER_VEHICLE``.
    """

    ok: Literal[False] = False
    reason: HoldRejectionReason
    active_vehicle_id: str | None = None


PlaceHoldResult = HoldPlaced | HoldRejected
