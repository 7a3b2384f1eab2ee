"""Data models for the hold ledger."""

from pyvehold.models._base import HoldBaseModel, HoldEnum
from pyvehold.models.hold import HoldLedger, HoldRecord, HoldStatus
from pyvehold.models.result import HoldPlaced, HoldRejected, HoldRejectionReason, PlaceHoldResult

__all__ = [
    "HoldBaseModel",
    "HoldEnum",
    "HoldLedger",
    "HoldPlaced",
    "HoldRecord",
    "HoldRejected",
    "HoldRejectionReason",
    "HoldStatus",
    "PlaceHoldResult",
]
