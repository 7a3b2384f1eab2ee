"""pyvehold - single-active vehicle hold ledger for dealership back offices."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvehold")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvehold.config import HoldConfig
from pyvehold.events import ChangeNotifier
from pyvehold.exceptions import HoldConfigError, HoldError, HoldStorageError
from pyvehold.ledger import HoldLedgerStore, open_ledger
from pyvehold.models import (
    HoldLedger,
    HoldPlaced,
    HoldRecord,
    HoldRejected,
    HoldRejectionReason,
    HoldStatus,
    PlaceHoldResult,
)
from pyvehold.policy import compute_remaining_seconds, format_duration
from pyvehold.storage import JsonFileSlot, KeyValueSlot, MemorySlot, SqliteSlot, open_slot

__all__ = [
    "__version__",
    "ChangeNotifier",
    "HoldConfig",
    "HoldConfigError",
    "HoldError",
    "HoldLedger",
    "HoldLedgerStore",
    "HoldPlaced",
    "HoldRecord",
    "HoldRejected",
    "HoldRejectionReason",
    "HoldStatus",
    "HoldStorageError",
    "JsonFileSlot",
    "KeyValueSlot",
    "MemorySlot",
    "PlaceHoldResult",
    "SqliteSlot",
    "compute_remaining_seconds",
    "format_duration",
    "open_ledger",
    "open_slot",
]
