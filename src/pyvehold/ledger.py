"""Vehicle hold ledger.

:class:`HoldLedgerStore` is the only component allowed to mutate the
persisted ledger.  It enforces the single-active-hold rule: at most one
vehicle may be ON_HOLD at any time.

Concurrency
-----------
Each store serializes its own read-check-write sequences with a lock, so
threads sharing one store cannot both pass the placement guard.  Two
*stores* (or processes) pointed at the same slot are not coordinated:
the last write wins and the single-hold rule can be broken by a race
between them.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from pyvehold._redact import redact_for_log
from pyvehold.config import HoldConfig
from pyvehold.events import ChangeCallback, ChangeNotifier
from pyvehold.models.hold import HoldLedger, HoldRecord, HoldStatus
from pyvehold.models.result import HoldPlaced, HoldRejected, HoldRejectionReason, PlaceHoldResult
from pyvehold.normalize import coerce_deposit, normalize_record, parse_ledger_blob, str_or_none
from pyvehold.policy import compute_remaining_seconds, format_duration, is_expired
from pyvehold.storage import KeyValueSlot, MemorySlot, open_slot

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class HoldLedgerStore:
    """Hold ledger persisted to a single key-value slot.

    Usage::

        store = HoldLedgerStore(JsonFileSlot("holds.json"))
        result = store.place_on_hold("V1", "a@x.com")
        if result.ok:
            ...

    Parameters
    ----------
    slot : KeyValueSlot or None
        Where the ledger blob lives.  Defaults to a fresh :class:`MemorySlot`.
    config : HoldConfig or None
        Slot key, hold window and default deposit.
    notifier : ChangeNotifier or None
        Broadcaster fired after every successful mutation.
    clock : callable
        Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        slot: KeyValueSlot | None = None,
        *,
        config: HoldConfig | None = None,
        notifier: ChangeNotifier | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._slot: KeyValueSlot = slot if slot is not None else MemorySlot()
        self._config = config or HoldConfig()
        self._notifier = notifier or ChangeNotifier()
        self._clock = clock
        self._lock = threading.RLock()

    @property
    def config(self) -> HoldConfig:
        return self._config

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def slot(self) -> KeyValueSlot:
        return self._slot

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the slot's resources (e.g. a SQLite connection), if it holds any."""
        close = getattr(self._slot, "close", None)
        if callable(close):
            with self._lock:
                close()

    def __enter__(self) -> HoldLedgerStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def read_ledger(self) -> HoldLedger:
        """Load and normalize the persisted ledger.

        Missing, unparsable or wrongly-shaped blobs yield an empty ledger;
        the fallback is not written back.
        """
        with self._lock:
            raw = self._slot.get(self._config.store_key)
        return parse_ledger_blob(raw)

    def _write(self, ledger: HoldLedger) -> None:
        blob = json.dumps(ledger.to_payload(), separators=(",", ":"))
        self._slot.set(self._config.store_key, blob)

    def _notify(self) -> None:
        self._notifier.notify()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_record(self, vehicle_id: str) -> HoldRecord | None:
        """Return the normalized record for *vehicle_id*, or ``None``."""
        return self.read_ledger().holds.get(vehicle_id)

    def get_status(self, vehicle_id: str) -> HoldStatus:
        """Stored status for *vehicle_id*; ``AVAILABLE`` when absent."""
        record = self.get_record(vehicle_id)
        return HoldStatus.AVAILABLE if record is None else record.status

    def get_active_hold_vehicle_id(self) -> str | None:
        """Return the vehicle currently ON_HOLD, if any."""
        return self.read_ledger().active_vehicle_id()

    def compute_remaining_seconds(self, record: HoldRecord | None) -> int | None:
        return compute_remaining_seconds(record, self._clock())

    format_duration = staticmethod(format_duration)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def place_on_hold(
        self,
        vehicle_id: str,
        holder_email: str | None = None,
        deposit_amount: float | None = None,
    ) -> PlaceHoldResult:
        """Put *vehicle_id* on hold.

        Rejected (nothing written) when another vehicle is ON_HOLD or when
        this vehicle already is.  A CANCELLED vehicle can be placed again.
        """
        with self._lock:
            ledger = self.read_ledger()
            active_vehicle_id = ledger.active_vehicle_id()
            if active_vehicle_id is not None and active_vehicle_id != vehicle_id:
                _logger.info("Hold on %s refused: %s is already on hold", vehicle_id, active_vehicle_id)
                return HoldRejected(
                    reason=HoldRejectionReason.LOCKED_BY_OTHER_VEHICLE,
                    active_vehicle_id=active_vehicle_id,
                )

            existing = ledger.holds.get(vehicle_id)
            if existing is not None and existing.is_on_hold:
                _logger.info("Hold on %s refused: already on hold", vehicle_id)
                return HoldRejected(reason=HoldRejectionReason.ALREADY_ON_HOLD)

            start = self._clock()
            record = HoldRecord(
                vehicle_id=vehicle_id,
                status=HoldStatus.ON_HOLD,
                holder_email=str_or_none(holder_email),
                deposit_amount=coerce_deposit(deposit_amount, self._config.default_deposit),
                hold_started_at=start,
                hold_expires_at=start + self._config.hold_duration_ms,
                cancelled_at=None,
            )
            self._write(ledger.with_record(record))

        _logger.debug("Placed hold: %s", redact_for_log(record.to_payload()))
        self._notify()
        return HoldPlaced(record=record)

    def _cancel_locked(self, vehicle_id: str) -> HoldRecord:
        ledger = self.read_ledger()
        existing = ledger.holds.get(vehicle_id)
        if existing is None:
            existing = normalize_record({}, vehicle_id)
        record = existing.model_copy(
            update={"status": HoldStatus.CANCELLED, "cancelled_at": self._clock()},
        )
        self._write(ledger.with_record(record))
        return record

    def cancel_hold(self, vehicle_id: str) -> HoldRecord:
        """Mark *vehicle_id* CANCELLED, whatever its previous status.

        Other fields of an existing record are kept; an absent vehicle gets
        a default record.  Repeating the call only moves ``cancelled_at``.
        """
        with self._lock:
            record = self._cancel_locked(vehicle_id)
        _logger.debug("Cancelled hold: %s", redact_for_log(record.to_payload()))
        self._notify()
        return record

    def release_hold(self, vehicle_id: str) -> None:
        """Delete *vehicle_id* from the ledger entirely."""
        with self._lock:
            ledger = self.read_ledger()
            self._write(ledger.without(vehicle_id))
        _logger.debug("Released hold record for %s", vehicle_id)
        self._notify()

    def expire_if_needed(self, vehicle_id: str) -> HoldRecord | None:
        """Cancel an ON_HOLD record whose window has passed.

        This is the only time-based transition.  Returns the cancelled
        record, or the record unchanged (``None`` if absent).
        """
        with self._lock:
            record = self.get_record(vehicle_id)
            if record is None or not record.is_on_hold or not record.hold_expires_at:
                return record
            if not is_expired(self._clock(), record.hold_expires_at):
                return record
            record = self._cancel_locked(vehicle_id)
        _logger.info("Hold on %s expired", vehicle_id)
        self._notify()
        return record

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Call *callback* after every mutation; returns an unsubscribe function."""
        return self._notifier.subscribe(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        self._notifier.unsubscribe(callback)


def open_ledger(
    config: HoldConfig | None = None,
    *,
    notifier: ChangeNotifier | None = None,
    clock: Callable[[], int] = _now_ms,
) -> HoldLedgerStore:
    """Build a store for *config* (``HoldConfig.from_env()`` when omitted)."""
    config = config or HoldConfig.from_env()
    slot = open_slot(config.store_path)
    _logger.debug("Opening hold ledger %r on %s", config.store_key, type(slot).__name__)
    return HoldLedgerStore(slot, config=config, notifier=notifier, clock=clock)
