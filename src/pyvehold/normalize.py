"""Normalization helpers.

Centralizes defensive parsing of the persisted ledger blob.  Nothing in
here raises on malformed input: every field falls back to its default
independently, and a blob with the wrong shape becomes an empty ledger.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any

from pyvehold._constants import DEFAULT_DEPOSIT_AMOUNT, LEDGER_VERSION
from pyvehold.models.hold import HoldLedger, HoldRecord, HoldStatus

_logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid amount or timestamp.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def finite_number(value: Any) -> float | None:
    if not _is_number(value):
        return None
    try:
        result = float(value)
    except OverflowError:
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_timestamp(value: Any) -> int | None:
    parsed = finite_number(value)
    if parsed is None:
        return None
    return int(parsed)


def str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def coerce_deposit(value: Any, default: float = DEFAULT_DEPOSIT_AMOUNT) -> float:
    """Return *value* as a finite float, or *default*."""
    parsed = finite_number(value)
    return default if parsed is None else parsed


def to_status(value: Any) -> HoldStatus:
    if not isinstance(value, str):
        return HoldStatus.AVAILABLE
    return HoldStatus(value)


def _pick(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake)


def normalize_record(raw: Any, vehicle_id: str | None = None) -> HoldRecord:
    """Repair a stored record into a valid :class:`HoldRecord`.

    *vehicle_id* is the ledger key the record was stored under; when given
    (even as ``""``) it wins over whatever id the record carries.
    """
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    if vehicle_id is not None:
        resolved_id = vehicle_id
    else:
        stored_id = _pick(data, "vehicleId", "vehicle_id")
        resolved_id = str(stored_id) if stored_id else ""

    return HoldRecord(
        vehicle_id=resolved_id,
        status=to_status(data.get("status")),
        holder_email=str_or_none(_pick(data, "holderEmail", "holder_email")),
        deposit_amount=coerce_deposit(_pick(data, "depositAmount", "deposit_amount")),
        hold_started_at=safe_timestamp(_pick(data, "holdStartedAt", "hold_started_at")),
        hold_expires_at=safe_timestamp(_pick(data, "holdExpiresAt", "hold_expires_at")),
        cancelled_at=safe_timestamp(_pick(data, "cancelledAt", "cancelled_at")),
    )


def _is_version_tag(value: Any) -> bool:
    return _is_number(value) and value == LEDGER_VERSION


def normalize_ledger(parsed: Any) -> HoldLedger:
    """Build a ledger from a decoded blob, or an empty one if the shape is wrong."""
    if not isinstance(parsed, Mapping):
        return HoldLedger()
    holds = parsed.get("holds")
    if not _is_version_tag(parsed.get("version")) or not isinstance(holds, Mapping):
        _logger.debug("Discarding ledger blob with unexpected shape (version=%r)", parsed.get("version"))
        return HoldLedger()

    records: dict[str, HoldRecord] = {}
    for key, value in holds.items():
        # A null entry reads as "no record", same as a missing key.
        if value is None:
            continue
        vehicle_id = str(key)
        records[vehicle_id] = normalize_record(value, vehicle_id)
    return HoldLedger(holds=records)


def parse_ledger_blob(raw: str | None) -> HoldLedger:
    """Decode the persisted JSON text into a ledger.

    Absent text, invalid JSON and unexpected shapes all produce an empty
    ledger.
    """
    if not raw:
        return HoldLedger()
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        _logger.debug("Ledger blob is not valid JSON; starting from an empty ledger")
        return HoldLedger()
    return normalize_ledger(parsed)
