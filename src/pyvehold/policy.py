"""Time policy for holds.

Pure functions only: the caller supplies ``now`` in epoch milliseconds.
There is no background timer anywhere in the library; a hold whose
window has passed stays ON_HOLD in storage until someone calls
``HoldLedgerStore.expire_if_needed`` for it.
"""

from __future__ import annotations

import math
from typing import Any

from pyvehold._constants import DURATION_PLACEHOLDER
from pyvehold.models.hold import HoldRecord, HoldStatus


def is_expired(now_ms: int, expires_at_ms: int) -> bool:
    return now_ms >= expires_at_ms


def compute_remaining_seconds(record: HoldRecord | None, now_ms: int) -> int | None:
    """Whole seconds left on an ON_HOLD record, never negative.

    Returns ``None`` for no record, a record that is not ON_HOLD, or one
    without an expiry timestamp.
    """
    if record is None or record.status is not HoldStatus.ON_HOLD or not record.hold_expires_at:
        return None
    remaining = (record.hold_expires_at - now_ms) // 1000
    return remaining if remaining >= 0 else 0


def format_duration(seconds: Any) -> str:
    """Render *seconds* as ``HH:MM:SS``.

    Hours are not wrapped at 24.  ``None``, booleans, non-finite and
    negative values render as the placeholder ``"—"``.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return DURATION_PLACEHOLDER
    if not math.isfinite(seconds) or seconds < 0:
        return DURATION_PLACEHOLDER
    hrs = int(seconds // 3600)
    mins = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"
