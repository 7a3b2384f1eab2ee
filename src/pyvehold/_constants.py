"""Internal constants shared across the library."""

import math

LEDGER_VERSION = 1
STORE_KEY = "edc_phase3_mock_store_v1"
CHANGE_EVENT = "edc_phase3_mock_changed"

# ------------------------------------------------------------------
# Hold defaults
# ------------------------------------------------------------------

DEFAULT_HOLD_HOURS = 72
DEFAULT_DEPOSIT_AMOUNT = 1000.0
MS_PER_HOUR = 60 * 60 * 1000

#: Rendered by ``format_duration`` when there is no countdown to show.
DURATION_PLACEHOLDER = "—"

SQLITE_SUFFIXES: frozenset[str] = frozenset({".db", ".sqlite", ".sqlite3"})


def hours_to_ms(hours: float) -> int:
    """Convert a hold window in hours to milliseconds.

    Raises :class:`ValueError` if *hours* is not a positive finite number.
    """
    value = float(hours)
    if not value > 0 or math.isinf(value):
        raise ValueError(f"hold duration must be positive and finite, got {value} hours")
    return int(value * MS_PER_HOUR)
