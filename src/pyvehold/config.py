"""Ledger configuration for pyvehold."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from pyvehold._constants import DEFAULT_DEPOSIT_AMOUNT, DEFAULT_HOLD_HOURS, STORE_KEY, hours_to_ms
from pyvehold.exceptions import HoldConfigError


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise HoldConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class HoldConfig:
    """Ledger configuration.

    Parameters
    ----------
    store_path : str or None
        Location of the durable slot.  ``None`` keeps the ledger in
        process memory.  Paths ending in ``.db``, ``.sqlite`` or
        ``.sqlite3`` use SQLite; anything else is a JSON file.
    store_key : str
        Name of the slot entry that holds the ledger blob.
    hold_hours : float
        Length of a hold window.  Defaults to 72 hours.
    default_deposit : float
        Deposit recorded when the caller passes none (or an invalid one).
    """

    store_path: str | None = None
    store_key: str = STORE_KEY
    hold_hours: float = DEFAULT_HOLD_HOURS
    default_deposit: float = DEFAULT_DEPOSIT_AMOUNT

    def __post_init__(self) -> None:
        if not self.store_key:
            raise HoldConfigError("store_key must be non-empty")
        try:
            hours_to_ms(self.hold_hours)
        except (TypeError, ValueError) as exc:
            raise HoldConfigError(str(exc)) from exc
        deposit = self.default_deposit
        if isinstance(deposit, bool) or not isinstance(deposit, (int, float)) or not math.isfinite(deposit):
            raise HoldConfigError(f"default_deposit must be a finite number, got {self.default_deposit!r}")

    @property
    def hold_duration_ms(self) -> int:
        """Hold window in milliseconds."""
        return hours_to_ms(self.hold_hours)

    @classmethod
    def from_env(cls, **overrides: Any) -> HoldConfig:
        """Create configuration from environment variables.

        Reads ``PYVEHOLD_STORE_PATH``, ``PYVEHOLD_STORE_KEY``,
        ``PYVEHOLD_HOLD_HOURS`` and ``PYVEHOLD_DEFAULT_DEPOSIT``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        HoldConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_CONFIG_MAP = {
            "PYVEHOLD_STORE_PATH": "store_path",
            "PYVEHOLD_STORE_KEY": "store_key",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric fields, handled separately
        _ENV_NUMERIC_MAP = {
            "PYVEHOLD_HOLD_HOURS": "hold_hours",
            "PYVEHOLD_DEFAULT_DEPOSIT": "default_deposit",
        }
        for env_key, field_name in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
