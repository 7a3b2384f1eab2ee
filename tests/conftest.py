"""Shared test fixtures: controllable clock and a fresh in-memory store."""

from __future__ import annotations

import pytest

from pyvehold.config import HoldConfig
from pyvehold.ledger import HoldLedgerStore
from pyvehold.storage import MemorySlot

START_MS = 1_767_225_600_000  # 2026-01-01T00:00:00Z
HOUR_MS = 60 * 60 * 1000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now_ms: int = START_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, *, hours: float = 0, seconds: float = 0, ms: int = 0) -> None:
        self.now_ms += int(hours * HOUR_MS) + int(seconds * 1000) + ms


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture()
def store(slot: MemorySlot, clock: FakeClock) -> HoldLedgerStore:
    """A fresh store over an empty in-memory slot."""
    return HoldLedgerStore(slot, config=HoldConfig(), clock=clock)
