from __future__ import annotations

import logging

from pyvehold.events import ChangeNotifier


def test_default_event_name() -> None:
    assert ChangeNotifier().event_name == "edc_phase3_mock_changed"


def test_notify_calls_observers_in_order() -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []
    notifier.subscribe(lambda: calls.append("a"))
    notifier.subscribe(lambda: calls.append("b"))

    notifier.notify()

    assert calls == ["a", "b"]


def test_failing_observer_does_not_block_others(caplog) -> None:
    notifier = ChangeNotifier()
    calls: list[str] = []

    def boom() -> None:
        raise RuntimeError("render failed")

    notifier.subscribe(boom)
    notifier.subscribe(lambda: calls.append("ok"))

    with caplog.at_level(logging.ERROR, logger="pyvehold.events"):
        notifier.notify()

    assert calls == ["ok"]
    assert "observer failed" in caplog.text


def test_observer_may_unsubscribe_during_dispatch() -> None:
    notifier = ChangeNotifier()
    calls: list[int] = []

    def once() -> None:
        calls.append(1)
        notifier.unsubscribe(once)

    notifier.subscribe(once)
    notifier.notify()
    notifier.notify()

    assert calls == [1]


def test_unsubscribe_unknown_and_clear() -> None:
    notifier = ChangeNotifier()
    calls: list[int] = []
    notifier.unsubscribe(lambda: None)
    notifier.subscribe(lambda: calls.append(1))

    notifier.clear()
    notifier.notify()

    assert calls == []
