from datetime import datetime, timedelta

import pytest

from weekly_planner.status_ticker import StatusTicker


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)

    def __call__(self) -> datetime:
        return self.now


def test_start_emits_immediately_and_stop_cancels(qtbot):
    clock = FakeClock(datetime(2025, 1, 1, 9, 5, 0))  # Wednesday
    ticker = StatusTicker(interval_seconds=30, time_provider=clock)
    ticks = []
    ticker.tick.connect(lambda day, t: ticks.append((day, t)))

    assert not ticker.is_active
    ticker.start()
    assert ticker.is_active
    assert ticks == [(3, "09:05")]

    ticker.start()  # already running, no second immediate tick
    assert len(ticks) == 1

    with qtbot.waitSignal(ticker.stopped):
        ticker.stop()
    assert not ticker.is_active


def test_periodic_tick_reads_clock(qtbot):
    clock = FakeClock(datetime(2025, 1, 4, 23, 59, 0))  # Saturday
    ticker = StatusTicker(interval_seconds=1, time_provider=clock)
    ticker.start()
    clock.advance(60)  # past midnight into Sunday
    with qtbot.waitSignal(ticker.tick, timeout=3000) as blocker:
        pass
    ticker.stop()
    assert blocker.args == [0, "00:00"]


def test_interval_must_be_positive(qtbot):
    with pytest.raises(ValueError):
        StatusTicker(interval_seconds=0)
    assert StatusTicker(interval_seconds=45).interval_seconds == 45
