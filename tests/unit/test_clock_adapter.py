from datetime import UTC, datetime, timedelta

from src.adapters.clock import FixedClock, SystemClock


def test_system_clock():
    clock = SystemClock()
    now = clock.now_utc()
    assert isinstance(now, datetime)
    assert now.tzinfo is not None
    # Sanity check: is it close to real now?
    diff = abs((datetime.now(UTC) - now).total_seconds())
    assert diff < 1.0


def test_fixed_clock_naive_is_utc():
    clock = FixedClock(datetime(2026, 1, 1, 9, 0))
    assert clock.now_utc() == datetime(2026, 1, 1, 9, 0, tzinfo=UTC)


def test_fixed_clock_advance():
    clock = FixedClock(datetime(2026, 1, 1, tzinfo=UTC))
    later = clock.advance(minutes=5)
    assert later == datetime(2026, 1, 1, 0, 5, tzinfo=UTC)
    assert clock.now_utc() == later
