import logging

import pytest

from clockpro.clock_engine import ClockEngine
from clockpro.events import ClockEvent
from clockpro.scheduler import SchedulerState
from clockpro.time_source import ZoneConverter

from conftest import FakeTimeSource, epoch_ms


@pytest.fixture
def engine(time_source, converter, timer):
    return ClockEngine(time_source, converter, timer)


def test_tokyo_24h_end_to_end():
    engine = ClockEngine(FakeTimeSource(epoch_ms(2024, 1, 1, 0, 5, 0)), ZoneConverter())
    engine.set_timezone("Asia/Tokyo")
    engine.set_format("24h")

    tv = engine.get_time()

    assert (tv.raw_hours, tv.raw_minutes, tv.raw_seconds) == (9, 5, 0)
    assert tv.hours == "09"
    assert tv.period is None
    assert (tv.day_name, tv.month_name, tv.day_of_month, tv.year) == ("Monday", "January", 1, 2024)


def test_new_york_12h_crosses_the_date_line():
    engine = ClockEngine(FakeTimeSource(epoch_ms(2024, 1, 1, 0, 5, 0)), ZoneConverter())
    engine.set_timezone("America/New_York")

    tv = engine.get_time()

    assert tv.raw_hours == 19
    assert (tv.hours, tv.period) == ("07", "PM")
    assert (tv.day_name, tv.month_name, tv.day_of_month, tv.year) == ("Sunday", "December", 31, 2023)


def test_fixed_offset_zone(engine):
    engine.set_timezone("Test/Minus5")
    engine.set_format(True)
    assert engine.get_time().raw_hours == 19


def test_unknown_timezone_falls_back_to_local(engine, caplog):
    engine.set_timezone("Mars/Olympus_Mons")
    with caplog.at_level(logging.WARNING, logger="clockpro.clock_engine"):
        first = engine.get_time()
        engine.get_time()

    assert first.raw_hours == 0
    assert caplog.text.count("Mars/Olympus_Mons") == 1


def test_unknown_iana_id_with_real_converter():
    engine = ClockEngine(FakeTimeSource(epoch_ms(2024, 1, 1, 0, 5, 0)), ZoneConverter())
    engine.set_timezone("Not/A_Zone")
    tv = engine.get_time()
    assert 0 <= tv.raw_hours <= 23


def test_set_timezone_emits_without_ticking(engine, timer):
    events = []
    engine.events.on(ClockEvent.TIMEZONE_CHANGED, lambda timezone: events.append(timezone))

    engine.set_timezone("Asia/Tokyo")

    assert events == ["Asia/Tokyo"]
    assert engine.get_timezone() == "Asia/Tokyo"
    assert timer.pending == []


@pytest.mark.parametrize("value, expected", [("24h", "24h"), ("12h", "12h"), (True, "24h"), (False, "12h")])
def test_set_format(engine, value, expected):
    events = []
    engine.events.on(ClockEvent.FORMAT_CHANGED, lambda format: events.append(format))

    engine.set_format(value)

    assert engine.get_format() == expected
    assert events == [expected]


def test_drift_correction_is_added_to_reads(engine, time_source):
    engine.state.drift_correction_ms = -5000
    assert engine.now_ms() == time_source.now - 5000
    assert engine.get_time().raw_seconds == 55


def test_late_callback_after_sync_window_shifts_drift(engine, timer, time_source):
    start = time_source.now
    engine.start()
    assert engine.state.last_sync_ms == start

    # The first armed callback lands 60s after sync plus 5s late
    timer.fire_next(late_ms=64_000)

    assert engine.state.drift_correction_ms == pytest.approx(-5000, abs=1)
    assert engine.state.last_sync_ms == time_source.now


def test_sync_drift_direct(engine):
    engine.state.last_sync_ms = 1_000_000

    assert engine.sync_drift(1_030_000) is False
    assert engine.state.drift_correction_ms == 0

    assert engine.sync_drift(1_065_000) is True
    assert engine.state.drift_correction_ms == -5000
    assert engine.state.last_sync_ms == 1_065_000


def test_steady_ticking_accumulates_no_drift(time_source, converter, timer):
    time_source.now += 500
    engine = ClockEngine(time_source, converter, timer)
    engine.start()

    for _ in range(300):
        timer.fire_next()

    assert engine.state.drift_correction_ms == 0
    assert time_source.now - engine.state.last_sync_ms <= 60_000


def test_one_snapshot_per_tick(engine, timer):
    from_callback, from_event = [], []
    engine.events.on(ClockEvent.TICK, lambda time: from_event.append(time))
    engine.start(from_callback.append)

    timer.fire_next()
    timer.fire_next()

    assert len(from_callback) == 2
    assert all(a is b for a, b in zip(from_callback, from_event))
    assert [tv.raw_seconds for tv in from_callback] == [1, 2]


def test_stop_guarantees_no_further_ticks(engine, timer):
    ticks = []
    handle = engine.start(ticks.append)
    timer.fire_next()
    _, _, pending = timer.pending[0]

    engine.stop()
    pending()
    engine.stop()

    assert len(ticks) == 1
    assert not engine.is_running
    assert not handle.active
    assert engine.scheduler_state is SchedulerState.STOPPED


def test_stop_before_start_is_safe(engine):
    engine.stop()
    assert not engine.is_running
    assert engine.scheduler_state is None


def test_handle_cancel_stops_engine(engine, timer):
    handle = engine.start()
    handle.cancel()
    assert not engine.is_running
    assert timer.pending == []


def test_restart_replaces_callback(engine, timer):
    first, second = [], []
    engine.start(first.append)
    engine.start(second.append)

    assert len(timer.pending) == 1
    timer.fire_next()
    assert (len(first), len(second)) == (0, 1)


def test_hand_angles_from_snapshot(engine, time_source):
    time_source.now += 30_000
    angles = engine.get_hand_angles()
    assert angles.second == 180
    assert engine.get_hand_angles(engine.get_time()) == angles


@pytest.mark.parametrize("value", ["24H", "military", ""])
def test_unknown_format_string_is_rejected(engine, value):
    events = []
    engine.events.on(ClockEvent.FORMAT_CHANGED, lambda format: events.append(format))
    engine.set_format("24h")

    with pytest.raises(ValueError):
        engine.set_format(value)

    assert engine.get_format() == "24h"
    assert events == ["24h"]
