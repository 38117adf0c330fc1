#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/test_events.py

# requirements.txt: testing: pytest
import pytest

from taplog.events import (
    TapEvent, ContactState, EventCorrelator, event_time_to_timestamp
)


def test_event_time_to_timestamp():
    assert event_time_to_timestamp(
        9500, uptime=10000, now=1700000000000) == 1699999999500


def test_tapevent_fields():
    event = TapEvent(1000, 300, 9)
    assert event.start_timestamp == 1000
    assert event.duration == 300
    assert event.peak_scalar == 9.0 and isinstance(event.peak_scalar, float)
    assert event.label == '' and not event.labeled
    with pytest.raises(AttributeError):
        event.duration = 10
    with pytest.raises(ValueError):
        TapEvent(1000, -1, 0.0)


def test_tapevent_label_once():
    event = TapEvent(1000, 300, 9.0)
    with pytest.raises(ValueError):
        event.label = ''
    event.label = 'walk'
    assert event.labeled
    with pytest.raises(ValueError):
        event.label = 'run'
    assert event.label == 'walk'


def test_tapevent_line():
    assert TapEvent(1000, 300, 9.0, 'walk').to_line() == '1000,300,9.0,walk'
    assert TapEvent(1000, 300, 1013.25).to_line() == '1000,300,1013.25,'
    line = '1000,300,0.1,a, b and c'
    event = TapEvent.from_record(line + '\n')
    assert event.label == 'a, b and c'
    assert event.to_line() == line
    with pytest.raises(ValueError):
        TapEvent.from_record('1000,300')


def test_contact_state_keeps_peak():
    state = ContactState(1, 1000, 5.0)
    state.update(9.0)
    state.update(7.0)
    assert state.peak_scalar == 9.0


def test_begin_sample_end():
    c = EventCorrelator(lambda: 1.0)
    c.on_begin(1, 1000, 5.0)
    c.on_sample(1, 9.0)
    c.on_sample(1, 4.0)
    event = c.on_end(1, 1300)
    assert event == TapEvent(1000, 300, 9.0, '')
    assert 1 not in c and len(c) == 0


def test_peak_defaults_to_begin_ambient():
    values = [3.5]
    c = EventCorrelator(lambda: values[0])
    c.on_begin(7, 0)
    values[0] = 2.0
    assert c.on_end(7, 50).peak_scalar == 3.5


def test_random_sequences(random_events):
    c = EventCorrelator()
    for n, expect in enumerate(random_events):
        c.on_begin(n, expect.start_timestamp, 0.0)
        c.on_sample(n, expect.peak_scalar)
        event = c.on_end(n, expect.start_timestamp + expect.duration)
        assert event == expect


def test_spurious_end_and_cancel():
    c = EventCorrelator()
    assert c.on_end(1, 1000) is None
    assert c.on_cancel(1) is False
    c.on_begin(1, 1000)
    assert c.on_cancel(1) is True
    assert c.on_end(1, 1200) is None
    c.on_sample(42, 100.0)  # unknown id is ignored
    assert c.open_contacts == []


def test_move_updates_all_contacts():
    c = EventCorrelator()
    c.on_begin(1, 1000, 1.0)
    c.on_begin(2, 1010, 1.0)
    c.on_move(6.0)
    assert c.open_contacts == [1, 2]
    assert c.on_end(1, 1100).peak_scalar == 6.0
    assert c.on_end(2, 1100).peak_scalar == 6.0


def test_negative_duration_clamped():
    c = EventCorrelator()
    c.on_begin(1, 5000)
    assert c.on_end(1, 4000).duration == 0


def test_reused_id_replaces_state():
    c = EventCorrelator()
    c.on_begin(1, 1000, 9.0)
    c.on_begin(1, 2000, 1.0)
    event = c.on_end(1, 2100)
    assert (event.start_timestamp, event.peak_scalar) == (2000, 1.0)


def test_clear():
    c = EventCorrelator()
    c.on_begin(1, 1000)
    c.on_begin(2, 1000)
    assert c.clear() == 2
    assert c.on_end(1, 1100) is None
