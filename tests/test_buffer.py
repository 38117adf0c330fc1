#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/test_buffer.py

# built-in
import threading

# requirements.txt: testing: pytest
import pytest

from taplog.events import TapEvent
from taplog.buffer import PendingEventBuffer


def test_push_type():
    with pytest.raises(TypeError):
        PendingEventBuffer().push((1000, 300, 9.0, ''))


def test_label_unlabeled_keeps_old_labels():
    buf = PendingEventBuffer()
    buf.push(TapEvent(1, 1, 1.0))
    buf.push(TapEvent(2, 1, 1.0, 'old'))
    buf.push(TapEvent(3, 1, 1.0))
    assert buf.label_unlabeled('note') == 2
    assert [e.label for e in buf.drain_all()] == ['note', 'old', 'note']


def test_label_empty_is_noop():
    buf = PendingEventBuffer()
    buf.push(TapEvent(1, 1, 1.0))
    assert buf.label_unlabeled('') == 0
    assert buf.drain_all()[0].label == ''


def test_drain_twice(random_events):
    buf = PendingEventBuffer()
    for event in random_events:
        buf.push(event)
    assert len(buf) == len(random_events)
    assert buf.drain_all() == random_events
    assert buf.drain_all() == []
    assert len(buf) == 0


def test_concurrent_push_and_drain():
    buf = PendingEventBuffer()
    drained = []

    def producer(offset):
        for i in range(200):
            buf.push(TapEvent(offset + i, 1, 0.0))

    threads = [threading.Thread(target=producer, args=(n * 1000, ))
               for n in range(4)]
    for t in threads:
        t.start()
    while any(t.is_alive() for t in threads):
        drained.extend(buf.drain_all())
    for t in threads:
        t.join()
    drained.extend(buf.drain_all())
    assert len(drained) == 800
    assert len({e.start_timestamp for e in drained}) == 800
