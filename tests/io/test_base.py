#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/io/test_base.py

# requirements.txt: testing: pytest
import pytest

from taplog.constants import CSV_HEADER
from taplog.events import TapEvent
from taplog.io import DurableLogStore, format_record

from .. import FailingStore, MemoryStore


def test_format_record():
    assert format_record(TapEvent(1000, 300, 9.0, 'walk')) == \
        '1000,300,9.0,walk'
    assert format_record((1000, 300, 1013.25, '')) == '1000,300,1013.25,'
    with pytest.raises(TypeError):
        format_record(None)


def test_invalid_store():
    with pytest.raises(TypeError):
        DurableLogStore('/tmp')


def test_resolve_is_idempotent(log_store):
    a = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    b = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    assert a is not None and a == b


def test_resolve_failure(tmpdir, log_store):
    assert log_store.resolve('../escape.csv') is None
    failing = DurableLogStore(
        FailingStore(str(tmpdir.mkdir('f')), fail_on=['create']))
    assert failing.resolve('discreteLogs.csv', 'DiscreteLogger') is None


def test_header_written_once(log_store):
    handle = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    assert log_store.append_records(handle, [TapEvent(1000, 300, 9.0, 'a')])
    assert log_store.append_records(handle, [TapEvent(2000, 10, 1.5, 'b')])
    with log_store.store.open_for_read(handle) as f:
        content = f.read().decode('utf8')
    assert content == (
        CSV_HEADER + '\n' + '1000,300,9.0,a\n' + '2000,10,1.5,b\n')
    assert content.count(CSV_HEADER) == 1


def test_round_trip(log_store, random_events):
    for event in random_events:
        event.label = 'note'
    handle = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    assert log_store.append_records(handle, random_events[:5])
    assert log_store.append_records(handle, random_events[5:])
    events = log_store.read_records(handle)
    assert events == random_events
    with log_store.store.open_for_read(handle) as f:
        lines = f.read().decode('utf8').splitlines()[1:]
    assert lines == [e.to_line() for e in random_events]


def test_empty_append(log_store):
    handle = log_store.resolve('a.csv')
    assert log_store.append_records(handle, [])
    assert log_store.file_size(handle) == 0


def test_append_failure(tmpdir):
    log_store = DurableLogStore(
        FailingStore(str(tmpdir.mkdir('f')), fail_on=['append']))
    handle = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    assert handle is not None
    assert not log_store.append_records(handle, [TapEvent(1, 1, 1.0)])
    assert log_store.file_size(handle) == 0
    assert log_store.read_records(handle) == []


def test_copy(log_store):
    source = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    log_store.append_records(source, [TapEvent(1000, 300, 9.0, 'a')])
    dest = log_store.resolve('2024-03-01.csv', 'DiscreteLogger/Backups')
    log_store.append_records(dest, [TapEvent(1, 1, 1.0, 'stale')] * 3)
    assert log_store.copy(source, dest)
    assert log_store.read_records(dest) == [TapEvent(1000, 300, 9.0, 'a')]


def test_memory_store():
    log_store = DurableLogStore(MemoryStore())
    handle = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    assert log_store.append_records(handle, [TapEvent(1000, 300, 9.0, 'w')])
    assert log_store.append_records(handle, [TapEvent(1300, 30, 9.5, 'w')])
    assert log_store.store.files[handle.key] == (
        CSV_HEADER + '\n1000,300,9.0,w\n1300,30,9.5,w\n').encode('utf8')
