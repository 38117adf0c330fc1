#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/test_backup.py

# built-in
import os
import datetime

# requirements.txt: testing: pytest
import pytest

from taplog.events import TapEvent
from taplog.backup import BackupScheduler
from taplog.io import BackupState, PreferenceStore, DurableLogStore

from . import FailingStore


class CountingStore(object):
    '''Wrap a DurableLogStore and count copies.'''

    def __init__(self, log_store):
        self.log_store = log_store
        self.copies = []
        self._copy = log_store.copy
        log_store.copy = self.copy

    def copy(self, source, destination):
        self.copies.append(destination.name)
        return self._copy(source, destination)


@pytest.fixture
def scheduler(log_store, worker, prefs):
    return BackupScheduler(log_store, worker, BackupState(prefs))


def primary(log_store, *events):
    handle = log_store.resolve('discreteLogs.csv', 'DiscreteLogger')
    assert log_store.append_records(handle, events)
    return handle


def test_backup_name():
    assert BackupScheduler.backup_name(
        datetime.date(2024, 3, 1)) == '2024-03-01.csv'


def test_invalid_log_store(worker):
    with pytest.raises(TypeError):
        BackupScheduler(object(), worker)


def test_backup_yesterday(scheduler, log_store, worker):
    source = primary(log_store, TapEvent(1000, 300, 9.0, 'walk'))
    assert scheduler.check_and_backup(datetime.datetime(2024, 3, 2, 8, 0))
    assert worker.wait(timeout=5)
    assert scheduler.state.last_backup_date == '2024-03-02'
    backup = log_store.store.find('2024-03-01.csv', 'DiscreteLogger/Backups')
    assert backup is not None
    assert log_store.read_records(backup) == log_store.read_records(source)


def test_once_per_day(scheduler, log_store, worker):
    counter = CountingStore(log_store)
    primary(log_store, TapEvent(1000, 300, 9.0, 'walk'))
    day1 = datetime.datetime(2024, 3, 2, 8, 0)
    assert scheduler.check_and_backup(day1)
    assert not scheduler.check_and_backup(day1 + datetime.timedelta(hours=9))
    worker.wait(timeout=5)
    assert counter.copies == ['2024-03-01.csv']

    assert scheduler.check_and_backup(datetime.date(2024, 3, 3))
    assert not scheduler.check_and_backup(datetime.date(2024, 3, 3))
    worker.wait(timeout=5)
    assert counter.copies == ['2024-03-01.csv', '2024-03-02.csv']


def test_day_gate_survives_restart(log_store, worker, prefs):
    primary(log_store, TapEvent(1000, 300, 9.0))
    first = BackupScheduler(log_store, worker, BackupState(prefs))
    assert first.check_and_backup(datetime.date(2024, 3, 2))
    worker.wait(timeout=5)
    reloaded = PreferenceStore('LogPrefs', os.path.dirname(prefs.path))
    second = BackupScheduler(log_store, worker, BackupState(reloaded))
    assert not second.check_and_backup(datetime.date(2024, 3, 2))


def test_backup_overwrites_same_day(scheduler, log_store, worker):
    source = primary(log_store, TapEvent(1000, 300, 9.0, 'a'))
    scheduler.check_and_backup(datetime.date(2024, 3, 2))
    worker.wait(timeout=5)
    log_store.append_records(source, [TapEvent(2000, 100, 1.0, 'b')])
    # another device restored an older preference value
    scheduler.state.last_backup_date = '2024-02-01'
    scheduler.check_and_backup(datetime.date(2024, 3, 2))
    worker.wait(timeout=5)
    backup = log_store.store.find('2024-03-01.csv', 'DiscreteLogger/Backups')
    assert len(log_store.read_records(backup)) == 2


def test_failed_copy_not_retried(tmpdir, worker, prefs):
    log_store = DurableLogStore(
        FailingStore(str(tmpdir.mkdir('failing')), fail_on=['write']))
    primary(log_store, TapEvent(1000, 300, 9.0))
    scheduler = BackupScheduler(log_store, worker, BackupState(prefs))
    assert scheduler.check_and_backup(datetime.date(2024, 3, 2))
    worker.wait(timeout=5)
    assert scheduler.state.done_on('2024-03-02')
    assert not scheduler.check_and_backup(datetime.date(2024, 3, 2))
