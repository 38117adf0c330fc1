# coding=utf-8
#
# File: TapLog/tests/conftest.py

'''Define some fixtures here.'''

# requirements.txt: testing: pytest
# requirements.txt: data: numpy
import pytest
import numpy as np

from taplog.events import TapEvent
from taplog.worker import BackgroundWorker
from taplog.io import (
    DirectoryStore, DurableLogStore, PreferenceStore, AmbientSensor
)


@pytest.fixture
def store_root(tmpdir):
    return str(tmpdir.mkdir('store'))


@pytest.fixture
def store(store_root):
    return DirectoryStore(store_root)


@pytest.fixture
def log_store(store):
    return DurableLogStore(store)


@pytest.fixture
def prefs(tmpdir):
    return PreferenceStore('LogPrefs', str(tmpdir.join('prefs')))


@pytest.fixture
def worker():
    worker = BackgroundWorker(poll=0.05)
    worker.start()
    yield worker
    worker.shutdown(wait=True, timeout=5)


@pytest.fixture
def sensor():
    return AmbientSensor(1013.25)


@pytest.fixture
def random_events():
    rng = np.random.RandomState(20240301)
    starts = 1700000000000 + np.cumsum(rng.randint(100, 5000, 16))
    durations = rng.randint(20, 800, 16)
    peaks = np.round(rng.normal(1013.25, 0.15, 16), 2)
    return [
        TapEvent(int(s), int(d), float(p))
        for s, d, p in zip(starts, durations, peaks)
    ]
