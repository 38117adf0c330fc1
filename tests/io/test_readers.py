#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/io/test_readers.py

# built-in
import time
import threading

# requirements.txt: testing: pytest
# requirements.txt: data: numpy
import pytest
import numpy as np

from taplog.io import AmbientSensor, FakePressureGenerator
from taplog.events import EventCorrelator


def test_ambient_sensor():
    sensor = AmbientSensor()
    assert sensor() == 0.0 and sensor.count == 0
    sensor.on_sample(1013.25)
    sensor.on_sample('1013.5')
    assert sensor() == sensor.value == 1013.5
    assert sensor.count == 2
    assert sensor.last_update is not None


def test_sensor_as_ambient_feed(sensor):
    c = EventCorrelator(sensor)
    c.on_begin(1, 1000)
    sensor.on_sample(1014.0)
    c.on_move()
    assert c.on_end(1, 1100).peak_scalar == 1014.0


def test_generator_samples():
    gen = FakePressureGenerator(AmbientSensor(), 1000.0, 0.5, 10, seed=1)
    samples = np.array([gen.sample() for _ in range(500)])
    assert abs(samples.mean() - 1000.0) < 0.1
    assert np.allclose(samples, np.round(samples, 2))
    again = FakePressureGenerator(AmbientSensor(), 1000.0, 0.5, 10, seed=1)
    assert again.sample() == samples[0]


def test_generator_invalid_rate():
    with pytest.raises(ValueError):
        FakePressureGenerator(AmbientSensor(), sample_rate=0)


def test_generator_feeds_sensor(sensor):
    gen = FakePressureGenerator(sensor, sample_rate=100, seed=0)
    assert gen.start()
    try:
        deadline = time.time() + 5
        while sensor.count < 3 and time.time() < deadline:
            time.sleep(0.01)
    finally:
        gen.close()
    assert sensor.count >= 3
    assert 1000 < sensor.value < 1030


def test_generator_restart_runs_one_thread(sensor):
    gen = FakePressureGenerator(sensor, sample_rate=100, seed=0)
    assert gen.start()
    assert not gen.start()
    for _ in range(3):
        assert gen.restart()
    assert gen.started and gen.is_alive()
    alive = [t for t in threading.enumerate() if t.name == gen.name]
    assert len(alive) == 1
    assert gen.close()
    assert not gen.close()
    assert not gen.is_alive() and gen.status == 'closed'


def test_generator_error_stops_loop():
    class Broken(AmbientSensor):
        def on_sample(self, value):
            raise RuntimeError('sensor unplugged')
    gen = FakePressureGenerator(Broken(), sample_rate=100)
    gen.start()
    deadline = time.time() + 5
    while gen.started and time.time() < deadline:
        time.sleep(0.01)
    assert not gen.started
