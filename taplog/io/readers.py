#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/io/readers.py

'''Ambient scalar feeds, i.e. the latest reading of a pressure sensor.'''

# built-in
import time
import threading

# requirements.txt: data: numpy
import numpy as np

from ..configs import SENSOR_MEAN, SENSOR_STD, SENSOR_RATE
from ..utils import LoopTaskInThread, get_config
from . import logger

__all__ = ['AmbientSensor', 'FakePressureGenerator']


class AmbientSensor(object):
    '''
    Hold the most recent reading delivered by a sensor callback. Calling
    the instance returns that reading, so it can be handed to
    `taplog.events.EventCorrelator` as its ambient feed.

    Examples
    --------
    >>> sensor = AmbientSensor()
    >>> sensor()
    0.0
    >>> sensor.on_sample(1013.25)
    >>> sensor(), sensor.count
    (1013.25, 1)
    '''

    def __init__(self, initial=0.0):
        self._value = float(initial)
        self._count = 0
        self._lock = threading.Lock()
        self.last_update = None

    def __call__(self):
        return self.value

    def __repr__(self):
        return '<AmbientSensor {!r} ({} samples)>'.format(
            self._value, self._count)

    @property
    def value(self):
        with self._lock:
            return self._value

    @property
    def count(self):
        return self._count

    def on_sample(self, value):
        '''Sensor callback: store the new reading.'''
        with self._lock:
            self._value = float(value)
            self._count += 1
            self.last_update = time.time()


class FakePressureGenerator(LoopTaskInThread):
    '''
    Feed random barometric pressure readings (hPa) into an `AmbientSensor`,
    useful for running TapLog on machines without a barometer.

    Parameters
    ----------
    sensor : AmbientSensor
    mean, std : float, optional
        Normal distribution of readings. Default from `taplog.configs`.
    sample_rate : float, optional
        Readings per second. Default from `taplog.configs`.
    seed : int, optional
        Seed of the random generator, for repeatable sequences.
    '''

    def __init__(self, sensor, mean=None, std=None, sample_rate=None,
                 seed=None):
        self.sensor = sensor
        self.mean = float(mean if mean is not None else
                          get_config('SENSOR_MEAN', SENSOR_MEAN, float))
        self.std = float(std if std is not None else
                         get_config('SENSOR_STD', SENSOR_STD, float))
        self.sample_rate = float(
            sample_rate if sample_rate is not None else
            get_config('SENSOR_RATE', SENSOR_RATE, float))
        if self.sample_rate <= 0:
            raise ValueError('Invalid sample rate: %s' % self.sample_rate)
        self._rng = np.random.RandomState(seed)
        super(FakePressureGenerator, self).__init__(
            self._generate, name='FakePressure')

    def loop_before(self):
        logger.debug('%s started, %.2f +- %.2f hPa at %.1fHz' % (
            self.name, self.mean, self.std, self.sample_rate))

    def sample(self):
        '''One reading drawn from the configured distribution.'''
        return float(np.round(self._rng.normal(self.mean, self.std), 2))

    def _generate(self):
        self.sensor.on_sample(self.sample())
        time.sleep(1.0 / self.sample_rate)


# THE END
