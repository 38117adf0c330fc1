#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/events.py

'''
Tap events and the correlator that builds them from raw contact signals.

A contact is a continuous pointer-down to pointer-up interaction identified
by a transient slot id. The platform reports four kinds of signals:

    begin(id, ts)  -->  sample(value)* / move  -->  end(id, ts) | cancel(id)

`EventCorrelator` pairs every begin with its end, keeps the running peak of
the ambient reading (e.g. barometric pressure in hPa) while the contact is
open, and emits one `TapEvent` per completed contact. It does no I/O; the
caller pushes emitted events to `taplog.buffer.PendingEventBuffer`.
'''

# built-in
import time
import threading

from .constants import CSV_DELIMITER
from .utils import config_logger, now_ms, typename

logger = config_logger()
del config_logger

__all__ = [
    'TapEvent', 'ContactState', 'EventCorrelator', 'event_time_to_timestamp'
]


def event_time_to_timestamp(event_time, uptime=None, now=None):
    '''
    Convert a monotonic event time into wall-clock milliseconds.

    Input devices stamp events with a monotonic clock (milliseconds since
    boot), which can not be compared across reboots. The wall-clock time of
    the event is `now - (uptime - event_time)`.

    Parameters
    ----------
    event_time : int
        Monotonic timestamp of the event in milliseconds.
    uptime : int, optional
        Current monotonic time in milliseconds. Default `time.monotonic()`.
    now : int, optional
        Current wall-clock time in milliseconds. Default `time.time()`.

    Examples
    --------
    >>> event_time_to_timestamp(9500, uptime=10000, now=1700000000000)
    1699999999500
    '''
    if uptime is None:
        uptime = int(time.monotonic() * 1000)
    if now is None:
        now = now_ms()
    return int(now - (uptime - event_time))


class TapEvent(object):
    '''
    One completed contact: when it started, how long it lasted and the peak
    ambient reading sampled while it was open.

    All fields are read-only except `label`, which may be set exactly once
    from empty ("unlabeled") to a non-empty string.
    '''
    __slots__ = ('_start', '_duration', '_peak', '_label')

    def __init__(self, start_timestamp, duration, peak_scalar, label=''):
        self._start = int(start_timestamp)
        self._duration = int(duration)
        if self._duration < 0:
            raise ValueError('duration must be >= 0: `%d`' % self._duration)
        self._peak = float(peak_scalar)
        if not isinstance(label, str):
            raise TypeError('label must be string but: `%s`' % typename(label))
        self._label = label

    @property
    def start_timestamp(self):
        return self._start

    @property
    def duration(self):
        return self._duration

    @property
    def peak_scalar(self):
        return self._peak

    @property
    def label(self):
        return self._label

    @label.setter
    def label(self, text):
        if self._label:
            raise ValueError('event already labeled as `%s`' % self._label)
        if not isinstance(text, str) or not text:
            raise ValueError('label must be a non-empty string')
        self._label = text

    @property
    def labeled(self):
        return bool(self._label)

    def to_record(self):
        '''Fields in on-disk order.'''
        return (self._start, self._duration, self._peak, self._label)

    def to_line(self):
        '''
        One CSV line without newline. Values are written as they are: the
        label is not quoted or escaped, so it must not contain the delimiter.
        '''
        return CSV_DELIMITER.join([
            str(self._start), str(self._duration), repr(self._peak),
            self._label
        ])

    @classmethod
    def from_record(cls, line):
        '''Parse one CSV line written by `to_line`.'''
        fields = line.rstrip('\r\n').split(CSV_DELIMITER, 3)
        if len(fields) != 4:
            raise ValueError('invalid record: `%s`' % line.rstrip())
        start, duration, peak, label = fields
        return cls(int(start), int(duration), float(peak), label)

    def __eq__(self, other):
        if not isinstance(other, TapEvent):
            return NotImplemented
        return self.to_record() == other.to_record()

    def __ne__(self, other):
        if not isinstance(other, TapEvent):
            return NotImplemented
        return not (self == other)

    __hash__ = None  # label is mutable

    def __repr__(self):
        return '<TapEvent start={} duration={}ms peak={!r} label={!r}>'.format(
            *self.to_record())


class ContactState(object):
    '''Transient state of one open contact.'''
    __slots__ = ('contact_id', 'start_timestamp', 'peak_scalar')

    def __init__(self, contact_id, start_timestamp, peak_scalar):
        self.contact_id = contact_id
        self.start_timestamp = int(start_timestamp)
        self.peak_scalar = float(peak_scalar)

    def update(self, scalar):
        if scalar > self.peak_scalar:
            self.peak_scalar = float(scalar)

    def __repr__(self):
        return '<ContactState id={} start={} peak={!r}>'.format(
            self.contact_id, self.start_timestamp, self.peak_scalar)


class EventCorrelator(object):
    '''
    Pair begin/end contact signals into `TapEvent` objects.

    Parameters
    ----------
    ambient : callable, optional
        Returns the most recent ambient reading, e.g. an instance of
        `taplog.io.readers.AmbientSensor`. Default always 0.0.

    Examples
    --------
    >>> c = EventCorrelator(lambda: 5.0)
    >>> c.on_begin(1, 1000)
    >>> c.on_sample(1, 9.0)
    >>> c.on_end(1, 1300)
    <TapEvent start=1000 duration=300ms peak=9.0 label=''>
    >>> c.on_end(1, 1400) is None  # spurious end
    True
    '''

    def __init__(self, ambient=None):
        self._ambient = ambient if callable(ambient) else (lambda: 0.0)
        self._contacts = {}
        self._lock = threading.Lock()

    @property
    def ambient(self):
        return float(self._ambient())

    @property
    def open_contacts(self):
        '''Sorted ids of currently open contacts.'''
        with self._lock:
            return sorted(self._contacts)

    def __len__(self):
        return len(self._contacts)

    def __contains__(self, contact_id):
        return contact_id in self._contacts

    def on_begin(self, contact_id, timestamp, scalar=None):
        '''Open a contact. A reused id silently replaces the stale state.'''
        if scalar is None:
            scalar = self.ambient
        with self._lock:
            if contact_id in self._contacts:
                logger.debug('Contact %s re-opened before end' % contact_id)
            self._contacts[contact_id] = ContactState(
                contact_id, timestamp, scalar)

    def on_sample(self, contact_id, scalar=None):
        '''Update peak of one open contact. Unknown ids are ignored.'''
        if scalar is None:
            scalar = self.ambient
        with self._lock:
            state = self._contacts.get(contact_id)
            if state is not None:
                state.update(scalar)

    def on_move(self, scalar=None):
        '''Apply the latest ambient reading to all open contacts.'''
        if scalar is None:
            scalar = self.ambient
        with self._lock:
            for state in self._contacts.values():
                state.update(scalar)

    def on_end(self, contact_id, timestamp):
        '''
        Close a contact and build its event.

        Returns
        -------
        event : TapEvent | None
            None if there is no open contact with this id (spurious or
            duplicated end signal).
        '''
        with self._lock:
            state = self._contacts.pop(contact_id, None)
        if state is None:
            logger.debug('Ignore end of unknown contact %s' % contact_id)
            return None
        duration = int(timestamp) - state.start_timestamp
        if duration < 0:
            logger.warning('Contact %s ended %dms before it began, clock '
                           'changed?' % (contact_id, -duration))
            duration = 0
        return TapEvent(state.start_timestamp, duration, state.peak_scalar)

    def on_cancel(self, contact_id):
        '''Drop a contact without emitting an event.'''
        with self._lock:
            state = self._contacts.pop(contact_id, None)
        if state is None:
            logger.debug('Ignore cancel of unknown contact %s' % contact_id)
        return state is not None

    def clear(self):
        '''Discard all open contacts, returns how many were dropped.'''
        with self._lock:
            n = len(self._contacts)
            self._contacts.clear()
        if n:
            logger.debug('Discard %d open contact(s)' % n)
        return n


# THE END
