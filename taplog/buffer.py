#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/buffer.py

'''Thread-safe queue of tap events waiting to be written to the log.'''

# built-in
import threading

from .events import TapEvent
from .utils import config_logger, typename

logger = config_logger()
del config_logger

__all__ = ['PendingEventBuffer']


class PendingEventBuffer(object):
    '''
    Ordered buffer of `TapEvent` objects. Insertion order is the order in
    which events will be written. Pushing the same event twice stores it
    twice.

    `push`, `label_unlabeled` and `drain_all` are serialized by one lock, so
    a drain never observes a half-applied push or label.
    '''

    def __init__(self):
        self._events = []
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._events)

    def __repr__(self):
        with self._lock:
            nlabel = sum(1 for e in self._events if e.labeled)
            return '<{} {} events ({} labeled)>'.format(
                typename(self), len(self._events), nlabel)

    def push(self, event):
        if not isinstance(event, TapEvent):
            raise TypeError('TapEvent wanted, but got `%s`' % typename(event))
        with self._lock:
            self._events.append(event)

    def label_unlabeled(self, text):
        '''
        Set label of every unlabeled event to `text`. Events that already
        have a label are kept as they are. Empty text changes nothing.

        Returns
        -------
        num : int
            Number of events labeled by this call.
        '''
        if not text:
            return 0
        num = 0
        with self._lock:
            for event in self._events:
                if not event.labeled:
                    event.label = text
                    num += 1
        logger.debug('Label %d pending event(s) as `%s`' % (num, text))
        return num

    def drain_all(self):
        '''Take all events out of the buffer at once, in insertion order.'''
        with self._lock:
            events, self._events = self._events, []
        return events


# THE END
