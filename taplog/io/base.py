#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/io/base.py

'''Append-only CSV log on top of a content store.'''

# built-in
import os
import shutil
import traceback

from ..constants import CSV_HEADER, CSV_NEWLINE, CSV_ENCODING
from ..configs import LOG_MIMETYPE
from ..events import TapEvent
from ..utils import typename, verbose
from .store import ContentStore
from . import logger

__all__ = ['DurableLogStore', 'format_record']


def format_record(record):
    '''
    Serialize a `TapEvent` or a `(start, duration, peak, label)` sequence
    into one CSV line (newline not included).

    Examples
    --------
    >>> format_record(TapEvent(1000, 300, 9.0, 'walk'))
    '1000,300,9.0,walk'
    >>> format_record((1000, 300, 1013.25, ''))
    '1000,300,1013.25,'
    '''
    if not isinstance(record, TapEvent):
        try:
            record = TapEvent(*record)
        except TypeError:
            raise TypeError('Invalid record type: `%s`' % typename(record))
    return record.to_line()


def _sync(stream):
    stream.flush()
    try:
        fd = stream.fileno()
    except (AttributeError, OSError):
        return  # in-memory streams have nothing to sync
    os.fsync(fd)


class DurableLogStore(object):
    '''
    Resolve log files in a `ContentStore` and append records to them.

    Nothing here raises on I/O errors: failures are logged and reported by
    return values, so callers running on a background worker never crash.
    Records drained for a failed append are not kept anywhere.

    Parameters
    ----------
    store : instance of ContentStore
    '''

    def __init__(self, store):
        if not isinstance(store, ContentStore):
            raise TypeError('ContentStore wanted, but got `%s`'
                            % typename(store))
        self.store = store

    def __repr__(self):
        return '<{} on {}>'.format(typename(self), self.store)

    def resolve(self, name, directory='', mimetype=LOG_MIMETYPE):
        '''
        Find the file `(name, directory)` or create it if it doesn't exist.
        Always looks up before creating, so calling it again returns the
        same file instead of a duplicate.

        Returns
        -------
        handle : LogFileHandle | None
            None if the file can be neither found nor created.
        '''
        try:
            handle = self.store.find(name, directory)
            if handle is not None:
                return handle
            handle = self.store.create(name, directory, mimetype)
        except (OSError, ValueError):
            logger.error('Failed to find or create %s under `%s`:\n%s'
                         % (name, directory, traceback.format_exc()))
            return None
        if handle is None:
            logger.error('Failed to create %s under `%s`' % (name, directory))
        return handle

    def find(self, name, directory=''):
        '''Like `resolve` but never creates the file.'''
        try:
            return self.store.find(name, directory)
        except (OSError, ValueError):
            logger.error('Failed to find %s under `%s`:\n%s'
                         % (name, directory, traceback.format_exc()))
            return None

    def file_size(self, handle):
        '''Size in bytes, 0 if the file can not be inspected.'''
        try:
            return int(self.store.size(handle))
        except (OSError, TypeError, ValueError):
            logger.debug('Cannot get size of %s, regarded as empty' % handle)
            return 0

    @verbose
    def append_records(self, handle, records, header=CSV_HEADER,
                       verbose=None):
        '''
        Append records to the end of a file, one line each. If the file is
        empty, `header` is written first. Existing bytes are never touched.
        The stream is flushed, synced and closed before returning.

        Parameters
        ----------
        handle : LogFileHandle
        records : iterable of TapEvent | (start, duration, peak, label)
            Fields are joined by comma without quoting, so text fields must
            not contain commas or newlines.
        header : str, optional
            Line written to empty files only. Default the TapLog CSV header.
        verbose : bool | int | str, optional
            Temporary log level of this call.

        Returns
        -------
        success : bool
        '''
        lines = [format_record(r) + CSV_NEWLINE for r in records]
        if not lines:
            logger.debug('Nothing to append to %s' % handle)
            return True
        try:
            stream = self.store.open_for_append(handle)
            if stream is None:
                raise IOError('Cannot open %s for appending' % handle)
            with stream:
                if header and self.file_size(handle) == 0:
                    stream.write((header + CSV_NEWLINE).encode(CSV_ENCODING))
                stream.write(''.join(lines).encode(CSV_ENCODING))
                _sync(stream)
        except (OSError, TypeError, ValueError):
            logger.error('Error writing %d record(s) to %s, dropped:\n%s'
                         % (len(lines), handle, traceback.format_exc()))
            return False
        logger.info('%d record(s) written to %s' % (len(lines), handle))
        return True

    def read_records(self, handle, header=CSV_HEADER):
        '''
        Parse records back into `TapEvent` objects, skipping the header.
        Lines that can not be parsed are logged and skipped.
        '''
        try:
            stream = self.store.open_for_read(handle)
            if stream is None:
                raise IOError('Cannot open %s for reading' % handle)
            with stream:
                text = stream.read().decode(CSV_ENCODING)
        except (OSError, TypeError, ValueError):
            logger.error('Error reading %s:\n%s'
                         % (handle, traceback.format_exc()))
            return []
        events = []
        for n, line in enumerate(text.splitlines()):
            if not line or (n == 0 and line == header):
                continue
            try:
                events.append(TapEvent.from_record(line))
            except ValueError:
                logger.warning('Skip invalid line %d of %s: `%s`'
                               % (n + 1, handle, line))
        return events

    def copy(self, source, destination):
        '''
        Copy the whole content of `source` into `destination`, replacing
        anything it had before.

        Returns
        -------
        success : bool
        '''
        try:
            src = self.store.open_for_read(source)
            if src is None:
                raise IOError('Cannot open %s for reading' % source)
            with src:
                dst = self.store.open_for_write(destination)
                if dst is None:
                    raise IOError('Cannot open %s for writing' % destination)
                with dst:
                    shutil.copyfileobj(src, dst)
                    _sync(dst)
        except (OSError, TypeError, ValueError):
            logger.error('Error copying %s to %s:\n%s'
                         % (source, destination, traceback.format_exc()))
            return False
        logger.info('%s copied to %s' % (source, destination))
        return True


# THE END
