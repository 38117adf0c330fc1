#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/io/prefs.py

'''Durable key-value preferences and the backup day-gate state.'''

# built-in
import os
import json
import tempfile
import threading
import traceback

from ..configs import DIR_PREFS, PREFS_NAME, PREFS_KEY_BACKUP
from ..utils import validate_filename, datestamp, to_date
from . import logger

__all__ = ['PreferenceStore', 'BackupState']


class PreferenceStore(object):
    '''
    Small persistent dictionary saved as `${directory}/${name}.json`.

    Every `set` rewrites the whole file through a temporary file and
    `os.replace`, so a crash never leaves a half-written file behind.

    Parameters
    ----------
    name : str, optional
        Name of preference group. Default `taplog.configs.PREFS_NAME`.
    directory : str, optional
        Where to keep the file. Default `taplog.configs.DIR_PREFS`.
    '''

    def __init__(self, name=PREFS_NAME, directory=DIR_PREFS):
        name = validate_filename(name)
        if not name:
            raise ValueError('invalid preference name')
        self.path = os.path.join(
            os.path.abspath(os.path.expanduser(directory)), name + '.json')
        self._lock = threading.Lock()
        self._values = self._load()

    def __repr__(self):
        return '<PreferenceStore {}>'.format(self.path)

    def __contains__(self, key):
        with self._lock:
            return key in self._values

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r') as f:
                values = json.load(f)
        except (OSError, ValueError):
            logger.error('Cannot load preferences from %s, reset:\n%s'
                         % (self.path, traceback.format_exc()))
            return {}
        if not isinstance(values, dict):
            logger.error('Invalid preferences in %s, reset' % self.path)
            return {}
        return values

    def _save(self):
        d = os.path.dirname(self.path)
        if not os.path.exists(d):
            os.makedirs(d, 0o775)
        fd, tmp = tempfile.mkstemp(prefix='.prefs-', dir=d)
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(self._values, f, indent=4, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def get(self, key, default=None):
        with self._lock:
            return self._values.get(key, default)

    def set(self, key, value):
        '''Store `value` (any JSON-serializable object) durably.'''
        with self._lock:
            self._values[key] = value
            self._save()
        logger.debug('Preference %s = %r saved' % (key, value))

    def remove(self, key):
        with self._lock:
            if key not in self._values:
                return False
            self._values.pop(key)
            self._save()
        return True


class BackupState(object):
    '''
    Remember the last calendar day on which a backup was started.

    Examples
    --------
    >>> state = BackupState(PreferenceStore('LogPrefs', '/tmp'))
    >>> state.last_backup_date = datetime.date(2024, 3, 1)
    >>> state.last_backup_date
    '2024-03-01'
    >>> state.done_on('2024-03-01'), state.done_on('2024-03-02')
    (True, False)
    '''

    def __init__(self, prefs=None, key=PREFS_KEY_BACKUP):
        self.prefs = prefs if prefs is not None else PreferenceStore()
        self.key = key

    @property
    def last_backup_date(self):
        '''ISO date string or '' if no backup was ever started.'''
        return self.prefs.get(self.key, '') or ''

    @last_backup_date.setter
    def last_backup_date(self, day):
        self.prefs.set(self.key, datestamp(day))

    def done_on(self, day):
        return self.last_backup_date == datestamp(to_date(day))


# THE END
