#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/apps/logger/base.py

'''`taplog.apps.logger.TapLogger` is defined in this source file.'''

# built-in
import time
import threading
import pydoc
import shlex
import traceback

from taplog.configs import (
    LOG_SUBDIR, LOG_FILENAME, LOG_MIMETYPE, PREFS_NAME
)
from taplog.events import EventCorrelator
from taplog.buffer import PendingEventBuffer
from taplog.worker import BackgroundWorker
from taplog.backup import BackupScheduler
from taplog.io import (
    DirectoryStore, DurableLogStore, PreferenceStore, BackupState,
    AmbientSensor
)
from taplog.utils import (
    get_boolean, get_config, now_ms, CachedProperty, NameSpace
)

from . import logger

globalvars = NameSpace()


class TapLogger(object):
    '''
    Glue between platform signals and the TapLog pipeline.

    Touch signals are correlated on the caller's thread; every store access
    (append, backup, tail) runs on one `BackgroundWorker`.
    '''

    def __init__(self, root=None, prefs_dir=None, sensor=None,
                 generator=None, store=None, worker=None):
        '''
        Parameters
        ----------
        root : str, optional
            Root directory of the content store. Default `DIR_DATA`.
        prefs_dir : str, optional
            Directory of the preferences file. Default `DIR_PREFS`.
        sensor : AmbientSensor, optional
            Ambient feed read when contacts begin and move.
        generator : LoopTaskInThread, optional
            Source feeding `sensor`, started on resume and closed on pause,
            e.g. `taplog.io.FakePressureGenerator`.
        store : ContentStore, optional
            Use this store instead of a `DirectoryStore` at `root`.
        worker : BackgroundWorker, optional
        '''
        if store is None:
            store = DirectoryStore(root or get_config('DIR_DATA'))
        self.sensor = sensor if sensor is not None else AmbientSensor()
        self.generator = generator
        self.log_store = DurableLogStore(store)
        self.buffer = PendingEventBuffer()
        self.correlator = EventCorrelator(self.sensor)
        self.worker = worker if worker is not None else BackgroundWorker()
        self.prefs = PreferenceStore(
            get_config('PREFS_NAME', PREFS_NAME),
            prefs_dir or get_config('DIR_PREFS'))
        self.log_name = get_config('LOG_FILENAME', LOG_FILENAME)
        self.log_dir = get_config('LOG_SUBDIR', LOG_SUBDIR)
        self.scheduler = BackupScheduler(
            self.log_store, self.worker, BackupState(self.prefs),
            self.log_name, self.log_dir)
        self._logging_enabled = False
        self._finishing = False
        self._resumed = False
        self.written = 0

    def __repr__(self):
        return '<TapLogger {} on {}>'.format(
            'enabled' if self.logging_enabled else 'disabled', self.log_store)

    # =========================================================================
    # lifecycle

    def start(self):
        '''Start the background worker.'''
        self._finishing = False
        self.worker.start()
        logger.debug('TapLogger started with %s' % self.worker)
        return True

    def on_resume(self, interactive=True):
        '''
        App comes to foreground: check the daily backup, start the ambient
        source and enable logging if the screen is interactive.
        '''
        self._resumed = True
        self.worker.submit(self.scheduler.check_and_backup)
        if self.generator is not None and not self.generator.started:
            self.generator.restart()
        self.logging_enabled = interactive

    def on_pause(self):
        '''App goes to background: stop the ambient source and logging.'''
        self._resumed = False
        if self.generator is not None:
            self.generator.close()
        self.stop_logging()

    def close(self, timeout=5):
        '''Destroy the app. Tasks already queued get `timeout` seconds.'''
        self._finishing = True
        self.on_pause()
        self.worker.shutdown(wait=True, timeout=timeout)
        logger.debug('TapLogger closed.')

    def interactive_on(self):
        '''Screen turned on: resume logging if the app is in foreground.'''
        if self._resumed and not self._finishing:
            self.logging_enabled = True

    def interactive_off(self):
        '''Screen turned off: stop logging and drop unfinished contacts.'''
        self.stop_logging()

    def stop_logging(self):
        self._logging_enabled = False
        self.correlator.clear()

    @property
    def logging_enabled(self):
        return self._logging_enabled

    @logging_enabled.setter
    def logging_enabled(self, v):
        v = bool(get_boolean(v))
        if v != self._logging_enabled:
            logger.info('Logging %s' % ('enabled' if v else 'disabled'))
        if v:
            self._logging_enabled = True
        else:
            self.stop_logging()

    def set_logging_enabled(self, v):
        self.logging_enabled = v
        return self.logging_enabled

    # =========================================================================
    # touch signals

    def touch_begin(self, contact_id, timestamp=None):
        if not self._logging_enabled:
            return False
        self.correlator.on_begin(
            int(contact_id), now_ms() if timestamp is None else timestamp)
        return True

    def touch_move(self):
        if not self._logging_enabled:
            return False
        self.correlator.on_move()
        return True

    def touch_end(self, contact_id, timestamp=None):
        if not self._logging_enabled:
            return False
        event = self.correlator.on_end(
            int(contact_id), now_ms() if timestamp is None else timestamp)
        if event is None:
            return False
        self.buffer.push(event)
        logger.debug('Add %r' % event)
        return True

    def touch_cancel(self, contact_id):
        if not self._logging_enabled:
            return False
        self.correlator.on_cancel(int(contact_id))
        return True

    def on_ambient_sample(self, value):
        '''Sensor callback.'''
        self.sensor.on_sample(value)

    def tap(self, duration=100, contact_id=0):
        '''Simulate one contact of `duration` milliseconds.'''
        duration = int(duration)
        start = now_ms()
        if not self.touch_begin(contact_id, start):
            return False
        time.sleep(duration / 1000.0)
        self.touch_move()
        return self.touch_end(contact_id, start + duration)

    # =========================================================================
    # label & flush

    def submit_label(self, text):
        '''
        Label all unlabeled pending taps with `text` and write every pending
        tap to the log in background. Blank text does nothing.
        '''
        text = str(text).strip()
        if not text:
            return False
        self.buffer.label_unlabeled(text)
        return self.worker.submit(self.flush)

    def flush(self):
        '''
        Drain the buffer and append it to the primary log. Runs on the
        worker thread. Drained taps are lost if the write fails.
        '''
        events = self.buffer.drain_all()
        if not events:
            return 0
        handle = self.log_store.resolve(
            self.log_name, self.log_dir, LOG_MIMETYPE)
        if handle is None:
            logger.error('Failed to create/get log file, %d tap(s) dropped'
                         % len(events))
            return 0
        if not self.log_store.append_records(handle, events):
            return 0
        self.written += len(events)
        return len(events)

    def backup(self):
        '''Check the daily backup now (in background).'''
        return self.worker.submit(self.scheduler.check_and_backup)

    def tail(self, num=10, timeout=5):
        '''Show the last `num` records of the primary log.'''
        num = int(num)
        lines = []
        done = threading.Event()

        def read():
            try:
                handle = self.log_store.find(self.log_name, self.log_dir)
                if handle is not None and num > 0:
                    events = self.log_store.read_records(handle)[-num:]
                    lines.extend(event.to_line() for event in events)
            finally:
                done.set()

        # reads are queued behind pending appends and backups
        if not self.worker.submit(read) or not done.wait(timeout):
            logger.error('Cannot read %s within %ss'
                         % (self.log_name, timeout))
            return ''
        return '\n'.join(lines)

    @property
    def status(self):
        return 'enabled' if self._logging_enabled else 'disabled'

    @property
    def pending(self):
        return len(self.buffer)

    @property
    def open_contacts(self):
        return self.correlator.open_contacts

    @property
    def ambient(self):
        return self.sensor.value

    @property
    def last_backup(self):
        return self.scheduler.state.last_backup_date

    # =========================================================================
    # command line interface

    def cmd(self, *args, **kwargs):
        '''
        Positional arguments specifies method to be executed, optionally
        with one argument, or the attribute whose value will be returned.
        Keyword arguments specifies attribute's name and value to be set.

        Examples
        --------
        >>> app.cmd('status')  // app.status
        'enabled'
        >>> app.cmd('tap 250')  // app.tap(250)
        'True'
        >>> app.cmd('submit_label "on the bus"')  // app.submit_label(...)
        'True'
        >>> app.cmd(logging_enabled='off')  // app.logging_enabled = 'off'
        'False'

        Returns
        -------
        None | str | dict
        '''
        results = {}
        args = list(args)
        for cmd in args[:]:
            try:
                mth = shlex.split(str(cmd))
            except ValueError:
                logger.error('Invalid command: `{}`'.format(cmd))
                continue
            if len(mth) < 1:
                continue
            name, params = mth[0], mth[1:]
            if name.startswith('_') or not hasattr(self, name):
                logger.error('Invalid method/attribute: `{}`'.format(name))
                continue
            attr = getattr(self, name)
            if not callable(attr) and params:
                kwargs.setdefault(name, ' '.join(params))
                args.remove(cmd)
                continue
            if callable(attr):
                try:
                    rst = attr(*params)
                except Exception:
                    rst = traceback.format_exc()
                logger.debug('Execute method {}: `{}`'.format(name, rst))
            else:
                rst = attr
                logger.debug('Attribute value {}: `{}`'.format(name, attr))
            results[name] = str(rst)
        for key, value in kwargs.items():
            if key.startswith('_') or not hasattr(self, key):
                logger.error('Invalid attribute: `{}`'.format(key))
                continue
            if callable(getattr(self, key)):
                logger.error('Cannot set value of method: `{}`'.format(key))
                continue
            try:
                setattr(self, key, value)
            except Exception:
                logger.error(traceback.format_exc())
            else:
                value = getattr(self, key)
                logger.debug('Attribute value {}: `{}`'.format(key, value))
                results[key] = str(value)
        if (len(args) + len(kwargs)) != len(results) or len(results) > 1:
            return results
        return results and list(results.values())[0] or None

    @CachedProperty
    def _help_names(self):
        return sorted(
            i for i in set(self.__dict__).union(TapLogger.__dict__)
            .difference(['cmd'])
            if not i.startswith('_')
        )

    @property
    def _help_attrs(self):
        return [(i, getattr(self, i)) for i in self._help_names]

    def summary(self):
        '''Display a list of attributes and values of object.'''
        val = [
            (name, attr) for name, attr in self._help_attrs
            if not callable(attr)
        ]
        ml = max(map(len, [i[0] for i in val]))
        return '\n'.join(['%s : %s' % (k.ljust(ml), v) for k, v in val])

    def help(self):
        '''Show this help message.'''
        msg = []
        for name, attr in self._help_attrs:
            if not callable(attr):
                continue
            doc = pydoc.getdoc(attr).split('\n')[0] or 'Unknown'
            msg.append((name, doc))
        ml = max(map(len, [i[0] for i in msg]))
        return 'Help on taplog.apps.logger.TapLogger:\n' + '\n'.join([
            '%s : %s' % (k.ljust(ml), v) for k, v in msg
        ])


# THE END
