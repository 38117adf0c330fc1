#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/utils/_looptask.py

# built-in
import atexit
import weakref
import threading
import traceback

from . import logger, get_boolean

__all__ = ['LoopTaskInThread', 'SkipIteration']

_tasks = weakref.WeakSet()


def _close_tasks():
    '''Registered to `atexit`. Do not call it at runtime.'''
    for task in list(_tasks):
        if task.started:
            logger.debug('close %s at exit' % task)
            task.close(timeout=1)
atexit.register(_close_tasks)                                      # noqa: E305


class SkipIteration(Exception):
    '''Raise it inside a loop function to skip the current iteration.'''
    pass


class LoopTaskInThread(object):
    '''
    Call `func(*args, **kwargs)` over and over in a thread until closed.
    A closed task can be started again, every start runs a fresh thread.

    Subclasses may override these hooks:
        - `hook_before` / `hook_after`: caller's thread, in `start` / `close`
        - `loop_before` / `loop_after`: task thread, around the loop

    Examples
    --------
    >>> task = LoopTaskInThread(lambda: time.sleep(1) or print('tick'))
    >>> task.start()
    True
    tick
    tick
    >>> task.close()
    True
    '''

    def __init__(self, func, args=(), kwargs=None, name=None, daemon=True):
        if not callable(func):
            raise TypeError('Loop function `%s` is not callable' % func)
        self._func = func
        self._args = tuple(args)
        self._kwargs = dict(kwargs or {})
        self.name = name or 'LoopFunc(%s)' % getattr(func, '__name__', None)
        self.daemon = get_boolean(daemon)
        self._flag_close = threading.Event()
        self._thread = None
        self._started = False
        _tasks.add(self)

    def __repr__(self):
        return '<{} {}{}>'.format(
            self.name, self.status, ' daemon' if self.daemon else '')

    @property
    def started(self):
        return self._started

    @property
    def status(self):
        return 'started' if self._started else 'closed'

    def is_alive(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self._started:
            return False
        # one close flag per thread
        self._flag_close = threading.Event()
        self._thread = threading.Thread(
            target=self.run, args=(self._flag_close, ),
            name=self.name, daemon=self.daemon)
        self._started = True
        try:
            self.hook_before()
            self._thread.start()
        except Exception:
            logger.error(traceback.format_exc())
            self._started = False
            self._flag_close.set()
            return False
        return True

    def close(self, timeout=5):
        if not self._started:
            return False
        try:
            self.hook_after()
        except Exception:
            logger.error(traceback.format_exc())
        self._started = False
        self._flag_close.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        return True

    def restart(self):
        self.close()
        return self.start()

    def hook_before(self):
        pass

    def hook_after(self):
        pass

    def loop_before(self):
        pass

    def loop_after(self):
        pass

    def run(self, flag_close):
        try:
            self.loop_before()
        except Exception:
            logger.error(traceback.format_exc())
            flag_close.set()
        while not flag_close.is_set():
            try:
                self._func(*self._args, **self._kwargs)
            except SkipIteration as e:
                logger.warning(e)
            except Exception:
                logger.error(traceback.format_exc())
                break
        try:
            self.loop_after()
        except Exception:
            logger.error(traceback.format_exc())
        if flag_close is self._flag_close and self._started:
            self.close()  # loop ended by an error
        logger.debug('{} stopped.'.format(self))


# THE END
