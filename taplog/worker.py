#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/worker.py

'''Single background thread executing submitted tasks one by one.'''

# built-in
import queue
import functools
import threading
import traceback

from .utils import config_logger, LoopTaskInThread, SkipIteration

logger = config_logger()
del config_logger

__all__ = ['BackgroundWorker']


class BackgroundWorker(LoopTaskInThread):
    '''
    FIFO task queue consumed by one daemon thread. All durable I/O of TapLog
    (log appends and backup copies) goes through one worker so that no two
    store operations ever run at the same time.

    Examples
    --------
    >>> worker = BackgroundWorker()
    >>> worker.start()
    True
    >>> worker.submit(print, 'hello from', 'worker')
    True
    hello from worker
    >>> worker.shutdown(wait=True)
    '''

    def __init__(self, name='TapLogWorker', poll=0.5):
        self._queue = queue.Queue()
        self._poll = poll
        self._accepting = threading.Event()
        self._accepting.set()
        self.executed = 0
        self.failed = 0
        super(BackgroundWorker, self).__init__(self._execute, name=name)

    def __len__(self):
        return self._queue.qsize()

    @property
    def accepting(self):
        return self._accepting.is_set()

    def submit(self, func, *args, **kwargs):
        '''
        Queue `func(*args, **kwargs)` to run on the worker thread. Never
        blocks. Returns False if the worker is shutting down.
        '''
        if not callable(func):
            raise TypeError('Task `%s` is not callable' % func)
        if not self.accepting:
            logger.warning('Worker %s is shutting down, task %s rejected'
                           % (self.name, getattr(func, '__name__', func)))
            return False
        if args or kwargs:
            func = functools.partial(func, *args, **kwargs)
        self._queue.put(func)
        return True

    def wait(self, timeout=None):
        '''
        Block until every submitted task has been executed. Returns whether
        the queue was emptied within `timeout` seconds.
        '''
        if not self.started:
            return not self._queue.unfinished_tasks
        with self._queue.all_tasks_done:
            if timeout is None:
                while self._queue.unfinished_tasks:
                    self._queue.all_tasks_done.wait()
                return True
            return self._queue.all_tasks_done.wait_for(
                lambda: not self._queue.unfinished_tasks, timeout)

    def shutdown(self, wait=False, timeout=None):
        '''
        Stop accepting new tasks. With `wait` the tasks already queued are
        executed before the thread stops, otherwise they are abandoned.
        '''
        self._accepting.clear()
        if wait and self.started:
            self.wait(timeout)
        self.close()

    def hook_before(self):
        self._accepting.set()
        super(BackgroundWorker, self).hook_before()

    def loop_after(self):
        abandoned = 0
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
            self._queue.task_done()
            abandoned += 1
        if abandoned:
            logger.warning('%s abandoned %d queued task(s)'
                           % (self.name, abandoned))

    def _execute(self):
        try:
            task = self._queue.get(timeout=self._poll)
        except queue.Empty:
            return
        try:
            task()
        except SkipIteration as e:
            logger.warning(e)
        except Exception:
            self.failed += 1
            logger.error(traceback.format_exc())
        else:
            self.executed += 1
        finally:
            self._queue.task_done()


# THE END
