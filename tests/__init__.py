#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/__init__.py

'''
TapLog tests

Support:
A. cd /path/to/TapLog && pytest
B. python -c 'import taplog; taplog.test()'
C. python -c 'import taplog.io; taplog.io.test()'

Keeping tests separate from source codes has following benefits:
1. Tests can run on an installed version after package is installed
2. Tests can run on editable installed version after `pip install -e`
3. Tests can run on local version without installing package. `pytest`
    will add current directory into `sys.path`

Package layout::

    setup.py
    taplog/
        __init__.py
        events.py
        io/
            base.py
        ...
    tests/
        __init__.py
        test_events.py
        io/
            test_base.py
        ...
'''

# built-in
import io as _io

from taplog.io import ContentStore, DirectoryStore, LogFileHandle


class FailingStore(DirectoryStore):
    '''
    DirectoryStore whose streams can be broken on purpose, to see how
    callers behave when the disk is full or the file is gone.
    '''

    def __init__(self, root, fail_on=()):
        super(FailingStore, self).__init__(root)
        self.fail_on = set(fail_on)

    def _maybe_fail(self, op):
        if op in self.fail_on:
            raise OSError('%s failed on purpose' % op)

    def find(self, name, directory=''):
        self._maybe_fail('find')
        return super(FailingStore, self).find(name, directory)

    def create(self, name, directory='', mimetype=None):
        self._maybe_fail('create')
        return super(FailingStore, self).create(name, directory, mimetype)

    def open_for_append(self, handle):
        self._maybe_fail('append')
        return super(FailingStore, self).open_for_append(handle)

    def open_for_write(self, handle):
        self._maybe_fail('write')
        return super(FailingStore, self).open_for_write(handle)


class MemoryStore(ContentStore):
    '''Minimal in-memory ContentStore, no directory tree involved.'''

    class _Stream(_io.BytesIO):
        def __init__(self, store, key, data=b''):
            super(MemoryStore._Stream, self).__init__(data)
            self._store, self._key = store, key
            self.seek(0, _io.SEEK_END)

        def close(self):
            if not self.closed:
                self._store.files[self._key] = self.getvalue()
            super(MemoryStore._Stream, self).close()

    def __init__(self):
        self.files = {}

    def find(self, name, directory=''):
        handle = LogFileHandle(name, directory)
        return handle if handle.key in self.files else None

    def create(self, name, directory='', mimetype=None):
        handle = LogFileHandle(name, directory, mimetype=mimetype)
        self.files.setdefault(handle.key, b'')
        return handle

    def open_for_append(self, handle):
        return self._Stream(self, handle.key, self.files[handle.key])

    def open_for_read(self, handle):
        return _io.BytesIO(self.files[handle.key])

    def open_for_write(self, handle):
        return self._Stream(self, handle.key)

    def size(self, handle):
        return len(self.files[handle.key])


# THE END
