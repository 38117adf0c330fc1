#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/io/store.py

'''
Named-file content stores.

A content store keeps files addressed by `(name, directory)` and hands out
opaque `LogFileHandle` objects. `ContentStore` is the interface used by
`taplog.io.base.DurableLogStore`; `DirectoryStore` implements it on top of a
plain directory tree (e.g. `~/Downloads`).
'''

# built-in
import os

from ..utils import validate_filename, typename
from . import logger

__all__ = ['LogFileHandle', 'ContentStore', 'DirectoryStore']


class LogFileHandle(object):
    '''
    Opaque reference to one file of a content store. Two handles are equal
    when they point to the same `(name, directory)` key.
    '''
    __slots__ = ('name', 'directory', 'uri', 'mimetype')

    def __init__(self, name, directory='', uri=None, mimetype=None):
        self.name = name
        self.directory = normalize_directory(directory)
        self.uri = uri
        self.mimetype = mimetype

    @property
    def key(self):
        return (self.name, self.directory)

    def __eq__(self, other):
        if not isinstance(other, LogFileHandle):
            return NotImplemented
        return self.key == other.key

    def __ne__(self, other):
        if not isinstance(other, LogFileHandle):
            return NotImplemented
        return not (self == other)

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return '<{} {}>'.format(
            typename(self), '/'.join(filter(None, self.key[::-1])))


def normalize_directory(directory):
    '''
    Turn a relative directory into a `/` separated path without leading or
    trailing separators. Only names accepted by `validate_filename` are
    allowed as path components.

    Examples
    --------
    >>> normalize_directory('DiscreteLogger/Backups/')
    'DiscreteLogger/Backups'
    >>> normalize_directory('../etc')
    ValueError: invalid directory component: `..`
    '''
    if directory is None:
        return ''
    parts = [_ for _ in str(directory).replace('\\', '/').split('/') if _]
    for part in parts:
        if validate_filename(part) != part:
            raise ValueError('invalid directory component: `%s`' % part)
    return '/'.join(parts)


class ContentStore(object):
    '''
    Interface of a named-file content store. Streams returned by `open_*`
    are binary file-like objects that the caller closes.
    '''

    def find(self, name, directory=''):
        '''Return the handle of an existing file or None.'''
        raise NotImplementedError

    def create(self, name, directory='', mimetype=None):
        '''Create an empty file entry and return its handle.'''
        raise NotImplementedError

    def open_for_append(self, handle):
        raise NotImplementedError

    def open_for_read(self, handle):
        raise NotImplementedError

    def open_for_write(self, handle):
        '''Open for writing from the beginning, truncating old content.'''
        raise NotImplementedError

    def size(self, handle):
        raise NotImplementedError


class DirectoryStore(ContentStore):
    '''
    Content store backed by a directory. File `(name, directory)` lives at
    `${root}/${directory}/${name}` and its `uri` is the absolute path.

    Parameters
    ----------
    root : str
        Root directory of the store, created if it doesn't exist.
    '''

    def __init__(self, root):
        self.root = os.path.abspath(os.path.expanduser(root))
        if not os.path.exists(self.root):
            os.makedirs(self.root, 0o775)
            logger.debug('Store root %s created.' % self.root)

    def __repr__(self):
        return '<{} at {}>'.format(typename(self), self.root)

    def _path(self, name, directory):
        if not name or validate_filename(name) != name:
            raise ValueError('invalid file name: `%s`' % name)
        directory = normalize_directory(directory)
        return os.path.join(self.root, *(directory.split('/') + [name]))

    def _check(self, handle):
        if not isinstance(handle, LogFileHandle):
            raise TypeError('LogFileHandle wanted, but got `%s`'
                            % typename(handle))
        return handle.uri or self._path(handle.name, handle.directory)

    def find(self, name, directory=''):
        path = self._path(name, directory)
        if not os.path.isfile(path):
            return None
        return LogFileHandle(name, directory, path)

    def create(self, name, directory='', mimetype=None):
        path = self._path(name, directory)
        d = os.path.dirname(path)
        if not os.path.exists(d):
            os.makedirs(d, 0o775)
        # 'a' will not truncate file created by someone else in the meantime
        open(path, 'ab').close()
        logger.debug('File %s created.' % path)
        return LogFileHandle(name, directory, path, mimetype)

    def open_for_append(self, handle):
        return open(self._check(handle), 'ab')

    def open_for_read(self, handle):
        return open(self._check(handle), 'rb')

    def open_for_write(self, handle):
        return open(self._check(handle), 'wb')

    def size(self, handle):
        return os.path.getsize(self._check(handle))


# THE END
