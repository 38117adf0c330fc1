#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/testing.py

'''
Run tests of TapLog modules with ``pytest``.

Tests mirror the package layout under `DIR_TEST`::

    taplog             -> tests/
    taplog.io          -> tests/io/
    taplog.events      -> tests/test_events.py
    taplog.io.prefs    -> tests/io/test_prefs.py
'''

# built-in
import os
import traceback

from .configs import DIR_TEST


def test(modname=None, *a, **k):
    return PytestRunner(modname)(*a, **k) == 0


def find_tests(modname, root=DIR_TEST):
    '''Paths of the tests of module `modname`, empty list if none.'''
    parts = [_ for _ in (modname or 'taplog').split('.') if _][1:]
    path = os.path.join(root, *parts)
    if os.path.isdir(path):
        return [path]
    if parts:
        parts[-1] = 'test_%s.py' % parts[-1]
        path = os.path.join(root, *parts)
        if os.path.isfile(path):
            return [path]
    return []


class PytestRunner(object):
    '''
    Callable bound to one module, e.g. `taplog.io.test()`.

    Parameters
    ----------
    modname : str, optional
        Dotted module name. Default the whole `taplog` package.
    '''

    def __init__(self, modname=None):
        self.modname = modname or 'taplog'

    def __repr__(self):
        return '<PytestRunner {} -> {}>'.format(
            self.modname, ', '.join(self.testpath) or 'no tests')

    @property
    def testpath(self):
        return find_tests(self.modname)

    def __call__(self, verbose=0, extras=None):
        # requirements-dev.txt: pytest
        import pytest

        testpath = self.testpath
        if not testpath:
            print('No tests found for %s.' % self.modname)
            return 0
        args = ['-l']
        if verbose:
            args.append('-' + 'v' * verbose)
        args += list(extras or []) + testpath
        try:
            return pytest.main(args)
        except SystemExit as e:
            return e.code
        except Exception:
            traceback.print_exc()
        return 1


# THE END
