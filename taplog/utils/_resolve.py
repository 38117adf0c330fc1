#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/utils/_resolve.py

# built-in
import inspect
import warnings

__all__ = [
    'get_caller_globals', 'get_func_args',
]


def get_caller_globals(depth=0):
    '''
    Only support `CPython` implemention. Use with cautious!

    Parameters
    ----------
    depth : int
        Extra levels outer than caller frame, default 0.

    Examples
    --------
    >>> a = 1
    >>> get_caller_globals()['a']
    1

    See Also
    --------
    sys._getframe([depth])
    '''
    f = inspect.currentframe()
    if f is None:
        warnings.warn(RuntimeWarning('Only CPython implements stack frame.'))
        return globals()
    for i in range(depth + 1):
        if f.f_back is None:
            warnings.warn(RuntimeWarning(
                'No outer frame of {} at depth {}!'.format(f, i)))
            return f.f_globals
        f = f.f_back
    return f.f_globals


def get_func_args(func):
    '''
    Get names and default values of a function's arguments.

    Returns
    -------
    names : list
    defaults : tuple

    Examples
    --------
    >>> get_func_args(lambda x, y=1, verbose=None, *a, **k: None)
    (['x', 'y', 'verbose'], (1, None))
    '''
    args, defaults = [], []
    for name, param in inspect.signature(func).parameters.items():
        if param.kind in [param.VAR_POSITIONAL, param.VAR_KEYWORD]:
            continue
        args.append(name)
        if param.default is not param.empty:
            defaults.append(param.default)
    return args, tuple(defaults)


# THE END
