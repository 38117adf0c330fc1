#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/utils/__init__.py

# built-in
import os
import sys
import time
import logging
import platform
import datetime
import configparser

# requirements.txt: necessary: decorator
from decorator import decorator

from .. import constants, configs

__doc__ = 'Some utility functions and classes.'
__basedir__ = os.path.dirname(os.path.abspath(__file__))


# =============================================================================
# Constants

stdout, stderr, stdin = sys.stdout, sys.stderr, sys.stdin

# example for mannualy create a logger
logger = logging.getLogger(__name__)
hdlr = logging.StreamHandler(stdout)
hdlr.setFormatter(logging.Formatter(configs.LOGFORMAT, style='{'))
logger.handlers = [hdlr]
logger.setLevel(logging.INFO)
del hdlr
# you can use taplog.utils._logging.config_logger instead, which is better

from ..testing import PytestRunner
test = PytestRunner(__name__)
del PytestRunner


# =============================================================================
# Utilities

def debug_helper(v, name=None):
    name = name or get_caller_globals(1)['__name__']
    logging.getLogger(name).setLevel('DEBUG' if get_boolean(v) else 'INFO')


class NameSpace(object):
    def __init__(self, **kwargs):
        for attr, value in kwargs.items():
            setattr(self, attr, value)

    def __eq__(self, other):
        if not isinstance(other, NameSpace):
            return NotImplemented
        return vars(self) == vars(other)

    def __ne__(self, other):
        if not isinstance(other, NameSpace):
            return NotImplemented
        return not (self == other)

    def __contains__(self, key):
        return key in self.__dict__


def now_ms():
    '''Current wall-clock time in integer milliseconds.'''
    return int(time.time() * 1000)


def to_date(when=None):
    '''
    Calendar date (local time) of `when`.

    Parameters
    ----------
    when : None | datetime.datetime | datetime.date | int | float
        Epoch seconds or a date/datetime object. Default now.

    Examples
    --------
    >>> to_date(datetime.datetime(2024, 3, 1, 0, 30))
    datetime.date(2024, 3, 1)
    >>> to_date(datetime.date(2024, 3, 1)) == to_date('2024-03-01')
    True
    '''
    if when is None:
        return datetime.date.today()
    if isinstance(when, datetime.datetime):
        return when.date()
    if isinstance(when, datetime.date):
        return when
    if isinstance(when, str):
        return datetime.datetime.strptime(when, constants.DATE_FORMAT).date()
    if isinstance(when, (int, float)):
        return datetime.date.fromtimestamp(when)
    raise TypeError('Cannot get date from `%s`' % typename(when))


def datestamp(when=None):
    '''ISO calendar date string, i.e. `YYYY-MM-DD`.'''
    return to_date(when).strftime(constants.DATE_FORMAT)


def get_boolean(v, table=constants.BOOLEAN_TABLE):
    '''convert string to boolean'''
    if isinstance(v, bool):
        return v
    t = str(v).lower()
    if t not in table:
        raise ValueError('Invalid boolean value: {}'.format(v))
    return table[t]


def typename(obj):
    return type(obj).__name__


def validate_filename(*fns):
    '''Validate inputted filename according to system.'''
    fns = list(fns)
    for i, fn in enumerate(fns):
        name = ''.join([
            char for char in fn
            if char in constants.VALID_FILENAME_CHARACTERS
        ])
        if (
            platform.system() in ['Linux', 'Darwin', 'Java'] and
            name in constants.INVALID_FILENAMES_UNIX
        ) or (
            platform.system() == 'Windows' and
            name in constants.INVALID_FILENAMES_WIN
        ):
            fns[i] = ''
        else:
            fns[i] = name
    return fns[0] if len(fns) == 1 else fns


def load_configs(fn=None, *fns):
    '''
    Read configuration files and return a dict of sections.

    Examples
    --------
    This function accepts arbitrary arugments, i.e.:
        - one or more filenames
        - one list of filenames
    >>> load_configs('~/.taplog/taplog.conf')
    >>> load_configs('/etc/taplog/taplog.conf', '~/.taplog/taplog.conf')
    >>> load_configs(['/etc/taplog/taplog.conf'], 'no-exist')

    Notes
    -----
    Configurations priority(from low to high)::
        project config file: "${TapLog}/files/service/taplog.conf"
         system config file: "/etc/taplog/taplog.conf"
           user config file: "~/.taplog/taplog.conf"
    '''
    config = configparser.ConfigParser()
    config.optionxform = str
    if not isinstance(fn, (tuple, list)):
        fn = [fn]
    for fn in [
        os.path.expanduser(_) for _ in list(fn) + list(fns)
        if isinstance(_, str) and os.path.exists(os.path.expanduser(_))
    ] or configs.DEFAULT_CONFIG_FILES:
        logger.debug('loading config file: `%s`' % fn)
        if fn not in config.read(fn):
            logger.warning('Cannot load config file: `%s`' % fn)
    return {
        section: dict(config.items(section))
        for section in config.sections()
    }


def get_config(key, default=None, type=None, configfiles=None, section=None):
    '''
    Get configurations from environment variables or config files.
    TapLog use `INI-Style <https://en.wikipedia.org/wiki/INI_file>`_
    configuration files with extention of `.conf`.

    Parameters
    ----------
    key : str
    default : optional
        Return `default` if key is not in configuration files or environ,
    type : function | class | None, optional
        Convert function to be applied on the result, such as int or float.
    configfiles : str | list of str, optional
        Configuration filenames.
    section : str | None, optional
        Section to search for key. Default None, search for each section.

    Notes
    -----
    Configuration resolving priority (from low to high):
    - system configuration files (loaded in taplog.configs)
    - specified configuration file[s] (by argument `configfiles`)
    - environment variables (os.environ)
    '''
    value = getattr(configs, key, default)
    if configfiles is not None:
        cfg = load_configs(configfiles)
        if section is not None and key in cfg.get(section, {}):
            value = cfg[section][key]
        else:
            for d in cfg.values():
                value = d.get(key, value)
    value = os.getenv(key, value)
    return type(value) if type is not None and value is not None else value


class CachedProperty(object):
    '''
    Descriptor class to construct a property that is only computed once and
    then replaces itself as an ordinary attribute. Deleting the attribute
    resets the property.
    '''
    def __init__(self, func):
        self.__func = func
        self.__name = func.__name__
        self.__doc__ = getattr(func, '__doc__')

    def __get__(self, obj, cls):
        if obj is None:
            return self
        obj.__dict__[self.__name] = self.__func(obj)
        return getattr(obj, self.__name)


# =============================================================================
# Decorators

@decorator
def verbose(func, *args, **kwargs):
    '''
    Add support to any callable functions or methods to change verbose level
    by specifying keyword argument `verbose='LEVEL'`.

    Verbose level can be int or bool or one of `logging` defined string
    ['NOTSET', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    Examples
    --------
    >>> @verbose
    ... def echo(s, verbose=None):
    ...     logger.info(s)
    >>> echo('set log level to warning', verbose='WARN')
    >>> echo('set log level to debug', verbose='DEBUG')
    set log level to debug
    >>> echo('mute message', verbose=False)  # equals to verbose=ERROR
    >>> echo('max verbose', verbose=True)    # equals to verbose=DEBUG
    max verbose

    Notes
    -----
    Verbose level may comes from ways listed below (sorted by prority).

    1. class default verbosity, i.e. `self.verbose`
    2. default value of argument `verbose`
    3. argument `verbose` provided by caller
    '''
    level = None
    argnames, defaults = get_func_args(func)

    if len(argnames) and argnames[0] in ('self', 'cls'):
        level = getattr(args[0], 'verbose', level)                # situation 1
    if 'verbose' in argnames:
        idx = argnames.index('verbose')
        try:
            level = defaults[idx - len(argnames)]                 # situation 2
        except IndexError:
            pass  # default not defined in function
        try:
            if args[idx] is not None:
                level = args[idx]                                 # situation 3
        except IndexError:
            pass  # verbose not provided by user
    if kwargs.get('verbose') is not None:
        level = kwargs['verbose']

    if isinstance(level, bool):
        level = 'DEBUG' if level else 'ERROR'
    if level is None:
        return func(*args, **kwargs)
    # prefer the module level `logger` the function actually logs with
    target = getattr(func, '__globals__', {}).get('logger')
    if not isinstance(target, logging.Logger):
        target = logging.getLogger(func.__module__)
    with TempLogLevel(target, level):
        return func(*args, **kwargs)


# =============================================================================
# Local Modules

from ._resolve import *                                            # noqa: W401
from ._resolve import get_func_args, get_caller_globals

from ._logging import *                                            # noqa: W401
from ._logging import TempLogLevel, config_logger
logger = config_logger(logger, addhdlr=False)

from ._looptask import *                                           # noqa: W401

# THE END
