#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/utils/_logging.py

# built-in
import os
import sys
import logging
from logging import Logger, Formatter

from ..configs import LOGFORMAT, DATEFORMAT
from ..constants import TERMINAL_COLOR2VALUE
from ._resolve import get_caller_globals
from . import NameSpace

__all__ = ['TapLogLogger', 'TapLogFormatter', 'TempLogLevel', 'config_logger']


# =============================================================================
# Wrapping default logging.Logger with a new `findCaller`

class TapLogLogger(Logger):
    __doc__ = Logger.__doc__
    __srcfiles__ = [
        os.path.normcase(logging._srcfile),
        os.path.normcase(os.path.abspath(__file__).replace('.pyc', '.py')),
    ]

    def findCaller(self, stack_info=False, stacklevel=1):
        '''
        Skip frames of logging itself and of this module so that records
        created through helpers here carry the lineno of the real caller.
        '''
        f = sys._getframe(1) if hasattr(sys, '_getframe') else None
        rv = ('(unknown file)', 0, '(unknown function)', None)
        while hasattr(f, 'f_code'):
            co = f.f_code
            fn = os.path.normcase(os.path.abspath(co.co_filename))
            if fn in self.__srcfiles__:
                f = f.f_back
                continue
            rv = (co.co_filename, f.f_lineno, co.co_name, None)
            break
        return rv


class TapLogFormatter(Formatter):
    '''
    `str.format` style formatter with colorful output support.
    Keys `start` and `reset` in format string wrap the colored part.
    '''

    LEVEL2COLOR = {
        logging.DEBUG:    'white',
        logging.INFO:     'yellow',
        logging.WARNING:  'orange',
        logging.ERROR:    'bb-red',
        logging.CRITICAL: 'red'
    }

    def __init__(self, fmt=None, datefmt=DATEFORMAT, style='{', useColor=True):
        Formatter.__init__(self, fmt, datefmt, style)
        self._useColor = useColor
        if self._useColor and style == '{':
            if '{start}' not in self._fmt:
                self._fmt = '{start}' + self._fmt
            if '{reset}' not in self._fmt:
                self._fmt += '{reset}'
            self._style._fmt = self._fmt

    def formatMessage(self, record):
        if not isinstance(self._style, logging.StrFormatStyle):
            return self._style.format(record)
        robj = NameSpace(**record.__dict__)
        if self._useColor:
            c = self.LEVEL2COLOR.get(record.levelno, 'white')
            robj.start = TERMINAL_COLOR2VALUE[c]
            robj.reset = TERMINAL_COLOR2VALUE['reset']
        else:
            robj.start = robj.reset = ''
        return self._style._fmt.format(**robj.__dict__)


# =============================================================================
# A useful Logger configuration entry

def config_logger(name=None, level=logging.INFO, format=LOGFORMAT, **kwargs):
    '''
    Create / config a `Logger` with current namespace's `__name__`.

    Parameters
    ----------
    name : str or instance of Logger, optional
        Name of logger. Default `__name__` of function caller's module.
    level : int or str, optional
        Logging level. Default `logging.INFO`, i.e. 20.
    format : str, optional
        Format string for handlers. Default `taplog.configs.LOGFORMAT`

    And more in `kwargs` will be parsed as logging.basicConfig do, e.g.
    `filename`, `filemode`, `stream`, `datefmt`, `style` and `handler`.
    Extra keywords `addhdlr` (append a handler or replace all handlers) and
    `hdlrlevel` (level of the new handler) are also accepted.

    Notes
    -----
    Do not wrap or call `config_logger` indirectly, because it will always
    execute on direct caller's __name__, e.g.:
    >>> # content of foo.py
    >>> def do_config_logger():
            return config_logger()

    >>> # content of bar.py
    >>> from foo import do_config_logger
    >>> l1 = do_config_logger()
    >>> l2 = config_logger()
    >>> print('logger from foo.py: %s, from bar.py: %s' % (l1.name, l2.name))
    logger from foo.py: foo, from bar.py: bar

    See Also
    --------
    logging.basicConfig
    '''
    if isinstance(name, (str, type(None))):
        name = name or get_caller_globals(1).get('__name__')
        tmp = Logger.manager.loggerClass
        Logger.manager.setLoggerClass(TapLogLogger)
        logger = logging.getLogger(name)
        Logger.manager.loggerClass = tmp
    elif isinstance(name, Logger):
        logger = name
    else:
        raise TypeError('Invalid name of logger: {}'.format(name))

    logger.setLevel(level)

    datefmt   = kwargs.pop('datefmt', DATEFORMAT)
    style     = kwargs.pop('style', '{')
    addhdlr   = kwargs.pop('addhdlr', True)
    hdlrlevel = kwargs.pop('hdlrlevel', None)
    filename  = kwargs.pop('filename', None)

    if filename is not None:
        filename = os.path.abspath(os.path.expanduser(filename))
        filedir = os.path.dirname(filename)
        if not os.path.exists(filedir):
            os.makedirs(filedir, 0o775)
        hdlr = kwargs.pop('handler', logging.FileHandler)
        hdlr = hdlr(filename, mode=kwargs.pop('filemode', 'a'), **kwargs)
    else:
        hdlr = kwargs.pop('handler', logging.StreamHandler)
        if hdlr is logging.StreamHandler:
            hdlr = hdlr(kwargs.pop('stream', sys.stdout), **kwargs)
        else:
            hdlr = hdlr(**kwargs)
    hdlr.setLevel(hdlrlevel or hdlr.level)

    # no colors for files and plain %-style formats
    formatter = TapLogFormatter(format, datefmt, style,
                                not filename and style == '{')
    hdlr.setFormatter(formatter)
    if addhdlr:
        logger.addHandler(hdlr)
    else:
        logger.handlers = [hdlr]
    return logger


# =============================================================================
# Some logging utilities

class TempLogLevel(object):
    '''
    Context manager to temporarily change log level and auto set back.

    Parameters
    ----------
    logger : instance of Logger
        Logger whose level will be temporarily changed.
    level : int | str
        Log level that logging.Logger accept. Default 'INFO' (20).

    Examples
    --------
    >>> logger = taplog.utils.config_logger(level='INFO')
    >>> with TempLogLevel(logger, 'WARNING'):
    ...     logger.info('there will be no info')
    ...     logger.warning('logger is set to warning level')
    logger is set to warning level

    With no logger specified, __name__ of current frame will be used to
    resolve the logger.
    >>> with TempLogLevel(level='DEBUG') as logger:
    ...     logger.debug('logger level is set to DEBUG, so this message exist')
    logger level is set to DEBUG, so this message exist
    '''
    __slots__ = ('_logger', '_level', '_origin')

    def __init__(self, logger=None, level='INFO'):
        if not isinstance(logger, Logger):
            level, logger = logger, None
        self._logger = logger or logging.getLogger(
            get_caller_globals(1)['__name__'])
        self._level = logging._checkLevel(level)
        self._origin = None

    def __enter__(self):
        self._origin = self._logger.level
        self._logger.setLevel(self._level)
        return self._logger

    def __exit__(self, *a):
        self._logger.setLevel(self._origin)


# THE END
