#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/apps/logger/__main__.py

'''
This file provides a command line interface to a TapLogger fed by a simulated
barometer. Taps are simulated by command `tap` and written to the CSV log
once a label is submitted.

Type `python -m taplog.apps.logger` and hit return to start this program.
Append '-v' if you need verbose log output and '-r ROOT' to store the logs
somewhere else than `DIR_DATA`. You can manipulate the logger by command
like below:
    >>> status
    enabled
    >>> tap 300
    True
    >>> pending
    1
    >>> label on the bus
    True
    >>> tail 1
    1792222458123,300,1013.11,on the bus
    >>> logging_enabled off
    False
    >>> summary
    ambient         : 1013.27
    last_backup     : 2026-10-17
    logging_enabled : False
    ...

Type `help` for more information.
'''

# built-in
import sys
import shlex
import signal
import logging
import argparse
import traceback

from taplog.io import AmbientSensor, FakePressureGenerator
from taplog.utils import debug_helper

from . import logger
from .base import globalvars, TapLogger

ALIASES = {
    'label': 'submit_label',
}


def exit(*a, **k):
    app = getattr(globalvars, 'app', None)
    if app is None:
        return
    try:
        app.worker.wait(timeout=5)
        app.close()
    except Exception:
        logger.error(traceback.format_exc())
    globalvars.app = None


def on_signal(signum, frame):
    '''Close the app and leave the blocking command prompt.'''
    logger.info('Signal %s received, exiting.' % signum)
    exit()
    raise SystemExit(0)


def enable_debug():
    for name in list(logging.Logger.manager.loggerDict):
        if name.split('.')[0] == 'taplog':
            debug_helper(True, name)


def parse_command(command):
    '''Translate one line of input into a `TapLogger.cmd` argument.'''
    command = command.strip()
    name, _, rest = command.partition(' ')
    if name not in ALIASES:
        return command
    if name == 'label':
        # keep the label text as it was typed
        return '{} {}'.format(ALIASES[name], shlex.quote(rest.strip()))
    return ' '.join([ALIASES[name], rest]).strip()


def make_parser():
    parser = argparse.ArgumentParser(
        prog='taplog', description='Discreet tap event logger.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='verbose log output')
    parser.add_argument('-r', '--root', default=None,
                        help='root directory of the logs')
    parser.add_argument('-p', '--prefs', default=None,
                        help='directory of the preferences file')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed of the simulated barometer')
    return parser


def main(args=None):
    args = make_parser().parse_args(args)
    if args.verbose:
        enable_debug()

    sensor = AmbientSensor()
    generator = FakePressureGenerator(sensor, seed=args.seed)
    app = globalvars.app = TapLogger(
        root=args.root, prefs_dir=args.prefs,
        sensor=sensor, generator=generator)
    app.start()
    app.on_resume()

    signal.signal(signal.SIGTERM, on_signal)
    if hasattr(signal, 'SIGHUP'):
        signal.signal(signal.SIGHUP, on_signal)

    while getattr(globalvars, 'app', None) is not None and app.worker.started:
        try:
            command = input('>>> ')
        except (KeyboardInterrupt, EOFError):
            break
        logger.debug('Received command: `%s`' % command)
        if command.strip() in ['exit', 'quit']:
            break
        try:
            print(app.cmd(parse_command(command)) or '')
        except Exception:
            logger.error(traceback.format_exc())
            break
    exit()
    logger.debug('Main thread listening for commands terminated.')
    return 0


if __name__ == '__main__':
    if '-h' in sys.argv or '--help' in sys.argv:
        print(__doc__)
    sys.exit(main())
