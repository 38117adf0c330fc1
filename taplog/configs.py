#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/configs.py

'''
Everything about configuration. When imported, this module will automatically
load configs from local configuration files.
'''

# built-in
import os
import sys
import configparser

from . import __basedir__
__module__ = sys.modules[__name__]  # reference to this module


# =============================================================================
# Default configuration

# example: (RED)[C 12:26:33.120 taplog.io.base:141](RED) abort!
LOGFORMAT = (
    '{start}'
    '[{levelname[0]} {asctime}.{msecs:03.0f} {name}.{module}:{lineno}]'
    '{reset}'
    ' {message}'
)
DATEFORMAT = '%H:%M:%S'

# Layout inside the content store. Backups live under LOG_SUBDIR/BACKUP_SUBDIR
LOG_SUBDIR = 'DiscreteLogger'
LOG_FILENAME = 'discreteLogs.csv'
LOG_MIMETYPE = 'text/csv'
BACKUP_SUBDIR = 'Backups'

PREFS_NAME = 'LogPrefs'
PREFS_KEY_BACKUP = 'lastBackupDate'

# Simulated barometer (hPa) used when no real sensor is wired in
SENSOR_MEAN = 1013.25
SENSOR_STD = 0.15
SENSOR_RATE = 5

DIR_ENSURE_EXIST = True
DIR_BASE = os.path.dirname(__basedir__)  # Suppose `taplog` is not installed
if os.name == 'nt':
    DIR_PREFS = os.path.expanduser('~/.taplog/prefs')
else:
    DIR_PREFS = os.path.expanduser('~/.config/taplog')


# =============================================================================
# Update runtime configurations from config files.
# If `taplog` has been installed by pip, `DIR_BASE` should be overwritten
# by real path configured in default config files.

DEFAULT_CONFIG_FILES = list(filter(os.path.exists, [
    os.path.join(DIR_BASE, 'files/service/taplog.conf'),
    (os.path.expandvars('${APPDATA}/taplog.conf') if os.name == 'nt'
     else '/etc/taplog/taplog.conf'),
    os.path.expanduser('~/.taplog/taplog.conf')
]))

cp = configparser.ConfigParser()
cp.optionxform = str
cp.read(DEFAULT_CONFIG_FILES)

# DO NOT use `globals().update(cp.items)` here. It may cause recursive loop
for _ in cp.sections():
    __module__.__dict__.update(cp.items(_))

__module__.__dict__.setdefault('DIR_DATA', os.path.join(DIR_BASE, 'data'))
__module__.__dict__.setdefault('DIR_TEST', os.path.join(DIR_BASE, 'tests'))

if str(DIR_ENSURE_EXIST).lower() in ['true', 'yes', 'y', '1']:
    # only directories TapLog writes to
    for DIR in ['DIR_DATA', 'DIR_PREFS']:
        DIR = getattr(__module__, DIR)
        if not isinstance(DIR, str) or os.path.exists(DIR):
            continue
        try:
            os.makedirs(DIR, 0o775)
        except OSError as e:
            sys.stderr.write('Cannot make directory `%s`: %s\n' % (DIR, e))
    del DIR

del os, sys, cp, configparser
