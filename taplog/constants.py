#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/constants.py

'''Define some constants here'''

import string

__all__ = []

# =============================================================================
# CSV log format

CSV_FIELDS = ('StartTimestamp', 'Duration(ms)', 'PeakPressure', 'CustomText')
CSV_DELIMITER = ','
CSV_HEADER = CSV_DELIMITER.join(CSV_FIELDS)
CSV_NEWLINE = '\n'
CSV_ENCODING = 'utf8'

DATE_FORMAT = '%Y-%m-%d'

__all__ += [
    'CSV_FIELDS', 'CSV_DELIMITER', 'CSV_HEADER', 'CSV_NEWLINE',
    'CSV_ENCODING', 'DATE_FORMAT',
]

# =============================================================================
# Terminal colors used by taplog.utils.TapLogFormatter

TERMINAL_COLOR2VALUE = {
    'reset':   '\033[0m',
    'white':   '\033[37m',
    'yellow':  '\033[33m',
    'orange':  '\033[38;5;208m',
    'red':     '\033[31m',
    'bb-red':  '\033[1;91m',
    'green':   '\033[32m',
    'blue':    '\033[34m',
}

__all__ += ['TERMINAL_COLOR2VALUE']

# =============================================================================
# Filenames

VALID_FILENAME_CHARACTERS = '-_.() %s%s' % (string.ascii_letters,
                                            string.digits)
INVALID_FILENAMES_UNIX = ['.', '..']
INVALID_FILENAMES_WIN = [
    'CON', 'PRN', 'AUX', 'NUL',
    'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
    'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9',
]

__all__ += [
    'VALID_FILENAME_CHARACTERS',
    'INVALID_FILENAMES_UNIX', 'INVALID_FILENAMES_WIN',
]

# =============================================================================
# Boolean

BOOLEAN_TABLE = {
    '0': False, '1': True,
    'no': False, 'yes': True,
    'n': False, 'y': True,
    'off': False, 'on': True,
    'false': False, 'true': True,
    'none': None,
}

__all__ += ['BOOLEAN_TABLE']

del string

# THE END
