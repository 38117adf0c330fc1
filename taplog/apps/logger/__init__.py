#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/apps/logger/__init__.py

'''
Why a separate app?
-------------------
The components in `taplog` only know how to correlate, buffer and store
taps. Someone has to decide when logging is allowed, where touches come
from and when the buffer is flushed:
    1. Logging only happens while the screen is interactive and the app is
       in the foreground; turning the screen off drops unfinished contacts.
    2. Taps wait in memory until the user submits a label, then all of them
       are written at once on the background worker.
    3. Each time the app comes back to the foreground, the daily backup is
       checked.

This file will make the app a module and provide class `TapLogger`
'''

from taplog.utils import config_logger
logger = config_logger(__name__)
del config_logger

from .base import TapLogger  # noqa: W611
