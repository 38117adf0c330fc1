# coding=utf-8

'''
TapLog: discreet background logger of pointer contacts
Correlates press/release signals into tap events annotated with an ambient
pressure peak, appends them to a CSV log and keeps daily backups.
'''

import os

__basedir__   = os.path.dirname(os.path.abspath(__file__))
__title__     = 'TapLog'
__summary__   = 'Discreet tap event logger with daily CSV backups'
__author__    = 'TapLog contributors'
__email__     = 'taplog@users.noreply.github.com'
__version__   = '0.1.0'
__date__      = '2026.10.17'
__license__   = 'MIT'
__copyright__ = 'Copyright 2026 TapLog contributors'
__keywords__  = (
    'Touch-Logging '
    'Event-Correlation '
    'CSV '
    'Barometer '
    'Data-Collection '
)


def version():
    return '{} {} ({})'.format(__title__, __version__, __date__)


from . import utils
from . import configs
from . import io
from .events import TapEvent, ContactState, EventCorrelator
from .buffer import PendingEventBuffer
from .worker import BackgroundWorker
from .backup import BackupScheduler
from .testing import test

__all__ = (
    'io', 'utils', 'configs', 'test',
    'TapEvent', 'ContactState', 'EventCorrelator',
    'PendingEventBuffer', 'BackgroundWorker', 'BackupScheduler',
)

del os
