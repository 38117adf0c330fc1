#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/backup.py

'''
Daily backup of the primary log.

The first check of a calendar day copies the primary log to
`${LOG_SUBDIR}/${BACKUP_SUBDIR}/${yesterday}.csv` on the background worker and
records the day in the preferences, so later checks on the same day, even
after a restart, do nothing. The day is recorded as soon as the copy is
submitted: a copy that fails is not retried until the next day.
'''

# built-in
import datetime

from .configs import LOG_SUBDIR, LOG_FILENAME, BACKUP_SUBDIR, LOG_MIMETYPE
from .io import DurableLogStore, BackupState
from .utils import config_logger, datestamp, to_date, typename, verbose

logger = config_logger()
del config_logger

__all__ = ['BackupScheduler']


class BackupScheduler(object):
    '''
    Parameters
    ----------
    log_store : DurableLogStore
    worker : BackgroundWorker
        Where the copy task runs.
    state : BackupState, optional
        Durable day-gate. Default one backed by the default preferences.
    log_name, log_dir, backup_dir : str, optional
        Location of the primary log and of the backups.
    '''

    def __init__(self, log_store, worker, state=None,
                 log_name=LOG_FILENAME, log_dir=LOG_SUBDIR,
                 backup_dir=None):
        if not isinstance(log_store, DurableLogStore):
            raise TypeError('DurableLogStore wanted, but got `%s`'
                            % typename(log_store))
        self.log_store = log_store
        self.worker = worker
        self.state = state if state is not None else BackupState()
        self.log_name = log_name
        self.log_dir = log_dir
        if backup_dir is None:
            backup_dir = '/'.join([log_dir, BACKUP_SUBDIR])
        self.backup_dir = backup_dir

    def __repr__(self):
        return '<{} last backup: {}>'.format(
            typename(self), self.state.last_backup_date or 'never')

    @staticmethod
    def backup_name(day):
        return datestamp(day) + '.csv'

    @verbose
    def check_and_backup(self, now=None, verbose=None):
        '''
        Start a backup if none was started today.

        Parameters
        ----------
        now : datetime | date | float, optional
            Current time, epoch seconds accepted. Default now.

        Returns
        -------
        started : bool
            False if a backup was already started today.
        '''
        today = to_date(now)
        last = self.state.last_backup_date
        if last == datestamp(today):
            logger.debug('Logs already backed up today (%s)' % last)
            return False
        yesterday = today - datetime.timedelta(days=1)
        source = self.log_store.resolve(
            self.log_name, self.log_dir, LOG_MIMETYPE)
        if source is not None:
            self.worker.submit(self.backup, source, yesterday)
            logger.info('Backup of %s as %s submitted'
                        % (source, self.backup_name(yesterday)))
        else:
            logger.error('Primary log not available, backup skipped')
        self.state.last_backup_date = today
        return True

    def backup(self, source, backup_date):
        '''
        Copy `source` to the dated backup file. Runs on the worker; failures
        are logged and swallowed.
        '''
        name = self.backup_name(backup_date)
        destination = self.log_store.resolve(
            name, self.backup_dir, LOG_MIMETYPE)
        if destination is None:
            logger.error('Cannot create backup file %s' % name)
            return False
        return self.log_store.copy(source, destination)


# THE END
