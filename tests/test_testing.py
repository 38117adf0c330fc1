#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/tests/test_testing.py

# built-in
import os

from taplog.configs import DIR_TEST
from taplog.testing import find_tests, PytestRunner


def test_find_tests_package():
    assert find_tests('taplog') == [DIR_TEST]
    assert find_tests(None) == [DIR_TEST]
    assert find_tests('taplog.io') == [os.path.join(DIR_TEST, 'io')]


def test_find_tests_module():
    assert find_tests('taplog.events') == [
        os.path.join(DIR_TEST, 'test_events.py')]
    assert find_tests('taplog.io.prefs') == [
        os.path.join(DIR_TEST, 'io', 'test_prefs.py')]
    assert find_tests('taplog.no_such_module') == []


def test_runner_without_tests(capsys):
    runner = PytestRunner('taplog.no_such_module')
    assert runner.testpath == []
    assert runner() == 0
    assert 'No tests found' in capsys.readouterr().out
