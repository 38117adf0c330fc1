#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/io/__init__.py

from ..utils import config_logger
logger = config_logger()
del config_logger

from ..testing import PytestRunner
test = PytestRunner(__name__)
del PytestRunner

from .store import *                                               # noqa: W401
from .base import *                                                # noqa: W401
from .prefs import *                                               # noqa: W401
from .readers import *                                             # noqa: W401
