#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/taplog/apps/__init__.py

'''
Applications built on TapLog components. Each subapp is a module that can be
run by ``python -m taplog.apps.<name>``.
'''

import os
__basedir__ = os.path.dirname(os.path.abspath(__file__))
del os

__all__ = ['logger']
