#!/usr/bin/env python3
# coding=utf-8
#
# File: TapLog/setup.py

from setuptools import setup, find_packages
import os
import re

__basedir__ = os.path.dirname(os.path.abspath(__file__))


def extract_metadata(fn):
    # read `__title__ = 'TapLog'` lines without importing the package
    with open(fn, 'r') as f:
        content = f.read()
    return dict(re.findall(
        r'^__(\w+)__\s*=\s*[\'"]([^\'"]*)[\'"]', content, re.M))


def extract_requirements(fn):
    if not os.path.isfile(fn):
        return []
    with open(fn, 'r') as f:
        return [
            _.strip() for _ in f.readlines()
            if not _.startswith('#') and len(_.strip())
        ]


meta = extract_metadata(os.path.join(__basedir__, 'taplog', '__init__.py'))
reqmods = extract_requirements(os.path.join(__basedir__, 'requirements.txt'))
devmods = list(set(
    extract_requirements(os.path.join(__basedir__, 'requirements-dev.txt'))
).difference(reqmods))


extras = dict(
    install_requires=reqmods,
    extras_require={'test': devmods},
    entry_points={
        'console_scripts': [
            'taplog = taplog.apps.logger.__main__:main',
        ]
    },
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={},
    data_files=[
        ('etc/taplog', ['files/service/taplog.conf']),
    ],
    python_requires='>=3.5',
)


setup(
    name         = meta['title'],
    version      = meta['version'],
    author       = meta['author'],
    author_email = meta['email'],
    license      = meta['license'],
    description  = meta['summary'],
    keywords     = meta.get('keywords', ''),
    **extras
)
