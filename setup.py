#!/usr/bin/env python3
# encoding: utf-8
"""
setup.py

Copyright (c) 2009-2017 Exa Networks. All rights reserved.
"""

import os

import setuptools


def filesOf(directory):
    files = []
    for l, d, fs in os.walk(directory):
        if not d:
            for f in fs:
                files.append(os.path.join(l, f))
    return files


data_files = [
    ('etc/bmpspeaker/examples', filesOf('etc/bmpspeaker')),
]

setuptools.setup(
    name='bmp-speaker',
    version='0.1.0',
    description='BMP test speaker, sends hand crafted BMP messages to a monitoring station',
    license='BSD-3-Clause',
    python_requires='>=3.10',
    package_dir={'': 'src'},
    packages=setuptools.find_namespace_packages(where='src', include=['bmpspeaker', 'bmpspeaker.*']),
    install_requires=[
        'prompt_toolkit>=3.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'bmp-speaker = bmpspeaker.application.main:main',
        ],
    },
    data_files=data_files,
)
