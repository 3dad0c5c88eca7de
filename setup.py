#!/usr/bin/env python3
"""
Amos BASIC install script

(c) 2015--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import ast
from io import open

from setuptools import find_packages, setup


###############################################################################
# get descriptions and version number

# file location
HERE = os.path.abspath(os.path.dirname(__file__))

# obtain metadata without importing the package (to avoid pulling in dependencies)
_METADATA = {}
with open(os.path.join(HERE, 'amosbasic', 'basic', 'metadata.py'), 'r', encoding='utf-8') as meta:
    for _node in ast.parse(meta.read()).body:
        if isinstance(_node, ast.Assign) and isinstance(_node.value, ast.Constant):
            for _target in _node.targets:
                _METADATA[_target.id] = _node.value.value

VERSION = _METADATA['VERSION']
AUTHOR = _METADATA['AUTHOR']
DESCRIPTION = _METADATA['DESCRIPTION']


###############################################################################
# setup parameters

SETUP_OPTIONS = dict(
    name='amosbasic',
    version=VERSION,
    author=AUTHOR,
    description=DESCRIPTION,
    license='GPLv3',
    python_requires='>=3.9',

    # contents
    # only include subpackages of amosbasic: exclude tests etc
    packages=find_packages(include=['amosbasic', 'amosbasic.*']),
    package_data={'amosbasic.data': ['*.txt']},
    install_requires=['numpy'],
    extras_require={
        'pygame': ['pygame'],
        'test': ['pytest'],
    },
    # launchers
    entry_points=dict(
        console_scripts=['amosbasic=amosbasic:main'],
    ),
)

###############################################################################
# run the setup

# perform the installation
setup(**SETUP_OPTIONS)
