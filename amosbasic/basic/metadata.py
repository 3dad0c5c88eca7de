"""
Amos BASIC - metadata.py
Package metadata

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

NAME = 'Amos BASIC'
VERSION = '1.0.0'
LONG_VERSION = VERSION
AUTHOR = 'Rob Hagemans'
COPYRIGHT = '(C) Copyright 2013--2022 Rob Hagemans.'
LICENCE = 'GPLv3'
DESCRIPTION = 'A line interpreter for an AMOS-like game programming BASIC.'
