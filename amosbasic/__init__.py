"""
Amos BASIC - line interpreter for an AMOS-like game programming BASIC

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .basic import __version__
from .basic import NAME, VERSION, AUTHOR, COPYRIGHT
from .basic import Session, DebugSession, Outcome
from .main import main
