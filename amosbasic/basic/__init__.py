"""
Amos BASIC - line interpreter for an AMOS-like game programming BASIC

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .metadata import NAME, VERSION, LONG_VERSION, AUTHOR, COPYRIGHT
from .api import Session, Outcome, COMPLETED, CANCELLED, FAILED
from .debug import DebugSession
from .base.error import *
from .base import signals

__version__ = VERSION
