"""
Amos BASIC - line interpreter for an AMOS-like game programming BASIC

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import sys

from .main import main

sys.exit(main())
