"""
Amos BASIC - base package
Shared constants, signals and exceptions

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""
