"""
Amos BASIC - tokens.py
BASIC keywords and character classes

(c) 2014--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import string


DIGITS = string.digits
UPPERCASE = string.ascii_uppercase
LETTERS = string.ascii_letters
ALPHANUMERIC = LETTERS + DIGITS

# allowable as chars 2.. in a name (first char must be a letter)
NAME_CHARS = ALPHANUMERIC + '_$'

# statement separator, comment marker, string delimiter
SEPARATOR = ':'
COMMENT = ';'
QUOTE = '"'

# keywords
REM = 'REM'
GOTO = 'GOTO'
GOSUB = 'GOSUB'
RETURN = 'RETURN'
CLS = 'CLS'
LOCATE = 'LOCATE'
PRINT = 'PRINT'
AT = 'AT'
LET = 'LET'
WAIT = 'WAIT'
VBL = 'VBL'
VSYNC = 'VSYNC'
IF = 'IF'
THEN = 'THEN'
ELSE = 'ELSE'
ENDIF = 'ENDIF'
FOR = 'FOR'
TO = 'TO'
STEP = 'STEP'
NEXT = 'NEXT'
SCREEN = 'SCREEN'
SELECT = 'SELECT'
SCROLL = 'SCROLL'
CLSG = 'CLSG'
LOAD = 'LOAD'
INK = 'INK'
PLOT = 'PLOT'
LINE = 'LINE'
BOX = 'BOX'
BAR = 'BAR'
TEXT = 'TEXT'
REFRESH = 'REFRESH'
SPRITE = 'SPRITE'
POS = 'POS'
ADDFRAME = 'ADDFRAME'
FRAME = 'FRAME'
HANDLE = 'HANDLE'
ON = 'ON'
OFF = 'OFF'
SAM = 'SAM'
PLAY = 'PLAY'
MUSIC = 'MUSIC'
STOP = 'STOP'
TILE = 'TILE'
MAP = 'MAP'
SET = 'SET'
DRAW = 'DRAW'
END = 'END'

# functions
INKEY = 'INKEY$'
KEYSTATE = 'KEYSTATE'
HIT = 'HIT'
RND = 'RND'
WIDTH = 'WIDTH'
HEIGHT = 'HEIGHT'

# relational operators in order of matching priority
RELATIONS = ('<>', '<=', '>=', '=', '<', '>')
