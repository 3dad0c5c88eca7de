"""
Amos BASIC - codestream.py
Code stream and source line utilities

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import re

from . import error
from . import tokens as tk
from .tokens import DIGITS, LETTERS, NAME_CHARS


# leading numeric label, as a separate word
_LINE_NUMBER = re.compile(r'(\d+)(?=\s|:|$)')
# command keyword or variable name at start of statement
_COMMAND = re.compile(r'([A-Za-z][A-Za-z0-9_$]*)\s*(.*)$', re.DOTALL)
# a name on its own
_NAME = re.compile(r'[A-Za-z][A-Za-z0-9_$]*$')


class CodeStream(io.StringIO):
    """Stream of expression text."""

    # whitespace
    blanks = ' \t'

    def peek(self, n=1):
        """Peek next char in stream."""
        pos = self.tell()
        d = self.read(n)
        self.seek(pos)
        return d

    def skip_read(self, skip_range, n=1):
        """Skip chars in skip_range, then read next."""
        while True:
            d = self.read(1)
            # skip_range must not include ''
            if d == '' or d not in skip_range:
                return d + self.read(n-1)

    def skip_blank_read(self, n=1):
        """Skip whitespace, then read next."""
        return self.skip_read(self.blanks, n)

    def skip_blank(self, n=1):
        """Skip whitespace, then peek next."""
        while self.peek() != '' and self.peek() in self.blanks:
            self.read(1)
        return self.peek(n)

    def read_if(self, d, in_range):
        """Read if next char is not empty and in range."""
        if d != '' and d in in_range:
            self.read(len(d))
            return d
        return None

    def skip_blank_read_if(self, in_range, n=1):
        """Skip whitespace, then read if next char is in range."""
        return self.read_if(self.skip_blank(n=n), in_range)

    def require_read(self, in_range, err=error.STX):
        """Skip whitespace, read and raise error if not in range."""
        if self.skip_blank_read_if(in_range, n=len(in_range[0])) is None:
            error.throw_if(True, err, 'expected %s' % ' or '.join(in_range))

    def require_end(self, err=error.STX):
        """Skip whitespace, raise error if not at end of expression."""
        rest = self.read().strip()
        error.throw_if(rest != '', err, 'unexpected `%s`' % rest)

    def read_to(self, findrange):
        """Read until a character from a given range is found."""
        out = ''
        while True:
            d = self.read(1)
            if d == '':
                break
            if d in findrange:
                self.seek(self.tell() - 1)
                break
            out += d
        return out

    def read_name(self):
        """Read a variable or function name."""
        if self.skip_blank() not in tuple(LETTERS):
            return ''
        name = self.read(1)
        while True:
            d = self.peek()
            if d == '' or d not in NAME_CHARS:
                break
            name += self.read(1)
        return name

    def read_word_if(self, word):
        """Read a keyword (case-insensitive) if it is next in the stream."""
        pos = self.tell()
        if self.read_name().upper() == word:
            return True
        self.seek(pos)
        return False

    def read_number(self):
        """Read a decimal integer literal."""
        self.skip_blank()
        out = ''
        while self.peek() != '' and self.peek() in DIGITS:
            out += self.read(1)
        return out

    def read_string(self):
        """Read a string literal, without the quotes."""
        self.require_read((tk.QUOTE,))
        word = self.read_to((tk.QUOTE,))
        # unterminated string runs to the end of the expression
        self.read_if(self.peek(), (tk.QUOTE,))
        return word


###############################################################################
# source line utilities

def find_outside_quotes(text, needle, start=0):
    """Position of needle outside double-quoted strings, or -1."""
    quoted = False
    for i in range(len(text)):
        if text[i] == tk.QUOTE:
            quoted = not quoted
        elif not quoted and i >= start and text.startswith(needle, i):
            return i
    return -1

def find_word(text, word):
    """Position of a whole word (case-insensitive) outside quotes, or -1."""
    upper, start = text.upper(), 0
    while True:
        i = find_outside_quotes(upper, word, start)
        if i < 0:
            return -1
        before = upper[i-1:i]
        after = upper[i+len(word):i+len(word)+1]
        if (not before or before not in NAME_CHARS) and (not after or after not in NAME_CHARS):
            return i
        start = i + 1

def strip_comment(line):
    """Remove a trailing comment and surrounding whitespace."""
    i = find_outside_quotes(line, tk.COMMENT)
    if i >= 0:
        line = line[:i]
    return line.strip()

def split_line_number(line):
    """Split a leading numeric label from the rest of the line."""
    line = line.strip()
    match = _LINE_NUMBER.match(line)
    if not match:
        return None, line
    return match.group(1), line[match.end():].strip()

def split_statements(line):
    """Split a line on colons outside quoted strings."""
    statements, start, quoted = [], 0, False
    for i, c in enumerate(line):
        if c == tk.QUOTE:
            quoted = not quoted
        elif c == tk.SEPARATOR and not quoted:
            statements.append(line[start:i].strip())
            start = i + 1
    statements.append(line[start:].strip())
    return statements

def split_command(statement):
    """Split a statement into uppercase command word and argument text."""
    statement = statement.strip()
    match = _COMMAND.match(statement)
    if match:
        return match.group(1).upper(), match.group(2).strip()
    command, _, arg = statement.partition(' ')
    return command.upper(), arg.strip()

def is_name(text):
    """Text is a single variable or label name."""
    return bool(_NAME.match(text.strip()))

def unquote(text):
    """Remove enclosing double quotes."""
    return text.strip().strip(tk.QUOTE)

def _split_top_level(text, separators, maxsplit=-1):
    """Split on separators outside quotes and parentheses."""
    parts, start, depth, quoted = [], 0, 0, False
    for i, c in enumerate(text):
        if c == tk.QUOTE:
            quoted = not quoted
        elif quoted:
            continue
        elif c == '(':
            depth += 1
        elif c == ')':
            depth = max(0, depth-1)
        elif depth == 0 and c in separators and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append(text[start:i].strip())
            start = i + 1
    parts.append(text[start:].strip())
    return parts

def split_args(text, required, optional=0):
    """Split statement arguments on commas, or on whitespace if there are too few commas."""
    text = text.strip()
    if not text:
        return []
    count = required + optional
    args = _split_top_level(text, ',', count-1)
    if len(args) >= required:
        return args
    words = [_w for _w in _split_top_level(text, ', \t') if _w]
    if len(words) > count:
        words = words[:count-1] + [' '.join(words[count-1:])]
    return words
