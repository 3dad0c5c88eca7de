"""
Amos BASIC - program.py
Program text, label table and block jump tables

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging

from .base import tokens as tk
from .base import codestream


class Program(object):
    """Program lines with label and IF/ELSE/ENDIF jump tables, built once on load."""

    def __init__(self, text=''):
        """Split the text into lines and pre-scan them."""
        text = text.replace('\r\n', '\n').replace('\r', '\n')
        self._lines = tuple(text.split('\n'))
        self._labels = {}
        self._if_jumps = {}
        self._else_jumps = {}
        self._scan()

    def __len__(self):
        """Number of lines."""
        return len(self._lines)

    @property
    def lines(self):
        """Raw program lines."""
        return self._lines

    @property
    def labels(self):
        """Copy of the label table."""
        return dict(self._labels)

    @property
    def if_jumps(self):
        """Copy of the IF jump table."""
        return dict(self._if_jumps)

    @property
    def else_jumps(self):
        """Copy of the ELSE jump table."""
        return dict(self._else_jumps)

    def get_label(self, label):
        """PC of a label, or None if it is not defined."""
        return self._labels.get(label.strip().upper())

    def get_if_jump(self, pc):
        """Successor of a block IF on a false condition, or None."""
        return self._if_jumps.get(pc)

    def get_else_jump(self, pc):
        """Successor of an ELSE reached from the true branch, or None."""
        return self._else_jumps.get(pc)

    def get_statements(self, pc):
        """Executable statements of a line; empty for blank and pure label lines."""
        label, _, statements = parse_line(self._lines[pc])
        return statements

    ###########################################################################
    # pre-scan

    def _scan(self):
        """Build the label table and match IF/ELSE/ENDIF blocks."""
        # stack of (keyword, pc) for open blocks
        blocks = []
        for pc, line in enumerate(self._lines):
            number, name, statements = parse_line(line)
            if number is not None:
                self._labels[number] = pc
            if name is not None:
                self._labels[name.upper()] = pc
            if not statements:
                continue
            command, arg = codestream.split_command(statements[0])
            if command == tk.IF and is_block_if(arg, statements[1:]):
                blocks.append((tk.IF, pc))
            elif command == tk.ELSE:
                if not blocks or blocks[-1][0] != tk.IF:
                    logging.warning('ELSE without IF in line %d', pc+1)
                    continue
                _, if_pc = blocks.pop()
                self._if_jumps[if_pc] = pc + 1
                blocks.append((tk.ELSE, pc))
            elif is_endif(command, arg):
                if not blocks:
                    logging.warning('ENDIF without IF in line %d', pc+1)
                    continue
                keyword, block_pc = blocks.pop()
                if keyword == tk.IF:
                    self._if_jumps[block_pc] = pc + 1
                else:
                    self._else_jumps[block_pc] = pc + 1
        for keyword, block_pc in blocks:
            logging.warning('%s without ENDIF in line %d', keyword, block_pc+1)


def parse_line(line):
    """Split a source line into numeric label, named label and statements."""
    line = codestream.strip_comment(line)
    number, line = codestream.split_line_number(line)
    if not line:
        return number, None, []
    statements = codestream.split_statements(line)
    name = None
    # a name followed by a colon: either a pure label line or a label prefix
    if len(statements) > 1 and codestream.is_name(statements[0]):
        if statements[0].upper() not in KEYWORDS or not any(statements[1:]):
            name = statements[0]
            statements = statements[1:]
    return number, name, [_s for _s in statements if _s]

def is_block_if(arg, following=()):
    """IF without THEN, or with nothing after THEN, opens a block."""
    then = codestream.find_word(arg, tk.THEN)
    if then < 0:
        return True
    return not arg[then+len(tk.THEN):].strip() and not any(following)

def is_endif(command, arg):
    """ENDIF, also written END IF."""
    return command == tk.ENDIF or (command == tk.END and arg.upper() == tk.IF)


# statements that must not be mistaken for a label prefix
KEYWORDS = set((
    tk.REM, tk.GOTO, tk.GOSUB, tk.RETURN, tk.CLS, tk.LOCATE, tk.PRINT, tk.LET, tk.WAIT,
    tk.IF, tk.ELSE, tk.ENDIF, tk.FOR, tk.NEXT, tk.SCREEN, tk.SCROLL, tk.CLSG, tk.LOAD,
    tk.INK, tk.PLOT, tk.LINE, tk.BOX, tk.BAR, tk.TEXT, tk.REFRESH, tk.SPRITE, tk.SAM,
    tk.MUSIC, tk.TILE, tk.MAP, tk.END, tk.VSYNC,
))
