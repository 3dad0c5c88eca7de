"""
Amos BASIC - expressions.py
Expression and condition parser

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .base import error
from .base import tokens as tk
from .base import codestream
from .base.tokens import DIGITS, LETTERS
from . import values
from .graphics import TILE_SIZE


class ExpressionParser(object):
    """Recursive-descent expression evaluator."""

    def __init__(self, scalars, randomiser):
        """Initialise expression parser."""
        self._scalars = scalars
        self._randomiser = randomiser
        # collaborators, set by init_functions
        self._keyboard = None
        self._graphics = None

    def init_functions(self, session):
        """Assign function callbacks."""
        self._keyboard = session.keyboard
        self._graphics = session.graphics

    def parse(self, text):
        """Evaluate an expression to a value."""
        ins = codestream.CodeStream(text.strip())
        error.throw_if(ins.skip_blank() == '', error.MISSING_OPERAND)
        value = self._parse_expr(ins)
        ins.require_end()
        return value

    def parse_int(self, text):
        """Evaluate an expression to a Python int."""
        return self.parse(text).to_int()

    def parse_condition(self, text):
        """Evaluate a condition with at most one relational operator."""
        for op in tk.RELATIONS:
            pos = codestream.find_outside_quotes(text, op)
            if pos >= 0:
                left = self.parse(text[:pos])
                right = self.parse(text[pos+len(op):])
                return values.compare(op, left, right)
        return self.parse_int(text) != 0

    ###########################################################################
    # grammar

    def _parse_expr(self, ins):
        """Expr := Term (('+'|'-') Term)*"""
        value = self._parse_term(ins)
        while True:
            op = ins.skip_blank_read_if(('+', '-'))
            if op is None:
                return value
            right = self._parse_term(ins)
            if op == '+':
                value = values.add(value, right)
            else:
                value = values.subtract(value, right)

    def _parse_term(self, ins):
        """Term := Factor (('*'|'/') Factor)*"""
        value = self._parse_factor(ins)
        while True:
            op = ins.skip_blank_read_if(('*', '/'))
            if op is None:
                return value
            right = self._parse_factor(ins)
            if op == '*':
                value = values.multiply(value, right)
            else:
                value = values.divide(value, right)

    def _parse_factor(self, ins):
        """Factor := '-' Factor | '(' Expr ')' | number | string | name or function."""
        d = ins.skip_blank()
        if d == '':
            raise error.BASICError(error.MISSING_OPERAND)
        elif ins.read_if(d, ('-',)):
            return values.negate(self._parse_factor(ins))
        elif ins.read_if(d, ('+',)):
            return values.Integer(self._parse_factor(ins).to_int())
        elif ins.read_if(d, ('(',)):
            value = self._parse_expr(ins)
            ins.require_read((')',))
            return value
        elif d in DIGITS:
            return values.Integer(int(ins.read_number()))
        elif d == tk.QUOTE:
            return values.String(ins.read_string())
        elif d in LETTERS:
            return self._parse_name(ins)
        raise error.BASICSyntaxError('unexpected `%s`' % d)

    def _parse_name(self, ins):
        """Built-in function or variable."""
        name = ins.read_name()
        upper = name.upper()
        if upper == tk.MAP:
            if ins.read_word_if(tk.WIDTH):
                return values.Integer(self._graphics.map_width * TILE_SIZE)
            elif ins.read_word_if(tk.HEIGHT):
                return values.Integer(self._graphics.map_height * TILE_SIZE)
        elif upper == tk.HIT:
            sprite0, sprite1 = self._parse_arguments(ins, 2)
            return values.Integer(self._graphics.hit(sprite0, sprite1))
        elif upper == tk.TILE:
            args = self._parse_arguments(ins, 2, 1)
            layer, x, y = args[0], args[1], (args[2] if len(args) > 2 else 0)
            # pixel to cell truncates toward zero, like integer division
            tile_x, tile_y = (
                values.divide(values.Integer(_c), values.Integer(TILE_SIZE)).to_int() for _c in (x, y)
            )
            return values.Integer(self._graphics.get_tile(layer, tile_x, tile_y))
        elif upper == tk.RND:
            upper_bound, = self._parse_arguments(ins, 1)
            error.throw_if(upper_bound < 0)
            return values.Integer(self._randomiser.randint(0, upper_bound))
        elif upper == tk.KEYSTATE:
            ins.require_read(('(',))
            key = codestream.unquote(ins.read_to((')',)))
            ins.require_read((')',))
            return values.Integer(self._keyboard.is_key_down(key))
        elif upper == tk.INKEY:
            return self._keyboard.get_inkey()
        return self._scalars.get(name)

    def _parse_arguments(self, ins, required, optional=0):
        """Parse a parenthesised list of integer arguments."""
        ins.require_read(('(',))
        args = [self._parse_expr(ins).to_int()]
        while ins.skip_blank_read_if((',',)):
            args.append(self._parse_expr(ins).to_int())
        ins.require_read((')',))
        error.throw_if(
            not required <= len(args) <= required + optional, error.STX, 'wrong number of arguments'
        )
        return args
