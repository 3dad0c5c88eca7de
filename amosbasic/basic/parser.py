"""
Amos BASIC - parser.py
Statement parser

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import re
import logging
from functools import partial

from .base import error
from .base import tokens as tk
from .base import codestream
from . import expressions
from . import graphics
from . import program


# implicit LET: a name followed by an equals sign
_ASSIGNMENT = re.compile(r'([A-Za-z][A-Za-z0-9_$]*)\s*=(.*)$', re.DOTALL)

# statements allowed after THEN on an inline IF
INLINE_STATEMENTS = set((
    tk.REM, tk.PRINT, tk.LOCATE, tk.LET, tk.PLOT, tk.WAIT, tk.VSYNC, tk.REFRESH, tk.GOTO, tk.END,
    tk.SPRITE + ' ' + tk.POS, tk.SPRITE + ' ' + tk.FRAME,
    tk.SPRITE + ' ' + tk.ON, tk.SPRITE + ' ' + tk.OFF,
    tk.SAM + ' ' + tk.PLAY,
))


class Parser(object):
    """BASIC statement parser."""

    def __init__(self, scalars, randomiser):
        """Initialise statement context."""
        # expression parser
        self.expression_parser = expressions.ExpressionParser(scalars, randomiser)
        self._interpreter = None
        # initialise syntax parser tables
        self._init_syntax()

    def init_callbacks(self, session):
        """Assign statement and function callbacks."""
        self.init_statements(session)
        self.expression_parser.init_functions(session)

    def parse_statement(self, statement, following=(), inline=False):
        """Parse and execute a single statement; return True if it consumed the rest of the line."""
        c, arg = codestream.split_command(statement)
        if not c:
            return False
        if program.is_endif(c, arg):
            c, arg = tk.ENDIF, ''
        if c in self._simple:
            parse_args = self._simple[c]
        elif c in self._complex:
            stat_dict = self._complex[c]
            selector, rest = codestream.split_command(arg)
            if selector in stat_dict:
                c, arg = c + ' ' + selector, rest
            else:
                selector = None
            if selector not in stat_dict:
                raise error.BASICSyntaxError('%s needs one of %s' % (c, ', '.join(sorted(
                    _k for _k in stat_dict if _k is not None
                ))))
            parse_args = stat_dict[selector]
        elif _ASSIGNMENT.match(statement.strip()):
            # implicit LET
            c, arg = tk.LET, statement.strip()
            parse_args = self._simple[tk.LET]
        else:
            raise error.BASICSyntaxError('unknown command `%s`' % c)
        if inline and c not in INLINE_STATEMENTS:
            raise error.BASICSyntaxError('%s not allowed after THEN' % c)
        if c == tk.REM:
            return True
        if c == tk.IF:
            return self._if(arg, following)
        self._callbacks[c](parse_args(arg))
        return False

    def parse_expression(self, text):
        """Compute the value of an expression."""
        return self.expression_parser.parse(text)

    def parse_int(self, text):
        """Compute the value of an integer expression."""
        return self.expression_parser.parse_int(text)

    ###########################################################################

    def _init_syntax(self):
        """Initialise syntax parsers."""
        self._simple = {
            tk.REM: self._parse_nothing,
            tk.GOTO: self._parse_label,
            tk.GOSUB: self._parse_label,
            tk.RETURN: self._parse_end,
            tk.CLS: self._parse_end,
            tk.LOCATE: partial(self._parse_int_args, 2),
            tk.PRINT: self._parse_print,
            tk.LET: self._parse_let,
            tk.WAIT: self._parse_wait,
            tk.VSYNC: self._parse_end,
            tk.IF: self._parse_nothing,
            tk.ELSE: self._parse_end,
            tk.ENDIF: self._parse_end,
            tk.FOR: self._parse_for,
            tk.NEXT: self._parse_next,
            tk.SCROLL: partial(self._parse_int_args, 2),
            tk.CLSG: self._parse_end,
            tk.LOAD: self._parse_file_name,
            tk.INK: self._parse_ink,
            tk.PLOT: partial(self._parse_int_args, 2),
            tk.LINE: partial(self._parse_int_args, 4),
            tk.BOX: partial(self._parse_int_args, 4),
            tk.BAR: partial(self._parse_int_args, 4),
            tk.TEXT: self._parse_text,
            tk.REFRESH: self._parse_end,
            tk.END: self._parse_end,
        }
        self._complex = {
            tk.SCREEN: {
                None: partial(self._parse_int_args, 2),
                tk.SELECT: partial(self._parse_int_args, 1),
            },
            tk.SPRITE: {
                None: partial(self._parse_int_args, 3),
                tk.POS: partial(self._parse_int_args, 3),
                tk.LOAD: self._parse_number_file_name,
                tk.ADDFRAME: self._parse_number_file_name,
                tk.FRAME: partial(self._parse_int_args, 2),
                tk.HANDLE: partial(self._parse_int_args, 3),
                tk.ON: partial(self._parse_int_args, 1),
                tk.OFF: partial(self._parse_int_args, 1),
            },
            tk.SAM: {
                tk.PLAY: self._parse_file_name,
            },
            tk.MUSIC: {
                tk.PLAY: self._parse_file_name,
                tk.STOP: self._parse_end,
            },
            tk.TILE: {
                tk.LOAD: self._parse_file_name,
                tk.MAP: partial(self._parse_int_args, 2),
                tk.SET: partial(self._parse_int_args, 3, optional=1),
                tk.DRAW: partial(self._parse_int_args, 0, optional=1),
            },
            tk.MAP: {
                tk.LOAD: self._parse_file_name,
            },
        }

    def init_statements(self, session):
        """Initialise statement callbacks."""
        self._interpreter = session.interpreter
        self._callbacks = {
            tk.GOTO: session.interpreter.goto_,
            tk.GOSUB: session.interpreter.gosub_,
            tk.RETURN: session.interpreter.return_,
            tk.CLS: session.console.cls_,
            tk.LOCATE: session.console.locate_,
            tk.PRINT: session.console.print_,
            tk.LET: session.scalars.let_,
            tk.WAIT: session.wait_,
            tk.VSYNC: session.vsync_,
            tk.IF: session.interpreter.if_,
            tk.ELSE: session.interpreter.else_,
            tk.ENDIF: list,
            tk.FOR: session.interpreter.for_,
            tk.NEXT: session.interpreter.next_,
            tk.SCREEN: session.display.screen_,
            tk.SCREEN + ' ' + tk.SELECT: session.display.screen_select_,
            tk.SCROLL: session.display.scroll_,
            tk.CLSG: session.display.clsg_,
            tk.LOAD: session.display.load_,
            tk.INK: session.display.ink_,
            tk.PLOT: session.display.plot_,
            tk.LINE: session.display.line_,
            tk.BOX: session.display.box_,
            tk.BAR: session.display.bar_,
            tk.TEXT: session.display.text_,
            tk.REFRESH: session.display.refresh_,
            tk.SPRITE: session.display.sprite_,
            tk.SPRITE + ' ' + tk.POS: session.display.sprite_pos_,
            tk.SPRITE + ' ' + tk.LOAD: session.display.sprite_load_,
            tk.SPRITE + ' ' + tk.ADDFRAME: session.display.sprite_addframe_,
            tk.SPRITE + ' ' + tk.FRAME: session.display.sprite_frame_,
            tk.SPRITE + ' ' + tk.HANDLE: session.display.sprite_handle_,
            tk.SPRITE + ' ' + tk.ON: session.display.sprite_on_,
            tk.SPRITE + ' ' + tk.OFF: session.display.sprite_off_,
            tk.SAM + ' ' + tk.PLAY: session.sound.sam_play_,
            tk.MUSIC + ' ' + tk.PLAY: session.sound.music_play_,
            tk.MUSIC + ' ' + tk.STOP: session.sound.music_stop_,
            tk.TILE + ' ' + tk.LOAD: session.display.tile_load_,
            tk.TILE + ' ' + tk.MAP: session.display.tile_map_,
            tk.TILE + ' ' + tk.SET: session.display.tile_set_,
            tk.TILE + ' ' + tk.DRAW: session.display.tile_draw_,
            tk.MAP + ' ' + tk.LOAD: session.display.map_load_,
            tk.END: session.interpreter.end_,
        }

    ###########################################################################
    # IF

    def _if(self, arg, following):
        """Execute IF; return True if it consumed the rest of the line."""
        then = codestream.find_word(arg, tk.THEN)
        if then < 0:
            condition, body = arg, []
        else:
            condition = arg[:then]
            body = [arg[then+len(tk.THEN):].strip()] + list(following)
        body = [_s for _s in body if _s]
        truth = self.expression_parser.parse_condition(condition)
        if not body:
            # block IF; the interpreter jumps past the block if false
            self._callbacks[tk.IF](iter((truth,)))
            return False
        if truth:
            for statement in body:
                if self.parse_statement(statement, inline=True) or self._interpreter.jumped:
                    break
        return True

    ###########################################################################
    # no arguments

    def _parse_nothing(self, arg):
        """Parse nothing."""
        return
        yield # pragma: no cover

    def _parse_end(self, arg):
        """Parse end-of-statement before executing argumentless statement."""
        error.throw_if(arg.strip() != '', error.STX, 'unexpected `%s`' % arg.strip())
        # empty generator
        return
        yield # pragma: no cover

    ###########################################################################
    # generic arguments

    def _split(self, arg, required, optional=0):
        """Split arguments and check their number."""
        args = codestream.split_args(arg, required, optional)
        error.throw_if(
            not required <= len(args) <= required + optional, error.STX,
            'expected %d arguments' % required if not optional
            else 'expected %d to %d arguments' % (required, required + optional)
        )
        return args

    def _parse_int_args(self, required, arg, optional=0):
        """Parse integer arguments; missing optional arguments are None."""
        args = self._split(arg, required, optional)
        for text in args:
            yield self.parse_int(text)
        for _ in range(required + optional - len(args)):
            yield None

    def _parse_file_name(self, arg):
        """Parse a file name, quoted or not."""
        name = codestream.unquote(arg)
        error.throw_if(not name, error.STX, 'expected file name')
        yield name

    def _parse_number_file_name(self, arg):
        """Parse an id and a file name."""
        number, name = self._split(arg, 2)
        yield self.parse_int(number)
        yield from self._parse_file_name(name)

    def _parse_label(self, arg):
        """Parse a jump target."""
        label = arg.strip()
        error.throw_if(not label, error.STX, 'expected label')
        yield label

    ###########################################################################
    # statements

    def _parse_print(self, arg):
        """Parse PRINT syntax."""
        arg = arg.strip()
        if codestream.find_word(arg, tk.AT) == 0:
            x, y, text = self._split(arg[len(tk.AT):], 3)
            yield (self.parse_int(x), self.parse_int(y))
            yield self.parse_expression(text).to_str()
        else:
            yield None
            yield self.parse_expression(arg).to_str() if arg else ''

    def _parse_let(self, arg):
        """Parse LET syntax."""
        match = _ASSIGNMENT.match(arg.strip())
        error.throw_if(not match, error.STX, 'expected assignment')
        yield match.group(1)
        yield self.parse_expression(match.group(2))

    def _parse_wait(self, arg):
        """Parse WAIT syntax; yields None for a display refresh."""
        arg = arg.strip()
        if arg.upper() in (tk.VBL, tk.VSYNC):
            yield None
        else:
            yield self.parse_int(arg)

    def _parse_for(self, arg):
        """Parse FOR syntax."""
        equals = codestream.find_outside_quotes(arg, '=')
        error.throw_if(equals < 0, error.STX, 'expected =')
        name = arg[:equals].strip()
        error.throw_if(not codestream.is_name(name), error.STX, 'expected loop variable')
        rest = arg[equals+1:]
        to = codestream.find_word(rest, tk.TO)
        error.throw_if(to < 0, error.STX, 'expected TO')
        start, rest = rest[:to], rest[to+len(tk.TO):]
        step = codestream.find_word(rest, tk.STEP)
        if step >= 0:
            stop, step = rest[:step], rest[step+len(tk.STEP):]
        else:
            stop, step = rest, None
        yield name
        yield self.parse_int(start)
        yield self.parse_int(stop)
        yield 1 if step is None else self.parse_int(step)

    def _parse_next(self, arg):
        """Parse NEXT syntax; the loop variable name is optional and ignored."""
        name = arg.strip()
        error.throw_if(name and not codestream.is_name(name), error.STX, 'expected loop variable')
        return
        yield # pragma: no cover

    def _parse_ink(self, arg):
        """Parse INK syntax: colour name, #RRGGBB, or r, g, b."""
        colour = graphics.parse_colour(arg)
        if colour is None:
            args = codestream.split_args(arg, 3)
            if len(args) == 3:
                colour = tuple(self.parse_int(_a) for _a in args)
            elif len(args) == 1:
                value = self.parse_expression(args[0])
                if value.is_string():
                    colour = graphics.parse_colour(value.to_str())
        if colour is None:
            logging.warning('Unrecognised colour `%s`, using white', arg.strip())
            colour = graphics.WHITE
        yield colour

    def _parse_text(self, arg):
        """Parse TEXT syntax."""
        x, y, text = self._split(arg, 3)
        yield self.parse_int(x)
        yield self.parse_int(y)
        yield self.parse_expression(text).to_str()
