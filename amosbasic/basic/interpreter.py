"""
Amos BASIC - interpreter.py
BASIC interpreter

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
from collections import namedtuple

from .base import error
from . import values
from .program import Program


# saved state of an active FOR loop
ForFrame = namedtuple('ForFrame', ['name', 'stop', 'step', 'resume_pc', 'line_number'])


class Interpreter(object):
    """BASIC interpreter."""

    def __init__(self, queues, scalars, parser):
        """Initialise interpreter."""
        self._queues = queues
        self._scalars = scalars
        # statement syntax parser
        self.parser = parser
        self.program = Program()
        # program counter: index of the line being executed
        self.pc = 0
        # target of a jump requested by the current line
        self.jump_pc = None
        self.clear_stacks()
        # additional operations on program step (debugging)
        self.step = lambda pc, line_number: None

    def clear_stacks(self):
        """Clear the loop and subroutine stacks."""
        self.for_stack = []
        self.gosub_stack = []

    def load(self, program):
        """Set the program to run and reset the pointer."""
        self.program = program
        self.pc = 0
        self.jump_pc = None
        self.clear_stacks()

    @property
    def line_number(self):
        """1-based source line number of the current line."""
        return self.pc + 1

    @property
    def jumped(self):
        """A jump has been requested on the current line."""
        return self.jump_pc is not None

    def run(self):
        """Execute the program from the current line until it runs off the end."""
        while self.pc < len(self.program):
            statements = self.program.get_statements(self.pc)
            if not statements:
                # blank and pure label lines
                self.pc += 1
                continue
            self.step(self.pc, self.line_number)
            self._queues.check_events(self.pc)
            self.jump_pc = None
            try:
                self._execute_line(statements)
            except error.BASICError as e:
                if e.line_number is None:
                    e.line_number = self.line_number
                raise
            self.pc = self.pc + 1 if self.jump_pc is None else self.jump_pc
        self.clear_stacks()

    def _execute_line(self, statements):
        """Execute statements left to right until a jump or the end of the line."""
        for i, statement in enumerate(statements):
            consumed = self.parser.parse_statement(statement, statements[i+1:])
            if consumed or self.jumped:
                return

    def jump(self, pc):
        """Continue at another line after the current one."""
        self.jump_pc = pc

    def _resolve(self, label):
        """Find the line of a label."""
        pc = self.program.get_label(label)
        if pc is None:
            raise error.UnresolvedLabelError(label, self.line_number)
        return pc

    ###########################################################################
    # callbacks

    def goto_(self, args):
        """GOTO: jump to label."""
        label, = args
        self.jump(self._resolve(label))

    def gosub_(self, args):
        """GOSUB: jump to subroutine."""
        label, = args
        target = self._resolve(label)
        self.gosub_stack.append(self.pc + 1)
        self.jump(target)

    def return_(self, args):
        """RETURN: return from subroutine."""
        list(args)
        try:
            pc = self.gosub_stack.pop()
        except IndexError:
            raise error.StackUnderflowError(self.line_number)
        self.jump(pc)

    def if_(self, args):
        """Block IF: skip the block if the condition is false."""
        truth, = args
        if not truth:
            target = self.program.get_if_jump(self.pc)
            if target is not None:
                self.jump(target)

    def else_(self, args):
        """ELSE reached from the true branch: skip to after ENDIF."""
        list(args)
        target = self.program.get_else_jump(self.pc)
        if target is not None:
            self.jump(target)

    def for_(self, args):
        """FOR: initialise a loop."""
        name = next(args)
        start, stop, step = next(args), next(args), next(args)
        list(args)
        self._scalars.set(name, values.Integer(start))
        self.for_stack.append(ForFrame(name.upper(), stop, step, self.pc + 1, self.line_number))

    def next_(self, args):
        """NEXT: iterate the innermost loop."""
        list(args)
        if not self.for_stack:
            logging.debug('NEXT without FOR in line %d ignored', self.line_number)
            return
        frame = self.for_stack[-1]
        counter = values.Integer(self._scalars.get(frame.name).to_int() + frame.step)
        self._scalars.set(frame.name, counter)
        value = counter.to_int()
        if (frame.step > 0 and value <= frame.stop) or (frame.step < 0 and value >= frame.stop):
            self.jump(frame.resume_pc)
        else:
            self.for_stack.pop()

    def end_(self, args):
        """END: stop the program."""
        list(args)
        self.jump(len(self.program))
