"""
Amos BASIC - debug.py
Debugging session: trace, watch and breakpoints

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging

from .base import error
from . import api


class DebugSession(api.Session):
    """Debugging helper."""

    def __init__(self, *args, **kwargs):
        """Initialise debugger."""
        api.Session.__init__(self, *args, **kwargs)
        self._do_trace = False
        self._watch_list = []
        self._breakpoints = set()

    def start(self):
        """Start the session."""
        if api.Session.start(self):
            # replace dummy debugging step
            self._impl.interpreter.step = self._debug_step
            return True
        return False

    def _debug_step(self, pc, line_number):
        """Execute traces, watches and breakpoints on a program step."""
        outstr = ''
        if self._do_trace:
            outstr += '[%i]' % line_number
        for expr in self._watch_list:
            outstr += ' %s = ' % (expr,)
            try:
                outstr += repr(self._impl.evaluate(expr))
            except error.BASICError as e:
                outstr += '<%s>' % e.get_message()
        if outstr:
            logging.debug(outstr)
        if line_number in self._breakpoints:
            logging.debug('Break at line %i', line_number)
            self._impl.queues.pause()

    ###########################################################################
    # debugging commands

    def dir(self):
        """Show debugging commands."""
        logging.debug('Available commands:\n' + '\n'.join(
            '    %s: %s' % (n, getattr(self, n).__doc__)
            for n in sorted(dir(self))
            if not n.startswith('_') and callable(getattr(self, n)) and n not in dir(api.Session)
        ))

    def logwrite(self, *args):
        """Write arguments to log."""
        logging.debug(' '.join(repr(arg) for arg in args))

    def trace(self, on=True):
        """Switch line number tracing on or off."""
        self._do_trace = on

    def watch(self, expr):
        """Add an expression to the watch list."""
        self._watch_list.append(expr)

    def unwatch(self, expr=None):
        """Remove an expression from the watch list, or clear the list."""
        if expr is None:
            self._watch_list = []
        elif expr in self._watch_list:
            self._watch_list.remove(expr)

    def set_breakpoint(self, line_number):
        """Pause before executing a source line."""
        self._breakpoints.add(line_number)

    def clear_breakpoint(self, line_number=None):
        """Remove a breakpoint, or all breakpoints."""
        if line_number is None:
            self._breakpoints.clear()
        else:
            self._breakpoints.discard(line_number)

    def showvariables(self):
        """Dump all variables to the log."""
        self.start()
        repr_vars = '\n'.join((
            '==== Scalars ='.ljust(100, '='),
            repr(self._impl.scalars),
        ))
        for s in repr_vars.split('\n'):
            logging.debug(s)

    def showprogram(self):
        """Write the program to the log."""
        for s in self.info.repr_program().split('\n'):
            logging.debug(s)

    def exit(self):
        """Quit the session."""
        raise error.Exit()
