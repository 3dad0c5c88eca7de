"""
Amos BASIC - api.py
Session API

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import threading

from .base import error
from . import implementation
from .implementation import Outcome, COMPLETED, CANCELLED, FAILED


class Session(object):
    """Public API to BASIC session."""

    def __init__(self, **kwargs):
        """Set up session object."""
        self._kwargs = kwargs
        self._impl = None
        # worker thread for launch()
        self._thread = None
        self._outcome = None
        self._exception = None

    def __enter__(self):
        """Context guard."""
        return self

    def __exit__(self, ex_type, ex_val, tb):
        """Context guard."""
        self.close()
        # catch Exit and Break events
        if ex_type in (error.Exit, error.Break):
            return True

    def start(self):
        """Start the session."""
        if not self._impl:
            self._impl = implementation.Implementation(**self._kwargs)
            return True
        return False

    def attach(self, interface=None):
        """Attach interface to interpreter session."""
        self.start()
        self._impl.attach_interface(interface)
        return self

    ###########################################################################
    # running programs

    def run(self, program_text):
        """Run a program to completion, cancellation or error; return the outcome."""
        self.start()
        self._check_not_running()
        return self._impl.run(program_text)

    def execute(self, statements):
        """Run statements, keeping the current variables; return the outcome."""
        self.start()
        self._check_not_running()
        return self._impl.run(statements, clear=False)

    def launch(self, program_text):
        """Run a program on a worker thread."""
        self.start()
        self._check_not_running()
        self._outcome, self._exception = None, None
        # clear the gate on this thread; a cancel() may follow immediately
        self._impl.prepare()
        self._thread = threading.Thread(
            target=self._run_thread, args=(program_text,), name='amosbasic'
        )
        self._thread.daemon = True
        self._thread.start()

    def _run_thread(self, program_text):
        """Worker thread target."""
        try:
            self._outcome = self._impl.run(program_text, prepared=True)
        except BaseException as e:
            # re-raised on join
            self._exception = e

    def join(self, timeout=None):
        """Wait for a launched program; return the outcome, or None if it is still running."""
        if self._thread:
            self._thread.join(timeout)
            if self._thread.is_alive():
                return None
            self._thread = None
        if self._exception:
            exception, self._exception = self._exception, None
            raise exception
        return self._outcome

    @property
    def running(self):
        """A launched program is running."""
        return bool(self._thread and self._thread.is_alive())

    def _check_not_running(self):
        """Only one program runs at a time."""
        if self.running:
            raise RuntimeError('A program is already running in this session.')

    ###########################################################################
    # host controls

    def pause(self):
        """Suspend the program before its next line."""
        self.start()
        self._impl.queues.pause()

    def resume(self):
        """Continue a paused program."""
        self.start()
        self._impl.queues.resume()

    def step(self):
        """Run exactly one line of a paused program."""
        self.start()
        self._impl.queues.step()

    def cancel(self):
        """Abort the running program."""
        self.start()
        self._impl.queues.cancel()

    def vsync(self):
        """Signal a display refresh, releasing WAIT VBL."""
        self.start()
        self._impl.queues.vsync()

    @property
    def paused(self):
        """The program is paused."""
        self.start()
        return self._impl.queues.paused

    def press_key(self, name):
        """Hold down a key."""
        self.start()
        self._impl.keyboard.key_down(name)

    def release_key(self, name):
        """Release a key."""
        self.start()
        self._impl.keyboard.key_up(name)

    ###########################################################################
    # inspection

    def evaluate(self, expression):
        """Evaluate a BASIC expression."""
        self.start()
        return self._impl.evaluate(expression)

    def set_variable(self, name, value):
        """Set a variable."""
        self.start()
        self._impl.set_variable(name, value)

    def get_variable(self, name):
        """Get a variable."""
        self.start()
        return self._impl.get_variable(name)

    def get_output(self):
        """Get the lines written to the console."""
        self.start()
        return self._impl.console.lines

    def get_text(self):
        """Get the text printed with PRINT."""
        self.start()
        return self._impl.console.get_printed()

    def get_pixels(self):
        """Get the displayed pixels as a (height, width, 3) array."""
        self.start()
        return self._impl.graphics.front.copy()

    def set_hook(self, step_function):
        """Set function to be called on interpreter step."""
        self.start()
        self._impl.interpreter.step = step_function

    @property
    def info(self):
        """Get a session information object."""
        self.start()
        return SessionInfo(self)

    def close(self):
        """Close the session."""
        if self._thread:
            self.cancel()
            self._thread.join()
            self._thread = None
        if self._impl:
            self._impl.close()


class SessionInfo(object):
    """Retrieve information about current session."""

    def __init__(self, session):
        """Initialise the SessionInfo object."""
        self._session = session
        self._impl = session._impl

    def repr_scalars(self):
        """Get a representation of all scalars."""
        return repr(self._impl.scalars)

    def repr_program(self):
        """Get the program with line numbers."""
        return '\n'.join(
            '%5d %s' % (_i + 1, _line)
            for _i, _line in enumerate(self._impl.interpreter.program.lines)
        )

    def get_current_code(self):
        """Obtain the line being executed."""
        interpreter = self._impl.interpreter
        if interpreter.pc < len(interpreter.program):
            return interpreter.program.lines[interpreter.pc]
        return ''

    def get_stacks(self):
        """Obtain the FOR and GOSUB stacks."""
        interpreter = self._impl.interpreter
        return list(interpreter.for_stack), list(interpreter.gosub_stack)
