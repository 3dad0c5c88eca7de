"""
Amos BASIC - implementation.py
Top-level implementation and program run

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import random
import logging
from collections import namedtuple

from .base import error
from . import eventcycle
from . import program
from . import scalars
from . import inputs
from . import files
from .graphics import Graphics
from . import display
from .console import Console
from . import sound
from . import parser
from . import interpreter


# run outcomes
COMPLETED = 'completed'
CANCELLED = 'cancelled'
FAILED = 'failed'

Outcome = namedtuple('Outcome', ['status', 'message'])


class Implementation(object):
    """Interpreter session, implementation class."""

    def __init__(
            self, console=None, graphics=None, asset_dir='', seed=None, vblank=None,
            start_paused=False, on_pause=None, on_graphics_changed=None,
        ):
        """Initialise the interpreter session."""
        # event queues and host gate
        self.queues = eventcycle.EventQueues(start_paused=start_paused, on_pause=on_pause)
        if vblank:
            # refresh interval in milliseconds
            self.queues.vblank = vblank / 1000.
        # key state
        self.keyboard = inputs.Keyboard()
        self.queues.add_handler(self.keyboard)
        # collaborators
        self.assets = files.Assets(asset_dir)
        self.graphics = graphics or Graphics(self.assets)
        self.console = Console(self.queues, console)
        self.display = display.Display(self.queues, self.graphics, on_graphics_changed)
        self.sound = sound.Sound(self.queues, self.assets)
        # variables
        self.scalars = scalars.Scalars()
        self.randomiser = random.Random(seed)
        # statement parser and interpreter
        self.parser = parser.Parser(self.scalars, self.randomiser)
        self.interpreter = interpreter.Interpreter(self.queues, self.scalars, self.parser)
        # set up rest of the parser now that all components are known
        self.parser.init_callbacks(self)

    def attach_interface(self, interface=None):
        """Attach interface to interpreter session."""
        if interface:
            self.queues.set(*interface.get_queues())
        else:
            self.queues.set()

    def prepare(self):
        """Clear cancellation, pending steps and console history before a run."""
        self.queues.reset()
        self.console.reset()

    def run(self, program_text, clear=True, prepared=False):
        """Load and run a program; return the outcome."""
        # a launched run is prepared on the host's thread
        if not prepared:
            self.prepare()
        if clear:
            self.scalars.clear()
        try:
            self.interpreter.load(program.Program(program_text))
            self.interpreter.run()
        except error.Break:
            self.console.log('STOPPED')
            return Outcome(CANCELLED, None)
        except error.BASICError as e:
            message = e.get_message()
            self.console.log('ERROR: %s' % message, logging.ERROR)
            return Outcome(FAILED, message)
        finally:
            # end of run stops music, also on error or cancel
            self.sound.stop_all_sound()
        self.console.log('OK')
        return Outcome(COMPLETED, None)

    def evaluate(self, expression):
        """Evaluate a BASIC expression."""
        return self.parser.parse_expression(expression).to_value()

    def set_variable(self, name, value):
        """Set a variable."""
        if isinstance(value, bool):
            value = int(value)
        self.scalars.set(name, value)

    def get_variable(self, name):
        """Get a variable."""
        return self.scalars.get_python(name)

    def close(self):
        """Close the session."""
        self.sound.stop_all_sound()
        self.keyboard.release_all()

    ##############################################################################
    # callbacks

    def wait_(self, args):
        """WAIT: pause for a number of milliseconds or until the next display refresh."""
        ms, = args
        if ms is None:
            self.queues.wait_vblank()
        else:
            self.queues.wait(ms)

    def vsync_(self, args):
        """VSYNC: wait for the next display refresh."""
        list(args)
        self.queues.wait_vblank()

