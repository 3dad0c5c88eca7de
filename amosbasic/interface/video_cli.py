"""
Amos BASIC - video_cli.py
Command-line interface

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import sys
import threading

from .video import VideoPlugin
from .base import video_plugins
from ..basic.base import signals


@video_plugins.register('cli')
class VideoCLI(VideoPlugin):
    """Command-line interface: printed text goes to standard output."""

    def __init__(self, input_queue, video_queue, stdout=None, stdin=None, **kwargs):
        """Initialise command-line interface."""
        VideoPlugin.__init__(self, input_queue, video_queue)
        self._stdout = stdout or sys.stdout
        # start the stdin thread for non-blocking reads
        self._input_handler = InputHandlerCLI(input_queue, stdin)

    def __exit__(self, type, value, traceback):
        """Close command-line interface."""
        try:
            self._stdout.flush()
        finally:
            VideoPlugin.__exit__(self, type, value, traceback)

    def print_text(self, text):
        """Print a line of text."""
        self._stdout.write(text + '\n')

    def log_line(self, text):
        """Status lines are written to the log by the interpreter."""

    def set_caption_message(self, msg):
        """Show a message."""
        if msg:
            self._stdout.write(msg + '\n')


class InputHandlerCLI(object):
    """Keyboard reader thread: each line on standard input holds down the key named on it until the next line."""

    def __init__(self, input_queue, stdin=None):
        """Start the keyboard reader."""
        self._input_queue = input_queue
        self._stdin = stdin or sys.stdin
        self._thread = threading.Thread(target=self._read_keys)
        self._thread.daemon = True
        self._thread.start()

    def _read_keys(self):
        """Read lines from standard input until it closes."""
        held = None
        while True:
            line = self._stdin.readline()
            if held:
                self._input_queue.put(signals.Event(signals.KEYB_UP, (held,)))
            if not line:
                return
            held = line.strip() or 'RETURN'
            self._input_queue.put(signals.Event(signals.KEYB_DOWN, (held,)))
