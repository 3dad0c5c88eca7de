"""
Amos BASIC - interface.video
Base class for video plugins

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import time
import queue

from ..basic.base import signals
from .base import video_plugins


@video_plugins.register('none')
class VideoPlugin(object):
    """Base class for display/input interface plugins; displays nothing."""

    def __init__(self, input_queue, video_queue, **kwargs):
        """Setup the interface."""
        self.alive = True
        self.busy = False
        self._input_queue = input_queue
        self._video_queue = video_queue
        self._handlers = {
            signals.VIDEO_CLEAR_SCREEN: self.clear_screen,
            signals.VIDEO_MOVE_CURSOR: self.move_cursor,
            signals.VIDEO_PRINT: self.print_text,
            signals.VIDEO_LOG: self.log_line,
            signals.VIDEO_UPDATE: self.update,
            signals.VIDEO_SET_CAPTION: self.set_caption_message,
        }

    # called by Interface

    def cycle(self):
        """Video/input event cycle."""
        if self.alive:
            self._drain_queue()
        if self.alive:
            self._work()
            self._check_input()

    def sleep(self, ms):
        """Sleep a tick"""
        time.sleep(ms/1000.)

    # private methods

    def _drain_queue(self):
        """Drain signal queue."""
        while True:
            try:
                signal = self._video_queue.get(False)
            except queue.Empty:
                return True
            # putting task_done before the execution avoids hanging on join() after an exception
            self._video_queue.task_done()
            if signal.event_type == signals.QUIT:
                # close thread
                self.alive = False
            else:
                try:
                    self._handlers[signal.event_type](*signal.params)
                except KeyError:
                    pass

    # plugin overrides

    def __exit__(self, type, value, traceback):
        """Close the interface."""

    def __enter__(self):
        """Final initialisation."""
        return self

    def _work(self):
        """Display update cycle."""

    def _check_input(self):
        """Input devices update cycle."""

    # signal handlers

    def set_caption_message(self, msg):
        """Add a message to the window caption."""

    def clear_screen(self):
        """Clear the text screen."""

    def move_cursor(self, row, col):
        """Move the text cursor."""

    def print_text(self, text):
        """Print a line of text at the cursor."""

    def log_line(self, text):
        """Show a status line."""

    def update(self):
        """The graphics have changed."""
