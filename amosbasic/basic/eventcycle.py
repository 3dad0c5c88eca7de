"""
Amos BASIC - eventcycle.py
Event queue handling, host pause/step gate and cancellation

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import time
import queue
import threading

from .base import error
from .base import signals


###############################################################################
# queues

class NullQueue(object):
    """Dummy implementation of Queue interface."""
    def __init__(self, maxsize=0):
        pass
    def qsize(self):
        return 0
    def empty(self):
        return True
    def full(self):
        return False
    def put(self, item, block=False, timeout=False):
        pass
    def put_nowait(self, item):
        pass
    def get(self, block=False, timeout=False):
        # we're ignoring block
        raise queue.Empty
    def task_done(self):
        pass
    def join(self):
        pass


class EventQueues(object):
    """Manage interface queues and the host's control over the running program."""

    # polling granularity for timed waits, in seconds
    tick = 0.006
    # one display refresh interval, used if the host sends no vsync signals
    vblank = 0.02
    max_video_qsize = 200

    def __init__(self, inputs=None, video=None, audio=None, start_paused=False, on_pause=None):
        """Initialise; default is NullQueues."""
        # input signal handlers
        self._handlers = []
        # all host control flags are guarded by the condition
        self._condition = threading.Condition()
        self._paused = start_paused
        self._steps = 0
        self._cancelled = False
        self._vsync_count = 0
        # host hook called when the program suspends on a pause
        self._on_pause = on_pause
        self.set(inputs, video, audio)

    def set(self, inputs=None, video=None, audio=None):
        """Set; default is NullQueues."""
        self.inputs = inputs or NullQueue()
        self.video = video or NullQueue()
        self.audio = audio or NullQueue()

    def add_handler(self, handler):
        """Add an input handler."""
        self._handlers.append(handler)

    def set_pause_hook(self, on_pause):
        """Set the function called when execution suspends on a pause."""
        self._on_pause = on_pause

    ###########################################################################
    # host controls, may be called from any thread

    @property
    def paused(self):
        """Execution is paused."""
        return self._paused

    @property
    def cancelled(self):
        """Cancellation has been requested."""
        return self._cancelled

    def pause(self):
        """Suspend execution before the next line."""
        with self._condition:
            self._paused = True
            self._steps = 0
            self._condition.notify_all()

    def resume(self):
        """Continue execution."""
        with self._condition:
            self._paused = False
            self._steps = 0
            self._condition.notify_all()

    def step(self):
        """Grant exactly one line of progress, then pause again."""
        with self._condition:
            self._paused = True
            self._steps += 1
            self._condition.notify_all()

    def cancel(self):
        """Abort the running program at the next line or inside a wait."""
        with self._condition:
            self._cancelled = True
            self._condition.notify_all()

    def vsync(self):
        """Signal a display refresh."""
        with self._condition:
            self._vsync_count += 1
            self._condition.notify_all()

    def reset(self):
        """Clear cancellation and pending steps before a new run."""
        with self._condition:
            self._cancelled = False
            self._steps = 0

    ###########################################################################
    # interpreter side

    def check_events(self, pc=None):
        """Main event cycle, run once before each program line."""
        # release the GIL so the interface thread can keep up
        time.sleep(0)
        # wait for the queue to drain if it exceeds a threshold value
        if self.video.qsize() > self.max_video_qsize:
            while self.video.qsize():
                self._check_cancel()
                time.sleep(self.tick)
        self._check_input()
        notified = False
        while True:
            with self._condition:
                while True:
                    self._check_cancel()
                    if not self._paused:
                        return
                    if self._steps:
                        self._steps -= 1
                        return
                    if not notified and self._on_pause:
                        break
                    self._condition.wait()
            # hook runs without the lock held
            notified = True
            self._on_pause(pc)

    def wait(self, ms):
        """Sleep for a number of milliseconds, observing cancellation."""
        deadline = time.monotonic() + max(0, ms) / 1000.
        with self._condition:
            while True:
                self._check_cancel()
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return
                self._condition.wait(min(remaining, self.tick))
                self._check_input()

    def wait_vblank(self):
        """Wait for the next display refresh signal, or one refresh interval at most."""
        deadline = time.monotonic() + self.vblank
        with self._condition:
            count = self._vsync_count
            while self._vsync_count == count:
                self._check_cancel()
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return
                self._condition.wait(min(remaining, self.tick))
                self._check_input()

    def _check_cancel(self):
        """Raise Break if the host has cancelled."""
        if self._cancelled:
            raise error.Break()

    def _check_input(self):
        """Handle input events."""
        while True:
            try:
                signal = self.inputs.get(False)
            except queue.Empty:
                return
            self.inputs.task_done()
            if signal.event_type == signals.QUIT:
                self.cancel()
            elif signal.event_type == signals.VSYNC:
                self.vsync()
            else:
                for handler in self._handlers:
                    if handler.check_input(signal):
                        break
