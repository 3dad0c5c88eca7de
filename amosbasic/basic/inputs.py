"""
Amos BASIC - inputs.py
Key state

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import threading

from .base import signals
from . import values


class Keyboard(object):
    """Key state as seen by INKEY$ and KEYSTATE."""

    def __init__(self):
        """Initialise keyboard state."""
        # keys currently held, in the order they were pressed
        self._held = []
        self._lock = threading.Lock()

    def check_input(self, signal):
        """Handle keyboard input signals."""
        if signal.event_type == signals.KEYB_DOWN:
            self.key_down(*signal.params)
            return True
        elif signal.event_type == signals.KEYB_UP:
            self.key_up(*signal.params)
            return True
        return False

    def key_down(self, name):
        """Register a key press."""
        with self._lock:
            self._release(name)
            self._held.append(name)

    def key_up(self, name):
        """Register a key release."""
        with self._lock:
            self._release(name)

    def release_all(self):
        """Release all keys."""
        with self._lock:
            self._held = []

    def _release(self, name):
        """Remove a key from the held list."""
        self._held = [_k for _k in self._held if _k.upper() != name.upper()]

    def get_pressed_key(self):
        """Most recently pressed key that is still held, or empty."""
        with self._lock:
            return self._held[-1] if self._held else ''

    def is_key_down(self, name):
        """Key is currently held."""
        with self._lock:
            return any(_k.upper() == name.strip().upper() for _k in self._held)

    def get_inkey(self):
        """INKEY$: key name as a value that reads as its length in integer context."""
        return values.KeyString(self.get_pressed_key())
