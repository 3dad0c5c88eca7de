"""
Amos BASIC - interface.audio
Base class for audio plugins

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import queue

from ..basic.base import signals
from .base import audio_plugins


@audio_plugins.register('none')
class AudioPlugin(object):
    """Base class for audio interface plugins; plays nothing."""

    def __init__(self, audio_queue, **kwargs):
        """Setup the audio interface."""
        self.alive = True
        self._audio_queue = audio_queue

    # called by Interface

    @property
    def busy(self):
        """Samples are waiting to be handed to the mixer."""
        return False

    def cycle(self):
        """Audio event cycle."""
        if self.alive:
            self._drain_queue()
        if self.alive:
            self._work()

    # private methods

    def _drain_queue(self):
        """Drain audio queue."""
        while True:
            try:
                signal = self._audio_queue.get(False)
            except queue.Empty:
                return
            self._audio_queue.task_done()
            if signal.event_type == signals.QUIT:
                # close thread
                self.alive = False
            elif signal.event_type == signals.AUDIO_STOP:
                self.hush()
            elif signal.event_type == signals.AUDIO_SAMPLE:
                self.play_sample(*signal.params)
            elif signal.event_type == signals.AUDIO_MUSIC:
                self.play_music(*signal.params)

    # plugin overrides

    def __exit__(self, type, value, traceback):
        """Close the audio interface."""

    def __enter__(self):
        """Perform any necessary initialisations."""
        return self

    def _work(self):
        """Play some of the sounds queued."""

    # signal handlers

    def hush(self):
        """Stop the music."""

    def play_sample(self, path):
        """Play a sound effect file."""

    def play_music(self, path):
        """Play a music module, looping."""
