"""
Amos BASIC - sound.py
Sound effect and music requests

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging

from .base import signals


class Sound(object):
    """Issue play and stop requests to the audio plugin."""

    def __init__(self, queues, assets):
        """Initialise sound queue."""
        self._queues = queues
        self._assets = assets
        # path of the music module currently requested, if any
        self.music = None

    def play_sample(self, name):
        """Play a sound effect."""
        path = self._assets.resolve(name)
        logging.debug('Playing sample %s', path)
        self._queues.audio.put(signals.Event(signals.AUDIO_SAMPLE, (path,)))

    def play_music(self, name):
        """Start a music module, replacing any music that is playing."""
        path = self._assets.resolve(name)
        logging.debug('Playing music %s', path)
        self.music = path
        self._queues.audio.put(signals.Event(signals.AUDIO_MUSIC, (path,)))

    def stop_music(self):
        """Stop the music."""
        self.music = None
        self._queues.audio.put(signals.Event(signals.AUDIO_STOP))

    def stop_all_sound(self):
        """Stop music at the end of a run."""
        if self.music is not None:
            self.stop_music()

    # statements

    def sam_play_(self, args):
        """SAM PLAY: play a sound effect."""
        name, = args
        self.play_sample(name)

    def music_play_(self, args):
        """MUSIC PLAY: start music."""
        name, = args
        self.play_music(name)

    def music_stop_(self, args):
        """MUSIC STOP: stop music."""
        list(args)
        self.stop_music()
