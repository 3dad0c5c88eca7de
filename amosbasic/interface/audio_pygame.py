"""
Amos BASIC - audio_pygame.py
Sound interface based on PyGame

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
from collections import deque


if False:
    # keep the import for detection by packagers
    import pygame
    import pygame.mixer as mixer

from .audio import AudioPlugin
from .base import audio_plugins, InitFailed


# mixer settings
SAMPLE_RATE = 44100
# buffer size in sample frames
BUFSIZE = 1024
# number of sound effects that can play at once
CHANNELS = 8


##############################################################################
# plugin

@audio_plugins.register('pygame')
class AudioPygame(AudioPlugin):
    """Pygame-based audio plugin."""

    def __init__(self, audio_queue, **kwargs):
        """Initialise sound system."""
        global pygame, mixer
        try:
            import pygame
        except ImportError:
            raise InitFailed('Module `pygame` not found')
        try:
            from pygame import mixer
        except ImportError:
            raise InitFailed('Module `mixer` not found')
        # this must be called before mixer.init()
        mixer.pre_init(SAMPLE_RATE, -16, channels=2, buffer=BUFSIZE)
        # sample files to be played on the next cycle
        self._samples = deque()
        # loaded sound effects by path
        self._cache = {}
        AudioPlugin.__init__(self, audio_queue)

    def __enter__(self):
        """Start the mixer."""
        try:
            mixer.init()
        except pygame.error as e:
            logging.warning('Could not initialise mixer: %s', e)
        else:
            mixer.set_num_channels(CHANNELS)
        return AudioPlugin.__enter__(self)

    def __exit__(self, type, value, traceback):
        """Stop all sound and release the mixer."""
        if mixer.get_init():
            mixer.music.stop()
            mixer.stop()
            mixer.quit()
        self._cache = {}
        return AudioPlugin.__exit__(self, type, value, traceback)

    @property
    def busy(self):
        """Samples are waiting to be handed to the mixer."""
        return bool(self._samples)

    def hush(self):
        """Stop the music."""
        if mixer.get_init():
            mixer.music.stop()

    def play_sample(self, path):
        """Enqueue a sound effect."""
        self._samples.append(path)

    def play_music(self, path):
        """Play a music module, looping; replaces any music playing."""
        if not mixer.get_init():
            return
        try:
            mixer.music.load(path)
            mixer.music.play(-1)
        except (pygame.error, OSError) as e:
            logging.warning('Could not play music %s: %s', path, e)

    def _work(self):
        """Hand queued sound effects to the mixer."""
        while self._samples:
            path = self._samples.popleft()
            if not mixer.get_init():
                continue
            try:
                if path not in self._cache:
                    self._cache[path] = mixer.Sound(path)
                self._cache[path].play()
            except (pygame.error, OSError) as e:
                logging.warning('Could not play sample %s: %s', path, e)
