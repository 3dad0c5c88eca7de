"""
Amos BASIC - interface package
Video, input and audio handlers

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .base import InitFailed, video_plugins, audio_plugins
from .interface import Interface

# video plugins
from .video import VideoPlugin
from .video_cli import VideoCLI

# audio plugins
from .audio import AudioPlugin
from .audio_pygame import AudioPygame
