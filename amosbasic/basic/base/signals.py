"""
Amos BASIC - signals.py
Signals for communication between interpreter and interface

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""


class Event(object):
    """Signal object for input, video or audio queue."""

    def __init__(self, event_type, params=()):
        """Create signal."""
        self.event_type = event_type
        self.params = params

    def __repr__(self):
        """Represent signal as string."""
        return '<Event %s: %r>' % (self.event_type, self.params)


# general signals

QUIT = 'quit'


# audio queue signals

# play a sound effect
AUDIO_SAMPLE = 'sample'
# start music module
AUDIO_MUSIC = 'music'
# stop music
AUDIO_STOP = 'hush'


# video queue signals

# text screen directives
VIDEO_CLEAR_SCREEN = 'clear_screen'
VIDEO_MOVE_CURSOR = 'move_cursor'
VIDEO_PRINT = 'print'
# unprefixed console line
VIDEO_LOG = 'log'
# graphics have changed, redraw
VIDEO_UPDATE = 'update'
# set caption message
VIDEO_SET_CAPTION = 'set_caption'


# input queue signals

# keyboard events
KEYB_DOWN = 'key_down'
KEYB_UP = 'key_up'
# display refresh
VSYNC = 'vsync'
