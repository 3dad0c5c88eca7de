"""
Amos BASIC - console.py
Console sink for text-screen directives and log lines

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging
from collections import deque

from .base import signals


# text-screen directive prefix
DIRECTIVE = '@@'
# console lines kept for inspection
MAX_HISTORY = 1000


class Console(object):
    """Console sink; records output and forwards it to the host."""

    def __init__(self, queues, sink=None):
        """Initialise the console."""
        self._queues = queues
        # host console with append_output and clear methods
        self._sink = sink
        self._lines = deque(maxlen=MAX_HISTORY)

    @property
    def lines(self):
        """Copy of the most recent lines appended in this run."""
        return list(self._lines)

    def reset(self):
        """Forget the lines of earlier runs."""
        self._lines.clear()

    def append_output(self, line):
        """Append a directive or log line."""
        self._lines.append(line)
        if self._sink:
            self._sink.append_output(line)
        self._queues.video.put(_to_signal(line))

    def clear(self):
        """Clear the host console."""
        if self._sink:
            self._sink.clear()

    def get_printed(self):
        """Text printed with PRINT, in order."""
        prefix = DIRECTIVE + 'PRINT '
        return [_line[len(prefix):] for _line in self.lines if _line.startswith(prefix)]

    # statements

    def cls_(self, args):
        """CLS: clear the text screen."""
        list(args)
        self.append_output(DIRECTIVE + 'CLS')
        self.clear()

    def locate_(self, args):
        """LOCATE: move the text cursor."""
        row, col = args
        self.append_output('%sLOCATE %d %d' % (DIRECTIVE, row, col))

    def print_(self, args):
        """PRINT: write text, optionally at a position."""
        position, text = args
        if position:
            self.locate_(iter(position))
        self.append_output('%sPRINT %s' % (DIRECTIVE, text))

    def log(self, message, level=logging.INFO):
        """Write a log line."""
        logging.log(level, message)
        self.append_output(message)


def _to_signal(line):
    """Convert a console line to a video queue signal."""
    if not line.startswith(DIRECTIVE):
        return signals.Event(signals.VIDEO_LOG, (line,))
    directive, _, payload = line[len(DIRECTIVE):].partition(' ')
    if directive == 'CLS':
        return signals.Event(signals.VIDEO_CLEAR_SCREEN)
    elif directive == 'LOCATE':
        row, col = payload.split()
        return signals.Event(signals.VIDEO_MOVE_CURSOR, (int(row), int(col)))
    elif directive == 'PRINT':
        return signals.Event(signals.VIDEO_PRINT, (payload,))
    return signals.Event(signals.VIDEO_UPDATE)
