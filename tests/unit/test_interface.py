"""
Amos BASIC tests.test_interface
Tests for interface and plugins

(c) 2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import queue

from amosbasic import Session
from amosbasic.basic import COMPLETED
from amosbasic.basic.base import signals
from amosbasic.interface import Interface, InitFailed, video_plugins, audio_plugins
from amosbasic.interface import VideoPlugin, VideoCLI, AudioPlugin
from amosbasic.interface.video_cli import InputHandlerCLI
from tests.unit.utils import TestCase, run_tests, program


class RecordingAudio(AudioPlugin):
    """Audio plugin that records requests."""

    def __init__(self, audio_queue, **kwargs):
        AudioPlugin.__init__(self, audio_queue)
        self.requests = []

    def hush(self):
        self.requests.append(('hush',))

    def play_sample(self, path):
        self.requests.append(('sample', path))

    def play_music(self, path):
        self.requests.append(('music', path))


class InterfaceTest(TestCase):
    """Unit tests for interface and plugins."""

    tag = u'interface'

    def test_registers(self):
        """Plugins are registered by name."""
        assert video_plugins.names() == ['cli', 'none']
        assert 'pygame' in audio_plugins
        assert video_plugins['cli'] is VideoCLI
        assert video_plugins['none'] is VideoPlugin
        assert audio_plugins['none'] is AudioPlugin

    def test_no_video(self):
        """Interface fails without a video plugin."""
        with self.assertLogs(level='ERROR'):
            with self.assertRaises(InitFailed):
                Interface(try_interfaces=('_no_such_interface_',))

    def test_audio_fallback(self):
        """Unknown audio plugins fall back to silence."""
        with self.assertLogs(level='ERROR'):
            iface = Interface(try_interfaces=('none',), audio_override='_nothing_')
        assert type(iface._audio) is AudioPlugin

    def test_audio_plugin(self):
        """Audio signals are handed to the plugin."""
        audio_queue = queue.Queue()
        plugin = RecordingAudio(audio_queue)
        audio_queue.put(signals.Event(signals.AUDIO_MUSIC, ('song.mod',)))
        audio_queue.put(signals.Event(signals.AUDIO_SAMPLE, ('bang.wav',)))
        audio_queue.put(signals.Event(signals.AUDIO_STOP))
        plugin.cycle()
        assert plugin.requests == [('music', 'song.mod'), ('sample', 'bang.wav'), ('hush',)]
        assert plugin.alive
        audio_queue.put(signals.Event(signals.QUIT))
        plugin.cycle()
        assert not plugin.alive

    def test_input_handler(self):
        """Each line on standard input holds down a key until the next."""
        input_queue = queue.Queue()
        handler = InputHandlerCLI(input_queue, io.StringIO('LEFT\n\n'))
        handler._thread.join(1)
        events = []
        while not input_queue.empty():
            signal = input_queue.get(False)
            events.append((signal.event_type, signal.params))
        assert events == [
            (signals.KEYB_DOWN, ('LEFT',)), (signals.KEYB_UP, ('LEFT',)),
            (signals.KEYB_DOWN, ('RETURN',)), (signals.KEYB_UP, ('RETURN',)),
        ]

    def test_launch_cli(self):
        """Run a program through the command-line interface."""
        stdout = io.StringIO()

        def run_program(interface):
            with Session() as s:
                s.attach(interface)
                return s.run(program('PRINT "hello"', 'WAIT VBL', 'PRINT AT 1, 2, "world"', 'CLS'))

        iface = Interface(
            try_interfaces=('cli',), audio_override='none', stdout=stdout, stdin=io.StringIO()
        )
        outcome = iface.launch(run_program)
        assert outcome.status == COMPLETED
        assert stdout.getvalue() == 'hello\nworld\n'


if __name__ == '__main__':
    run_tests()
