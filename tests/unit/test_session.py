"""
Amos BASIC tests.test_session
Unit tests for session API

(c) 2020--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import time
import queue
import threading

from amosbasic import Session
from amosbasic.basic import COMPLETED, CANCELLED, FAILED
from amosbasic.basic import signals
from tests.unit.utils import TestCase, run_tests, program


class FakeInterface(object):
    """Provides queues for the session to talk to."""

    def __init__(self):
        self.queues = queue.Queue(), queue.Queue(), queue.Queue()

    def get_queues(self):
        return self.queues

    def drain(self, index):
        """All signals put on one of the queues."""
        out = []
        while not self.queues[index].empty():
            out.append(self.queues[index].get(False))
        return out


class SessionTest(TestCase):
    """Unit tests for Session."""

    tag = u'session'

    def test_session(self):
        """Test basic Session API."""
        with Session() as s:
            outcome = s.run('A = 1')
            assert outcome == (COMPLETED, None)
            assert s.evaluate('A + 2') == 3
            s.set_variable('B$', 'abcd')
            assert s.get_variable('b$') == 'abcd'
            assert s.evaluate('B$ + "e"') == 'abcde'
            assert s.get_variable('C') == 0
            assert not s.running
            assert not s.paused

    def test_cancel_wait(self):
        """Cancelling during a long WAIT returns promptly with a cancelled outcome."""
        with Session() as s:
            s.launch(program('PRINT "before"', 'WAIT 5000', 'PRINT "after"'))
            assert self.wait_for(lambda: s.get_text() == ['before'])
            time.sleep(0.05)
            assert s.running
            start = time.monotonic()
            s.cancel()
            outcome = s.join(2)
            assert outcome is not None
            assert time.monotonic() - start < 1
            assert outcome.status == CANCELLED
            assert s.get_text() == ['before']
            assert s.get_output()[-1] == 'STOPPED'

    def test_cancel_loop(self):
        """Cancellation is observed at the top of each line."""
        with Session() as s:
            s.launch(program('Top:', 'N = N + 1', 'GOTO Top'))
            assert self.wait_for(lambda: s.evaluate('N') > 10)
            s.cancel()
            outcome = s.join(2)
            assert outcome.status == CANCELLED

    def test_cancel_at_launch(self):
        """A cancel issued right after launch stops the program even if the worker starts late."""
        with Session() as s:
            s.start()
            run = s._impl.run

            def late_run(*args, **kwargs):
                time.sleep(0.05)
                return run(*args, **kwargs)

            s._impl.run = late_run
            s.launch(program('Top:', 'GOTO Top'))
            s.cancel()
            outcome = s.join(2)
            assert outcome is not None
            assert outcome.status == CANCELLED

    def test_pause_hook_controls(self):
        """The pause hook may hand over to another thread that resumes the program."""
        resumed = []

        def on_pause(pc):
            helper = threading.Thread(target=s.resume)
            helper.start()
            helper.join(1)
            resumed.append(not helper.is_alive())

        with Session(start_paused=True, on_pause=on_pause) as s:
            outcome = s.run(program('PRINT 1', 'PRINT 2'))
            assert outcome.status == COMPLETED
            assert s.get_text() == ['1', '2']
        assert resumed == [True]

    def test_output_bounded(self):
        """Console history keeps the latest lines of the current run only."""
        with Session() as s:
            s.run(program('FOR I = 1 TO 1500', 'PRINT I', 'NEXT'))
            output = s.get_output()
            assert len(output) == 1000
            assert output[-1] == 'OK'
            assert s.get_text()[-1] == '1500'
            assert s.get_text()[0] == '502'
            s.run('PRINT "again"')
            assert s.get_output() == ['@@PRINT again', 'OK']

    def test_step(self):
        """Single-stepping runs exactly one line per step."""
        pauses = queue.Queue()
        with Session(start_paused=True, on_pause=pauses.put) as s:
            s.launch(program('PRINT 1', '', 'PRINT 2', 'PRINT 3'))
            assert pauses.get(timeout=2) == 0
            assert s.get_text() == []
            s.step()
            assert pauses.get(timeout=2) == 2
            assert s.get_text() == ['1']
            s.step()
            assert pauses.get(timeout=2) == 3
            assert s.get_text() == ['1', '2']
            assert s.paused
            s.resume()
            outcome = s.join(2)
            assert outcome.status == COMPLETED
            assert s.get_text() == ['1', '2', '3']

    def test_pause_resume(self):
        """A paused program continues where it stopped."""
        pauses = queue.Queue()
        with Session(on_pause=pauses.put) as s:
            s.launch(program('N = 0', 'Top:', 'N = N + 1', 'IF N < 1000000 THEN GOTO Top'))
            assert self.wait_for(lambda: s.evaluate('N') > 10)
            s.pause()
            pc = pauses.get(timeout=2)
            count = s.evaluate('N')
            time.sleep(0.05)
            # nothing runs while paused
            assert s.evaluate('N') == count
            assert pc in (2, 3)
            s.cancel()
            assert s.join(2).status == CANCELLED

    def test_cancel_paused(self):
        """A paused program can be cancelled."""
        pauses = queue.Queue()
        with Session(start_paused=True, on_pause=pauses.put) as s:
            s.launch('PRINT 1')
            assert pauses.get(timeout=2) == 0
            s.cancel()
            assert s.join(2).status == CANCELLED
            assert s.get_text() == []

    def test_vsync(self):
        """WAIT VBL returns on the refresh signal."""
        with Session(vblank=5000) as s:
            s.launch(program('WAIT VBL', 'PRINT 1'))
            outcome = None
            for _ in range(40):
                s.vsync()
                outcome = s.join(0.05)
                if outcome:
                    break
            assert outcome is not None
            assert outcome.status == COMPLETED
            assert s.get_text() == ['1']

    def test_one_program_at_a_time(self):
        """Only one program runs at a time."""
        with Session() as s:
            s.launch('WAIT 5000')
            with self.assertRaises(RuntimeError):
                s.run('PRINT 1')
            with self.assertRaises(RuntimeError):
                s.launch('PRINT 1')
            s.cancel()
            assert s.join(2).status == CANCELLED
            assert s.run('PRINT 1').status == COMPLETED

    def test_close_cancels(self):
        """Closing the session stops a launched program."""
        s = Session()
        s.launch('WAIT 5000')
        s.close()
        assert not s.running

    def test_keys(self):
        """Programs see keys pressed by the host."""
        with Session() as s:
            s.press_key('SPACE')
            s.run(program('IF KEYSTATE("SPACE") THEN PRINT "down"', 'K$ = INKEY$', 'L = INKEY$'))
            assert s.get_text() == ['down']
            assert s.get_variable('K$') == 'SPACE'
            assert s.get_variable('L') == 'SPACE'
            assert s.evaluate('L * 1') == 5
            s.release_key('SPACE')
            s.run('IF INKEY$ THEN PRINT "key"')
            assert s.get_text() == []

    def test_key_signals(self):
        """Key signals on the input queue update the key state."""
        iface = FakeInterface()
        with Session() as s:
            s.attach(iface)
            iface.queues[0].put(signals.Event(signals.KEYB_DOWN, ('UP',)))
            s.run(program('A = KEYSTATE("UP")'))
            assert s.get_variable('A') == 1
            iface.queues[0].put(signals.Event(signals.KEYB_UP, ('UP',)))
            s.run(program('A = KEYSTATE("UP")'))
            assert s.get_variable('A') == 0

    def test_quit_signal(self):
        """A quit signal on the input queue cancels the program."""
        iface = FakeInterface()
        with Session() as s:
            s.attach(iface)
            s.launch(program('Top:', 'GOTO Top'))
            iface.queues[0].put(signals.Event(signals.QUIT))
            outcome = s.join(2)
            assert outcome.status == CANCELLED

    def test_signals(self):
        """Output, graphics and sound signals go to the interface queues."""
        iface = FakeInterface()
        with Session() as s:
            s.attach(iface)
            s.run(program('PRINT "hi"', 'PLOT 1, 1', 'MUSIC PLAY "song.mod"', 'SAM PLAY "bang.wav"'))
        video = [(_e.event_type, _e.params) for _e in iface.drain(1)]
        assert video == [
            (signals.VIDEO_PRINT, ('hi',)),
            (signals.VIDEO_UPDATE, ()),
            (signals.VIDEO_LOG, ('OK',)),
        ]
        audio = [_e.event_type for _e in iface.drain(2)]
        # music stops at the end of the run
        assert audio == [signals.AUDIO_MUSIC, signals.AUDIO_SAMPLE, signals.AUDIO_STOP]

    def test_music_stops_on_error(self):
        """Music stops when the program fails."""
        iface = FakeInterface()
        with Session() as s:
            s.attach(iface)
            outcome = s.run(program('MUSIC PLAY "song.mod"', 'GOTO Nowhere'))
            assert outcome.status == FAILED
        audio = [_e.event_type for _e in iface.drain(2)]
        assert audio == [signals.AUDIO_MUSIC, signals.AUDIO_STOP]

    def test_graphics_changed(self):
        """The host is notified when the graphics change."""
        calls = []
        with Session(on_graphics_changed=lambda: calls.append(1)) as s:
            s.run(program('INK RED', 'PLOT 1, 2', 'SPRITE 1, 4, 4', 'REFRESH'))
            assert len(calls) == 2
            pixels = s.get_pixels()
            assert tuple(pixels[2, 1]) == (255, 0, 0)
            assert tuple(pixels[0, 0]) == (0, 0, 0)

    def test_info(self):
        """Session information after an error."""
        with Session() as s:
            outcome = s.run(program('FOR I = 1 TO 3', 'GOSUB Sub', 'END', 'Sub:', 'GOTO Nowhere'))
            assert outcome.status == FAILED
            info = s.info
            for_stack, gosub_stack = info.get_stacks()
            assert gosub_stack == [2]
            assert [_f.name for _f in for_stack] == ['I']
            assert info.get_current_code() == 'GOTO Nowhere'
            assert info.repr_program().split('\n')[3] == '    4 Sub:'
            assert 'I = 1' in info.repr_scalars()


if __name__ == '__main__':
    run_tests()
