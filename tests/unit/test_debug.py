"""
Amos BASIC tests.test_debug
Tests for debugging module

(c) 2020--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import queue

from amosbasic import DebugSession
from amosbasic.basic import COMPLETED
from tests.unit.utils import TestCase, run_tests, program


class DebugTest(TestCase):
    """Debug module tests."""

    tag = u'debug'

    def test_debug(self):
        """Exercise debug commands."""
        with DebugSession() as s:
            s.run('A = 1 : B$ = "x"')
            with self.assertLogs(level='DEBUG') as cm:
                s.dir()
                s.logwrite('test', 1)
                s.showvariables()
                s.showprogram()
            log = '\n'.join(cm.output)
            assert 'set_breakpoint' in log
            assert "'test' 1" in log
            assert "B$ = 'x'" in log
            assert 'A = 1 : B$ = "x"' in log

    def test_trace_watch(self):
        """Trace line numbers and watch expressions."""
        with DebugSession() as s:
            s.trace()
            s.watch('A')
            s.watch('1 +')
            with self.assertLogs(level='DEBUG') as cm:
                outcome = s.run(program('A = 5', '', 'A = A + 1'))
            assert outcome.status == COMPLETED
            lines = [_line for _line in cm.output if _line.startswith('DEBUG')]
            assert lines[0] == 'DEBUG:root:[1] A = 0 1 + = <Missing operand>'
            assert lines[1] == 'DEBUG:root:[3] A = 5 1 + = <Missing operand>'
            s.trace(False)
            s.unwatch()
            with self.assertLogs(level='INFO') as cm:
                s.run('A = 1')
            assert not any(_line.startswith('DEBUG') for _line in cm.output)

    def test_breakpoint(self):
        """Execution pauses before a breakpoint line."""
        pauses = queue.Queue()
        with DebugSession(on_pause=pauses.put) as s:
            s.set_breakpoint(3)
            s.launch(program('PRINT 1', 'PRINT 2', 'PRINT 3', 'PRINT 4'))
            assert pauses.get(timeout=2) == 2
            assert s.get_text() == ['1', '2']
            s.resume()
            assert s.join(2).status == COMPLETED
            assert s.get_text() == ['1', '2', '3', '4']
            s.clear_breakpoint(3)
            assert s.run('PRINT 1\nPRINT 2\nPRINT 3').status == COMPLETED

    def test_exit(self):
        """Exit is absorbed by the context guard."""
        with DebugSession() as s:
            s.exit()
            assert False, 'not reached'


if __name__ == '__main__':
    run_tests()
