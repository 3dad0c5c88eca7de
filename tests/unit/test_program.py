"""
Amos BASIC tests.test_program
Tests for program loading and pre-scan

(c) 2020--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from amosbasic.basic.program import Program, parse_line
from amosbasic.basic.base import codestream
from tests.unit.utils import TestCase, run_tests, program


class ProgramTest(TestCase):
    """Unit tests for Program."""

    tag = u'program'

    def test_line_breaks(self):
        """All line break conventions split lines."""
        prog = Program('PRINT 1\r\nPRINT 2\rPRINT 3\nPRINT 4')
        assert len(prog) == 4
        assert prog.get_statements(2) == ['PRINT 3']

    def test_labels(self):
        """Numeric and named labels are registered at their line."""
        prog = Program(program(
            '10 PRINT 1',
            'Start:',
            '20 Loop: PRINT 2',
            '',
            'Done: ; comment',
        ))
        assert prog.get_label('10') == 0
        assert prog.get_label('start') == 1
        assert prog.get_label('20') == 2
        assert prog.get_label('LOOP') == 2
        assert prog.get_label('done') == 4
        assert prog.get_label('nope') is None
        assert prog.get_statements(1) == []
        assert prog.get_statements(2) == ['PRINT 2']
        assert prog.get_statements(3) == []

    def test_keyword_is_not_label(self):
        """A statement keyword followed by more statements is not a label."""
        number, name, statements = parse_line('CLS: PRINT 1')
        assert name is None
        assert statements == ['CLS', 'PRINT 1']

    def test_trailing_colon(self):
        """A statement line ending in a colon is not a label line."""
        number, name, statements = parse_line('PRINT "A":')
        assert name is None
        assert statements == ['PRINT "A"']
        prog = Program('PRINT "A":\nDone:')
        assert prog.get_statements(0) == ['PRINT "A"']
        assert prog.get_statements(1) == []

    def test_comments(self):
        """Comments are stripped outside quotes only."""
        number, name, statements = parse_line('5 PRINT "a;b" ; note')
        assert number == '5'
        assert statements == ['PRINT "a;b"']
        assert parse_line('; only a comment') == (None, None, [])

    def test_if_else_endif(self):
        """Block IF jumps past ELSE; ELSE jumps past ENDIF."""
        prog = Program(program(
            'IF 0',
            'PRINT "X"',
            'ELSE',
            'PRINT "Y"',
            'ENDIF',
        ))
        assert prog.if_jumps == {0: 3}
        assert prog.else_jumps == {2: 5}

    def test_if_endif(self):
        """Block IF without ELSE jumps past ENDIF; END IF is ENDIF."""
        prog = Program(program(
            'IF A = 1 THEN',
            'PRINT "X"',
            'END IF',
            'IF B THEN PRINT "Z"',
        ))
        assert prog.if_jumps == {0: 3}
        assert prog.else_jumps == {}

    def test_nested(self):
        """Nested blocks match innermost first."""
        prog = Program(program(
            'IF A',
            'IF B',
            'PRINT 1',
            'ENDIF',
            'ELSE',
            'PRINT 2',
            'ENDIF',
        ))
        assert prog.if_jumps == {1: 4, 0: 5}
        assert prog.else_jumps == {4: 7}

    def test_unbalanced(self):
        """Unbalanced blocks are reported and left unresolved."""
        with self.assertLogs(level='WARNING') as cm:
            prog = Program(program('ENDIF', 'ELSE', 'IF 1', 'PRINT 1'))
        assert prog.if_jumps == {}
        assert prog.else_jumps == {}
        assert len(cm.output) == 3
        assert 'ENDIF without IF in line 1' in cm.output[0]
        assert 'ELSE without IF in line 2' in cm.output[1]
        assert 'IF without ENDIF in line 3' in cm.output[2]

    def test_tables_are_copies(self):
        """Jump tables cannot be changed from outside."""
        prog = Program('L:\nIF 0\nENDIF')
        prog.labels['X'] = 5
        prog.if_jumps[7] = 8
        assert prog.get_label('X') is None
        assert prog.get_if_jump(7) is None
        assert prog.get_if_jump(1) == 3


class CodeStreamTest(TestCase):
    """Unit tests for source line utilities."""

    tag = u'codestream'

    def test_split_statements(self):
        """Colons inside strings do not split."""
        assert codestream.split_statements('PRINT "a:b" : PRINT 2') == ['PRINT "a:b"', 'PRINT 2']

    def test_split_command(self):
        """Command word is uppercased."""
        assert codestream.split_command('print  "x"') == ('PRINT', '"x"')
        assert codestream.split_command('Sprite Pos 1,2,3') == ('SPRITE', 'Pos 1,2,3')
        assert codestream.split_command('CLS') == ('CLS', '')

    def test_split_args(self):
        """Arguments split on commas, or on whitespace if there are too few commas."""
        assert codestream.split_args('1, 2', 2) == ['1', '2']
        assert codestream.split_args('5 10', 2) == ['5', '10']
        assert codestream.split_args('RND(3, 4), "a,b"', 2) == ['RND(3, 4)', '"a,b"']
        assert codestream.split_args('1, 2, 3', 3, 1) == ['1', '2', '3']
        assert codestream.split_args('', 2) == []

    def test_find_word(self):
        """Whole words outside quotes, case-insensitive."""
        assert codestream.find_word('A = 1 then PRINT', 'THEN') == 6
        assert codestream.find_word('"THEN" = X', 'THEN') == -1
        assert codestream.find_word('THENCE = 1', 'THEN') == -1

    def test_is_name(self):
        """Names start with a letter."""
        assert codestream.is_name('score')
        assert codestream.is_name('A$')
        assert not codestream.is_name('1A')
        assert not codestream.is_name('A B')


if __name__ == '__main__':
    run_tests()
