"""
Amos BASIC tests.test_main
Unit tests for main script

(c) 2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import logging
from contextlib import redirect_stdout

from amosbasic import main
from tests.unit.utils import TestCase, run_tests, program


class MainTest(TestCase):
    """Unit tests for main script."""

    tag = u'main'

    def tearDown(self):
        """Restore the root logger."""
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        root_logger.setLevel(logging.WARNING)

    def _main(self, *args):
        """Run main and capture standard output."""
        output = io.StringIO()
        with redirect_stdout(output):
            status = main(*args)
        return status, output.getvalue()

    def test_version(self):
        """Test version call."""
        status, output = self._main('-v')
        assert status == 0
        assert output.startswith('Amos BASIC 1.'), output

    def test_debug_version(self):
        """Test debug version call."""
        status, output = self._main('-v', '--debug')
        assert 'Python' in output, output

    def test_usage(self):
        """Test usage call."""
        status, output = self._main('-h')
        assert status == 0
        assert output.startswith('Usage: amosbasic'), output

    def test_no_program(self):
        """No program given."""
        status, output = self._main('-n')
        assert status == 1
        assert output.startswith('Usage'), output

    def test_missing_program(self):
        """Program file does not exist."""
        status, output = self._main(self.output_path('nothing.bas'), '-n')
        assert status == 1

    def test_run(self):
        """Exit status follows the run outcome."""
        good = self.write_file('good.bas', program('FOR I = 1 TO 3', 'PRINT I', 'NEXT'))
        bad = self.write_file('bad.bas', program('PRINT 1', 'GOTO Nowhere'))
        assert self._main(good, '-n') == (0, '')
        assert self._main(bad, '-n')[0] == 1
        assert self._main(good, '-n', '--trace')[0] == 0


if __name__ == '__main__':
    run_tests()
