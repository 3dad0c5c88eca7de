"""
Amos BASIC - line interpreter for an AMOS-like game programming BASIC

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import io
import sys
import logging
from importlib import resources

from . import config
from .basic import Session, DebugSession
from .basic import NAME, VERSION, LONG_VERSION, COPYRIGHT
from .basic import COMPLETED, CANCELLED
from .interface import Interface, InitFailed


# process exit status by run outcome
EXIT_STATUS = {
    COMPLETED: 0,
    CANCELLED: 2,
}
# exit status on error
EXIT_ERROR = 1


def main(*arguments):
    """Initialise, parse arguments and perform requested operations; return exit status."""
    # get settings and prepare logging
    settings = config.Settings(arguments)
    if settings.version:
        # print version and exit
        _show_version(settings)
    elif settings.help:
        # print usage and exit
        _show_usage()
    elif not settings.get(0):
        logging.error('No program file given.')
        _show_usage()
        return EXIT_ERROR
    elif settings.interface:
        # start an interpreter session with interface
        return _run_session_with_interface(settings)
    else:
        # start an interpreter session without output
        return _run_session(**settings.launch_params)
    return 0


def _show_usage():
    """Show usage description."""
    usage = resources.files(__package__ + '.data').joinpath('USAGE.txt').read_text(errors='replace')
    sys.stdout.write(usage)

def _show_version(settings):
    """Show version with optional debugging details."""
    if settings.debug:
        sys.stdout.write('%s %s\n%s\n' % (NAME, LONG_VERSION, COPYRIGHT))
        sys.stdout.write('Python %s on %s\n' % (sys.version.split()[0], sys.platform))
    else:
        sys.stdout.write('%s %s\n%s\n' % (NAME, VERSION, COPYRIGHT))


def _run_session_with_interface(settings):
    """Run the program with the interface plugins on the main thread."""
    try:
        interface = Interface(**settings.iface_params)
    except InitFailed as e: # pragma: no cover
        logging.error(e)
        return EXIT_ERROR
    status = interface.launch(_run_session, **settings.launch_params)
    return EXIT_ERROR if status is None else status

def _run_session(
        interface=None, program='', debug=False, trace=False, **session_params
    ):
    """Load and run the program; return exit status."""
    try:
        with io.open(program, 'r', encoding='utf-8', errors='replace') as f:
            program_text = f.read()
    except EnvironmentError as e:
        logging.error('Could not read program %s: %s', program, e)
        return EXIT_ERROR
    if debug or trace:
        session = DebugSession(**session_params)
    else:
        session = Session(**session_params)
    with session:
        session.attach(interface)
        if trace:
            session.trace()
        outcome = session.run(program_text)
    return EXIT_STATUS.get(outcome.status, EXIT_ERROR)
