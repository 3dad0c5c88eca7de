"""
Amos BASIC - config.py
Configuration file and command-line options parser

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import io
import sys
import logging
import configparser
from collections import deque

from .basic import VERSION


# base directory name
MAJOR_VERSION = '.'.join(VERSION.split('.')[:2])
BASENAME = 'amosbasic-{0}'.format(MAJOR_VERSION)

# user configuration directory
if sys.platform == 'win32':
    USER_CONFIG_HOME = os.environ.get('APPDATA') or os.path.expanduser('~')
else:
    USER_CONFIG_HOME = os.environ.get('XDG_CONFIG_HOME') or os.path.join(
        os.path.expanduser('~'), '.config'
    )
USER_CONFIG_DIR = os.path.join(USER_CONFIG_HOME, BASENAME)

# default config file name
CONFIG_NAME = 'AMOSBASIC.INI'

# user config file
USER_CONFIG_PATH = os.path.join(USER_CONFIG_DIR, CONFIG_NAME)

# format for log files
LOGGING_FORMAT = '[%(asctime)s.%(msecs)04d] %(levelname)s: %(message)s'
LOGGING_FORMATTER = logging.Formatter(fmt=LOGGING_FORMAT, datefmt='%H:%M:%S')

# bool strings
TRUES = ('YES', 'TRUE', 'ON', '1')
FALSES = ('NO', 'FALSE', 'OFF', '0')

# config file section
DEFAULT_SECTION = 'amosbasic'


##############################################################################
# short-form arguments

SHORT_ARGS = {
    'd': ('debug', 'True'),
    'h': ('help', 'True'),
    'v': ('version', 'True'),
    'w': ('wait', 'True'),
    't': ('trace', 'True'),
    'b': ('interface', 'cli'),
    'n': ('interface', 'none'),
    'a': ('assets', None),
    's': ('seed', None),
}

# the program file
NUM_POSITIONAL = 1

ARGUMENTS = {
    'config': {'type': 'string', 'default': '', },
    'debug': {'type': 'bool', 'default': False, },
    'logfile': {'type': 'string', 'default': '', },
    'interface': {
        'type': 'string', 'default': 'cli',
        'choices': ('', 'none', 'cli'),
    },
    'audio': {
        'type': 'string', 'default': 'pygame',
        'choices': ('', 'none', 'pygame'),
    },
    'assets': {'type': 'string', 'default': '', },
    'seed': {'type': 'int', 'default': None, },
    'vblank': {'type': 'int', 'default': 20, },
    'trace': {'type': 'bool', 'default': False, },
    'wait': {'type': 'bool', 'default': False, },
    'version': {'type': 'bool', 'default': False, },
    'help': {'type': 'bool', 'default': False, },
}


##########################################################################
# logging

class Lumberjack(object):
    """Logging manager."""

    def __init__(self):
        """Set up the global logger temporarily until we know the log stream."""
        # include messages from warnings madule in the logs
        logging.captureWarnings(True)
        # we use the awkward logging interface as we can only use basicConfig once
        # get the root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)
        # send to a buffer until we know where to log to
        self._logstream = io.StringIO()
        handler = logging.StreamHandler(self._logstream)
        handler.setFormatter(LOGGING_FORMATTER)
        root_logger.addHandler(handler)

    def reset(self):
        """Reset root logger."""
        root_logger = logging.getLogger()
        # remove all old handlers: temporary ones we set as well as any default ones
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        return root_logger

    def prepare(self, logfile, debug):
        """Set up the global logger."""
        # get log stream and level from options
        loglevel = logging.DEBUG if debug else logging.INFO
        root_logger = self.reset()
        root_logger.setLevel(loglevel)
        if logfile:
            logstream = io.open(logfile, 'w', encoding='utf_8', errors='replace')
        else:
            logstream = sys.stderr
        # write out cached logs
        logstream.write(self._logstream.getvalue())
        handler = logging.StreamHandler(logstream)
        handler.setFormatter(LOGGING_FORMATTER)
        root_logger.addHandler(handler)


##############################################################################
# settings

class Settings(object):
    """Read and retrieve command-line settings and options."""

    def __init__(self, arguments=None):
        """Initialise settings."""
        if not arguments:
            self._uargv = sys.argv[1:]
        else:
            self._uargv = list(arguments)
        lumberjack = Lumberjack()
        try:
            # store options in options dictionary
            self._options = ArgumentParser().retrieve_options(self._uargv)
        except BaseException:
            # avoid losing exception messages occuring while logging was disabled
            lumberjack.reset()
            raise
        # prepare global logger for use by main program
        lumberjack.prepare(self.get('logfile'), self.get('debug'))

    def get(self, name, get_default=True):
        """Get value of option; choose whether to get default or None (unspecified) or '' (empty)."""
        try:
            value = self._options[name]
            if get_default and (value is None or value == ''):
                raise KeyError
        except KeyError:
            if get_default:
                try:
                    value = ARGUMENTS[name]['default']
                except KeyError:
                    if name in range(NUM_POSITIONAL):
                        return ''
            else:
                value = None
        return value

    ##########################################################################
    # session parameters

    @property
    def session_params(self):
        """Dict of parameters for the Session object."""
        program = self.get(0)
        # assets are found next to the program by default
        asset_dir = self.get('assets') or (os.path.dirname(os.path.abspath(program)) if program else '')
        return {
            'asset_dir': asset_dir,
            'seed': self.get('seed'),
            'vblank': self.get('vblank'),
        }

    @property
    def interface(self):
        """Run with interface."""
        return self.get('interface') != 'none'

    @property
    def iface_params(self):
        """Dict of interface parameters."""
        return {
            'try_interfaces': (self.get('interface'),),
            'audio_override': self.get('audio'),
            'wait': self.get('wait'),
        }

    @property
    def launch_params(self):
        """Dict of launch parameters."""
        launch_params = {
            'program': self.get(0),
            'debug': self.get('debug'),
            'trace': self.get('trace'),
        }
        launch_params.update(self.session_params)
        return launch_params

    ##########################################################################
    # other calls

    @property
    def version(self):
        """Version operating mode."""
        return self.get('version')

    @property
    def help(self):
        """Help operating mode."""
        return self.get('help')

    @property
    def debug(self):
        """Debugging mode."""
        return self.get('debug')


##############################################################################
# argument parsing

class ArgumentParser(object):
    """Parse Amos BASIC config file and command-line arguments."""

    def retrieve_options(self, uargv):
        """Retrieve command line and option file options."""
        # convert command line arguments to string dictionary form
        remaining = self._get_arguments_dict(uargv)
        # get settings from the config file
        args = self._parse_config_arg_and_process_config_file(remaining)
        # find unrecognised arguments
        unrecognised = ((_k, _v) for _k, _v in args.items() if _k not in ARGUMENTS)
        for key, value in unrecognised:
            logging.warning(
                'Ignored unrecognised option `%s=%s` in configuration file', key, value
            )
        args = {_k: _v for _k, _v in args.items() if _k in ARGUMENTS}
        # parse rest of command line args
        cmd_line_args = self._parse_args(remaining)
        # command-line args override config file settings
        args.update(cmd_line_args)
        # clean up arguments
        self._convert_types(args)
        return args

    def _append_short_args(self, args, key, value):
        """Append short arguments and value to dict."""
        long_arg_value = None
        for i, short_arg in enumerate(key[1:]):
            try:
                long_arg, long_arg_value = SHORT_ARGS[short_arg]
            except KeyError:
                logging.warning('Ignored unrecognised option `-%s`', short_arg)
            else:
                if i == len(key)-2:
                    # assign provided value to last argument specified
                    if long_arg_value and value:
                        logging.debug(
                            'Value `%s` provided to option `-%s` interpreted as positional',
                            value, short_arg
                        )
                    args[long_arg] = long_arg_value or value or ''
                else:
                    args[long_arg] = long_arg_value or ''
        # if value provided not used, push back as positional
        if long_arg_value and value:
            return value
        return None

    def _get_arguments_dict(self, argv):
        """Convert command-line arguments to dictionary."""
        args = {}
        arg_deque = deque(argv)
        # positional arguments
        pos = 0
        # use -- to end option parsing, everything is a positional argument afterwards
        options_ended = False
        while arg_deque:
            arg = arg_deque.popleft()
            if not arg.startswith('-') or options_ended:
                # not an option flag, interpret as positional
                # strip enclosing quotes, but only if paired
                for quote in '"\'':
                    if arg.startswith(quote) and arg.endswith(quote):
                        arg = arg.strip(quote)
                args[pos] = arg
                pos += 1
            elif arg == '--':
                options_ended = True
            else:
                key, _, value = arg.partition('=')
                value = _unquote(value)
                # we know arg starts with -, not =, so key is not empty
                if key.startswith('--'):
                    # long option
                    if key[2:]:
                        args[key[2:]] = value
                else:
                    # starts with one dash
                    if not value:
                        # -key value, without = to connect
                        # only accept this for short options, long options with -- must have a =
                        # only use the next value if it does not itself look like an option flag
                        if arg_deque:
                            if not arg_deque[0].startswith('-'):
                                value = arg_deque.popleft()
                    unused_value = self._append_short_args(args, key, value)
                    # if the value picked up is not used by the short option, push back as positional.
                    if unused_value:
                        arg_deque.appendleft(unused_value)
        return args

    def _parse_config_arg_and_process_config_file(self, remaining):
        """Find the correct config file and read it."""
        # user config file, overridden by a specified or local config file
        conf_dict = {}
        if os.path.exists(USER_CONFIG_PATH):
            conf_dict.update(self._read_config_file(USER_CONFIG_PATH))
        config_file = None
        try:
            config_file = remaining.pop('config')
        except KeyError:
            if os.path.exists(CONFIG_NAME):
                config_file = CONFIG_NAME
        if config_file:
            conf_dict.update(self._read_config_file(config_file))
        return conf_dict

    def _read_config_file(self, config_file):
        """Read config file."""
        try:
            config = configparser.RawConfigParser(allow_no_value=True)
            # use utf_8_sig to ignore a BOM if it's at the start of the file
            # (e.g. created by Notepad)
            with io.open(config_file, 'r', encoding='utf_8_sig', errors='replace') as f:
                config.read_file(WhitespaceStripper(f))
        except (configparser.Error, IOError):
            logging.warning(
                'Error in configuration file `%s`. Configuration not loaded.', config_file
            )
            return {}
        if not config.has_section(DEFAULT_SECTION):
            return {}
        return {
            _key: _value or ''
            for _key, _value in config.items(DEFAULT_SECTION)
        }

    def _parse_args(self, remaining):
        """Process command line options."""
        # set arguments
        known = list(ARGUMENTS.keys()) + list(range(NUM_POSITIONAL))
        args = {d: remaining[d] for d in remaining if d in known}
        not_recognised = {d: remaining[d] for d in remaining if d not in known}
        for d in not_recognised:
            if not_recognised[d]:
                if isinstance(d, int):
                    logging.warning(
                        'Ignored surplus positional command-line argument #%s: `%s`', d, not_recognised[d]
                    )
                else:
                    logging.warning(
                        'Ignored unrecognised command-line argument `%s=%s`', d, not_recognised[d]
                    )
            else:
                logging.warning('Ignored unrecognised command-line argument `%s`', d)
        return args

    ##########################################################################
    # type conversions

    def _convert_types(self, args):
        """Convert arguments to required type."""
        for name in args:
            args[name] = self._parse_type(name, args[name])

    def _parse_type(self, d, arg):
        """Convert argument to required type."""
        if d not in ARGUMENTS:
            return arg
        if 'choices' in ARGUMENTS[d]:
            arg = arg.lower()
        if 'type' in ARGUMENTS[d]:
            if (ARGUMENTS[d]['type'] == 'int'):
                arg = self._to_int(d, arg)
            elif (ARGUMENTS[d]['type'] == 'bool'):
                arg = self._to_bool(d, arg)
        if 'choices' in ARGUMENTS[d]:
            if arg and arg not in ARGUMENTS[d]['choices']:
                logging.warning(
                    'Value `%s=%s` ignored; should be one of (`%s`)',
                    d, arg, '`, `'.join(str(x) for x in ARGUMENTS[d]['choices'])
                )
                arg = ''
        return arg

    def _to_bool(self, argname, strval):
        """Convert bool string to bool. Empty string (i.e. specified) means True."""
        if strval == '':
            return True
        if strval.upper() in TRUES:
            return True
        elif strval.upper() in FALSES:
            return False
        else:
            logging.warning(
                'Boolean option `%s=%s` interpreted as `%s=True`',
                argname, strval, argname
            )
        return True

    def _to_int(self, argname, strval):
        """Convert int string to int."""
        if strval:
            try:
                return int(strval)
            except ValueError:
                logging.warning(
                    'Option `%s=%s` ignored: value should be an integer',
                    argname, strval
                )
        return None


##############################################################################
# utilities

def _unquote(value):
    """Strip enclosing quotes, but only if paired."""
    for quote in '"\'':
        if len(value) > 1 and value.startswith(quote) and value.endswith(quote):
            return value[1:-1]
    return value


class WhitespaceStripper(object):
    """File wrapper for ConfigParser that strips leading whitespace."""

    def __init__(self, file):
        """Initialise to file object."""
        self._file = file

    def readline(self):
        """Read a line and strip whitespace (but not EOL)."""
        return self._file.readline().lstrip(' \t')

    def __next__(self):
        """Make iterable."""
        line = self.readline()
        if not line:
            raise StopIteration()
        return line

    def __iter__(self):
        """We are iterable."""
        return self
