"""
Amos BASIC - error.py
Error constants and exceptions

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

# error constants
SYNTAX_ERROR = 2
RETURN_WITHOUT_GOSUB = 3
ILLEGAL_FUNCTION_CALL = 5
UNDEFINED_LABEL = 8
TYPE_MISMATCH = 13
MISSING_OPERAND = 22
INTERNAL_ERROR = 51
FILE_NOT_FOUND = 53
BAD_FILE_NAME = 64
ADVANCED_FEATURE = 73

# shorthand
STX = SYNTAX_ERROR
IFC = ILLEGAL_FUNCTION_CALL


class Interrupt(Exception):
    """Base type for exceptions."""

    message = ''

    def __repr__(self):
        """String representation of exception."""
        return self.message

    def __str__(self):
        """Message as reported to the host."""
        return self.get_message()

    def get_message(self, line_number=None):
        """Error message."""
        if line_number is not None:
            return '%s in %i' % (self.message, line_number)
        return self.message


class Exit(Interrupt):
    """Exit interpreter."""
    message = 'Exit'


class Break(Interrupt):
    """Program interrupt."""

    message = 'Break'

    def __init__(self, pc=None):
        """Initialise break."""
        Interrupt.__init__(self)
        self.pc = pc


class BASICError(Interrupt):
    """Runtime error."""

    default_message = 'Unprintable error'
    messages = {
        2: 'Syntax error',
        3: 'RETURN without GOSUB',
        5: 'Illegal function call',
        8: 'Undefined label',
        13: 'Type mismatch',
        22: 'Missing operand',
        51: 'Internal error',
        53: 'File not found',
        64: 'Bad file name',
        73: 'Advanced Feature',
    }

    def __init__(self, value, line_number=None, detail=None):
        """Initialise error."""
        Interrupt.__init__(self)
        self.err = value
        # 1-based source line; filled in by the interpreter loop if not known here
        self.line_number = line_number
        self.detail = detail
        try:
            self.message = self.messages[self.err]
        except KeyError:
            self.message = self.default_message

    def get_message(self, line_number=None):
        """Error message, with detail and line number if known."""
        if line_number is None:
            line_number = self.line_number
        message = self.message
        if self.detail:
            message = '%s: %s' % (message, self.detail)
        if line_number is not None:
            return '%s in %i' % (message, line_number)
        return message


class BASICSyntaxError(BASICError):
    """Malformed statement, unknown command or trailing junk."""

    def __init__(self, detail=None, line_number=None):
        """Initialise syntax error."""
        BASICError.__init__(self, SYNTAX_ERROR, line_number, detail)


class UnresolvedLabelError(BASICError):
    """GOTO or GOSUB to a label that is not defined."""

    def __init__(self, label, line_number=None):
        """Initialise undefined label error."""
        BASICError.__init__(self, UNDEFINED_LABEL, line_number, label)
        self.label = label


class StackUnderflowError(BASICError):
    """RETURN with an empty call stack."""

    def __init__(self, line_number=None):
        """Initialise RETURN without GOSUB."""
        BASICError.__init__(self, RETURN_WITHOUT_GOSUB, line_number)


def throw_if(bool, err=IFC, detail=None):
    """Raise IFC if condition is met."""
    if bool:
        if err == STX:
            raise BASICSyntaxError(detail)
        raise BASICError(err, detail=detail)

def range_check(lower, upper, *allvars):
    """Check if all variables in list are within the given inclusive range."""
    for v in allvars:
        if v is not None and not (lower <= v <= upper):
            raise BASICError(IFC)
