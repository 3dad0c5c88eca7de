"""
Amos BASIC - values.py
Integer and string values and their conversions

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import re

from .base import error


# an integer in string form, as accepted in integer context
_NUMERIC = re.compile(r'\s*[+-]?\d+\s*$')


def wrap_int(n):
    """Wrap a Python int to the signed 32-bit range."""
    return ((n + 0x80000000) & 0xffffffff) - 0x80000000


class Value(object):
    """Abstract base class for value types."""

    def __init__(self, value):
        """Initialise the value."""
        self._value = value

    def __repr__(self):
        """Debugging representation."""
        return '%s(%r)' % (type(self).__name__, self._value)

    def __eq__(self, other):
        """Equal type and content."""
        return isinstance(other, Value) and self.is_string() == other.is_string() and (
            self._value == other._value
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self._value)

    def is_string(self):
        """Value is of the string variant."""
        return False

    def to_value(self):
        """Convert to Python value."""
        return self._value


class Integer(Value):
    """32-bit signed integer value."""

    def __init__(self, value=0):
        """Initialise, wrapping out-of-range values."""
        Value.__init__(self, wrap_int(int(value)))

    def to_int(self):
        """Integer value."""
        return self._value

    def to_str(self):
        """Decimal representation."""
        return str(self._value)

    def is_zero(self):
        """Value is zero."""
        return self._value == 0


class String(Value):
    """String value."""

    def __init__(self, value=''):
        """Initialise the string."""
        Value.__init__(self, str(value))

    def is_string(self):
        """Value is of the string variant."""
        return True

    def to_int(self):
        """Integer value of a numeric string; type mismatch otherwise."""
        if not _NUMERIC.match(self._value):
            raise error.BASICError(error.TYPE_MISMATCH, detail='"%s"' % self._value)
        return wrap_int(int(self._value))

    def to_str(self):
        """String content."""
        return self._value


class KeyString(String):
    """Key name as read by INKEY$; its integer value is its length."""

    def to_int(self):
        """Length of the key name."""
        return len(self._value)


ZERO = Integer(0)


def from_value(python_val):
    """Convert Python value to BASIC value."""
    if isinstance(python_val, Value):
        return python_val
    if isinstance(python_val, bool):
        return Integer(int(python_val))
    if isinstance(python_val, int):
        return Integer(python_val)
    if isinstance(python_val, str):
        return String(python_val)
    raise TypeError('Cannot convert %s to BASIC value' % type(python_val).__name__)

def to_int(value):
    """Coerce a value to a Python int."""
    return value.to_int()

def to_str(value):
    """Coerce a value to a Python str."""
    return value.to_str()


###############################################################################
# arithmetic

def add(left, right):
    """Add integers; concatenate if either side is a string."""
    if left.is_string() or right.is_string():
        return String(left.to_str() + right.to_str())
    return Integer(left.to_int() + right.to_int())

def subtract(left, right):
    """Subtract integers."""
    return Integer(left.to_int() - right.to_int())

def multiply(left, right):
    """Multiply integers."""
    return Integer(left.to_int() * right.to_int())

def divide(left, right):
    """Integer division truncating toward zero; division by zero gives zero."""
    dividend, divisor = left.to_int(), right.to_int()
    if divisor == 0:
        return Integer(0)
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return Integer(quotient)

def negate(value):
    """Unary minus."""
    return Integer(-value.to_int())


###############################################################################
# comparisons

def compare(op, left, right):
    """Relational test; string operands only distinguish equal from not equal."""
    if left.is_string() or right.is_string():
        equal = left.to_str() == right.to_str()
        return equal if op == '=' else not equal
    left, right = left.to_int(), right.to_int()
    if op == '=':
        return left == right
    elif op == '<>':
        return left != right
    elif op == '<':
        return left < right
    elif op == '>':
        return left > right
    elif op == '<=':
        return left <= right
    elif op == '>=':
        return left >= right
    raise error.BASICSyntaxError('unknown operator `%s`' % op)
