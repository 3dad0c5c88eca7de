"""
Amos BASIC - scalars.py
Variable store

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .base import error
from .base import codestream
from . import values


class Scalars(object):
    """Case-insensitive map of variable names to integer or string values."""

    def __init__(self):
        """Initialise the store."""
        self._vars = {}

    def __contains__(self, name):
        """Check if a variable has been assigned."""
        return name.upper() in self._vars

    def __iter__(self):
        """Iterate over variable names."""
        return iter(sorted(self._vars))

    def __len__(self):
        """Number of assigned variables."""
        return len(self._vars)

    def __repr__(self):
        """Debugging representation of the store."""
        return '\n'.join(
            '%s = %r' % (_name, _value.to_value())
            for _name, _value in sorted(self._vars.items())
        )

    def set(self, name, value):
        """Assign a value to a variable."""
        error.throw_if(not codestream.is_name(name), error.STX, 'bad variable name `%s`' % name)
        self._vars[name.strip().upper()] = values.from_value(value)

    def get(self, name):
        """Retrieve the value of a variable; unassigned variables read as 0."""
        return self._vars.get(name.strip().upper(), values.ZERO)

    def get_python(self, name):
        """Retrieve the value of a variable as a Python int or str."""
        return self.get(name).to_value()

    def clear(self):
        """Clear all variables."""
        self._vars = {}

    def let_(self, args):
        """LET: assign value to variable."""
        name = next(args)
        self.set(name, next(args))
        list(args)
