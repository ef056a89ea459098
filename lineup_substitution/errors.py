# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Exception types raised by lineup-substitution.

Every error is terminal for a run: the command line front end reports it and
exits without writing the target file.
"""


class LineupError(Exception):
    """Base class for all lineup-substitution errors."""


class InvalidArgumentError(LineupError, ValueError):
    """An argument is unusable, e.g. an empty search text."""


class PositionError(LineupError, IndexError):
    """A position or mark does not address a location in the text model."""


class AlignmentInvariantViolation(LineupError):
    """A computed indentation width is impossible (negative).

    Raised when the input was not consistently aligned to begin with, or on an
    internal defect. Never clamped silently.
    """


class SubstitutionError(LineupError):
    """The text model could not perform a requested replacement."""


class DecodeError(LineupError, UnicodeError):
    """The content of a file could not be decoded to text."""
