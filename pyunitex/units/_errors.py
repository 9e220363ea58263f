"""
Exceptions raised when handling unit expressions.  All are `ValueError`
subclasses so that existing ``except ValueError`` handlers catch bad
unit input.
"""

# Written by Eric J. Whitney, January 2020.

# ======================================================================


class FormatError(ValueError):
    """
    A unit expression is malformed, e.g. an invalid exponent or more
    than one affine / non-linear unit in the same expression.
    """


class IncompatibleDimensions(ValueError):
    """
    Two unit expressions do not share the same dimensions, so no
    conversion exists between them.
    """


class DuplicateSymbol(ValueError):
    """A unit or prefix symbol is already registered."""


class DefinitionError(ValueError):
    """
    A unit definition cannot be expanded to base units (cyclic
    definition, unknown symbol in its basis, etc).
    """
