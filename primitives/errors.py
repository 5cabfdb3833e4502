"""Error kinds raised by the algebra and protocol layers.

Each kind subclasses the builtin a Python caller would already catch, so
``except ZeroDivisionError`` or ``except ValueError`` keep working.
"""


class AlgebraError(Exception):
    """Marker base for every error raised by this package."""


class DivideByZeroError(AlgebraError, ZeroDivisionError):
    """Inverting zero in a field or extension field, or dividing by the zero polynomial."""


class InvalidWitnessError(AlgebraError, ValueError):
    """Witness does not start with the constant wire 1."""


class DimensionMismatchError(AlgebraError, ValueError):
    """Matrix, vector or point/scalar lengths disagree."""


class NonExactDivisionError(AlgebraError, ArithmeticError):
    """Polynomial division left a non-zero remainder."""


class EmptyInputError(AlgebraError, ValueError):
    """Interpolation or multi-scalar multiplication was given nothing to work on."""


class InvalidParameterError(AlgebraError, ValueError):
    """Parameter outside its domain (window size, exponent, domain size, ...)."""
