"""Exception hierarchy for symmat.

Every error raised by the engine derives from SymmatError, and each concrete
class also inherits the closest builtin so callers that catch ValueError or
IndexError keep working.
"""


class SymmatError(Exception):
    """Base exception for all symmat errors."""
    pass


class ValidationError(SymmatError, ValueError):
    """Caller supplied arguments that cannot be used."""
    pass


class DimensionError(ValidationError):
    """
    Matrix shapes are incompatible with the requested operation.

    Attributes:
        operation: name of the operation that rejected the input
        shapes: the offending (rows, cols) tuples
    """

    def __init__(self, message, operation=None, shapes=()):
        super().__init__(message)
        self.operation = operation
        self.shapes = tuple(shapes)


class ArgumentError(ValidationError):
    """An argument has the right shape but the wrong kind (e.g. not a symbol)."""
    pass


class MatrixIndexError(SymmatError, IndexError):
    """Element access outside the matrix bounds."""

    def __init__(self, message, index=None, shape=None):
        super().__init__(message)
        self.index = index
        self.shape = shape


class UnsupportedExponentError(SymmatError, TypeError):
    """Matrix power with an exponent that is not an integer."""

    def __init__(self, message, exponent=None):
        super().__init__(message)
        self.exponent = exponent


class ComputationError(SymmatError, ArithmeticError):
    """The input is well formed but the computation has no answer."""
    pass


class SingularMatrixError(ComputationError):
    """Inverse requested for a matrix found singular during elimination."""
    pass


class InconsistentSystemError(ComputationError):
    """
    Linear system with a row of zero coefficients and a nonzero residual.

    Attributes:
        row: row of the echelon form where the contradiction was found
        column: right hand side column being solved
    """

    def __init__(self, message, row=None, column=None):
        super().__init__(message)
        self.row = row
        self.column = column
