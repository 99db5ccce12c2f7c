"""symmat: exact dense linear algebra over sympy expressions."""

from .charpoly import charpoly
from .constructors import diag_matrix, from_ragged, reduced_matrix, sub_matrix, symbolic_matrix, unit_matrix
from .determinant import determinant, determinant_minor
from .elimination import (
    EchelonResult,
    PivotKind,
    PivotOutcome,
    division_free_elimination,
    echelon_form,
    fraction_free_elimination,
    gauss_elimination,
    markowitz_elimination,
    pivot,
)
from .errors import (
    ArgumentError,
    ComputationError,
    DimensionError,
    InconsistentSystemError,
    MatrixIndexError,
    SingularMatrixError,
    SymmatError,
    UnsupportedExponentError,
    ValidationError,
)
from .heuristics import DeterminantAlgo, EliminationAlgo, MatrixStats
from .matrix import Matrix
from .solve import inverse, rank, solve

__all__ = [
    "Matrix",
    "EliminationAlgo", "DeterminantAlgo", "MatrixStats",
    "determinant", "determinant_minor", "charpoly", "solve", "inverse", "rank",
    "echelon_form", "pivot", "PivotKind", "PivotOutcome", "EchelonResult",
    "gauss_elimination", "division_free_elimination", "fraction_free_elimination", "markowitz_elimination",
    "unit_matrix", "diag_matrix", "symbolic_matrix", "from_ragged", "reduced_matrix", "sub_matrix",
    "SymmatError", "ValidationError", "DimensionError", "ArgumentError", "MatrixIndexError",
    "UnsupportedExponentError", "ComputationError", "SingularMatrixError", "InconsistentSystemError",
]
