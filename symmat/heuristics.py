"""Algorithm tags and the policy that picks one from matrix statistics.

The thresholds are empirical and may be retuned freely; no algorithm relies
on them for correctness.
"""

import enum
import logging
from dataclasses import dataclass

from .errors import ArgumentError
from .expr import is_numeric, is_rational_function, is_zero, to_rational

logger = logging.getLogger(__name__)

# Numeric matrices: Markowitz beats Gauss once large and sparse.
MARKOWITZ_NUMERIC_MIN_CELLS = 200
MARKOWITZ_NUMERIC_MAX_DENSITY = 0.5

# Symbolic matrices: Bareiss / division-free beat Markowitz when small and dense.
DENSE_SYMBOLIC_MAX_CELLS = 120
DENSE_SYMBOLIC_MIN_DENSITY = 0.6
DIVISION_FREE_MAX_CELLS = 12

# Determinants: Bareiss instead of Laplace when more than 3x3 and at most
# one entry in DETERMINANT_SPARSE_RATIO is nonzero.
LAPLACE_MAX_DIM_FOR_SPARSE = 3
DETERMINANT_SPARSE_RATIO = 5


class _Algo(enum.Enum):

    @classmethod
    def coerce(cls, value):
        """Accept a member, its value ("bareiss") or its name ("BAREISS")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            try:
                return cls(key.lower())
            except ValueError:
                pass
            try:
                return cls[key.upper()]
            except KeyError:
                pass
        choices = ", ".join(m.value for m in cls)
        raise ArgumentError(f"{value!r} is not one of the {cls.__name__} tags ({choices})")


class EliminationAlgo(_Algo):
    AUTOMATIC = "automatic"
    GAUSS = "gauss"
    DIVISION_FREE = "divfree"
    BAREISS = "bareiss"
    MARKOWITZ = "markowitz"


class DeterminantAlgo(_Algo):
    AUTOMATIC = "automatic"
    GAUSS = "gauss"
    BAREISS = "bareiss"
    DIVISION_FREE = "divfree"
    LAPLACE = "laplace"


@dataclass(frozen=True)
class MatrixStats:
    rows: int
    cols: int
    numeric: int
    nonzero: int
    rational_function: bool = False

    @property
    def ncells(self) -> int:
        return self.rows * self.cols

    @property
    def all_numeric(self) -> bool:
        return self.numeric == self.ncells

    @property
    def numeric_fraction(self) -> float:
        return self.numeric / self.ncells if self.ncells else 1.0

    @property
    def density(self) -> float:
        return self.nonzero / self.ncells if self.ncells else 0.0


def elimination_stats(mat) -> MatrixStats:
    entries = mat._m
    return MatrixStats(
        rows=mat.rows,
        cols=mat.cols,
        numeric=sum(1 for e in entries if is_numeric(e)),
        nonzero=sum(1 for e in entries if not is_zero(e)),
    )


def determinant_stats(mat) -> MatrixStats:
    """Like elimination_stats, but zeros are counted after rationalization and
    rational-function entries are flagged so the result gets normalized."""
    numeric = nonzero = 0
    rational_function = False
    for e in mat._m:
        if is_numeric(e):
            numeric += 1
        if not is_zero(to_rational(e, {})):
            nonzero += 1
        if not rational_function and is_rational_function(e):
            rational_function = True
    return MatrixStats(mat.rows, mat.cols, numeric, nonzero, rational_function)


def choose_elimination_algo(stats: MatrixStats) -> EliminationAlgo:
    if stats.all_numeric:
        if stats.ncells > MARKOWITZ_NUMERIC_MIN_CELLS and stats.density < MARKOWITZ_NUMERIC_MAX_DENSITY:
            return EliminationAlgo.MARKOWITZ
        return EliminationAlgo.GAUSS
    if stats.ncells < DENSE_SYMBOLIC_MAX_CELLS and stats.density > DENSE_SYMBOLIC_MIN_DENSITY:
        if stats.ncells <= DIVISION_FREE_MAX_CELLS:
            return EliminationAlgo.DIVISION_FREE
        return EliminationAlgo.BAREISS
    return EliminationAlgo.MARKOWITZ


def choose_determinant_algo(stats: MatrixStats) -> DeterminantAlgo:
    algo = DeterminantAlgo.LAPLACE
    if stats.rows > LAPLACE_MAX_DIM_FOR_SPARSE and DETERMINANT_SPARSE_RATIO * stats.nonzero <= stats.ncells:
        algo = DeterminantAlgo.BAREISS
    # purely numeric input overrides everything
    if stats.all_numeric:
        algo = DeterminantAlgo.GAUSS
    return algo


def resolve_elimination_algo(mat, algo) -> EliminationAlgo:
    algo = EliminationAlgo.coerce(algo)
    if algo is EliminationAlgo.AUTOMATIC:
        stats = elimination_stats(mat)
        algo = choose_elimination_algo(stats)
        logger.debug("elimination on %dx%d (density %.2f, numeric %.2f): %s",
                     stats.rows, stats.cols, stats.density, stats.numeric_fraction, algo.value)
    return algo
