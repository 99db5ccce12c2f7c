"""Linear systems, inverse and rank on top of the echelon form."""

import logging

from sympy import Dummy, S

from .elimination import echelon_form
from .errors import ArgumentError, DimensionError, InconsistentSystemError, SingularMatrixError
from .expr import is_zero, normal
from .heuristics import EliminationAlgo
from .matrix import Matrix

logger = logging.getLogger(__name__)


def solve(mat, vars, rhs, algo=EliminationAlgo.AUTOMATIC):
    """
    Solve mat * X = rhs for X.

    mat is m x n, rhs is m x p and ``vars`` is an n x p matrix of symbols.
    Underdetermined systems are solved in terms of free parameters, which are
    the corresponding entries of ``vars``.

    Raises InconsistentSystemError if the system has no solution.
    """
    m, n, p = mat.rows, mat.cols, rhs.cols
    if rhs.rows != m or vars.rows != n or vars.cols != p:
        raise DimensionError(
            f"solve(): incompatible matrices, system {m}x{n}, vars {vars.rows}x{vars.cols}, rhs {rhs.rows}x{p}",
            operation="solve", shapes=(mat.shape, vars.shape, rhs.shape),
        )
    for e in vars._m:
        if not e.is_Symbol:
            raise ArgumentError(f"solve(): 1st argument must be matrix of symbols, got {e}")

    # augmented matrix [mat | rhs]
    w = n + p
    aug = [S.Zero] * (m * w)
    for r in range(m):
        aug[r * w:r * w + n] = mat._m[r * n:(r + 1) * n]
        aug[r * w + n:(r + 1) * w] = rhs._m[r * p:(r + 1) * p]
    augmented = Matrix._new(m, w, aug)
    colid = echelon_form(augmented, algo, n).colid
    a = augmented._m
    v = vars._m

    sol = [S.Zero] * (n * p)
    for co in range(p):
        last_assigned = n
        for r in range(m - 1, -1, -1):
            # echelon entries may be zeros in disguise
            fnz = 0
            while fnz < n and is_zero(normal(a[r * w + fnz])):
                fnz += 1
            if fnz == n:
                if not is_zero(normal(a[r * w + n + co])):
                    logger.debug("solve: zero row %d with nonzero rhs in column %d", r, co)
                    raise InconsistentSystemError("solve(): inconsistent linear system", row=r, column=co)
                continue
            # columns skipped since the previous pivot are free parameters
            for c in range(fnz + 1, last_assigned):
                sol[colid[c] * p + co] = v[colid[c] * p + co]
            e = a[r * w + n + co]
            for c in range(fnz + 1, n):
                e -= a[r * w + c] * sol[colid[c] * p + co]
            sol[colid[fnz] * p + co] = normal(e / a[r * w + fnz])
            last_assigned = fnz
        for ro in range(last_assigned):
            sol[colid[ro] * p + co] = v[colid[ro] * p + co]
    return Matrix._new(n, p, sol)


def inverse(mat, algo=EliminationAlgo.AUTOMATIC):
    """Inverse by solving mat * X == 1; raises SingularMatrixError."""
    if mat.rows != mat.cols:
        raise DimensionError("inverse(): matrix not square", operation="inverse", shapes=(mat.shape,))
    n = mat.rows
    identity = Matrix.identity(n)
    # solve() wants unknowns even though a regular system has no free ones
    unknowns = Matrix._new(n, n, [Dummy() for _ in range(n * n)])
    try:
        return solve(mat, unknowns, identity, algo)
    except InconsistentSystemError as e:
        raise SingularMatrixError("inverse(): singular matrix") from e


def rank(mat, algo=EliminationAlgo.AUTOMATIC) -> int:
    """Number of nonzero rows of the echelon form."""
    tmp = mat.copy()
    echelon_form(tmp, algo, tmp.cols)
    entries = tmp._m
    for i in range(len(entries) - 1, -1, -1):
        if not is_zero(normal(entries[i])):
            return 1 + i // tmp.cols
    return 0
