"""Determinants: algorithm dispatch and memoized Laplace expansion."""

import itertools
import logging

import sympy
from sympy import S
from sympy.combinatorics import Permutation

from .elimination import division_free_elimination, fraction_free_elimination, gauss_elimination
from .errors import DimensionError
from .expr import expand, is_zero, normal
from .heuristics import DeterminantAlgo, choose_determinant_algo, determinant_stats

logger = logging.getLogger(__name__)


def determinant(mat, algo=DeterminantAlgo.AUTOMATIC):
    """
    Determinant of a square matrix.

    If every entry lives in an integral domain (polynomials, numbers) the
    result is only expanded. If some entry is a genuine rational function the
    result is normalized, so det([[a/(a-b), 1], [b/(a-b), 1]]) comes back as 1.
    """
    algo = DeterminantAlgo.coerce(algo)
    if mat.rows != mat.cols:
        raise DimensionError("determinant(): matrix not square", operation="determinant", shapes=(mat.shape,))
    n = mat.rows
    if n == 0:
        return S.One

    stats = determinant_stats(mat)
    if algo is DeterminantAlgo.AUTOMATIC:
        algo = choose_determinant_algo(stats)
        logger.debug("determinant of %dx%d (%d nonzero, numeric=%s): %s",
                     n, n, stats.nonzero, stats.all_numeric, algo.value)
    finish = normal if stats.rational_function else expand

    # trivial case, some algorithms don't like it
    if n == 1:
        return finish(mat[0])

    if algo is DeterminantAlgo.GAUSS:
        tmp = mat.copy()
        sign = gauss_elimination(tmp, det=True)
        if sign == 0:
            return S.Zero
        det = sympy.Mul(*[tmp[d, d] for d in range(n)])
        if stats.rational_function:
            return normal(sign * det)
        return expand(normal(sign * det))

    if algo is DeterminantAlgo.BAREISS:
        tmp = mat.copy()
        sign = fraction_free_elimination(tmp, det=True)
        if sign == 0:
            return S.Zero
        return finish(sign * tmp[n - 1, n - 1])

    if algo is DeterminantAlgo.DIVISION_FREE:
        tmp = mat.copy()
        sign = division_free_elimination(tmp, det=True)
        if sign == 0:
            return S.Zero
        det = tmp[n - 1, n - 1]
        # factor out the pivot powers picked up along the way
        for d in range(n - 2):
            for _ in range(n - d - 2):
                det = normal(det / tmp[d, d])
        return sign * det

    return _laplace(mat, stats.rational_function)


def _laplace(mat, rational_function):
    """
    Minor expansion with the emptiest columns moved to the right.

    Expanding from the right, the trivial 1x1 minors come from the sparsest
    columns, which empirically is the cheap order.
    """
    n = mat.cols
    m = mat._m
    c_zeros = sorted((sum(1 for r in range(n) if is_zero(m[r * n + c])), c) for c in range(n))
    pre_sort = [c for _, c in c_zeros]
    sign = Permutation(pre_sort).signature()
    result = [m[r * n + c] for r in range(n) for c in pre_sort]
    det = sign * determinant_minor(result, n)
    if rational_function:
        return normal(det)
    return det


def determinant_minor(m, n):
    """
    Laplace expansion of the n x n row-major entries ``m``, memoizing minors.

    Naive expansion computes every k x k minor (n-k)! times. Here we sweep
    the columns from right to left; the minors for column c are keyed by the
    sorted tuple of rows they span and built from the minors of column c+1,
    so only two generations (at most 2*binomial(n, n/2) minors) are alive.
    Zero minors are not stored.
    """
    M = {(): S.One}
    det = S.Zero
    for c in range(n - 1, -1, -1):
        N = {}
        for key in itertools.combinations(range(n), n - c):
            terms = []
            for r, row in enumerate(key):
                e = m[row * n + c]
                if is_zero(e):
                    continue
                sub = M.get(key[:r] + key[r + 1:])
                if sub is None:
                    continue
                terms.append(-e * sub if r % 2 else e * sub)
            # keep minors expanded, nested products get expensive
            det = expand(sympy.Add(*terms))
            if not is_zero(det):
                N[key] = det
        if not N:
            logger.debug("laplace: all minors of column %d vanish", c)
            return S.Zero
        logger.debug("laplace: column %d keeps %d nonzero minors", c, len(N))
        M = N
    return det
