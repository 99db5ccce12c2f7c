"""Characteristic polynomial det(A - lambda*1)."""

import sympy
from sympy import S

from .determinant import determinant
from .errors import DimensionError
from .expr import expand, is_numeric, to_expr


def charpoly(mat, lam):
    """
    Characteristic polynomial of ``mat`` in ``lam``, collected in powers of lam.

    Defined as det(A - lam*1), so for odd dimension it differs in sign from
    the det(lam*1 - A) convention. Purely numeric matrices use Leverrier's
    recursion, which needs n matrix products instead of a symbolic
    determinant.
    """
    if mat.rows != mat.cols:
        raise DimensionError("charpoly(): matrix not square", operation="charpoly", shapes=(mat.shape,))
    lam = to_expr(lam)
    n = mat.rows
    if n == 0:
        return S.One

    if all(is_numeric(e) for e in mat._m):
        B = mat.copy()
        c = B.trace()
        poly = lam**n - c * lam**(n - 1)
        for i in range(1, n):
            B._ensure_modifiable()
            for j in range(n):
                B._m[j * n + j] -= c
            B = mat.mul(B)
            c = B.trace() / (i + 1)
            poly -= c * lam**(n - i - 1)
        if n % 2:
            return -poly
        return poly

    M = mat.copy()
    M._ensure_modifiable()
    for r in range(n):
        M._m[r * n + r] -= lam
    return sympy.collect(expand(determinant(M)), lam)
