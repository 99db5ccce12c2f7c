"""Convenience builders for common matrices."""

from sympy import S, Symbol

from .errors import ArgumentError, MatrixIndexError
from .expr import to_expr
from .matrix import Matrix


def unit_matrix(r, c=None) -> Matrix:
    """r x c matrix with ones on the diagonal (square when c is omitted)."""
    if c is None:
        c = r
    m = Matrix(r, c)
    for i in range(min(r, c)):
        m._m[i * c + i] = S.One
    return m


def diag_matrix(entries) -> Matrix:
    entries = [to_expr(e) for e in entries]
    n = len(entries)
    m = Matrix(n, n)
    for i, e in enumerate(entries):
        m._m[i * n + i] = e
    return m


def symbolic_matrix(r, c, base_name) -> Matrix:
    """
    Matrix of fresh symbols: ``A01`` style names, ``A_0_1`` once a dimension
    exceeds 10, and ``A0, A1, ...`` for row and column vectors.
    """
    long_format = r > 10 or c > 10
    single_row = r == 1 or c == 1
    m = Matrix(r, c)
    for i in range(r):
        for j in range(c):
            if single_row:
                name = f"{base_name}{i if c == 1 else j}"
            elif long_format:
                name = f"{base_name}_{i}_{j}"
            else:
                name = f"{base_name}{i}{j}"
            m._m[i * c + j] = Symbol(name)
    return m


def from_ragged(rows) -> Matrix:
    """Matrix from a list of lists of possibly different lengths, zero padded."""
    rows = list(rows)
    for i, row in enumerate(rows):
        if not isinstance(row, (list, tuple)):
            raise ArgumentError(f"from_ragged(): item {i} is not a list")
    ncols = max((len(row) for row in rows), default=0)
    m = Matrix(len(rows), ncols)
    for i, row in enumerate(rows):
        for j, e in enumerate(row):
            m._m[i * ncols + j] = to_expr(e)
    return m


def reduced_matrix(mat, r, c) -> Matrix:
    """The minor matrix: ``mat`` without row r and column c."""
    if r + 1 > mat.rows or c + 1 > mat.cols or mat.rows < 2 or mat.cols < 2:
        raise MatrixIndexError("reduced_matrix(): index out of bounds", index=(r, c), shape=mat.shape)
    data = [mat._m[ro * mat.cols + co]
            for ro in range(mat.rows) if ro != r
            for co in range(mat.cols) if co != c]
    return Matrix._new(mat.rows - 1, mat.cols - 1, data)


def sub_matrix(mat, r, nr, c, nc) -> Matrix:
    """The nr x nc block of ``mat`` whose top left corner is (r, c)."""
    if r < 0 or c < 0 or r + nr > mat.rows or c + nc > mat.cols:
        raise MatrixIndexError("sub_matrix(): index out of bounds", index=(r, c), shape=mat.shape)
    data = [mat._m[(ro + r) * mat.cols + co + c] for ro in range(nr) for co in range(nc)]
    return Matrix._new(nr, nc, data)
