"""Dense symbolic matrix: storage, element access and arithmetic.

Entries are sympy expressions kept in a flat row-major list. The heavy
algorithms (elimination, determinant, solve, charpoly) live in their own
modules and operate on the internals exposed here.
"""

import functools
import operator

import sympy
from sympy import S

from .errors import (
    ArgumentError,
    DimensionError,
    MatrixIndexError,
    UnsupportedExponentError,
)
from .expr import expand, is_rational_function, is_zero, normal, subs, to_expr


@functools.total_ordering
class Matrix:
    """
    r x c matrix of sympy expressions.

    Matrix(r, c)            zero matrix
    Matrix(r, c, flat)      filled row-major from ``flat``; extra elements are
                            dropped, missing ones stay zero
    Matrix([[a, b], [c, d]]) from a rectangular nested list

    Copies share their backing list until one of them is written to.
    """

    __hash__ = None

    def __init__(self, *args):
        if len(args) == 1:
            rows, cols, data = self._from_nested(args[0])
        elif len(args) in (2, 3):
            rows, cols = _dimension(args[0]), _dimension(args[1])
            data = [S.Zero] * (rows * cols)
            if len(args) == 3:
                for i, e in enumerate(args[2]):
                    if i >= rows * cols:
                        break
                    data[i] = to_expr(e)
        else:
            raise ArgumentError("Matrix() takes a nested list, or rows, cols and an optional flat list")
        self._rows = rows
        self._cols = cols
        self._m = data
        self._shared = False

    @staticmethod
    def _from_nested(nested):
        if isinstance(nested, Matrix):
            return nested._rows, nested._cols, list(nested._m)
        rows = list(nested)
        if not rows:
            return 0, 0, []
        data = []
        cols = None
        for i, row in enumerate(rows):
            if not isinstance(row, (list, tuple)):
                raise ArgumentError(f"Matrix(): row {i} is not a list")
            if cols is None:
                cols = len(row)
            elif len(row) != cols:
                raise DimensionError(
                    f"Matrix(): row {i} has {len(row)} entries, expected {cols}",
                    operation="construct",
                )
            data.extend(to_expr(e) for e in row)
        return len(rows), cols, data

    @classmethod
    def _new(cls, rows, cols, data):
        """Wrap an already converted flat list without copying it."""
        obj = cls.__new__(cls)
        obj._rows = rows
        obj._cols = cols
        obj._m = data
        obj._shared = False
        return obj

    @classmethod
    def identity(cls, n):
        m = [S.Zero] * (n * n)
        for i in range(n):
            m[i * n + i] = S.One
        return cls._new(n, n, m)

    # ── storage ──────────────────────────────────────────

    def _ensure_modifiable(self):
        """Give this matrix a private backing list before an in-place write."""
        if self._shared:
            self._m = list(self._m)
            self._shared = False

    def copy(self):
        other = Matrix._new(self._rows, self._cols, self._m)
        other._shared = self._shared = True
        return other

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple:
        return self._rows, self._cols

    def nops(self) -> int:
        return self._rows * self._cols

    def tolist(self) -> list:
        c = self._cols
        return [self._m[r * c:(r + 1) * c] for r in range(self._rows)]

    def _flat_index(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise MatrixIndexError(f"expected (row, col), got {key!r}", index=key, shape=self.shape)
            r, c = operator.index(key[0]), operator.index(key[1])
            if not (0 <= r < self._rows and 0 <= c < self._cols):
                raise MatrixIndexError(
                    f"index ({r}, {c}) out of range for {self._rows}x{self._cols} matrix",
                    index=key, shape=self.shape,
                )
            return r * self._cols + c
        i = operator.index(key)
        if not 0 <= i < len(self._m):
            raise MatrixIndexError(
                f"flat index {i} out of range for {self._rows}x{self._cols} matrix",
                index=key, shape=self.shape,
            )
        return i

    def __getitem__(self, key):
        return self._m[self._flat_index(key)]

    def __setitem__(self, key, value):
        i = self._flat_index(key)
        self._ensure_modifiable()
        self._m[i] = to_expr(value)

    def __reduce__(self):
        # rows, cols, then the row-major entries
        return Matrix, (self._rows, self._cols, list(self._m))

    # ── arithmetic ───────────────────────────────────────

    def _check_same_shape(self, other, operation):
        if not isinstance(other, Matrix):
            raise ArgumentError(f"{operation}(): expected a Matrix, got {type(other).__name__}")
        if self.shape != other.shape:
            raise DimensionError(
                f"{operation}(): incompatible matrices {self._rows}x{self._cols} and {other._rows}x{other._cols}",
                operation=operation, shapes=(self.shape, other.shape),
            )

    def add(self, other):
        self._check_same_shape(other, "add")
        return Matrix._new(self._rows, self._cols, [a + b for a, b in zip(self._m, other._m)])

    def sub(self, other):
        self._check_same_shape(other, "sub")
        return Matrix._new(self._rows, self._cols, [a - b for a, b in zip(self._m, other._m)])

    def mul(self, other):
        """Matrix product, or scalar product when ``other`` is not a Matrix."""
        if not isinstance(other, Matrix):
            return self.mul_scalar(other)
        if self._cols != other._rows:
            raise DimensionError(
                f"mul(): incompatible matrices {self._rows}x{self._cols} and {other._rows}x{other._cols}",
                operation="mul", shapes=(self.shape, other.shape),
            )
        n, oc = self._cols, other._cols
        m, om = self._m, other._m
        prod = [S.Zero] * (self._rows * oc)
        for r1 in range(self._rows):
            for c in range(n):
                a = m[r1 * n + c]
                if is_zero(a):
                    continue
                for r2 in range(oc):
                    prod[r1 * oc + r2] += a * om[c * oc + r2]
        return Matrix._new(self._rows, oc, prod)

    def mul_scalar(self, other):
        other = to_expr(other)
        if not other.is_commutative:
            raise ArgumentError("mul_scalar(): non-commutative scalar")
        return Matrix._new(self._rows, self._cols, [e * other for e in self._m])

    def pow(self, expn):
        """A**n by binary exponentiation; negative n goes through the inverse."""
        if self._rows != self._cols:
            raise DimensionError("pow(): matrix not square", operation="pow", shapes=(self.shape,))
        b = _integer_exponent(expn)
        if b < 0:
            b = -b
            A = self.inverse()
        else:
            A = self
        C = Matrix.identity(self._rows)
        if b == 0:
            return C
        # base-2 digits of b from right to left
        while b != 1:
            if b % 2:
                C = C.mul(A)
                b -= 1
            b //= 2
            A = A.mul(A)
        return A.mul(C)

    def transpose(self):
        r, c = self._rows, self._cols
        trans = [S.Zero] * (r * c)
        for i in range(c):
            for j in range(r):
                trans[i * r + j] = self._m[j * c + i]
        return Matrix._new(c, r, trans)

    @property
    def T(self):
        return self.transpose()

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other):
        return self.mul(other)

    def __rmul__(self, other):
        return self.mul_scalar(other)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.mul(other)

    def __neg__(self):
        return self.mul_scalar(S.NegativeOne)

    def __pow__(self, expn):
        return self.pow(expn)

    # ── elementwise ──────────────────────────────────────

    def _map_if_changed(self, fn):
        changed = None
        for i, e in enumerate(self._m):
            x = fn(e)
            if changed is not None:
                changed.append(x)
                continue
            if x is e or x == e:
                continue
            changed = self._m[:i]
            changed.append(x)
        if changed is None:
            return self.copy()
        return Matrix._new(self._rows, self._cols, changed)

    def conjugate(self):
        return self._map_if_changed(sympy.conjugate)

    def real_part(self):
        return self._map_if_changed(sympy.re)

    def imag_part(self):
        return self._map_if_changed(sympy.im)

    def subs(self, *args, **kwargs):
        return Matrix._new(self._rows, self._cols, [subs(e, *args, **kwargs) for e in self._m])

    def is_zero_matrix(self) -> bool:
        return all(is_zero(e) for e in self._m)

    def trace(self):
        """Sum of the diagonal, normalized for rational functions and expanded otherwise."""
        if self._rows != self._cols:
            raise DimensionError("trace(): matrix not square", operation="trace", shapes=(self.shape,))
        tr = sympy.Add(*[self._m[r * self._cols + r] for r in range(self._rows)])
        if is_rational_function(tr):
            return normal(tr)
        return expand(tr)

    # ── comparison ───────────────────────────────────────

    def compare(self, other) -> int:
        """Lexicographic: rows, then cols, then entries in row-major order."""
        if self._rows != other._rows:
            return -1 if self._rows < other._rows else 1
        if self._cols != other._cols:
            return -1 if self._cols < other._cols else 1
        for a, b in zip(self._m, other._m):
            cmpval = a.compare(b)
            if cmpval != 0:
                return cmpval
        return 0

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.compare(other) < 0

    # ── derived operations ───────────────────────────────

    def determinant(self, algo="automatic"):
        from .determinant import determinant
        return determinant(self, algo)

    def charpoly(self, lam):
        from .charpoly import charpoly
        return charpoly(self, lam)

    def solve(self, vars, rhs, algo="automatic"):
        from .solve import solve
        return solve(self, _as_matrix(vars), _as_matrix(rhs), algo)

    def inverse(self, algo="automatic"):
        from .solve import inverse
        return inverse(self, algo)

    def rank(self, algo="automatic") -> int:
        from .solve import rank
        return rank(self, algo)

    # ── printing ─────────────────────────────────────────

    def __str__(self):
        return "[" + ",".join("[" + ",".join(str(e) for e in row) + "]" for row in self.tolist()) + "]"

    def __repr__(self):
        return f"Matrix({self.tolist()!r})"


def _dimension(value):
    n = operator.index(value)
    if n < 0:
        raise ArgumentError(f"matrix dimension must be non-negative, got {n}")
    return n


def _integer_exponent(expn):
    if isinstance(expn, int):
        return expn
    if isinstance(expn, sympy.Basic) and expn.is_Integer:
        return int(expn)
    raise UnsupportedExponentError(f"pow(): don't know how to handle exponent {expn!r}", exponent=expn)


def _as_matrix(value):
    if isinstance(value, Matrix):
        return value
    return Matrix(value)
