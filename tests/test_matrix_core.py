"""Unit tests for the Matrix container and the constructors.

Run:  uv run python -m tests.test_matrix_core
"""

import pickle
import sys
if sys.stdout.encoding and sys.stdout.encoding.lower() != "utf-8":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")

import sympy
from sympy import I, Rational, symbols

from symmat import (
    ArgumentError,
    DimensionError,
    Matrix,
    MatrixIndexError,
    UnsupportedExponentError,
    diag_matrix,
    from_ragged,
    reduced_matrix,
    sub_matrix,
    symbolic_matrix,
    unit_matrix,
)

TOTAL = 0
PASSED = 0

a, b, x = symbols("a b x")


def check(label, actual, expected):
    global TOTAL, PASSED
    TOTAL += 1
    ok = actual == expected
    PASSED += ok
    print(f"  {'[PASS]' if ok else '[FAIL]'}  {label}")
    if not ok:
        print(f"         Expected {expected!r}")
        print(f"         Got      {actual!r}")
    assert ok, label


def raises(label, exc, fn, *args):
    try:
        fn(*args)
    except exc:
        check(label, True, True)
    else:
        check(label, f"no {exc.__name__}", exc.__name__)


# ── Construction ───────────────────────────────────────

def test_construction():
    print("\n--- construction -----------------------------------------")
    A = Matrix([[1, 2], [3, 4]])
    check("shape",               A.shape,                          (2, 2))
    check("row/col access",      A[1, 0],                          3)
    check("flat access",         A[3],                             4)
    check("entries are sympy",   isinstance(A[0, 0], sympy.Integer), True)
    check("zero matrix",         Matrix(2, 3).is_zero_matrix(),    True)
    check("zero matrix shape",   Matrix(2, 3).shape,               (2, 3))
    check("short flat list",     Matrix(2, 2, [1, 2, 3]).tolist(), [[1, 2], [3, 0]])
    check("long flat list",      Matrix(1, 2, [1, 2, 3]).tolist(), [[1, 2]])
    check("string entries",      Matrix([["a", "1/2"]]).tolist(),  [[a, Rational(1, 2)]])
    raises("ragged rows",        DimensionError, Matrix, [[1, 2], [3]])
    raises("row not a list",     ArgumentError, Matrix, [1, 2])
    raises("negative dimension", ArgumentError, Matrix, -1, 2)


def test_access():
    print("\n--- element access ---------------------------------------")
    A = Matrix([[1, 2], [3, 4]])
    raises("row out of range",   MatrixIndexError, lambda: A[2, 0])
    raises("flat out of range",  MatrixIndexError, lambda: A[4])
    raises("is an IndexError",   IndexError, lambda: A[0, 5])

    B = A.copy()
    B[0, 0] = x
    check("copy on write",       A[0, 0],                          1)
    check("copy written",        B[0, 0],                          x)
    C = A.copy()
    check("copies compare equal", C == A,                          True)


# ── Arithmetic ─────────────────────────────────────────

def test_arithmetic():
    print("\n--- arithmetic -------------------------------------------")
    A = Matrix([[1, 2], [3, 4]])
    B = Matrix([[5, 6], [7, 8]])
    check("add",                 (A + B).tolist(),                 [[6, 8], [10, 12]])
    check("sub",                 (B - A).tolist(),                 [[4, 4], [4, 4]])
    check("mul",                 (A * B).tolist(),                 [[19, 22], [43, 50]])
    check("matmul operator",     (A @ B) == A.mul(B),              True)
    check("scalar left",         (2 * A).tolist(),                 [[2, 4], [6, 8]])
    check("scalar symbol",       (A * x).tolist(),                 [[x, 2 * x], [3 * x, 4 * x]])
    check("negation",            (-A).tolist(),                    [[-1, -2], [-3, -4]])
    check("rectangular mul",     (Matrix([[1, 2, 3]]) * Matrix([[1], [1], [1]])).tolist(), [[6]])
    raises("mul shape mismatch", DimensionError, A.mul, Matrix([[1, 2, 3]]))
    raises("add shape mismatch", DimensionError, A.add, Matrix([[1, 2]]))

    check("transpose",           Matrix([[1, 2, 3]]).T.tolist(),   [[1], [2], [3]])
    T = Matrix([[a, 1, x], [2, b, 0]])
    check("transpose twice",     T.T.T,                            T)
    check("trace",               Matrix([[a, 1], [2, b]]).trace(), a + b)
    R = Matrix([[x / (x - 1), 0], [0, -1 / (x - 1)]])
    check("trace normalized",    R.trace(),                        1)
    raises("trace not square",   DimensionError, Matrix([[1, 2]]).trace)


def test_power():
    print("\n--- power ------------------------------------------------")
    A = Matrix([[1, 2], [3, 4]])
    check("square",              (A ** 2).tolist(),                [[7, 10], [15, 22]])
    check("zeroth power",        A.pow(0),                         unit_matrix(2))
    check("scalar matrix cubed", Matrix([[2, 0], [0, 2]]).pow(3).tolist(), [[8, 0], [0, 8]])
    check("odd power",           A.pow(5),                         A * A * A * A * A)
    check("negative power",      A.pow(-1).tolist(),               [[-2, 1], [Rational(3, 2), Rational(-1, 2)]])
    check("sympy integer",       A.pow(sympy.Integer(2)),          A * A)
    raises("rational exponent",  UnsupportedExponentError, A.pow, Rational(1, 2))
    raises("symbolic exponent",  UnsupportedExponentError, A.pow, x)
    raises("power not square",   DimensionError, Matrix([[1, 2]]).pow, 2)


# ── Elementwise / comparison / printing ────────────────

def test_elementwise():
    print("\n--- elementwise ------------------------------------------")
    Z = Matrix([[1 + 2 * I, 3]])
    check("real part",           Z.real_part().tolist(),           [[1, 3]])
    check("imag part",           Z.imag_part().tolist(),           [[2, 0]])
    check("conjugate",           Z.conjugate().tolist(),           [[1 - 2 * I, 3]])
    check("conjugate unchanged", Matrix([[1, 2]]).conjugate() == Matrix([[1, 2]]), True)
    P = Matrix([[1, 2], [3, 4]])
    check("conjugate shares",    P.conjugate()._m is P._m,         True)
    check("real part shares",    P.real_part()._m is P._m,         True)
    check("imag part allocates", P.imag_part()._m is P._m,         False)
    check("conjugate complex",   Z.conjugate()._m is Z._m,         False)
    check("subs",                Matrix([[a, a * b]]).subs(a, 2).tolist(), [[2, 2 * b]])


def test_comparison():
    print("\n--- comparison -------------------------------------------")
    check("equal",               Matrix([[1, 2]]) == Matrix([[1, 2]]), True)
    check("not equal",           Matrix([[1, 2]]) != Matrix([[1, 3]]), True)
    check("fewer rows first",    Matrix(1, 3) < Matrix(2, 1),      True)
    check("fewer cols first",    Matrix(2, 1) < Matrix(2, 2),      True)
    check("compare self",        Matrix([[a]]).compare(Matrix([[a]])), 0)
    check("str",                 str(Matrix([[1, 2], [3, 4]])),    "[[1,2],[3,4]]")
    check("repr",                repr(Matrix([[1]])),              "Matrix([[1]])")
    A = Matrix([[a, 1], [Rational(1, 3), x ** 2]])
    check("pickle",              pickle.loads(pickle.dumps(A)),    A)


# ── Constructors ───────────────────────────────────────

def test_constructors():
    print("\n--- constructors -----------------------------------------")
    check("unit square",         unit_matrix(2).tolist(),          [[1, 0], [0, 1]])
    check("unit rectangular",    unit_matrix(2, 3).tolist(),       [[1, 0, 0], [0, 1, 0]])
    check("diag",                diag_matrix([1, a]).tolist(),     [[1, 0], [0, a]])
    check("symbolic names",      symbolic_matrix(2, 2, "A")[0, 1], sympy.Symbol("A01"))
    check("symbolic long names", symbolic_matrix(11, 2, "B")[10, 1], sympy.Symbol("B_10_1"))
    check("symbolic row vector", symbolic_matrix(1, 3, "v")[0, 2], sympy.Symbol("v2"))
    check("symbolic col vector", symbolic_matrix(3, 1, "w")[2, 0], sympy.Symbol("w2"))
    check("ragged padded",       from_ragged([[1], [2, 3]]).tolist(), [[1, 0], [2, 3]])
    raises("ragged non list",    ArgumentError, from_ragged, [1, 2])

    M = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    check("reduced",             reduced_matrix(M, 1, 1).tolist(), [[1, 3], [7, 9]])
    check("reduced corner",      reduced_matrix(M, 0, 2).tolist(), [[4, 5], [7, 8]])
    raises("reduced bounds",     MatrixIndexError, reduced_matrix, M, 3, 0)
    raises("reduced too small",  MatrixIndexError, reduced_matrix, Matrix([[1, 2]]), 0, 0)
    check("sub block",           sub_matrix(M, 1, 2, 0, 2).tolist(), [[4, 5], [7, 8]])
    raises("sub bounds",         MatrixIndexError, sub_matrix, M, 2, 2, 0, 1)


# ── Main ───────────────────────────────────────────────

if __name__ == "__main__":
    print("=" * 52)
    print("  symmat -- Matrix core tests")
    print("=" * 52)

    for test in (test_construction, test_access, test_arithmetic, test_power,
                 test_elementwise, test_comparison, test_constructors):
        try:
            test()
        except AssertionError:
            pass

    print("\n" + "=" * 52)
    print(f"  {PASSED}/{TOTAL} passed")
    if PASSED == TOTAL:
        print("  All tests passed!")
    else:
        print(f"  {TOTAL - PASSED} test(s) FAILED.")
    print("=" * 52)
