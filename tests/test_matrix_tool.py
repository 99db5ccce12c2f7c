"""Unit tests for the MCP matrix tool and its entry parser.

Run:  uv run python -m tests.test_matrix_tool
"""

import sys
if sys.stdout.encoding and sys.stdout.encoding.lower() != "utf-8":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")

import sympy

from symmat.errors import ArgumentError
from symmat.tools.matrix import matrix_tool
from symmat.tools.preprocess import parse_entry

TOTAL = 0
PASSED = 0


def check(label, result, key, expected):
    global TOTAL, PASSED
    TOTAL += 1
    actual = result.get(key)
    ok = actual == expected
    PASSED += ok
    print(f"  {'[PASS]' if ok else '[FAIL]'}  {label}")
    if not ok:
        print(f"         Expected {key}={expected!r}")
        print(f"         Got      {key}={actual!r}")
    assert ok, label
    return ok


# ── Matrix tool ────────────────────────────────────────

def test_matrix_tool():
    print("\n--- matrix_tool ------------------------------------------")
    A = [[1, 2], [3, 4]]
    B = [[5, 6], [7, 8]]
    check("det",                 matrix_tool(A, "determinant"),                       "result", "-2")
    check("det laplace",         matrix_tool(A, "determinant", algorithm="laplace"),  "result", "-2")
    check("det bareiss",         matrix_tool(A, "determinant", algorithm="bareiss"),  "result", "-2")
    check("det rational fn",     matrix_tool([["a/(a-b)", 1], ["b/(a-b)", 1]]),       "result", "1")
    check("det 1x1 zero",        matrix_tool([[0]]),                                  "result", "0")
    check("inverse",             matrix_tool([[1, 1], [0, 1]], "inverse"),            "result", [["1", "-1"], ["0", "1"]])
    check("rank",                matrix_tool([[1, 2], [2, 4]], "rank"),               "rank", 1)
    check("rank markowitz",      matrix_tool(A, "rank", algorithm="markowitz"),       "rank", 2)
    check("rank 1x1 zero",       matrix_tool([[0]], "rank"),                          "rank", 0)
    check("transpose",           matrix_tool(A, "transpose"),                         "result", [["1", "3"], ["2", "4"]])
    check("multiply",            matrix_tool(A, "multiply", B),                       "result", [["19", "22"], ["43", "50"]])
    check("add",                 matrix_tool(A, "add", B),                            "result", [["6", "8"], ["10", "12"]])
    check("subtract",            matrix_tool(B, "subtract", A),                       "result", [["4", "4"], ["4", "4"]])
    check("trace",               matrix_tool(A, "trace"),                             "result", "5")
    check("charpoly",            matrix_tool(A, "charpoly"),                          "charpoly", "lambda**2 - 5*lambda - 2")
    check("charpoly variable",   matrix_tool(A, "charpoly", variable="t"),            "variable", "t")
    check("power",               matrix_tool([[2, 0], [0, 2]], "power", exponent=3),  "result", [["8", "0"], ["0", "8"]])
    check("power inverse",       matrix_tool([[1, 1], [0, 1]], "power", exponent=-1), "result", [["1", "-1"], ["0", "1"]])
    check("echelon sign",        matrix_tool([[0, 1], [1, 0]], "echelon", algorithm="gauss"), "sign", -1)
    check("echelon colid",       matrix_tool(A, "echelon"),                           "colid", [0, 1])

    r = matrix_tool([[1, 1], [2, 2]], "solve", [[2], [4]])
    x0, x1 = sympy.symbols("x0 x1")
    check("solve unknowns",      r,                                                   "unknowns", ["x0", "x1"])
    sol = [sympy.sympify(row[0]) for row in r["result"]]
    check("solve free param",    {"ok": sympy.expand(sol[0] - (2 - x1)) == 0 and sol[1] == x1}, "ok", True)
    check("solve unique",        matrix_tool([[2, 1], [1, 3]], "solve", [[3], [5]]),  "result", [["4/5"], ["7/5"]])

    clash = matrix_tool([["x0", 0], [0, 1]], "solve", [[1], [2]])
    check("solve renames unknowns", clash,                                             "unknowns", ["x_0", "x_1"])
    check("solve keeps entry symbol", clash,                                           "result", [["1/x0"], ["2"]])


def test_errors():
    print("\n--- matrix_tool errors -----------------------------------")
    A = [[1, 2], [3, 4]]
    check("unknown op",          {"has": "error" in matrix_tool(A, "eigenvalues")},   "has", True)
    check("bad algorithm",       {"has": "error" in matrix_tool(A, "determinant", algorithm="markowitz")}, "has", True)
    check("missing matrix_b",    matrix_tool(A, "multiply"),                          "error", "multiply requires matrix_b")
    check("singular",            matrix_tool([[1, 2], [2, 4]], "inverse"),            "operation", "inverse")
    check("inconsistent",        matrix_tool([[1, 1], [2, 2]], "solve", [[2], [5]]),  "operation", "solve")
    check("not square",          matrix_tool([[1, 2, 3]], "determinant"),             "operation", "determinant")
    check("shape mismatch",      matrix_tool(A, "add", [[1, 2, 3]]),                  "operation", "add")
    check("power too large",     {"has": "error" in matrix_tool(A, "power", exponent=1000)}, "has", True)
    check("power fractional",    matrix_tool(A, "power", exponent=2.5),               "operation", "power")
    check("bad entry",           matrix_tool([["(x+1"]], "determinant"),              "operation", "determinant")


# ── Entry parser ───────────────────────────────────────

def test_parse_entry():
    print("\n--- parse_entry ------------------------------------------")
    x, y = sympy.symbols("x y")
    check("integer",             {"v": parse_entry(3)},                               "v", sympy.Integer(3))
    check("fraction string",     {"v": parse_entry("1/3")},                           "v", sympy.Rational(1, 3))
    check("implicit multiply",   {"v": parse_entry("2x")},                            "v", 2 * x)
    check("caret power",         {"v": parse_entry("x^2")},                           "v", x ** 2)
    check("product of groups",   {"v": parse_entry("(x+1)(x-1)")},                    "v", (x + 1) * (x - 1))
    check("infinity",            {"v": parse_entry("inf")},                           "v", sympy.oo)
    check("sympy passthrough",   {"v": parse_entry(x + y)},                           "v", x + y)
    for label, bad in (("unbalanced", "(x+1"), ("empty", "  "), ("blocked builtin", "__import__('os')"),
                       ("boolean", True)):
        try:
            parse_entry(bad)
            ok = False
        except ArgumentError:
            ok = True
        check(f"rejects {label}", {"ok": ok}, "ok", True)


# ── Main ───────────────────────────────────────────────

if __name__ == "__main__":
    print("=" * 52)
    print("  symmat -- Matrix tool tests")
    print("=" * 52)

    for test in (test_matrix_tool, test_errors, test_parse_entry):
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
