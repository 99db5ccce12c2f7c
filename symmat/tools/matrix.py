"""Matrix tool: determinant, inverse, rank, transpose, multiply, add, subtract,
trace, charpoly, solve, power, echelon on exact symbolic matrices.
"""

import logging

import sympy

from symmat import DeterminantAlgo, EliminationAlgo, Matrix, charpoly, determinant, echelon_form, inverse, rank, solve
from symmat.errors import ArgumentError
from symmat.tools.preprocess import parse_entry

logger = logging.getLogger(__name__)

OPERATIONS = {
    "determinant", "inverse", "rank", "transpose", "multiply", "add", "subtract",
    "trace", "charpoly", "solve", "power", "echelon",
}

ALGORITHMS = {
    "determinant": {a.value for a in DeterminantAlgo},
    "elimination": {a.value for a in EliminationAlgo},
}

DEFAULT_VARIABLE = "lambda"
MAX_POWER = 64


def matrix_tool(matrix: list[list], operation: str = "determinant",
                matrix_b: list[list] = None, algorithm: str = "automatic",
                exponent: int = 2, variable: str = DEFAULT_VARIABLE) -> dict:
    """All-in-one exact matrix tool.

    Use for symbolic or rational matrix math. Operations: determinant, inverse, rank,
    transpose, multiply, add, subtract, trace, charpoly, solve (Ax=b), power, echelon.
    Pass matrix as [[row1],[row2]]; entries may be numbers or strings like "a/(a-b)".
    algorithm picks the method for determinant (automatic, gauss, bareiss, divfree,
    laplace) or elimination (automatic, gauss, divfree, bareiss, markowitz).
    """
    try:
        A = _parse_matrix(matrix)

        if operation == "determinant":
            algo = _algorithm("determinant", algorithm)
            return {"result": str(determinant(A, algo)), "algorithm": algorithm, "verified": True}

        elif operation == "inverse":
            algo = _algorithm("elimination", algorithm)
            return {"result": _mat_to_list(inverse(A, algo)), "verified": True}

        elif operation == "rank":
            algo = _algorithm("elimination", algorithm)
            return {"rank": rank(A, algo), "shape": list(A.shape), "verified": True}

        elif operation == "transpose":
            return {"result": _mat_to_list(A.T), "verified": True}

        elif operation in ("multiply", "add", "subtract"):
            if matrix_b is None:
                return {"error": f"{operation} requires matrix_b"}
            B = _parse_matrix(matrix_b)
            if operation == "multiply":
                result = A.mul(B)
            elif operation == "add":
                result = A.add(B)
            else:
                result = A.sub(B)
            return {"result": _mat_to_list(result), "verified": True}

        elif operation == "trace":
            return {"result": str(A.trace()), "verified": True}

        elif operation == "charpoly":
            lam = sympy.Symbol(variable)
            return {"charpoly": str(charpoly(A, lam)), "variable": variable, "verified": True}

        elif operation == "solve":
            if matrix_b is None:
                return {"error": "solve (Ax=b) requires matrix_b as the b vector/matrix"}
            b = _parse_matrix(matrix_b)
            algo = _algorithm("elimination", algorithm)
            names = _unknown_names(A.cols, A, b)
            unknowns = Matrix(A.cols, b.cols,
                              [sympy.Symbol(name) for name in names for _ in range(b.cols)])
            x = solve(A, unknowns, b, algo)
            return {"result": _mat_to_list(x), "unknowns": names, "verified": True}

        elif operation == "power":
            # non-integer exponents are rejected by pow()
            if isinstance(exponent, int) and abs(exponent) > MAX_POWER:
                return {"error": f"|exponent| must be at most {MAX_POWER}", "operation": operation}
            return {"result": _mat_to_list(A.pow(exponent)), "verified": True}

        elif operation == "echelon":
            algo = _algorithm("elimination", algorithm)
            tmp = A.copy()
            res = echelon_form(tmp, algo)
            return {"result": _mat_to_list(tmp), "sign": res.sign, "colid": list(res.colid), "verified": True}

        else:
            return {"error": f"Unknown operation '{operation}'. Use: {', '.join(sorted(OPERATIONS))}"}

    except Exception as e:
        logger.debug("matrix_tool %s failed: %s", operation, e)
        return {"error": str(e), "operation": operation}


def _algorithm(kind, name):
    if str(name).strip().lower() not in ALGORITHMS[kind]:
        raise ArgumentError(f"Unknown {kind} algorithm '{name}'. Use: {', '.join(sorted(ALGORITHMS[kind]))}")
    if kind == "determinant":
        return DeterminantAlgo.coerce(name)
    return EliminationAlgo.coerce(name)


def _unknown_names(n, *matrices):
    """Names x0..x{n-1}, with underscores added to the prefix until none clash with the input."""
    taken = {str(s) for m in matrices for e in m.tolist() for v in e for s in v.free_symbols}
    prefix = "x"
    while any(f"{prefix}{i}" in taken for i in range(n)):
        prefix += "_"
    return [f"{prefix}{i}" for i in range(n)]


def _parse_matrix(data):
    rows = []
    for row in data:
        rows.append([parse_entry(x) for x in row])
    return Matrix(rows)


def _mat_to_list(m):
    return [[str(m[i, j]) for j in range(m.cols)] for i in range(m.rows)]
