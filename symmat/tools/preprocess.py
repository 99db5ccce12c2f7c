"""Entry parser for matrices given as text.

Handles:  ^ → **,  2x → 2*x,  (x+1)(x-1) → (x+1)*(x-1)
Also:     infinity/inf → oo  (word-boundary safe)
All via SymPy's standard_transformations + implicit_multiplication + convert_xor.
"""

import re

import sympy
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from symmat.errors import ArgumentError

_TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    convert_xor,
)

# Word-boundary safe: matches standalone infinity/inf/+inf/-inf but NOT "information"
_INF_RE = re.compile(r'(?<![a-zA-Z])([+-]?\s*)(infinity|inf)(?![a-zA-Z])', re.IGNORECASE)

_BLOCKED = {name: None for name in (
    "exec", "eval", "__import__", "open", "compile",
    "globals", "locals", "getattr", "setattr", "delattr",
    "breakpoint", "exit", "quit", "input", "print",
)}


def _inf_replace(m):
    sign = m.group(1).replace(" ", "")
    return f"{sign}oo"


def parse_entry(value):
    """Turn one matrix entry (number, sympy object or string) into an expression.

    Strings go through SymPy's parser with implicit multiplication and ^ → **.
    A restricted local_dict blocks dangerous builtins. Raises ArgumentError
    for text that does not parse.
    """
    if isinstance(value, sympy.Basic):
        return value
    if isinstance(value, bool) or value is None:
        raise ArgumentError(f"not a matrix entry: {value!r}")
    if not isinstance(value, str):
        return sympy.sympify(value)

    s = _INF_RE.sub(_inf_replace, value.strip())
    if not s:
        raise ArgumentError("empty matrix entry")
    try:
        return parse_expr(s, local_dict=dict(_BLOCKED), transformations=_TRANSFORMATIONS)
    except Exception as e:
        raise ArgumentError(f"cannot parse matrix entry {value!r}: {e}") from e
