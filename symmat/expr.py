"""Expression contract, bound to SymPy.

The matrix engine never looks inside an entry directly; it only calls the
helpers below. Entries are plain sympy.Expr objects.
"""

import sympy
from sympy import S, Dummy


def to_expr(value):
    """Coerce a Python value (int, Fraction, str, Expr) into an Expr."""
    if isinstance(value, sympy.Basic):
        return value
    return sympy.sympify(value)


def is_zero(e) -> bool:
    """Exact zero test: true only for a numeric zero, never for an unsimplified one."""
    return bool(e.is_Number and e.is_zero)


def is_numeric(e) -> bool:
    """True for numbers: rationals, floats and complex numbers built from them."""
    if e.is_Number or e is S.ImaginaryUnit:
        return True
    if e.is_number and (e.is_Add or e.is_Mul):
        return all(is_numeric(a) for a in e.args)
    return False


def expand(e):
    return sympy.expand(e)


def normal(e):
    """Canonical rational form p/q with p, q expanded and coprime."""
    if e.is_Number:
        return e
    return sympy.cancel(e)


def to_rational(e, repl):
    """
    Replace every subexpression that is not a rational polynomial operation
    (functions, symbolic or fractional powers, constants like pi) by a fresh
    Dummy, recording the replacement in ``repl``.

    The same subexpression always maps to the same Dummy within one ``repl``,
    so substituting back with ``e.xreplace(repl)`` restores the original.
    """
    if e.is_Symbol or e.is_Number or e is S.ImaginaryUnit:
        return e
    if e.is_Add or e.is_Mul:
        return e.func(*[to_rational(a, repl) for a in e.args])
    if e.is_Pow and e.exp.is_Integer:
        return sympy.Pow(to_rational(e.base, repl), e.exp)
    for k, v in repl.items():
        if v == e:
            return k
    d = Dummy()
    repl[d] = e
    return d


def numer_denom(e, repl):
    """Normalized numerator and denominator of ``e`` after rationalization."""
    return sympy.fraction(normal(to_rational(e, repl)))


def is_rational_function(e) -> bool:
    """True for a rational function that is not a polynomial, e.g. x/(x-1)."""
    r = to_rational(e, {})
    if r.is_Number:
        return False
    return bool(r.is_rational_function() and not r.is_polynomial())


def exact_quotient(a, b):
    """Quotient of ``a`` by ``b`` when ``b`` is known to divide ``a``."""
    if b is S.One:
        return a
    return normal(a / b)


def subs(e, *args, **kwargs):
    """Substitute into ``e``; accepts the same arguments as ``Basic.subs``."""
    return e.subs(*args, **kwargs)
