"""Row-echelon elimination schemes.

All four algorithms reduce a Matrix in place. With ``det=True`` they may throw
away entries that a determinant does not need and return 0 as soon as a
column without a pivot shows up; the matrix is then left in an unusable
state. Otherwise the return value is the sign of the row permutation, or 0
when some column had no pivot.
"""

import enum
import logging
from typing import List, NamedTuple

from sympy import S

from .expr import exact_quotient, expand, is_numeric, is_zero, normal, numer_denom
from .heuristics import EliminationAlgo, resolve_elimination_algo

logger = logging.getLogger(__name__)


class PivotKind(enum.Enum):
    NO_SWAP = "no_swap"
    SWAPPED = "swapped"
    ALL_ZERO = "all_zero"


class PivotOutcome(NamedTuple):
    kind: PivotKind
    row: int


class EchelonResult(NamedTuple):
    sign: int
    colid: List[int]


def pivot(mat, ro, co, symbolic=True) -> PivotOutcome:
    """
    Find a pivot in column ``co`` at or below row ``ro`` and swap it up.

    symbolic=True takes the first entry that does not expand to zero;
    symbolic=False takes the numeric entry of largest absolute value and
    passes over entries that are not numbers.
    """
    rows, cols = mat.rows, mat.cols
    m = mat._m
    if symbolic:
        k = ro
        while k < rows and is_zero(expand(m[k * cols + co])):
            k += 1
    else:
        k = rows
        mmax = S.Zero
        for r in range(ro, rows):
            e = m[r * cols + co]
            if not is_numeric(e):
                continue
            v = abs(e)
            if bool(v > mmax):
                mmax = v
                k = r
    if k == rows:
        return PivotOutcome(PivotKind.ALL_ZERO, ro)
    if k == ro:
        return PivotOutcome(PivotKind.NO_SWAP, ro)
    mat._ensure_modifiable()
    m = mat._m
    for c in range(cols):
        m[k * cols + c], m[ro * cols + c] = m[ro * cols + c], m[k * cols + c]
    return PivotOutcome(PivotKind.SWAPPED, k)


def _clear_rows_below(m, first, rows, cols):
    for r in range(first, rows):
        for c in range(cols):
            m[r * cols + c] = S.Zero


def gauss_elimination(mat, det=False) -> int:
    """Ordinary Gaussian elimination; fine for numbers, poor for symbolic entries."""
    mat._ensure_modifiable()
    m = mat._m
    rows, n = mat.rows, mat.cols
    sign = 1
    r0 = 0
    for c0 in range(n):
        if r0 >= rows - 1:
            break
        symbolic = not all(is_numeric(m[r * n + c0]) for r in range(r0, rows))
        outcome = pivot(mat, r0, c0, symbolic)
        if outcome.kind is PivotKind.ALL_ZERO:
            sign = 0
            if det:
                return 0
            continue
        if outcome.kind is PivotKind.SWAPPED:
            sign = -sign
        p = m[r0 * n + c0]
        for r2 in range(r0 + 1, rows):
            if not is_zero(m[r2 * n + c0]):
                piv = m[r2 * n + c0] / p
                for c in range(c0 + 1, n):
                    v = m[r2 * n + c] - piv * m[r0 * n + c]
                    m[r2 * n + c] = v if is_numeric(v) else normal(v)
            # fill up left hand side with zeros
            for c in range(r0, c0 + 1):
                m[r2 * n + c] = S.Zero
        if det:
            for c in range(r0 + 1, n):
                m[r0 * n + c] = S.Zero
        r0 += 1
    _clear_rows_below(m, r0 + 1, rows, n)
    return sign


def division_free_elimination(mat, det=False) -> int:
    """Elimination by cross multiplication only; expressions grow fast."""
    mat._ensure_modifiable()
    m = mat._m
    rows, n = mat.rows, mat.cols
    sign = 1
    r0 = 0
    for c0 in range(n):
        if r0 >= rows - 1:
            break
        outcome = pivot(mat, r0, c0, True)
        if outcome.kind is PivotKind.ALL_ZERO:
            sign = 0
            if det:
                return 0
            continue
        if outcome.kind is PivotKind.SWAPPED:
            sign = -sign
        for r2 in range(r0 + 1, rows):
            for c in range(c0 + 1, n):
                m[r2 * n + c] = normal(m[r0 * n + c0] * m[r2 * n + c] - m[r2 * n + c0] * m[r0 * n + c])
            for c in range(r0, c0 + 1):
                m[r2 * n + c] = S.Zero
        if det:
            for c in range(r0 + 1, n):
                m[r0 * n + c] = S.Zero
        r0 += 1
    _clear_rows_below(m, r0 + 1, rows, n)
    return sign


def fraction_free_elimination(mat, det=False) -> int:
    """
    Bareiss' one-step fraction free elimination.

    The division-free step
        m'(r,c) = m(k,k)*m(r,c) - m(r,k)*m(k,c)
    is followed by an exact division by the previous pivot (Sylvester's
    identity guarantees it divides). Entries may be rational functions, so
    numerators and denominators are carried in two parallel lists:
        N' = N(k,k)*N(r,c)*D(r,k)*D(k,c) - N(r,k)*N(k,c)*D(k,k)*D(r,c)
        D' = D(k,k)*D(r,c)*D(r,k)*D(k,c)
    and N', D' are divided by the previous pivot's N and D respectively.
    Non-rational subexpressions are swapped for dummies first and restored
    at the end; zero tests restore them before expanding.
    """
    mat._ensure_modifiable()
    rows, n = mat.rows, mat.cols
    if rows <= 1:
        return 1
    srl = {}
    tmp_n = []
    tmp_d = []
    for e in mat._m:
        num, den = numer_denom(e, srl)
        tmp_n.append(num)
        tmp_d.append(den)

    divisor_n = S.One
    divisor_d = S.One
    sign = 1
    r0 = 0
    for c0 in range(n):
        if r0 >= rows - 1:
            break
        indx = r0
        while indx < rows and is_zero(expand(tmp_n[indx * n + c0].xreplace(srl))):
            indx += 1
        if indx == rows:
            sign = 0
            if det:
                return 0
            continue
        if indx > r0:
            sign = -sign
            for c in range(c0, n):
                a, b = indx * n + c, r0 * n + c
                tmp_n[a], tmp_n[b] = tmp_n[b], tmp_n[a]
                tmp_d[a], tmp_d[b] = tmp_d[b], tmp_d[a]
        k = r0 * n + c0
        for r2 in range(r0 + 1, rows):
            rk = r2 * n + c0
            for c in range(c0 + 1, n):
                kc, rc = r0 * n + c, r2 * n + c
                dividend_n = expand(tmp_n[k] * tmp_n[rc] * tmp_d[rk] * tmp_d[kc]
                                    - tmp_n[rk] * tmp_n[kc] * tmp_d[k] * tmp_d[rc])
                dividend_d = expand(tmp_d[rk] * tmp_d[kc] * tmp_d[k] * tmp_d[rc])
                tmp_n[rc] = exact_quotient(dividend_n, divisor_n)
                tmp_d[rc] = exact_quotient(dividend_d, divisor_d)
            for c in range(r0, c0 + 1):
                tmp_n[r2 * n + c] = S.Zero
        divisor_n = expand(tmp_n[k])
        divisor_d = expand(tmp_d[k])
        if det:
            for c in range(n):
                tmp_n[r0 * n + c] = S.Zero
                tmp_d[r0 * n + c] = S.One
        r0 += 1
    _clear_rows_below(tmp_n, r0 + 1, rows, n)

    mat._m[:] = [(num / den).xreplace(srl) for num, den in zip(tmp_n, tmp_d)]
    return sign


def markowitz_elimination(mat, n=None) -> EchelonResult:
    """
    Gaussian elimination with full pivoting restricted to the first ``n``
    columns, choosing the pivot that minimizes the Markowitz count
    (rowcnt-1)*(colcnt-1).

    Entries are kept normalized throughout, so plain zero tests are exact.
    ``colid[c]`` is the original index of the column now at position c
    (``colid[c] == c`` for c >= n).
    """
    mat._ensure_modifiable()
    m = mat._m
    rows, cols = mat.rows, mat.cols
    if n is None:
        n = cols
    rowcnt = [0] * rows
    colcnt = [0] * cols
    for r in range(rows):
        for c in range(cols):
            i = r * cols + c
            if is_zero(m[i]):
                continue
            m[i] = normal(m[i])
            if not is_zero(m[i]):
                rowcnt[r] += 1
                colcnt[c] += 1
    colid = list(range(cols))
    ab = [S.Zero] * rows
    sign = 1
    for k in range(min(cols, rows - 1)):
        pivot_r = pivot_c = None
        pivot_m = rows * cols
        for r in range(k, rows):
            for c in range(k, n):
                if is_zero(m[r * cols + c]):
                    continue
                measure = (rowcnt[r] - 1) * (colcnt[c] - 1)
                if measure < pivot_m:
                    pivot_m = measure
                    pivot_r, pivot_c = r, c
        if pivot_r is None:
            # the rest of the candidate block is zero
            logger.debug("markowitz: no pivot left at step %d of %dx%d", k, rows, cols)
            if k < n:
                sign = 0
            break
        if pivot_c != k:
            for r in range(rows):
                a, b = r * cols + pivot_c, r * cols + k
                m[a], m[b] = m[b], m[a]
            colid[pivot_c], colid[k] = colid[k], colid[pivot_c]
            colcnt[pivot_c], colcnt[k] = colcnt[k], colcnt[pivot_c]
            sign = -sign
        if pivot_r != k:
            for c in range(k, cols):
                a, b = pivot_r * cols + c, k * cols + c
                m[a], m[b] = m[b], m[a]
            rowcnt[pivot_r], rowcnt[k] = rowcnt[k], rowcnt[pivot_r]
            sign = -sign
        a = m[k * cols + k]
        for r in range(k + 1, rows):
            b = m[r * cols + k]
            if not is_zero(b):
                ab[r] = b / a
                rowcnt[r] -= 1
        colcnt[k] = rowcnt[k] = 0
        # pivot row outermost, to skip its zeros
        for c in range(k + 1, cols):
            mkc = m[k * cols + c]
            if is_zero(mkc):
                continue
            colcnt[c] -= 1
            for r in range(k + 1, rows):
                if is_zero(ab[r]):
                    continue
                i = r * cols + c
                waszero = is_zero(m[i])
                m[i] = normal(m[i] - ab[r] * mkc)
                iszero = is_zero(m[i])
                if waszero and not iszero:
                    rowcnt[r] += 1
                    colcnt[c] += 1
                elif iszero and not waszero:
                    rowcnt[r] -= 1
                    colcnt[c] -= 1
        for r in range(k + 1, rows):
            ab[r] = m[r * cols + k] = S.Zero
    return EchelonResult(sign, colid)


def echelon_form(mat, algo=EliminationAlgo.AUTOMATIC, n=None) -> EchelonResult:
    """
    Bring ``mat`` into upper echelon form in place.

    ``n`` bounds the columns Markowitz may pick pivots from, so that an
    augmented right hand side is never pivoted on. Returns the sign and the
    column permutation (the identity unless Markowitz ran).
    """
    if n is None:
        n = mat.cols
    algo = resolve_elimination_algo(mat, algo)
    if algo is EliminationAlgo.MARKOWITZ:
        return markowitz_elimination(mat, n)
    colid = list(range(mat.cols))
    if algo is EliminationAlgo.GAUSS:
        sign = gauss_elimination(mat)
    elif algo is EliminationAlgo.DIVISION_FREE:
        sign = division_free_elimination(mat)
    else:
        sign = fraction_free_elimination(mat)
    return EchelonResult(sign, colid)
