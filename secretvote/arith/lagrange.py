"""Exact Lagrange interpolation over the rationals.

Unlike the usual Shamir recovery, nothing here is reduced modulo a prime:
every basis polynomial is computed with `Rational` arithmetic so that
different subsets of shares agree exactly when they describe the same
polynomial.
https://en.wikipedia.org/wiki/Lagrange_polynomial
"""
from typing import Sequence, Tuple

from secretvote.arith.rational import ONE, ZERO, Rational, RationalLike
from secretvote.errors import DivisionByZero
from secretvote.share import Polynomial


def _product(vals) -> int:
    accum = 1
    for v in vals:
        accum *= v
    return accum


def _basis_denominator(x_s: Sequence[int], i: int) -> int:
    den = _product(x_s[i] - x_j for j, x_j in enumerate(x_s) if j != i)
    if den == 0:
        raise DivisionByZero(f"Duplicate x value {x_s[i]} in subset")
    return den


def evaluate_at_zero(subset: Sequence[Tuple[int, int]]) -> Rational:
    """Value at x=0 of the polynomial going through every point of `subset`,
    without building the polynomial itself.
    """
    x_s = [x for x, _ in subset]
    total = ZERO
    for i, (_, y) in enumerate(subset):
        num = _product(-x_j for j, x_j in enumerate(x_s) if j != i)
        total += Rational(y * num, _basis_denominator(x_s, i))
    return total


def poly_mul(a: Polynomial, b: Polynomial) -> Polynomial:
    res = [ZERO] * (len(a) + len(b) - 1)
    for i, a_i in enumerate(a):
        for j, b_j in enumerate(b):
            res[i + j] += a_i * b_j
    return tuple(res)


def poly_add(a: Polynomial, b: Polynomial) -> Polynomial:
    size = max(len(a), len(b))
    a = tuple(a) + (ZERO,) * (size - len(a))
    b = tuple(b) + (ZERO,) * (size - len(b))
    return tuple(a_i + b_i for a_i, b_i in zip(a, b))


def poly_scale(p: Polynomial, s: RationalLike) -> Polynomial:
    return tuple(c * s for c in p)


def eval_at(coeffs: Polynomial, x: int) -> Rational:
    """Evaluates the polynomial (coefficient tuple, lowest degree first) at x."""
    accum = ZERO
    for coeff in reversed(coeffs):
        accum = accum * x + coeff
    return accum


def reconstruct_polynomial(subset: Sequence[Tuple[int, int]]) -> Polynomial:
    """Coefficients of the unique polynomial of degree < len(subset) going
    through every point of `subset`. Index i holds the coefficient of x^i.
    """
    x_s = [x for x, _ in subset]
    coeffs: Polynomial = (ZERO,) * len(subset)
    for i, (_, y) in enumerate(subset):
        basis: Polynomial = (ONE,)
        for j, x_j in enumerate(x_s):
            if j != i:
                basis = poly_mul(basis, (Rational(-x_j), ONE))
        scale = Rational(y, _basis_denominator(x_s, i))
        coeffs = poly_add(coeffs, poly_scale(basis, scale))
    return coeffs
