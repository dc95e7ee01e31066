"""Exact rational numbers over python's arbitrary precision integers.

A `Rational` is always stored reduced, with a strictly positive denominator,
so two values are equal exactly when their numerators and denominators are.
That makes them safe to use as dictionary keys when tallying votes.
"""
import functools
from math import gcd
from typing import Union

from secretvote.errors import DivisionByZero, NonIntegerValue

RationalLike = Union["Rational", int]


@functools.total_ordering
class Rational:
    __slots__ = ("_numerator", "_denominator")

    def __init__(self: "Rational", numerator: int, denominator: int = 1) -> None:
        if denominator == 0:
            raise DivisionByZero(f"Division by zero in fraction {numerator}/0")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        divisor = gcd(numerator, denominator)
        if divisor != 1:
            numerator //= divisor
            denominator //= divisor
        self._numerator = numerator
        self._denominator = denominator

    @classmethod
    def of(cls, value: RationalLike) -> "Rational":
        if isinstance(value, Rational):
            return value
        return cls(value)

    @property
    def numerator(self: "Rational") -> int:
        return self._numerator

    @property
    def denominator(self: "Rational") -> int:
        return self._denominator

    def is_integer(self: "Rational") -> bool:
        return self._denominator == 1

    def to_exact_int(self: "Rational") -> int:
        if not self.is_integer():
            raise NonIntegerValue(f"Non-integer result where integer expected: {self}")
        return self._numerator

    def __add__(self: "Rational", other: RationalLike) -> "Rational":
        other = Rational.of(other)
        return Rational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    __radd__ = __add__

    def __sub__(self: "Rational", other: RationalLike) -> "Rational":
        other = Rational.of(other)
        return Rational(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def __rsub__(self: "Rational", other: int) -> "Rational":
        return Rational.of(other) - self

    def __mul__(self: "Rational", other: RationalLike) -> "Rational":
        other = Rational.of(other)
        return Rational(
            self._numerator * other._numerator, self._denominator * other._denominator
        )

    __rmul__ = __mul__

    def __truediv__(self: "Rational", other: RationalLike) -> "Rational":
        other = Rational.of(other)
        if other._numerator == 0:
            raise DivisionByZero(f"Division of {self} by zero")
        return Rational(
            self._numerator * other._denominator, self._denominator * other._numerator
        )

    def __rtruediv__(self: "Rational", other: int) -> "Rational":
        return Rational.of(other) / self

    def __neg__(self: "Rational") -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def __eq__(self: "Rational", other: object) -> bool:
        if isinstance(other, int):
            return self._denominator == 1 and self._numerator == other
        if not isinstance(other, Rational):
            return NotImplemented
        return (
            self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def __lt__(self: "Rational", other: RationalLike) -> bool:
        if not isinstance(other, (Rational, int)):
            return NotImplemented
        other = Rational.of(other)
        return (
            self._numerator * other._denominator < other._numerator * self._denominator
        )

    def __hash__(self: "Rational") -> int:
        # Integral values hash like the matching int, as they compare equal.
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __reduce__(self: "Rational"):
        return (Rational, (self._numerator, self._denominator))

    def __repr__(self: "Rational") -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self: "Rational") -> str:
        if self.is_integer():
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"


ZERO = Rational(0)
ONE = Rational(1)
