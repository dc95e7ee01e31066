from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple, Union

from secretvote.arith.rational import Rational

Polynomial = Tuple[Rational, ...]
Combination = Tuple[int, ...]


class Share(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class WrongShare:
    x: int
    # Exact value of the polynomial at x, kept as a Rational when not integral.
    expected: Union[int, Rational]
    provided: int

    def __str__(self: "WrongShare") -> str:
        return f"x={self.x}: expected={self.expected}, got={self.provided}"


@dataclass
class Reconstruction:
    secret: int
    wrong_shares: List[WrongShare]
    coefficients: Polynomial = ()
    witness: Combination = ()
    votes: int = 0
    subsets: int = 0
    invalid_subsets: List[Combination] = field(default_factory=list)
