"""Corruption tolerant secret reconstruction.

Every k-subset of the shares defines a candidate polynomial. Honest shares
all lie on the same polynomial, so the value at x=0 produced by the most
subsets is taken as the secret. The polynomial is then rebuilt from the
first subset producing that value and every share is checked against it.
"""
import logging
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from itertools import combinations, islice, repeat
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from secretvote.arith.lagrange import eval_at, evaluate_at_zero, reconstruct_polynomial
from secretvote.arith.rational import Rational
from secretvote.config import ReconstructionCfg
from secretvote.errors import (
    DivisionByZero,
    InsufficientShares,
    InvalidThreshold,
    NoConsensus,
    NonIntegerValue,
    ParseError,
)
from secretvote.share import Combination, Reconstruction, Share, WrongShare

logger = logging.getLogger(__name__)

Tally = Tuple["Counter[Rational]", List[Combination]]


def index_combinations(n: int, k: int) -> Iterator[Combination]:
    """All k-combinations of range(n) in lexicographic order.

    A new generator is returned on every call, so each pass starts over.
    """
    return combinations(range(n), k)


def _subset(shares: Sequence[Share], combination: Combination) -> List[Share]:
    return [shares[idx] for idx in combination]


def _tally_chunk(shares: Sequence[Share], chunk: Iterable[Combination]) -> Tally:
    votes: "Counter[Rational]" = Counter()
    invalid: List[Combination] = []
    for combination in chunk:
        try:
            votes[evaluate_at_zero(_subset(shares, combination))] += 1
        except DivisionByZero:
            invalid.append(combination)
    return votes, invalid


def _chunks(
    combos: Iterator[Combination], size: int
) -> Iterator[List[Combination]]:
    while chunk := list(islice(combos, size)):
        yield chunk


def tally(
    shares: Sequence[Share], k: int, cfg: Optional[ReconstructionCfg] = None
) -> Tally:
    """Counts how many k-subsets produce each value at x=0.

    The counter keeps values in the order they were first produced, partial
    tallies from worker processes are merged in enumeration order.
    """
    cfg = cfg or ReconstructionCfg()
    combos = index_combinations(len(shares), k)
    if not cfg.parallel:
        return _tally_chunk(shares, combos)
    votes: "Counter[Rational]" = Counter()
    invalid: List[Combination] = []
    chunks = _chunks(combos, cfg.chunk_size)
    with ProcessPoolExecutor(max_workers=cfg.workers) as executor:
        partials = executor.map(_tally_chunk, repeat(shares), chunks)
        for chunk_votes, chunk_invalid in partials:
            votes.update(chunk_votes)
            invalid.extend(chunk_invalid)
    return votes, invalid


def elect(votes: "Counter[Rational]") -> Tuple[Rational, int]:
    """Value with the most votes, the first one produced wins a tie."""
    best: Optional[Rational] = None
    best_count = 0
    for value, count in votes.items():
        if count > best_count:
            best, best_count = value, count
    if best is None:
        raise NoConsensus("Could not determine the secret: no valid subset")
    return best, best_count


def find_witness(shares: Sequence[Share], k: int, value: Rational) -> Combination:
    """First k-subset, in enumeration order, whose value at x=0 is `value`."""
    for combination in index_combinations(len(shares), k):
        try:
            if evaluate_at_zero(_subset(shares, combination)) == value:
                return combination
        except DivisionByZero:
            continue
    raise NoConsensus(f"No subset matched the winning value {value}")


def check_shares(
    shares: Sequence[Share], coefficients: Sequence[Rational]
) -> List[WrongShare]:
    wrong = []
    for share in shares:
        value = eval_at(tuple(coefficients), share.x)
        if not value.is_integer() or value.to_exact_int() != share.y:
            expected = value.to_exact_int() if value.is_integer() else value
            wrong.append(WrongShare(x=share.x, expected=expected, provided=share.y))
    return wrong


def _as_share(x: int, y: int) -> Share:
    for value in (x, y):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ParseError(f"Share coordinates must be integers, got {value!r}")
    return Share(x, y)


def reconstruct(
    shares: Sequence[Tuple[int, int]],
    k: int,
    cfg: Optional[ReconstructionCfg] = None,
) -> Reconstruction:
    """Recovers the secret by majority vote over every k-subset of `shares`
    and lists the shares that disagree with the elected polynomial.
    """
    points = [_as_share(x, y) for x, y in shares]
    if k < 1:
        raise InvalidThreshold(f"Subset size must be at least 1, got {k}")
    if k > len(points):
        raise InsufficientShares(
            f"Not enough shares to reconstruct ({len(points)} < {k})."
        )

    votes, invalid = tally(points, k, cfg)
    for combination in invalid:
        logger.warning("Skipping subset %s: duplicate x values", list(combination))
    logger.debug("Tally over %d subsets: %s", sum(votes.values()), dict(votes))

    total = sum(votes.values()) + len(invalid)
    value, count = elect(votes)
    witness = find_witness(points, k, value)
    logger.info(
        "Elected f(0)=%s with %d/%d votes, witness subset %s",
        value,
        count,
        total,
        list(witness),
    )

    coefficients = reconstruct_polynomial(_subset(points, witness))
    try:
        secret = coefficients[0].to_exact_int()
    except NonIntegerValue as err:
        err.subset = witness
        raise

    wrong_shares = check_shares(points, coefficients)
    for wrong in wrong_shares:
        logger.info("Wrong share %s", wrong)
    return Reconstruction(
        secret=secret,
        wrong_shares=wrong_shares,
        coefficients=coefficients,
        witness=witness,
        votes=count,
        subsets=total,
        invalid_subsets=invalid,
    )
