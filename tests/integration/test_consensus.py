from collections import Counter

import pytest

from secretvote import reconstruct
from secretvote.arith.rational import Rational
from secretvote.config import ReconstructionCfg
from secretvote.consensus import elect, index_combinations, tally
from secretvote.errors import (
    InsufficientShares,
    InvalidThreshold,
    NoConsensus,
    NonIntegerValue,
    ParseError,
)
from secretvote.share import Share, WrongShare


def test_index_combinations():
    assert list(index_combinations(4, 2)) == [
        (0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)
    ]
    assert list(index_combinations(3, 3)) == [(0, 1, 2)]
    # Every call starts over.
    assert list(index_combinations(3, 1)) == list(index_combinations(3, 1))


def test_collinear_shares():
    result = reconstruct([(1, 3), (2, 5), (3, 7)], 2)
    assert result.secret == 1
    assert result.wrong_shares == []
    assert result.votes == result.subsets == 3
    assert result.witness == (0, 1)


def test_one_corrupted_share():
    shares = [(1, 3), (2, 5), (3, 7), (4, 100)]
    votes, invalid = tally([Share(*s) for s in shares], 2)
    assert votes == Counter(
        {Rational(1): 3, Rational(-88, 3): 1, Rational(-90): 1, Rational(-272): 1}
    )
    assert invalid == []

    result = reconstruct(shares, 2)
    assert result.secret == 1
    assert result.wrong_shares == [WrongShare(x=4, expected=9, provided=100)]
    assert result.coefficients == (1, 2)
    assert result.witness == (0, 1)


def test_two_corrupted_shares_on_a_quadratic():
    # f(x) = 1000 + 20x + 3x^2, x=2 and x=6 are corrupted.
    shares = [(1, 1023), (2, 1053), (3, 1087), (4, 1128), (5, 1175), (6, 9999), (7, 1287)]
    result = reconstruct(shares, 3)
    assert result.secret == 1000
    assert result.coefficients == (1000, 20, 3)
    assert result.votes == 10
    assert result.subsets == 35
    assert result.witness == (0, 2, 3)
    assert result.wrong_shares == [
        WrongShare(x=2, expected=1052, provided=1053),
        WrongShare(x=6, expected=1228, provided=9999),
    ]


def test_big_integers():
    secret = 2 ** 255 - 19
    coeffs = [secret, 3 ** 80, 7 ** 60]
    shares = [(x, sum(c * x ** i for i, c in enumerate(coeffs))) for x in range(1, 7)]
    shares[4] = (shares[4][0], shares[4][1] + 1)
    result = reconstruct(shares, 3)
    assert result.secret == secret
    assert [wrong.x for wrong in result.wrong_shares] == [5]


def test_tie_goes_to_the_first_value_produced():
    # Every pair gives a different value, (1, 1) and (2, 2) come first.
    result = reconstruct([(1, 1), (2, 2), (3, 10), (4, 11)], 2)
    assert result.secret == 0
    assert result.votes == 1
    assert result.witness == (0, 1)
    assert [wrong.x for wrong in result.wrong_shares] == [3, 4]


def test_elect():
    a, b = Rational(1, 2), Rational(7)
    assert elect(Counter([a, b, b, a])) == (a, 2)
    assert elect(Counter([b, a, a])) == (a, 2)
    with pytest.raises(NoConsensus):
        elect(Counter())


def test_non_integral_expected_value():
    result = reconstruct([(2, 1), (4, 2), (3, 5)], 2)
    assert result.secret == 0
    assert result.wrong_shares == [WrongShare(x=3, expected=Rational(3, 2), provided=5)]


def test_duplicate_x_subsets_are_skipped():
    result = reconstruct([(1, 3), (1, 4), (2, 5), (3, 7)], 2)
    assert result.secret == 1
    assert result.invalid_subsets == [(0, 1)]
    assert result.witness == (0, 2)
    assert result.subsets == 6
    assert result.wrong_shares == [WrongShare(x=1, expected=3, provided=4)]


def test_no_valid_subset():
    with pytest.raises(NoConsensus):
        reconstruct([(1, 2), (1, 3)], 2)


def test_non_integer_secret():
    with pytest.raises(NonIntegerValue) as err:
        reconstruct([(1, 1), (3, 2)], 2)
    assert err.value.subset == (0, 1)


def test_insufficient_shares():
    with pytest.raises(InsufficientShares):
        reconstruct([(1, 3), (2, 5)], 3)
    with pytest.raises(InsufficientShares):
        reconstruct([], 2)


def test_invalid_threshold():
    with pytest.raises(InvalidThreshold):
        reconstruct([(1, 3)], 0)


def test_idempotent():
    shares = [(1, 1), (2, 2), (3, 10), (4, 11), (5, 5)]
    assert reconstruct(shares, 2) == reconstruct(shares, 2)


def test_parallel_tally_matches_sequential():
    shares = [Share(x, 5 + 2 * x - x * x) for x in range(1, 9)]
    shares[3] = Share(4, 0)
    shares[6] = Share(7, 1)
    sequential = tally(shares, 3)
    parallel = tally(shares, 3, ReconstructionCfg(workers=2, chunk_size=5))
    assert list(parallel[0].items()) == list(sequential[0].items())
    assert parallel[1] == sequential[1]

    result = reconstruct(shares, 3, ReconstructionCfg(workers=2, chunk_size=7))
    assert result == reconstruct(shares, 3)
    assert result.secret == 5
    assert [wrong.x for wrong in result.wrong_shares] == [4, 7]


@pytest.mark.parametrize(
    ("shares",),
    [([(1, 3.7), (2, 5)],), ([(1.0, 3), (2, 5)],), ([(1, "3"), (2, 5)],), ([(True, 3), (2, 5)],)],
)
def test_coordinates_must_be_integers(shares):
    with pytest.raises(ParseError):
        reconstruct(shares, 2)
