import json

import pytest

from secretvote.dataset import Dataset, RawShare
from secretvote.errors import NonExactDivision, ParseError
from secretvote.share import Share


def _document(**shares):
    doc = {"keys": {"n": len(shares), "k": 2}}
    doc.update({label.lstrip("_"): share for label, share in shares.items()})
    return doc


def test_load(tmp_path):
    location = tmp_path / "shares.json"
    location.write_text(
        json.dumps(
            {
                "keys": {"n": 4, "k": 2},
                "1": {"base": "10", "value": "3"},
                "2": {"base": "2", "value": "101"},
                "3": {"base": 10, "value": "ADD(3, 4)"},
                "4": {"base": "16", "value": "64"},
            }
        )
    )
    dataset = Dataset.load(location)
    assert dataset.n == 4
    assert dataset.k == 2
    assert dataset.warnings == []
    assert dataset.shares[2] == RawShare(x=3, base=10, value="ADD(3, 4)")
    assert dataset.points() == [Share(1, 3), Share(2, 5), Share(3, 7), Share(4, 100)]


def test_declared_n_mismatch_is_a_warning(caplog):
    doc = _document(_1={"base": "10", "value": "1"}, _2={"base": "10", "value": "2"})
    doc["keys"]["n"] = 5
    dataset = Dataset.from_dict(doc)
    assert len(dataset.shares) == 2
    assert dataset.warnings == ["provided n=5 but parsed 2 points."]
    assert "provided n=5" in caplog.text


def test_decode_errors_name_the_share():
    dataset = Dataset.from_dict(_document(_7={"base": "10", "value": "DIV(10,4)"}))
    with pytest.raises(NonExactDivision) as err:
        dataset.points()
    assert err.value.share_x == 7


@pytest.mark.parametrize(
    ("raw",),
    [
        ("not json",),
        ("[]",),
        ('{"1": {"base": "10", "value": "1"}}',),
        ('{"keys": {"n": "two", "k": 2}}',),
        ('{"keys": {"n": 1, "k": 2}, "x": {"base": "10", "value": "1"}}',),
        ('{"keys": {"n": 1, "k": 2}, "1": {"value": "1"}}',),
        ('{"keys": {"n": 1, "k": 2}, "1": {"base": "ten", "value": "1"}}',),
    ],
)
def test_bad_documents(raw):
    with pytest.raises(ParseError):
        Dataset.from_json(raw)
