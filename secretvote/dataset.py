"""Loading of share documents.

A document looks like::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "16", "value": "MUL(a, 3)"}
    }

Every entry other than `keys` is a share: its label is the x coordinate and
its value, written in `base`, decodes to the y coordinate.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from secretvote.errors import ParseError, ReconstructionError
from secretvote.expression import decode_share_value
from secretvote.share import Share

logger = logging.getLogger(__name__)


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ParseError(f"{what} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ParseError(f"{what} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class RawShare:
    x: int
    base: int
    value: str

    def decode(self: "RawShare") -> Share:
        try:
            return Share(self.x, decode_share_value(self.value, self.base))
        except ReconstructionError as err:
            err.share_x = self.x
            raise


@dataclass
class Dataset:
    n: int
    k: int
    shares: List[RawShare]
    warnings: List[str] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Dataset":
        if not isinstance(data, dict) or not isinstance(data.get("keys"), dict):
            raise ParseError("Document must be an object with a `keys` object")
        keys = data["keys"]
        n = _as_int(keys.get("n"), "keys.n")
        k = _as_int(keys.get("k"), "keys.k")
        shares = []
        for label, entry in data.items():
            if label == "keys":
                continue
            x = _as_int(label, "Share label")
            if not isinstance(entry, dict) or "base" not in entry or "value" not in entry:
                raise ParseError("Share needs a `base` and a `value`", share_x=x)
            try:
                base = _as_int(entry["base"], "Share base")
            except ParseError as err:
                err.share_x = x
                raise
            shares.append(RawShare(x=x, base=base, value=str(entry["value"])))

        dataset = Dataset(n=n, k=k, shares=shares)
        if len(shares) != n:
            dataset.warnings.append(f"provided n={n} but parsed {len(shares)} points.")
        if k < 2:
            dataset.warnings.append(f"k={k} is degenerate, any single share votes.")
        for warning in dataset.warnings:
            logger.warning(warning)
        return dataset

    @staticmethod
    def from_json(raw: str) -> "Dataset":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as err:
            raise ParseError(f"Invalid JSON document: {err}") from err
        return Dataset.from_dict(data)

    @staticmethod
    def load(location: Path) -> "Dataset":
        try:
            with location.open(encoding="utf-8") as fd:
                raw = fd.read()
        except UnicodeDecodeError as err:
            raise ParseError(f"{location} is not valid utf-8: {err}") from err
        return Dataset.from_json(raw)

    def points(self: "Dataset") -> List[Share]:
        return [share.decode() for share in self.shares]
