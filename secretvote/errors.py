"""Error kinds raised while decoding shares and reconstructing a secret.

Every failure is a subclass of `ReconstructionError` and exposes its `kind`.
Shares that disagree with the reconstructed polynomial are not errors: they
are reported in the result.
"""
from enum import Enum
from typing import Optional, Tuple


class ErrorKind(Enum):
    DIVISION_BY_ZERO = "DivisionByZero"
    NON_EXACT_DIVISION = "NonExactDivision"
    NON_INTEGER_VALUE = "NonIntegerValue"
    PARSE_ERROR = "ParseError"
    INSUFFICIENT_SHARES = "InsufficientShares"
    NO_CONSENSUS = "NoConsensus"
    INVALID_THRESHOLD = "InvalidThreshold"


class ReconstructionError(Exception):
    kind: ErrorKind

    def __init__(
        self: "ReconstructionError",
        message: str,
        share_x: Optional[int] = None,
        subset: Optional[Tuple[int, ...]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.share_x = share_x
        self.subset = subset

    def __reduce__(self: "ReconstructionError"):
        return (type(self), (self.message, self.share_x, self.subset))

    def __str__(self: "ReconstructionError") -> str:
        context = []
        if self.share_x is not None:
            context.append(f"share x={self.share_x}")
        if self.subset is not None:
            context.append(f"subset {list(self.subset)}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class DivisionByZero(ReconstructionError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class NonExactDivision(ReconstructionError, ArithmeticError):
    kind = ErrorKind.NON_EXACT_DIVISION


class NonIntegerValue(ReconstructionError, ValueError):
    kind = ErrorKind.NON_INTEGER_VALUE


class ParseError(ReconstructionError, ValueError):
    kind = ErrorKind.PARSE_ERROR


class InsufficientShares(ReconstructionError):
    kind = ErrorKind.INSUFFICIENT_SHARES


class NoConsensus(ReconstructionError):
    kind = ErrorKind.NO_CONSENSUS


class InvalidThreshold(ReconstructionError, ValueError):
    kind = ErrorKind.INVALID_THRESHOLD
