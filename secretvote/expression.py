"""Decoding of share values.

A share value is either a bare literal written in the share's base, or a
nested call of the arithmetic functions below, e.g. `ADD(1a, MUL(2, ff))`
in base 16. Every literal of an expression is read in the same base.
"""
from enum import Enum
from string import ascii_lowercase, digits
from typing import Callable, List

from secretvote.errors import DivisionByZero, NonExactDivision, ParseError

_DIGITS = digits + ascii_lowercase
MAX_DEPTH = 200


def _exact_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero(f"DIV({a}, {b}) divides by zero")
    quot, rem = divmod(a, b)
    if rem != 0:
        raise NonExactDivision(f"DIV({a}, {b}) is not an exact division")
    return quot


class Function(Enum):
    ADD = (2, lambda a, b: a + b)
    SUB = (2, lambda a, b: a - b)
    MUL = (2, lambda a, b: a * b)
    DIV = (2, _exact_div)

    def __init__(self: "Function", arity: int, impl: Callable[..., int]) -> None:
        self.arity = arity
        self.impl = impl

    @staticmethod
    def lookup(name: str) -> "Function":
        try:
            return Function[name.upper()]
        except KeyError:
            raise ParseError(f"Unknown function: {name}") from None

    def apply(self: "Function", args: List[int]) -> int:
        if len(args) != self.arity:
            raise ParseError(
                f"{self.name} expects {self.arity} args, got {len(args)}"
            )
        return self.impl(*args)


def _check_base(base: int) -> None:
    if not 2 <= base <= 36:
        raise ParseError(f"Base must be between 2 and 36, got {base}")


def parse_literal(literal: str, base: int) -> int:
    """Reads an unsigned run of alphanumeric digits in `base`."""
    _check_base(base)
    if not literal:
        raise ParseError("Number expected, got an empty string")
    value = 0
    for char in literal:
        digit = _DIGITS.find(char.lower())
        if digit < 0 or digit >= base:
            raise ParseError(f"Bad number '{literal}' for base {base}")
        value = value * base + digit
    return value


class _Parser:
    """Recursive descent over `expr := NAME '(' expr (',' expr)* ')' | NUMBER`."""

    def __init__(self: "_Parser", text: str, base: int) -> None:
        self.text = text.strip()
        self.base = base
        self.pos = 0
        self.depth = 0

    def parse(self: "_Parser") -> int:
        value = self._expr()
        self._skip()
        if self.pos != len(self.text):
            raise ParseError(
                f"Trailing characters in value at {self.pos}: {self.text[self.pos:]!r}"
            )
        return value

    def _skip(self: "_Parser") -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _accept(self: "_Parser", char: str) -> bool:
        self._skip()
        if self.text.startswith(char, self.pos):
            self.pos += 1
            return True
        return False

    def _expect(self: "_Parser", char: str) -> None:
        if not self._accept(char):
            raise ParseError(f"Expected '{char}' at {self.pos} in {self.text!r}")

    def _token(self: "_Parser") -> str:
        self._skip()
        start = self.pos
        # Underscores only belong to function names.
        ident = start < len(self.text) and self.text[start].isalpha()
        while self.pos < len(self.text) and (
            self.text[self.pos].isalnum() or (ident and self.text[self.pos] == "_")
        ):
            self.pos += 1
        if start == self.pos:
            raise ParseError(
                f"Number or function expected at {self.pos} in {self.text!r}"
            )
        return self.text[start : self.pos]

    def _expr(self: "_Parser") -> int:
        token = self._token()
        if token[0].isalpha() and self._accept("("):
            function = Function.lookup(token)
            self.depth += 1
            if self.depth > MAX_DEPTH:
                raise ParseError(f"Expression nested too deeply (over {MAX_DEPTH} calls)")
            args = [self._expr()]
            while self._accept(","):
                args.append(self._expr())
            self._expect(")")
            self.depth -= 1
            return function.apply(args)
        return parse_literal(token, self.base)


def evaluate(text: str, base: int) -> int:
    """Evaluates an arithmetic expression whose literals are written in `base`."""
    _check_base(base)
    return _Parser(text, base).parse()


def looks_like_call(value: str) -> bool:
    paren = value.find("(")
    return paren > 0 and value[0].isalpha() and value.endswith(")")


def decode_share_value(raw: str, base: int) -> int:
    """Decodes a share value, either a function call expression or a literal
    (optionally signed) written in `base`.
    """
    value = raw.strip()
    if looks_like_call(value):
        return evaluate(value, base)
    sign = 1
    if value[:1] in ("-", "+"):
        sign = -1 if value[0] == "-" else 1
        value = value[1:]
    return sign * parse_literal(value, base)
