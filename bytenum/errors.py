"""Exception types for `bytenum`.

Each subclasses the builtin a caller would already catch for the same
mistake on a plain `int`. Other argument errors stay plain `ValueError` /
`TypeError`.
"""

from __future__ import annotations


class DivisionByZeroError(ZeroDivisionError):
    """Raised when dividing (or taking a remainder) by a zero-valued divisor."""

    def __init__(self, message: str = "division by zero") -> None:
        super().__init__(message)


class InvalidDigitError(ValueError):
    """Raised when a decimal string contains a character that is not a digit."""

    def __init__(self, text: str, position: int) -> None:
        self.text = text
        self.position = position
        if position >= len(text):
            detail = "no digits"
        else:
            detail = f"invalid digit {text[position]!r} at position {position}"
        super().__init__(f"cannot parse {text!r} as a decimal integer: {detail}")


class NegativeSquareRootError(ValueError):
    """Raised by ``sqrt()`` on a negative value when the policy is ``"raise"``."""
