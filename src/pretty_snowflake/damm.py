"""Damm check digit over the decimal digits of a string.

Characters other than ASCII ``0``-``9`` are skipped, so a delimited numeral
carries the same check digit as the bare one.  Any single digit substitution
and any swap of two adjacent digits in a valid string makes it invalid.
"""

from __future__ import annotations

from .exceptions import InvalidIdError

__all__ = ["MATRIX", "checksum", "decode", "encode", "is_valid"]


# Weakly totally anti-symmetric quasigroup of order 10.
MATRIX: tuple[tuple[int, ...], ...] = (
    (0, 3, 1, 7, 5, 9, 8, 6, 4, 2),
    (7, 0, 9, 2, 1, 5, 4, 8, 6, 3),
    (4, 2, 0, 6, 8, 7, 1, 3, 5, 9),
    (1, 7, 5, 0, 9, 8, 3, 4, 2, 6),
    (6, 1, 2, 3, 0, 4, 5, 9, 7, 8),
    (3, 6, 7, 4, 2, 0, 9, 5, 8, 1),
    (5, 8, 6, 9, 7, 2, 0, 1, 3, 4),
    (8, 9, 4, 5, 3, 6, 2, 0, 1, 7),
    (9, 4, 3, 8, 6, 1, 7, 2, 0, 5),
    (2, 5, 8, 1, 4, 3, 6, 7, 9, 0),
)


def checksum(rep: str) -> int:
    """Fold the digits of ``rep`` through :data:`MATRIX` starting from 0."""

    interim = 0
    for char in rep:
        if "0" <= char <= "9":
            interim = MATRIX[interim][ord(char) - 48]
    return interim


def encode(rep: str) -> str:
    """Append the check digit to ``rep``."""

    return f"{rep}{checksum(rep)}"


def is_valid(rep: str) -> bool:
    return checksum(rep) == 0


def decode(rep: str) -> str:
    """Return ``rep`` without its check digit, raising if the digit does not hold."""

    if not rep or not is_valid(rep):
        raise InvalidIdError(rep)
    return rep[:-1]
