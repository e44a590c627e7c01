"""Positional numeral codec over an ordered symbol alphabet."""

from __future__ import annotations

from typing import Protocol

from .exceptions import InvalidCharacterError

__all__ = [
    "BASE_23",
    "Alphabet",
    "AlphabetCodec",
    "Codec",
]


class Codec(Protocol):
    def encode(self, number: int) -> str: ...

    def decode(self, value: str) -> int: ...


class Alphabet:
    """Ordered, deduplicated symbols whose count defines the numeral base."""

    __slots__ = ("_elements", "_index")

    def __init__(self, elements: str) -> None:
        unique = "".join(dict.fromkeys(elements))
        if len(unique) < 2:
            raise ValueError("an alphabet needs at least two distinct symbols")
        self._elements = unique
        self._index = {char: position for position, char in enumerate(unique)}

    @property
    def elements(self) -> str:
        return self._elements

    @property
    def base(self) -> int:
        return len(self._elements)

    def value_of(self, position: int) -> str:
        """Return the symbol standing for digit ``position``."""

        if not 0 <= position < self.base:
            raise IndexError(f"digit {position} is outside base {self.base}")
        return self._elements[position]

    def index_of(self, char: str) -> int:
        """Return the digit value of ``char``."""

        try:
            return self._index[char]
        except KeyError as exc:
            raise InvalidCharacterError(char, self._elements) from exc

    def __contains__(self, char: object) -> bool:
        return char in self._index

    def __len__(self) -> int:
        return self.base

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)

    def __repr__(self) -> str:
        return f"Alphabet({self._elements!r})"


# Symbols are in ascending code point order and skip I, O and W, so equal
# length encodings sort the same way as the numbers they stand for.
BASE_23 = Alphabet("ABCDEFGHJKLMNPQRSTUVXYZ")


class AlphabetCodec:
    """Encode non-negative integers as minimal-length strings in ``alphabet``."""

    __slots__ = ("alphabet",)

    def __init__(self, alphabet: Alphabet | str | None = None) -> None:
        if alphabet is None:
            alphabet = BASE_23
        elif isinstance(alphabet, str):
            alphabet = Alphabet(alphabet)
        self.alphabet = alphabet

    def encode(self, number: int) -> str:
        if number < 0:
            raise ValueError("alphabet codec only supports unsigned integers")
        base = self.alphabet.base
        digits: list[str] = []
        while True:
            number, remainder = divmod(number, base)
            digits.append(self.alphabet.value_of(remainder))
            if not number:
                break
        return "".join(reversed(digits))

    def decode(self, value: str) -> int:
        base = self.alphabet.base
        number = 0
        for position, char in enumerate(reversed(value)):
            number += self.alphabet.index_of(char) * base**position
        return number

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlphabetCodec):
            return NotImplemented
        return self.alphabet == other.alphabet

    def __hash__(self) -> int:
        return hash(self.alphabet)

    def __repr__(self) -> str:
        return f"AlphabetCodec({self.alphabet.elements!r})"
