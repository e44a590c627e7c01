"""Reversible, checksum-protected rendering of snowflake seeds.

A seed is written in decimal, extended with a Damm check digit and cut into
``parts_size`` wide chunks from the right.  Chunks then alternate between
staying decimal ("direct") and being re-encoded with the configured codec, so
``824227036833910784`` becomes ``ARPJ-27036-GVQS-07849`` with the defaults.
The rightmost chunk is always direct.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from . import damm
from .codec import AlphabetCodec, Codec
from .exceptions import IdParseError, InvalidCharacterError, InvalidIdError

if TYPE_CHECKING:
    from .config import PrettifierConfig

__all__ = ["MAX_SEED", "IdPrettifier"]


MAX_SEED = 2**63 - 1
# Widest seed numeral plus its check digit.
_MAX_DIGITS = len(str(MAX_SEED)) + 1
_UNSET: Any = object()


class IdPrettifier:
    """Turn seeds into fixed-format pretty ids and back.

    ``zero_char`` and ``max_encoder_length`` are derived from ``encoder`` and
    ``parts_size``; use :meth:`replace` to change either of them.
    """

    __slots__ = (
        "_delimiter",
        "_encoder",
        "_leading_zeros",
        "_max_encoder_length",
        "_max_parts",
        "_parts_size",
        "_zero_char",
    )

    def __init__(
        self,
        encoder: Codec | None = None,
        *,
        parts_size: int = 5,
        delimiter: str = "-",
        leading_zeros: bool = True,
    ) -> None:
        encoder = encoder if encoder is not None else AlphabetCodec()
        if parts_size < 1:
            raise ValueError("parts_size must be a positive integer")
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        if any("0" <= char <= "9" for char in delimiter):
            raise ValueError("delimiter must not contain decimal digits")
        alphabet = getattr(encoder, "alphabet", None)
        if alphabet is not None and any(char in alphabet for char in delimiter):
            raise ValueError(f"delimiter {delimiter!r} overlaps the encoder alphabet")

        self._encoder = encoder
        self._parts_size = parts_size
        self._delimiter = delimiter
        self._leading_zeros = leading_zeros
        self._zero_char = encoder.encode(0)[0]
        self._max_encoder_length = len(encoder.encode(10**parts_size - 1))
        self._max_parts = math.ceil(_MAX_DIGITS / parts_size)

    @classmethod
    def from_config(cls, config: PrettifierConfig) -> IdPrettifier:
        return cls(
            AlphabetCodec(config.alphabet),
            parts_size=config.parts_size,
            delimiter=config.delimiter,
            leading_zeros=config.leading_zeros,
        )

    @property
    def encoder(self) -> Codec:
        return self._encoder

    @property
    def parts_size(self) -> int:
        return self._parts_size

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def leading_zeros(self) -> bool:
        return self._leading_zeros

    @property
    def zero_char(self) -> str:
        return self._zero_char

    @property
    def max_encoder_length(self) -> int:
        return self._max_encoder_length

    def replace(
        self,
        *,
        encoder: Codec = _UNSET,
        parts_size: int = _UNSET,
        delimiter: str = _UNSET,
        leading_zeros: bool = _UNSET,
    ) -> IdPrettifier:
        """Return a copy with the given options changed and derived fields recomputed."""

        return IdPrettifier(
            self._encoder if encoder is _UNSET else encoder,
            parts_size=self._parts_size if parts_size is _UNSET else parts_size,
            delimiter=self._delimiter if delimiter is _UNSET else delimiter,
            leading_zeros=self._leading_zeros if leading_zeros is _UNSET else leading_zeros,
        )

    def prettify(self, id_seed: int) -> str:
        """Render ``id_seed`` as a delimited, checksum-protected string."""

        if isinstance(id_seed, bool) or not isinstance(id_seed, int):
            raise TypeError(f"seed must be an int, got {type(id_seed).__name__}")
        if not 0 <= id_seed <= MAX_SEED:
            raise ValueError(f"seed must be within [0, {MAX_SEED}], got {id_seed!r}")
        parts = self._divide(damm.encode(str(id_seed)))
        if self._leading_zeros and len(parts) < self._max_parts:
            parts = ["0"] * (self._max_parts - len(parts)) + parts
        return self._delimiter.join(self._convert_parts(parts))

    def is_valid(self, text: str) -> bool:
        """Return whether :meth:`to_id_seed` would accept ``text``."""

        try:
            self.to_id_seed(text)
        except (InvalidCharacterError, InvalidIdError, IdParseError):
            return False
        return True

    def to_id_seed(self, text: str) -> int:
        """Recover the seed rendered by :meth:`prettify`.

        Raises :class:`InvalidIdError` when ``text`` is not shaped like an id of
        this prettifier or the check digit does not hold, and
        :class:`IdParseError` when the remaining numeral is not a 63-bit seed.
        """

        decoded = self._decode_seed_with_check_digit(text)
        if not damm.is_valid(decoded):
            raise InvalidIdError(text)
        numeral = decoded[:-1]
        if not numeral:
            raise IdParseError(numeral, "no digits before the check digit")
        seed = int(numeral)
        if seed > MAX_SEED:
            raise IdParseError(numeral, "does not fit in a signed 64-bit integer")
        return seed

    def _divide(self, rep: str) -> list[str]:
        size = self._parts_size
        head = len(rep) % size
        parts = [rep[:head]] if head else []
        parts.extend(rep[start : start + size] for start in range(head, len(rep), size))
        return parts

    def _convert_parts(self, parts: list[str]) -> list[str]:
        count = len(parts)
        converted: list[str] = []
        for index, part in enumerate(parts):
            if _is_direct(index, count):
                if self._leading_zeros:
                    part = part.rjust(self._parts_size, "0")
            else:
                part = self._encoder.encode(int(part))
                if self._leading_zeros:
                    part = part.rjust(self._max_encoder_length, self._zero_char)
            converted.append(part)
        return converted

    def _decode_seed_with_check_digit(self, text: str) -> str:
        parts = text.split(self._delimiter)
        count = len(parts)
        if count > self._max_parts or (self._leading_zeros and count != self._max_parts):
            raise InvalidIdError(text)
        decoded: list[str] = []
        for index, part in enumerate(parts):
            direct = _is_direct(index, count)
            if not part:
                raise InvalidIdError(text)
            if self._leading_zeros and len(part) != (self._parts_size if direct else self._max_encoder_length):
                raise InvalidIdError(text)
            if direct:
                if not (part.isascii() and part.isdigit()):
                    raise InvalidIdError(text)
                decoded.append(part)
                continue
            value = self._encoder.decode(part)
            if value >= 10**self._parts_size:
                raise InvalidIdError(text)
            decoded.append(str(value).rjust(self._parts_size, "0"))
        return "".join(decoded)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdPrettifier):
            return NotImplemented
        return (
            self._encoder == other._encoder
            and self._parts_size == other._parts_size
            and self._delimiter == other._delimiter
            and self._leading_zeros == other._leading_zeros
        )

    def __hash__(self) -> int:
        return hash((self._encoder, self._parts_size, self._delimiter, self._leading_zeros))

    def __repr__(self) -> str:
        return (
            f"IdPrettifier({self._encoder!r}, parts_size={self._parts_size}, "
            f"delimiter={self._delimiter!r}, leading_zeros={self._leading_zeros})"
        )


def _is_direct(index: int, count: int) -> bool:
    # Counting from the right, odd positions stay decimal, so the last chunk is
    # always direct whatever the chunk count.
    return (count - index) % 2 == 1
