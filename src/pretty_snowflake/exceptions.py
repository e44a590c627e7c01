"""Error types raised while generating and parsing identifiers."""

from __future__ import annotations


class PrettySnowflakeError(Exception):
    """Base error type."""


class InvalidIdError(PrettySnowflakeError, ValueError):
    """The text is not a checksum-valid pretty identifier."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Not a valid ID: {text}")
        self.text = text


class IdParseError(PrettySnowflakeError, ValueError):
    """The checksum held but the recovered numeral is not a 63-bit seed."""

    def __init__(self, numeral: str, reason: str) -> None:
        super().__init__(f"Cannot parse {numeral!r} as a seed: {reason}")
        self.numeral = numeral
        self.reason = reason


class InvalidCharacterError(PrettySnowflakeError, ValueError):
    """A character outside the configured alphabet was met during decoding."""

    def __init__(self, character: str, alphabet: str) -> None:
        super().__init__(f"Character {character!r} is not part of alphabet {alphabet!r}")
        self.character = character
        self.alphabet = alphabet


class MachineNodeError(PrettySnowflakeError, ValueError):
    """Machine or node id outside the supported worker space."""


class ClockError(PrettySnowflakeError):
    """The clock cannot be represented in the snowflake timestamp field."""
