"""Distributed, time-ordered snowflake ids with checksum-protected pretty forms."""

from .codec import BASE_23, Alphabet, AlphabetCodec, Codec
from .config import GeneratorConfig, IdConfig, PrettifierConfig, config_from_mapping, load_config
from .exceptions import (
    ClockError,
    IdParseError,
    InvalidCharacterError,
    InvalidIdError,
    MachineNodeError,
    PrettySnowflakeError,
)
from .ids import Id, PrettyIdGenerator, label_of
from .metadata import __version__
from .prettifier import MAX_SEED, IdPrettifier
from .registry import default_prettifier, get_id_generator, next_id, reset_id_generator, set_id_generator
from .snowflake import GeneratorStrategy, MachineNode, SeedParts, SnowflakeIdGenerator, decompose_seed

__all__ = [
    "BASE_23",
    "MAX_SEED",
    "Alphabet",
    "AlphabetCodec",
    "ClockError",
    "Codec",
    "GeneratorConfig",
    "GeneratorStrategy",
    "Id",
    "IdConfig",
    "IdParseError",
    "IdPrettifier",
    "InvalidCharacterError",
    "InvalidIdError",
    "MachineNode",
    "MachineNodeError",
    "PrettifierConfig",
    "PrettyIdGenerator",
    "PrettySnowflakeError",
    "SeedParts",
    "SnowflakeIdGenerator",
    "__version__",
    "config_from_mapping",
    "decompose_seed",
    "default_prettifier",
    "get_id_generator",
    "label_of",
    "load_config",
    "next_id",
    "reset_id_generator",
    "set_id_generator",
]
