"""Typed configuration for prettifiers and generators."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Mapping

import msgspec

from .snowflake import MAX_WORKER_ID, GeneratorStrategy

__all__ = [
    "GeneratorConfig",
    "IdConfig",
    "PrettifierConfig",
    "config_from_mapping",
    "load_config",
]

WorkerId = Annotated[int, msgspec.Meta(ge=0, le=MAX_WORKER_ID)]


class PrettifierConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Options shaping the pretty string.

    Persisted ids depend on these staying fixed across every node.
    """

    alphabet: str = "ABCDEFGHJKLMNPQRSTUVXYZ"
    parts_size: Annotated[int, msgspec.Meta(ge=1)] = 5
    delimiter: str = "-"
    leading_zeros: bool = True


class GeneratorConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    machine_id: WorkerId = 1
    node_id: WorkerId = 1
    strategy: GeneratorStrategy = GeneratorStrategy.REAL_TIME
    epoch_ms: int = 0


class IdConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    prettifier: PrettifierConfig = PrettifierConfig()
    generator: GeneratorConfig = GeneratorConfig()
    label: str = ""


def config_from_mapping(data: Mapping[str, Any]) -> IdConfig:
    """Validate a plain mapping into an :class:`IdConfig`."""

    return msgspec.convert(dict(data), type=IdConfig)


def load_config(path: str | Path) -> IdConfig:
    """Read an :class:`IdConfig` from a ``.json`` or ``.toml`` file."""

    source = Path(path)
    payload = source.read_bytes()
    suffix = source.suffix.lower()
    if suffix == ".json":
        return msgspec.json.decode(payload, type=IdConfig)
    if suffix == ".toml":
        return msgspec.toml.decode(payload, type=IdConfig)
    raise ValueError(f"Unsupported config format: {source.suffix or source.name}")
