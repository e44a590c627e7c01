from __future__ import annotations

from typing import Any

import msgspec

from .ids import Id

__all__ = [
    "IdPayload",
    "decode_id",
    "json_decode",
    "json_encode",
    "msgpack_decode",
    "msgpack_encode",
]


class IdPayload(msgspec.Struct, frozen=True):
    """Wire shape of an :class:`Id`; the label is supplied by the reader."""

    snowflake: int
    pretty: str


def _to_builtins(value: Any) -> Any:
    if isinstance(value, Id):
        return IdPayload(snowflake=value.snowflake, pretty=value.pretty)
    if isinstance(value, dict):
        return {key: _to_builtins(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_builtins(item) for item in value]
    return value


def json_encode(value: Any) -> bytes:
    """Serialize ``value`` to JSON bytes using msgspec, expanding ids to payloads."""

    return msgspec.json.encode(_to_builtins(value))


def json_decode(data: bytes) -> Any:
    return msgspec.json.decode(data)


def msgpack_encode(value: Any) -> bytes:
    """Serialize ``value`` to msgpack bytes using msgspec, expanding ids to payloads."""

    return msgspec.msgpack.encode(_to_builtins(value))


def msgpack_decode(data: bytes) -> Any:
    return msgspec.msgpack.decode(data)


def decode_id(data: bytes | dict[str, Any], label: str | type | None = None) -> Id[Any]:
    """Rebuild an :class:`Id` from JSON bytes or an already decoded mapping."""

    if isinstance(data, (bytes, bytearray, memoryview)):
        payload = msgspec.json.decode(data, type=IdPayload)
    else:
        payload = msgspec.convert(data, type=IdPayload)
    return Id.direct(label, payload.snowflake, payload.pretty)
