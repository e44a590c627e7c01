"""Labeled identifiers carrying both the numeric seed and its pretty form."""

from __future__ import annotations

from functools import total_ordering
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .prettifier import IdPrettifier
from .snowflake import GeneratorStrategy, MachineNode, SnowflakeIdGenerator

if TYPE_CHECKING:
    from .config import IdConfig

__all__ = ["Id", "PrettyIdGenerator", "label_of"]

T = TypeVar("T")


def label_of(target: str | type | None) -> str:
    """Return the runtime tag for ``target``: a class name or the string itself."""

    if target is None:
        return ""
    if isinstance(target, type):
        return target.__qualname__
    return target


@total_ordering
class Id(Generic[T]):
    """An identifier owned by the domain type named by ``label``.

    Equality, hashing and ordering only look at the snowflake; the label is
    there for display.
    """

    __slots__ = ("_label", "_pretty", "_snowflake")

    def __init__(self, label: str | type | None, snowflake: int, pretty: str) -> None:
        self._label = label_of(label)
        self._snowflake = int(snowflake)
        self._pretty = pretty

    @classmethod
    def new(cls, label: str | type | None, snowflake: int, prettifier: IdPrettifier) -> Id[Any]:
        return cls(label, snowflake, prettifier.prettify(snowflake))

    @classmethod
    def direct(cls, label: str | type | None, snowflake: int, pretty: str) -> Id[Any]:
        """Rebuild an id from stored parts without re-rendering it."""

        return cls(label, snowflake, pretty)

    @classmethod
    def parse(cls, label: str | type | None, pretty: str, prettifier: IdPrettifier) -> Id[Any]:
        """Rebuild an id from its pretty form, validating the check digit."""

        return cls(label, prettifier.to_id_seed(pretty), pretty)

    @property
    def label(self) -> str:
        return self._label

    @property
    def snowflake(self) -> int:
        return self._snowflake

    @property
    def pretty(self) -> str:
        return self._pretty

    @property
    def num(self) -> int:
        return self._snowflake

    def relabel(self, label: str | type | None) -> Id[Any]:
        return Id(label, self._snowflake, self._pretty)

    def __int__(self) -> int:
        return self._snowflake

    def __index__(self) -> int:
        return self._snowflake

    def __str__(self) -> str:
        if not self._label:
            return self._pretty
        return f"{self._label}::{self._pretty}"

    def __repr__(self) -> str:
        return f"Id(label={self._label!r}, snowflake={self._snowflake}, pretty={self._pretty!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._snowflake == other._snowflake

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._snowflake < other._snowflake

    def __hash__(self) -> int:
        return hash(self._snowflake)


class PrettyIdGenerator:
    """Issue labeled :class:`Id` values from a seed generator and a prettifier."""

    def __init__(
        self,
        generator: SnowflakeIdGenerator | None = None,
        prettifier: IdPrettifier | None = None,
        *,
        label: str | type | None = None,
    ) -> None:
        self._generator = generator or SnowflakeIdGenerator()
        self._prettifier = prettifier or IdPrettifier()
        self._label = label_of(label)

    @classmethod
    def single_node(
        cls,
        prettifier: IdPrettifier | None = None,
        strategy: GeneratorStrategy = GeneratorStrategy.REAL_TIME,
    ) -> PrettyIdGenerator:
        return cls(SnowflakeIdGenerator.single_node(strategy), prettifier)

    @classmethod
    def distributed(
        cls,
        machine_node: MachineNode,
        prettifier: IdPrettifier | None = None,
        strategy: GeneratorStrategy = GeneratorStrategy.REAL_TIME,
    ) -> PrettyIdGenerator:
        return cls(SnowflakeIdGenerator.distributed(machine_node, strategy), prettifier)

    @classmethod
    def from_config(cls, config: IdConfig) -> PrettyIdGenerator:
        return cls(
            SnowflakeIdGenerator.from_config(config.generator),
            IdPrettifier.from_config(config.prettifier),
            label=config.label,
        )

    @property
    def generator(self) -> SnowflakeIdGenerator:
        return self._generator

    @property
    def prettifier(self) -> IdPrettifier:
        return self._prettifier

    @property
    def label(self) -> str:
        return self._label

    def next_id(self, label: str | type | None = None) -> Id[Any]:
        """Issue an id tagged with ``label``, or this generator's label when omitted."""

        return Id.new(
            self._label if label is None else label,
            self._generator.next_id(),
            self._prettifier,
        )
