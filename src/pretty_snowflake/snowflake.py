"""Time-sectioned 64-bit seed generation.

Seeds are laid out as ``timestamp(41) | machine(5) | node(5) | sequence(12)``
with the timestamp counted in milliseconds since ``epoch_ms``.  The sign bit
is never set.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable

import msgspec

from .exceptions import ClockError, MachineNodeError

if TYPE_CHECKING:
    from .config import GeneratorConfig

__all__ = [
    "MAX_SEQUENCE",
    "MAX_WORKER_ID",
    "GeneratorStrategy",
    "MachineNode",
    "SeedParts",
    "SnowflakeIdGenerator",
    "decompose_seed",
]

logger = logging.getLogger(__name__)

SEQUENCE_BITS = 12
NODE_BITS = 5
MACHINE_BITS = 5
TIMESTAMP_BITS = 41

NODE_SHIFT = SEQUENCE_BITS
MACHINE_SHIFT = SEQUENCE_BITS + NODE_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + NODE_BITS + MACHINE_BITS

MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
MAX_WORKER_ID = (1 << MACHINE_BITS) - 1
MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class MachineNode(msgspec.Struct, frozen=True, order=True):
    """Position of a generator in the worker id space.

    ``machine_id`` is the coarser unit of uniqueness (a host or a cluster) and
    ``node_id`` a worker within it.  Each pair must be unique per identifier
    space or seeds will collide.
    """

    machine_id: int = 1
    node_id: int = 1

    def __post_init__(self) -> None:
        for name in ("machine_id", "node_id"):
            value = getattr(self, name)
            if isinstance(value, bool) or not 0 <= value <= MAX_WORKER_ID:
                raise MachineNodeError(f"{name} must be within [0, {MAX_WORKER_ID}], got {value!r}")

    def __str__(self) -> str:
        return f"({self.machine_id}::{self.node_id})"


class GeneratorStrategy(str, Enum):
    """How a generator behaves once a millisecond's sequence space is used up."""

    REAL_TIME = "real_time"
    BASIC = "basic"
    LAZY = "lazy"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


class SeedParts(msgspec.Struct, frozen=True):
    timestamp_ms: int
    machine_id: int
    node_id: int
    sequence: int


def decompose_seed(seed: int, *, epoch_ms: int = 0) -> SeedParts:
    """Split ``seed`` back into its layout fields."""

    if seed < 0:
        raise ValueError("snowflake seeds are non-negative")
    return SeedParts(
        timestamp_ms=(seed >> TIMESTAMP_SHIFT) + epoch_ms,
        machine_id=(seed >> MACHINE_SHIFT) & MAX_WORKER_ID,
        node_id=(seed >> NODE_SHIFT) & MAX_WORKER_ID,
        sequence=seed & MAX_SEQUENCE,
    )


class SnowflakeIdGenerator:
    """Thread-safe snowflake seed generator.

    ``strategy`` picks what happens when the 4096 sequence values of a
    millisecond run out:

    ``REAL_TIME``
        reads the clock on every call and spins until the next millisecond,
        so seeds follow wall-clock order.
    ``BASIC``
        reads the clock only on rollover and moves at least one millisecond
        ahead without waiting.
    ``LAZY``
        never reads the clock after construction unless :meth:`refresh` is
        called; rollover bumps the stored timestamp by one.

    All three issue each seed at most once per instance.
    """

    def __init__(
        self,
        machine_node: MachineNode | None = None,
        strategy: GeneratorStrategy = GeneratorStrategy.REAL_TIME,
        *,
        epoch_ms: int = 0,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._machine_node = machine_node or MachineNode()
        self._strategy = GeneratorStrategy(strategy)
        self._epoch_ms = epoch_ms
        self._clock = clock or _now_millis
        self._worker_bits = (self._machine_node.machine_id << MACHINE_SHIFT) | (
            self._machine_node.node_id << NODE_SHIFT
        )
        self._lock = threading.Lock()
        self._last_timestamp = self._clock()
        self._sequence = 0
        self._check_timestamp(self._last_timestamp)
        logger.debug(
            "Created %s snowflake generator for machine node %s (epoch %d)",
            self._strategy,
            self._machine_node,
            self._epoch_ms,
        )

    @classmethod
    def single_node(cls, strategy: GeneratorStrategy = GeneratorStrategy.REAL_TIME) -> SnowflakeIdGenerator:
        return cls(MachineNode(), strategy)

    @classmethod
    def distributed(
        cls,
        machine_node: MachineNode,
        strategy: GeneratorStrategy = GeneratorStrategy.REAL_TIME,
    ) -> SnowflakeIdGenerator:
        return cls(machine_node, strategy)

    @classmethod
    def from_config(cls, config: GeneratorConfig, *, clock: Callable[[], int] | None = None) -> SnowflakeIdGenerator:
        return cls(
            MachineNode(config.machine_id, config.node_id),
            config.strategy,
            epoch_ms=config.epoch_ms,
            clock=clock,
        )

    @property
    def machine_node(self) -> MachineNode:
        return self._machine_node

    @property
    def strategy(self) -> GeneratorStrategy:
        return self._strategy

    @property
    def epoch_ms(self) -> int:
        return self._epoch_ms

    def next_id(self) -> int:
        """Issue the next seed."""

        with self._lock:
            if self._strategy is GeneratorStrategy.REAL_TIME:
                timestamp, sequence = self._advance_real_time()
            elif self._strategy is GeneratorStrategy.BASIC:
                timestamp, sequence = self._advance_basic()
            else:
                timestamp, sequence = self._advance_lazy()
            self._check_timestamp(timestamp)
            self._last_timestamp = timestamp
            self._sequence = sequence
            return ((timestamp - self._epoch_ms) << TIMESTAMP_SHIFT) | self._worker_bits | sequence

    def refresh(self) -> None:
        """Move the stored timestamp up to the clock if the clock is ahead."""

        with self._lock:
            now = self._clock()
            if now > self._last_timestamp:
                self._check_timestamp(now)
                self._last_timestamp = now
                self._sequence = 0

    def __iter__(self) -> SnowflakeIdGenerator:
        return self

    def __next__(self) -> int:
        return self.next_id()

    def __repr__(self) -> str:
        return f"SnowflakeIdGenerator({self._machine_node!r}, {self._strategy.value!r})"

    # The _advance_* helpers only propose the next (timestamp, sequence);
    # next_id commits it once the timestamp is known to fit.

    def _advance_real_time(self) -> tuple[int, int]:
        sequence = (self._sequence + 1) & MAX_SEQUENCE
        now = self._clock()
        if now > self._last_timestamp:
            return now, 0
        if now < self._last_timestamp:
            self._warn_clock_regression(now)
        if sequence == 0:
            return self._wait_next_millis(self._last_timestamp), sequence
        return self._last_timestamp, sequence

    def _advance_basic(self) -> tuple[int, int]:
        sequence = (self._sequence + 1) & MAX_SEQUENCE
        if sequence != 0:
            return self._last_timestamp, sequence
        now = self._clock()
        if now < self._last_timestamp:
            self._warn_clock_regression(now)
        return max(now, self._last_timestamp + 1), sequence

    def _advance_lazy(self) -> tuple[int, int]:
        sequence = (self._sequence + 1) & MAX_SEQUENCE
        if sequence == 0:
            return self._last_timestamp + 1, sequence
        return self._last_timestamp, sequence

    def _wait_next_millis(self, last_timestamp: int) -> int:
        logger.debug("Sequence exhausted at %d; waiting for the next millisecond", last_timestamp)
        now = self._clock()
        while now <= last_timestamp:
            now = self._clock()
        return now

    def _warn_clock_regression(self, now: int) -> None:
        logger.warning(
            "Clock moved backwards by %d ms; holding timestamp %d",
            self._last_timestamp - now,
            self._last_timestamp,
        )

    def _check_timestamp(self, timestamp: int) -> None:
        elapsed = timestamp - self._epoch_ms
        if elapsed < 0:
            raise ClockError(f"clock reads {timestamp}, before the epoch {self._epoch_ms}")
        if elapsed > MAX_TIMESTAMP:
            raise ClockError(f"{elapsed} ms since the epoch does not fit in {TIMESTAMP_BITS} bits")
