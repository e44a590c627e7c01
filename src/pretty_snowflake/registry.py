"""Process-wide default id generator.

Applications should build a :class:`PrettyIdGenerator` at start-up and pass it
to the code that needs identifiers.  This module keeps one fallback instance
for call sites that cannot be handed one; install it with
:func:`set_id_generator` once the process knows its :class:`MachineNode`.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from .ids import Id, PrettyIdGenerator
from .prettifier import IdPrettifier
from .snowflake import MachineNode, SnowflakeIdGenerator

__all__ = [
    "ReadPreferringLock",
    "default_prettifier",
    "get_id_generator",
    "next_id",
    "reset_id_generator",
    "set_id_generator",
]

logger = logging.getLogger(__name__)


class ReadPreferringLock:
    """Reader/writer lock that admits new readers while a writer is waiting.

    The slot is written once at start-up and read on every id, so readers are
    never queued behind writers.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._condition:
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if not self._readers:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._condition:
            self._condition.wait_for(lambda: not self._readers)
            yield


_DEFAULT_PRETTIFIER = IdPrettifier()
_lock = ReadPreferringLock()
_generator: PrettyIdGenerator | None = None


def set_id_generator(generator: PrettyIdGenerator) -> None:
    """Install ``generator`` as the process-wide default.

    Prettifier options should be identical on every node sharing an id space;
    only the machine node differs.
    """

    global _generator
    with _lock.write():
        _generator = generator
    logger.info("Installed default id generator on machine node %s", generator.generator.machine_node)


def get_id_generator() -> PrettyIdGenerator:
    """Return the default generator, creating one on ``MachineNode()`` on first use."""

    global _generator
    with _lock.read():
        current = _generator
    if current is not None:
        return current
    with _lock.write():
        if _generator is None:
            _generator = PrettyIdGenerator(SnowflakeIdGenerator(MachineNode()), _DEFAULT_PRETTIFIER)
            logger.info("Created default id generator on machine node %s", _generator.generator.machine_node)
        return _generator


def reset_id_generator() -> None:
    """Forget the installed generator; the next use creates a fresh default."""

    global _generator
    with _lock.write():
        _generator = None


def default_prettifier() -> IdPrettifier:
    """Return the active generator's prettifier, or the default one."""

    with _lock.read():
        current = _generator
    return current.prettifier if current is not None else _DEFAULT_PRETTIFIER


def next_id(label: str | type | None = None) -> Id[Any]:
    return get_id_generator().next_id(label)
