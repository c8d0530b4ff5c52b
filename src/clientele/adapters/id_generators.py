"""ID generators for CLIENTELE."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from ulid import monotonic

from clientele.interfaces.id_generator import IdGenerator, NumericIdGenerator

# pylint: disable=too-few-public-methods

#: Custom epoch for TSIDs: 2020-01-01T00:00:00Z, in Unix milliseconds.
TSID_EPOCH_MS = 1_577_836_800_000
TSID_EPOCH = datetime(2020, 1, 1, tzinfo=timezone.utc)

TIME_BITS = 42
RANDOM_BITS = 22
DEFAULT_NODE_BITS = 10


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def tsid_timestamp(value: int) -> datetime:
    """Return the UTC instant embedded in a TSID (millisecond precision)."""
    return TSID_EPOCH + timedelta(milliseconds=value >> RANDOM_BITS)


class TsidGenerator(NumericIdGenerator):
    """Thread-safe Time-Sorted ID generator.

    Layout of the 64-bit value, most significant bits first::

        | 42 bits: ms since 2020-01-01Z | node (10 bits) | counter (12 bits) |

    Guarantees for a single instance:
        - Values strictly increase, even if the wall clock steps backwards
          (the last timestamp is reused) or more than `max_counter` ids are
          requested in one millisecond (the logical clock moves forward).
        - Values are positive until the 42-bit time field's sign bit is
          reached in 2089.

    Args:
        node_id: Discriminator for this process, ``0 <= node_id < 2**node_bits``.
        node_bits: Bits reserved for the node id; the rest of the 22 low bits
            hold the counter.
        clock: Returns Unix time in milliseconds; injectable for tests.
    """

    def __init__(
        self,
        node_id: int = 0,
        *,
        node_bits: int = DEFAULT_NODE_BITS,
        clock: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        if not 0 <= node_bits <= 20:
            raise ValueError("node_bits must be between 0 and 20")
        if not 0 <= node_id < (1 << node_bits):
            raise ValueError(f"node_id must be between 0 and {(1 << node_bits) - 1}")
        self._counter_bits = RANDOM_BITS - node_bits
        self._node_part = node_id << self._counter_bits
        self._max_counter = (1 << self._counter_bits) - 1
        self._clock = clock
        self._lock = threading.Lock()
        self._last_ms = -1
        self._counter = 0

    @property
    def max_counter(self) -> int:
        """Largest counter value usable within one millisecond."""
        return self._max_counter

    def new_id(self) -> int:
        """Generate a new TSID (serialized across threads)."""
        with self._lock:
            now = self._clock() - TSID_EPOCH_MS
            if now > self._last_ms:
                self._last_ms = now
                self._counter = 0
            elif self._counter < self._max_counter:
                self._counter += 1
            else:
                self._last_ms += 1
                self._counter = 0
            return (self._last_ms << RANDOM_BITS) | self._node_part | self._counter


class SequenceIdGenerator(NumericIdGenerator):
    """Sequential numeric IDs starting at `start`.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start
        self._lock = threading.Lock()

    def new_id(self) -> int:
        """Generate the next integer."""
        with self._lock:
            value = self._next
            self._next += 1
            return value


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers made of a
    timestamp and a random component. Used for CloudEvent ids.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """Zero-padded sequential string IDs.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, length: int = 26) -> None:
        self._counter = 0
        self._length = length

    def new_id(self) -> str:
        """Generate a new unique identifier."""
        self._counter += 1
        return f"{self._counter:0{self._length}d}"
