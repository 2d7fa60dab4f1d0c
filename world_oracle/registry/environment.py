"""Clock and entropy sources supplied by the hosting environment.

The registry never reads the wall clock or a random source directly.
Both are injected so tests can drive time and randomness deterministically.

Usage:
    clock = RealClock()
    entropy = DigestEntropy(clock)
    value = entropy.draw("alice", world_count=3)
"""

from __future__ import annotations

import hashlib
import os
import time
from typing import Protocol


class ClockProtocol(Protocol):
    """Protocol for clock implementations (RealClock or a test clock)."""

    def time(self) -> float:
        """Get current time in seconds."""
        ...


class EntropySource(Protocol):
    """Protocol for the opaque entropy input drawn during creation."""

    def draw(self, caller: str, world_count: int) -> int:
        """Return a non-negative integer for the current creation."""
        ...


class RealClock:
    """Wall-clock time in seconds since the epoch."""

    def time(self) -> float:
        return time.time()


class DigestEntropy:
    """SHA-256 digest over the clock reading, caller, count and OS noise.

    Timestamp-and-sender hashing with OS randomness mixed in. This is NOT
    cryptographically fair: the scarcity policy built on it is best effort
    only.
    """

    def __init__(self, clock: ClockProtocol, noise_bytes: int = 16) -> None:
        self._clock = clock
        self._noise_bytes = noise_bytes

    def draw(self, caller: str, world_count: int) -> int:
        digest = hashlib.sha256()
        digest.update(repr(self._clock.time()).encode())
        digest.update(caller.encode())
        digest.update(world_count.to_bytes(8, "big"))
        if self._noise_bytes:
            digest.update(os.urandom(self._noise_bytes))
        return int.from_bytes(digest.digest(), "big")
