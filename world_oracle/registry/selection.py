"""Special-variant selection with a cooldown.

A newly created world normally gets the general image. A small fraction get
a special image instead, but never more often than once per cooldown window.

Policy:
    1. Eligible only if the pool has at least one special source AND either
       no special was ever assigned or at least cooldown_seconds have passed
       since the last one (inclusive boundary).
    2. When eligible, draw one entropy value e. The creation is special when
       e % odds == 0.
    3. A special creation gets pool index (e // odds) % special_count + 1,
       and the cooldown restarts at the current clock reading.

Entropy is only drawn for eligible creations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .environment import ClockProtocol, EntropySource
from .image_pool import ImageSourcePool
from .types import Principal

logger = logging.getLogger(__name__)

SEVEN_DAYS_SECONDS: float = 7 * 24 * 60 * 60
DEFAULT_ODDS: int = 100


@dataclass(frozen=True)
class ImageAssignment:
    """Result of running the selection policy for one creation."""

    image_ref: str
    special_index: int | None = None

    @property
    def is_special(self) -> bool:
        return self.special_index is not None


class SpecialSelectionPolicy:
    """Decides general vs special image for each creation.

    Holds the cooldown state and the special counter. Not thread-safe on its
    own; WorldRegistry runs it under its lock.

    Attributes:
        cooldown_seconds: Minimum time between special assignments
        odds: A creation is special with probability 1/odds
    """

    def __init__(
        self,
        pool: ImageSourcePool,
        clock: ClockProtocol,
        entropy: EntropySource,
        *,
        cooldown_seconds: float = SEVEN_DAYS_SECONDS,
        odds: int = DEFAULT_ODDS,
    ) -> None:
        if cooldown_seconds < 0:
            raise ValueError(f"cooldown_seconds must be non-negative, got {cooldown_seconds}")
        if odds < 1:
            raise ValueError(f"odds must be at least 1, got {odds}")
        self._pool = pool
        self._clock = clock
        self._entropy = entropy
        self.cooldown_seconds = cooldown_seconds
        self.odds = odds
        self._last_special_at: float | None = None
        self._special_count = 0

    @property
    def special_worlds_count(self) -> int:
        return self._special_count

    @property
    def last_special_at(self) -> float | None:
        return self._last_special_at

    def cooldown_elapsed(self, now: float | None = None) -> bool:
        """True when no special was assigned in the preceding window."""
        if self._last_special_at is None:
            return True
        if now is None:
            now = self._clock.time()
        return now - self._last_special_at >= self.cooldown_seconds

    def is_eligible(self, now: float | None = None) -> bool:
        return self._pool.special_count() > 0 and self.cooldown_elapsed(now)

    def peek(self, caller: Principal, world_count: int) -> tuple[ImageAssignment, float]:
        """Compute the assignment for a creation without committing it.

        Returns the assignment and the clock reading it was made at. Call
        commit() with both once the creation is known to succeed.
        """
        now = self._clock.time()
        if not self.is_eligible(now):
            return ImageAssignment(self._pool.general_source()), now

        roll = self._entropy.draw(caller, world_count)
        if roll < 0:
            raise ValueError(f"entropy source returned a negative value: {roll}")
        if roll % self.odds != 0:
            return ImageAssignment(self._pool.general_source()), now

        index = (roll // self.odds) % self._pool.special_count() + 1
        return ImageAssignment(self._pool.special_source(index), index), now

    def commit(self, assignment: ImageAssignment, now: float) -> None:
        """Record a special assignment and restart the cooldown."""
        if not assignment.is_special:
            return
        self._special_count += 1
        self._last_special_at = now
        logger.info(
            "Special image %s assigned (total %d)",
            assignment.special_index,
            self._special_count,
        )
