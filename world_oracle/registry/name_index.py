"""Name Index - lifetime uniqueness for world names

Maps each registered name to its world id and remembers the order in which
names were registered. Names are never released: there is no delete, so a
name once taken stays taken for the life of the registry.

Usage:
    index = NameIndex()

    # Register names (raises if taken)
    index.register("myworld", 1)

    # Check existence
    index.exists("myworld")  # True

    # Lookup returns the world id
    index.lookup("myworld")  # 1

    # Registration order
    index.names()  # ["myworld"]
"""

from __future__ import annotations

from .errors import DuplicateNameError


class NameIndex:
    """Ordered name -> world id index.

    Thread-safety: This class is NOT thread-safe. WorldRegistry serializes
    access under its own lock.
    """

    _ids: dict[str, int]

    def __init__(self) -> None:
        """Initialize empty index."""
        self._ids = {}

    def register(self, name: str, world_id: int) -> None:
        """Register a name for a world.

        Args:
            name: The unique world name
            world_id: Id of the world that owns the name

        Raises:
            DuplicateNameError: If the name is already registered
        """
        if name in self._ids:
            raise DuplicateNameError(name, self._ids[name])
        self._ids[name] = world_id

    def exists(self, name: str) -> bool:
        """Check if a name is registered."""
        return name in self._ids

    def lookup(self, name: str) -> int | None:
        """Look up the world id for a name.

        Returns:
            The world id if found, None otherwise
        """
        return self._ids.get(name)

    def names(self) -> list[str]:
        """Get all registered names in registration order.

        Returns a fresh list on each call.
        """
        return list(self._ids.keys())

    def count(self) -> int:
        """Get total number of registered names."""
        return len(self._ids)
