"""Token URI resolution: provider base + assigned image reference."""

from __future__ import annotations

from .registry import WorldRegistry


class TokenURIResolver:
    """Composes the externally visible display URI of a world.

    Pure read over committed registry state.
    """

    def __init__(self, registry: WorldRegistry) -> None:
        self._registry = registry

    def resolve(self, world_id: int) -> str:
        """Return provider_base + image_ref for a world.

        Raises:
            NotFoundError: No world with this id
        """
        world = self._registry.get_by_id(world_id)
        return self._registry.pool.provider_base() + world.image_ref
