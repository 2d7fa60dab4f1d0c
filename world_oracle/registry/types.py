"""World record type.

A World is an immutable value. The registry replaces the stored value on
every mutation, so a World handed to a reader never changes underneath it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

Principal = str


@dataclass(frozen=True)
class World:
    """A registered world.

    Notes:
    - endpoint is the main node address clients connect to
    - contract_address is an optional on-chain contract reference
    - version is None unless the registry was built with versioning on
    - special_index is the 1-based pool index for special worlds
    """

    id: int
    name: str
    chain_id: int
    owner: Principal
    endpoint: str
    image_ref: str
    created_at: float
    updated_at: float
    contract_address: str | None = None
    special_index: int | None = None
    version: int | None = None

    @property
    def is_special(self) -> bool:
        """Did this world draw its image from the special pool?"""
        return self.special_index is not None

    def evolve(self, **changes: Any) -> "World":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "chain_id": self.chain_id,
            "owner": self.owner,
            "endpoint": self.endpoint,
            "image_ref": self.image_ref,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        # Optional lineage fields only when set
        if self.contract_address is not None:
            result["contract_address"] = self.contract_address
        if self.special_index is not None:
            result["special_index"] = self.special_index
        if self.version is not None:
            result["version"] = self.version
        return result
