"""World registry - single-owner records keyed by unique name and id

The registry is a sequential state machine. Every mutation runs under one
re-entrant lock, checks all of its preconditions before touching state, and
then commits. A rejected mutation therefore leaves no partial change, and a
reader never sees a half-applied one.

Usage:
    registry = WorldRegistry(
        admin="deployer",
        pool=ImageSourcePool("QmGeneral", "https://ipfs.io/"),
    )
    world = registry.create("deployer", "myworld", "mainNode1", 1)
    registry.update("deployer", world.id, chain_id=100, endpoint="new-node.io/v1")
    registry.transfer("deployer", world.id, "bob")
    registry.get_by_name("myworld").owner  # "bob"
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, TypeVar

from .access_control import AccessControl
from .environment import ClockProtocol, DigestEntropy, EntropySource, RealClock
from .errors import (
    DuplicateNameError,
    InvalidArgumentError,
    NotFoundError,
    NotOwnerError,
    NotWhitelistedError,
    RegistryError,
)
from .image_pool import ImageSourcePool
from .logger import EventLogger
from .name_index import NameIndex
from .selection import DEFAULT_ODDS, SEVEN_DAYS_SECONDS, SpecialSelectionPolicy
from .types import Principal, World

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WorldRegistry:
    """Owns World records and enforces uniqueness and ownership.

    Dependencies:
        access: Whitelist and admin principal
        pool: General/special image sources and provider base
        policy: Special-variant selection (cooldown + odds)
        event_logger: Optional JSONL audit log of mutations
    """

    def __init__(
        self,
        admin: Principal,
        pool: ImageSourcePool,
        *,
        clock: ClockProtocol | None = None,
        entropy: EntropySource | None = None,
        cooldown_seconds: float = SEVEN_DAYS_SECONDS,
        odds: int = DEFAULT_ODDS,
        versioning: bool = True,
        event_logger: EventLogger | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            admin: Deployer principal; whitelisted and sole admin
            pool: Image sources for new worlds
            clock: Time source (default: wall clock)
            entropy: Entropy for special selection (default: SHA-256 digest)
            cooldown_seconds: Minimum time between special assignments
            odds: A creation is special with probability 1/odds when eligible
            versioning: Track a per-world version bumped on each update
            event_logger: Optional audit log
        """
        self._clock: ClockProtocol = clock or RealClock()
        self.access = AccessControl(admin)
        self.pool = pool
        self.policy = SpecialSelectionPolicy(
            pool,
            self._clock,
            entropy or DigestEntropy(self._clock),
            cooldown_seconds=cooldown_seconds,
            odds=odds,
        )
        self.versioning = versioning
        self._event_logger = event_logger

        self._worlds: dict[int, World] = {}
        self._names = NameIndex()
        self._world_count = 0
        self._lock = threading.RLock()

        if self._event_logger is not None:
            self._record(
                self._event_logger.log_registry_init,
                admin, pool.general_source(), pool.provider_base(), versioning
            )

    # ========== Transaction boundary ==========

    def _mutate(self, operation: str, caller: Principal, fn: Callable[[], T]) -> T:
        """Run fn under the writer lock, logging rejections."""
        with self._lock:
            try:
                return fn()
            except RegistryError as e:
                logger.warning("%s rejected for %s: %s", operation, caller, e.message)
                if self._event_logger is not None:
                    self._record(
                        self._event_logger.log_rejected, operation, caller, e.to_response()
                    )
                raise

    def _record(self, event: Callable[..., None], *args: Any) -> None:
        """Write one audit event.

        The audit log never decides the outcome of an operation: a failed
        write is reported and dropped, and the in-memory state stands.
        """
        try:
            event(*args)
        except OSError:
            logger.exception("Event log write failed (%s)", event.__name__)

    def _require_world(self, world_id: int) -> World:
        world = self._worlds.get(world_id)
        if world is None:
            raise NotFoundError("world", world_id)
        return world

    def _require_owner(self, caller: Principal, world: World, operation: str) -> None:
        if world.owner != caller:
            raise NotOwnerError(caller, world.id, operation)

    # ========== Mutations ==========

    def create(
        self,
        caller: Principal,
        name: str,
        endpoint: str,
        chain_id: int,
        contract_address: str | None = None,
    ) -> World:
        """Create a world owned by the caller.

        Preconditions are checked in order; the first failure wins.

        Raises:
            NotWhitelistedError: Caller is not whitelisted
            InvalidArgumentError: Name is empty
            DuplicateNameError: Name is already registered
        """

        def _create() -> World:
            if not self.access.is_whitelisted(caller):
                raise NotWhitelistedError(caller)
            if not name:
                raise InvalidArgumentError("world name must be non-empty")
            existing = self._names.lookup(name)
            if existing is not None:
                raise DuplicateNameError(name, existing)

            world_id = self._world_count + 1
            assignment, now = self.policy.peek(caller, self._world_count)
            world = World(
                id=world_id,
                name=name,
                chain_id=chain_id,
                owner=caller,
                endpoint=endpoint,
                image_ref=assignment.image_ref,
                created_at=now,
                updated_at=now,
                contract_address=contract_address,
                special_index=assignment.special_index,
                version=0 if self.versioning else None,
            )

            # Commit
            self._names.register(name, world_id)
            self._worlds[world_id] = world
            self._world_count = world_id
            self.policy.commit(assignment, now)

            logger.info("World %d '%s' created by %s", world_id, name, caller)
            if self._event_logger is not None:
                self._record(self._event_logger.log_world_created, caller, world)
            return world

        return self._mutate("create", caller, _create)

    def update(
        self,
        caller: Principal,
        world_id: int,
        chain_id: int,
        endpoint: str,
        contract_address: str | None = None,
    ) -> World:
        """Overwrite a world's chain id and endpoint.

        contract_address is only replaced when given. Name, id, owner and
        image are never touched.

        Raises:
            NotFoundError: No world with this id
            NotOwnerError: Caller is not the current owner
        """

        def _update() -> World:
            before = self._require_world(world_id)
            self._require_owner(caller, before, "update")

            changes: dict[str, Any] = {
                "chain_id": chain_id,
                "endpoint": endpoint,
                "updated_at": self._clock.time(),
            }
            if contract_address is not None:
                changes["contract_address"] = contract_address
            if before.version is not None:
                changes["version"] = before.version + 1
            after = before.evolve(**changes)
            self._worlds[world_id] = after

            logger.info("World %d updated by %s", world_id, caller)
            if self._event_logger is not None:
                self._record(self._event_logger.log_world_updated, caller, before, after)
            return after

        return self._mutate("update", caller, _update)

    def transfer(self, caller: Principal, world_id: int, to: Principal) -> World:
        """Hand a world to a new owner.

        The previous owner loses update and transfer rights immediately.

        Raises:
            NotFoundError: No world with this id
            NotOwnerError: Caller is not the current owner
            InvalidArgumentError: New owner is empty
        """

        def _transfer() -> World:
            before = self._require_world(world_id)
            self._require_owner(caller, before, "transfer")
            if not to:
                raise InvalidArgumentError("new owner must be non-empty")

            after = before.evolve(owner=to, updated_at=self._clock.time())
            self._worlds[world_id] = after

            logger.info("World %d transferred %s -> %s", world_id, caller, to)
            if self._event_logger is not None:
                self._record(self._event_logger.log_world_transferred, world_id, caller, to)
            return after

        return self._mutate("transfer", caller, _transfer)

    def add_to_whitelist(self, caller: Principal, principal: Principal) -> None:
        """Admin-only: allow principal to create worlds.

        Raises:
            NotAdminError: Caller is not the admin
            DuplicateWhitelistEntryError: Already whitelisted
        """

        def _add() -> None:
            self.access.require_admin(caller, "add to the whitelist")
            self.access.add_to_whitelist(principal)
            logger.info("%s whitelisted by %s", principal, caller)
            if self._event_logger is not None:
                self._record(self._event_logger.log_whitelist_added, caller, principal)

        self._mutate("add_to_whitelist", caller, _add)

    def add_special_source(self, caller: Principal, ref: str) -> int:
        """Admin-only: append a special image reference.

        Returns:
            The new 1-based pool index

        Raises:
            NotAdminError: Caller is not the admin
            InvalidArgumentError: ref is empty
        """

        def _add() -> int:
            self.access.require_admin(caller, "add special image sources")
            index = self.pool.add_special_source(ref)
            logger.info("Special image source %d added by %s", index, caller)
            if self._event_logger is not None:
                self._record(self._event_logger.log_special_source_added, caller, index, ref)
            return index

        return self._mutate("add_special_source", caller, _add)

    def change_world_image(self, caller: Principal, world_id: int, ref: str) -> World:
        """Admin-only: override a world's image, bypassing selection.

        Clears special_index. special_worlds_count is not changed.

        Raises:
            NotAdminError: Caller is not the admin
            NotFoundError: No world with this id
            InvalidArgumentError: ref is empty
        """

        def _change() -> World:
            self.access.require_admin(caller, "change world images")
            before = self._require_world(world_id)
            if not ref:
                raise InvalidArgumentError("image reference must be non-empty")

            after = before.evolve(image_ref=ref, special_index=None)
            self._worlds[world_id] = after

            logger.info("World %d image changed by %s", world_id, caller)
            if self._event_logger is not None:
                self._record(
                    self._event_logger.log_world_image_changed,
                    caller, world_id, before.image_ref, ref
                )
            return after

        return self._mutate("change_world_image", caller, _change)

    # ========== Reads ==========

    def get_by_id(self, world_id: int) -> World:
        """Raises NotFoundError if no world has this id."""
        with self._lock:
            return self._require_world(world_id)

    def get_by_name(self, name: str) -> World:
        """Raises NotFoundError if no world has this name."""
        with self._lock:
            world_id = self._names.lookup(name)
            if world_id is None:
                raise NotFoundError("world", name)
            return self._worlds[world_id]

    def owner_of(self, world_id: int) -> Principal:
        return self.get_by_id(world_id).owner

    def list_names(self) -> list[str]:
        """All names in creation order. A fresh list per call."""
        with self._lock:
            return self._names.names()

    def worlds_by_owner(self, owner: Principal) -> list[World]:
        """Worlds currently owned by a principal, in id order."""
        with self._lock:
            return [w for _, w in sorted(self._worlds.items()) if w.owner == owner]

    def is_whitelisted(self, principal: Principal) -> bool:
        with self._lock:
            return self.access.is_whitelisted(principal)

    @property
    def admin(self) -> Principal:
        return self.access.admin

    @property
    def world_count(self) -> int:
        with self._lock:
            return self._world_count

    @property
    def special_worlds_count(self) -> int:
        with self._lock:
            return self.policy.special_worlds_count

    def snapshot(self) -> dict[str, Any]:
        """JSON-serializable dump of the full registry state."""
        with self._lock:
            return {
                "admin": self.access.admin,
                "world_count": self._world_count,
                "special_worlds_count": self.policy.special_worlds_count,
                "whitelist": self.access.whitelisted(),
                "general_source": self.pool.general_source(),
                "provider_base": self.pool.provider_base(),
                "special_sources": self.pool.special_sources(),
                "worlds": [w.to_dict() for _, w in sorted(self._worlds.items())],
            }
