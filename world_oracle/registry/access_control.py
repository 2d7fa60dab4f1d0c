"""Whitelist and admin principal.

Creation rights are granted by whitelisting. The admin (the principal that
deployed the registry) is whitelisted from the start and is the only
principal allowed to whitelist others. There is no removal.
"""

from __future__ import annotations

import logging

from .errors import DuplicateWhitelistEntryError, InvalidArgumentError, NotAdminError
from .types import Principal

logger = logging.getLogger(__name__)


class AccessControl:
    """Tracks the admin principal and the creation whitelist.

    Not thread-safe on its own; WorldRegistry calls it under its lock.
    """

    def __init__(self, admin: Principal) -> None:
        if not admin:
            raise InvalidArgumentError("admin principal must be non-empty")
        self._admin = admin
        # dict keeps insertion order for whitelisted()
        self._whitelist: dict[Principal, bool] = {admin: True}

    @property
    def admin(self) -> Principal:
        return self._admin

    def is_admin(self, principal: Principal) -> bool:
        return principal == self._admin

    def require_admin(self, principal: Principal, operation: str) -> None:
        """Raise NotAdminError unless principal is the admin."""
        if not self.is_admin(principal):
            raise NotAdminError(principal, operation)

    def is_whitelisted(self, principal: Principal) -> bool:
        return self._whitelist.get(principal, False)

    def add_to_whitelist(self, principal: Principal) -> None:
        """Whitelist a principal.

        Adding twice is an error, not a no-op.

        Raises:
            InvalidArgumentError: If principal is empty
            DuplicateWhitelistEntryError: If principal is already whitelisted
        """
        if not principal:
            raise InvalidArgumentError("principal must be non-empty")
        if self.is_whitelisted(principal):
            raise DuplicateWhitelistEntryError(principal)
        self._whitelist[principal] = True
        logger.debug("Whitelisted %s", principal)

    def whitelisted(self) -> list[Principal]:
        """All whitelisted principals, admin first."""
        return [p for p, allowed in self._whitelist.items() if allowed]
