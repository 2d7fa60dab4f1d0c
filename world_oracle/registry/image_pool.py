"""Image sources for world display images.

Holds one general (default) image reference, the provider base path that
prefixes every resolved URI, and an append-only list of special references
indexed from 1. The pool only stores candidates; SpecialSelectionPolicy
decides which one a new world gets.
"""

from __future__ import annotations

from .errors import InvalidArgumentError, NotFoundError


class ImageSourcePool:
    """Ordered special references plus a fixed general reference."""

    def __init__(
        self,
        general_source: str,
        provider_base: str,
        special_sources: list[str] | None = None,
    ) -> None:
        if not general_source:
            raise InvalidArgumentError("general image source must be non-empty")
        self._general_source = general_source
        self._provider_base = provider_base
        self._special: list[str] = []
        for ref in special_sources or []:
            self.add_special_source(ref)

    def general_source(self) -> str:
        return self._general_source

    def provider_base(self) -> str:
        return self._provider_base

    def add_special_source(self, ref: str) -> int:
        """Append a special reference.

        Returns:
            The new entry's 1-based index

        Raises:
            InvalidArgumentError: If ref is empty
        """
        if not ref:
            raise InvalidArgumentError("special image source must be non-empty")
        self._special.append(ref)
        return len(self._special)

    def special_count(self) -> int:
        return len(self._special)

    def special_source(self, index: int) -> str:
        """Get the special reference at a 1-based index.

        Raises:
            NotFoundError: If index is outside 1..special_count()
        """
        if index < 1 or index > len(self._special):
            raise NotFoundError("special source", index)
        return self._special[index - 1]

    def special_sources(self) -> list[str]:
        return list(self._special)
