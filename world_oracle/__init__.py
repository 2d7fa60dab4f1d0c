"""World Oracle source package.

This package contains:
- config: Configuration loading and management
- registry: World registry, access control, image pool, token URIs
"""

from __future__ import annotations

__all__: list[str] = []
