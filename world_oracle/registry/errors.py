"""Error taxonomy for registry operations.

Every rejected operation raises a subclass of RegistryError. Each error
carries a machine-readable code and category so callers can switch on
them, and can be rendered as a standardized error response.

Usage:
    from world_oracle.registry.errors import NotOwnerError, RegistryError

    try:
        registry.update("mallory", 1, chain_id=2, endpoint="x")
    except RegistryError as e:
        return e.to_response()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input
    - PERMISSION: Caller not authorized
    - RESOURCE: Record not found, already exists
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Validation errors
    INVALID_ARGUMENT = "invalid_argument"

    # Permission errors
    NOT_WHITELISTED = "not_whitelisted"
    NOT_AUTHORIZED = "not_authorized"
    NOT_OWNER = "not_owner"

    # Resource errors
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    ALREADY_LISTED = "already_listed"


@dataclass
class ErrorResponse:
    """Standardized error response.

    All error responses include:
    - success: Always False
    - error: Human-readable message
    - code: Machine-readable error code
    - category: Error category (validation, permission, resource)
    - retriable: Whether the operation should be retried
    - details: Optional additional context
    """

    success: bool = False
    error: str = ""
    code: str = ""
    category: str = ""
    retriable: bool = False
    details: dict[str, object] | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


class RegistryError(Exception):
    """Base class for all rejected registry operations."""

    code: ErrorCode = ErrorCode.INVALID_ARGUMENT
    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(self, message: str, **details: object) -> None:
        self.message = message
        self.details = dict(details)
        super().__init__(message)

    def to_response(self) -> dict[str, object]:
        """Render as a standardized error response dict."""
        return ErrorResponse(
            error=self.message,
            code=self.code.value,
            category=self.category.value,
            retriable=False,
            details=self.details or None,
        ).to_dict()


class InvalidArgumentError(RegistryError):
    """Raised when an operation receives an unusable argument."""

    code = ErrorCode.INVALID_ARGUMENT
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, **details: object) -> None:
        super().__init__(message, **details)


class NotWhitelistedError(RegistryError):
    """Raised when a caller outside the whitelist tries to create a world."""

    code = ErrorCode.NOT_WHITELISTED
    category = ErrorCategory.PERMISSION

    def __init__(self, principal: str) -> None:
        self.principal = principal
        super().__init__(
            f"Sender '{principal}' is not in the whitelist", principal=principal
        )


class NotAdminError(RegistryError):
    """Raised when a non-admin caller invokes an administrative operation."""

    code = ErrorCode.NOT_AUTHORIZED
    category = ErrorCategory.PERMISSION

    def __init__(self, principal: str, operation: str) -> None:
        self.principal = principal
        self.operation = operation
        super().__init__(
            f"Only the admin can {operation}, not '{principal}'",
            principal=principal,
            operation=operation,
        )


class NotOwnerError(RegistryError):
    """Raised when a caller other than the current owner mutates a world."""

    code = ErrorCode.NOT_OWNER
    category = ErrorCategory.PERMISSION

    def __init__(self, principal: str, world_id: int, operation: str) -> None:
        self.principal = principal
        self.world_id = world_id
        self.operation = operation
        super().__init__(
            f"Only owner can {operation} world {world_id}, not '{principal}'",
            principal=principal,
            world_id=world_id,
        )


class DuplicateNameError(RegistryError):
    """Raised when creating a world whose name is already registered."""

    code = ErrorCode.ALREADY_EXISTS
    category = ErrorCategory.RESOURCE

    def __init__(self, name: str, existing_id: int) -> None:
        self.name = name
        self.existing_id = existing_id
        super().__init__(
            f"Name must be unique: '{name}' is already world {existing_id}",
            name=name,
            existing_id=existing_id,
        )


class DuplicateWhitelistEntryError(RegistryError):
    """Raised when whitelisting a principal that is already whitelisted."""

    code = ErrorCode.ALREADY_LISTED
    category = ErrorCategory.RESOURCE

    def __init__(self, principal: str) -> None:
        self.principal = principal
        super().__init__(
            f"Address '{principal}' is already in the whitelist", principal=principal
        )


class NotFoundError(RegistryError):
    """Raised when a referenced world or pool entry does not exist."""

    code = ErrorCode.NOT_FOUND
    category = ErrorCategory.RESOURCE

    def __init__(self, kind: str, key: object) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' not found", kind=kind, key=key)
