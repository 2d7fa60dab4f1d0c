# World registry package
from .registry import WorldRegistry
from .types import World, Principal
from .access_control import AccessControl
from .image_pool import ImageSourcePool
from .selection import SpecialSelectionPolicy, ImageAssignment, SEVEN_DAYS_SECONDS
from .token_uri import TokenURIResolver
from .environment import ClockProtocol, EntropySource, RealClock, DigestEntropy
from .name_index import NameIndex
from .logger import EventLogger
from .factory import build_registry, create_event_logger
from .errors import (
    ErrorCode, ErrorCategory, ErrorResponse,
    RegistryError, InvalidArgumentError, NotWhitelistedError, NotAdminError,
    NotOwnerError, DuplicateNameError, DuplicateWhitelistEntryError, NotFoundError,
)

__all__ = [
    "WorldRegistry",
    "World", "Principal",
    "AccessControl",
    "ImageSourcePool",
    "SpecialSelectionPolicy", "ImageAssignment", "SEVEN_DAYS_SECONDS",
    "TokenURIResolver",
    "ClockProtocol", "EntropySource", "RealClock", "DigestEntropy",
    "NameIndex",
    "EventLogger",
    "build_registry", "create_event_logger",
    # Errors
    "ErrorCode", "ErrorCategory", "ErrorResponse",
    "RegistryError", "InvalidArgumentError", "NotWhitelistedError", "NotAdminError",
    "NotOwnerError", "DuplicateNameError", "DuplicateWhitelistEntryError", "NotFoundError",
]
