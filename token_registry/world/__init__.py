# Registry kernel package
from .access import AccessController
from .errors import (
    ErrorCategory, ErrorCode, ErrorResponse,
    TokenRegistryError, Unauthorized, TokenNotFound, InvalidRecipient,
    DuplicateToken, InvalidArgument, NotTokenOwner,
)
from .events import EventLog, Minted, PriceUpdate, RegistryEvent
from .logger import EventLogger
from .ownership import (
    NULL_IDENTITY, InMemoryOwnershipLedger, LedgerCheckpoint, OwnershipLedger,
    is_null_identity,
)
from .registry import RegistrySnapshot, TokenRegistry

__all__ = [
    "AccessController",
    "ErrorCategory", "ErrorCode", "ErrorResponse",
    "TokenRegistryError", "Unauthorized", "TokenNotFound", "InvalidRecipient",
    "DuplicateToken", "InvalidArgument", "NotTokenOwner",
    "EventLog", "Minted", "PriceUpdate", "RegistryEvent",
    "EventLogger",
    "NULL_IDENTITY", "InMemoryOwnershipLedger", "LedgerCheckpoint", "OwnershipLedger",
    "is_null_identity",
    "RegistrySnapshot", "TokenRegistry",
]
