"""Error taxonomy for the token registry.

Every rejected operation raises a TokenRegistryError subclass. The registry
aborts the whole transaction on any of them, so callers can treat an error
as "nothing happened".

Each error carries a machine-readable code and category so that callers
(the scenario runner, an RPC layer) can switch on them without parsing
messages.

Usage:
    from token_registry.world.errors import TokenNotFound

    try:
        registry.get_token_price(7)
    except TokenNotFound as e:
        print(e.to_response())
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input
    - PERMISSION: Caller not authorized
    - RESOURCE: Token missing or already present
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Validation errors
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_RECIPIENT = "invalid_recipient"

    # Permission errors
    NOT_AUTHORIZED = "not_authorized"
    NOT_OWNER = "not_owner"

    # Resource errors
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"


@dataclass
class ErrorResponse:
    """Standardized error response.

    success is always False. retriable is always False for this registry:
    no error depends on timing.
    """

    success: bool = False
    error: str = ""  # Human-readable message
    code: str = ""  # Machine-readable error code
    category: str = ""  # validation, permission, resource
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


class TokenRegistryError(Exception):
    """Base for all registry and ledger errors."""

    code: ErrorCode = ErrorCode.INVALID_ARGUMENT
    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(self, message: str, **details: object) -> None:
        self.message = message
        self.details = dict(details)
        super().__init__(message)

    def to_response(self) -> dict[str, object]:
        """Render as an ErrorResponse dict."""
        return ErrorResponse(
            error=self.message,
            code=self.code.value,
            category=self.category.value,
            retriable=False,
            details=self.details or None,
        ).to_dict()


class Unauthorized(TokenRegistryError):
    """Raised when a gated operation is called by anyone but the contract owner."""

    code = ErrorCode.NOT_AUTHORIZED
    category = ErrorCategory.PERMISSION

    def __init__(self, caller: str, owner: str) -> None:
        self.caller = caller
        super().__init__(
            f"'{caller}' is not the contract owner",
            caller=caller,
            owner=owner,
        )


class TokenNotFound(TokenRegistryError):
    """Raised when a token id is not known to the ownership ledger."""

    code = ErrorCode.NOT_FOUND
    category = ErrorCategory.RESOURCE

    def __init__(self, token_id: int) -> None:
        self.token_id = token_id
        super().__init__(f"Token {token_id} does not exist", token_id=token_id)


class InvalidRecipient(TokenRegistryError):
    """Raised when a token would be assigned to the null identity."""

    code = ErrorCode.INVALID_RECIPIENT
    category = ErrorCategory.VALIDATION

    def __init__(self, recipient: str | None) -> None:
        self.recipient = recipient
        super().__init__(
            f"Invalid recipient: {recipient!r}",
            recipient=recipient,
        )


class DuplicateToken(TokenRegistryError):
    """Raised when the ledger already holds the token id being created."""

    code = ErrorCode.ALREADY_EXISTS
    category = ErrorCategory.RESOURCE

    def __init__(self, token_id: int) -> None:
        self.token_id = token_id
        super().__init__(f"Token {token_id} already exists", token_id=token_id)


class InvalidArgument(TokenRegistryError):
    """Raised for malformed inputs (negative price, non-string uri)."""

    code = ErrorCode.INVALID_ARGUMENT
    category = ErrorCategory.VALIDATION


class NotTokenOwner(TokenRegistryError):
    """Raised when a caller may not move or approve a token."""

    code = ErrorCode.NOT_OWNER
    category = ErrorCategory.PERMISSION

    def __init__(self, caller: str, token_id: int) -> None:
        self.caller = caller
        self.token_id = token_id
        super().__init__(
            f"'{caller}' is not the owner or approved for token {token_id}",
            caller=caller,
            token_id=token_id,
        )
