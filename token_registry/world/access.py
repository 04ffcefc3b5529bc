"""Single-owner access control.

One identity (the deployer) may mint and reprice. There is no role
hierarchy and no ownership transfer.
"""

from __future__ import annotations

import logging

from .errors import InvalidArgument, Unauthorized
from .ownership import is_null_identity

logger = logging.getLogger(__name__)


class AccessController:
    """Gate for owner-only registry operations."""

    _owner: str

    def __init__(self, owner: str) -> None:
        if is_null_identity(owner):
            raise InvalidArgument(f"Contract owner cannot be {owner!r}", owner=owner)
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def is_owner(self, caller: str) -> bool:
        return caller == self._owner

    def require_owner(self, caller: str) -> None:
        """Raise Unauthorized unless caller is the contract owner.

        Has no side effects on success.
        """
        if caller != self._owner:
            logger.warning("Rejected owner-only call from '%s'", caller)
            raise Unauthorized(caller, self._owner)
