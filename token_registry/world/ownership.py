"""Ownership Ledger - who owns which token id

The registry does not track owners itself. It depends on the OwnershipLedger
protocol below (create / exists / owner_of plus checkpoint / restore for
rollback), so any ledger that satisfies it can be plugged in.

InMemoryOwnershipLedger is the reference implementation used by the runner
and the tests. Beyond the protocol it supports the usual ownership
operations: balances, transfers and single-token approvals.

Usage:
    ledger = InMemoryOwnershipLedger()
    ledger.create("alice", 1)
    ledger.exists(1)          # True
    ledger.owner_of(1)        # "alice"
    ledger.transfer("alice", "alice", "bob", 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .errors import DuplicateToken, InvalidRecipient, NotTokenOwner, TokenNotFound


# The null identity. Tokens can never be assigned to it.
NULL_IDENTITY: str = "0x0000000000000000000000000000000000000000"


def is_null_identity(identity: str | None) -> bool:
    """True for None, the empty string and NULL_IDENTITY."""
    return not identity or identity == NULL_IDENTITY


@runtime_checkable
class OwnershipLedger(Protocol):
    """Capability the token registry requires from an ownership ledger."""

    def create(self, recipient: str, token_id: int) -> None:
        """Assign a new token to recipient.

        Raises:
            InvalidRecipient: If recipient is the null identity
            DuplicateToken: If token_id already exists
        """
        ...

    def exists(self, token_id: int) -> bool:
        ...

    def owner_of(self, token_id: int) -> str:
        """Raises TokenNotFound for unknown ids."""
        ...

    def checkpoint(self) -> object:
        """Capture the ledger state for a later restore()."""
        ...

    def restore(self, checkpoint: object) -> None:
        ...


@dataclass(frozen=True)
class LedgerCheckpoint:
    """Opaque copy of an InMemoryOwnershipLedger's state."""

    owners: tuple[tuple[int, str], ...]
    approvals: tuple[tuple[int, str], ...]


class InMemoryOwnershipLedger:
    """Dict-backed ownership ledger.

    Thread-safety: This class is NOT thread-safe. Mutations are expected to
    be serialized by the caller (one transaction at a time).
    """

    _owners: dict[int, str]
    _approvals: dict[int, str]
    _balances: dict[str, int]

    def __init__(self) -> None:
        self._owners = {}
        self._approvals = {}
        self._balances = {}

    # ===== PROTOCOL =====

    def create(self, recipient: str, token_id: int) -> None:
        """Mint token_id to recipient.

        Raises:
            InvalidRecipient: If recipient is the null identity
            DuplicateToken: If token_id is already owned
        """
        if is_null_identity(recipient):
            raise InvalidRecipient(recipient)
        if token_id in self._owners:
            raise DuplicateToken(token_id)
        self._owners[token_id] = recipient
        self._balances[recipient] = self._balances.get(recipient, 0) + 1

    def exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def owner_of(self, token_id: int) -> str:
        owner = self._owners.get(token_id)
        if owner is None:
            raise TokenNotFound(token_id)
        return owner

    def checkpoint(self) -> LedgerCheckpoint:
        return LedgerCheckpoint(
            owners=tuple(self._owners.items()),
            approvals=tuple(self._approvals.items()),
        )

    def restore(self, checkpoint: object) -> None:
        if not isinstance(checkpoint, LedgerCheckpoint):
            raise TypeError(f"Expected LedgerCheckpoint, got {type(checkpoint).__name__}")
        self._owners = dict(checkpoint.owners)
        self._approvals = dict(checkpoint.approvals)
        # Balances are derived from owners
        self._balances = {}
        for owner in self._owners.values():
            self._balances[owner] = self._balances.get(owner, 0) + 1

    # ===== OWNERSHIP OPERATIONS =====

    def balance_of(self, identity: str) -> int:
        """Number of tokens held by identity (0 if none)."""
        return self._balances.get(identity, 0)

    def tokens_of(self, identity: str) -> list[int]:
        """Token ids held by identity, in ascending order."""
        return sorted(tid for tid, owner in self._owners.items() if owner == identity)

    def get_approved(self, token_id: int) -> str | None:
        """The identity approved to move token_id, if any.

        Raises:
            TokenNotFound: If token_id does not exist
        """
        if token_id not in self._owners:
            raise TokenNotFound(token_id)
        return self._approvals.get(token_id)

    def approve(self, caller: str, approved: str | None, token_id: int) -> None:
        """Let `approved` move token_id on the owner's behalf.

        Passing None (or the null identity) clears the approval. Only the
        current owner may approve.
        """
        owner = self.owner_of(token_id)
        if caller != owner:
            raise NotTokenOwner(caller, token_id)
        if approved is None or is_null_identity(approved):
            self._approvals.pop(token_id, None)
        else:
            self._approvals[token_id] = approved

    def transfer(self, caller: str, from_id: str, to_id: str, token_id: int) -> None:
        """Move token_id from from_id to to_id.

        The caller must be the owner or the approved identity. Any approval
        is cleared by the move.

        Raises:
            TokenNotFound: If token_id does not exist
            NotTokenOwner: If from_id is not the owner or caller may not move it
            InvalidRecipient: If to_id is the null identity
        """
        owner = self.owner_of(token_id)
        if owner != from_id:
            raise NotTokenOwner(from_id, token_id)
        if caller != owner and self._approvals.get(token_id) != caller:
            raise NotTokenOwner(caller, token_id)
        if is_null_identity(to_id):
            raise InvalidRecipient(to_id)

        self._approvals.pop(token_id, None)
        self._owners[token_id] = to_id
        self._balances[from_id] -= 1
        if self._balances[from_id] == 0:
            del self._balances[from_id]
        self._balances[to_id] = self._balances.get(to_id, 0) + 1

    def count(self) -> int:
        """Total number of tokens in the ledger."""
        return len(self._owners)
