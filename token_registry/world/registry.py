"""Token Registry - sequential minting, prices and metadata URIs

The registry owns three pieces of state:
1. The next token id (starts at 1, +1 per successful mint, never reused)
2. The price table {token_id: price}
3. The URI table {token_id: uri}; immutable after mint

Ownership lives in an OwnershipLedger the registry delegates to. Minting and
repricing are owner-only (see AccessController). Queries are open to anyone.

Every mutation runs as a transaction: the registry checkpoints its fields
and the ledger, buffers notifications, and on any error restores the
checkpoint and drops the buffered notifications. Observers only ever see
events for committed operations.

Usage:
    registry = TokenRegistry("Gallery", "GAL", owner="deployer")
    token_id = registry.mint("deployer", "ipfs://a", "alice", 100)
    registry.get_token_price(token_id)        # 100
    registry.set_token_price("deployer", token_id, 150)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ..config_schema import AppConfig
from .access import AccessController
from .errors import InvalidArgument, TokenNotFound
from .events import EventLog, Minted, PriceUpdate, RegistryEvent
from .logger import EventLogger
from .ownership import InMemoryOwnershipLedger, OwnershipLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Point-in-time copy of registry and ledger state, for comparisons."""

    next_token_id: int
    prices: tuple[tuple[int, int], ...]
    uris: tuple[tuple[int, str], ...]
    owners: tuple[tuple[int, str], ...]
    event_count: int


def _require_price(price: object) -> int:
    # bool is an int subclass; a price of True is a caller bug
    if isinstance(price, bool) or not isinstance(price, int) or price < 0:
        raise InvalidArgument(f"Price must be a non-negative integer, got {price!r}", price=price)
    return price


def _require_token_id(token_id: object) -> int:
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise InvalidArgument(f"Token id must be an integer, got {token_id!r}", token_id=repr(token_id))
    return token_id


def _require_uri(uri: object) -> str:
    if not isinstance(uri, str):
        raise InvalidArgument(f"URI must be a string, got {type(uri).__name__}")
    return uri


class TokenRegistry:
    """Issues numbered tokens and tracks their price and metadata URI.

    Thread-safety: This class is NOT thread-safe. Mutations must be
    serialized by the caller (one transaction at a time).
    """

    _name: str
    _symbol: str
    _access: AccessController
    _ledger: OwnershipLedger
    _event_log: EventLog
    _next_token_id: int
    _prices: dict[int, int]
    _uris: dict[int, str]
    _in_transaction: bool

    def __init__(
        self,
        name: str,
        symbol: str,
        owner: str,
        ledger: OwnershipLedger | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        """
        Args:
            name: Collection name, fixed for the instance's lifetime
            symbol: Collection symbol, fixed for the instance's lifetime
            owner: Deploying identity (only caller allowed to mint/reprice)
            ledger: Ownership ledger to delegate to (default: in-memory)
            event_log: Where committed notifications go (default: new EventLog)
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgument("Collection name must be a non-empty string")
        if not isinstance(symbol, str) or not symbol:
            raise InvalidArgument("Collection symbol must be a non-empty string")

        self._name = name
        self._symbol = symbol
        self._access = AccessController(owner)
        self._ledger = ledger if ledger is not None else InMemoryOwnershipLedger()
        self._event_log = event_log if event_log is not None else EventLog()
        self._next_token_id = 1
        self._prices = {}
        self._uris = {}
        self._in_transaction = False

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        ledger: OwnershipLedger | None = None,
        event_logger: EventLogger | None = None,
    ) -> "TokenRegistry":
        """Create a registry from validated config.

        If logging.enabled is set and no event_logger is given, committed
        notifications are written to logging.output_file.
        """
        sink = event_logger
        if sink is None and config.logging.enabled:
            sink = EventLogger(config.logging.output_file)

        return cls(
            name=config.registry.name,
            symbol=config.registry.symbol,
            owner=config.registry.owner,
            ledger=ledger,
            event_log=EventLog(sink=sink),
        )

    # ===== METADATA =====

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def owner(self) -> str:
        """The contract owner identity."""
        return self._access.owner

    @property
    def next_token_id(self) -> int:
        return self._next_token_id

    @property
    def total_minted(self) -> int:
        return self._next_token_id - 1

    @property
    def ledger(self) -> OwnershipLedger:
        return self._ledger

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    # ===== TRANSACTIONS =====

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[list[RegistryEvent]]:
        """Run a block all-or-nothing.

        Yields a list to buffer events into; they reach the event log only if
        the block completes without raising.
        """
        if self._in_transaction:
            raise RuntimeError(f"Nested registry transaction ({operation})")

        saved_next_id = self._next_token_id
        saved_prices = dict(self._prices)
        saved_uris = dict(self._uris)
        ledger_checkpoint = self._ledger.checkpoint()
        pending: list[RegistryEvent] = []
        self._in_transaction = True

        try:
            yield pending
        except Exception as e:
            self._next_token_id = saved_next_id
            self._prices = saved_prices
            self._uris = saved_uris
            self._ledger.restore(ledger_checkpoint)
            logger.debug("Rolled back %s: %s", operation, e)
            raise
        finally:
            self._in_transaction = False

        # Committed; listeners may now issue follow-up operations
        self._event_log.extend(pending)

    # ===== MUTATIONS (owner only) =====

    def mint(self, caller: str, uri: str, recipient: str, price: int) -> int:
        """Mint the next token to recipient.

        Args:
            caller: Identity invoking the mint; must be the contract owner
            uri: Off-chain metadata pointer
            recipient: Initial owner of the token
            price: Non-negative price in the smallest native unit

        Returns:
            The new token id

        Raises:
            Unauthorized: If caller is not the contract owner
            InvalidArgument: If price or uri is malformed
            InvalidRecipient: If recipient is the null identity
            DuplicateToken: If the ledger already holds the next id
            TokenNotFound: If the ledger does not report the new token
        """
        self._access.require_owner(caller)
        _require_price(price)
        _require_uri(uri)

        with self._transaction("mint") as pending:
            token_id = self._next_token_id
            self._prices[token_id] = price
            self._ledger.create(recipient, token_id)
            if not self._ledger.exists(token_id):
                raise TokenNotFound(token_id)
            self._uris[token_id] = uri
            self._next_token_id += 1
            pending.append(Minted(minter=recipient, price=price, token_id=token_id, uri=uri))

        logger.info("Minted token %d to '%s' at price %d", token_id, recipient, price)
        return token_id

    def set_token_price(self, caller: str, token_id: int, new_price: int) -> None:
        """Change the price of an existing token.

        Any non-negative value is accepted, including the current price.

        Raises:
            Unauthorized: If caller is not the contract owner
            InvalidArgument: If token_id or new_price is malformed
            TokenNotFound: If token_id does not exist
        """
        self._access.require_owner(caller)
        _require_token_id(token_id)
        _require_price(new_price)

        with self._transaction("set_token_price") as pending:
            self._require_token(token_id)
            old_price = self._prices[token_id]
            self._prices[token_id] = new_price
            pending.append(
                PriceUpdate(
                    owner=self._access.owner,
                    old_price=old_price,
                    new_price=new_price,
                    token_id=token_id,
                )
            )

        logger.info("Token %d repriced %d -> %d", token_id, old_price, new_price)

    # ===== QUERIES (anyone) =====

    def _require_token(self, token_id: int) -> None:
        _require_token_id(token_id)
        # A shared ledger may hold ids this registry never issued
        if not self._ledger.exists(token_id) or token_id not in self._prices:
            raise TokenNotFound(token_id)

    def get_token_uri(self, token_id: int) -> str:
        """Raises TokenNotFound unless the ledger knows token_id."""
        self._require_token(token_id)
        return self._uris[token_id]

    def get_token_price(self, token_id: int) -> int:
        """Raises TokenNotFound unless the ledger knows token_id."""
        self._require_token(token_id)
        return self._prices[token_id]

    def owner_of(self, token_id: int) -> str:
        self._require_token(token_id)
        return self._ledger.owner_of(token_id)

    def snapshot(self) -> RegistrySnapshot:
        """Capture counter, tables, ledger ownership and event count.

        Ownership is recorded for every id up to and including the next id,
        so a stray ledger entry for an unallocated id also shows up.
        """
        owners = tuple(
            (tid, self._ledger.owner_of(tid))
            for tid in range(1, self._next_token_id + 1)
            if self._ledger.exists(tid)
        )
        return RegistrySnapshot(
            next_token_id=self._next_token_id,
            prices=tuple(sorted(self._prices.items())),
            uris=tuple(sorted(self._uris.items())),
            owners=owners,
            event_count=len(self._event_log),
        )
