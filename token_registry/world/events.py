"""Notifications emitted by the token registry.

Events are buffered while a transaction runs and appended to the EventLog
only when it commits, so observers never see an event for a rolled-back
operation. The log assigns each event a monotonic sequence number.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, ClassVar, Union

from .logger import EventLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Minted:
    """A new token was created."""

    event_type: ClassVar[str] = "minted"

    minter: str  # Recipient of the new token
    price: int
    token_id: int
    uri: str
    sequence: int = 0  # Assigned at commit

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


@dataclass(frozen=True)
class PriceUpdate:
    """The contract owner changed a token's price."""

    event_type: ClassVar[str] = "price_update"

    owner: str
    old_price: int
    new_price: int
    token_id: int
    sequence: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


RegistryEvent = Union[Minted, PriceUpdate]
EventListener = Callable[[RegistryEvent], None]


class EventLog:
    """Append-only, ordered log of committed registry events.

    Optionally mirrors every appended event to an EventLogger (JSONL file)
    and notifies subscribed listeners in subscription order.
    """

    _events: list[RegistryEvent]
    _listeners: list[EventListener]
    _sink: EventLogger | None

    def __init__(self, sink: EventLogger | None = None) -> None:
        self._events = []
        self._listeners = []
        self._sink = sink

    def append(self, event: RegistryEvent) -> RegistryEvent:
        """Append a committed event, stamping its sequence number.

        The operation behind the event has already committed, so a failing
        sink or listener is logged and skipped rather than raised. The
        in-memory log always holds the event; the file may miss it.

        Returns the stamped event.
        """
        stamped = replace(event, sequence=len(self._events) + 1)
        self._events.append(stamped)
        if self._sink is not None:
            data = stamped.to_dict()
            del data["event_type"]
            del data["sequence"]
            try:
                self._sink.log(stamped.event_type, data, sequence=stamped.sequence)
            except Exception:
                logger.exception("Event sink failed for %s #%d", stamped.event_type, stamped.sequence)
        for listener in self._listeners:
            try:
                listener(stamped)
            except Exception:
                logger.exception("Event listener failed for %s #%d", stamped.event_type, stamped.sequence)
        return stamped

    def extend(self, events: list[RegistryEvent]) -> None:
        for event in events:
            self.append(event)

    def subscribe(self, listener: EventListener) -> None:
        """Call listener with every event appended from now on."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def events(self, event_type: str | None = None) -> list[RegistryEvent]:
        """All committed events, optionally filtered by event_type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e.event_type == event_type]

    def read_recent(self, n: int = 50) -> list[RegistryEvent]:
        if n <= 0:
            return []
        return self._events[-n:]

    def __len__(self) -> int:
        return len(self._events)
