"""JSONL event logger - durable record of committed registry notifications"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import get


class EventLogger:
    """Append-only JSONL event log.

    Every line is one event:
        {"timestamp": ..., "sequence": N, "event_type": "minted", ...payload}

    Without an explicit sequence, the counter is monotonic per logger
    instance. An EventLog sink passes each event's own sequence, so file
    lines match EventLog numbering (a reused file in append mode can then
    hold the same sequence more than once, one per run).
    """

    output_path: Path
    _sequence: int

    def __init__(self, output_file: str | Path | None = None, truncate: bool = True) -> None:
        """Initialize the event logger.

        Args:
            output_file: JSONL file path (default: logging.output_file from config)
            truncate: Clear the file on init (new run). With False, appends and
                      continues numbering after the existing lines.
        """
        resolved = output_file or get("logging.output_file") or "events.jsonl"
        self.output_path = Path(resolved)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._sequence = 0

        if truncate or not self.output_path.exists():
            self.output_path.write_text("")
        else:
            self._sequence = len(self._read_lines())

    def log(self, event_type: str, data: dict[str, Any], sequence: int | None = None) -> None:
        """Append one event to the file.

        Args:
            event_type: Event name
            data: Payload merged into the line
            sequence: Caller-assigned sequence (default: next local counter)
        """
        self._sequence = self._sequence + 1 if sequence is None else sequence
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sequence": self._sequence,
            "event_type": event_type,
            **data,
        }
        with open(self.output_path, "a") as f:
            f.write(json.dumps(event) + "\n")

    def _read_lines(self) -> list[str]:
        if not self.output_path.exists():
            return []
        return [line for line in self.output_path.read_text().split("\n") if line]

    def read_recent(self, n: int | None = None) -> list[dict[str, Any]]:
        """Read the last N events from the log.

        N defaults to logging.default_recent from config.
        """
        if n is None:
            default_recent = get("logging.default_recent")
            n = default_recent if isinstance(default_recent, int) else 50
        if n <= 0:
            return []
        lines = self._read_lines()
        recent = lines[-n:] if len(lines) > n else lines
        return [json.loads(line) for line in recent]

    @property
    def sequence(self) -> int:
        """Number of events written so far."""
        return self._sequence
