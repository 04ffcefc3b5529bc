"""Token Registry package.

- config: Configuration loading and management
- world: Registry kernel - ownership ledger, access control, events
- scenario: YAML scenario replay used by run.py
"""

from __future__ import annotations

__all__: list[str] = []
