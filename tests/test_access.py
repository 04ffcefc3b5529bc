"""Tests for the single-owner AccessController."""

from __future__ import annotations

import logging

import pytest

from token_registry.world.access import AccessController
from token_registry.world.errors import InvalidArgument, Unauthorized
from token_registry.world.ownership import NULL_IDENTITY


class TestAccessController:
    def test_owner_passes(self) -> None:
        gate = AccessController("deployer")
        gate.require_owner("deployer")
        assert gate.is_owner("deployer")
        assert gate.owner == "deployer"

    @pytest.mark.parametrize("caller", ["alice", "", "Deployer", "deployer "])
    def test_others_rejected(self, caller: str) -> None:
        """Comparison is exact equality."""
        gate = AccessController("deployer")

        with pytest.raises(Unauthorized) as exc_info:
            gate.require_owner(caller)

        assert exc_info.value.caller == caller
        assert not gate.is_owner(caller)

    @pytest.mark.parametrize("owner", ["", NULL_IDENTITY])
    def test_null_owner_rejected(self, owner: str) -> None:
        with pytest.raises(InvalidArgument):
            AccessController(owner)

    def test_rejection_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        gate = AccessController("deployer")

        with caplog.at_level(logging.WARNING, logger="token_registry.world.access"):
            with pytest.raises(Unauthorized):
                gate.require_owner("mallory")

        assert "mallory" in caplog.text
