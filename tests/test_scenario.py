"""Tests for scenario loading and replay."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from token_registry.scenario import MintStep, Scenario, TransferStep, load_scenario, run_scenario
from token_registry.world.registry import TokenRegistry

EXAMPLE = Path(__file__).parent.parent / "config" / "scenarios" / "example.yaml"


class TestLoadScenario:
    def test_example_loads(self) -> None:
        scenario = load_scenario(EXAMPLE)

        assert len(scenario.steps) == 7
        assert isinstance(scenario.steps[0], MintStep)
        assert isinstance(scenario.steps[5], TransferStep)

    def test_transfer_uses_from_and_to(self) -> None:
        scenario = Scenario.model_validate({
            "steps": [{"op": "transfer", "caller": "a", "from": "a", "to": "b", "token_id": 1}]
        })
        step = scenario.steps[0]
        assert isinstance(step, TransferStep)
        assert (step.from_id, step.to_id) == ("a", "b")

    def test_unknown_op_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Scenario.model_validate({"steps": [{"op": "burn", "token_id": 1}]})

    def test_extra_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Scenario.model_validate({"steps": [{"op": "get_uri", "token_id": 1, "caller": "x"}]})

    @pytest.mark.parametrize(
        "step",
        [
            {"op": "mint", "caller": "d", "uri": "u", "recipient": "a", "price": True},
            {"op": "mint", "caller": "d", "uri": "u", "recipient": "a", "price": "7"},
            {"op": "set_price", "caller": "d", "token_id": 1, "price": 1.0},
            {"op": "set_price", "caller": "d", "token_id": True, "price": 5},
            {"op": "get_price", "token_id": "1"},
        ],
    )
    def test_numbers_are_not_coerced(self, step: dict) -> None:
        """Booleans, numeric strings and floats are not accepted as ints."""
        with pytest.raises(ValidationError):
            Scenario.model_validate({"steps": [step]})

    def test_yaml_boolean_price_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            "steps:\n"
            "  - op: mint\n"
            "    caller: deployer\n"
            "    uri: ipfs://a\n"
            "    recipient: alice\n"
            "    price: true\n"
        )
        with pytest.raises(ValidationError):
            load_scenario(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_scenario(path).steps == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_scenario(tmp_path / "nope.yaml")


class TestRunScenario:
    def test_example_results(self) -> None:
        """The shipped example: two mints, a reprice, a rejected reprice, a transfer."""
        registry = TokenRegistry("Gallery", "GAL", owner="deployer")

        results = run_scenario(registry, load_scenario(EXAMPLE))

        assert [r["success"] for r in results] == [True, True, True, False, True, True, True]
        assert results[0]["result"] == 1
        assert results[1]["result"] == 2
        assert results[3]["code"] == "not_authorized"
        assert results[3]["step"] == 4
        assert results[4]["result"] == 150
        assert results[6]["result"] == "carol"
        assert len(registry.event_log) == 3

    def test_queries_on_missing_token(self) -> None:
        registry = TokenRegistry("C", "C", owner="deployer")
        scenario = Scenario.model_validate({
            "steps": [
                {"op": "get_uri", "token_id": 1},
                {"op": "owner_of", "token_id": 1},
            ]
        })

        results = run_scenario(registry, scenario)

        assert [r["code"] for r in results] == ["not_found", "not_found"]
        assert all(r["success"] is False for r in results)

    def test_transfer_needs_transferable_ledger(self) -> None:
        """A ledger without transfer support rejects transfer steps."""

        class MinimalLedger:
            def __init__(self) -> None:
                self.owners: dict[int, str] = {}

            def create(self, recipient: str, token_id: int) -> None:
                self.owners[token_id] = recipient

            def exists(self, token_id: int) -> bool:
                return token_id in self.owners

            def owner_of(self, token_id: int) -> str:
                return self.owners[token_id]

            def checkpoint(self) -> object:
                return dict(self.owners)

            def restore(self, checkpoint: object) -> None:
                assert isinstance(checkpoint, dict)
                self.owners = dict(checkpoint)

        registry = TokenRegistry("C", "C", owner="deployer", ledger=MinimalLedger())
        scenario = Scenario.model_validate({
            "steps": [
                {"op": "mint", "caller": "deployer", "uri": "u", "recipient": "a", "price": 1},
                {"op": "transfer", "caller": "a", "from": "a", "to": "b", "token_id": 1},
            ]
        })

        results = run_scenario(registry, scenario)

        assert results[0]["success"] is True
        assert results[1]["code"] == "invalid_argument"
        assert registry.owner_of(1) == "a"
