"""Scenario replay - run a YAML list of registry operations in order

A scenario file looks like:

    steps:
      - op: mint
        caller: deployer
        uri: ipfs://a
        recipient: alice
        price: 100
      - op: set_price
        caller: deployer
        token_id: 1
        price: 150
      - op: transfer
        caller: alice
        from: alice
        to: bob
        token_id: 1
      - op: get_price
        token_id: 1

Each step produces one result dict. Rejected steps produce the error's
ErrorResponse dict; replay continues with the next step.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import Field, StrictInt

from .config_schema import StrictModel
from .world.errors import InvalidArgument, TokenRegistryError
from .world.ownership import InMemoryOwnershipLedger
from .world.registry import TokenRegistry

logger = logging.getLogger(__name__)


class MintStep(StrictModel):
    op: Literal["mint"]
    caller: str
    uri: str
    recipient: str
    price: StrictInt


class SetPriceStep(StrictModel):
    op: Literal["set_price"]
    caller: str
    token_id: StrictInt
    price: StrictInt


class TransferStep(StrictModel):
    op: Literal["transfer"]
    caller: str
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    token_id: StrictInt


class QueryStep(StrictModel):
    op: Literal["get_price", "get_uri", "owner_of"]
    token_id: StrictInt


Step = Annotated[
    Union[MintStep, SetPriceStep, TransferStep, QueryStep],
    Field(discriminator="op"),
]


class Scenario(StrictModel):
    """A validated list of steps."""

    steps: list[Step] = Field(default_factory=list)


def load_scenario(path: str | Path) -> Scenario:
    """Load and validate a scenario YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        pydantic.ValidationError: If a step is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return Scenario.model_validate(raw)


def _execute(registry: TokenRegistry, step: Any) -> Any:
    if isinstance(step, MintStep):
        return registry.mint(step.caller, step.uri, step.recipient, step.price)
    if isinstance(step, SetPriceStep):
        registry.set_token_price(step.caller, step.token_id, step.price)
        return None
    if isinstance(step, TransferStep):
        ledger = registry.ledger
        if not isinstance(ledger, InMemoryOwnershipLedger):
            raise InvalidArgument("Ledger does not support transfers")
        ledger.transfer(step.caller, step.from_id, step.to_id, step.token_id)
        return None
    if step.op == "get_price":
        return registry.get_token_price(step.token_id)
    if step.op == "get_uri":
        return registry.get_token_uri(step.token_id)
    return registry.owner_of(step.token_id)


def run_scenario(registry: TokenRegistry, scenario: Scenario) -> list[dict[str, Any]]:
    """Execute every step against registry.

    Returns:
        One dict per step: {"step", "op", "success", "result"} on success,
        or the error response plus "step" and "op" on rejection.
    """
    results: list[dict[str, Any]] = []
    for index, step in enumerate(scenario.steps, start=1):
        try:
            value = _execute(registry, step)
        except TokenRegistryError as e:
            logger.warning("Step %d (%s) rejected: %s", index, step.op, e)
            results.append({"step": index, "op": step.op, **e.to_response()})
            continue
        results.append({"step": index, "op": step.op, "success": True, "result": value})
    return results
