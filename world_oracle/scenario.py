"""Scenario files: scripted registry operations.

A scenario is a YAML document with an `operations` list. Each entry names
the operation (`op`), the calling principal, and the operation's inputs.
Operations are validated with Pydantic before anything runs, then applied
in order. A rejected operation is recorded and the run continues.

Usage:
    scenario = load_scenario("config/scenarios/example.yaml")
    results = run_scenario(registry, scenario)
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import Field

from .config_schema import StrictModel
from .registry import RegistryError, TokenURIResolver, WorldRegistry


class CreateOp(StrictModel):
    op: Literal["create"]
    caller: str
    name: str
    endpoint: str
    chain_id: int
    contract_address: str | None = None


class UpdateOp(StrictModel):
    op: Literal["update"]
    caller: str
    world_id: int
    chain_id: int
    endpoint: str
    contract_address: str | None = None


class TransferOp(StrictModel):
    op: Literal["transfer"]
    caller: str
    world_id: int
    to: str


class AddToWhitelistOp(StrictModel):
    op: Literal["add_to_whitelist"]
    caller: str
    principal: str


class AddSpecialSourceOp(StrictModel):
    op: Literal["add_special_source"]
    caller: str
    ref: str


class ChangeWorldImageOp(StrictModel):
    op: Literal["change_world_image"]
    caller: str
    world_id: int
    ref: str


class ResolveOp(StrictModel):
    op: Literal["resolve"]
    world_id: int


Operation = Annotated[
    Union[
        CreateOp,
        UpdateOp,
        TransferOp,
        AddToWhitelistOp,
        AddSpecialSourceOp,
        ChangeWorldImageOp,
        ResolveOp,
    ],
    Field(discriminator="op"),
]


class Scenario(StrictModel):
    """A validated list of operations."""

    operations: list[Operation] = Field(default_factory=list)


def load_scenario(path: str | Path) -> Scenario:
    """Load and validate a scenario YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        pydantic.ValidationError: If an operation is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return Scenario.model_validate(raw)


def apply_operation(
    registry: WorldRegistry,
    resolver: TokenURIResolver,
    operation: Operation,
) -> dict[str, Any]:
    """Apply one operation and describe the outcome.

    Returns:
        {"op": ..., "success": True, ...result} on success, or the
        operation name merged into the standardized error response.
    """
    try:
        if isinstance(operation, CreateOp):
            world = registry.create(
                operation.caller,
                operation.name,
                operation.endpoint,
                operation.chain_id,
                operation.contract_address,
            )
            result: dict[str, Any] = {"world": world.to_dict()}
        elif isinstance(operation, UpdateOp):
            world = registry.update(
                operation.caller,
                operation.world_id,
                operation.chain_id,
                operation.endpoint,
                operation.contract_address,
            )
            result = {"world": world.to_dict()}
        elif isinstance(operation, TransferOp):
            world = registry.transfer(operation.caller, operation.world_id, operation.to)
            result = {"world": world.to_dict()}
        elif isinstance(operation, AddToWhitelistOp):
            registry.add_to_whitelist(operation.caller, operation.principal)
            result = {"principal": operation.principal}
        elif isinstance(operation, AddSpecialSourceOp):
            result = {"index": registry.add_special_source(operation.caller, operation.ref)}
        elif isinstance(operation, ChangeWorldImageOp):
            world = registry.change_world_image(
                operation.caller, operation.world_id, operation.ref
            )
            result = {"world": world.to_dict()}
        else:
            result = {"uri": resolver.resolve(operation.world_id)}
    except RegistryError as e:
        return {"op": operation.op, **e.to_response()}
    return {"op": operation.op, "success": True, **result}


def run_scenario(registry: WorldRegistry, scenario: Scenario) -> list[dict[str, Any]]:
    """Apply every operation in order and return one outcome per operation."""
    resolver = TokenURIResolver(registry)
    return [apply_operation(registry, resolver, op) for op in scenario.operations]
