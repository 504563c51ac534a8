from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from issuer_governance.actions import (
    DEFAULT_REGISTRY,
    Action,
    ActionKind,
    ActionSchema,
    ComposeContext,
    FieldDef,
    FieldKind,
    PendingActionList,
    compose,
)
from issuer_governance.types import ContractRole

CONTEXT = ComposeContext(address_prefix="osmo", base_denom="factory/x/y")


def test_set_minter_produces_tagged_action(address: Callable[..., str]) -> None:
    result = compose(
        DEFAULT_REGISTRY[ActionKind.SET_MINTER],
        {"address": address(11), "allowance": "100"},
        context=CONTEXT,
    )

    assert result.ok
    assert result.action is not None
    assert result.action.to_message() == {"set_minter": {"address": address(11), "allowance": "100"}}


def test_every_invalid_field_is_reported_together() -> None:
    result = compose(
        DEFAULT_REGISTRY[ActionKind.MINT],
        {"to_address": "cosmos1bad", "amount": "12.5"},
        context=CONTEXT,
    )

    assert not result.ok
    assert result.action is None
    assert [error.field for error in result.errors] == ["to_address", "amount"]
    assert result.as_dict() == {"errors": [error.as_dict() for error in result.errors]}


def test_payload_keys_match_schema_fields(address: Callable[..., str]) -> None:
    schema = DEFAULT_REGISTRY[ActionKind.BLACKLIST]

    result = compose(schema, {"address": address(8), "status": "true"}, context=CONTEXT)

    assert result.action is not None
    assert set(result.action.payload) == set(schema.field_names)
    assert result.action.payload["status"] is True


def test_transform_runs_once_and_only_on_valid_values() -> None:
    calls: list[Mapping[str, Any]] = []

    def counting_transform(values: Mapping[str, Any], _: ComposeContext) -> dict[str, Any]:
        calls.append(dict(values))
        return {"wrapped": dict(values)}

    schema = ActionSchema(
        "counted",
        (FieldDef("amount", FieldKind.NUMBER),),
        ContractRole.ISSUER,
        value_transform=counting_transform,
    )

    assert not compose(schema, {"amount": "x"}, context=CONTEXT).ok
    assert calls == []

    result = compose(schema, {"amount": "5"}, context=CONTEXT)
    assert calls == [{"amount": "5"}]
    assert result.action is not None
    assert result.action.to_message() == {"counted": {"wrapped": {"amount": "5"}}}


def test_transform_failure_becomes_validation_error() -> None:
    result = compose(
        DEFAULT_REGISTRY[ActionKind.SET_DENOM_METADATA],
        {
            "base": "factory/x/y",
            "denom_units": "factory/x/y | 1",
            "description": "d",
            "display": "FOO",
            "name": "Foo",
            "symbol": "FOO",
        },
        context=CONTEXT,
    )

    assert not result.ok
    assert [error.field for error in result.errors] == ["denom_units"]


def test_update_members_accepts_empty_sets(address: Callable[..., str]) -> None:
    result = compose(
        DEFAULT_REGISTRY[ActionKind.UPDATE_MEMBERS],
        {"add": address(1), "remove": ""},
        context=CONTEXT,
    )

    assert result.action is not None
    assert result.action.to_message() == {
        "update_members": {"add": [{"addr": address(1), "weight": 1}], "remove": []}
    }


def test_update_admin_renounce_is_null() -> None:
    result = compose(DEFAULT_REGISTRY[ActionKind.UPDATE_ADMIN], {}, context=CONTEXT)

    assert result.action is not None
    assert result.action.to_message() == {"update_admin": {"admin": None}}


def test_to_message_is_a_copy(address: Callable[..., str]) -> None:
    action = Action("update_members", {"add": [], "remove": [address(1)]})

    message = action.to_message()
    message["update_members"]["remove"].clear()

    assert action.payload["remove"] == [address(1)]


def test_pending_action_list_keeps_order_and_deletes_by_index() -> None:
    pending = PendingActionList()
    first = Action("freeze", {"status": True})
    second = Action("freeze", {"status": False})
    third = Action("change_contract_owner", {"new_owner": "x"})
    for action in (first, second, third):
        pending.append(action)

    assert pending.delete(1) == second
    assert pending.snapshot() == (first, third)
    assert len(pending) == 2

    with pytest.raises(IndexError):
        pending.delete(5)

    pending.clear()
    assert list(pending) == []
