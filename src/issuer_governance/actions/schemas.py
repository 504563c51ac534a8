from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from issuer_governance.actions.fields import FieldDef, FieldKind
from issuer_governance.actions.transforms import (
    ValueTransform,
    denom_metadata_transform,
    members_transform,
)
from issuer_governance.types import ContractRole


class ActionKind(StrEnum):
    SET_MINTER = "set_minter"
    MINT = "mint"
    SET_BURNER = "set_burner"
    BURN = "burn"
    SET_BLACKLISTER = "set_blacklister"
    BLACKLIST = "blacklist"
    SET_FREEZER = "set_freezer"
    FREEZE = "freeze"
    CHANGE_CONTRACT_OWNER = "change_contract_owner"
    SET_DENOM_METADATA = "set_denom_metadata"
    UPDATE_ADMIN = "update_admin"
    UPDATE_MEMBERS = "update_members"


@dataclass(slots=True, frozen=True)
class ActionSchema:
    action_kind: str
    fields: tuple[FieldDef, ...]
    target_contract: ContractRole
    value_transform: ValueTransform | None = None
    title: str = ""

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def as_dict(self) -> dict[str, Any]:
        return {
            "action_kind": self.action_kind,
            "title": self.title or self.action_kind,
            "target_contract": self.target_contract.value,
            "fields": [field.as_dict() for field in self.fields],
            "transformed": self.value_transform is not None,
        }


class ActionRegistry:
    """Dispatch table from action kind to schema, fixed once built."""

    def __init__(self, schemas: Iterable[ActionSchema]) -> None:
        table: dict[str, ActionSchema] = {}
        for schema in schemas:
            if schema.action_kind in table:
                raise ValueError(f"duplicate action kind: {schema.action_kind}")
            table[schema.action_kind] = schema
        self._schemas = table

    def get(self, action_kind: str) -> ActionSchema | None:
        return self._schemas.get(str(action_kind))

    def __getitem__(self, action_kind: str) -> ActionSchema:
        schema = self.get(action_kind)
        if schema is None:
            raise KeyError(f"unknown action kind: {action_kind}")
        return schema

    def __contains__(self, action_kind: object) -> bool:
        return str(action_kind) in self._schemas

    def __iter__(self) -> Iterator[ActionSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def kinds(self) -> tuple[str, ...]:
        return tuple(self._schemas)


def _address(name: str, help_text: str | None = None, *, required: bool = True) -> FieldDef:
    return FieldDef(name, FieldKind.ADDRESS, required=required, help_text=help_text)


def _number(name: str, help_text: str | None = None) -> FieldDef:
    return FieldDef(name, FieldKind.NUMBER, required=True, help_text=help_text)


def _boolean(name: str, help_text: str | None = None) -> FieldDef:
    return FieldDef(name, FieldKind.BOOLEAN, required=True, help_text=help_text)


def _text(name: str, help_text: str | None = None) -> FieldDef:
    return FieldDef(name, FieldKind.TEXT, required=True, help_text=help_text)


ISSUER_SCHEMAS: tuple[ActionSchema, ...] = (
    ActionSchema(
        ActionKind.SET_MINTER.value,
        (_address("address", "minter address"), _number("allowance", "amount the minter may mint")),
        ContractRole.ISSUER,
        title="Set Minter",
    ),
    ActionSchema(
        ActionKind.MINT.value,
        (_address("to_address", "recipient address"), _number("amount", "amount to be minted")),
        ContractRole.ISSUER,
        title="Mint",
    ),
    ActionSchema(
        ActionKind.SET_BURNER.value,
        (_address("address", "burner address"), _number("allowance", "amount the burner may burn")),
        ContractRole.ISSUER,
        title="Set Burner",
    ),
    ActionSchema(
        ActionKind.BURN.value,
        (_address("from_address", "address to be burned from"), _number("amount", "amount to be burned")),
        ContractRole.ISSUER,
        title="Burn",
    ),
    ActionSchema(
        ActionKind.SET_BLACKLISTER.value,
        (_address("address", "blacklister address"), _boolean("status", "set if the address can blacklist")),
        ContractRole.ISSUER,
        title="Set Blacklister",
    ),
    ActionSchema(
        ActionKind.BLACKLIST.value,
        (_address("address", "target address"), _boolean("status", "blacklist or un-blacklist the address")),
        ContractRole.ISSUER,
        title="Blacklist",
    ),
    ActionSchema(
        ActionKind.SET_FREEZER.value,
        (_address("address", "freezer address"), _boolean("status", "set if the address can freeze")),
        ContractRole.ISSUER,
        title="Set Freezer",
    ),
    ActionSchema(
        ActionKind.FREEZE.value,
        (_boolean("status", "freeze or unfreeze all token transfers"),),
        ContractRole.ISSUER,
        title="Freeze",
    ),
    ActionSchema(
        ActionKind.CHANGE_CONTRACT_OWNER.value,
        (_address("new_owner", "new issuer contract owner"),),
        ContractRole.ISSUER,
        title="Change Contract Owner",
    ),
    ActionSchema(
        ActionKind.SET_DENOM_METADATA.value,
        (
            _text("base", "the token's base denom"),
            _text("denom_units", "one unit per line: denom | exponent | alias1,alias2"),
            _text("description"),
            _text("display", "display indicates the suggested denom that should be displayed in clients."),
            _text("name", "name defines the name of the token (eg: Cosmos Atom)"),
            _text(
                "symbol",
                "symbol is the token symbol usually shown on exchanges (eg: ATOM). "
                "This can be the same as the display.",
            ),
        ),
        ContractRole.ISSUER,
        value_transform=denom_metadata_transform,
        title="Set Denom Metadata",
    ),
)

GROUP_SCHEMAS: tuple[ActionSchema, ...] = (
    ActionSchema(
        ActionKind.UPDATE_ADMIN.value,
        (_address("admin", "new group admin; leave empty to renounce", required=False),),
        ContractRole.GROUP,
        title="Update Group Admin",
    ),
    ActionSchema(
        ActionKind.UPDATE_MEMBERS.value,
        (
            FieldDef("add", FieldKind.MULTI_ADDRESS, required=False, help_text="comma separated addresses"),
            FieldDef("remove", FieldKind.MULTI_ADDRESS, required=False, help_text="comma separated addresses"),
        ),
        ContractRole.GROUP,
        value_transform=members_transform,
        title="Update Group Members",
    ),
)

DEFAULT_REGISTRY = ActionRegistry(ISSUER_SCHEMAS + GROUP_SCHEMAS)
