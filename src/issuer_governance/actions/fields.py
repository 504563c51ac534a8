from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from issuer_governance.chain.addresses import address_error

_NUMBER_PATTERN = re.compile(r"^[0-9]+$")

TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})


class FieldKind(StrEnum):
    ADDRESS = "address"
    MULTI_ADDRESS = "multi_address"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(slots=True, frozen=True)
class FieldDef:
    name: str
    kind: FieldKind
    required: bool = True
    help_text: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "required": self.required,
            "help_text": self.help_text,
        }


@dataclass(slots=True, frozen=True)
class ValidationError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(slots=True, frozen=True)
class ValidationResult:
    reason: str | None = None

    @property
    def valid(self) -> bool:
        return self.reason is None


VALID = ValidationResult()


def invalid(reason: str) -> ValidationResult:
    return ValidationResult(reason=reason)


def _as_text(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def _required_message(field: FieldDef) -> str:
    return f'"{field.name}" is required'


def split_addresses(raw: object) -> list[str]:
    text = _as_text(raw)
    if not text:
        return []
    return [part.strip() for part in text.split(",")]


def parse_boolean(raw: object) -> bool | None:
    if isinstance(raw, bool):
        return raw
    normalized = _as_text(raw).lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return None


def _validate_address(field: FieldDef, raw: object, prefix: str) -> ValidationResult:
    text = _as_text(raw)
    if not text:
        return invalid(_required_message(field)) if field.required else VALID
    error = address_error(text, prefix=prefix)
    return VALID if error is None else invalid(error)


def _validate_multi_address(field: FieldDef, raw: object, prefix: str) -> ValidationResult:
    addresses = split_addresses(raw)
    if not addresses:
        return invalid(_required_message(field)) if field.required else VALID
    for index, address in enumerate(addresses):
        error = address_error(address, prefix=prefix)
        if error is not None:
            return invalid(f"{error} (entry {index})")
    return VALID


def _validate_number(field: FieldDef, raw: object, _: str) -> ValidationResult:
    text = _as_text(raw)
    if not text:
        return invalid(_required_message(field)) if field.required else VALID
    if _NUMBER_PATTERN.match(text) is None:
        return invalid(f'"{field.name}" must be a non-negative integer, got "{text}"')
    return VALID


def _validate_boolean(field: FieldDef, raw: object, _: str) -> ValidationResult:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return invalid(_required_message(field)) if field.required else VALID
    if parse_boolean(raw) is None:
        return invalid(f'"{field.name}" must be true or false, got "{raw}"')
    return VALID


def _validate_text(field: FieldDef, raw: object, _: str) -> ValidationResult:
    if field.required and not _as_text(raw):
        return invalid(_required_message(field))
    return VALID


Validator = Callable[[FieldDef, object, str], ValidationResult]

VALIDATORS: dict[FieldKind, Validator] = {
    FieldKind.ADDRESS: _validate_address,
    FieldKind.MULTI_ADDRESS: _validate_multi_address,
    FieldKind.NUMBER: _validate_number,
    FieldKind.BOOLEAN: _validate_boolean,
    FieldKind.TEXT: _validate_text,
}


def validate_field(field: FieldDef, raw: object, *, address_prefix: str) -> ValidationResult:
    return VALIDATORS[field.kind](field, raw, address_prefix)


def normalize_field(field: FieldDef, raw: object) -> Any:
    """Convert an already-validated raw value into its wire representation.

    Numbers stay decimal strings (Uint128 is a JSON string on the wire), unset
    optional values become ``None``.
    """
    if field.kind is FieldKind.MULTI_ADDRESS:
        return split_addresses(raw)
    if field.kind is FieldKind.BOOLEAN:
        return parse_boolean(raw)

    text = _as_text(raw)
    return text or None
