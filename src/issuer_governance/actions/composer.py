from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from issuer_governance.actions.context import ComposeContext
from issuer_governance.actions.fields import (
    ValidationError,
    normalize_field,
    validate_field,
)
from issuer_governance.actions.schemas import ActionSchema
from issuer_governance.actions.transforms import TransformError
from issuer_governance.types import JsonDict

__all__ = [
    "Action",
    "ComposeContext",
    "ComposeResult",
    "PendingActionList",
    "compose",
]


@dataclass(slots=True, frozen=True)
class Action:
    action_kind: str
    payload: JsonDict

    def to_message(self) -> JsonDict:
        """The tagged-union form sent on the wire: ``{action_kind: payload}``."""
        return {self.action_kind: copy.deepcopy(self.payload)}


@dataclass(slots=True, frozen=True)
class ComposeResult:
    action: Action | None = None
    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.action is not None and not self.errors

    def as_dict(self) -> JsonDict:
        if self.action is not None:
            return {"action": self.action.to_message()}
        return {"errors": [error.as_dict() for error in self.errors]}


def compose(
    schema: ActionSchema,
    raw_values: Mapping[str, Any],
    *,
    context: ComposeContext,
) -> ComposeResult:
    """Validate form values against ``schema`` and build one tagged action.

    Every field is checked before returning so all problems surface together.
    No partial action is ever produced, and the schema's transform runs at
    most once, on values that already passed field validation.
    """
    errors: list[ValidationError] = []
    for field_def in schema.fields:
        result = validate_field(
            field_def,
            raw_values.get(field_def.name),
            address_prefix=context.address_prefix,
        )
        if not result.valid:
            errors.append(ValidationError(field_def.name, result.reason or "invalid value"))
    if errors:
        return ComposeResult(errors=tuple(errors))

    values: dict[str, Any] = {
        field_def.name: normalize_field(field_def, raw_values.get(field_def.name))
        for field_def in schema.fields
    }

    if schema.value_transform is not None:
        try:
            values = schema.value_transform(values, context)
        except TransformError as exc:
            return ComposeResult(errors=(ValidationError(exc.field, exc.message),))

    return ComposeResult(action=Action(action_kind=schema.action_kind, payload=values))


class PendingActionList:
    """Ordered actions awaiting submission; order is the on-chain execution order."""

    def __init__(self, actions: list[Action] | None = None) -> None:
        self._actions: list[Action] = list(actions or [])

    def append(self, action: Action) -> None:
        self._actions.append(action)

    def delete(self, index: int) -> Action:
        if not 0 <= index < len(self._actions):
            raise IndexError(f"no pending action at index {index}")
        return self._actions.pop(index)

    def clear(self) -> None:
        self._actions.clear()

    def snapshot(self) -> tuple[Action, ...]:
        return tuple(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._actions)

    def __getitem__(self, index: int) -> Action:
        return self._actions[index]
