"""Typed governance actions: field kinds, schemas, transforms and composition."""

from issuer_governance.actions.composer import (
    Action,
    ComposeContext,
    ComposeResult,
    PendingActionList,
    compose,
)
from issuer_governance.actions.fields import FieldDef, FieldKind, ValidationError
from issuer_governance.actions.schemas import (
    DEFAULT_REGISTRY,
    ActionKind,
    ActionRegistry,
    ActionSchema,
)

__all__ = [
    "Action",
    "ActionKind",
    "ActionRegistry",
    "ActionSchema",
    "ComposeContext",
    "ComposeResult",
    "DEFAULT_REGISTRY",
    "FieldDef",
    "FieldKind",
    "PendingActionList",
    "ValidationError",
    "compose",
]
