from __future__ import annotations

from argparse import Namespace

from issuer_governance.actions.composer import ComposeContext, compose
from issuer_governance.actions.schemas import DEFAULT_REGISTRY
from issuer_governance.commands.action_file import parse_value_pairs
from issuer_governance.config import AppSettings
from issuer_governance.types import CommandResult, CommandStatus


def _normalized_string(raw_value: object) -> str:
    if raw_value is None:
        return ""
    return str(raw_value).strip()


def run_compose_action(args: Namespace, settings: AppSettings) -> CommandResult:
    kind = _normalized_string(getattr(args, "kind", ""))
    schema = DEFAULT_REGISTRY.get(kind)
    if schema is None:
        return CommandResult(
            command="compose-action",
            status=CommandStatus.FAILED,
            details={
                "error": f"unknown action kind {kind!r}",
                "known_kinds": list(DEFAULT_REGISTRY.kinds()),
            },
        )

    try:
        values = parse_value_pairs(getattr(args, "value", None))
    except ValueError as exc:
        return CommandResult(
            command="compose-action",
            status=CommandStatus.FAILED,
            details={"error": str(exc)},
        )

    context = ComposeContext(
        address_prefix=settings.address_prefix,
        base_denom=_normalized_string(getattr(args, "base_denom", None)) or None,
    )
    result = compose(schema, values, context=context)
    if not result.ok:
        return CommandResult(
            command="compose-action",
            status=CommandStatus.FAILED,
            details={"action_kind": kind, **result.as_dict()},
        )

    return CommandResult(
        command="compose-action",
        status=CommandStatus.OK,
        details={"action_kind": kind, **result.as_dict()},
    )
