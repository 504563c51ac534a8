from __future__ import annotations

from argparse import Namespace

from issuer_governance.actions.composer import ComposeContext
from issuer_governance.commands.action_file import compose_actions, read_action_specs
from issuer_governance.config import AppSettings
from issuer_governance.errors import RoutingError
from issuer_governance.proposals.assembler import ProposalAssembler
from issuer_governance.types import CommandResult, CommandStatus


def run_build_proposal(args: Namespace, settings: AppSettings) -> CommandResult:
    title = str(getattr(args, "title", "")).strip()
    if not title:
        return CommandResult(
            command="build-proposal",
            status=CommandStatus.FAILED,
            details={"error": "title is required"},
        )

    try:
        specs = read_action_specs(str(getattr(args, "actions_file", "")))
    except ValueError as exc:
        return CommandResult(
            command="build-proposal",
            status=CommandStatus.FAILED,
            details={"error": str(exc)},
        )

    context = ComposeContext(
        address_prefix=settings.address_prefix,
        base_denom=str(getattr(args, "base_denom", "") or "").strip() or None,
    )
    pending, errors = compose_actions(specs, context=context)
    if errors:
        return CommandResult(
            command="build-proposal",
            status=CommandStatus.FAILED,
            details={"error": "invalid actions", "validation_errors": errors},
        )

    try:
        envelope = ProposalAssembler(settings.routing_table()).assemble(
            title,
            str(getattr(args, "description", "")),
            pending,
        )
    except RoutingError as exc:
        return CommandResult(
            command="build-proposal",
            status=CommandStatus.FAILED,
            details={"error": exc.message, "action_kind": exc.action_kind},
        )

    return CommandResult(
        command="build-proposal",
        status=CommandStatus.PENDING,
        details={
            "propose": envelope.to_dict(),
            "actions": [action.to_message() for action in pending],
        },
    )
