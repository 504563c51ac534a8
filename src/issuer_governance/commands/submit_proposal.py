from __future__ import annotations

import asyncio
from argparse import Namespace

from issuer_governance.actions.composer import ComposeContext
from issuer_governance.chain import cosmwasm, queries
from issuer_governance.chain.client import ChainClient
from issuer_governance.commands.action_file import compose_actions, needs_base_denom, read_action_specs
from issuer_governance.config import AppSettings
from issuer_governance.errors import GovernanceError
from issuer_governance.proposals.assembler import ProposalAssembler
from issuer_governance.proposals.submission import ProposalSubmitter, TxOutcome, TxStatus
from issuer_governance.types import CommandResult, CommandStatus, ContractRole

OUTCOME_STATUS: dict[TxStatus, CommandStatus] = {
    TxStatus.SUBMITTED: CommandStatus.SUBMITTED,
    TxStatus.PROPOSAL_ID_MISSING: CommandStatus.UNCONFIRMED,
    TxStatus.ROUTING_FAILED: CommandStatus.FAILED,
    TxStatus.BROADCAST_FAILED: CommandStatus.FAILED,
}


def outcome_result(command: str, outcome: TxOutcome) -> CommandResult:
    return CommandResult(
        command=command,
        status=OUTCOME_STATUS[outcome.status],
        details=outcome.as_dict(),
    )


async def _current_base_denom(client: ChainClient, issuer_address: str) -> str | None:
    response = await client.query(issuer_address, queries.denom())
    denom = response.get("denom") if isinstance(response, dict) else None
    return str(denom) if denom else None


async def _submit(args: Namespace, settings: AppSettings, specs: list[dict]) -> CommandResult:
    routing = settings.routing_table()
    multisig_address = routing.resolve(ContractRole.MULTISIG)
    client = cosmwasm.build_chain_client(settings)

    base_denom = str(getattr(args, "base_denom", "") or "").strip() or None
    if base_denom is None and needs_base_denom(specs):
        base_denom = await _current_base_denom(client, routing.resolve(ContractRole.ISSUER))

    context = ComposeContext(address_prefix=settings.address_prefix, base_denom=base_denom)
    pending, errors = compose_actions(specs, context=context)
    if errors:
        return CommandResult(
            command="submit-proposal",
            status=CommandStatus.FAILED,
            details={"error": "invalid actions", "validation_errors": errors},
        )

    submitter = ProposalSubmitter(
        client,
        ProposalAssembler(routing),
        sender_address=settings.sender_address,
        multisig_address=multisig_address,
    )
    outcome = await submitter.submit(args.title.strip(), str(args.description), pending.snapshot())
    return outcome_result("submit-proposal", outcome)


def run_submit_proposal(args: Namespace, settings: AppSettings) -> CommandResult:
    if not str(getattr(args, "title", "")).strip():
        return CommandResult(
            command="submit-proposal",
            status=CommandStatus.FAILED,
            details={"error": "title is required"},
        )
    if not settings.sender_address:
        return CommandResult(
            command="submit-proposal",
            status=CommandStatus.FAILED,
            details={"error": "sender_address is not configured"},
        )

    try:
        specs = read_action_specs(str(getattr(args, "actions_file", "")))
    except ValueError as exc:
        return CommandResult(
            command="submit-proposal",
            status=CommandStatus.FAILED,
            details={"error": str(exc)},
        )

    try:
        return asyncio.run(_submit(args, settings, specs))
    except GovernanceError as exc:
        return CommandResult(
            command="submit-proposal",
            status=CommandStatus.FAILED,
            details={"error": exc.message},
        )
