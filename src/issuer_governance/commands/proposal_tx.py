from __future__ import annotations

import asyncio
from argparse import Namespace
from collections.abc import Awaitable, Callable

from issuer_governance.chain import cosmwasm
from issuer_governance.commands.submit_proposal import outcome_result
from issuer_governance.config import AppSettings
from issuer_governance.domain.proposal import VoteOption
from issuer_governance.errors import GovernanceError
from issuer_governance.proposals.assembler import ProposalAssembler
from issuer_governance.proposals.submission import ProposalSubmitter, TxOutcome
from issuer_governance.types import CommandResult, CommandStatus, ContractRole

SubmitterCall = Callable[[ProposalSubmitter], Awaitable[TxOutcome]]


def _run_tx(command: str, settings: AppSettings, call: SubmitterCall) -> CommandResult:
    if not settings.sender_address:
        return CommandResult(
            command=command,
            status=CommandStatus.FAILED,
            details={"error": "sender_address is not configured"},
        )

    async def _send() -> TxOutcome:
        routing = settings.routing_table()
        submitter = ProposalSubmitter(
            cosmwasm.build_chain_client(settings),
            ProposalAssembler(routing),
            sender_address=settings.sender_address,
            multisig_address=routing.resolve(ContractRole.MULTISIG),
        )
        return await call(submitter)

    try:
        outcome = asyncio.run(_send())
    except GovernanceError as exc:
        return CommandResult(
            command=command,
            status=CommandStatus.FAILED,
            details={"error": exc.message},
        )
    return outcome_result(command, outcome)


def run_vote(args: Namespace, settings: AppSettings) -> CommandResult:
    proposal_id = int(args.proposal_id)
    option = VoteOption(args.option)
    return _run_tx("vote", settings, lambda submitter: submitter.vote(proposal_id, option))


def run_execute_proposal(args: Namespace, settings: AppSettings) -> CommandResult:
    proposal_id = int(args.proposal_id)
    return _run_tx("execute-proposal", settings, lambda submitter: submitter.execute(proposal_id))


def run_close_proposal(args: Namespace, settings: AppSettings) -> CommandResult:
    proposal_id = int(args.proposal_id)
    return _run_tx("close-proposal", settings, lambda submitter: submitter.close(proposal_id))
