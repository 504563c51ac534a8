from __future__ import annotations

import asyncio
from argparse import Namespace

from issuer_governance.chain import cosmwasm, queries
from issuer_governance.config import AppSettings
from issuer_governance.domain.proposal import parse_proposal
from issuer_governance.errors import GovernanceError
from issuer_governance.types import CommandResult, CommandStatus, ContractRole


def run_show_proposal(args: Namespace, settings: AppSettings) -> CommandResult:
    proposal_id = int(args.proposal_id)

    async def _load() -> object:
        multisig_address = settings.routing_table().resolve(ContractRole.MULTISIG)
        client = cosmwasm.build_chain_client(settings)
        return await client.query(multisig_address, queries.proposal(proposal_id))

    try:
        raw = asyncio.run(_load())
    except GovernanceError as exc:
        return CommandResult(
            command="show-proposal",
            status=CommandStatus.FAILED,
            details={"error": exc.message, "proposal_id": proposal_id},
        )

    try:
        proposal = parse_proposal(raw)
    except ValueError as exc:
        return CommandResult(
            command="show-proposal",
            status=CommandStatus.FAILED,
            details={"error": str(exc), "proposal_id": proposal_id},
        )

    return CommandResult(
        command="show-proposal",
        status=CommandStatus.OK,
        details={"proposal": proposal.as_dict()},
    )
