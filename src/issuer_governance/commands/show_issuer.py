from __future__ import annotations

import asyncio
from argparse import Namespace
from typing import Any

from issuer_governance.chain import cosmwasm, queries
from issuer_governance.config import AppSettings
from issuer_governance.errors import GovernanceError
from issuer_governance.types import CommandResult, CommandStatus, ContractRole


def run_show_issuer(_: Namespace, settings: AppSettings) -> CommandResult:
    async def _load() -> dict[str, Any]:
        issuer_address = settings.routing_table().resolve(ContractRole.ISSUER)
        client = cosmwasm.build_chain_client(settings)
        denom, owner, frozen = await asyncio.gather(
            client.query(issuer_address, queries.denom()),
            client.query(issuer_address, queries.owner()),
            client.query(issuer_address, queries.is_frozen()),
        )
        return {
            "contract_address": issuer_address,
            "denom": denom.get("denom"),
            "owner": owner.get("address"),
            "is_frozen": bool(frozen.get("is_frozen")),
        }

    try:
        details = asyncio.run(_load())
    except GovernanceError as exc:
        return CommandResult(
            command="show-issuer",
            status=CommandStatus.FAILED,
            details={"error": exc.message},
        )
    return CommandResult(command="show-issuer", status=CommandStatus.OK, details=details)
