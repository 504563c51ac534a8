from __future__ import annotations

import asyncio
from argparse import Namespace
from collections.abc import Callable

from issuer_governance.chain import cosmwasm
from issuer_governance.chain.client import ChainClient
from issuer_governance.config import AppSettings
from issuer_governance.errors import GovernanceError
from issuer_governance.pagination.engine import PageRequest
from issuer_governance.pagination.sources import (
    ROLE_LISTS,
    ChainListSource,
    proposals_source,
    role_list_source,
    voters_source,
    votes_source,
)
from issuer_governance.proposals.routing import RoutingTable
from issuer_governance.types import CommandResult, CommandStatus, ContractRole

SourceBuilder = Callable[[ChainClient, RoutingTable], ChainListSource]


def _page_size(args: Namespace, settings: AppSettings) -> int:
    limit = getattr(args, "limit", None)
    return int(limit) if limit else settings.default_page_size


async def _fetch_one_page(source: ChainListSource, cursor: str | None, page_size: int) -> dict[str, object]:
    items = await source.fetch_page(PageRequest(cursor=cursor, page_size=page_size))
    next_cursor = source.item_key(items[-1]) if items else None
    return {
        "list": source.name,
        "cursor": cursor,
        "page_size": page_size,
        "items": items,
        "next_cursor": next_cursor,
        "end_of_list": not items,
    }


def _list(command: str, args: Namespace, settings: AppSettings, build_source: SourceBuilder) -> CommandResult:
    cursor = getattr(args, "cursor", None) or None
    page_size = _page_size(args, settings)

    async def _load() -> dict[str, object]:
        routing = settings.routing_table()
        source = build_source(cosmwasm.build_chain_client(settings), routing)
        return await _fetch_one_page(source, cursor, page_size)

    try:
        details = asyncio.run(_load())
    except GovernanceError as exc:
        return CommandResult(
            command=command,
            status=CommandStatus.FAILED,
            details={"error": exc.message},
        )
    return CommandResult(command=command, status=CommandStatus.OK, details=details)


def _multisig(routing: RoutingTable) -> str:
    return routing.resolve(ContractRole.MULTISIG)


def run_list_proposals(args: Namespace, settings: AppSettings) -> CommandResult:
    return _list(
        "list-proposals",
        args,
        settings,
        lambda client, routing: proposals_source(client, _multisig(routing)),
    )


def run_list_votes(args: Namespace, settings: AppSettings) -> CommandResult:
    proposal_id = int(args.proposal_id)
    return _list(
        "list-votes",
        args,
        settings,
        lambda client, routing: votes_source(client, _multisig(routing), proposal_id),
    )


def run_list_voters(args: Namespace, settings: AppSettings) -> CommandResult:
    return _list(
        "list-voters",
        args,
        settings,
        lambda client, routing: voters_source(client, _multisig(routing)),
    )


def run_list_roles(args: Namespace, settings: AppSettings) -> CommandResult:
    name = str(args.list)
    if name not in ROLE_LISTS:
        return CommandResult(
            command="list-roles",
            status=CommandStatus.FAILED,
            details={"error": f"unknown list {name!r}", "known_lists": sorted(ROLE_LISTS)},
        )
    return _list(
        "list-roles",
        args,
        settings,
        lambda client, routing: role_list_source(client, routing, name),
    )
