"""Smart-query message builders for the multisig, issuer and group contracts."""
from __future__ import annotations

from typing import Any

from issuer_governance.types import JsonDict


def _paged(name: str, cursor_param: str, cursor: Any, limit: int | None, **extra: Any) -> JsonDict:
    body: JsonDict = dict(extra)
    if cursor is not None:
        body[cursor_param] = cursor
    if limit is not None:
        body["limit"] = limit
    return {name: body}


def proposal(proposal_id: int) -> JsonDict:
    return {"proposal": {"proposal_id": proposal_id}}


def reverse_proposals(start_before: int | None = None, limit: int | None = None) -> JsonDict:
    return _paged("reverse_proposals", "start_before", start_before, limit)


def list_votes(proposal_id: int, start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("list_votes", "start_after", start_after, limit, proposal_id=proposal_id)


def list_voters(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("list_voters", "start_after", start_after, limit)


def list_members(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("list_members", "start_after", start_after, limit)


def denom() -> JsonDict:
    return {"denom": {}}


def owner() -> JsonDict:
    return {"owner": {}}


def is_frozen() -> JsonDict:
    return {"is_frozen": {}}


def mint_allowances(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("mint_allowances", "start_after", start_after, limit)


def burn_allowances(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("burn_allowances", "start_after", start_after, limit)


def blacklistees(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("blacklistees", "start_after", start_after, limit)


def blacklister_allowances(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("blacklister_allowances", "start_after", start_after, limit)


def freezer_allowances(start_after: str | None = None, limit: int | None = None) -> JsonDict:
    return _paged("freezer_allowances", "start_after", start_after, limit)
