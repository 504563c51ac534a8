from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from issuer_governance.cache import QueryCache, fingerprint
from issuer_governance.chain import queries
from issuer_governance.chain.client import ChainClient
from issuer_governance.errors import QueryError
from issuer_governance.pagination.engine import CursorPaginator, PageRequest
from issuer_governance.proposals.routing import RoutingTable
from issuer_governance.types import ContractRole, JsonDict

QueryBuilder = Callable[[Any, int | None], JsonDict]


@dataclass(slots=True, frozen=True)
class ListQuery:
    """How one paginated contract list is queried and keyed."""

    name: str
    items_field: str
    key_field: str
    build: QueryBuilder
    cursor_to_wire: Callable[[str], Any] = str


def _int_cursor(cursor: str) -> int:
    return int(cursor)


PROPOSALS = ListQuery(
    name="proposals",
    items_field="proposals",
    key_field="id",
    build=lambda cursor, limit: queries.reverse_proposals(cursor, limit),
    cursor_to_wire=_int_cursor,
)

VOTERS = ListQuery(
    name="voters",
    items_field="voters",
    key_field="addr",
    build=lambda cursor, limit: queries.list_voters(cursor, limit),
)

MEMBERS = ListQuery(
    name="members",
    items_field="members",
    key_field="addr",
    build=lambda cursor, limit: queries.list_members(cursor, limit),
)

MINT_ALLOWANCES = ListQuery(
    name="mint_allowances",
    items_field="allowances",
    key_field="address",
    build=lambda cursor, limit: queries.mint_allowances(cursor, limit),
)

BURN_ALLOWANCES = ListQuery(
    name="burn_allowances",
    items_field="allowances",
    key_field="address",
    build=lambda cursor, limit: queries.burn_allowances(cursor, limit),
)

BLACKLISTEES = ListQuery(
    name="blacklistees",
    items_field="blacklistees",
    key_field="address",
    build=lambda cursor, limit: queries.blacklistees(cursor, limit),
)

BLACKLISTERS = ListQuery(
    name="blacklisters",
    items_field="blacklisters",
    key_field="address",
    build=lambda cursor, limit: queries.blacklister_allowances(cursor, limit),
)

FREEZERS = ListQuery(
    name="freezers",
    items_field="freezers",
    key_field="address",
    build=lambda cursor, limit: queries.freezer_allowances(cursor, limit),
)


def votes_query(proposal_id: int) -> ListQuery:
    return ListQuery(
        name="votes",
        items_field="votes",
        key_field="voter",
        build=lambda cursor, limit: queries.list_votes(proposal_id, cursor, limit),
    )


class ChainListSource:
    """Page fetcher for one contract list, optionally read through a ``QueryCache``."""

    def __init__(
        self,
        client: ChainClient,
        contract_address: str,
        query: ListQuery,
        *,
        cache: QueryCache | None = None,
        scope: tuple[object, ...] = (),
    ) -> None:
        self._client = client
        self._contract_address = contract_address
        self._query = query
        self._cache = cache
        self._scope = scope

    @property
    def name(self) -> str:
        return self._query.name

    def fingerprint(self, request: PageRequest) -> str:
        return fingerprint(self._query.name, *self._scope, request.cursor, request.page_size)

    def item_key(self, item: Mapping[str, Any]) -> str:
        return str(item[self._query.key_field])

    async def _load(self, request: PageRequest) -> list[JsonDict]:
        cursor = None
        if request.cursor is not None:
            try:
                cursor = self._query.cursor_to_wire(request.cursor)
            except ValueError as exc:
                raise QueryError(f"invalid {self._query.name} cursor {request.cursor!r}") from exc
        response = await self._client.query(
            self._contract_address,
            self._query.build(cursor, request.page_size),
        )
        items = response.get(self._query.items_field) if isinstance(response, Mapping) else None
        if not isinstance(items, list):
            raise QueryError(f"unexpected {self._query.name} response: missing {self._query.items_field!r}")
        for item in items:
            if not isinstance(item, Mapping) or self._query.key_field not in item:
                raise QueryError(
                    f"unexpected {self._query.name} response: item without {self._query.key_field!r}"
                )
        return items

    async def fetch_page(self, request: PageRequest) -> list[JsonDict]:
        if self._cache is None:
            return await self._load(request)
        return await self._cache.get(
            self.fingerprint(request),
            lambda: self._load(request),
            force=request.refresh,
        )

    def paginator(self, *, page_size: int | None = None) -> CursorPaginator[JsonDict]:
        return CursorPaginator(
            self.fetch_page,
            self.item_key,
            page_size=page_size,
            name=fingerprint(self._query.name, *self._scope),
        )


def proposals_source(client: ChainClient, multisig_address: str, *, cache: QueryCache | None = None) -> ChainListSource:
    return ChainListSource(client, multisig_address, PROPOSALS, cache=cache)


def votes_source(
    client: ChainClient,
    multisig_address: str,
    proposal_id: int,
    *,
    cache: QueryCache | None = None,
) -> ChainListSource:
    return ChainListSource(client, multisig_address, votes_query(proposal_id), cache=cache, scope=(proposal_id,))


def voters_source(client: ChainClient, multisig_address: str, *, cache: QueryCache | None = None) -> ChainListSource:
    return ChainListSource(client, multisig_address, VOTERS, cache=cache)


ROLE_LISTS: dict[str, tuple[ContractRole, ListQuery]] = {
    query.name: (role, query)
    for role, query in (
        (ContractRole.ISSUER, MINT_ALLOWANCES),
        (ContractRole.ISSUER, BURN_ALLOWANCES),
        (ContractRole.ISSUER, BLACKLISTEES),
        (ContractRole.ISSUER, BLACKLISTERS),
        (ContractRole.ISSUER, FREEZERS),
        (ContractRole.GROUP, MEMBERS),
    )
}


def role_list_source(
    client: ChainClient,
    routing: RoutingTable,
    name: str,
    *,
    cache: QueryCache | None = None,
) -> ChainListSource:
    """Source for an issuer role list or the group member list, by list name."""
    role, query = ROLE_LISTS[name]
    return ChainListSource(client, routing.resolve(role), query, cache=cache)
