from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from issuer_governance.cache import QueryCache
from issuer_governance.chain.client import ChainClient
from issuer_governance.errors import QueryError
from issuer_governance.pagination import PageRequest, PageStatus
from issuer_governance.pagination.sources import (
    BLACKLISTEES,
    ChainListSource,
    proposals_source,
    voters_source,
    votes_source,
)


def _proposals(count: int) -> list[dict[str, object]]:
    return [{"id": index, "title": f"proposal {index}", "status": "open"} for index in range(1, count + 1)]


def test_proposals_page_newest_first(fake_chain, address: Callable[..., str]) -> None:
    fake_chain.serve_list(
        "reverse_proposals",
        "proposals",
        _proposals(8),
        key_field="id",
        cursor_param="start_before",
        descending=True,
    )
    paginator = proposals_source(fake_chain, address(3)).paginator(page_size=3)

    async def scenario() -> None:
        first = await paginator.load()
        assert [item["id"] for item in first.items] == [8, 7, 6]
        second = await paginator.next()
        assert [item["id"] for item in second.items] == [5, 4, 3]
        assert second.current == "6"

    asyncio.run(scenario())

    assert fake_chain.queries[0] == (address(3), {"reverse_proposals": {"limit": 3}})
    assert fake_chain.queries[1] == (address(3), {"reverse_proposals": {"start_before": 6, "limit": 3}})


def test_votes_are_scoped_to_one_proposal(fake_chain, address: Callable[..., str]) -> None:
    votes = [{"voter": address(n), "vote": "yes", "weight": 1} for n in (30, 31, 32)]
    fake_chain.serve_list("list_votes", "votes", votes, key_field="voter")
    source = votes_source(fake_chain, address(3), 7)

    page = asyncio.run(source.fetch_page(PageRequest(page_size=1)))

    assert len(page) == 1
    assert fake_chain.queries[-1][1] == {"list_votes": {"proposal_id": 7, "limit": 1}}
    assert source.fingerprint(PageRequest(cursor="x", page_size=1)) == "votes/7/x/1"


def test_voters_paginate_by_address(fake_chain, address: Callable[..., str]) -> None:
    voters = [{"addr": address(n), "weight": 1} for n in (40, 41, 42)]
    fake_chain.serve_list("list_voters", "voters", voters, key_field="addr")
    paginator = voters_source(fake_chain, address(3)).paginator(page_size=2)

    async def scenario() -> None:
        await paginator.load()
        await paginator.next()
        end = await paginator.next()
        assert end.end_of_list

    asyncio.run(scenario())

    ordered = sorted(voter["addr"] for voter in voters)
    assert fake_chain.queries[1][1] == {"list_voters": {"start_after": ordered[1], "limit": 2}}


def test_cached_pages_are_shared_until_refresh(fake_chain, address: Callable[..., str]) -> None:
    fake_chain.serve_list(
        "reverse_proposals",
        "proposals",
        _proposals(4),
        key_field="id",
        cursor_param="start_before",
        descending=True,
    )
    cache = QueryCache()
    source = proposals_source(fake_chain, address(3), cache=cache)

    async def scenario() -> None:
        await source.fetch_page(PageRequest(page_size=2))
        await source.fetch_page(PageRequest(page_size=2))
        assert len(fake_chain.queries) == 1
        await source.fetch_page(PageRequest(page_size=2, refresh=True))
        assert len(fake_chain.queries) == 2
        cache.revalidate("proposals")
        await source.fetch_page(PageRequest(page_size=2))
        assert len(fake_chain.queries) == 3

    asyncio.run(scenario())


def test_malformed_response_errors_the_view(fake_chain, address: Callable[..., str]) -> None:
    fake_chain.respond("blacklistees", {"unexpected": []})
    client: ChainClient = fake_chain
    paginator = ChainListSource(client, address(1), BLACKLISTEES).paginator(page_size=5)

    view = asyncio.run(paginator.load())

    assert view.status is PageStatus.ERRORED
    assert "blacklistees" in (view.error or "")


def test_chain_failure_errors_the_view(fake_chain, address: Callable[..., str]) -> None:
    fake_chain.query_error = "connection refused"
    paginator = voters_source(fake_chain, address(3)).paginator(page_size=5)

    view = asyncio.run(paginator.load())

    assert view.status is PageStatus.ERRORED
    assert view.error == "connection refused"


def test_item_without_key_is_rejected(fake_chain, address: Callable[..., str]) -> None:
    fake_chain.respond("list_voters", {"voters": [{"addr": address(40), "weight": 1}, {"weight": 1}]})
    source = voters_source(fake_chain, address(3))

    with pytest.raises(QueryError, match="item without 'addr'"):
        asyncio.run(source.fetch_page(PageRequest(page_size=2)))


def test_non_object_item_is_rejected(fake_chain, address: Callable[..., str]) -> None:
    fake_chain.respond("blacklistees", {"blacklistees": ["osmo1..."]})
    source = ChainListSource(fake_chain, address(1), BLACKLISTEES)

    with pytest.raises(QueryError, match="unexpected blacklistees response"):
        asyncio.run(source.fetch_page(PageRequest(page_size=2)))


def test_malformed_later_page_keeps_navigation(fake_chain, address: Callable[..., str]) -> None:
    pages = iter([{"proposals": [{"id": 9}, {"id": 8}]}, {"proposals": [{"no_id": 7}]}])
    fake_chain.handlers["reverse_proposals"] = lambda body: next(pages)
    paginator = proposals_source(fake_chain, address(3)).paginator(page_size=2)

    async def scenario() -> None:
        await paginator.load()
        view = await paginator.next()
        assert view.status is PageStatus.ERRORED
        assert view.current is None
        assert view.history == ()
        assert view.items == ({"id": 9}, {"id": 8})
        assert view.next_cursor_candidate == "8"

    asyncio.run(scenario())


def test_non_numeric_proposal_cursor_is_a_query_error(fake_chain, address: Callable[..., str]) -> None:
    source = proposals_source(fake_chain, address(3))

    with pytest.raises(QueryError, match="invalid proposals cursor 'abc'"):
        asyncio.run(source.fetch_page(PageRequest(cursor="abc", page_size=2)))
    assert fake_chain.queries == []
