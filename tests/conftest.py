from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import bech32
import pytest

from issuer_governance.chain.client import ChainEvent, Coin, ExecuteResult
from issuer_governance.config import AppSettings, get_settings
from issuer_governance.errors import BroadcastError, QueryError


def make_address(seed: int, prefix: str = "osmo") -> str:
    return bech32.bech32_encode(prefix, bech32.convertbits(bytes([seed]) * 20, 8, 5))


class FakeChainClient:
    """In-memory stand-in for the multisig, issuer and group contracts."""

    def __init__(self) -> None:
        self.handlers: dict[str, Callable[[dict[str, Any]], Any] | Any] = {}
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.executes: list[tuple[str, str, dict[str, Any], tuple[Coin, ...]]] = []
        self.events: tuple[ChainEvent, ...] = ()
        self.query_error: str | None = None
        self.broadcast_error: str | None = None

    def respond(self, query_name: str, response: Any) -> None:
        self.handlers[query_name] = response

    def serve_list(
        self,
        query_name: str,
        items_field: str,
        items: list[dict[str, Any]],
        *,
        key_field: str,
        cursor_param: str = "start_after",
        descending: bool = False,
    ) -> None:
        def handler(body: dict[str, Any]) -> dict[str, Any]:
            ordered = sorted(items, key=lambda item: item[key_field], reverse=descending)
            cursor = body.get(cursor_param)
            page = ordered
            if cursor is not None:
                if descending:
                    page = [item for item in ordered if item[key_field] < cursor]
                else:
                    page = [item for item in ordered if item[key_field] > cursor]
            limit = body.get("limit")
            if limit is not None:
                page = page[:limit]
            return {items_field: page}

        self.handlers[query_name] = handler

    def proposal_created(self, proposal_id: int) -> None:
        self.events = (
            ChainEvent("message", (("action", "/cosmwasm.wasm.v1.MsgExecuteContract"),)),
            ChainEvent("wasm", (("action", "propose"), ("proposal_id", str(proposal_id)))),
        )

    async def query(self, contract_address: str, query_msg: dict[str, Any]) -> Any:
        self.queries.append((contract_address, query_msg))
        if self.query_error is not None:
            raise QueryError(self.query_error)
        ((name, body),) = query_msg.items()
        if name not in self.handlers:
            raise QueryError(f"unknown query {name}")
        handler = self.handlers[name]
        return handler(body) if callable(handler) else handler

    async def execute(
        self,
        sender_address: str,
        contract_address: str,
        execute_msg: dict[str, Any],
        funds: tuple[Coin, ...] = (),
    ) -> ExecuteResult:
        self.executes.append((sender_address, contract_address, execute_msg, tuple(funds)))
        if self.broadcast_error is not None:
            raise BroadcastError(self.broadcast_error)
        return ExecuteResult(transaction_hash=f"TX{len(self.executes):04d}", events=self.events)


@pytest.fixture
def fake_chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def address() -> Callable[..., str]:
    return make_address


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[AppSettings]:
    monkeypatch.setenv("ADDRESS_PREFIX", "osmo")
    monkeypatch.setenv("ISSUER_CONTRACT_ADDRESS", make_address(1))
    monkeypatch.setenv("GROUP_CONTRACT_ADDRESS", make_address(2))
    monkeypatch.setenv("MULTISIG_CONTRACT_ADDRESS", make_address(3))
    monkeypatch.setenv("SENDER_ADDRESS", make_address(4))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
