from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from cosmpy.aerial.client import LedgerClient, NetworkConfig
from cosmpy.aerial.contract import LedgerContract
from cosmpy.aerial.wallet import LocalWallet
from cosmpy.crypto.address import Address

from issuer_governance.chain.client import ChainEvent, Coin, ExecuteResult
from issuer_governance.config import AppSettings
from issuer_governance.errors import BroadcastError, QueryError
from issuer_governance.observability.logging import get_logger
from issuer_governance.types import JsonDict

T = TypeVar("T")


class CosmwasmChainClient:
    """cosmpy-backed implementation of the chain query/execute boundary.

    cosmpy is synchronous, so every call runs in a worker thread and is bounded
    by ``timeout_seconds``. A timeout surfaces exactly like any other failure.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        wallet: LocalWallet | None = None,
        *,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._ledger = ledger
        self._wallet = wallet
        self._timeout_seconds = timeout_seconds
        self._logger = get_logger("chain")

    def _contract(self, contract_address: str) -> LedgerContract:
        return LedgerContract(None, self._ledger, Address(contract_address))

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args),
            timeout=self._timeout_seconds,
        )

    async def query(self, contract_address: str, query_msg: JsonDict) -> Any:
        try:
            contract = self._contract(contract_address)
            return await self._run(contract.query, query_msg)
        except Exception as exc:
            self._logger.warning(
                "chain_query_failed",
                contract_address=contract_address,
                query=next(iter(query_msg), None),
                error=str(exc),
            )
            raise QueryError(f"query to {contract_address} failed: {exc}") from exc

    async def execute(
        self,
        sender_address: str,
        contract_address: str,
        execute_msg: JsonDict,
        funds: Sequence[Coin] = (),
    ) -> ExecuteResult:
        if self._wallet is None:
            raise BroadcastError("no signing wallet configured")
        wallet_address = str(self._wallet.address())
        if wallet_address != sender_address:
            raise BroadcastError(
                f"sender {sender_address} does not match signing wallet {wallet_address}"
            )

        funds_str = ",".join(f"{coin.amount}{coin.denom}" for coin in funds) or None

        def _broadcast() -> Any:
            contract = self._contract(contract_address)
            submitted = contract.execute(execute_msg, self._wallet, funds=funds_str)
            return submitted.wait_to_complete()

        try:
            submitted = await self._run(_broadcast)
        except Exception as exc:
            self._logger.warning(
                "chain_execute_failed",
                contract_address=contract_address,
                entry_point=next(iter(execute_msg), None),
                error=str(exc),
            )
            raise BroadcastError(f"execute on {contract_address} failed: {exc}") from exc

        return ExecuteResult(
            transaction_hash=str(submitted.tx_hash),
            events=_events_from_response(submitted.response),
        )


def _events_from_response(response: Any) -> tuple[ChainEvent, ...]:
    raw_events = getattr(response, "events", None) or {}
    return tuple(
        ChainEvent(type=str(event_type), attributes=tuple((str(k), str(v)) for k, v in attrs.items()))
        for event_type, attrs in raw_events.items()
    )


class ChainClientFactory:
    """Builds the cosmpy client from settings, keeping construction in one place."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings

    def network_config(self) -> NetworkConfig:
        return NetworkConfig(
            chain_id=self._settings.chain_id,
            url=self._settings.chain_url,
            fee_minimum_gas_price=self._settings.gas_price,
            fee_denomination=self._settings.fee_denom,
            staking_denomination=self._settings.fee_denom,
        )

    def create(self) -> CosmwasmChainClient:
        wallet = None
        if self._settings.signer_mnemonic is not None:
            wallet = LocalWallet.from_mnemonic(
                self._settings.signer_mnemonic.get_secret_value(),
                prefix=self._settings.address_prefix,
            )
        return CosmwasmChainClient(
            LedgerClient(self.network_config()),
            wallet,
            timeout_seconds=self._settings.request_timeout_seconds,
        )


def build_chain_client(settings: AppSettings) -> CosmwasmChainClient:
    return ChainClientFactory(settings).create()
