from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from issuer_governance.types import JsonDict


@dataclass(slots=True, frozen=True)
class Coin:
    denom: str
    amount: str

    def as_dict(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": self.amount}


@dataclass(slots=True, frozen=True)
class ChainEvent:
    type: str
    attributes: tuple[tuple[str, str], ...] = ()

    def get(self, key: str) -> str | None:
        for attribute_key, value in self.attributes:
            if attribute_key == key:
                return value
        return None


@dataclass(slots=True, frozen=True)
class ExecuteResult:
    transaction_hash: str
    events: tuple[ChainEvent, ...] = field(default_factory=tuple)


class ChainClient(Protocol):
    async def query(self, contract_address: str, query_msg: JsonDict) -> Any:
        ...

    async def execute(
        self,
        sender_address: str,
        contract_address: str,
        execute_msg: JsonDict,
        funds: Sequence[Coin] = (),
    ) -> ExecuteResult:
        ...


def find_event_attribute(
    events: Iterable[ChainEvent],
    key: str,
    *,
    event_type: str | None = "wasm",
) -> str | None:
    """First value of ``key`` among emitted events, optionally of one event type."""
    for event in events:
        if event_type is not None and event.type != event_type:
            continue
        value = event.get(key)
        if value is not None:
            return value
    return None
