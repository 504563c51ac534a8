from __future__ import annotations

import base64
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from issuer_governance.actions.composer import Action
from issuer_governance.actions.schemas import DEFAULT_REGISTRY, ActionRegistry
from issuer_governance.errors import RoutingError
from issuer_governance.proposals.routing import RoutingTable
from issuer_governance.types import JsonDict


def encode_action(action: Action) -> str:
    serialized = json.dumps(action.to_message(), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(serialized.encode("utf-8")).decode("ascii")


def decode_action(payload_base64: str) -> JsonDict:
    decoded = json.loads(base64.b64decode(payload_base64).decode("utf-8"))
    if not isinstance(decoded, dict):
        raise ValueError("encoded action is not a JSON object")
    return decoded


@dataclass(slots=True, frozen=True)
class ContractCallEnvelope:
    contract_address: str
    payload_base64: str
    funds: tuple[JsonDict, ...] = ()

    def to_cosmos_msg(self) -> JsonDict:
        return {
            "wasm": {
                "execute": {
                    "contract_addr": self.contract_address,
                    "msg": self.payload_base64,
                    "funds": list(self.funds),
                }
            }
        }

    def decode(self) -> JsonDict:
        return decode_action(self.payload_base64)

    @classmethod
    def from_cosmos_msg(cls, message: Mapping[str, Any]) -> ContractCallEnvelope:
        try:
            execute = message["wasm"]["execute"]
            return cls(
                contract_address=str(execute["contract_addr"]),
                payload_base64=str(execute["msg"]),
                funds=tuple(execute.get("funds") or ()),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError("message is not a wasm execute message") from exc


@dataclass(slots=True, frozen=True)
class ProposalEnvelope:
    title: str
    description: str
    msgs: tuple[ContractCallEnvelope, ...]

    def to_dict(self) -> JsonDict:
        return {
            "title": self.title,
            "description": self.description,
            "msgs": [msg.to_cosmos_msg() for msg in self.msgs],
        }

    def to_propose_msg(self) -> JsonDict:
        return {"propose": self.to_dict()}


class ProposalAssembler:
    """Routes and wraps pending actions into a multisig proposal payload."""

    def __init__(self, routing: RoutingTable, registry: ActionRegistry = DEFAULT_REGISTRY) -> None:
        self._routing = routing
        self._registry = registry

    def route(self, action: Action) -> str:
        schema = self._registry.get(action.action_kind)
        if schema is None:
            raise RoutingError(
                f"unknown action kind {action.action_kind!r}",
                action_kind=action.action_kind,
            )
        try:
            return self._routing.resolve(schema.target_contract)
        except RoutingError as exc:
            raise RoutingError(
                f"cannot route {action.action_kind!r}: {exc.message}",
                action_kind=action.action_kind,
            ) from exc

    def assemble(self, title: str, description: str, actions: Iterable[Action]) -> ProposalEnvelope:
        # Snapshot first: the envelope reflects the order at call time only.
        snapshot = tuple(actions)
        msgs = tuple(
            ContractCallEnvelope(
                contract_address=self.route(action),
                payload_base64=encode_action(action),
            )
            for action in snapshot
        )
        return ProposalEnvelope(title=title, description=description, msgs=msgs)
