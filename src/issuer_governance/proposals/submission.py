from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from issuer_governance.actions.composer import Action
from issuer_governance.cache import QueryCache
from issuer_governance.chain.client import ChainClient, ExecuteResult, find_event_attribute
from issuer_governance.domain.proposal import VoteOption
from issuer_governance.errors import BroadcastError, EventParsingError, RoutingError
from issuer_governance.observability.logging import get_logger
from issuer_governance.proposals.assembler import ProposalAssembler, ProposalEnvelope

PROPOSAL_ID_ATTRIBUTE = "proposal_id"

PROPOSALS_FINGERPRINT = "proposals"
VOTES_FINGERPRINT = "votes"
VOTERS_FINGERPRINT = "voters"


class TxStatus(StrEnum):
    SUBMITTED = "submitted"
    ROUTING_FAILED = "routing_failed"
    BROADCAST_FAILED = "broadcast_failed"
    PROPOSAL_ID_MISSING = "proposal_id_missing"


@dataclass(slots=True, frozen=True)
class TxOutcome:
    status: TxStatus
    transaction_hash: str | None = None
    proposal_id: int | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == TxStatus.SUBMITTED

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "transaction_hash": self.transaction_hash,
            "proposal_id": self.proposal_id,
            "error": self.error,
            **self.details,
        }


def extract_proposal_id(result: ExecuteResult) -> int:
    raw = find_event_attribute(result.events, PROPOSAL_ID_ATTRIBUTE)
    if raw is None:
        raise EventParsingError(
            f"no {PROPOSAL_ID_ATTRIBUTE!r} attribute in transaction events",
            transaction_hash=result.transaction_hash,
        )
    try:
        return int(raw)
    except ValueError as exc:
        raise EventParsingError(
            f"{PROPOSAL_ID_ATTRIBUTE!r} attribute is not an integer: {raw!r}",
            transaction_hash=result.transaction_hash,
        ) from exc


class ProposalSubmitter:
    """Broadcasts proposals, votes and executions to the multisig.

    Failures come back as a ``TxOutcome`` instead of being raised, and the
    caller's pending actions are never touched so a failed submission can be
    retried as is. After any broadcast that reached the chain the affected
    cache fingerprints are revalidated.
    """

    def __init__(
        self,
        client: ChainClient,
        assembler: ProposalAssembler,
        *,
        sender_address: str,
        multisig_address: str,
        cache: QueryCache | None = None,
    ) -> None:
        self._client = client
        self._assembler = assembler
        self._sender_address = sender_address
        self._multisig_address = multisig_address
        self._cache = cache
        self._logger = get_logger("proposal_submitter")

    def _revalidate(self, *fingerprints: str) -> None:
        if self._cache is None:
            return
        for key in fingerprints:
            self._cache.revalidate(key)

    async def _broadcast(self, execute_msg: dict[str, Any]) -> ExecuteResult:
        return await self._client.execute(
            self._sender_address,
            self._multisig_address,
            execute_msg,
            (),
        )

    async def submit(self, title: str, description: str, actions: Iterable[Action]) -> TxOutcome:
        try:
            envelope = self._assembler.assemble(title, description, actions)
        except RoutingError as exc:
            self._logger.warning("proposal_routing_failed", action_kind=exc.action_kind, error=exc.message)
            return TxOutcome(status=TxStatus.ROUTING_FAILED, error=exc.message)

        return await self.broadcast(envelope)

    async def broadcast(self, envelope: ProposalEnvelope) -> TxOutcome:
        try:
            result = await self._broadcast(envelope.to_propose_msg())
        except BroadcastError as exc:
            self._logger.warning("proposal_broadcast_failed", title=envelope.title, error=exc.message)
            return TxOutcome(status=TxStatus.BROADCAST_FAILED, error=exc.message)

        self._revalidate(PROPOSALS_FINGERPRINT)

        try:
            proposal_id = extract_proposal_id(result)
        except EventParsingError as exc:
            self._logger.warning(
                "proposal_id_missing",
                transaction_hash=exc.transaction_hash,
                error=exc.message,
            )
            return TxOutcome(
                status=TxStatus.PROPOSAL_ID_MISSING,
                transaction_hash=result.transaction_hash,
                error=exc.message,
            )

        self._logger.info(
            "proposal_broadcast",
            proposal_id=proposal_id,
            transaction_hash=result.transaction_hash,
            msg_count=len(envelope.msgs),
        )
        return TxOutcome(
            status=TxStatus.SUBMITTED,
            transaction_hash=result.transaction_hash,
            proposal_id=proposal_id,
        )

    async def _proposal_tx(self, entry_point: str, proposal_id: int, **extra: Any) -> TxOutcome:
        execute_msg = {entry_point: {"proposal_id": proposal_id, **extra}}
        try:
            result = await self._broadcast(execute_msg)
        except BroadcastError as exc:
            self._logger.warning(
                f"{entry_point}_failed",
                proposal_id=proposal_id,
                error=exc.message,
            )
            return TxOutcome(
                status=TxStatus.BROADCAST_FAILED,
                proposal_id=proposal_id,
                error=exc.message,
            )

        self._revalidate(
            PROPOSALS_FINGERPRINT,
            f"proposal/{proposal_id}",
            f"{VOTES_FINGERPRINT}/{proposal_id}",
        )
        self._logger.info(
            f"{entry_point}_broadcast",
            proposal_id=proposal_id,
            transaction_hash=result.transaction_hash,
        )
        return TxOutcome(
            status=TxStatus.SUBMITTED,
            transaction_hash=result.transaction_hash,
            proposal_id=proposal_id,
            details=dict(extra),
        )

    async def vote(self, proposal_id: int, vote: VoteOption) -> TxOutcome:
        return await self._proposal_tx("vote", proposal_id, vote=VoteOption(vote).value)

    async def execute(self, proposal_id: int) -> TxOutcome:
        return await self._proposal_tx("execute", proposal_id)

    async def close(self, proposal_id: int) -> TxOutcome:
        return await self._proposal_tx("close", proposal_id)
