from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from issuer_governance.proposals.assembler import ContractCallEnvelope
from issuer_governance.types import JsonDict


class ProposalStatus(StrEnum):
    PENDING = "pending"
    OPEN = "open"
    REJECTED = "rejected"
    PASSED = "passed"
    EXECUTED = "executed"


class VoteOption(StrEnum):
    YES = "yes"
    NO = "no"
    VETO = "veto"
    ABSTAIN = "abstain"


TERMINAL_STATUSES: frozenset[ProposalStatus] = frozenset(
    {
        ProposalStatus.REJECTED,
        ProposalStatus.EXECUTED,
    }
)


def is_terminal_status(status: ProposalStatus) -> bool:
    return status in TERMINAL_STATUSES


def accepts_votes(status: ProposalStatus) -> bool:
    return status == ProposalStatus.OPEN


def is_executable(status: ProposalStatus) -> bool:
    return status == ProposalStatus.PASSED


@dataclass(slots=True, frozen=True)
class ProposalView:
    proposal_id: int
    title: str
    description: str
    status: ProposalStatus
    actions: tuple[JsonDict, ...]
    targets: tuple[str, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "actions": list(self.actions),
            "targets": list(self.targets),
            "accepts_votes": accepts_votes(self.status),
            "executable": is_executable(self.status),
        }


def parse_proposal(raw: Mapping[str, Any]) -> ProposalView:
    """Decode a multisig ``proposal`` response, including its wrapped actions."""
    try:
        proposal_id = int(raw["id"])
        status = ProposalStatus(str(raw["status"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"malformed proposal response: {exc}") from exc

    actions: list[JsonDict] = []
    targets: list[str] = []
    for msg in raw.get("msgs") or []:
        try:
            envelope = ContractCallEnvelope.from_cosmos_msg(msg)
        except ValueError:
            # Non-wasm messages (bank sends, ...) are shown as-is.
            actions.append(dict(msg))
            targets.append("")
            continue
        actions.append(envelope.decode())
        targets.append(envelope.contract_address)

    return ProposalView(
        proposal_id=proposal_id,
        title=str(raw.get("title", "")),
        description=str(raw.get("description", "")),
        status=status,
        actions=tuple(actions),
        targets=tuple(targets),
    )
